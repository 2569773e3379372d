"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization.
"""

import enum
from typing import Any

from pydantic import BaseModel, Field, model_validator

from case_insight.content.models import AnalysisRecord, ContentType, LegalScenario


# =============================================================================
# Analysis Schemas
# =============================================================================


class AnalysisListResponse(BaseModel):
    """Response for listing analysis records."""

    records: list[AnalysisRecord]
    total: int


class TextAnalysisRequest(BaseModel):
    """Request for analyzing pasted transcript text."""

    text: str = Field(..., description="Raw transcript text")
    filename: str = Field(
        default="Pasted transcript.txt",
        description="Name shown for the record in the dashboard",
    )


class GenerateRequest(BaseModel):
    """Request for generating marketing copy from a completed analysis."""

    content_type: ContentType
    issue_tags: list[str] = Field(default_factory=list)
    quotes: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def require_selection(self) -> "GenerateRequest":
        """At least one tag or quote must be selected."""
        if not self.issue_tags and not self.quotes:
            raise ValueError("Select at least one issue tag or quote")
        return self


class GenerateResponse(BaseModel):
    """Generated content for one analysis."""

    record_id: str
    content_type: ContentType
    content: str


class ContentFormat(str, enum.Enum):
    """Export formats for generated content."""

    MARKDOWN = "markdown"
    TEXT = "text"
    HTML = "html"


class ContentResponse(BaseModel):
    """Stored content exported in one format."""

    record_id: str
    content_type: ContentType
    format: ContentFormat
    content: str


# =============================================================================
# Scenario Schemas
# =============================================================================


class ScenarioListResponse(BaseModel):
    """Response for listing or searching the scenario library."""

    scenarios: list[LegalScenario]
    total: int


class ScenarioCreate(BaseModel):
    """A new scenario. A CASE- id is allocated when none is given."""

    id: str | None = None
    case_name: str | None = None
    pain_point: str = Field(..., min_length=1)
    triggers: list[str] = Field(default_factory=list)
    ai_logic: str = ""
    case_summary: str | None = None
    follow_up: str = ""
    marketing_action: str = ""


class ScenarioUpdate(BaseModel):
    """Editable fields of a scenario. Omitted fields are left unchanged."""

    case_name: str | None = None
    pain_point: str | None = None
    triggers: list[str] | None = None
    ai_logic: str | None = None
    case_summary: str | None = None
    follow_up: str | None = None
    marketing_action: str | None = None
    generated_article: str | None = None
    generated_video_script: str | None = None


# =============================================================================
# Knowledge Schemas
# =============================================================================


class KnowledgeResponse(BaseModel):
    """The firm knowledge base as Markdown source and rendered HTML."""

    markdown: str
    html: str


class PresetPainPoint(BaseModel):
    """One entry of the preset pain-point library."""

    tag: str
    desc: str


class PresetCategory(BaseModel):
    """A category of preset pain points."""

    category: str
    items: list[PresetPainPoint]


# =============================================================================
# Error Schemas
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str = Field(description="Error message")
    error_code: str | None = Field(default=None, description="Application-specific error code")
    extra: dict[str, Any] | None = Field(default=None, description="Additional error context")

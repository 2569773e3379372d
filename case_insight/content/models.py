"""Domain models for transcript analysis and the scenario library.

Extraction payloads come back from the LLM as loosely-shaped JSON, so every
field carries a default and unknown keys are preserved.
"""

import enum
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AnalysisStatus(str, enum.Enum):
    """Lifecycle of an uploaded transcript."""

    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class ContentType(str, enum.Enum):
    """Kinds of marketing copy that can be generated."""

    ARTICLE = "ARTICLE"
    VIDEO = "VIDEO"
    ZHIHU = "ZHIHU"


class _LenientModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    @field_validator("*", mode="before")
    @classmethod
    def none_to_default(cls, v, info):
        # The API sometimes sends null for fields it could not fill in.
        if v is None:
            field = cls.model_fields[info.field_name]
            if field.default_factory is not None:
                return field.default_factory()
            return field.default
        return v


class PainPoint(_LenientModel):
    """A detected issue with the client sentence that evidences it."""

    tag_id: str = ""
    tag_name: str = ""
    original_text: str = ""
    confidence: str = Field(default="Medium", description="High, Medium or Low")


class KeyElements(_LenientModel):
    """Case facts pulled from the transcript."""

    timeline: str = ""
    dispute_amount: str = ""
    contract_status: str = ""
    payment_status: str = ""


class EvidenceAnalysis(_LenientModel):
    """Available evidence and how strong it is."""

    keywords: list[str] = Field(default_factory=list)
    strength: str = ""
    description: str = ""


class UserPersona(_LenientModel):
    """Who the prospective client is and what they need."""

    tags: list[str] = Field(default_factory=list)
    explicit_pain: list[str] = Field(default_factory=list)
    implicit_needs: list[str] = Field(default_factory=list)


class ExtractionResult(_LenientModel):
    """Structured output of the pain-point extraction call."""

    status: str = ""
    legal_concepts: list[str] = Field(default_factory=list)
    case_type: str = ""
    key_elements: KeyElements = Field(default_factory=KeyElements)
    evidence_analysis: EvidenceAnalysis | None = None
    user_persona: UserPersona = Field(default_factory=UserPersona)
    detected_issues: list[PainPoint] = Field(default_factory=list)
    problem_summary: str = ""
    urgency_level: str = ""
    marketing_direction: str | None = None
    primary_scenario_id: str | None = None
    recommended_follow_up: str | None = None

    @property
    def issue_tags(self) -> list[str]:
        """Tag names of all detected issues."""
        return [issue.tag_name for issue in self.detected_issues if issue.tag_name]

    @property
    def quotes(self) -> list[str]:
        """Original client sentences of all detected issues."""
        return [issue.original_text for issue in self.detected_issues if issue.original_text]


class AnalysisRecord(BaseModel):
    """An uploaded transcript and everything derived from it."""

    id: str
    filename: str
    upload_date: datetime = Field(default_factory=datetime.now)
    status: AnalysisStatus = AnalysisStatus.PROCESSING
    raw_text: str
    result: ExtractionResult | None = None
    error_message: str | None = None
    generated_content: dict[ContentType, str] = Field(default_factory=dict)


class LegalScenario(BaseModel):
    """A reusable case model in the scenario library."""

    id: str
    case_name: str | None = None
    pain_point: str
    triggers: list[str] = Field(default_factory=list)
    ai_logic: str = ""
    case_summary: str | None = None
    follow_up: str = ""
    marketing_action: str = ""
    generated_article: str | None = None
    generated_video_script: str | None = None
    is_custom: bool = False
    created_at: date | None = None

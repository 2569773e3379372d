"""Domain models, prompts and content helpers."""

from case_insight.content.markdown import render_markdown, strip_markdown
from case_insight.content.models import (
    AnalysisRecord,
    AnalysisStatus,
    ContentType,
    EvidenceAnalysis,
    ExtractionResult,
    KeyElements,
    LegalScenario,
    PainPoint,
    UserPersona,
)
from case_insight.content.scenarios import (
    evidence_strength_level,
    filter_scenarios,
    format_scenario_id,
    parse_triggers,
    scenario_from_extraction,
)

__all__ = [
    # Models
    "AnalysisRecord",
    "AnalysisStatus",
    "ContentType",
    "EvidenceAnalysis",
    "ExtractionResult",
    "KeyElements",
    "LegalScenario",
    "PainPoint",
    "UserPersona",
    # Helpers
    "render_markdown",
    "strip_markdown",
    "evidence_strength_level",
    "filter_scenarios",
    "format_scenario_id",
    "parse_triggers",
    "scenario_from_extraction",
]

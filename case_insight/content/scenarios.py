"""Scenario library helpers.

Turns completed extractions into reusable scenarios and provides the small
formatting and filtering helpers used by the library view.
"""

import logging
import re
import uuid
from datetime import date

from case_insight.content.models import ExtractionResult, LegalScenario
from case_insight.content.prompts import ID_PREFIX_MAP

logger = logging.getLogger(__name__)

UNTITLED_CASE_NAME = "Untitled construction case"
UNKNOWN_PAIN_POINT = "Unknown construction dispute"
NO_SUGGESTION = "No suggestion yet"

_EXTENSION_RE = re.compile(r"\.[^/.]+$")
_LABEL_SPLIT_RE = re.compile(r"[\s(（]")

_STRENGTH_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("strong", ("strong", "强", "较强")),
    ("medium", ("medium", "中")),
]


def new_case_id() -> str:
    """Generate an id for an automatically deposited scenario."""
    return f"CASE-{uuid.uuid4().int % 10000:04d}"


def format_scenario_id(scenario_id: str) -> str:
    """Return a display label for a scenario id.

    ``CON-01`` becomes ``Contract-01`` when the prefix is known; ids with an
    unknown prefix or without a dash are returned unchanged.
    """
    parts = scenario_id.split("-", 1)
    if len(parts) == 2 and parts[0] in ID_PREFIX_MAP:
        return f"{ID_PREFIX_MAP[parts[0]]}-{parts[1]}"
    return scenario_id


def filter_scenarios(scenarios: list[LegalScenario], term: str | None) -> list[LegalScenario]:
    """Case-insensitive search over pain point, id and case name."""
    if not term:
        return list(scenarios)

    needle = term.lower()
    return [
        s
        for s in scenarios
        if needle in s.pain_point.lower()
        or needle in s.id.lower()
        or (s.case_name and needle in s.case_name.lower())
    ]


def parse_triggers(text: str) -> list[str]:
    """Split a multi-line form field into one trigger per non-blank line."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def evidence_strength_level(strength: str | None) -> str:
    """Classify an evidence strength label as strong, medium or weak.

    Only the leading token counts, so ``中 (补强证据)`` is medium even though
    its note contains 强. English and Chinese labels are both recognised.
    """
    label = (strength or "").strip().lower()
    token = _LABEL_SPLIT_RE.split(label, maxsplit=1)[0]
    for level, keywords in _STRENGTH_KEYWORDS:
        if token.startswith(keywords):
            return level
    return "weak"


def scenario_from_extraction(
    filename: str,
    result: ExtractionResult,
    scenario_id: str | None = None,
) -> LegalScenario:
    """Build a library scenario from a completed extraction.

    Args:
        filename: Name of the uploaded transcript; its extension is dropped.
        result: The extraction result.
        scenario_id: Optional explicit id, otherwise a ``CASE-`` id is generated.

    Returns:
        A custom LegalScenario ready to be added to the library.
    """
    if result.evidence_analysis is not None:
        ai_logic = f"[{result.case_type}] Evidence analysis: {result.evidence_analysis.description}"
    else:
        ai_logic = result.problem_summary

    first_issue = result.detected_issues[0].tag_name if result.detected_issues else ""

    scenario = LegalScenario(
        id=scenario_id or new_case_id(),
        case_name=_EXTENSION_RE.sub("", filename) or UNTITLED_CASE_NAME,
        pain_point=first_issue or UNKNOWN_PAIN_POINT,
        triggers=[issue.original_text for issue in result.detected_issues],
        ai_logic=ai_logic,
        case_summary=result.problem_summary,
        follow_up=result.recommended_follow_up or NO_SUGGESTION,
        marketing_action=result.marketing_direction or NO_SUGGESTION,
        generated_article="",
        generated_video_script="",
        is_custom=True,
        created_at=date.today(),
    )

    logger.debug(f"Built scenario {scenario.id} from {filename}")
    return scenario

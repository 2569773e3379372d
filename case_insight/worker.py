"""Background extraction task.

Uploads return immediately with a ``processing`` record; the extraction
call runs afterwards as a FastAPI background task and moves the record to
``completed`` or ``failed``.
"""

import structlog

from case_insight.content.models import AnalysisStatus
from case_insight.content.scenarios import new_case_id, scenario_from_extraction
from case_insight.interfaces.extractor import BasePainPointExtractor
from case_insight.store import AnalysisStore, RecordNotFoundError, ScenarioStore

logger = structlog.get_logger(__name__)

_MAX_ID_ATTEMPTS = 20


def _unused_case_id(scenarios: ScenarioStore) -> str:
    taken = scenarios.ids()
    for _ in range(_MAX_ID_ATTEMPTS):
        candidate = new_case_id()
        if candidate not in taken:
            return candidate
    raise RuntimeError("Could not allocate a free CASE id")


async def run_extraction(
    record_id: str,
    extractor: BasePainPointExtractor,
    analyses: AnalysisStore,
    scenarios: ScenarioStore,
) -> None:
    """Analyze one transcript and deposit the result in the scenario library.

    Args:
        record_id: The analysis record to process.
        extractor: Strategy used to call the LLM.
        analyses: Store holding the record.
        scenarios: Library receiving the auto-generated scenario.
    """
    try:
        record = analyses.get(record_id)
    except RecordNotFoundError:
        logger.error("extraction_record_missing", record_id=record_id)
        return

    log = logger.bind(record_id=record_id, filename=record.filename)
    log.info("extraction_started", chars=len(record.raw_text))

    try:
        result = await extractor.extract(record.raw_text)
    except Exception as e:
        log.error("extraction_failed", error=str(e), exc_info=True)
        analyses.update(record_id, status=AnalysisStatus.FAILED, error_message=str(e))
        return

    analyses.update(record_id, status=AnalysisStatus.COMPLETED, result=result, error_message=None)
    log.info(
        "extraction_completed",
        issues=len(result.detected_issues),
        case_type=result.case_type,
    )

    try:
        scenario = scenario_from_extraction(
            record.filename, result, scenario_id=_unused_case_id(scenarios)
        )
        scenarios.add(scenario)
        log.info("scenario_deposited", scenario_id=scenario.id)
    except Exception as e:
        # The analysis itself succeeded; only the library deposit is lost.
        log.error("scenario_deposit_failed", error=str(e), exc_info=True)

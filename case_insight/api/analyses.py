"""Analysis API routes.

Handles transcript upload, background extraction, content generation and
export of generated copy.
"""

import logging
import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, UploadFile, status

from case_insight.api.deps import (
    DEFAULT_UPLOAD_NAME,
    get_analysis_store,
    get_extractor,
    get_generator,
    get_scenario_store,
    get_upload_parser,
)
from case_insight.api.schemas import (
    AnalysisListResponse,
    ContentFormat,
    ContentResponse,
    GenerateRequest,
    GenerateResponse,
    TextAnalysisRequest,
)
from case_insight.content.markdown import render_markdown, strip_markdown
from case_insight.content.models import AnalysisRecord, AnalysisStatus, ContentType
from case_insight.core.config import Settings, get_settings
from case_insight.interfaces.extractor import BasePainPointExtractor
from case_insight.interfaces.generator import BaseContentGenerator, GenerationError
from case_insight.interfaces.parser import BaseParser, ParsingError
from case_insight.store import AnalysisStore, RecordNotFoundError, ScenarioStore
from case_insight.worker import run_extraction

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analyses", tags=["analyses"])


# =============================================================================
# Helper Functions
# =============================================================================


def _count_visible_chars(text: str) -> int:
    return len("".join(text.split()))


def _get_record_or_404(analyses: AnalysisStore, record_id: str) -> AnalysisRecord:
    try:
        return analyses.get(record_id)
    except RecordNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Analysis {record_id} not found",
        ) from e


def _start_analysis(
    filename: str,
    text: str,
    settings: Settings,
    background_tasks: BackgroundTasks,
    extractor: BasePainPointExtractor,
    analyses: AnalysisStore,
    scenarios: ScenarioStore,
) -> AnalysisRecord:
    """Create a processing record and schedule its extraction."""
    if _count_visible_chars(text) < settings.min_transcript_chars:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="The transcript is empty or too short to analyze",
        )

    record = analyses.add(
        AnalysisRecord(id=uuid.uuid4().hex, filename=filename, raw_text=text)
    )
    background_tasks.add_task(run_extraction, record.id, extractor, analyses, scenarios)
    logger.info(f"Queued extraction for {record.id} ({len(text)} chars)")
    return record


# =============================================================================
# Endpoints
# =============================================================================


@router.post(
    "/upload",
    response_model=AnalysisRecord,
    status_code=status.HTTP_202_ACCEPTED,
)
async def upload_transcript(
    file: UploadFile,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    parser: BaseParser = Depends(get_upload_parser),
    extractor: BasePainPointExtractor = Depends(get_extractor),
    analyses: AnalysisStore = Depends(get_analysis_store),
    scenarios: ScenarioStore = Depends(get_scenario_store),
) -> AnalysisRecord:
    """Upload a consultation transcript for analysis.

    The record is returned immediately in ``processing`` state; extraction
    runs in the background. The file type is checked before the extractor is
    resolved, so an audio or PDF file gets 415 even without an API key.

    Raises:
        HTTPException: 415 for audio or unsupported files, 413 for oversize
            files, 422 for empty transcripts or unreadable documents.
    """
    try:
        filename = file.filename or DEFAULT_UPLOAD_NAME
        logger.info(f"Received transcript upload: {filename}")

        data = await file.read()
        if len(data) > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File exceeds {settings.max_upload_bytes} bytes",
            )

        try:
            documents = await parser.aload_data(data, filename)
        except ParsingError as e:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=str(e),
            ) from e

        text = "\n\n".join(doc.content for doc in documents)
        return _start_analysis(
            filename, text, settings, background_tasks, extractor, analyses, scenarios
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Transcript upload failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Transcript upload failed: {str(e)}",
        ) from e


@router.post(
    "/text",
    response_model=AnalysisRecord,
    status_code=status.HTTP_202_ACCEPTED,
)
async def analyze_text(
    request: TextAnalysisRequest,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    extractor: BasePainPointExtractor = Depends(get_extractor),
    analyses: AnalysisStore = Depends(get_analysis_store),
    scenarios: ScenarioStore = Depends(get_scenario_store),
) -> AnalysisRecord:
    """Analyze pasted transcript text."""
    try:
        logger.info(f"Received pasted transcript: {request.filename}")
        return _start_analysis(
            request.filename, request.text, settings, background_tasks, extractor, analyses, scenarios
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Text analysis failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Text analysis failed: {str(e)}",
        ) from e


@router.get("", response_model=AnalysisListResponse)
async def list_analyses(
    analyses: AnalysisStore = Depends(get_analysis_store),
) -> AnalysisListResponse:
    """List all analysis records, newest first."""
    records = analyses.all()
    return AnalysisListResponse(records=records, total=len(records))


@router.get("/{record_id}", response_model=AnalysisRecord)
async def get_analysis(
    record_id: str,
    analyses: AnalysisStore = Depends(get_analysis_store),
) -> AnalysisRecord:
    """Get one analysis record."""
    return _get_record_or_404(analyses, record_id)


@router.post("/{record_id}/generate", response_model=GenerateResponse)
async def generate_content(
    record_id: str,
    request: GenerateRequest,
    generator: BaseContentGenerator = Depends(get_generator),
    analyses: AnalysisStore = Depends(get_analysis_store),
) -> GenerateResponse:
    """Generate marketing copy from the selected tags and quotes.

    The content is stored on the record under its content type, replacing
    any previous copy of the same type.

    Raises:
        HTTPException: 404 if the record is unknown, 422 if it is not
            completed, 502 if the LLM call fails.
    """
    try:
        record = _get_record_or_404(analyses, record_id)
        if record.status != AnalysisStatus.COMPLETED or record.result is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Analysis {record_id} is not completed",
            )

        logger.info(
            f"Generating {request.content_type.value} for {record_id}: "
            f"{len(request.issue_tags)} tag(s), {len(request.quotes)} quote(s)"
        )

        try:
            content = await generator.generate(
                content_type=request.content_type,
                issue_tags=request.issue_tags,
                quotes=request.quotes,
                legal_concepts=record.result.legal_concepts,
                marketing_direction=record.result.marketing_direction,
            )
        except GenerationError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=str(e),
            ) from e

        analyses.set_content(record_id, request.content_type, content)

        return GenerateResponse(
            record_id=record_id,
            content_type=request.content_type,
            content=content,
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Content generation failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Content generation failed: {str(e)}",
        ) from e


@router.get("/{record_id}/content/{content_type}", response_model=ContentResponse)
async def export_content(
    record_id: str,
    content_type: ContentType,
    format: ContentFormat = Query(default=ContentFormat.MARKDOWN, description="Export format"),
    analyses: AnalysisStore = Depends(get_analysis_store),
) -> ContentResponse:
    """Export stored content as Markdown source, plain text or HTML."""
    record = _get_record_or_404(analyses, record_id)
    source = record.generated_content.get(content_type)
    if source is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No {content_type.value} content generated for {record_id}",
        )

    match format:
        case ContentFormat.TEXT:
            content = strip_markdown(source)
        case ContentFormat.HTML:
            content = render_markdown(source)
        case _:
            content = source

    return ContentResponse(
        record_id=record_id,
        content_type=content_type,
        format=format,
        content=content,
    )

"""FastAPI dependencies for dependency injection.

Provides reusable dependencies for routes including:
- The in-memory analysis and scenario stores
- The parser matching an uploaded file
- Strategy instances from the component factory
"""

import logging

from fastapi import Depends, HTTPException, UploadFile, status

from case_insight.core.factory import ComponentFactory, get_factory
from case_insight.interfaces.extractor import BasePainPointExtractor
from case_insight.interfaces.generator import BaseContentGenerator
from case_insight.interfaces.parser import BaseParser, UnsupportedFileError
from case_insight.store import AnalysisStore, ScenarioStore

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_NAME = "transcript.txt"

_analysis_store: AnalysisStore | None = None
_scenario_store: ScenarioStore | None = None


def get_analysis_store() -> AnalysisStore:
    """Dependency returning the process-wide analysis store."""
    global _analysis_store
    if _analysis_store is None:
        _analysis_store = AnalysisStore()
    return _analysis_store


def get_scenario_store() -> ScenarioStore:
    """Dependency returning the process-wide scenario library."""
    global _scenario_store
    if _scenario_store is None:
        _scenario_store = ScenarioStore()
    return _scenario_store


def get_upload_parser(
    file: UploadFile,
    factory: ComponentFactory = Depends(get_factory),
) -> BaseParser:
    """Dependency selecting the parser for an uploaded transcript.

    Raises:
        HTTPException: 415 for audio or unsupported file types.
    """
    filename = file.filename or DEFAULT_UPLOAD_NAME
    try:
        return factory.get_parser_for(filename)
    except UnsupportedFileError as e:
        logger.warning(f"Rejected upload {filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=str(e),
        ) from e


def get_extractor(
    factory: ComponentFactory = Depends(get_factory),
) -> BasePainPointExtractor:
    """Dependency for the configured pain-point extractor.

    Raises:
        HTTPException: 503 if the extractor cannot be created, e.g. the
            API key is missing.
    """
    try:
        return factory.get_extractor()
    except ValueError as e:
        logger.error(f"Extractor unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        ) from e


def get_generator(
    factory: ComponentFactory = Depends(get_factory),
) -> BaseContentGenerator:
    """Dependency for the configured content generator.

    Raises:
        HTTPException: 503 if the generator cannot be created.
    """
    try:
        return factory.get_generator()
    except ValueError as e:
        logger.error(f"Generator unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        ) from e

"""Abstract base classes for transcript processing strategies."""

from case_insight.interfaces.extractor import BasePainPointExtractor, ExtractionError
from case_insight.interfaces.generator import BaseContentGenerator, GenerationError
from case_insight.interfaces.parser import (
    AudioNotSupportedError,
    BaseParser,
    Document,
    ParsingError,
    UnsupportedFileError,
)

__all__ = [
    "BaseParser",
    "BasePainPointExtractor",
    "BaseContentGenerator",
    "Document",
    "ParsingError",
    "UnsupportedFileError",
    "AudioNotSupportedError",
    "ExtractionError",
    "GenerationError",
]

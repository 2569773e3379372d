"""Concrete parser implementations."""

from case_insight.strategies.parsers.docx import DocxParser
from case_insight.strategies.parsers.simple import SimpleTextParser

__all__ = [
    "DocxParser",
    "SimpleTextParser",
]

"""Concrete pain-point extractor implementations."""

from case_insight.strategies.extractors.llm import LLMPainPointExtractor

__all__ = [
    "LLMPainPointExtractor",
]

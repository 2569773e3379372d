"""Concrete strategy implementations."""

from case_insight.strategies.extractors import LLMPainPointExtractor
from case_insight.strategies.generators import LLMContentGenerator
from case_insight.strategies.openai_chat import OpenAIChatClient
from case_insight.strategies.parsers import DocxParser, SimpleTextParser

__all__ = [
    "DocxParser",
    "SimpleTextParser",
    "LLMPainPointExtractor",
    "LLMContentGenerator",
    "OpenAIChatClient",
]

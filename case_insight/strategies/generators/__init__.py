"""Concrete content generator implementations."""

from case_insight.strategies.generators.llm import LLMContentGenerator

__all__ = [
    "LLMContentGenerator",
]

"""Content generation interfaces."""

from abc import ABC, abstractmethod

from case_insight.content.models import ContentType


class BaseContentGenerator(ABC):
    """Abstract base class for marketing copy generation strategies."""

    @abstractmethod
    async def generate(
        self,
        content_type: ContentType,
        issue_tags: list[str],
        quotes: list[str],
        legal_concepts: list[str],
        marketing_direction: str | None = None,
    ) -> str:
        """Generate Markdown copy of the requested type.

        Args:
            content_type: ARTICLE, VIDEO or ZHIHU.
            issue_tags: Selected pain-point labels.
            quotes: Selected verbatim client sentences.
            legal_concepts: Legal terms from the extraction.
            marketing_direction: Suggested search direction, if any.

        Returns:
            The generated Markdown text.

        Raises:
            GenerationError: If generation fails.
        """


class GenerationError(Exception):
    """Exception raised when content generation fails."""

    pass

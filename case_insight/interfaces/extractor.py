"""Pain-point extraction interfaces.

Defines the abstract base class for turning a consultation transcript
into a structured ExtractionResult.
"""

from abc import ABC, abstractmethod

from case_insight.content.models import ExtractionResult


class BasePainPointExtractor(ABC):
    """Abstract base class for pain-point extraction strategies.

    Reads a transcript and returns the legal concepts, evidence analysis,
    client persona and detected issues it contains.
    """

    @abstractmethod
    async def extract(self, transcript: str) -> ExtractionResult:
        """Extract the legal situation from a transcript.

        Args:
            transcript: The full transcript text.

        Returns:
            ExtractionResult with every field the service returned.

        Raises:
            ExtractionError: If extraction fails for any reason.
        """
        pass


class ExtractionError(Exception):
    """Exception raised when pain-point extraction fails."""

    pass

"""Abstract base class for transcript parsers.

The Strategy Pattern allows different parsing implementations
to be interchangeable at runtime.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

AUDIO_EXTENSIONS = {".mp3", ".wav", ".m4a"}


@dataclass(frozen=True)
class Document:
    """Represents a parsed transcript with metadata.

    Attributes:
        content: The extracted text content from the file.
        metadata: Additional parser-specific information (paragraph count, encoding, etc.).
        source: The original filename.
    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source: str = ""


class BaseParser(ABC):
    """Abstract base class for transcript parsing strategies.

    Parsers work on the uploaded bytes directly; nothing is written to disk.

    Example:
        ```python
        class DocxParser(BaseParser):
            async def aload_data(self, data: bytes, filename: str) -> list[Document]:
                # Implementation here
                pass
        ```
    """

    @abstractmethod
    async def aload_data(self, data: bytes, filename: str) -> list[Document]:
        """Asynchronously parse an uploaded file.

        Args:
            data: Raw file content.
            filename: Original filename, used for metadata and error messages.

        Returns:
            A list of Document objects containing the parsed content and metadata.

        Raises:
            ParsingError: If the file cannot be parsed.
        """
        ...

    @property
    @abstractmethod
    def supported_extensions(self) -> set[str]:
        """Return the set of file extensions supported by this parser.

        Returns:
            A set of file extensions (e.g., {'.txt', '.docx'}).
        """
        ...

    def supports_file(self, filename: str) -> bool:
        """Check if this parser supports the given file.

        Args:
            filename: The name of the file to check.

        Returns:
            True if the file extension is supported, False otherwise.
        """
        _, ext = os.path.splitext(filename)
        return ext.lower() in self.supported_extensions


class ParsingError(Exception):
    """Exception raised when a file cannot be read."""

    pass


class UnsupportedFileError(ParsingError):
    """Exception raised when no parser handles the file type."""

    pass


class AudioNotSupportedError(UnsupportedFileError):
    """Exception raised for audio recordings, which are not transcribed yet."""

    pass

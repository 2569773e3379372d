"""Simple text-based transcript parser.

Reads plain text and Markdown transcripts without any external service.
"""

import logging

from case_insight.interfaces.parser import BaseParser, Document, ParsingError

logger = logging.getLogger(__name__)


class SimpleTextParser(BaseParser):
    """Simple parser for plain text and markdown transcripts.

    Decodes with each configured encoding in turn; transcripts exported by
    older Chinese dictation tools are often GB18030 rather than UTF-8.
    """

    def __init__(
        self,
        encodings: tuple[str, ...] = ("utf-8-sig", "gb18030"),
    ) -> None:
        """Initialize the simple text parser.

        Args:
            encodings: Character encodings to try, in order.
        """
        self._encodings = encodings

    async def aload_data(self, data: bytes, filename: str) -> list[Document]:
        """Decode a plain text transcript.

        Args:
            data: Raw file content.
            filename: Original filename.

        Returns:
            A list containing a single Document with the file's content.

        Raises:
            ParsingError: If none of the encodings can decode the file.
        """
        logger.info(f"Reading text file: {filename} ({len(data)} bytes)")

        for encoding in self._encodings:
            try:
                content = data.decode(encoding)
            except UnicodeDecodeError:
                logger.debug(f"{filename} is not valid {encoding}")
                continue

            logger.info(f"Successfully read {len(content)} characters from {filename}")
            return [
                Document(
                    content=content,
                    metadata={
                        "parser": "simple_text",
                        "source_file": filename,
                        "file_size": len(data),
                        "encoding": encoding,
                    },
                    source=filename,
                )
            ]

        logger.error(f"Encoding error reading {filename}: tried {', '.join(self._encodings)}")
        raise ParsingError(f"Could not decode {filename} as text")

    @property
    def supported_extensions(self) -> set[str]:
        """Return supported file extensions."""
        return {".txt", ".md"}

"""Word transcript parser.

Extracts raw text from .docx files using python-docx. Paragraphs and table
rows are read in document order.
"""

import io
import logging
from collections.abc import Iterator

from docx import Document as DocxDocument
from docx.table import Table

from case_insight.interfaces.parser import BaseParser, Document, ParsingError

logger = logging.getLogger(__name__)


def _iter_blocks(doc) -> Iterator[str]:
    """Yield non-blank paragraph text and table rows in document order."""
    for block in doc.iter_inner_content():
        if isinstance(block, Table):
            for row in block.rows:
                # Merged cells repeat in row.cells
                cells = dict.fromkeys(c.text.strip() for c in row.cells if c.text.strip())
                if cells:
                    yield "\t".join(cells)
        elif block.text.strip():
            yield block.text


class DocxParser(BaseParser):
    """Parser for Word (.docx) transcripts.

    Paragraph text and table cell text are kept; formatting and images are
    dropped. Each table row becomes its own block with cells separated by tabs.
    """

    async def aload_data(self, data: bytes, filename: str) -> list[Document]:
        """Extract the text of a Word document.

        Args:
            data: Raw .docx content.
            filename: Original filename.

        Returns:
            A list containing a single Document with blocks separated by blank lines.

        Raises:
            ParsingError: If the file is not a readable Word document.
        """
        logger.info(f"Reading Word file: {filename} ({len(data)} bytes)")

        try:
            doc = DocxDocument(io.BytesIO(data))
        except Exception as e:
            logger.error(f"Failed to open {filename} as .docx: {e}")
            raise ParsingError(f"Word parsing failed: {e}") from e

        blocks = list(_iter_blocks(doc))
        content = "\n\n".join(blocks)

        logger.info(f"Extracted {len(blocks)} text blocks from {filename}")
        return [
            Document(
                content=content,
                metadata={
                    "parser": "docx",
                    "source_file": filename,
                    "file_size": len(data),
                    "block_count": len(blocks),
                    "table_count": len(doc.tables),
                },
                source=filename,
            )
        ]

    @property
    def supported_extensions(self) -> set[str]:
        """Return supported file extensions."""
        return {".docx"}

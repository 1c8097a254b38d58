# apex/services/parser.py
import io
from pathlib import Path

from docx import Document as DocxDocument

from ..domain.exceptions import ParsingError
from ..utils.logging import service_logger

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}
TEXT_EXTENSIONS = {".txt", ".md", ".markdown", ".csv", ".json"}
DOCX_EXTENSION = ".docx"

IMAGE_PLACEHOLDER = "Image file - no text extraction"


class ParserService:
    """Extracts text from uploaded files"""

    async def parse(self, data: bytes, filename: str) -> str:
        """
        Return the text content of a file.

        Images yield a placeholder, unsupported types an empty string.
        Raises ParsingError when a supported file cannot be read.
        """
        suffix = Path(filename).suffix.lower()

        if suffix in IMAGE_EXTENSIONS:
            return IMAGE_PLACEHOLDER

        if suffix in TEXT_EXTENSIONS:
            return data.decode("utf-8", errors="replace")

        if suffix == DOCX_EXTENSION:
            return self._parse_docx(data, filename)

        service_logger.debug("No parser for file type", extra={
            "file_name": filename,
            "suffix": suffix
        })
        return ""

    def _parse_docx(self, data: bytes, filename: str) -> str:
        try:
            docx = DocxDocument(io.BytesIO(data))
        except Exception as e:
            service_logger.error("DOCX parsing failed", extra={
                "file_name": filename,
                "error": str(e)
            })
            raise ParsingError(filename, str(e)) from e

        paragraphs = [paragraph.text for paragraph in docx.paragraphs if paragraph.text]
        return "\n\n".join(paragraphs)


parser_service = ParserService()

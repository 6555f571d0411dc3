"""
Document Loader

Extracts text from uploaded files and splits it into chunks.
"""

from typing import Callable, Dict, List
import io
import logging

from docx import Document as DocxDocument
from langchain_text_splitters import RecursiveCharacterTextSplitter
from pypdf import PdfReader

from config.settings import Settings

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    """Base class for upload failures"""


class UnsupportedFormatError(DocumentError):
    """The uploaded MIME type is not supported"""


class EmptyDocumentError(DocumentError):
    """No readable text could be extracted"""


class DocumentParseError(DocumentError):
    """The parser failed on the uploaded file"""


PDF_TYPE = "application/pdf"
TEXT_TYPE = "text/plain"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class DocumentLoader:
    """
    Turns uploaded file bytes into chunked text.

    Usage:
        loader = DocumentLoader(settings)
        text = loader.load(file_bytes, "application/pdf")
    """

    def __init__(self, settings: Settings):
        self.text_splitter = RecursiveCharacterTextSplitter(
            chunk_size=settings.chunk_size,
            chunk_overlap=settings.chunk_overlap,
            length_function=len
        )
        self._extractors: Dict[str, Callable[[bytes], str]] = {
            PDF_TYPE: self._extract_text_from_pdf,
            TEXT_TYPE: self._extract_text_from_txt,
            DOCX_TYPE: self._extract_text_from_docx,
        }

    @property
    def supported_types(self) -> List[str]:
        return list(self._extractors)

    def load(self, content: bytes, content_type: str) -> str:
        """
        Extract and chunk a document.

        Args:
            content: Raw file bytes
            content_type: MIME type reported by the client

        Returns:
            Chunks joined by blank lines

        Raises:
            UnsupportedFormatError: unknown MIME type
            DocumentParseError: the parser failed
            EmptyDocumentError: nothing readable in the file
        """
        # Drop parameters such as "; charset=utf-8"
        mime_type = (content_type or "").split(";")[0].strip().lower()

        extractor = self._extractors.get(mime_type)
        if extractor is None:
            raise UnsupportedFormatError(
                f"Unsupported file type: {content_type or 'unknown'}. "
                f"Supported types: {', '.join(self.supported_types)}."
            )

        try:
            text = extractor(content)
        except Exception as e:
            logger.error(f"Failed to parse {mime_type} upload: {e}")
            raise DocumentParseError(f"Could not read {mime_type} file: {e}") from e

        if not text.strip():
            raise EmptyDocumentError("Document contained no readable text.")

        chunks = self.split(text)
        logger.info(f"Split {mime_type} upload into {len(chunks)} chunks")

        return "\n\n".join(chunks)

    def split(self, text: str) -> List[str]:
        return self.text_splitter.split_text(text)

    def _extract_text_from_pdf(self, content: bytes) -> str:
        reader = PdfReader(io.BytesIO(content))
        pages = [page.extract_text() or "" for page in reader.pages]
        return "\n\n".join(p for p in pages if p.strip())

    def _extract_text_from_txt(self, content: bytes) -> str:
        return content.decode("utf-8", errors="replace")

    def _extract_text_from_docx(self, content: bytes) -> str:
        document = DocxDocument(io.BytesIO(content))
        return "\n".join(p.text for p in document.paragraphs)

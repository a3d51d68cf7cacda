"""
Document-to-text decoding using pdfplumber.
"""
import io
import re
from pathlib import Path
from typing import List, Optional, Union
import logging

import pdfplumber

from .exceptions import DocumentUnreadableError

logger = logging.getLogger(__name__)

DocumentSource = Union[Path, str, bytes]

LIGATURES = {
    'ﬁ': 'fi',
    'ﬂ': 'fl',
    'ﬀ': 'ff',
    'ﬃ': 'ffi',
    'ﬄ': 'ffl',
    'ﬆ': 'st',
    'ﬅ': 'st'
}


class PDFLoader:
    """Decodes a PDF (path or raw bytes) into plain text, page by page."""

    def __init__(self, source: DocumentSource, password: str = ""):
        self.source = source
        self.password = password
        self._pdf = None
        self._pages: List[str] = []

    @property
    def name(self) -> str:
        if isinstance(self.source, bytes):
            return f"<{len(self.source)} bytes>"
        return str(self.source)

    def load(self) -> List[str]:
        """
        Open the document and extract the text of every page.

        Returns:
            List of page texts, in page order

        Raises:
            DocumentUnreadableError: if the document is corrupted, encrypted
                or not a PDF
        """
        if self._pages:
            return self._pages

        if isinstance(self.source, (str, Path)) and not Path(self.source).exists():
            raise DocumentUnreadableError("file not found", self.name)

        try:
            stream = io.BytesIO(self.source) if isinstance(self.source, bytes) else self.source
            self._pdf = pdfplumber.open(stream, password=self.password)
            logger.info(f"Loaded PDF with {len(self._pdf.pages)} pages")

            for i, page in enumerate(self._pdf.pages, 1):
                text = page.extract_text() or ""
                self._pages.append(self._normalize_text(text))
                logger.debug(f"Page {i}: {len(text)} characters extracted")

        except Exception as e:
            logger.error(f"Error loading PDF {self.name}: {e}")
            self.close()
            raise DocumentUnreadableError(str(e) or type(e).__name__, self.name) from e

        return self._pages

    def text(self) -> str:
        """
        Full document text, pages joined by newlines.

        Raises:
            DocumentUnreadableError: if the document cannot be decoded or
                carries no text layer
        """
        text = "\n".join(page for page in self.load() if page)
        if not text.strip():
            raise DocumentUnreadableError("no extractable text", self.name)
        return text

    def _normalize_text(self, text: str) -> str:
        """Replace ligatures and collapse runs of spaces, keeping line breaks."""
        for ligature, replacement in LIGATURES.items():
            text = text.replace(ligature, replacement)

        lines = [re.sub(r'[ \t\f\v\xa0]+', ' ', line).strip() for line in text.splitlines()]
        return "\n".join(lines)

    def close(self):
        """Close the PDF file."""
        if self._pdf:
            self._pdf.close()
            self._pdf = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def load_document_text(source: DocumentSource, password: str = "") -> str:
    """
    Decode a PDF document into a single text string.

    Args:
        source: Path to a PDF file or its raw bytes
        password: Password for encrypted documents

    Returns:
        Document text

    Raises:
        DocumentUnreadableError: if no text can be produced
    """
    with PDFLoader(source, password=password) as loader:
        return loader.text()


def load_text_file(path: Path, encoding: Optional[str] = "utf-8") -> str:
    """
    Read an already-decoded statement from a plain text file.

    Raises:
        DocumentUnreadableError: if the file is missing, undecodable or empty
    """
    try:
        text = Path(path).read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentUnreadableError(str(e), str(path)) from e

    if not text.strip():
        raise DocumentUnreadableError("no extractable text", str(path))
    return text

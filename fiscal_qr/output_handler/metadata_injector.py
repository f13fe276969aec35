"""
PDF Metadata Injector Module.

Writes the AT QR string back into a PDF's document information
dictionary without touching page content:
    - Keywords: the encoded string (single-element keyword list)
    - Subject: "AT-QR-DATA: " + encoded string

Uses PyMuPDF to load, update the two Info entries and re-serialize.
Nothing is written to disk; the caller owns the returned bytes.
"""

from typing import Dict, List

from fiscal_qr.utils.logger import get_logger
from fiscal_qr.utils.exceptions import DocumentLoadError, InjectionError
from fiscal_qr.utils.helpers import PYMUPDF_LOCK

# Initialize module logger
logger = get_logger(__name__)


SUBJECT_PREFIX = "AT-QR-DATA: "


class MetadataInjector:
    """
    Injects the AT QR string into PDF metadata.

    Example:
        >>> injector = MetadataInjector()
        >>> updated = injector.inject(pdf_bytes, "A:123456789*B:999999990*...")
        >>> injector.read_metadata(updated)["keywords"]
        'A:123456789*B:999999990*...'
    """

    def __init__(self) -> None:
        self._check_dependencies()

    def _check_dependencies(self) -> None:
        try:
            import fitz  # PyMuPDF
            self._pymupdf = fitz
        except ImportError:
            raise InjectionError(
                "PyMuPDF not available. Install with: pip install PyMuPDF"
            )

    def _load(self, content: bytes):
        try:
            doc = self._pymupdf.open(stream=content, filetype="pdf")
        except Exception as e:
            raise DocumentLoadError(str(e))

        if not doc.is_pdf:
            doc.close()
            raise DocumentLoadError("not a PDF document")
        return doc

    @staticmethod
    def format_keywords(keywords: List[str]) -> str:
        """Serialize a keyword list into the Info /Keywords string."""
        return ' '.join(keywords)

    def inject(self, original_bytes: bytes, encoded_string: str) -> bytes:
        """
        Return a copy of the PDF with keywords and subject set.

        Args:
            original_bytes: Source PDF bytes.
            encoded_string: AT QR string.

        Returns:
            Complete serialized PDF.

        Raises:
            DocumentLoadError: If original_bytes is not a loadable PDF.
        """
        with PYMUPDF_LOCK:
            doc = self._load(original_bytes)

            try:
                # Only the given keys are rewritten; other Info entries stay
                doc.set_metadata({
                    'keywords': self.format_keywords([encoded_string]),
                    'subject': f"{SUBJECT_PREFIX}{encoded_string}",
                })
                updated = doc.tobytes()
            finally:
                doc.close()

        logger.debug(
            f"Injected AT QR metadata ({len(original_bytes)} -> {len(updated)} bytes)"
        )
        return updated

    def read_metadata(self, content: bytes) -> Dict[str, str]:
        """
        Read the document information dictionary.

        Raises:
            DocumentLoadError: If content is not a loadable PDF.
        """
        with PYMUPDF_LOCK:
            doc = self._load(content)
            try:
                return dict(doc.metadata or {})
            finally:
                doc.close()


def inject_metadata(original_bytes: bytes, encoded_string: str) -> bytes:
    """Inject with a default MetadataInjector."""
    return MetadataInjector().inject(original_bytes, encoded_string)

"""
PDF Processor Module.

This module handles PDF documents for the extraction pipeline:
    - Embedded text extraction per page
    - Page rasterization at a fixed upscale factor (for QR decoding)

Uses PyMuPDF (fitz) for both text and rendering.
"""

import io
from dataclasses import dataclass
from typing import Iterator
from PIL import Image

from fiscal_qr.utils.logger import get_logger
from fiscal_qr.utils.exceptions import CorruptedFileError, InputError
from fiscal_qr.utils.helpers import PYMUPDF_LOCK

# Initialize module logger
logger = get_logger(__name__)


@dataclass
class PDFPage:
    """
    One rendered PDF page.

    Attributes:
        index: 0-based page index
        text: Embedded text of the page
        image: Page rendered to an RGB PIL Image
    """
    index: int
    text: str
    image: Image.Image


class PDFProcessor:
    """
    Processor for PDF documents held in memory.

    Attributes:
        render_scale: Zoom factor applied when rasterizing pages (1.0 = 72 DPI)

    Example:
        >>> processor = PDFProcessor(render_scale=2.0)
        >>> for page in processor.iter_pages(pdf_bytes, "fatura.pdf"):
        ...     print(page.index, len(page.text))
    """

    def __init__(self, render_scale: float = 2.0) -> None:
        """
        Initialize the PDF processor.

        Args:
            render_scale: Upscale factor for page rendering.
        """
        self.render_scale = render_scale
        self._check_dependencies()

        logger.debug(f"PDFProcessor initialized (render_scale={self.render_scale})")

    def _check_dependencies(self) -> None:
        """
        Check that PyMuPDF is importable.

        Raises:
            InputError: If PyMuPDF is not installed.
        """
        try:
            import fitz  # PyMuPDF
            self._pymupdf = fitz
        except ImportError:
            raise InputError(
                "PyMuPDF not available. Install with: pip install PyMuPDF"
            )

    def _open(self, content: bytes, filename: str):
        try:
            doc = self._pymupdf.open(stream=content, filetype="pdf")
        except Exception as e:
            logger.error(f"Could not open PDF {filename}: {e}")
            raise CorruptedFileError(filename, str(e))

        if not doc.is_pdf:
            doc.close()
            raise CorruptedFileError(filename, "not a PDF document")
        return doc

    def iter_pages(self, content: bytes, filename: str = "document.pdf") -> Iterator[PDFPage]:
        """
        Yield the text and rendering of each page in page order.

        Args:
            content: Raw PDF bytes.
            filename: Name used in log and error messages.

        Yields:
            PDFPage for every page.

        Raises:
            CorruptedFileError: If the bytes are not a readable PDF.
        """
        with PYMUPDF_LOCK:
            doc = self._open(content, filename)

        try:
            with PYMUPDF_LOCK:
                page_count = len(doc)
                matrix = self._pymupdf.Matrix(self.render_scale, self.render_scale)
            logger.info(f"Processing PDF: {filename} ({page_count} page(s))")

            for page_num in range(page_count):
                with PYMUPDF_LOCK:
                    page = doc.load_page(page_num)
                    text = page.get_text()
                    png = page.get_pixmap(matrix=matrix).tobytes("png")

                image = Image.open(io.BytesIO(png))
                if image.mode != 'RGB':
                    image = image.convert('RGB')

                logger.debug(
                    f"Page {page_num + 1}: {len(text)} chars, "
                    f"rendered {image.width}x{image.height}"
                )
                yield PDFPage(index=page_num, text=text, image=image)
        finally:
            with PYMUPDF_LOCK:
                doc.close()


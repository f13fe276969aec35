"""
Main OCR Engine Module.

This module provides the OCREngine class, the OCR adapter used by the
extraction pipeline for raster inputs.

Usage:
    from fiscal_qr.ocr_engine import OCREngine

    engine = OCREngine(language="por+eng")
    text = engine.extract_text(image)
"""

from PIL import Image

from fiscal_qr.utils.logger import get_logger
from fiscal_qr.utils.exceptions import OCRProcessingError
from .tesseract_backend import TesseractBackend

# Initialize module logger
logger = get_logger(__name__)


class OCREngine:
    """
    OCR adapter producing best-effort text from an image.

    Supported Backends:
        - tesseract: Tesseract OCR through pytesseract

    Attributes:
        backend_name: Name of the active OCR backend
        backend: The active OCR backend instance

    Example:
        >>> engine = OCREngine()
        >>> print(engine.extract_text(image))
    """

    SUPPORTED_BACKENDS = ['tesseract']

    def __init__(
        self,
        backend: str = "tesseract",
        language: str = "por+eng",
        psm: int = 3,
        oem: int = 3,
        extra_config: str = "",
        timeout: int = 0
    ) -> None:
        """
        Initialize the OCR engine.

        Args:
            backend: OCR backend name ("pytesseract" is accepted as alias).
            language: Tesseract language profile.
            psm: Page Segmentation Mode.
            oem: OCR Engine Mode.
            extra_config: Extra Tesseract options.
            timeout: Per-run timeout in seconds (0 = none).
        """
        self.backend_name = "tesseract" if backend == "pytesseract" else backend

        if self.backend_name not in self.SUPPORTED_BACKENDS:
            logger.warning(
                f"Unknown backend '{self.backend_name}', falling back to tesseract"
            )
            self.backend_name = "tesseract"

        self.backend = TesseractBackend(
            language=language,
            psm=psm,
            oem=oem,
            extra_config=extra_config,
            timeout=timeout
        )

        logger.info(f"OCR Engine initialized with backend: {self.backend_name}")

    def extract_text(self, image: Image.Image) -> str:
        """
        Extract text from an image.

        Args:
            image: PIL Image.

        Returns:
            Extracted text (possibly empty).

        Raises:
            OCRProcessingError: If the input is not an image or OCR fails.
        """
        if not isinstance(image, Image.Image):
            raise OCRProcessingError("unknown", "Invalid image input")

        logger.debug(f"Extracting text using {self.backend_name} backend")
        return self.backend.get_raw_text(image)

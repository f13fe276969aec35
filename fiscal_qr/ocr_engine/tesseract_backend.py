"""
Tesseract OCR Backend.

Runs Tesseract through pytesseract with the bilingual Portuguese + English
profile ("por+eng") used for receipts and scanned invoices.

Requirements:
    - Tesseract installed on the system, with the 'por' traineddata
    - pytesseract
"""

import time

from PIL import Image

from fiscal_qr.utils.logger import get_logger
from fiscal_qr.utils.exceptions import OCREngineNotAvailableError, OCRProcessingError

# Initialize module logger
logger = get_logger(__name__)


class TesseractBackend:
    """
    Plain-text OCR through the Tesseract binary.

    Attributes:
        language: Tesseract language profile, '+'-joined
        psm: Page Segmentation Mode
        oem: OCR Engine Mode
        extra_config: Additional command line options
        timeout: Seconds before a run is killed (0 = no limit)

    Example:
        >>> backend = TesseractBackend(language="por+eng")
        >>> backend.get_raw_text(receipt_image)
        'NIF 123456789 ... TOTAL 12,50 EUR'
    """

    def __init__(
        self,
        language: str = "por+eng",
        psm: int = 3,
        oem: int = 3,
        extra_config: str = "",
        timeout: int = 0
    ) -> None:
        self.language = language
        self.psm = psm
        self.oem = oem
        self.extra_config = extra_config
        self.timeout = timeout

        self._check_dependencies()

    def _check_dependencies(self) -> None:
        """
        Load pytesseract and probe the binary.

        Raises:
            OCREngineNotAvailableError: If pytesseract or Tesseract is missing.
        """
        try:
            import pytesseract
        except ImportError:
            raise OCREngineNotAvailableError(
                "pytesseract (install with: pip install pytesseract)"
            )

        try:
            version = pytesseract.get_tesseract_version()
        except pytesseract.TesseractNotFoundError as e:
            raise OCREngineNotAvailableError(f"tesseract binary not found: {e}")

        self._check_languages(pytesseract)

        self._pytesseract = pytesseract
        logger.info(f"Tesseract {version} ready (lang={self.language})")

    def _check_languages(self, pytesseract) -> None:
        """
        Verify every language of the profile has installed traineddata.

        Raises:
            OCREngineNotAvailableError: If a language (e.g. 'por') is missing.
        """
        try:
            installed = set(pytesseract.get_languages(config=''))
        except pytesseract.TesseractError as e:
            # Builds that cannot list languages fail on the first run instead
            logger.warning(f"Could not list Tesseract languages: {e}")
            return

        missing = [lang for lang in self.language.split('+') if lang not in installed]
        if missing:
            raise OCREngineNotAvailableError(
                f"tesseract traineddata missing for: {', '.join(missing)}"
            )

    def _build_config(self) -> str:
        """Command line options for a run, e.g. '--psm 3 --oem 3'."""
        options = f"--psm {self.psm} --oem {self.oem}"
        return f"{options} {self.extra_config}" if self.extra_config else options

    def get_raw_text(self, image: Image.Image) -> str:
        """
        Run Tesseract on one image.

        Args:
            image: PIL Image; converted to RGB before the run.

        Returns:
            Recognized text with surrounding whitespace removed.

        Raises:
            OCRProcessingError: If Tesseract fails or times out.
        """
        if image.mode != 'RGB':
            image = image.convert('RGB')

        started = time.time()
        try:
            text = self._pytesseract.image_to_string(
                image,
                lang=self.language,
                config=self._build_config(),
                timeout=self.timeout
            )
        except Exception as e:
            logger.error(f"Tesseract run failed: {e}")
            raise OCRProcessingError("image", str(e))

        text = text.strip()
        logger.debug(f"OCR produced {len(text)} chars in {time.time() - started:.2f}s")
        return text

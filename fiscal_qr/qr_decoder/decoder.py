"""
QR Decoder Module.

Locates and decodes a QR payload in a rasterized page or image.

Supported backends:
    - pyzbar: ZBar through pyzbar (default, needs the zbar shared library)
    - opencv: OpenCV QRCodeDetector

Usage:
    from fiscal_qr.qr_decoder import QRDecoder

    decoder = QRDecoder()
    payload = decoder.decode(image)   # str or None
"""

from typing import Optional
import numpy as np
from PIL import Image

from fiscal_qr.utils.logger import get_logger
from fiscal_qr.utils.exceptions import QRDecoderNotAvailableError, QRDecodeError

# Initialize module logger
logger = get_logger(__name__)


class PyzbarBackend:
    """QR decoding with ZBar."""

    name = "pyzbar"

    def __init__(self) -> None:
        # Raises ImportError when the zbar shared library is missing
        from pyzbar.pyzbar import decode, ZBarSymbol
        self._decode = decode
        self._symbols = [ZBarSymbol.QRCODE]

    def decode(self, image: Image.Image) -> Optional[str]:
        symbols = self._decode(image, symbols=self._symbols)
        if not symbols:
            return None
        return symbols[0].data.decode('utf-8', errors='replace')


class OpenCVBackend:
    """QR decoding with OpenCV's QRCodeDetector."""

    name = "opencv"

    def __init__(self) -> None:
        import cv2
        self._cv2 = cv2

    def decode(self, image: Image.Image) -> Optional[str]:
        array = self._cv2.cvtColor(np.array(image.convert('RGB')), self._cv2.COLOR_RGB2BGR)
        data, _points, _straight = self._cv2.QRCodeDetector().detectAndDecode(array)
        return data or None


class QRDecoder:
    """
    QR adapter used by the extraction pipeline.

    Attributes:
        backend_name: Name of the active backend
        backend: The active backend instance

    Example:
        >>> decoder = QRDecoder(backend="opencv")
        >>> decoder.decode(page_image)
        'A:123456789*B:999999990*...'
    """

    SUPPORTED_BACKENDS = ['pyzbar', 'opencv']

    def __init__(self, backend: str = "pyzbar") -> None:
        """
        Initialize the QR decoder.

        Args:
            backend: Preferred backend; pyzbar falls back to opencv when
                     the zbar library cannot be loaded.

        Raises:
            QRDecoderNotAvailableError: If no backend can be loaded.
        """
        self.backend_name = backend
        self.backend = self._initialize_backend()

        logger.info(f"QR decoder initialized with backend: {self.backend_name}")

    def _initialize_backend(self):
        if self.backend_name not in self.SUPPORTED_BACKENDS:
            logger.warning(f"Unknown QR backend '{self.backend_name}', using opencv")
            self.backend_name = "opencv"

        if self.backend_name == "pyzbar":
            try:
                return PyzbarBackend()
            except ImportError as e:
                logger.warning(f"pyzbar not available ({e}), falling back to opencv")
                self.backend_name = "opencv"

        try:
            return OpenCVBackend()
        except ImportError:
            raise QRDecoderNotAvailableError(
                "opencv (install with: pip install opencv-python-headless)"
            )

    def decode(self, image: Image.Image) -> Optional[str]:
        """
        Decode the first QR code found in an image.

        Args:
            image: Rasterized page or photo.

        Returns:
            Decoded payload, or None when no QR code is found.

        Raises:
            QRDecodeError: If the backend fails while scanning.
        """
        try:
            payload = self.backend.decode(image)
        except Exception as e:
            logger.error(f"QR decoding failed: {e}")
            raise QRDecodeError(self.backend_name, str(e))

        if payload:
            logger.debug(f"QR payload found ({len(payload)} chars)")
        return payload

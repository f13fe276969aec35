"""
Image Processor Module.

This module handles raster inputs (JPG, JPEG, PNG):
    - Image decoding from in-memory bytes
    - Orientation correction from EXIF data
    - RGB conversion
    - Light contrast/sharpness enhancement of the OCR copy
"""

import io
from PIL import Image, ImageOps, ImageEnhance

from fiscal_qr.utils.logger import get_logger
from fiscal_qr.utils.exceptions import CorruptedFileError

# Initialize module logger
logger = get_logger(__name__)


class ImageProcessor:
    """
    Processor for image files.

    Attributes:
        auto_orient: Whether to auto-correct orientation
        enhance_contrast: Whether to enhance the copy handed to OCR

    Example:
        >>> processor = ImageProcessor()
        >>> image = processor.load(png_bytes, "talao.png")
        >>> ocr_image = processor.prepare_for_ocr(image)
    """

    def __init__(self, auto_orient: bool = True, enhance_contrast: bool = True) -> None:
        self.auto_orient = auto_orient
        self.enhance_contrast = enhance_contrast

        logger.debug(
            f"ImageProcessor initialized (auto_orient={self.auto_orient}, "
            f"enhance_contrast={self.enhance_contrast})"
        )

    def load(self, content: bytes, filename: str = "image") -> Image.Image:
        """
        Decode image bytes into an RGB PIL Image.

        Args:
            content: Raw image bytes.
            filename: Name used in log and error messages.

        Returns:
            Decoded RGB image.

        Raises:
            CorruptedFileError: If the bytes cannot be decoded.
        """
        try:
            image = Image.open(io.BytesIO(content))
            image.load()
        except Exception as e:
            logger.error(f"Failed to decode image {filename}: {e}")
            raise CorruptedFileError(filename, str(e))

        logger.info(f"Loaded image: {filename} ({image.width}x{image.height}, {image.mode})")

        if self.auto_orient:
            image = ImageOps.exif_transpose(image)

        return self._convert_to_rgb(image)

    def _convert_to_rgb(self, image: Image.Image) -> Image.Image:
        """
        Convert image to RGB mode.

        RGBA images are flattened onto a white background; other modes
        (L, P, CMYK) are converted directly.
        """
        if image.mode == 'RGB':
            return image

        original_mode = image.mode

        if image.mode == 'RGBA':
            background = Image.new('RGB', image.size, (255, 255, 255))
            background.paste(image, mask=image.split()[3])
            image = background
        else:
            image = image.convert('RGB')

        logger.debug(f"Converted image from {original_mode} to RGB")
        return image

    def prepare_for_ocr(self, image: Image.Image) -> Image.Image:
        """
        Return the copy of the image handed to the OCR engine.

        Enhancements (when enabled):
            - Slight contrast increase
            - Slight sharpness increase
        """
        if not self.enhance_contrast:
            return image

        image = ImageEnhance.Contrast(image).enhance(1.2)  # 20% increase
        image = ImageEnhance.Sharpness(image).enhance(1.1)  # 10% increase

        logger.debug("Applied image enhancements")
        return image

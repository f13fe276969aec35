"""
Main Input Handler Module.

Decides which extraction path a document takes. Dispatch is by filename
extension only; file contents are never sniffed.

Usage:
    from fiscal_qr.input_handler import InputHandler

    handler = InputHandler()
    handler.detect_file_type("fatura.pdf")   # 'pdf'
    handler.detect_file_type("talao.PNG")    # 'image'
"""

from pathlib import Path
from typing import Union, List

from fiscal_qr.utils.logger import get_logger
from fiscal_qr.utils.helpers import get_file_extension
from fiscal_qr.utils.exceptions import UnsupportedFileTypeError

# Initialize module logger
logger = get_logger(__name__)


class InputHandler:
    """
    Extension-based file type detection.

    Attributes:
        PDF_EXTENSIONS: Extensions routed to the PDF path
        IMAGE_EXTENSIONS: Extensions routed to the image path
    """

    PDF_EXTENSIONS = {'.pdf'}
    IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png'}

    @property
    def supported_extensions(self) -> List[str]:
        return sorted(self.PDF_EXTENSIONS | self.IMAGE_EXTENSIONS)

    def is_supported(self, filepath: Union[str, Path]) -> bool:
        return get_file_extension(filepath) in (self.PDF_EXTENSIONS | self.IMAGE_EXTENSIONS)

    def detect_file_type(self, filepath: Union[str, Path]) -> str:
        """
        Detect the type of input file.

        Args:
            filepath: Path or bare filename of the document.

        Returns:
            File type string: 'pdf' or 'image'.

        Raises:
            UnsupportedFileTypeError: If the extension is not supported.
        """
        extension = get_file_extension(filepath)

        if extension in self.PDF_EXTENSIONS:
            logger.debug(f"Detected PDF file: {filepath}")
            return 'pdf'
        elif extension in self.IMAGE_EXTENSIONS:
            logger.debug(f"Detected image file: {filepath}")
            return 'image'
        else:
            raise UnsupportedFileTypeError(extension, self.supported_extensions)

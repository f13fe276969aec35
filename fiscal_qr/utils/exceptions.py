"""
Custom Exceptions Module.

This module defines all custom exceptions used throughout the fiscal QR
extraction system. Adapters raise these; the extraction pipeline converts
them into descriptive failure strings on the per-document result.

Exception Hierarchy:
    FiscalQRError (base)
    ├── InputError
    │   ├── UnsupportedFileTypeError
    │   └── CorruptedFileError
    ├── ExtractionError
    │   ├── OCREngineNotAvailableError
    │   ├── OCRProcessingError
    │   ├── QRDecoderNotAvailableError
    │   └── QRDecodeError
    ├── AssemblyError
    │   └── MissingMandatoryDataError
    └── InjectionError
        └── DocumentLoadError
"""


class FiscalQRError(Exception):
    """
    Base exception for all fiscal QR extraction errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(FiscalQRError):
    """Base exception for input handling errors."""
    pass


class UnsupportedFileTypeError(InputError):
    """
    Raised when a file extension is not routed to any extraction path.

    Example:
        >>> raise UnsupportedFileTypeError(".docx", [".pdf", ".jpg"])
    """

    def __init__(self, file_type: str, supported_types: list):
        message = f"Unsupported file type: '{file_type}'"
        details = {"file_type": file_type, "supported_types": supported_types}
        super().__init__(message, details)


class CorruptedFileError(InputError):
    """Raised when a file appears to be corrupted or unreadable."""

    def __init__(self, filename: str, reason: str = None):
        message = f"Corrupted or unreadable file: {filename}"
        details = {"filename": filename, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# EXTRACTION ERRORS
# =============================================================================

class ExtractionError(FiscalQRError):
    """Base exception for text/OCR/QR extraction errors."""
    pass


class OCREngineNotAvailableError(ExtractionError):
    """Raised when the configured OCR engine is not available."""

    def __init__(self, engine_name: str):
        message = f"OCR engine not available: {engine_name}"
        details = {"engine": engine_name}
        super().__init__(message, details)


class OCRProcessingError(ExtractionError):
    """Raised when OCR processing fails."""

    def __init__(self, source: str, reason: str = None):
        message = f"OCR processing failed for: {source}"
        details = {"source": source, "reason": reason}
        super().__init__(message, details)


class QRDecoderNotAvailableError(ExtractionError):
    """Raised when no QR decoding backend can be loaded."""

    def __init__(self, backend_name: str):
        message = f"QR decoder not available: {backend_name}"
        details = {"backend": backend_name}
        super().__init__(message, details)


class QRDecodeError(ExtractionError):
    """Raised when a QR backend fails while scanning an image."""

    def __init__(self, backend_name: str, reason: str = None):
        message = f"QR decoding failed ({backend_name})"
        details = {"backend": backend_name, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# ASSEMBLY ERRORS
# =============================================================================

class AssemblyError(FiscalQRError):
    """Base exception for AT QR assembly errors."""
    pass


class MissingMandatoryDataError(AssemblyError):
    """Raised when a mandatory fiscal field is absent."""

    def __init__(self, field: str):
        message = f"Missing mandatory fiscal field: {field}"
        details = {"field": field}
        super().__init__(message, details)


# =============================================================================
# INJECTION ERRORS
# =============================================================================

class InjectionError(FiscalQRError):
    """Base exception for metadata injection errors."""
    pass


class DocumentLoadError(InjectionError):
    """Raised when the source bytes cannot be loaded as a PDF document."""

    def __init__(self, reason: str = None):
        message = "Failed to load PDF document"
        details = {"reason": reason}
        super().__init__(message, details)


__all__ = [
    'FiscalQRError',
    'InputError',
    'UnsupportedFileTypeError',
    'CorruptedFileError',
    'ExtractionError',
    'OCREngineNotAvailableError',
    'OCRProcessingError',
    'QRDecoderNotAvailableError',
    'QRDecodeError',
    'AssemblyError',
    'MissingMandatoryDataError',
    'InjectionError',
    'DocumentLoadError',
]

"""
Pipeline Settings.

Startup configuration for the extraction pipeline. Values are read once
from settings.yaml (or passed explicitly) and injected into the pipeline
constructor; no adapter reads process-wide state afterwards.
"""

from dataclasses import dataclass

from config import get_config


@dataclass(frozen=True)
class PipelineSettings:
    """
    Runtime knobs of the extraction pipeline.

    Attributes:
        render_scale: Upscale factor for PDF page rendering
        ocr_backend: OCR backend name
        ocr_language: Tesseract language profile
        ocr_psm: Tesseract page segmentation mode
        ocr_oem: Tesseract engine mode
        ocr_extra_config: Extra Tesseract options
        ocr_timeout: Tesseract timeout in seconds (0 = none)
        qr_backend: Preferred QR backend ('pyzbar' or 'opencv')
        auto_orient: Apply EXIF orientation to images
        enhance_contrast: Enhance the OCR copy of images
    """
    render_scale: float = 2.0
    ocr_backend: str = "tesseract"
    ocr_language: str = "por+eng"
    ocr_psm: int = 3
    ocr_oem: int = 3
    ocr_extra_config: str = ""
    ocr_timeout: int = 0
    qr_backend: str = "pyzbar"
    auto_orient: bool = True
    enhance_contrast: bool = True

    @classmethod
    def from_config(cls) -> 'PipelineSettings':
        """Build settings from the loaded configuration file."""
        defaults = cls()
        return cls(
            render_scale=float(get_config("input.pdf.render_scale", defaults.render_scale)),
            ocr_backend=get_config("ocr.engine", defaults.ocr_backend),
            ocr_language=get_config("ocr.tesseract.lang", defaults.ocr_language),
            ocr_psm=int(get_config("ocr.tesseract.psm", defaults.ocr_psm)),
            ocr_oem=int(get_config("ocr.tesseract.oem", defaults.ocr_oem)),
            ocr_extra_config=get_config("ocr.tesseract.config", defaults.ocr_extra_config) or "",
            ocr_timeout=int(get_config("ocr.tesseract.timeout", defaults.ocr_timeout)),
            qr_backend=get_config("qr.backend", defaults.qr_backend),
            auto_orient=bool(get_config("input.image.auto_orient", defaults.auto_orient)),
            enhance_contrast=bool(get_config("input.image.enhance_contrast", defaults.enhance_contrast)),
        )

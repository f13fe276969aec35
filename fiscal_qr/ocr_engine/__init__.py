"""
OCR Engine Module for the Fiscal QR Extraction System.

Best-effort text extraction from raster images through Tesseract.
"""

from .engine import OCREngine
from .tesseract_backend import TesseractBackend

__all__ = ['OCREngine', 'TesseractBackend']

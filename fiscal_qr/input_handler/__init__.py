"""
Input Handler Module for the Fiscal QR Extraction System.

This module provides functionality for:
    - Detecting file types (PDF vs Image) by extension
    - Extracting embedded text and rendering PDF pages
    - Decoding and preparing raster images for OCR

Supported formats:
    - PDF (digital and scanned)
    - Images: JPG, JPEG, PNG
"""

from .handler import InputHandler
from .pdf_processor import PDFProcessor, PDFPage
from .image_processor import ImageProcessor

__all__ = ['InputHandler', 'PDFProcessor', 'PDFPage', 'ImageProcessor']

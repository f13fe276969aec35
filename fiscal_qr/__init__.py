"""
Fiscal QR Extraction System - Source Package.

This package contains the modules that read fiscal documents (PDF invoices,
scanned receipts), derive the tax-relevant fields and assemble the AT QR-code
string, optionally writing it back into the PDF metadata.

Modules:
    - input_handler: file type dispatch, PDF and image loading
    - ocr_engine: Tesseract text extraction
    - qr_decoder: QR payload decoding from rasterized pages/images
    - semantic: heuristic fiscal field extraction from text
    - at_qr: AT QR field formatting and assembly
    - output_handler: PDF metadata injection
    - pipeline: per-document extraction pipeline and batch processing
    - models: document input and extraction result records

Architecture:
    Input → (Text | OCR) + QR → Semantic → AT QR Assembly → Metadata Injection
"""

__version__ = "1.0.0"

__all__ = [
    'input_handler',
    'ocr_engine',
    'qr_decoder',
    'semantic',
    'at_qr',
    'output_handler',
    'pipeline',
    'models',
    'utils'
]

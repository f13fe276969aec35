"""
QR Decoder Module for the Fiscal QR Extraction System.

Finds and decodes QR payloads on rendered PDF pages and images.
"""

from .decoder import QRDecoder, PyzbarBackend, OpenCVBackend

__all__ = ['QRDecoder', 'PyzbarBackend', 'OpenCVBackend']

"""
Utility Module for the Fiscal QR Extraction System.

This module provides common utilities used across all other modules:
    - Logging configuration
    - Custom exceptions
    - Common helpers
"""

from .logger import setup_logger, get_logger
from .helpers import ensure_directory, get_file_extension, generate_timestamp

__all__ = [
    'setup_logger',
    'get_logger',
    'ensure_directory',
    'get_file_extension',
    'generate_timestamp'
]

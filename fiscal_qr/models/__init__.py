"""
Data Models Module.

Input and output records exchanged between pipeline stages and the
collaborators that enumerate documents or consume results.
"""

from .document import DocumentInput
from .extraction_result import ExtractionResult, FailureReason

__all__ = ['DocumentInput', 'ExtractionResult', 'FailureReason']

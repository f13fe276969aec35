"""
Extraction Result Data Class.

This module defines the per-document outcome handed to reporting, export
and download collaborators. Instances are immutable: the extraction
pipeline creates one, QR assembly and metadata injection each return an
updated copy.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple
import json

from fiscal_qr.semantic.semantic_record import SemanticRecord


class FailureReason:
    """Descriptive failure strings surfaced on ExtractionResult."""
    UNSUPPORTED_TYPE = "unsupported file type"
    PROCESSING_FAILED = "processing failed"
    MISSING_MANDATORY_DATA = "missing mandatory fiscal data (tax id/total)"


@dataclass(frozen=True)
class ExtractionResult:
    """
    Represents the outcome of processing a single fiscal document.

    Attributes:
        file_name: Source filename
        succeeded: Whether the document produced usable fiscal data
        raw_text: Embedded or OCR text (possibly empty)
        decoded_qr_payload: QR payload found on the document, if any
        semantic: Fields derived from raw_text
        encoded_qr_string: AT QR string, present after successful assembly
        updated_document_bytes: PDF bytes carrying the injected metadata
        failure_reason: One of the FailureReason strings
        error_detail: Underlying message of an extraction failure
        warnings: Non-fatal issues (e.g. metadata injection failure)
        document_type: 'pdf', 'image' or None when unsupported
        page_count: Number of pages (1 for images)
        decoded_qr_page: 0-based page index the QR payload came from
        processing_time: Seconds spent in the extraction pipeline

    Example:
        >>> result = ExtractionResult(file_name="fatura.pdf", succeeded=True)
        >>> print(result.to_json())
    """
    file_name: str
    succeeded: bool
    raw_text: str = ""
    decoded_qr_payload: Optional[str] = None
    semantic: SemanticRecord = field(default_factory=SemanticRecord)
    encoded_qr_string: Optional[str] = None
    updated_document_bytes: Optional[bytes] = field(default=None, repr=False)
    failure_reason: Optional[str] = None
    error_detail: Optional[str] = None
    warnings: Tuple[str, ...] = ()
    document_type: Optional[str] = None
    page_count: int = 0
    decoded_qr_page: Optional[int] = None
    processing_time: float = 0.0

    @classmethod
    def failure(
        cls,
        file_name: str,
        reason: str,
        error_detail: Optional[str] = None,
        **kwargs: Any
    ) -> 'ExtractionResult':
        """Build a failed result."""
        return cls(
            file_name=file_name,
            succeeded=False,
            failure_reason=reason,
            error_detail=error_detail,
            **kwargs
        )

    def with_failure(self, reason: str) -> 'ExtractionResult':
        """Copy downgraded to a failure."""
        return replace(self, succeeded=False, failure_reason=reason)

    def with_encoded_string(self, encoded: str) -> 'ExtractionResult':
        return replace(self, encoded_qr_string=encoded)

    def with_updated_document(self, content: bytes) -> 'ExtractionResult':
        return replace(self, updated_document_bytes=content)

    def with_warning(self, warning: str) -> 'ExtractionResult':
        return replace(self, warnings=self.warnings + (warning,))

    @property
    def is_pdf(self) -> bool:
        return self.document_type == 'pdf'

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Document bytes are replaced by a has_updated_document flag.
        """
        return {
            'file_name': self.file_name,
            'succeeded': self.succeeded,
            'failure_reason': self.failure_reason,
            'error_detail': self.error_detail,
            'document_type': self.document_type,
            'page_count': self.page_count,
            'semantic': self.semantic.to_dict(),
            'decoded_qr_payload': self.decoded_qr_payload,
            'decoded_qr_page': self.decoded_qr_page,
            'encoded_qr_string': self.encoded_qr_string,
            'has_updated_document': self.updated_document_bytes is not None,
            'warnings': list(self.warnings),
            'processing_time': self.processing_time,
            'raw_text': self.raw_text,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def to_flat_dict(self) -> Dict[str, Any]:
        """
        Flat row for spreadsheet/report collaborators.

        Returns:
            Dictionary with no nested structures.
        """
        return {
            'File Name': self.file_name,
            'Status': 'Success' if self.succeeded else 'Failed',
            'Reason': self.failure_reason or '',
            'Emission Date': self.semantic.issue_date or '',
            'Issuer NIF': self.semantic.issuer_tax_id or '',
            'Acquirer NIF': self.semantic.acquirer_tax_id or '',
            'Total Amount': self.semantic.total_amount or '',
            'QR Code Data': self.decoded_qr_payload or '',
            'AT QR String': self.encoded_qr_string or '',
            'Error Details': self.error_detail or '',
            'Warnings': '; '.join(self.warnings),
        }

    def __repr__(self) -> str:
        status = 'ok' if self.succeeded else self.failure_reason
        return (
            f"ExtractionResult(file='{self.file_name}', status={status}, "
            f"issuer={self.semantic.issuer_tax_id}, "
            f"total={self.semantic.total_amount})"
        )

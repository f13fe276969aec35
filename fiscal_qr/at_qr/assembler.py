"""
AT QR Assembly Module.

This module provides the QRAssembler class that turns the semantic record
of a successful extraction into the AT QR-code string.

Operations:
    - Mandatory-field gate (issuer NIF)
    - Fixed defaults for every field text extraction cannot provide
    - Amount parsing for the normal-rate base and document total
    - Formatting through format_atqr_string

Defaults are a best-effort policy: placeholder document id/ATCUD and a zero
total still produce a string rather than rejecting the document.
"""

from decimal import Decimal
from typing import Callable, Optional

from fiscal_qr.utils.logger import get_logger
from fiscal_qr.utils.exceptions import MissingMandatoryDataError
from fiscal_qr.utils.helpers import generate_timestamp
from fiscal_qr.models.extraction_result import ExtractionResult, FailureReason
from fiscal_qr.semantic.semantic_record import SemanticRecord
from .formatter import ATQRFields, format_atqr_string
from .normalizers import AmountNormalizer

# Initialize module logger
logger = get_logger(__name__)


# Generic final-consumer NIF used when the acquirer is unknown
GENERIC_CONSUMER_TAX_ID = "999999990"
DEFAULT_COUNTRY = "PT"
DEFAULT_DOCUMENT_TYPE = "FT"
DEFAULT_DOCUMENT_STATUS = "N"
# Not derived from any real series
PLACEHOLDER_DOCUMENT_ID = "1"
PLACEHOLDER_ATCUD = "0"

ZERO = Decimal("0")


def today_iso() -> str:
    """Current processing date as YYYY-MM-DD."""
    return generate_timestamp("%Y-%m-%d")


class QRAssembler:
    """
    Builds the AT QR string for successful extraction results.

    Attributes:
        amount_normalizer: Parses the captured total amount
        clock: Returns the processing date used when no issue date was found

    Example:
        >>> assembler = QRAssembler()
        >>> result = assembler.assemble(extraction_result)
        >>> print(result.encoded_qr_string)
        A:123456789*B:999999990*C:PT*D:FT*...
    """

    def __init__(self, clock: Optional[Callable[[], str]] = None) -> None:
        """
        Initialize the assembler.

        Args:
            clock: Callable returning today's date as YYYY-MM-DD.
        """
        self.amount_normalizer = AmountNormalizer()
        self.clock = clock or today_iso

    def build_fields(self, semantic: SemanticRecord) -> ATQRFields:
        """
        Map a semantic record plus defaults onto ATQRFields.

        Raises:
            MissingMandatoryDataError: If the issuer NIF is absent.
        """
        if not semantic.issuer_tax_id:
            raise MissingMandatoryDataError("issuer_tax_id")

        total = self.amount_normalizer.to_decimal(semantic.total_amount)
        if total is None:
            logger.debug("No total amount found, defaulting to 0")
            total = ZERO

        return ATQRFields(
            issuer_tax_id=semantic.issuer_tax_id,
            acquirer_tax_id=semantic.acquirer_tax_id or GENERIC_CONSUMER_TAX_ID,
            acquirer_country=DEFAULT_COUNTRY,
            document_type=DEFAULT_DOCUMENT_TYPE,
            document_status=DEFAULT_DOCUMENT_STATUS,
            issue_date=semantic.issue_date or self.clock(),
            document_id=PLACEHOLDER_DOCUMENT_ID,
            atcud=PLACEHOLDER_ATCUD,
            exempt_base=ZERO,
            reduced_rate_base=ZERO,
            reduced_rate_vat=ZERO,
            intermediate_rate_base=ZERO,
            intermediate_rate_vat=ZERO,
            normal_rate_base=total,
            normal_rate_vat=ZERO,
            total_tax=ZERO,
            document_total=total,
        )

    def assemble(self, result: ExtractionResult) -> ExtractionResult:
        """
        Add the encoded AT QR string to a successful result.

        Failed results are returned unchanged. A result without issuer NIF
        is downgraded to a missing-mandatory-data failure.

        Args:
            result: Output of the extraction pipeline.

        Returns:
            New ExtractionResult with encoded_qr_string, or the downgraded
            failure.
        """
        if not result.succeeded:
            return result

        try:
            fields = self.build_fields(result.semantic)
        except MissingMandatoryDataError as e:
            logger.info(f"{result.file_name}: {e.message}")
            return result.with_failure(FailureReason.MISSING_MANDATORY_DATA)

        encoded = format_atqr_string(fields)
        logger.debug(f"{result.file_name}: AT QR string {encoded}")
        return result.with_encoded_string(encoded)


def assemble(result: ExtractionResult) -> ExtractionResult:
    """Assemble with a default QRAssembler."""
    return QRAssembler().assemble(result)

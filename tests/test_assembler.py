"""
Tests for AT QR assembly and amount normalization
"""

from decimal import Decimal

import pytest

from fiscal_qr.at_qr import AmountNormalizer, QRAssembler, GENERIC_CONSUMER_TAX_ID
from fiscal_qr.models import ExtractionResult, FailureReason
from fiscal_qr.semantic import SemanticRecord
from fiscal_qr.utils.exceptions import MissingMandatoryDataError


def make_result(**semantic):
    return ExtractionResult(
        file_name="fatura.pdf",
        succeeded=True,
        semantic=SemanticRecord(**semantic),
        document_type='pdf',
        page_count=1,
    )


def test_assemble_complete_record(assembler):
    result = assembler.assemble(make_result(
        issuer_tax_id="123456789",
        acquirer_tax_id="987654321",
        issue_date="2024-03-15",
        total_amount="1.234,56",
    ))

    assert result.succeeded
    assert result.encoded_qr_string == (
        "A:123456789*B:987654321*C:PT*D:FT*E:N*F:20240315*G:1*H:0"
        "*I1:0.00*I3:0.00*I4:0.00*I5:0.00*I6:0.00*I7:1234.56*I8:0.00"
        "*N:0.00*O:1234.56"
    )


def test_defaults_for_missing_optional_fields(assembler):
    """Acquirer, date and total fall back to their defaults"""
    result = assembler.assemble(make_result(issuer_tax_id="123456789"))
    encoded = result.encoded_qr_string

    assert f"B:{GENERIC_CONSUMER_TAX_ID}" in encoded
    assert "F:20250131" in encoded
    assert "I7:0.00" in encoded
    assert encoded.endswith("O:0.00")


def test_missing_issuer_is_rejected(assembler):
    result = assembler.assemble(make_result(
        acquirer_tax_id="987654321",
        total_amount="50,00",
    ))

    assert not result.succeeded
    assert result.failure_reason == FailureReason.MISSING_MANDATORY_DATA
    assert result.encoded_qr_string is None
    # Extraction output is kept for reporting
    assert result.semantic.total_amount == "50,00"


def test_failed_result_is_passed_through(assembler):
    failed = ExtractionResult.failure("notas.docx", FailureReason.UNSUPPORTED_TYPE)
    assert assembler.assemble(failed) is failed


def test_build_fields_raises_without_issuer(assembler):
    with pytest.raises(MissingMandatoryDataError) as exc_info:
        assembler.build_fields(SemanticRecord())
    assert exc_info.value.details == {"field": "issuer_tax_id"}


def test_build_fields_mirrors_total(assembler):
    fields = assembler.build_fields(SemanticRecord(
        issuer_tax_id="123456789", total_amount="50.00"
    ))
    assert fields.normal_rate_base == fields.document_total == Decimal("50.00")
    assert fields.normal_rate_vat == fields.total_tax == Decimal("0")


def test_default_clock_uses_iso_date():
    fields = QRAssembler().build_fields(SemanticRecord(issuer_tax_id="123456789"))
    assert len(fields.issue_date) == 10
    assert fields.issue_date[4] == fields.issue_date[7] == '-'


@pytest.mark.parametrize("value,expected", [
    ("1.234,56", Decimal("1234.56")),
    ("50.00", Decimal("50.00")),
    ("12,5", Decimal("12.5")),
    ("123,45", Decimal("123.45")),
    ("1,234.56", Decimal("1234.56")),
    ("1.234.567,89", Decimal("1234567.89")),
    ("€ 99,90", Decimal("99.90")),
    ("15 EUR", Decimal("15")),
    ("1.2.3", Decimal("1.2")),
])
def test_amount_normalizer(value, expected):
    assert AmountNormalizer().to_decimal(value) == expected


@pytest.mark.parametrize("value", [None, "", ".", "EUR"])
def test_amount_normalizer_unreadable(value):
    assert AmountNormalizer().to_decimal(value) is None

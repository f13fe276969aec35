"""
Tests for the AT QR field formatter
"""

from decimal import Decimal

import pytest

from fiscal_qr.at_qr import ATQRFields, FIELD_ORDER, format_atqr_string
from fiscal_qr.at_qr.formatter import format_amount, format_date, field_pairs


@pytest.fixture
def fields():
    return ATQRFields(
        issuer_tax_id="123456789",
        acquirer_tax_id="999999990",
        acquirer_country="PT",
        document_type="FT",
        document_status="N",
        issue_date="2024-03-15",
        document_id="FT 2024/1",
        atcud="ABCD1234-1",
        exempt_base=0,
        reduced_rate_base=10,
        reduced_rate_vat=Decimal("0.6"),
        intermediate_rate_base=0,
        intermediate_rate_vat=0,
        normal_rate_base=100,
        normal_rate_vat=23,
        total_tax="23.6",
        document_total=133.6,
    )


def test_full_string(fields):
    """Keys are emitted in fixed order with two-decimal amounts"""
    assert format_atqr_string(fields) == (
        "A:123456789*B:999999990*C:PT*D:FT*E:N*F:20240315*G:FT 2024/1*H:ABCD1234-1"
        "*I1:0.00*I3:10.00*I4:0.60*I5:0.00*I6:0.00*I7:100.00*I8:23.00"
        "*N:23.60*O:133.60"
    )


def test_key_order_and_count(fields):
    keys = [key for key, _ in field_pairs(fields)]
    assert keys == list(FIELD_ORDER)
    assert len(keys) == 17
    # I2 is never emitted
    assert 'I2' not in keys


def test_withholding_tax_not_emitted(fields):
    from dataclasses import replace
    with_withholding = replace(fields, withholding_tax=5)
    assert format_atqr_string(with_withholding) == format_atqr_string(fields)


@pytest.mark.parametrize("value,expected", [
    (50, "50.00"),
    ("12.345", "12.35"),
    (1.005, "1.01"),
    (Decimal("2.5"), "2.50"),
    (0, "0.00"),
    (-1.5, "-1.50"),
])
def test_format_amount(value, expected):
    assert format_amount(value) == expected


def test_format_amount_beyond_default_precision():
    """Amounts wider than 28 digits keep every digit"""
    assert format_amount("12345678901234567890123456789") == "12345678901234567890123456789.00"
    assert format_amount("99999999999999999999999999999.995") == "100000000000000000000000000000.00"


@pytest.mark.parametrize("value", ["abc", float("nan"), float("inf")])
def test_format_amount_non_numeric(value):
    """Non-numeric amounts render as NaN instead of raising"""
    assert format_amount(value) == "NaN"


@pytest.mark.parametrize("value,expected", [
    ("2024-03-15", "20240315"),
    ("15-03-2024", "15032024"),
    ("15/03/2024", "15/03/2024"),
])
def test_format_date(value, expected):
    """Only '-' separators are stripped"""
    assert format_date(value) == expected


def test_separator_characters_not_escaped(fields):
    from dataclasses import replace
    odd = replace(fields, document_id="A*B:C")
    assert "*G:A*B:C*H:" in format_atqr_string(odd)

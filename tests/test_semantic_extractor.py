"""
Tests for semantic field extraction
"""

import pytest

from fiscal_qr.semantic import SemanticExtractor, SemanticRecord, extract_semantic_data


def test_full_record():
    text = "NIF 123456789 Cliente 987654321 Data 15/03/2024 Total: 50,00 €"
    record = extract_semantic_data(text)

    assert record == SemanticRecord(
        issuer_tax_id="123456789",
        acquirer_tax_id="987654321",
        issue_date="15/03/2024",
        total_amount="50,00",
    )


def test_single_tax_id():
    record = extract_semantic_data("Contribuinte 500100200")
    assert record.issuer_tax_id == "500100200"
    assert record.acquirer_tax_id is None


def test_repeated_tax_id_fills_both_fields():
    record = extract_semantic_data("NIF 123456789 ... NIF 123456789")
    assert record.issuer_tax_id == record.acquirer_tax_id == "123456789"


def test_longer_digit_runs_are_not_tax_ids():
    record = extract_semantic_data("Ref 1234567890 Conta 12345678")
    assert record.issuer_tax_id is None


@pytest.mark.parametrize("text,expected", [
    ("Emitido em 2024-03-15", "2024-03-15"),
    ("Emitido em 31-12-2023", "31-12-2023"),
    ("Emitido em 01/02/2025", "01/02/2025"),
    ("2024-01-02 vencimento 03/04/2025", "2024-01-02"),
    ("Emitido em 2024.03.15", None),
])
def test_issue_date(text, expected):
    assert extract_semantic_data(text).issue_date == expected


def test_date_is_not_validated():
    assert extract_semantic_data("99/99/2024").issue_date == "99/99/2024"


@pytest.mark.parametrize("text,expected", [
    ("Total: 1.234,56 €", "1.234,56"),
    ("TOTAL 10,00 eur", "10,00"),
    ("Montante: 7.50 EUR", "7.50"),
    ("Valor a pagar: 12.50 EUR", "12.50"),
    ("Total 50.00", None),
    ("Subtotal sem moeda", None),
])
def test_total_amount(text, expected):
    assert extract_semantic_data(text).total_amount == expected


def test_first_total_wins():
    text = "Total: 10,00 EUR\nTotal: 20,00 EUR"
    assert extract_semantic_data(text).total_amount == "10,00"


def test_empty_text():
    record = extract_semantic_data("")
    assert record.is_empty()
    assert record.missing_fields == [
        'issuer_tax_id', 'acquirer_tax_id', 'issue_date', 'total_amount'
    ]


def test_custom_matchers():
    """Matchers are independent and applied in order"""
    extractor = SemanticExtractor(matchers=[
        lambda text: {'issuer_tax_id': '111111111'},
        lambda text: {'total_amount': text.strip()},
    ])
    record = extractor.extract(" 9,99 ")

    assert record.issuer_tax_id == '111111111'
    assert record.total_amount == '9,99'
    assert record.issue_date is None

"""
Tests for the document and result records
"""

import json
from dataclasses import FrozenInstanceError

import pytest

from fiscal_qr.models import DocumentInput, ExtractionResult, FailureReason
from fiscal_qr.semantic import SemanticRecord


@pytest.fixture
def result():
    return ExtractionResult(
        file_name="fatura.pdf",
        succeeded=True,
        raw_text="NIF 123456789",
        semantic=SemanticRecord(issuer_tax_id="123456789", total_amount="50,00"),
        document_type='pdf',
        page_count=1,
    )


def test_from_path(tmp_path):
    path = tmp_path / "Fatura.PDF"
    path.write_bytes(b"%PDF-1.7")

    document = DocumentInput.from_path(path)

    assert document.file_name == "Fatura.PDF"
    assert document.content == b"%PDF-1.7"
    assert document.extension == ".pdf"


def test_result_is_immutable(result):
    with pytest.raises(FrozenInstanceError):
        result.succeeded = False


def test_with_helpers_return_copies(result):
    encoded = result.with_encoded_string("A:123456789")
    updated = encoded.with_updated_document(b"%PDF")
    warned = updated.with_warning("first").with_warning("second")

    assert result.encoded_qr_string is None
    assert updated.encoded_qr_string == "A:123456789"
    assert warned.warnings == ("first", "second")
    assert updated.warnings == ()


def test_failure_constructor():
    failed = ExtractionResult.failure(
        "bad.pdf", FailureReason.PROCESSING_FAILED, error_detail="boom", document_type='pdf'
    )
    assert not failed.succeeded
    assert failed.error_detail == "boom"
    assert failed.semantic.is_empty()


def test_to_dict_hides_bytes(result):
    data = result.with_updated_document(b"%PDF").to_dict()

    assert data['has_updated_document'] is True
    assert 'updated_document_bytes' not in data
    assert data['semantic']['issuer_tax_id'] == "123456789"
    assert json.loads(result.to_json())['file_name'] == "fatura.pdf"


def test_to_flat_dict(result):
    row = result.with_failure(FailureReason.MISSING_MANDATORY_DATA).to_flat_dict()

    assert row['Status'] == 'Failed'
    assert row['Reason'] == FailureReason.MISSING_MANDATORY_DATA
    assert row['Issuer NIF'] == "123456789"
    assert row['Total Amount'] == "50,00"
    assert row['AT QR String'] == ''
    assert all(not isinstance(v, (dict, list)) for v in row.values())

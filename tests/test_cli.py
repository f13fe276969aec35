"""
Tests for the command-line helpers
"""

import pytest

from conftest import build_pdf
from main import collect_documents, parse_arguments, save_updated_documents, unique_name
from fiscal_qr.models import DocumentInput
from fiscal_qr.output_handler import MetadataInjector


@pytest.fixture
def same_named_dirs(tmp_path, invoice_lines):
    """Two folders that both hold a fatura.pdf."""
    for folder, lines in (("a", invoice_lines), ("b", ["NIF: 111111111", "Total: 9,99 EUR"])):
        directory = tmp_path / folder
        directory.mkdir()
        (directory / "fatura.pdf").write_bytes(build_pdf([lines]))
    return tmp_path / "a", tmp_path / "b"


def test_parse_arguments():
    args = parse_arguments(["faturas/", "-o", "out", "-w", "4", "--debug"])

    assert args.inputs == ["faturas/"]
    assert args.output_dir == "out"
    assert args.workers == 4
    assert args.debug and not args.quiet


def test_collect_documents_from_directories(same_named_dirs, tmp_path):
    (tmp_path / "a" / "notas.docx").write_bytes(b"")

    files = collect_documents([str(d) for d in same_named_dirs])

    assert [f.parent.name for f in files] == ["a", "b"]
    assert all(f.name == "fatura.pdf" for f in files)


def test_collect_documents_missing_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        collect_documents([str(tmp_path / "nope")])


def test_unique_name():
    used = {"fatura.pdf", "fatura_2.pdf"}
    assert unique_name("talao.png", used) == "talao.png"
    assert unique_name("FATURA.pdf", used) == "FATURA_3.pdf"


def test_same_named_inputs_are_all_saved(processor, same_named_dirs, tmp_path):
    documents = [
        DocumentInput.from_path(path)
        for path in collect_documents([str(d) for d in same_named_dirs])
    ]
    report = processor.process_batch(documents)

    saved = save_updated_documents(report, str(tmp_path / "out"))

    assert [p.name for p in saved] == ["fatura.pdf", "fatura_2.pdf"]
    keywords = [MetadataInjector().read_metadata(p.read_bytes())["keywords"] for p in saved]
    assert keywords == [r.encoded_qr_string for r in report.results]
    assert keywords[0].startswith("A:123456789*")
    assert keywords[1].startswith("A:111111111*")

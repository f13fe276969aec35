"""
Shared fixtures for the fiscal QR test suite.

OCR and QR adapters are replaced by fakes; PDFs are real documents built
with PyMuPDF.
"""

import io

import fitz
import pytest
from PIL import Image, ImageOps

from fiscal_qr.at_qr import QRAssembler
from fiscal_qr.pipeline import ExtractionPipeline, FiscalQRProcessor, PipelineSettings


FIXED_DATE = "2025-01-31"


class FakeOCREngine:
    """Returns the same text for every image."""

    def __init__(self, text=""):
        self.text = text
        self.calls = 0

    def extract_text(self, image):
        self.calls += 1
        return self.text


class FakeQRDecoder:
    """Returns the given payloads in call order, then None."""

    def __init__(self, payloads=()):
        self.payloads = list(payloads)
        self.calls = 0

    def decode(self, image):
        payload = self.payloads[self.calls] if self.calls < len(self.payloads) else None
        self.calls += 1
        return payload


def build_pdf(pages, metadata=None):
    """PDF bytes with one page per list of text lines."""
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page()
        y = 72
        for line in lines:
            page.insert_text((72, y), line, fontsize=11)
            y += 18
    if metadata:
        doc.set_metadata(metadata)
    content = doc.tobytes()
    doc.close()
    return content


def build_png(size=(120, 80), color="white"):
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def build_qr_image(payload, module_size=8, border=4):
    """QR code for payload as a white-bordered RGB image (needs OpenCV)."""
    import cv2

    matrix = cv2.QRCodeEncoder.create().encode(payload)
    image = Image.fromarray(matrix).convert("L")
    image = image.resize(
        (image.width * module_size, image.height * module_size), Image.Resampling.NEAREST
    )
    return ImageOps.expand(image, border=border * module_size, fill=255).convert("RGB")


def build_pdf_with_qr(pages):
    """PDF bytes with one page per (text lines, QR payload or None)."""
    doc = fitz.open()
    for lines, payload in pages:
        page = doc.new_page()
        y = 72
        for line in lines:
            page.insert_text((72, y), line, fontsize=11)
            y += 18
        if payload:
            buffer = io.BytesIO()
            build_qr_image(payload).save(buffer, format="PNG")
            page.insert_image(fitz.Rect(300, 500, 500, 700), stream=buffer.getvalue())
    content = doc.tobytes()
    doc.close()
    return content


@pytest.fixture
def invoice_lines():
    return [
        "FATURA FT 2025/17",
        "NIF: 123456789",
        "Cliente NIF: 987654321",
        "Data: 2024-03-15",
        "Total: 1.234,56 EUR",
    ]


@pytest.fixture
def invoice_pdf(invoice_lines):
    return build_pdf([invoice_lines])


@pytest.fixture
def fake_ocr():
    return FakeOCREngine()


@pytest.fixture
def fake_qr():
    return FakeQRDecoder()


@pytest.fixture
def settings():
    return PipelineSettings(render_scale=1.0)


@pytest.fixture
def pipeline(settings, fake_ocr, fake_qr):
    return ExtractionPipeline(settings, ocr_engine=fake_ocr, qr_decoder=fake_qr)


@pytest.fixture
def assembler():
    return QRAssembler(clock=lambda: FIXED_DATE)


@pytest.fixture
def processor(pipeline, assembler):
    return FiscalQRProcessor(pipeline=pipeline, assembler=assembler, max_workers=1)

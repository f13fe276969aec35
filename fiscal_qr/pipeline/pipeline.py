"""
Extraction Pipeline Module.

This module provides the ExtractionPipeline class that turns one input
document into an ExtractionResult.

Paths:
    PDF:   per page, embedded text + page rendering -> QR decode;
           semantic extraction over the joined text
    Image: OCR (por+eng) + QR decode of the same image;
           semantic extraction over the OCR text

Any failure inside a path is caught here and reported as
"processing failed"; nothing gathered before the failure is kept.
"""

import time
from dataclasses import replace
from typing import Dict, Optional, Tuple

from fiscal_qr.utils.logger import get_logger
from fiscal_qr.utils.exceptions import UnsupportedFileTypeError
from fiscal_qr.input_handler import InputHandler, PDFProcessor, ImageProcessor
from fiscal_qr.ocr_engine import OCREngine
from fiscal_qr.qr_decoder import QRDecoder
from fiscal_qr.semantic import SemanticExtractor
from fiscal_qr.models import DocumentInput, ExtractionResult, FailureReason
from .settings import PipelineSettings

# Initialize module logger
logger = get_logger(__name__)


def select_qr_payload(payloads: Dict[int, str]) -> Tuple[Optional[int], Optional[str]]:
    """
    Pick the QR payload of a multi-page document.

    The highest page index with a decoded payload wins, independent of the
    order in which pages were scanned.

    Args:
        payloads: Decoded payload per 0-based page index.

    Returns:
        (page index, payload), or (None, None) when no page had a QR code.
    """
    if not payloads:
        return None, None
    page = max(payloads)
    return page, payloads[page]


class ExtractionPipeline:
    """
    Per-document extraction: type dispatch, text/OCR, QR, semantics.

    Adapters are created on first use from the injected settings, so a
    PDF-only workload never needs Tesseract.

    Attributes:
        settings: PipelineSettings injected at construction
        input_handler: Extension-based type detection
        semantic_extractor: Text to SemanticRecord

    Example:
        >>> pipeline = ExtractionPipeline(PipelineSettings.from_config())
        >>> result = pipeline.process(DocumentInput.from_path("fatura.pdf"))
        >>> result.semantic.issuer_tax_id
        '123456789'
    """

    def __init__(
        self,
        settings: Optional[PipelineSettings] = None,
        ocr_engine: Optional[OCREngine] = None,
        qr_decoder: Optional[QRDecoder] = None,
        pdf_processor: Optional[PDFProcessor] = None,
        image_processor: Optional[ImageProcessor] = None,
        semantic_extractor: Optional[SemanticExtractor] = None
    ) -> None:
        self.settings = settings or PipelineSettings()
        self.input_handler = InputHandler()
        self.semantic_extractor = semantic_extractor or SemanticExtractor()

        self._ocr_engine = ocr_engine
        self._qr_decoder = qr_decoder
        self._pdf_processor = pdf_processor
        self._image_processor = image_processor

        logger.info(
            f"ExtractionPipeline initialized (render_scale={self.settings.render_scale}, "
            f"ocr_lang={self.settings.ocr_language}, qr={self.settings.qr_backend})"
        )

    @property
    def ocr_engine(self) -> OCREngine:
        if self._ocr_engine is None:
            self._ocr_engine = OCREngine(
                backend=self.settings.ocr_backend,
                language=self.settings.ocr_language,
                psm=self.settings.ocr_psm,
                oem=self.settings.ocr_oem,
                extra_config=self.settings.ocr_extra_config,
                timeout=self.settings.ocr_timeout
            )
        return self._ocr_engine

    @property
    def qr_decoder(self) -> QRDecoder:
        if self._qr_decoder is None:
            self._qr_decoder = QRDecoder(backend=self.settings.qr_backend)
        return self._qr_decoder

    @property
    def pdf_processor(self) -> PDFProcessor:
        if self._pdf_processor is None:
            self._pdf_processor = PDFProcessor(render_scale=self.settings.render_scale)
        return self._pdf_processor

    @property
    def image_processor(self) -> ImageProcessor:
        if self._image_processor is None:
            self._image_processor = ImageProcessor(
                auto_orient=self.settings.auto_orient,
                enhance_contrast=self.settings.enhance_contrast
            )
        return self._image_processor

    def process(self, document: DocumentInput) -> ExtractionResult:
        """
        Extract raw text, QR payload and semantic fields from a document.

        Args:
            document: Named byte stream.

        Returns:
            ExtractionResult; failed with "unsupported file type" or
            "processing failed" when extraction could not run.
        """
        start_time = time.time()

        try:
            file_type = self.input_handler.detect_file_type(document.file_name)
        except UnsupportedFileTypeError as e:
            logger.info(f"Skipping {document.file_name}: {e.message}")
            return ExtractionResult.failure(
                document.file_name,
                FailureReason.UNSUPPORTED_TYPE
            )

        try:
            if file_type == 'pdf':
                result = self._process_pdf(document)
            else:
                result = self._process_image(document)

        except Exception as e:
            logger.error(f"Processing failed for {document.file_name}: {e}")
            return ExtractionResult.failure(
                document.file_name,
                FailureReason.PROCESSING_FAILED,
                error_detail=str(e),
                document_type=file_type,
                processing_time=time.time() - start_time
            )

        return replace(result, processing_time=time.time() - start_time)

    def _process_pdf(self, document: DocumentInput) -> ExtractionResult:
        page_texts = []
        payloads: Dict[int, str] = {}

        for page in self.pdf_processor.iter_pages(document.content, document.file_name):
            page_texts.append(page.text)

            payload = self.qr_decoder.decode(page.image)
            if payload:
                payloads[page.index] = payload

        raw_text = ' '.join(page_texts)
        qr_page, qr_payload = select_qr_payload(payloads)
        if len(payloads) > 1:
            logger.warning(
                f"{document.file_name}: QR codes on pages "
                f"{[p + 1 for p in sorted(payloads)]}, using page {qr_page + 1}"
            )

        semantic = self.semantic_extractor.extract(raw_text)

        return ExtractionResult(
            file_name=document.file_name,
            succeeded=True,
            raw_text=raw_text,
            decoded_qr_payload=qr_payload,
            decoded_qr_page=qr_page,
            semantic=semantic,
            document_type='pdf',
            page_count=len(page_texts)
        )

    def _process_image(self, document: DocumentInput) -> ExtractionResult:
        image = self.image_processor.load(document.content, document.file_name)

        raw_text = self.ocr_engine.extract_text(
            self.image_processor.prepare_for_ocr(image)
        )
        qr_payload = self.qr_decoder.decode(image)

        semantic = self.semantic_extractor.extract(raw_text)

        return ExtractionResult(
            file_name=document.file_name,
            succeeded=True,
            raw_text=raw_text,
            decoded_qr_payload=qr_payload,
            decoded_qr_page=0 if qr_payload else None,
            semantic=semantic,
            document_type='image',
            page_count=1
        )

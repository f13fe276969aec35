"""
Fiscal QR Processor Module.

This module provides the FiscalQRProcessor class that chains the stages
of one document and runs batches of documents:

    extraction pipeline -> AT QR assembly -> metadata injection (PDF only)

Each document yields one ExtractionResult plus human-readable progress
lines for the logging collaborator. A document is an atomic unit of work:
its failure is recorded on its own result and never reaches the batch.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from config import get_config
from fiscal_qr.utils.logger import get_logger
from fiscal_qr.utils.exceptions import InjectionError
from fiscal_qr.models import DocumentInput, ExtractionResult, FailureReason
from fiscal_qr.at_qr import QRAssembler
from fiscal_qr.output_handler import MetadataInjector
from .pipeline import ExtractionPipeline
from .settings import PipelineSettings

# Initialize module logger
logger = get_logger(__name__)


# Failures reported as "Ignored" rather than "Error"
IGNORED_REASONS = (FailureReason.UNSUPPORTED_TYPE, FailureReason.MISSING_MANDATORY_DATA)


@dataclass
class BatchReport:
    """
    Outcome of a batch run.

    Attributes:
        results: One ExtractionResult per input, in input order
        logs: Ordered progress lines (start, per-file events, completion)
    """
    results: List[ExtractionResult] = field(default_factory=list)
    logs: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def processed(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    @property
    def ignored(self) -> int:
        return self.total - self.processed

    @property
    def updated_documents(self) -> List[Tuple[str, bytes]]:
        """(file name, updated PDF bytes) pairs in input order; names may repeat."""
        return [
            (r.file_name, r.updated_document_bytes)
            for r in self.results
            if r.updated_document_bytes is not None
        ]

    def get_statistics(self) -> Dict[str, Any]:
        return {
            'total': self.total,
            'processed': self.processed,
            'ignored': self.ignored,
            'updated_documents': len(self.updated_documents),
            'with_warnings': sum(1 for r in self.results if r.warnings),
        }


class FiscalQRProcessor:
    """
    Runs the full per-document chain and batches of documents.

    Attributes:
        pipeline: ExtractionPipeline instance
        assembler: QRAssembler instance
        max_workers: Default worker count for process_batch

    Example:
        >>> processor = FiscalQRProcessor()
        >>> report = processor.process_batch([DocumentInput.from_path("fatura.pdf")])
        >>> report.results[0].encoded_qr_string
        'A:123456789*B:999999990*C:PT*...'
        >>> report.logs[-1]
        'Process complete.'
    """

    def __init__(
        self,
        pipeline: Optional[ExtractionPipeline] = None,
        assembler: Optional[QRAssembler] = None,
        injector: Optional[MetadataInjector] = None,
        max_workers: Optional[int] = None
    ) -> None:
        """
        Initialize the processor.

        Args:
            pipeline: Extraction pipeline (default built from configuration).
            assembler: AT QR assembler.
            injector: PDF metadata injector, created on first PDF.
            max_workers: Default worker count; read from batch.max_workers
                         when not given.
        """
        if pipeline is None:
            pipeline = ExtractionPipeline(PipelineSettings.from_config())

        self.pipeline = pipeline
        self.assembler = assembler or QRAssembler()
        self._injector = injector

        if max_workers is None:
            max_workers = get_config("batch.max_workers", 1)
        self.max_workers = max(1, int(max_workers))

        logger.info(f"FiscalQRProcessor initialized (max_workers={self.max_workers})")

    @property
    def injector(self) -> MetadataInjector:
        if self._injector is None:
            self._injector = MetadataInjector()
        return self._injector

    def process_document(self, document: DocumentInput) -> Tuple[ExtractionResult, List[str]]:
        """
        Process one document through extraction, assembly and injection.

        Args:
            document: Named byte stream.

        Returns:
            Tuple of (final ExtractionResult, progress lines for this file).
        """
        name = document.file_name
        logs = [f"Processing {name}..."]
        logger.debug(f"Processing {name}")

        result = self.pipeline.process(document)
        result = self.assembler.assemble(result)

        if not result.succeeded:
            if result.failure_reason in IGNORED_REASONS:
                logs.append(f"Ignored: {name} - {result.failure_reason}")
                logger.debug(f"Ignored {name}: {result.failure_reason}")
            else:
                detail = f" ({result.error_detail})" if result.error_detail else ""
                logs.append(f"Error: {name} - {result.failure_reason}{detail}")
                logger.error(f"Failed {name}: {result.failure_reason}{detail}")
            return result, logs

        if result.is_pdf:
            result, line = self._inject(result, document.content)
            logs.append(line)

        return result, logs

    def _inject(self, result: ExtractionResult, content: bytes) -> Tuple[ExtractionResult, str]:
        name = result.file_name
        try:
            updated = self.injector.inject(content, result.encoded_qr_string)
        except InjectionError as e:
            # The encoded string stays; only the updated bytes are missing
            logger.warning(f"Metadata injection failed for {name}: {e}")
            return (
                result.with_warning(f"metadata injection failed: {e.message}"),
                f"Warning: Could not inject metadata into {name}"
            )

        logger.debug(f"Metadata injected into {name}")
        return result.with_updated_document(updated), f"Success: Metadata injected into {name}"

    def process_batch(
        self,
        documents: Sequence[DocumentInput],
        max_workers: Optional[int] = None
    ) -> BatchReport:
        """
        Process documents in discovery order.

        With more than one worker, documents run concurrently on a thread
        pool; results and log lines are still reported in input order.

        Args:
            documents: Inputs supplied by the enumeration collaborator.
            max_workers: Overrides the processor default.

        Returns:
            BatchReport with one result per document.
        """
        workers = self.max_workers if max_workers is None else max(1, int(max_workers))
        documents = list(documents)

        report = BatchReport()
        report.logs.append(f"Starting process: {len(documents)} document(s)")
        logger.info(f"Starting batch of {len(documents)} document(s) with {workers} worker(s)")

        if workers > 1 and len(documents) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                outcomes = list(executor.map(self.process_document, documents))
        else:
            outcomes = [self.process_document(doc) for doc in documents]

        for result, logs in outcomes:
            report.results.append(result)
            report.logs.extend(logs)

        report.logs.append("Process complete.")
        stats = report.get_statistics()
        logger.info(
            f"Batch complete: {stats['processed']}/{stats['total']} processed, "
            f"{stats['ignored']} ignored"
        )
        return report

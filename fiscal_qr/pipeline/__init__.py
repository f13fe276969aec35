"""
Pipeline Module.

Per-document extraction and the full extraction -> assembly -> injection
chain over batches of documents.
"""

from .settings import PipelineSettings
from .pipeline import ExtractionPipeline, select_qr_payload
from .processor import FiscalQRProcessor, BatchReport

__all__ = [
    'PipelineSettings',
    'ExtractionPipeline',
    'select_qr_payload',
    'FiscalQRProcessor',
    'BatchReport',
]

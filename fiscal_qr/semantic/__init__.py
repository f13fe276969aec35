"""
Semantic Extraction Module.

Heuristic derivation of fiscal fields (NIFs, issue date, total amount)
from unstructured document text.
"""

from .semantic_record import SemanticRecord
from .extractor import SemanticExtractor, extract_semantic_data

__all__ = ['SemanticRecord', 'SemanticExtractor', 'extract_semantic_data']

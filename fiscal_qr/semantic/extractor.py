"""
Semantic Extractor Module.

Derives fiscal fields from raw document text with a small ordered set of
independent regular-expression matchers, one per field group. Matchers
share no scan state; each runs over the full text.

Patterns (Portuguese fiscal documents):
    - NIF: 9 consecutive digits (first = issuer, second = acquirer)
    - Date: YYYY-MM-DD, DD-MM-YYYY or DD/MM/YYYY (first match)
    - Total: total / montante / valor / a pagar followed by an amount and
      a currency marker (first match)
"""

import re
from typing import Callable, Dict, List, Optional, Tuple

from fiscal_qr.utils.logger import get_logger
from .semantic_record import SemanticRecord

# Initialize module logger
logger = get_logger(__name__)


TAX_ID_PATTERN = re.compile(r'\b[0-9]{9}\b')

DATE_PATTERN = re.compile(
    r'\b[0-9]{4}-[0-9]{2}-[0-9]{2}\b'
    r'|\b[0-9]{2}-[0-9]{2}-[0-9]{4}\b'
    r'|\b[0-9]{2}/[0-9]{2}/[0-9]{4}\b'
)

TOTAL_PATTERN = re.compile(
    r'(?:total|montante|valor|a pagar)[:\s]*([0-9.,]+)\s*(?:€|EUR)',
    re.IGNORECASE
)


def match_tax_ids(text: str) -> Dict[str, Optional[str]]:
    """
    First two 9-digit sequences in textual order.

    Identical sequences are not deduplicated: a document that repeats the
    issuer NIF yields the same value for both fields.
    """
    matches = TAX_ID_PATTERN.findall(text)
    return {
        'issuer_tax_id': matches[0] if len(matches) > 0 else None,
        'acquirer_tax_id': matches[1] if len(matches) > 1 else None,
    }


def match_issue_date(text: str) -> Dict[str, Optional[str]]:
    """First date-shaped substring; no calendar validation."""
    match = DATE_PATTERN.search(text)
    return {'issue_date': match.group(0) if match else None}


def match_total_amount(text: str) -> Dict[str, Optional[str]]:
    """Amount after the first total keyword, keeping only digits, '.' and ','."""
    match = TOTAL_PATTERN.search(text)
    if match is None:
        return {'total_amount': None}

    amount = re.sub(r'[^0-9.,]', '', match.group(1))
    return {'total_amount': amount or None}


# Applied in order; later matchers never see earlier results.
DEFAULT_MATCHERS: Tuple[Callable[[str], Dict[str, Optional[str]]], ...] = (
    match_tax_ids,
    match_issue_date,
    match_total_amount,
)


class SemanticExtractor:
    """
    Composes field matchers into a single record builder.

    Attributes:
        matchers: Ordered callables mapping text to partial field dicts

    Example:
        >>> extractor = SemanticExtractor()
        >>> record = extractor.extract("NIF 123456789 Total: 12,50 €")
        >>> record.issuer_tax_id, record.total_amount
        ('123456789', '12,50')
    """

    def __init__(
        self,
        matchers: Optional[List[Callable[[str], Dict[str, Optional[str]]]]] = None
    ) -> None:
        self.matchers = tuple(matchers) if matchers is not None else DEFAULT_MATCHERS

    def extract(self, text: str) -> SemanticRecord:
        """
        Build a SemanticRecord from raw text.

        Args:
            text: Full document text (embedded PDF text or OCR output).

        Returns:
            SemanticRecord with every field that matched; absent otherwise.
        """
        fields: Dict[str, Optional[str]] = {}
        text = text or ""

        for matcher in self.matchers:
            fields.update(matcher(text))

        record = SemanticRecord(**fields)
        logger.debug(f"Semantic extraction: {record}")
        return record


_default_extractor = SemanticExtractor()


def extract_semantic_data(text: str) -> SemanticRecord:
    """Extract a SemanticRecord with the default matchers."""
    return _default_extractor.extract(text)

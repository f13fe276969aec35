"""
Semantic Record Data Class.

Holds the candidate fiscal fields derived from a document's text. Every
field is best-effort and may be absent.
"""

from dataclasses import dataclass, asdict
from typing import Dict, List, Optional


@dataclass(frozen=True)
class SemanticRecord:
    """
    Fiscal fields extracted from unstructured text.

    Attributes:
        issuer_tax_id: First 9-digit NIF found in the text
        acquirer_tax_id: Second 9-digit NIF found in the text
        issue_date: First date-shaped substring, verbatim
        total_amount: Amount following a total keyword, currency stripped

    Example:
        >>> record = SemanticRecord(issuer_tax_id="123456789", total_amount="50.00")
        >>> record.missing_fields
        ['acquirer_tax_id', 'issue_date']
    """
    issuer_tax_id: Optional[str] = None
    acquirer_tax_id: Optional[str] = None
    issue_date: Optional[str] = None
    total_amount: Optional[str] = None

    @property
    def missing_fields(self) -> List[str]:
        """Names of the fields that were not found."""
        return [k for k, v in self.to_dict().items() if not v]

    def is_empty(self) -> bool:
        """True when no field was found."""
        return len(self.missing_fields) == len(self.to_dict())

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)

    def __repr__(self) -> str:
        return (
            f"SemanticRecord(issuer={self.issuer_tax_id}, "
            f"acquirer={self.acquirer_tax_id}, "
            f"date={self.issue_date}, total={self.total_amount})"
        )

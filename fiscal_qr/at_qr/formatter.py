"""
AT QR Field Formatter.

Builds the fiscal QR-code string defined by the Portuguese tax authority
(Portaria 195/2020): KEY:VALUE pairs joined by '*', keys in a fixed order.

    A:NIF*B:NIF*C:PAIS*D:TIPO*E:ESTADO*F:YYYYMMDD*G:ID*H:ATCUD*I1:...*O:TOTAL
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import List, Optional, Tuple, Union

Amount = Union[Decimal, int, float, str]

TWO_PLACES = Decimal("0.01")

# Emission order of the encoded string
FIELD_ORDER: Tuple[str, ...] = (
    'A', 'B', 'C', 'D', 'E', 'F', 'G', 'H',
    'I1', 'I3', 'I4', 'I5', 'I6', 'I7', 'I8',
    'N', 'O',
)

MONETARY_KEYS = frozenset({'I1', 'I3', 'I4', 'I5', 'I6', 'I7', 'I8', 'N', 'O'})


@dataclass(frozen=True)
class ATQRFields:
    """
    Input of the AT QR formatter.

    Attributes:
        issuer_tax_id: A - NIF of the issuer
        acquirer_tax_id: B - NIF of the acquirer
        acquirer_country: C - country of the acquirer
        document_type: D - document type code (FT, FS, ...)
        document_status: E - document status (N = normal)
        issue_date: F - emission date, YYYY-MM-DD
        document_id: G - unique document identifier
        atcud: H - ATCUD validation code
        exempt_base: I1 - tax base exempt from VAT
        reduced_rate_base: I3 - tax base at the reduced rate
        reduced_rate_vat: I4 - VAT at the reduced rate
        intermediate_rate_base: I5 - tax base at the intermediate rate
        intermediate_rate_vat: I6 - VAT at the intermediate rate
        normal_rate_base: I7 - tax base at the normal rate
        normal_rate_vat: I8 - VAT at the normal rate
        total_tax: N - total VAT
        document_total: O - document total including taxes
        withholding_tax: withholding at source; not part of the emitted keys
    """
    issuer_tax_id: str
    acquirer_tax_id: str
    acquirer_country: str
    document_type: str
    document_status: str
    issue_date: str
    document_id: str
    atcud: str
    exempt_base: Amount
    reduced_rate_base: Amount
    reduced_rate_vat: Amount
    intermediate_rate_base: Amount
    intermediate_rate_vat: Amount
    normal_rate_base: Amount
    normal_rate_vat: Amount
    total_tax: Amount
    document_total: Amount
    withholding_tax: Optional[Amount] = None


def format_amount(value: Amount) -> str:
    """
    Render a monetary value with exactly two decimals, rounding half up.

    Example:
        >>> format_amount(50)
        '50.00'
        >>> format_amount("12.345")
        '12.35'
    """
    try:
        number = Decimal(str(value))
        with localcontext() as ctx:
            # Integer digits, a rounding carry and the two decimals
            if number.is_finite():
                ctx.prec = max(ctx.prec, number.adjusted() + 4)
            return str(number.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # Non-numeric and infinite input render as NaN
        return "NaN"


def format_date(value: str) -> str:
    """Strip '-' separators; other date shapes are passed through."""
    return value.replace('-', '')


def field_pairs(fields: ATQRFields) -> List[Tuple[str, str]]:
    """Ordered (key, value) pairs of the encoded string."""
    values = {
        'A': fields.issuer_tax_id,
        'B': fields.acquirer_tax_id,
        'C': fields.acquirer_country,
        'D': fields.document_type,
        'E': fields.document_status,
        'F': format_date(fields.issue_date),
        'G': fields.document_id,
        'H': fields.atcud,
        'I1': fields.exempt_base,
        'I3': fields.reduced_rate_base,
        'I4': fields.reduced_rate_vat,
        'I5': fields.intermediate_rate_base,
        'I6': fields.intermediate_rate_vat,
        'I7': fields.normal_rate_base,
        'I8': fields.normal_rate_vat,
        'N': fields.total_tax,
        'O': fields.document_total,
    }

    pairs = []
    for key in FIELD_ORDER:
        value = values[key]
        if key in MONETARY_KEYS:
            value = format_amount(value)
        pairs.append((key, str(value)))
    return pairs


def format_atqr_string(fields: ATQRFields) -> str:
    """
    Format the AT QR-code string.

    Args:
        fields: Fully populated ATQRFields.

    Returns:
        'A:...*B:...*...*O:...' with keys in FIELD_ORDER.
    """
    return '*'.join(f"{key}:{value}" for key, value in field_pairs(fields))

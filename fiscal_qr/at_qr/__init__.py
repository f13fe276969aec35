"""
AT QR Module.

Field formatting and assembly of the fiscal QR-code string defined by the
Portuguese tax authority (AT).
"""

from .formatter import ATQRFields, FIELD_ORDER, format_atqr_string
from .normalizers import AmountNormalizer
from .assembler import QRAssembler, assemble, GENERIC_CONSUMER_TAX_ID

__all__ = [
    'ATQRFields',
    'FIELD_ORDER',
    'format_atqr_string',
    'AmountNormalizer',
    'QRAssembler',
    'assemble',
    'GENERIC_CONSUMER_TAX_ID',
]

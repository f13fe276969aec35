"""
Amount Normalizer Module.

Turns the free-form amount captured by the semantic extractor ("1.234,56",
"50.00", "12,5") into a Decimal usable by the AT QR formatter.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from fiscal_qr.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class AmountNormalizer:
    """
    Normalizes amount strings written in Portuguese or plain notation.

    A single comma followed by at most two digits is read as the decimal
    separator (European format); any other comma is a thousands separator.
    So "123,45" reads as 123.45, not as the 123 a parseFloat-style reader
    would keep (see "Amount parsing" in DESIGN.md).

    Example:
        >>> normalizer = AmountNormalizer()
        >>> normalizer.to_decimal("1.234,56")
        Decimal('1234.56')
        >>> normalizer.to_decimal("50.00")
        Decimal('50.00')
    """

    CURRENCY_SYMBOLS = ['€', '$', '£']
    CURRENCY_CODES = ['EUR', 'USD', 'GBP']

    def to_decimal(self, amount_str: Optional[str]) -> Optional[Decimal]:
        """
        Parse an amount string.

        Args:
            amount_str: Captured amount, possibly with separators/currency.

        Returns:
            Decimal value, or None when nothing numeric can be read.
        """
        if not amount_str:
            return None

        amount_str = self._clean_amount_string(amount_str)
        if not amount_str:
            return None

        amount_str = self._handle_european_format(amount_str)
        amount_str = amount_str.replace(',', '')

        try:
            return Decimal(amount_str)
        except InvalidOperation:
            return self._leading_number(amount_str)

    def _clean_amount_string(self, amount_str: str) -> str:
        """Remove currency markers and everything but digits and separators."""
        for symbol in self.CURRENCY_SYMBOLS:
            amount_str = amount_str.replace(symbol, '')

        for code in self.CURRENCY_CODES:
            amount_str = re.sub(rf'\b{code}\b', '', amount_str, flags=re.IGNORECASE)

        return re.sub(r'[^\d,.]', '', amount_str)

    def _handle_european_format(self, amount_str: str) -> str:
        """
        Convert European format (comma decimal) to dot decimal.

        Args:
            amount_str: Amount string.

        Returns:
            Amount string with '.' as the decimal separator.
        """
        if amount_str.count(',') == 1:
            comma_pos = amount_str.rfind(',')
            dot_pos = amount_str.rfind('.')

            if comma_pos > dot_pos:
                after_comma = amount_str[comma_pos + 1:]
                if len(after_comma) <= 2 and after_comma.isdigit():
                    amount_str = amount_str.replace('.', '')
                    amount_str = amount_str.replace(',', '.')

        return amount_str

    def _leading_number(self, amount_str: str) -> Optional[Decimal]:
        """Longest leading number, e.g. '1.2.3' -> 1.2."""
        match = re.match(r'\d+(?:\.\d+)?', amount_str)
        if match is None:
            logger.debug(f"Could not parse amount: {amount_str}")
            return None

        logger.debug(f"Amount '{amount_str}' read as {match.group(0)}")
        return Decimal(match.group(0))

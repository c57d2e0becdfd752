"""Decimal arithmetic utilities for the payments ledger.

All amounts and balances use decimal.Decimal. No float anywhere, so repeated
credits and debits never drift. Balance arithmetic and rounding run inside
ledger_context(): the interpreter default keeps only 28 significant digits.
"""

from contextlib import AbstractContextManager
from decimal import ROUND_HALF_EVEN, Context, Decimal, localcontext

DEFAULT_DECIMAL_PLACES = 4

# Largest instruction amount accepted (2**96 - 1, the 96-bit decimal mantissa)
MAX_AMOUNT = Decimal("79228162514264337593543950335")
MAX_FRACTION_DIGITS = 28

# Room for 29 integer + 28 fractional digits plus carry from summing many amounts
LEDGER_PRECISION = 100


def ledger_context() -> AbstractContextManager[Context]:
    return localcontext(prec=LEDGER_PRECISION, rounding=ROUND_HALF_EVEN)


def fraction_digits(amount: Decimal) -> int:
    """Significant fractional digits: Decimal('1.2300') -> 2, Decimal('5') -> 0."""
    _, digits, exponent = amount.as_tuple()
    if not isinstance(exponent, int) or exponent >= 0 or not any(digits):
        return 0
    trailing_zeros = 0
    for digit in reversed(digits):
        if digit != 0:
            break
        trailing_zeros += 1
    return max(-exponent - trailing_zeros, 0)


def amount_to_display(amount: Decimal) -> str:
    """Convert an amount to a message string: Decimal('3.0') -> '$3', Decimal('-1.50') -> '-$1.5'."""
    with ledger_context():
        normalized = abs(amount).normalize()
    if amount < 0 and normalized != 0:
        return f"-${normalized:f}"
    return f"${normalized:f}"


def quantize_amount(amount: Decimal, places: int = DEFAULT_DECIMAL_PLACES) -> Decimal:
    """Round to a fixed number of fractional digits (banker's rounding)."""
    if places < 0:
        raise ValueError(f"Decimal places must be >= 0, got {places}")
    with ledger_context():
        return amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_EVEN)


def amount_to_output(amount: Decimal, places: int = DEFAULT_DECIMAL_PLACES) -> str:
    """Render a balance for the report: Decimal('1.5') -> '1.5000' with 4 places."""
    quantized = quantize_amount(amount, places)
    if quantized == 0:
        quantized = abs(quantized)
    return f"{quantized:f}"

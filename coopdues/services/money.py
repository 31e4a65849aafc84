"""Decimal helpers for Turkish Lira amounts."""

from decimal import Decimal, InvalidOperation

from coopdues.services.errors import InvalidAmountError

CENT = Decimal("0.01")


def to_money(value, field: str = "amount") -> Decimal:
    """Convert user input into a two-decimal amount.

    Accepts Decimal, int, float or numeric string. Floats go through ``str``
    so ``0.1`` becomes ``Decimal("0.1")`` rather than its binary expansion.

    Raises:
        InvalidAmountError: If the value is not a finite number or has more
            than two fractional digits
    """
    if isinstance(value, bool) or value is None:
        raise InvalidAmountError(f"{field} must be a number, got {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise InvalidAmountError(f"{field} is not a valid amount: {value!r}") from e

    if not amount.is_finite():
        raise InvalidAmountError(f"{field} must be finite, got {value!r}")
    try:
        quantized = amount.quantize(CENT)
    except InvalidOperation as e:
        raise InvalidAmountError(f"{field} is too large: {value!r}") from e
    if amount != quantized:
        raise InvalidAmountError(f"{field} has more than two decimal places: {value!r}")
    return quantized


def to_minor_units(amount: Decimal) -> int:
    """Return the amount in kuruş."""
    return int(amount.quantize(CENT) * 100)


def from_minor_units(minor: int) -> Decimal:
    """Return a kuruş count as a two-decimal Lira amount."""
    return (Decimal(minor) / 100).quantize(CENT)


__all__ = ["CENT", "to_money", "to_minor_units", "from_minor_units"]

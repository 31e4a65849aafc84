"""Turkish amount-to-words conversion for payment receipts.

Usage:
    from coopdues.services.amount_words import format_amount_as_words

    format_amount_as_words(Decimal("1250.50"))
    # "Bin İki Yüz Elli Türk Lirası, Elli Kuruş"

Two conventions of printed receipts are kept:
"Bir Yüz" and "Bir Bin" are written as bare "Yüz" / "Bin", and a kuruş part
that rounds up to 100 is clamped to 99 instead of carrying into the Lira.
"""

from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal

UNITS = ["", "Bir", "İki", "Üç", "Dört", "Beş", "Altı", "Yedi", "Sekiz", "Dokuz"]
TENS = ["", "On", "Yirmi", "Otuz", "Kırk", "Elli", "Altmış", "Yetmiş", "Seksen", "Doksan"]
SCALES = ["", "Bin", "Milyon", "Milyar", "Trilyon"]
HUNDRED = "Yüz"
ZERO = "Sıfır"
MAJOR_UNIT = "Türk Lirası"
MINOR_UNIT = "Kuruş"

# Largest integer part with a scale word
MAX_MAJOR = 10 ** (3 * len(SCALES)) - 1


def convert_group(n: int) -> str:
    """Spell out a number between 0 and 999."""
    hundreds, rest = divmod(n, 100)
    tens, ones = divmod(rest, 10)

    words = []
    if hundreds > 0:
        if hundreds > 1:
            words.append(UNITS[hundreds])
        words.append(HUNDRED)
    if tens > 0:
        words.append(TENS[tens])
    if ones > 0:
        words.append(UNITS[ones])
    return " ".join(words)


def split_amount(amount: Decimal) -> tuple[int, int]:
    """Split an amount into Lira and kuruş, applying the 99 kuruş clamp."""
    major = amount.to_integral_value(rounding=ROUND_FLOOR)
    minor = ((amount - major) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(major), min(int(minor), 99)


def format_amount_as_words(amount) -> str:
    """Write a non-negative amount out in Turkish words.

    Args:
        amount: Decimal, int, float or numeric string

    Returns:
        Words followed by "Türk Lirası", plus ", <words> Kuruş" when the
        kuruş part is non-zero

    Raises:
        ValueError: If the amount is negative, not finite, or beyond trillions
    """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    if not value.is_finite() or value < 0:
        raise ValueError(f"Amount must be a non-negative number, got {amount!r}")

    major, minor = split_amount(value)
    if major > MAX_MAJOR:
        raise ValueError(f"Amount too large to write out: {amount!r}")

    if major == 0 and minor == 0:
        return f"{ZERO} {MAJOR_UNIT}"

    digits = str(major)
    digits = digits.zfill(-(-len(digits) // 3) * 3)
    groups = [int(digits[i : i + 3]) for i in range(0, len(digits), 3)]

    parts = []
    for position, group in enumerate(groups):
        scale_index = len(groups) - 1 - position
        if group == 0:
            continue
        if scale_index == 1 and group == 1:
            parts.append(SCALES[1])
        elif scale_index > 0:
            parts.append(f"{convert_group(group)} {SCALES[scale_index]}")
        else:
            parts.append(convert_group(group))

    result = " ".join(parts + [MAJOR_UNIT])
    if minor > 0:
        result += f", {convert_group(minor)} {MINOR_UNIT}"
    return result


__all__ = ["format_amount_as_words", "convert_group", "split_amount"]

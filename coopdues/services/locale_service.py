"""Locale-aware number and date formatting for printed documents.

Uses the babel library. The locale comes from the ``LOCALE`` setting
(default: tr_TR), so receipts print ``1.234,50`` and ``30.04.2025``.

Example:
    >>> from coopdues.services.locale_service import format_amount, format_local_date
    >>> format_amount(Decimal("1234.5"))
    '1.234,50'
    >>> format_local_date(date(2025, 4, 30))
    '30.04.2025'
"""

import logging
from datetime import date
from decimal import Decimal

from babel import Locale, UnknownLocaleError
from babel.dates import format_date as babel_format_date
from babel.numbers import format_decimal as babel_format_decimal

from coopdues.config import get_settings

logger = logging.getLogger(__name__)

# Default locale if the LOCALE setting is invalid
DEFAULT_LOCALE = "tr_TR"

AMOUNT_PATTERN = "#,##0.00"
DATE_PATTERN = "dd.MM.yyyy"


def _get_locale() -> str:
    """Get locale from settings with validation and fallback.

    Returns:
        Valid locale string (e.g., 'tr_TR')
    """
    locale_str = get_settings().locale
    try:
        Locale.parse(locale_str)
        return locale_str
    except (UnknownLocaleError, ValueError) as e:
        logger.warning(
            "Invalid LOCALE '%s': %s. Falling back to '%s'", locale_str, e, DEFAULT_LOCALE
        )
        return DEFAULT_LOCALE


LOCALE = _get_locale()


def format_amount(amount: Decimal) -> str:
    """Format an amount with the locale's separators and two decimals.

    Example:
        >>> format_amount(Decimal("600"))
        '600,00'
    """
    return babel_format_decimal(amount, format=AMOUNT_PATTERN, locale=LOCALE)


def format_local_date(value: date) -> str:
    return babel_format_date(value, format=DATE_PATTERN, locale=LOCALE)


__all__ = ["LOCALE", "format_amount", "format_local_date"]

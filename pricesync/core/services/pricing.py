"""Price text normalisation.

Spreadsheet exports carry prices such as ``"$ 17,950"``, ``"10.00"`` or
``" 1,234.5 "``. :func:`parse_price` turns them into an exact integer amount
under one of two :class:`PriceUnits` policies and returns ``None`` for anything
it cannot read.
"""

from __future__ import annotations

import re
import unicodedata
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from pricesync.core.models import PriceUnits

_DECIMAL_RE = re.compile(r"\+?(?:\d+\.?\d*|\.\d+)", re.ASCII)
_INTEGER_RE = re.compile(r"\+?\d+", re.ASCII)
_GROUPING = {",", "'", "_"}
_HUNDRED = Decimal(100)


def clean_price_text(text: str) -> str:
    """Drop currency symbols, whitespace and grouping separators."""
    return "".join(
        char
        for char in text
        if not char.isspace() and char not in _GROUPING and unicodedata.category(char) != "Sc"
    )


def parse_price(text: Any, units: PriceUnits = PriceUnits.MINOR_UNIT_ROUNDED) -> int | None:
    """Parse ``text`` into an integer amount, or ``None`` when it is not a price.

    Args:
        text: raw cell value.
        units: ``MINOR_UNIT_ROUNDED`` reads a decimal major-unit amount and
            returns minor units rounded half-up (``"$10.005"`` -> ``1001``).
            ``MAJOR_UNIT_INTEGER`` also drops dots and reads the remaining
            digits as-is (``"17.950"`` -> ``17950``).
    """
    if text is None:
        return None
    cleaned = clean_price_text(str(text))
    if not cleaned:
        return None

    if units is PriceUnits.MAJOR_UNIT_INTEGER:
        digits = cleaned.replace(".", "")
        if not _INTEGER_RE.fullmatch(digits):
            return None
        return int(digits)

    if not _DECIMAL_RE.fullmatch(cleaned):
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    return int((value * _HUNDRED).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_minor_units(amount: int) -> str:
    """Render a minor-unit amount as major-unit text (``1234`` -> ``"12.34"``)."""
    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {amount}")
    return f"{amount // 100}.{amount % 100:02d}"

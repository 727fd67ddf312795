"""
Conversion between human-readable decimal amounts and atomic token units.

Python ``int`` values are treated as already-atomic amounts; ``str``,
``float`` and ``Decimal`` values are human-readable decimals that get scaled
by ``10 ** decimals``.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Union

from .errors import InvalidAmountFormat

Amount = Union[str, int, float, Decimal]

_DECIMAL_RE = re.compile(r"^([0-9]*)(?:\.([0-9]*))?$")
_INTEGER_RE = re.compile(r"[0-9]+")


def to_decimal_string(amount: Amount) -> str:
    """Normalize an amount into a plain decimal string."""
    if isinstance(amount, str):
        return amount
    if isinstance(amount, float):
        # repr gives the shortest round-trip form; Decimal drops the exponent
        return format(Decimal(repr(amount)), "f")
    if isinstance(amount, Decimal):
        return format(amount, "f")
    return str(amount)


def parse_units(value: str, decimals: int) -> int:
    """Parse a non-negative decimal string into an integer scaled by ``10 ** decimals``."""
    if decimals < 0:
        raise InvalidAmountFormat(f"Token decimals must be non-negative, got {decimals}")

    text = value.strip()
    match = _DECIMAL_RE.match(text)
    if not match or not (match.group(1) or match.group(2)):
        raise InvalidAmountFormat(f"Invalid decimal amount: {value!r}")

    whole, fraction = match.group(1) or "0", match.group(2) or ""
    if len(fraction) > decimals:
        if fraction[decimals:].strip("0"):
            raise InvalidAmountFormat(
                f"Amount {value!r} has more than {decimals} fractional digits"
            )
        fraction = fraction[:decimals]

    return int(whole) * 10 ** decimals + int(fraction.ljust(decimals, "0") or "0")


def to_atomic(amount: Amount, decimals: int) -> int:
    """Convert an amount into atomic units; ``int`` input is returned unchanged."""
    if isinstance(amount, bool):
        raise InvalidAmountFormat(f"Invalid amount: {amount!r}")
    if isinstance(amount, int):
        return amount
    return parse_units(to_decimal_string(amount), decimals)


def format_units(value: int, decimals: int) -> str:
    """Render an atomic integer as a decimal string, dropping trailing zeros."""
    negative = value < 0
    digits = str(abs(value)).rjust(decimals + 1, "0")
    if decimals:
        whole, fraction = digits[:-decimals], digits[-decimals:].rstrip("0")
    else:
        whole, fraction = digits, ""
    text = f"{whole}.{fraction}" if fraction else whole
    return f"-{text}" if negative else text


def parse_integer_amount(amount: Amount) -> int:
    """Interpret an amount that is already expressed in atomic units."""
    if isinstance(amount, bool):
        raise InvalidAmountFormat(f"Invalid amount: {amount!r}")
    if isinstance(amount, int):
        return amount
    if isinstance(amount, (float, Decimal)):
        value = Decimal(repr(amount)) if isinstance(amount, float) else amount
        if not value.is_finite() or value < 0 or value != value.to_integral_value():
            raise InvalidAmountFormat(f"Atomic amount must be a non-negative integer: {amount!r}")
        return int(value)
    text = amount.strip()
    if not _INTEGER_RE.fullmatch(text):
        raise InvalidAmountFormat(f"Atomic amount must be a non-negative integer: {amount!r}")
    return int(text)

"""Amount parsing utilities.

Ledger amounts are whole currency units; fractions are truncated toward zero.
"""

from decimal import Decimal, InvalidOperation
from typing import Any
import re


def to_whole_units(value: Any) -> int:
    """Convert a stored amount to an int, truncating toward zero.

    Missing, non-numeric and non-finite values become 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = Decimal(value) if isinstance(value, int) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return 0
    if not number.is_finite():
        return 0
    return int(number)


_NOISE = re.compile(r"[$€£¥₽\s,]")


def parse_amount(text: str) -> int:
    """Read an amount given on the command line as whole units.

    Currency symbols, spaces and comma separators are ignored, so "5 000",
    "₽5000" and "5,000" are all 5000. Fractions are truncated ("12.9" is 12)
    and an amount in parentheses is negative ("(300)" is -300).

    Raises:
        ValueError: If nothing numeric is left after cleanup
    """
    cleaned = (text or "").strip()
    if not cleaned:
        raise ValueError("Empty amount string")

    negative = cleaned[0] == "(" and cleaned[-1] == ")"
    if negative:
        cleaned = cleaned[1:-1]
    cleaned = _NOISE.sub("", cleaned)

    try:
        number = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{text}'")
    if not number.is_finite():
        raise ValueError(f"Could not parse amount '{text}': not a finite number")

    whole = int(number)
    return -whole if negative else whole


def digits_amount(text: str) -> int:
    """Read an amount field as typed, keeping digits only ("5 000 ₽" -> 5000).

    An entry form asks for a magnitude and picks the sign from the took/gave
    mode, so anything that is not a digit is ignored. Empty input is 0.
    """
    digits = re.sub(r"\D", "", text or "")
    return int(digits) if digits else 0

# app/utils/forms.py
import math
import re
from datetime import date
from typing import Any, Optional

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_HEX = re.compile(r"\s*([+-]?)0[xX]([0-9a-fA-F]*)")
_ISO_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")

# ============================================================
# Form value parsing
# ============================================================

def strip_spaces(value: str) -> str:
    """Trim leading/trailing space characters only; tabs and newlines stay"""
    return value.strip(" ")


def parse_int(value: Any) -> Optional[int]:
    """
    Lenient integer parse used for form and prompt input.
    Reads the leading integer of a string ("42abc" -> 42, "7.9" -> 7,
    "0x10" -> 16), truncates numbers (7.5 -> 7), None when there is none.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None
    match = _LEADING_HEX.match(value)
    if match:
        sign, digits = match.groups()
        if not digits:
            return None
        return -int(digits, 16) if sign == "-" else int(digits, 16)
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def parse_iso_date(value: Any) -> Optional[date]:
    """YYYY-MM-DD to a date, None when it is not a real calendar date"""
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    match = _ISO_DATE.fullmatch(value.strip())
    if not match:
        return None
    try:
        return date(*(int(part) for part in match.groups()))
    except ValueError:
        return None

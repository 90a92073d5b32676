"""Utility helper functions"""

import math
import re
import uuid
from typing import Any, Optional

from gradegoal.utils.constants import FALLBACK_EXPORT_NAME, MAX_PERCENT, MIN_PERCENT

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_ -]")


def new_id() -> str:
    """Generate a fresh opaque identifier"""
    return str(uuid.uuid4())


def to_number_or_none(value: Any) -> Optional[float]:
    """
    Resolve a raw field value to a finite float or None

    Blank strings, None, booleans, non-numeric text, NaN, infinities and
    integers too large for a float all resolve to None. Numeric strings
    are parsed.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def clamp_percent(value: Any) -> Optional[float]:
    """Clamp an entered value to [0, 100]; blank or non-numeric input stays unset"""
    number = to_number_or_none(value)
    if number is None:
        return None
    return min(MAX_PERCENT, max(MIN_PERCENT, number))


def is_finite_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def format_pct(value: Any) -> str:
    """Format a percentage with one decimal, or a dash when unavailable"""
    if not is_finite_number(value):
        return "—"
    return f"{value:.1f}%"


def format_need(value: Optional[float]) -> str:
    """Format a per-item need pill value as a whole percentage"""
    if not is_finite_number(value):
        return "—"
    return f"{value:.0f}%"


def format_number(value: Optional[float]) -> str:
    """Render 47.0 as '47' and 47.5 as '47.5'; unset values render empty"""
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def sanitize_filename(name: Optional[str]) -> str:
    """Keep letters, digits, space, hyphen and underscore; fall back to 'course'"""
    cleaned = _UNSAFE_FILENAME_CHARS.sub("", str(name or FALLBACK_EXPORT_NAME)).strip()
    return cleaned or FALLBACK_EXPORT_NAME

"""
Feet/Inch Height Parsing and Formatting.

Converts free-form field heights ("35'6\"", "35ft 6in", "15.5") to
decimal feet and formats decimal feet back to tick-mark or verbose text.

The formatted strings are embedded verbatim in downstream reports:
- tick marks: 35' 6"
- verbose:    35ft 6in
- unknown:    --
"""

import math
import re
from typing import Any, Optional

UNKNOWN_HEIGHT = "--"

# 10", 10'', 10""  or 10in
_INCHES_ONLY = re.compile(r"^(\d+(?:\.\d+)?)\s*(?:\"\"|''|\"|in)$")
# 15' or 15ft
_FEET_ONLY = re.compile(r"^(\d+(?:\.\d+)?)\s*(?:'|ft)$")
# 35'6", 35' 6", 35ft 6in, 35 ft 6 in
_FEET_AND_INCHES = re.compile(
    r"^(\d+(?:\.\d+)?)\s*(?:'|ft)\s*(\d+(?:\.\d+)?)\s*(?:\"\"|''|\"|in)?$"
)
# 15, 15.5, -2 (whole string only)
_BARE_NUMBER = re.compile(r"^-?\d+(?:\.\d+)?$")


def parse_feet(value: Any) -> Optional[float]:
    """
    Parse a height into decimal feet.

    Accepts a number (returned unchanged) or a string in one of the
    inches-only, feet-only, combined feet+inches or bare-number forms.
    A bare number is taken as feet.

    Args:
        value: Number or height string

    Returns:
        Decimal feet, or None for empty/unparseable input. Never raises.

    Example:
        >>> parse_feet("35' 6\\"")
        35.5
        >>> parse_feet("6in")
        0.5
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else value

    s = str(value).strip().lower()
    if s == "":
        return None

    m = _INCHES_ONLY.match(s)
    if m:
        return float(m.group(1)) / 12

    m = _FEET_ONLY.match(s)
    if m:
        return float(m.group(1))

    m = _FEET_AND_INCHES.match(s)
    if m:
        return float(m.group(1)) + float(m.group(2)) / 12

    # Bare number, assumed feet
    if not _BARE_NUMBER.match(s):
        return None
    n = float(s)
    return n if math.isfinite(n) else None


def _split_feet_inches(feet: Any):
    """
    Split decimal feet into (sign, whole feet, rounded inches).

    Inches round half-up; a rounding result of 12 carries into the feet.
    Returns None when the value is missing or not a finite number.
    """
    if feet is None or isinstance(feet, bool):
        return None
    try:
        value = float(feet)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None

    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    ft = math.floor(magnitude)
    inch = math.floor((magnitude - ft) * 12 + 0.5)
    if inch == 12:
        ft += 1
        inch = 0
    return sign, int(ft), int(inch)


def format_feet_inches_tick_marks(feet: Any) -> str:
    """Format decimal feet as ``<ft>' <in>"``, or ``--`` when unknown."""
    parts = _split_feet_inches(feet)
    if parts is None:
        return UNKNOWN_HEIGHT
    sign, ft, inch = parts
    return f"{sign}{ft}' {inch}\""


def format_feet_inches_verbose(feet: Any) -> str:
    """Format decimal feet as ``<ft>ft <in>in``, or ``--`` when unknown."""
    parts = _split_feet_inches(feet)
    if parts is None:
        return UNKNOWN_HEIGHT
    sign, ft, inch = parts
    return f"{sign}{ft}ft {inch}in"


def format_feet_inches(feet: Any, *, tick_marks: bool = False, compact: bool = False) -> str:
    """
    Format decimal feet for display.

    Args:
        feet: Decimal feet
        tick_marks: Use ``35' 6"`` instead of ``35ft 6in``
        compact: Also selects the tick-mark form

    Returns:
        Formatted height string
    """
    if tick_marks or compact:
        return format_feet_inches_tick_marks(feet)
    return format_feet_inches_verbose(feet)


def feet_to_inches(feet: Optional[float]) -> Optional[int]:
    """Convert decimal feet to whole inches (half-up), keeping None."""
    if feet is None:
        return None
    return int(math.floor(feet * 12 + 0.5))

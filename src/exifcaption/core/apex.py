"""APEX (Additive System of Photographic Exposure) conversions.

EXIF stores shutter speed and aperture as logarithmic APEX values:
``Tv = -log2(t)`` for an exposure of *t* seconds and ``Av = 2 * log2(N)``
for an f-number *N*. These helpers turn whole-stop APEX values back into the
notation printed on cameras.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Tuple

from .errors import ValueConversionError

__all__ = [
    "SHUTTER_SPEEDS",
    "aperture_from_apex",
    "rational_pair",
    "rational_to_float",
    "round_apex",
    "shutter_speed_from_apex",
]

# Whole-stop shutter speeds, keyed by Tv.
SHUTTER_SPEEDS: Dict[int, str] = {
    -5: "30",
    -4: "15",
    -3: "8",
    -2: "4",
    -1: "2",
    0: "1",
    1: "1/2",
    2: "1/4",
    3: "1/8",
    4: "1/15",
    5: "1/30",
    6: "1/60",
    7: "1/125",
    8: "1/250",
    9: "1/500",
    10: "1/1000",
    11: "1/2000",
    12: "1/4000",
    13: "1/8000",
}


def shutter_speed_from_apex(apex: int) -> str:
    """Return the shutter speed label for *apex*, or ``""`` outside -5..13."""

    return SHUTTER_SPEEDS.get(apex, "")


def aperture_from_apex(apex: int) -> str:
    """Return the f-number ``2 ** (apex / 2)`` as a decimal string.

    Values too large for a float saturate to ``"+Inf"``.
    """

    try:
        value = 2.0 ** (apex / 2)
    except OverflowError:
        value = math.inf if apex > 0 else 0.0
    if math.isinf(value):
        return "+Inf"
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def round_apex(value: float) -> int:
    """Round to the nearest whole stop, ties away from zero."""

    return int(Decimal(value).to_integral_value(rounding=ROUND_HALF_UP))


def rational_pair(value: object, tag: str = "rational") -> Tuple[int, int]:
    """Validate an EXIF ``(numerator, denominator)`` pair."""

    if not isinstance(value, (tuple, list)) or len(value) != 2:
        raise ValueConversionError(tag, value, "expected a (numerator, denominator) pair")
    try:
        num, den = int(value[0]), int(value[1])
    except (TypeError, ValueError) as exc:
        raise ValueConversionError(tag, value, "non-integer component") from exc
    if den == 0:
        raise ValueConversionError(tag, value, "zero denominator")
    return num, den


def rational_to_float(value: object, tag: str = "rational") -> float:
    num, den = rational_pair(value, tag)
    return num / den

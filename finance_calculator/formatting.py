"""
Numeric Formatting

Pure helpers converting between numbers and the text the calculator
shows. Nothing in here keeps state or logs.

Display text follows the usual "shortest round-trip" rendering:
integral values have no trailing ".0", very large and very small
magnitudes switch to exponent notation (1e+21, 1e-7).
"""

import math
import re
from decimal import Decimal
from typing import Any

_EXPONENT_LOW = 1e-6
_EXPONENT_HIGH = 1e21
_EXPONENT_PADDING = re.compile(r"e([+-])0*(\d)")


def is_finite(value: float) -> bool:
    return not (math.isnan(value) or math.isinf(value))


def format_number(value: float) -> str:
    """
    Render a finite number for the display or a history entry.

    Raises:
        ValueError: If value is NaN or infinite. Callers are expected
            to turn those into an error state before formatting.
    """
    if not is_finite(value):
        raise ValueError(f"Cannot format non-finite value: {value}")

    if value == 0:
        return "0"  # also covers -0.0

    magnitude = abs(value)
    if magnitude < _EXPONENT_LOW or magnitude >= _EXPONENT_HIGH:
        return _EXPONENT_PADDING.sub(r"e\1\2", repr(value))

    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def parse_display(text: str) -> float:
    """
    Parse display text into a float.

    Returns NaN for anything that is not a number (e.g. the error
    marker) so that arithmetic on it is caught by the finiteness check.
    """
    try:
        return float(text)
    except (TypeError, ValueError):
        return math.nan


def coerce_number(value: Any) -> float:
    """
    Read a user-typed field as a float.

    Missing, empty, unparsable and non-finite input all become 0.0.
    Live recomputation must never fail because of a half-typed value.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        if isinstance(value, (int, float, Decimal)):
            number = float(value)
        else:
            number = float(str(value).strip())
    except (ValueError, OverflowError):
        return 0.0
    return number if is_finite(number) else 0.0


def coerce_count(value: Any) -> int:
    """Read a field as a whole count, truncating any fraction ("2.7" -> 2)."""
    return int(coerce_number(value))


def format_amount(value: float, places: int = 2) -> str:
    """Fixed-point rendering for money results ("30.75")."""
    if not is_finite(value):
        value = 0.0
    return f"{value:.{places}f}"

"""Normalization helpers.

Centralizes best-effort coercion of loosely typed JSON scalars. Every helper
here is total: it reports absence instead of raising.
"""

from __future__ import annotations

import math
from typing import Any


def coerce_float(value: Any) -> float | None:
    """Coerce a decoded JSON scalar to a finite float, or ``None`` when absent.

    Numbers and numeric strings (scientific notation included) are accepted.
    ``None``, booleans, containers, unparsable or padded strings and
    non-finite values are reported as absent.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            result = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        # Only plain decimal or scientific spellings; no padding or digit separators.
        if value != value.strip() or "_" in value:
            return None
        try:
            result = float(value)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(result):
        return None
    return result


def coerce_label(value: Any) -> str:
    """Coerce a value used as a label to a stripped string.

    Numbers are rendered; anything else that is not a string becomes ``""``.
    """
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return ""
    if isinstance(value, int):
        return str(value)
    number = coerce_float(value)
    if number is None:
        return ""
    return format_label_number(number)


def format_label_number(value: float) -> str:
    """Render a float for use as a label value.

    Integral values drop the trailing ``.0`` (``49.0`` -> ``"49"``); other
    values use the shortest round-trip representation.
    """
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)

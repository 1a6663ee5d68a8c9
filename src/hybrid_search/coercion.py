"""
Lenient conversion of loosely typed tool input into numbers and vectors.

Tool payloads come from JSON or from other tools, so numeric fields may arrive
as strings, booleans, ``None`` or garbage. These helpers never raise: anything
unusable becomes the fallback or is dropped.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any


def to_number(value: Any) -> float | None:
    """Return *value* as a finite float, or ``None`` when it is not one."""
    if value is None:
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
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
    return number if math.isfinite(number) else None


def clamp_number(value: Any, minimum: float, maximum: float, fallback: float) -> float:
    """Clamp *value* into [minimum, maximum], using *fallback* when unusable."""
    number = to_number(value)
    if number is None:
        return fallback
    return max(minimum, min(maximum, number))


def finite_floats(value: Any) -> tuple[float, ...]:
    """Keep the finite numeric entries of a list-like *value*."""
    if not isinstance(value, (list, tuple)):
        return ()
    numbers = (to_number(item) for item in value)
    return tuple(number for number in numbers if number is not None)


def coerce_text(value: Any) -> str:
    """Stringify *value*, treating ``None`` as empty."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def coerce_metadata(value: Any) -> dict[str, Any] | None:
    """Pass mappings through as plain dicts; drop anything else."""
    if isinstance(value, Mapping):
        return dict(value)
    return None


def round_to(value: float, decimals: int = 4) -> float:
    """Round to *decimals* places with halves going toward positive infinity.

    Non-finite input rounds to 0.0; values too large to scale are returned as-is.
    """
    if not math.isfinite(value):
        return 0.0
    factor = 10**decimals
    scaled = value * factor
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / factor

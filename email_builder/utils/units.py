"""Unit helpers for the CSS measurements found in email markup."""
from __future__ import annotations

import re
from typing import Optional

_PX_PATTERN = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*(?:px)?\s*$", re.IGNORECASE)


def px_to_int(value: Optional[str]) -> Optional[int]:
    """Convert ``"600px"`` (or a bare number) to an integer pixel count."""
    if not value:
        return None
    match = _PX_PATTERN.match(value)
    if match is None:
        return None
    return int(float(match.group(1)))


def format_number(value: float) -> str:
    """Print integral floats without a fractional part (``180.0`` -> ``180``)."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_percent(value: float) -> str:
    """Two decimal percentage used for gradient stop positions."""
    return f"{value:.2f}%"

"""Background value codec: CSS color or ``linear-gradient(...)`` <-> structured value.

Decoding never raises. Anything that is neither a valid color nor a valid
linear gradient decodes to :data:`INVALID` and the caller picks the default.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from email_builder.codec.colors import is_color
from email_builder.config.defaults import FALLBACK_BACKGROUND
from email_builder.utils.logger import get_logger
from email_builder.utils.text_normalizer import split_top_level
from email_builder.utils.units import format_number, format_percent

LOGGER = get_logger(__name__)

GRADIENT_PREFIX = "linear-gradient"
DEFAULT_ANGLE = 180.0
MIN_STOPS = 2

_ANGLE_PATTERN = re.compile(r"^(-?(?:\d+(?:\.\d*)?|\.\d+))deg$", re.IGNORECASE)
_STOP_PATTERN = re.compile(r"^(.*?)\s+(\d+(?:\.\d*)?|\.\d+)%$", re.DOTALL)


@dataclass(frozen=True, slots=True)
class SolidColor:
    color: str


@dataclass(frozen=True, slots=True)
class GradientStop:
    color: str
    position: float


@dataclass(frozen=True, slots=True)
class Gradient:
    """Linear gradient; stops stay in the order they were written."""

    angle: float
    stops: Tuple[GradientStop, ...]


class _Invalid:
    """Sentinel for values that are neither a color nor a gradient."""

    _instance: Optional["_Invalid"] = None

    def __new__(cls) -> "_Invalid":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "INVALID"


INVALID = _Invalid()

BackgroundValue = Union[SolidColor, Gradient]


def decode(value: Optional[str]) -> Union[SolidColor, Gradient, _Invalid]:
    """Classify a background declaration value."""
    if not value or not isinstance(value, str):
        return INVALID
    value = value.strip()
    if not value.lower().startswith(GRADIENT_PREFIX):
        return SolidColor(value) if is_color(value) else INVALID
    return _decode_gradient(value)


def encode(value: BackgroundValue) -> str:
    """Render a decoded value back to CSS; gradient stops are sorted by position."""
    if isinstance(value, SolidColor):
        return value.color
    stops = sorted(value.stops, key=lambda stop: stop.position)
    parts = ", ".join(f"{stop.color} {format_percent(stop.position)}" for stop in stops)
    return f"{GRADIENT_PREFIX}({format_number(value.angle)}deg, {parts})"


def resolve(value: Optional[str], default: str = FALLBACK_BACKGROUND) -> str:
    """Normalize a background value, substituting ``default`` when it is invalid."""
    decoded = decode(value)
    if decoded is INVALID:
        if value:
            LOGGER.debug("Invalid background value %r; using %s", value, default)
        return default
    return encode(decoded)  # type: ignore[arg-type]


def _decode_gradient(value: str) -> Union[Gradient, _Invalid]:
    start = value.find("(")
    end = value.rfind(")")
    if start == -1 or end <= start:
        return INVALID
    body = value[start + 1 : end].strip()
    if not body:
        return INVALID

    parts = [part.strip() for part in split_top_level(body, ",")]
    angle = DEFAULT_ANGLE
    angle_match = _ANGLE_PATTERN.match(parts[0])
    if angle_match:
        angle = float(angle_match.group(1))
        parts = parts[1:]
    if len(parts) < MIN_STOPS:
        return INVALID

    colors: List[str] = []
    positions: List[Optional[float]] = []
    for part in parts:
        parsed = _parse_stop(part)
        if parsed is None:
            return INVALID
        colors.append(parsed[0])
        positions.append(parsed[1])

    resolved = _fill_positions(positions)
    return Gradient(
        angle=angle,
        stops=tuple(GradientStop(color, position) for color, position in zip(colors, resolved)),
    )


def _parse_stop(part: str) -> Optional[Tuple[str, Optional[float]]]:
    match = _STOP_PATTERN.match(part)
    if match and is_color(match.group(1).strip()):
        return match.group(1).strip(), float(match.group(2))
    if is_color(part):
        return part, None
    return None


def _fill_positions(positions: List[Optional[float]]) -> List[float]:
    """Interpolate missing stop positions between anchors."""
    count = len(positions)
    if all(position is None for position in positions):
        return [index / (count - 1) * 100 for index in range(count)]

    filled = list(positions)
    if filled[0] is None:
        filled[0] = 0.0
    if filled[-1] is None:
        filled[-1] = 100.0

    last_index = 0
    for index in range(1, count):
        current = filled[index]
        if current is None:
            continue
        gap = index - last_index - 1
        if gap:
            before = float(filled[last_index])  # type: ignore[arg-type]
            step = (current - before) / (gap + 1)
            for offset in range(1, gap + 1):
                filled[last_index + offset] = before + offset * step
        last_index = index
    return [float(position) for position in filled]  # type: ignore[arg-type]

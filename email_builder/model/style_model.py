"""Document-wide presentation settings."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Union

from email_builder.config.defaults import (
    DEFAULT_BACKGROUND,
    DEFAULT_CONTENT_BACKGROUND,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_TEXT_COLOR,
    DEFAULT_WIDTH,
)

# Field name -> template JSON key.
_JSON_KEYS = {
    "background": "background",
    "content_background": "contentBackground",
    "font_family": "fontFamily",
    "font_size": "fontSize",
    "text_color": "textColor",
    "width": "width",
}


@dataclass(frozen=True, slots=True)
class GlobalStyle:
    """One instance per document; backgrounds accept colors or linear gradients."""

    background: str = DEFAULT_BACKGROUND
    content_background: str = DEFAULT_CONTENT_BACKGROUND
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: str = DEFAULT_FONT_SIZE
    text_color: str = DEFAULT_TEXT_COLOR
    width: int = DEFAULT_WIDTH

    def to_dict(self) -> Dict[str, Union[str, int]]:
        """Return the template JSON representation."""
        return {key: getattr(self, name) for name, key in _JSON_KEYS.items()}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, object]]) -> "GlobalStyle":
        """Build from template JSON, falling back to defaults for missing keys."""
        if not data:
            return cls()
        values: Dict[str, object] = {}
        for name, key in _JSON_KEYS.items():
            value = data.get(key)
            if value is None or value == "":
                continue
            if name == "width":
                try:
                    value = int(value)  # type: ignore[arg-type]
                except (TypeError, ValueError):
                    continue
            else:
                value = str(value)
            values[name] = value
        return cls(**values)  # type: ignore[arg-type]

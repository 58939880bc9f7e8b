"""Fallback values applied whenever imported or decoded data is missing."""
from __future__ import annotations

# Policy default for background values that decode as neither a color nor a gradient.
FALLBACK_BACKGROUND = "#ffffff"

DEFAULT_BACKGROUND = "#f1f5f9"
DEFAULT_CONTENT_BACKGROUND = "#ffffff"
DEFAULT_FONT_FAMILY = "Arial, sans-serif"
DEFAULT_FONT_SIZE = "16px"
DEFAULT_TEXT_COLOR = "#1e293b"
DEFAULT_WIDTH = 600

DEFAULT_VERTICAL_ALIGN = "top"
DEFAULT_ALIGN = "center"
DEFAULT_BUTTON_TEXT_COLOR = "#FFFFFF"
DEFAULT_HREF = "#"
DEFAULT_COLUMN_WIDTH = "100%"

"""Static catalogs shared by the serializer, the parser and the editing helpers."""
from __future__ import annotations

from typing import Dict, List, Mapping, Tuple, Union

StyleValue = Union[str, int, float]

SUPPORTED_SOCIAL_PLATFORMS: Tuple[str, ...] = (
    "Facebook",
    "Twitter",
    "Instagram",
    "LinkedIn",
    "YouTube",
    "Pinterest",
    "Website",
    "Email",
)

# Every icon URL carries this path segment; the parser keys social blocks on it.
SOCIAL_ICON_MARKER = "signature-social-icons"
_SOCIAL_ICON_BASE = f"https://cdn.emailbuilder.dev/{SOCIAL_ICON_MARKER}/circle"

SOCIAL_ICON_URLS: Dict[str, str] = {
    platform: f"{_SOCIAL_ICON_BASE}/{platform.lower()}.png" for platform in SUPPORTED_SOCIAL_PLATFORMS
}

SOCIAL_ICON_SIZE = 32

WEB_SAFE_FONTS: Tuple[str, ...] = ("Arial", "Verdana", "Georgia", "Times New Roman", "Courier New")

GOOGLE_FONTS: Tuple[str, ...] = WEB_SAFE_FONTS + (
    "Roboto",
    "Open Sans",
    "Lato",
    "Montserrat",
    "Oswald",
    "Source Sans Pro",
    "Raleway",
)

GOOGLE_FONTS_URL = "https://fonts.googleapis.com/css2?family={family}:wght@400;700&display=swap"

LAYOUT_PRESETS: Mapping[str, List[str]] = {
    "1 Column": ["100%"],
    "2 Columns (50/50)": ["50%", "50%"],
    "2 Columns (33/67)": ["33.33%", "66.67%"],
    "2 Columns (67/33)": ["66.67%", "33.33%"],
    "3 Columns (33/33/33)": ["33.33%", "33.33%", "33.33%"],
    "3 Columns (25/25/50)": ["25%", "25%", "50%"],
    "3 Columns (50/25/25)": ["50%", "25%", "25%"],
    "3 Columns (25/50/25)": ["25%", "50%", "25%"],
    "4 Columns (25/25/25/25)": ["25%", "25%", "25%", "25%"],
    "4 Columns (40/20/20/20)": ["40%", "20%", "20%", "20%"],
    "4 Columns (20/20/20/40)": ["20%", "20%", "20%", "40%"],
}

COMPONENT_DEFAULT_STYLES: Mapping[str, Dict[str, StyleValue]] = {
    "text": {
        "color": "#000000",
        "fontSize": "16px",
        "padding": "10px",
        "textAlign": "left",
        "fontWeight": "normal",
        "fontFamily": "Arial, sans-serif",
    },
    "image": {"padding": "10px", "textAlign": "center", "verticalAlign": "middle"},
    "button": {
        "backgroundColor": "#4F46E5",
        "color": "#FFFFFF",
        "padding": "12px 24px",
        "borderRadius": "4px",
        "textAlign": "center",
    },
    "divider": {"borderTop": "1px solid #cccccc", "padding": "10px 0"},
    "spacer": {"height": "20px"},
    "social": {"padding": "10px", "textAlign": "center"},
}

DEFAULT_TEXT = "This is a new text block. Click to edit."
DEFAULT_IMAGE_SRC = "https://picsum.photos/600/400"
DEFAULT_IMAGE_ALT = "Placeholder Image"
DEFAULT_BUTTON_TEXT = "Click Me"
DEFAULT_SOCIAL_PLATFORMS: Tuple[str, ...] = ("Facebook", "Twitter", "Instagram", "LinkedIn")

"""In-memory representation of the email template blocks."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

StyleValue = Union[str, int, float]
Style = Dict[str, StyleValue]

TEXT = "text"
IMAGE = "image"
BUTTON = "button"
DIVIDER = "divider"
SPACER = "spacer"
SOCIAL = "social"

ELEMENT_TYPES: Tuple[str, ...] = (TEXT, IMAGE, BUTTON, DIVIDER, SPACER, SOCIAL)


@dataclass(frozen=True, slots=True)
class TextContent:
    """Plain text; newlines become explicit line breaks on output.

    Markup such as ``<b>`` or ``<a>`` is escaped and shows up literally in the
    email, so rich inline formatting is not carried.
    """

    text: str = ""


@dataclass(frozen=True, slots=True)
class ImageContent:
    src: str = ""
    alt: str = ""


@dataclass(frozen=True, slots=True)
class ButtonContent:
    text: str = ""
    href: str = ""


@dataclass(frozen=True, slots=True)
class EmptyContent:
    """Content of dividers and spacers, which are styled boxes only."""


@dataclass(frozen=True, slots=True)
class SocialLink:
    platform: str
    href: str = ""


@dataclass(frozen=True, slots=True)
class SocialContent:
    links: Tuple[SocialLink, ...] = ()


ElementContent = Union[TextContent, ImageContent, ButtonContent, EmptyContent, SocialContent]


@dataclass(frozen=True, slots=True)
class Element:
    """Leaf content unit placed inside a column."""

    id: str
    type: str
    content: ElementContent
    style: Style = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Column:
    """Vertical stack of elements.

    ``vertical_align`` is the column-level alignment introduced by
    :func:`email_builder.editing.migrate_vertical_align`. Documents in the
    legacy shape leave it unset and keep the value on their elements.
    """

    id: str
    elements: Tuple[Element, ...] = ()
    style: Style = field(default_factory=dict)
    vertical_align: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Row:
    """Horizontal band of columns. Widths are not required to add up to 100%."""

    id: str
    columns: Tuple[Column, ...] = ()
    style: Style = field(default_factory=dict)

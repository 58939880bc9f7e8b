"""Common helpers shared by renderer implementations."""
from __future__ import annotations

import html
import re
from typing import Collection, Iterable, List, Mapping

from email_builder.config.catalogs import GOOGLE_FONTS, GOOGLE_FONTS_URL, WEB_SAFE_FONTS
from email_builder.model.document_model import Document

_UPPER_PATTERN = re.compile(r"([A-Z])")


def camel_to_kebab(name: str) -> str:
    """``borderTopColor`` -> ``border-top-color``."""
    return _UPPER_PATTERN.sub(r"-\1", name).lower()


def to_inline_style(style: Mapping[str, object], exclude: Collection[str] = ()) -> str:
    """Convert a camelCase style mapping into an inline CSS declaration list."""
    return "; ".join(
        f"{camel_to_kebab(key)}: {value}" for key, value in style.items() if key not in exclude
    )


def escape_attr(value: object) -> str:
    """Escape for a double-quoted attribute; single quotes in font stacks stay readable."""
    return html.escape(str(value), quote=False).replace('"', "&quot;")


def escape_text(value: object) -> str:
    return html.escape(str(value), quote=False)


def primary_font(family: object) -> str:
    """First family in a font stack, without quotes."""
    return str(family).split(",")[0].strip().strip("'\"").strip()


def referenced_fonts(document: Document) -> List[str]:
    """Distinct primary fonts in first-use order: global style first, then elements."""
    families: List[str] = [primary_font(document.styles.font_family)]
    for element in document.iter_elements():
        style = element.style if isinstance(element.style, Mapping) else {}
        family = style.get("fontFamily")
        if isinstance(family, str) and family:
            families.append(primary_font(family))
    return list(dict.fromkeys(name for name in families if name))


def font_links(fonts: Iterable[str]) -> List[str]:
    """Stylesheet links for catalog fonts that mail clients do not ship."""
    links = []
    for font in fonts:
        if font not in GOOGLE_FONTS or font in WEB_SAFE_FONTS:
            continue
        href = GOOGLE_FONTS_URL.format(family=font.replace(" ", "+"))
        links.append(f'<link href="{escape_attr(href)}" rel="stylesheet" type="text/css">')
    return links

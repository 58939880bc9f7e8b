"""Render the document model into email-client-safe HTML.

The output is table based with inline styles everywhere. The parser in
:mod:`email_builder.parser.document_parser` recognizes exactly the shapes
emitted here, so markup changes must be mirrored there.
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

from email_builder.codec.background import resolve
from email_builder.config.catalogs import SOCIAL_ICON_SIZE, SOCIAL_ICON_URLS
from email_builder.config.defaults import (
    DEFAULT_ALIGN,
    DEFAULT_BUTTON_TEXT_COLOR,
    DEFAULT_HREF,
    DEFAULT_VERTICAL_ALIGN,
)
from email_builder.model.document_model import Document, effective_vertical_align
from email_builder.model.elements import (
    BUTTON,
    DIVIDER,
    IMAGE,
    SOCIAL,
    SPACER,
    TEXT,
    Column,
    Element,
    Row,
)
from email_builder.renderer.utils import (
    escape_attr,
    escape_text,
    font_links,
    referenced_fonts,
    to_inline_style,
)
from email_builder.utils.logger import get_logger
from email_builder.utils.text_normalizer import to_line_breaks

LOGGER = get_logger(__name__)

PRESENTATION_TABLE = '<table border="0" cellpadding="0" cellspacing="0" role="presentation"'
FULL_WIDTH_TABLE = f'{PRESENTATION_TABLE} width="100%">'
IMAGE_BASE_STYLE = {"maxWidth": "100%", "height": "auto", "display": "block"}

# Rendered by the column cell instead of the element.
_COLUMN_LEVEL = ("verticalAlign",)


class HtmlRenderer:
    """Produce a complete HTML email from a :class:`Document` snapshot."""

    def __init__(self) -> None:
        self._element_renderers: Dict[str, Callable[[Element], str]] = {
            TEXT: self._render_text,
            IMAGE: self._render_image,
            BUTTON: self._render_button,
            DIVIDER: self._render_box,
            SPACER: self._render_box,
            SOCIAL: self._render_social,
        }

    def render(self, document: Document) -> str:
        body = "\n".join(self._render_row(row) for row in document.rows)
        return self._build_html(document, body)

    def write(self, document: Document, output_path: Path) -> None:
        output_path.write_text(self.render(document), encoding="utf-8")
        LOGGER.info("Wrote %d rows to %s", len(document.rows), output_path)

    # ------------------------------------------------------------------
    # Document skeleton
    def _build_html(self, document: Document, body: str) -> str:
        styles = document.styles
        width = styles.width
        background = resolve(styles.background)
        content_background = resolve(styles.content_background)
        links = "\n  ".join(font_links(referenced_fonts(document)))
        return f"""
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Your Email</title>
  {links}
  <style>
    body {{ margin: 0; padding: 0; }}
    table {{ border-collapse: collapse; }}
    img {{ display: block; }}
    @media screen and (max-width: {width}px) {{
      .container {{ width: 100% !important; }}
      .col {{ display: block !important; width: 100% !important; }}
    }}
  </style>
</head>
<body style="background: {escape_attr(background)}; margin: 0; padding: 0;">
  <table border="0" cellpadding="0" cellspacing="0" width="100%" role="presentation" style="background: {escape_attr(background)};">
    <tr>
      <td align="center">
        <!--[if (gte mso 9)|(IE)]>
        <table align="center" border="0" cellspacing="0" cellpadding="0" width="{width}">
        <tr>
        <td align="center" valign="top" width="{width}">
        <![endif]-->
        <table border="0" cellpadding="0" cellspacing="0" width="100%" style="max-width: {width}px;" class="container">
          <tbody style="background: {escape_attr(content_background)}; color: {escape_attr(styles.text_color)}; font-family: {escape_attr(styles.font_family)}; font-size: {escape_attr(styles.font_size)};">
            {body}
          </tbody>
        </table>
        <!--[if (gte mso 9)|(IE)]>
        </td>
        </tr>
        </table>
        <![endif]-->
      </td>
    </tr>
  </table>
</body>
</html>
  """

    # ------------------------------------------------------------------
    # Rows and columns
    def _render_row(self, row: Row) -> str:
        columns = "\n".join(self._render_column(column) for column in row.columns)
        return (
            f'<tr style="{escape_attr(to_inline_style(row.style))}"><td align="center" style="padding: 0;">'
            f'{PRESENTATION_TABLE} style="width: 100%;"><tbody><tr>{columns}</tr></tbody></table></td></tr>'
        )

    def _render_column(self, column: Column) -> str:
        try:
            valign = effective_vertical_align(column)
        except (AttributeError, TypeError):
            LOGGER.debug("Column %s has malformed element styles; using %s", column.id, DEFAULT_VERTICAL_ALIGN)
            valign = DEFAULT_VERTICAL_ALIGN
        elements = "\n".join(self._render_element(element) for element in column.elements)
        return (
            f'<td class="col" style="{escape_attr(to_inline_style(column.style))}" '
            f'valign="{escape_attr(valign)}">{elements}</td>'
        )

    def _render_element(self, element: Element) -> str:
        renderer = self._element_renderers.get(element.type)
        if renderer is None:
            LOGGER.debug("No renderer for element type %r (%s)", element.type, element.id)
            return ""
        try:
            return renderer(element)
        except Exception:
            LOGGER.debug("Skipping malformed %s element %s", element.type, element.id, exc_info=True)
            return ""

    # ------------------------------------------------------------------
    # Elements
    def _render_text(self, element: Element) -> str:
        text = to_line_breaks(escape_text(getattr(element.content, "text", "") or ""))
        return f'<p style="{escape_attr(to_inline_style(element.style, _COLUMN_LEVEL))}">{text}</p>'

    def _render_image(self, element: Element) -> str:
        style = element.style
        align = style.get("textAlign") or DEFAULT_ALIGN
        padding = style.get("padding")
        # Padding sits on the cell; several clients ignore it on <img>.
        cell_style = to_inline_style({"padding": padding}) if padding else ""
        image_style: Dict[str, object] = dict(IMAGE_BASE_STYLE)
        image_style.update(
            (key, value) for key, value in style.items() if key not in ("textAlign", "padding", *_COLUMN_LEVEL)
        )
        src = getattr(element.content, "src", "") or ""
        alt = getattr(element.content, "alt", "") or ""
        image = (
            f'<img src="{escape_attr(src)}" alt="{escape_attr(alt)}" '
            f'style="{escape_attr(to_inline_style(image_style))}" />'
        )
        return (
            f'{FULL_WIDTH_TABLE}<tr><td align="{escape_attr(align)}" style="{escape_attr(cell_style)}">'
            f"{image}</td></tr></table>"
        )

    def _render_button(self, element: Element) -> str:
        style = element.style
        align = style.get("textAlign") or DEFAULT_ALIGN
        button_style = {key: value for key, value in style.items() if key not in ("textAlign", *_COLUMN_LEVEL)}
        color = button_style.get("color") or DEFAULT_BUTTON_TEXT_COLOR
        href = getattr(element.content, "href", "") or DEFAULT_HREF
        text = escape_text(getattr(element.content, "text", "") or "")
        button = (
            f'<a href="{escape_attr(href)}" target="_blank" style="text-decoration: none;">'
            f'{PRESENTATION_TABLE}><tr><td align="center" style="{escape_attr(to_inline_style(button_style))}">'
            f'<span style="color: {escape_attr(color)}; text-decoration: none;">{text}</span>'
            "</td></tr></table></a>"
        )
        return f'{FULL_WIDTH_TABLE}<tr><td align="{escape_attr(align)}">{button}</td></tr></table>'

    def _render_box(self, element: Element) -> str:
        return f'<div style="{escape_attr(to_inline_style(element.style, _COLUMN_LEVEL))}"></div>'

    def _render_social(self, element: Element) -> str:
        style = element.style
        align = style.get("textAlign") or DEFAULT_ALIGN
        container_style = to_inline_style(style, ("textAlign", *_COLUMN_LEVEL))
        cells = []
        for link in getattr(element.content, "links", ()) or ():
            icon_url = SOCIAL_ICON_URLS.get(link.platform)
            if not icon_url:
                LOGGER.debug("Skipping social link with unknown platform %r", link.platform)
                continue
            image = (
                f'<img src="{escape_attr(icon_url)}" width="{SOCIAL_ICON_SIZE}" height="{SOCIAL_ICON_SIZE}" '
                f'alt="{escape_attr(link.platform)}" style="display: block; border: 0;" />'
            )
            cells.append(
                f'<td style="padding: 0 5px;"><a href="{escape_attr(link.href or DEFAULT_HREF)}" '
                f'target="_blank" style="text-decoration: none;">{image}</a></td>'
            )
        inner = f'{PRESENTATION_TABLE}><tbody><tr>{"".join(cells)}</tr></tbody></table>'
        return (
            f'{FULL_WIDTH_TABLE}<tr><td align="{escape_attr(align)}" style="{escape_attr(container_style)}">'
            f"{inner}</td></tr></table>"
        )


def serialize(document: Document) -> str:
    """Render ``document`` to HTML text."""
    return HtmlRenderer().render(document)


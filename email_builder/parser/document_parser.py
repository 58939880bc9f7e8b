"""Parse email HTML produced by :mod:`email_builder.renderer.html_renderer` back into a document.

This is not a general HTML importer. It matches the exact table shapes the
renderer emits and drops anything else, so it round-trips its own output
and nothing more.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Callable, List, Optional, Tuple
from xml.etree import ElementTree as ET

from email_builder.codec.background import resolve
from email_builder.config.catalogs import SOCIAL_ICON_MARKER, SUPPORTED_SOCIAL_PLATFORMS
from email_builder.config.defaults import (
    DEFAULT_ALIGN,
    DEFAULT_BACKGROUND,
    DEFAULT_BUTTON_TEXT_COLOR,
    DEFAULT_CONTENT_BACKGROUND,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_HREF,
    DEFAULT_TEXT_COLOR,
    DEFAULT_WIDTH,
)
from email_builder.model.document_model import Document
from email_builder.model.elements import (
    BUTTON,
    DIVIDER,
    IMAGE,
    SOCIAL,
    SPACER,
    TEXT,
    ButtonContent,
    Column,
    Element,
    ElementContent,
    EmptyContent,
    ImageContent,
    Row,
    SocialContent,
    SocialLink,
    Style,
    TextContent,
)
from email_builder.model.identifiers import IdGenerator
from email_builder.model.style_model import GlobalStyle
from email_builder.parser.styles_parser import StylesParser
from email_builder.utils.html_utils import child_elements, first_descendant, has_class, parse_html
from email_builder.utils.logger import get_logger
from email_builder.utils.text_normalizer import TextNormalizer
from email_builder.utils.units import px_to_int

LOGGER = get_logger(__name__)

CONTAINER_CLASS = "container"
TEXT_STYLE_KEYS = ("color", "fontSize", "padding", "textAlign", "fontWeight", "fontFamily")
IMAGE_BASE_STYLE = {"maxWidth": "100%", "height": "auto", "display": "block"}

ElementMatcher = Callable[[ET.Element], Optional[Element]]


class HtmlDocumentParser:
    """Transforms serializer output into a :class:`Document`.

    Parsing never raises. Markup without a content container, or markup that
    breaks the parser, produces an empty document with default global styles.
    """

    def __init__(self, markup: str, ids: Optional[IdGenerator] = None) -> None:
        self._markup = markup
        self._ids = ids or IdGenerator()
        self._styles = StylesParser()
        self._normalizer = TextNormalizer()
        # Precedence matters: first match wins.
        self._matchers: Tuple[ElementMatcher, ...] = (
            self._match_social,
            self._match_text,
            self._match_image,
            self._match_button,
            self._match_divider,
            self._match_spacer,
        )

    def parse(self) -> Document:
        """Parse the markup into rows and global styles."""
        try:
            return self._parse()
        except Exception:
            LOGGER.warning("Failed to parse email markup; returning an empty document", exc_info=True)
            return Document()

    def _parse(self) -> Document:
        root = parse_html(self._markup or "")
        container = self._find_container(root)
        if container is None:
            LOGGER.warning("Markup has no content container; nothing imported")
            return Document()

        styles = self._parse_global_style(root.find(".//body"), container)
        rows: List[Row] = []
        for row_index, tr in enumerate(container.findall("./tbody/tr")):
            row = self._parse_row(tr)
            if row is None:
                LOGGER.debug("Dropping row %d: no column structure found", row_index)
                continue
            rows.append(row)
        LOGGER.debug("Parsed %d rows", len(rows))
        return Document(rows=tuple(rows), styles=styles)

    # ------------------------------------------------------------------
    # Global style
    def _find_container(self, root: ET.Element) -> Optional[ET.Element]:
        for table in root.iter("table"):
            if has_class(table, CONTAINER_CLASS):
                return table
        return None

    def _parse_global_style(self, body: Optional[ET.Element], container: ET.Element) -> GlobalStyle:
        body_style = self._styles.parse_element(body)
        content_style = self._styles.parse_element(container.find("./tbody"))
        container_style = self._styles.parse_element(container)

        background = body_style.get("background") or body_style.get("backgroundColor")
        content_background = content_style.get("background") or content_style.get("backgroundColor")
        width = px_to_int(str(container_style.get("maxWidth", "")))
        return GlobalStyle(
            background=resolve(str(background)) if background else DEFAULT_BACKGROUND,
            content_background=resolve(str(content_background)) if content_background else DEFAULT_CONTENT_BACKGROUND,
            font_family=str(content_style.get("fontFamily") or DEFAULT_FONT_FAMILY),
            font_size=str(content_style.get("fontSize") or DEFAULT_FONT_SIZE),
            text_color=str(content_style.get("color") or DEFAULT_TEXT_COLOR),
            width=width if width is not None else DEFAULT_WIDTH,
        )

    # ------------------------------------------------------------------
    # Rows and columns
    def _parse_row(self, tr: ET.Element) -> Optional[Row]:
        cells = tr.findall("./td/table/tbody/tr/td")
        if not cells:
            return None
        columns = tuple(self._parse_column(cell) for cell in cells)
        return Row(id=self._ids.new_id("row"), columns=columns, style=self._styles.parse_element(tr))

    def _parse_column(self, cell: ET.Element) -> Column:
        valign = cell.get("valign")
        elements: List[Element] = []
        for node in child_elements(cell):
            element = self._classify(node)
            if element is None:
                LOGGER.debug("Discarding unrecognized <%s> node", node.tag)
                continue
            if valign:
                element = replace(element, style={**element.style, "verticalAlign": valign})
            elements.append(element)
        return Column(id=self._ids.new_id("col"), elements=tuple(elements), style=self._styles.parse_element(cell))

    def _classify(self, node: ET.Element) -> Optional[Element]:
        for matcher in self._matchers:
            element = matcher(node)
            if element is not None:
                return element
        return None

    def _new_element(self, element_type: str, content: ElementContent, style: Style) -> Element:
        return Element(id=self._ids.new_id("el"), type=element_type, content=content, style=style)

    def _alignment(self, node: ET.Element) -> Optional[str]:
        cell = node.find(".//td[@align]")
        return cell.get("align") if cell is not None else None

    # ------------------------------------------------------------------
    # Element signatures
    def _match_social(self, node: ET.Element) -> Optional[Element]:
        if node.tag != "table":
            return None
        inner = first_descendant(node, "table")
        if inner is None:
            return None
        if not any(SOCIAL_ICON_MARKER in img.get("src", "") for img in inner.iter("img")):
            return None

        links: List[SocialLink] = []
        for anchor in inner.iter("a"):
            icon = first_descendant(anchor, "img")
            if icon is None:
                continue
            platform = icon.get("alt", "")
            if platform not in SUPPORTED_SOCIAL_PLATFORMS:
                LOGGER.debug("Skipping social icon with unsupported platform %r", platform)
                continue
            links.append(SocialLink(platform=platform, href=anchor.get("href") or DEFAULT_HREF))
        if not links:
            return None

        wrapper = node.find(".//td[@align]")
        style = self._styles.parse_element(wrapper)
        style["textAlign"] = self._alignment(node) or DEFAULT_ALIGN
        return self._new_element(SOCIAL, SocialContent(links=tuple(links)), style)

    def _match_text(self, node: ET.Element) -> Optional[Element]:
        if node.tag != "p":
            return None
        style = self._styles.parse_element(node, only=TEXT_STYLE_KEYS)
        return self._new_element(TEXT, TextContent(text=self._normalizer.extract_text(node)), style)

    def _match_image(self, node: ET.Element) -> Optional[Element]:
        if node.tag != "table":
            return None
        image = first_descendant(node, "img")
        if image is None:
            return None
        alignment = self._alignment(node)
        style: Style = {}
        padding = self._styles.get(node.find(".//td[@align]"), "padding")
        if padding:
            style["padding"] = padding
        for key, value in self._styles.parse_element(image).items():
            if IMAGE_BASE_STYLE.get(key) != value:
                style[key] = value
        if alignment:
            style["textAlign"] = alignment
        content = ImageContent(src=image.get("src", ""), alt=image.get("alt", ""))
        return self._new_element(IMAGE, content, style)

    def _match_button(self, node: ET.Element) -> Optional[Element]:
        if node.tag != "table" or node.find(".//a/table") is None:
            return None
        anchor = node.find(".//a")
        if anchor is None:
            return None
        style = self._styles.parse_element(first_descendant(anchor, "td"))
        span_color = self._styles.get(first_descendant(anchor, "span"), "color")
        if span_color and (style.get("color") or span_color != DEFAULT_BUTTON_TEXT_COLOR):
            style["color"] = span_color
        alignment = self._alignment(node)
        if alignment:
            style["textAlign"] = alignment
        content = ButtonContent(
            text=self._normalizer.extract_plain_text(anchor),
            href=anchor.get("href") or DEFAULT_HREF,
        )
        return self._new_element(BUTTON, content, style)

    def _match_divider(self, node: ET.Element) -> Optional[Element]:
        if node.tag != "div":
            return None
        style = self._styles.parse_element(node)
        if not style.get("borderTop"):
            return None
        return self._new_element(DIVIDER, EmptyContent(), style)

    def _match_spacer(self, node: ET.Element) -> Optional[Element]:
        if node.tag != "div":
            return None
        style = self._styles.parse_element(node)
        if not style.get("height") or style.get("borderTop"):
            return None
        return self._new_element(SPACER, EmptyContent(), style)


def parse(markup: str, ids: Optional[IdGenerator] = None) -> Document:
    """Parse serializer output; see :class:`HtmlDocumentParser`."""
    return HtmlDocumentParser(markup, ids).parse()

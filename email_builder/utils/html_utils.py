"""Helper functions to turn HTML text into an ElementTree and query it."""
from __future__ import annotations

from html.parser import HTMLParser
from typing import List, Optional, Tuple
from xml.etree import ElementTree as ET

ROOT_TAG = "document"

VOID_TAGS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)


class HtmlTreeBuilder(HTMLParser):
    """Builds an :mod:`xml.etree.ElementTree` tree from HTML events.

    Comments, doctype and processing instructions are dropped; that includes
    the content of Outlook conditional comments. Unmatched end tags are
    ignored and unclosed elements are closed at the end of input.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.root = ET.Element(ROOT_TAG)
        self._stack: List[ET.Element] = [self.root]

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        element = self._append(tag, attrs)
        if tag not in VOID_TAGS:
            self._stack.append(element)

    def handle_startendtag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        self._append(tag, attrs)

    def handle_endtag(self, tag: str) -> None:
        for index in range(len(self._stack) - 1, 0, -1):
            if self._stack[index].tag == tag:
                del self._stack[index:]
                return

    def handle_data(self, data: str) -> None:
        parent = self._stack[-1]
        if len(parent):
            last = parent[-1]
            last.tail = (last.tail or "") + data
        else:
            parent.text = (parent.text or "") + data

    def _append(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> ET.Element:
        attrib = {name: value if value is not None else "" for name, value in attrs}
        return ET.SubElement(self._stack[-1], tag, attrib)


def parse_html(markup: str) -> ET.Element:
    """Parse HTML text into a tree rooted at a synthetic ``<document>`` node."""
    builder = HtmlTreeBuilder()
    builder.feed(markup)
    builder.close()
    return builder.root


def has_class(element: ET.Element, name: str) -> bool:
    return name in element.get("class", "").split()


def child_elements(element: ET.Element, tag: Optional[str] = None) -> List[ET.Element]:
    """Direct children, optionally filtered by tag."""
    return [child for child in element if tag is None or child.tag == tag]


def first_descendant(element: ET.Element, tag: str) -> Optional[ET.Element]:
    """First element named ``tag`` strictly below ``element``."""
    for candidate in element.iter(tag):
        if candidate is not element:
            return candidate
    return None

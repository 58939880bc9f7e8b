"""
Text helpers for markup produced by the serializer.

Converts line-break markers back into newlines and splits CSS lists on
separators that are not nested inside parentheses. Extracted text is
returned exactly as written so content survives a round trip.
"""

from typing import List, Optional
from xml.etree.ElementTree import Element


class TextNormalizer:
    """Extracts text content from parsed HTML nodes."""

    LINE_BREAK_TAG = 'br'

    def extract_text(self, element: Optional[Element]) -> str:
        """Collect an element's text, turning ``<br>`` into newlines."""
        if element is None:
            return ""
        parts: List[str] = []
        self._collect(element, parts)
        return ''.join(parts)

    def extract_plain_text(self, element: Optional[Element]) -> str:
        """Concatenate every text node below ``element``."""
        if element is None:
            return ""
        return ''.join(element.itertext())

    def _collect(self, element: Element, parts: List[str]) -> None:
        if element.text:
            parts.append(element.text)
        for child in element:
            if child.tag == self.LINE_BREAK_TAG:
                parts.append('\n')
            else:
                self._collect(child, parts)
            if child.tail:
                parts.append(child.tail)


def to_line_breaks(text: str) -> str:
    """Replace raw newlines with ``<br />`` markers."""
    return text.replace('\r\n', '\n').replace('\r', '\n').replace('\n', '<br />')


def split_top_level(text: str, separator: str) -> List[str]:
    """Split on ``separator`` except inside parentheses or quotes.

    ``"#fff, rgba(0, 0, 0, .5) 50%"`` splits into two parts, not five.
    """
    parts: List[str] = []
    depth = 0
    quote: Optional[str] = None
    current: List[str] = []
    for char in text:
        if quote:
            if char == quote:
                quote = None
        elif char in ('"', "'"):
            quote = char
        elif char == '(':
            depth += 1
        elif char == ')':
            depth = max(depth - 1, 0)
        elif char == separator and depth == 0:
            parts.append(''.join(current))
            current = []
            continue
        current.append(char)
    parts.append(''.join(current))
    return parts

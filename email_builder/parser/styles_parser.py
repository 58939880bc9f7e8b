"""Extract inline ``style`` attributes into camelCase style mappings."""
from __future__ import annotations

import re
from typing import Collection, Optional
from xml.etree import ElementTree as ET

from email_builder.model.elements import Style
from email_builder.utils.text_normalizer import split_top_level

_DASH_PATTERN = re.compile(r"-([a-z])")


def kebab_to_camel(name: str) -> str:
    """``border-top-color`` -> ``borderTopColor``."""
    return _DASH_PATTERN.sub(lambda match: match.group(1).upper(), name.strip().lower())


class StylesParser:
    """Parse CSS declaration lists as written by the serializer."""

    def parse(self, declarations: Optional[str], only: Optional[Collection[str]] = None) -> Style:
        """Return declarations in source order; later duplicates win.

        ``only`` restricts the result to the given camelCase property names.
        Empty values are dropped.
        """
        style: Style = {}
        if not declarations:
            return style
        for declaration in split_top_level(declarations, ";"):
            name, separator, value = declaration.partition(":")
            if not separator:
                continue
            key = kebab_to_camel(name)
            value = value.strip()
            if not key or not value:
                continue
            if only is not None and key not in only:
                continue
            style[key] = value
        return style

    def parse_element(self, element: Optional[ET.Element], only: Optional[Collection[str]] = None) -> Style:
        if element is None:
            return {}
        return self.parse(element.get("style"), only)

    def get(self, element: Optional[ET.Element], name: str) -> str:
        """Single property lookup; empty string when absent."""
        return str(self.parse_element(element).get(name, ""))


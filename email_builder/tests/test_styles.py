"""Unit tests for inline style parsing."""
import unittest
from xml.etree import ElementTree as ET

from email_builder.parser.styles_parser import StylesParser, kebab_to_camel


class StylesParserTest(unittest.TestCase):
    """Inline declarations become camelCase mappings."""

    def setUp(self) -> None:
        self.parser = StylesParser()

    def test_kebab_to_camel(self) -> None:
        self.assertEqual(kebab_to_camel("border-top-color"), "borderTopColor")
        self.assertEqual(kebab_to_camel(" Color "), "color")

    def test_parse_keeps_source_order(self) -> None:
        style = self.parser.parse("padding: 10px; text-align: left; font-size: 16px;")
        self.assertEqual(list(style.items()), [("padding", "10px"), ("textAlign", "left"), ("fontSize", "16px")])

    def test_nested_separators_are_kept(self) -> None:
        style = self.parser.parse(
            "background: linear-gradient(90deg, #fff 0%, rgba(0, 0, 0, 0.5) 100%); "
            "font-family: 'Open Sans', sans-serif; background-image: url(data:image/png;base64,AAAA)"
        )
        self.assertEqual(style["background"], "linear-gradient(90deg, #fff 0%, rgba(0, 0, 0, 0.5) 100%)")
        self.assertEqual(style["fontFamily"], "'Open Sans', sans-serif")
        self.assertEqual(style["backgroundImage"], "url(data:image/png;base64,AAAA)")

    def test_malformed_declarations_skipped(self) -> None:
        style = self.parser.parse("color; : red; width: ; height: 4px; height: 8px")
        self.assertEqual(style, {"height": "8px"})

    def test_only_filter(self) -> None:
        style = self.parser.parse("color: red; margin: 0; padding: 4px", only=("color", "padding"))
        self.assertEqual(style, {"color": "red", "padding": "4px"})

    def test_empty_input(self) -> None:
        self.assertEqual(self.parser.parse(None), {})
        self.assertEqual(self.parser.parse(""), {})
        self.assertEqual(self.parser.parse_element(None), {})

    def test_element_lookup(self) -> None:
        node = ET.Element("td", {"style": "max-width: 640px; color: #333"})
        self.assertEqual(self.parser.get(node, "maxWidth"), "640px")
        self.assertEqual(self.parser.get(node, "width"), "")
        self.assertEqual(self.parser.parse_element(node, only=("color",)), {"color": "#333"})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

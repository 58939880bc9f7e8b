"""Tests for the command line entry point."""
import json
import tempfile
import unittest
from pathlib import Path

from email_builder.main import build_arg_parser, import_html, main, render_template
from email_builder.model.document_model import Document
from email_builder.model.elements import TEXT, Column, Element, Row, TextContent
from email_builder.model.style_model import GlobalStyle
from email_builder.parser.template_loader import read_template, write_template


def sample_document() -> Document:
    text = Element("t1", TEXT, TextContent("Welcome"), {"color": "#111111", "padding": "10px"})
    column = Column("c1", (text,), {"width": "100%"})
    return Document(rows=(Row("r1", (column,), {}),), styles=GlobalStyle(width=640))


class CommandLineTest(unittest.TestCase):
    """Render and import through files on disk."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        self.template = self.root / "welcome.json"
        write_template(sample_document(), self.template)

    def test_render_writes_html_next_to_template(self) -> None:
        self.assertEqual(main(["render", str(self.template)]), 0)
        html = (self.root / "welcome.html").read_text(encoding="utf-8")
        self.assertIn("Welcome", html)
        self.assertIn("max-width: 640px", html)

    def test_render_width_override(self) -> None:
        output = render_template(self.template, self.root / "narrow.html", width=480)
        self.assertEqual(output, self.root / "narrow.html")
        self.assertIn("max-width: 480px", output.read_text(encoding="utf-8"))

    def test_import_round_trip(self) -> None:
        html_path = self.root / "exported.html"
        render_template(self.template, html_path)
        json_path = self.root / "restored.json"
        self.assertEqual(main(["import", str(html_path), "--output", str(json_path)]), 0)
        restored = read_template(json_path)
        self.assertEqual(restored.styles, sample_document().styles)
        element = next(restored.iter_elements())
        self.assertEqual(element.content, TextContent("Welcome"))

    def test_import_unrecognized_html_writes_empty_template(self) -> None:
        html_path = self.root / "other.html"
        html_path.write_text("<html><body><p>Not ours</p></body></html>", encoding="utf-8")
        document = import_html(html_path)
        self.assertEqual(document, Document())
        payload = json.loads((self.root / "other.json").read_text(encoding="utf-8"))
        self.assertEqual(payload["rows"], [])

    def test_invalid_template_exits_with_error(self) -> None:
        self.template.write_text('{"rows": "nope", "styles": {}}', encoding="utf-8")
        output = self.root / "welcome.html"
        output.write_text("previous", encoding="utf-8")
        with self.assertLogs("email_builder.main", level="ERROR"):
            self.assertEqual(main(["render", str(self.template)]), 1)
        self.assertEqual(output.read_text(encoding="utf-8"), "previous")

    def test_missing_file_exits_with_error(self) -> None:
        with self.assertLogs("email_builder.main", level="ERROR"):
            self.assertEqual(main(["import", str(self.root / "missing.html")]), 1)

    def test_command_required(self) -> None:
        with self.assertRaises(SystemExit):
            build_arg_parser().parse_args([])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

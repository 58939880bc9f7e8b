"""Tests for JSON template import and export."""
import json
import tempfile
import unittest
from pathlib import Path

from email_builder.model.document_model import Document
from email_builder.model.elements import (
    SOCIAL,
    TEXT,
    Column,
    Element,
    Row,
    SocialContent,
    SocialLink,
    TextContent,
)
from email_builder.model.identifiers import IdGenerator
from email_builder.model.style_model import GlobalStyle
from email_builder.parser.template_loader import (
    TemplateImportError,
    dump_template,
    dumps_template,
    load_template,
    loads_template,
    read_template,
    write_template,
)


def sample_document() -> Document:
    column = Column(
        id="c1",
        elements=(
            Element("t1", TEXT, TextContent("Hi"), {"color": "#000", "fontSize": 14}),
            Element("s1", SOCIAL, SocialContent((SocialLink("Twitter", "https://x.example"),)), {}),
        ),
        style={"width": "100%"},
        vertical_align="middle",
    )
    return Document(rows=(Row(id="r1", columns=(column,), style={}),), styles=GlobalStyle(width=700))


class TemplateExportTest(unittest.TestCase):
    """Export mirrors the data model as plain records."""

    def test_dump_structure(self) -> None:
        payload = dump_template(sample_document())
        self.assertEqual(set(payload), {"rows", "styles"})
        self.assertEqual(payload["styles"]["width"], 700)
        self.assertEqual(payload["styles"]["contentBackground"], "#ffffff")
        column = payload["rows"][0]["columns"][0]
        self.assertEqual(column["verticalAlign"], "middle")
        self.assertEqual(column["elements"][0], {"id": "t1", "type": "text", "content": {"text": "Hi"},
                                                 "style": {"color": "#000", "fontSize": 14}})
        self.assertEqual(column["elements"][1]["content"], {"links": [{"platform": "Twitter", "href": "https://x.example"}]})

    def test_dump_and_load_preserve_document(self) -> None:
        document = sample_document()
        self.assertEqual(loads_template(dumps_template(document)), document)

    def test_file_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "template.json"
            write_template(sample_document(), path)
            self.assertEqual(read_template(path), sample_document())

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            read_template(Path("/nonexistent/template.json"))


class TemplateImportTest(unittest.TestCase):
    """Import validation is all-or-nothing."""

    def test_rejects_bad_top_level_shapes(self) -> None:
        for payload in ([], {"rows": {}, "styles": {}}, {"rows": [], "styles": None}, {"rows": []}, "x"):
            with self.assertRaises(TemplateImportError):
                load_template(payload)

    def test_rejects_invalid_json(self) -> None:
        with self.assertRaises(TemplateImportError):
            loads_template("{not json")

    def test_rejects_nested_problems(self) -> None:
        bad_rows = [
            ["not a row"],
            [{"columns": "nope"}],
            [{"columns": [{"elements": [{"type": "menu"}]}]}],
            [{"columns": [{"elements": [{"type": "text", "content": {"text": 5}}]}]}],
            [{"columns": [{"elements": [{"type": "text", "style": {"color": ["red"]}}]}]}],
        ]
        for rows in bad_rows:
            with self.assertRaises(TemplateImportError, msg=str(rows)):
                load_template({"rows": rows, "styles": {}})

    def test_missing_style_keys_use_defaults(self) -> None:
        document = load_template({"rows": [], "styles": {"background": "#000000", "width": "720"}})
        self.assertEqual(document.styles, GlobalStyle(background="#000000", width=720))

    def test_duplicate_and_missing_ids_are_replaced(self) -> None:
        payload = {
            "rows": [
                {
                    "id": "same",
                    "columns": [
                        {"id": "same", "elements": [{"type": "spacer", "style": {"height": "10px"}}, {"id": "x", "type": "divider"}]},
                    ],
                }
            ],
            "styles": {},
        }
        document = load_template(payload, IdGenerator(token="imp"))
        row = document.rows[0]
        column = row.columns[0]
        self.assertEqual(row.id, "same")
        self.assertNotEqual(column.id, "same")
        self.assertTrue(column.id.startswith("col-imp-"))
        self.assertTrue(column.elements[0].id.startswith("el-imp-"))
        self.assertEqual(column.elements[1].id, "x")

    def test_loaded_payload_is_json_compatible(self) -> None:
        text = dumps_template(sample_document())
        self.assertEqual(json.loads(text)["rows"][0]["id"], "r1")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

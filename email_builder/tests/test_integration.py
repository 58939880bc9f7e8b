"""
Integration tests for the serializer/parser round trip.

Documents built from supported element shapes must survive
``parse(serialize(document))`` structurally, and serializing the parsed
result must reproduce the original markup.
"""

import re
import unittest

from email_builder.editing import create_element, create_layout_row, insert_element, insert_row
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
    EmptyContent,
    ImageContent,
    Row,
    SocialContent,
    SocialLink,
    TextContent,
)
from email_builder.model.identifiers import IdGenerator
from email_builder.model.style_model import GlobalStyle
from email_builder.parser.document_parser import parse
from email_builder.renderer.html_renderer import serialize


def squash(markup: str) -> str:
    return re.sub(r"\s+", "", markup)


def sample_document() -> Document:
    text = Element(
        "t1",
        TEXT,
        TextContent("Hello & welcome\nto <our> newsletter"),
        {
            "color": "#333333",
            "fontSize": "14px",
            "padding": "10px",
            "textAlign": "left",
            "fontWeight": "normal",
            "fontFamily": "'Open Sans', sans-serif",
        },
    )
    image = Element(
        "i1",
        IMAGE,
        ImageContent("https://example.com/hero.png?w=600&h=300", "Hero"),
        {"padding": "10px", "textAlign": "center", "verticalAlign": "middle"},
    )
    button = Element(
        "b1",
        BUTTON,
        ButtonContent("Shop now", "https://example.com/shop"),
        {"backgroundColor": "#4F46E5", "color": "#FFFFFF", "padding": "12px 24px", "borderRadius": "4px", "textAlign": "center"},
    )
    divider = Element("d1", DIVIDER, EmptyContent(), {"borderTop": "1px solid #cccccc", "padding": "10px 0"})
    spacer = Element("s1", SPACER, EmptyContent(), {"height": "20px"})
    social = Element(
        "so1",
        SOCIAL,
        SocialContent((SocialLink("Facebook", "https://facebook.com/acme"), SocialLink("LinkedIn", "#"))),
        {"padding": "10px", "textAlign": "right"},
    )
    rows = (
        Row(
            id="r1",
            columns=(
                Column(id="c1", elements=(text, image), style={"width": "33.33%"}),
                Column(id="c2", elements=(button,), style={"width": "66.67%"}),
            ),
            style={"backgroundColor": "#fafafa"},
        ),
        Row(id="r2", columns=(Column(id="c3", elements=(divider, spacer, social), style={"width": "100%"}),)),
    )
    styles = GlobalStyle(
        background="linear-gradient(90deg, #ffffff 0%, #eeeeee 100%)",
        content_background="#ffffff",
        font_family="Roboto, sans-serif",
        font_size="16px",
        text_color="#1e293b",
        width=640,
    )
    return Document(rows=rows, styles=styles)


class RoundTripTest(unittest.TestCase):
    """parse(serialize(D)) preserves structure and content."""

    def test_structure_and_content_survive(self) -> None:
        original = sample_document()
        parsed = parse(serialize(original))

        self.assertEqual(len(parsed.rows), len(original.rows))
        for parsed_row, original_row in zip(parsed.rows, original.rows):
            self.assertEqual(len(parsed_row.columns), len(original_row.columns))
            for parsed_column, original_column in zip(parsed_row.columns, original_row.columns):
                self.assertEqual(
                    [(element.type, element.content) for element in parsed_column.elements],
                    [(element.type, element.content) for element in original_column.elements],
                )

    def test_global_style_survives(self) -> None:
        original = sample_document()
        parsed = parse(serialize(original))
        self.assertEqual(parsed.styles.width, 640)
        self.assertEqual(parsed.styles.font_family, "Roboto, sans-serif")
        self.assertEqual(parsed.styles.background, "linear-gradient(90deg, #ffffff 0.00%, #eeeeee 100.00%)")

    def test_serialize_is_idempotent_through_parse(self) -> None:
        first = serialize(sample_document())
        second = serialize(parse(first))
        self.assertEqual(squash(second), squash(first))

    def test_control_characters_survive(self) -> None:
        text = Element("t1", TEXT, TextContent("x\x07y\x1f"), {"color": "#000000"})
        document = Document(rows=(Row("r1", (Column("c1", (text,), {"width": "100%"}),)),))
        parsed = parse(serialize(document))
        self.assertEqual(next(parsed.iter_elements()).content, TextContent("x\x07y\x1f"))

    def test_zero_width_survives(self) -> None:
        parsed = parse(serialize(Document(styles=GlobalStyle(width=0))))
        self.assertEqual(parsed.styles.width, 0)

    def test_empty_document_round_trip(self) -> None:
        first = serialize(Document())
        parsed = parse(first)
        self.assertEqual(parsed.rows, ())
        self.assertEqual(parsed.styles, GlobalStyle())
        self.assertEqual(squash(serialize(parsed)), squash(first))

    def test_column_valign_written_back_to_elements(self) -> None:
        column = Column(
            id="c1",
            elements=(
                Element("a", TEXT, TextContent("A"), {}),
                Element("b", TEXT, TextContent("B"), {"verticalAlign": "bottom"}),
                Element("c", TEXT, TextContent("C"), {"verticalAlign": "top"}),
            ),
            style={"width": "100%"},
        )
        html = serialize(Document(rows=(Row(id="r1", columns=(column,)),)))
        self.assertIn('valign="bottom"', html)
        elements = parse(html).rows[0].columns[0].elements
        self.assertEqual([element.style["verticalAlign"] for element in elements], ["bottom"] * 3)

    def test_documents_built_with_editing_helpers(self) -> None:
        ids = IdGenerator(token="it")
        document = insert_row(Document(), 0, create_layout_row("3 Columns (25/50/25)", ids))
        for index, element_type in enumerate((TEXT, IMAGE, SOCIAL)):
            document = insert_element(document, 0, index, 0, create_element(element_type, ids))
        document = insert_element(document, 0, 1, 1, create_element(BUTTON, ids))

        first = serialize(document)
        parsed = parse(first)
        self.assertEqual(
            [[element.type for element in column.elements] for column in parsed.rows[0].columns],
            [[TEXT], [IMAGE, BUTTON], [SOCIAL]],
        )
        self.assertEqual(squash(serialize(parsed)), squash(first))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

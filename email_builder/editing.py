"""Snapshot-producing edit operations over :class:`Document` values.

Every function returns a new document and leaves its inputs untouched, so
callers can keep previous snapshots for undo history.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Sequence

from email_builder.config.catalogs import (
    COMPONENT_DEFAULT_STYLES,
    DEFAULT_BUTTON_TEXT,
    DEFAULT_IMAGE_ALT,
    DEFAULT_IMAGE_SRC,
    DEFAULT_SOCIAL_PLATFORMS,
    DEFAULT_TEXT,
    LAYOUT_PRESETS,
)
from email_builder.config.defaults import DEFAULT_COLUMN_WIDTH, DEFAULT_HREF
from email_builder.model.document_model import Document
from email_builder.model.elements import (
    BUTTON,
    ELEMENT_TYPES,
    IMAGE,
    SOCIAL,
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
    TextContent,
)
from email_builder.model.identifiers import IdGenerator, new_id
from email_builder.model.style_model import GlobalStyle
from email_builder.utils.logger import get_logger

LOGGER = get_logger(__name__)


def _id_factory(ids: Optional[IdGenerator]) -> Callable[[str], str]:
    return ids.new_id if ids is not None else new_id


def create_element(element_type: str, ids: Optional[IdGenerator] = None) -> Element:
    """New element of ``element_type`` with the editor's default content and style."""
    if element_type not in ELEMENT_TYPES:
        raise ValueError(f"Unsupported element type: {element_type!r}")
    content: ElementContent
    if element_type == TEXT:
        content = TextContent(text=DEFAULT_TEXT)
    elif element_type == IMAGE:
        content = ImageContent(src=DEFAULT_IMAGE_SRC, alt=DEFAULT_IMAGE_ALT)
    elif element_type == BUTTON:
        content = ButtonContent(text=DEFAULT_BUTTON_TEXT, href=DEFAULT_HREF)
    elif element_type == SOCIAL:
        content = SocialContent(
            links=tuple(SocialLink(platform=platform, href=DEFAULT_HREF) for platform in DEFAULT_SOCIAL_PLATFORMS)
        )
    else:
        content = EmptyContent()
    return Element(
        id=_id_factory(ids)(element_type),
        type=element_type,
        content=content,
        style=dict(COMPONENT_DEFAULT_STYLES.get(element_type, {})),
    )


def create_row(widths: Sequence[str] = (DEFAULT_COLUMN_WIDTH,), ids: Optional[IdGenerator] = None) -> Row:
    """Row of empty columns with the given width percentages."""
    make_id = _id_factory(ids)
    columns = tuple(Column(id=make_id("col"), style={"width": width}) for width in widths)
    return Row(id=make_id("row"), columns=columns)


def create_layout_row(preset: str, ids: Optional[IdGenerator] = None) -> Row:
    """Row for one of the named :data:`LAYOUT_PRESETS`."""
    try:
        widths = LAYOUT_PRESETS[preset]
    except KeyError:
        raise ValueError(f"Unknown layout preset: {preset!r}") from None
    return create_row(widths, ids)


def insert_row(document: Document, index: int, row: Row) -> Document:
    rows = list(document.rows)
    rows.insert(index, row)
    return replace(document, rows=tuple(rows))


def insert_element(
    document: Document,
    row_index: int,
    column_index: int,
    position: int,
    element: Element,
    ids: Optional[IdGenerator] = None,
) -> Document:
    """Insert ``element`` into a column.

    Dropping onto an empty document creates a one-column row for it. A target
    that does not exist leaves the document unchanged.
    """
    if not document.rows:
        make_id = _id_factory(ids)
        column = Column(id=make_id("col"), elements=(element,), style={"width": DEFAULT_COLUMN_WIDTH})
        return replace(document, rows=(Row(id=make_id("row"), columns=(column,)),))
    if not (0 <= row_index < len(document.rows)) or not (0 <= column_index < len(document.rows[row_index].columns)):
        LOGGER.warning("No column at row %d, column %d; element %s not inserted", row_index, column_index, element.id)
        return document

    row = document.rows[row_index]
    column = row.columns[column_index]
    elements = list(column.elements)
    elements.insert(position, element)
    columns = list(row.columns)
    columns[column_index] = replace(column, elements=tuple(elements))
    rows = list(document.rows)
    rows[row_index] = replace(row, columns=tuple(columns))
    return replace(document, rows=tuple(rows))


def update_element(document: Document, updated: Element) -> Document:
    """Replace the element sharing ``updated.id``."""
    return _map_columns(
        document,
        lambda column: replace(
            column,
            elements=tuple(updated if element.id == updated.id else element for element in column.elements),
        ),
    )


def delete_element(document: Document, element_id: str) -> Document:
    """Remove an element, then drop columns and rows left empty."""
    rows: List[Row] = []
    for row in document.rows:
        columns = []
        for column in row.columns:
            elements = tuple(element for element in column.elements if element.id != element_id)
            if elements:
                columns.append(replace(column, elements=elements))
        if columns:
            rows.append(replace(row, columns=tuple(columns)))
    return replace(document, rows=tuple(rows))


def update_styles(document: Document, styles: GlobalStyle) -> Document:
    return replace(document, styles=styles)


def find_element(document: Document, element_id: str) -> Optional[Element]:
    for element in document.iter_elements():
        if element.id == element_id:
            return element
    return None


def collect_ids(document: Document) -> List[str]:
    """Every row, column and element id in document order."""
    ids: List[str] = []
    for row in document.rows:
        ids.append(row.id)
        for column in row.columns:
            ids.append(column.id)
            ids.extend(element.id for element in column.elements)
    return ids


def has_unique_ids(document: Document) -> bool:
    ids = collect_ids(document)
    return len(ids) == len(set(ids))


def migrate_vertical_align(document: Document) -> Document:
    """Move per-element ``verticalAlign`` onto columns.

    The column takes the first non-empty element value and every element
    loses its own, which leaves the rendered ``valign`` unchanged.
    """

    def migrate(column: Column) -> Column:
        value = column.vertical_align or _first_vertical_align(column.elements)
        elements = tuple(
            replace(element, style={k: v for k, v in element.style.items() if k != "verticalAlign"})
            if "verticalAlign" in element.style
            else element
            for element in column.elements
        )
        return replace(column, elements=elements, vertical_align=value)

    return _map_columns(document, migrate)


def _first_vertical_align(elements: Iterable[Element]) -> Optional[str]:
    for element in elements:
        value = element.style.get("verticalAlign")
        if value:
            return str(value)
    return None


def _map_columns(document: Document, transform: Callable[[Column], Column]) -> Document:
    rows = tuple(
        replace(row, columns=tuple(transform(column) for column in row.columns)) for row in document.rows
    )
    return replace(document, rows=rows)

"""JSON template import/export: ``{"rows": [...], "styles": {...}}``.

Import is all-or-nothing. Any shape violation raises
:class:`TemplateImportError` and nothing is returned, so callers keep the
document they already had.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Set

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
    Style,
    TextContent,
)
from email_builder.model.identifiers import IdGenerator
from email_builder.model.style_model import GlobalStyle
from email_builder.utils.logger import get_logger

LOGGER = get_logger(__name__)

TEMPLATE_ROWS_KEY = "rows"
TEMPLATE_STYLES_KEY = "styles"


class TemplateImportError(ValueError):
    """Raised when a template payload does not have the expected shape."""


# ----------------------------------------------------------------------
# Export
def dump_template(document: Document) -> Dict[str, Any]:
    """Return the plain nested structure for ``document``."""
    return {
        TEMPLATE_ROWS_KEY: [_dump_row(row) for row in document.rows],
        TEMPLATE_STYLES_KEY: document.styles.to_dict(),
    }


def dumps_template(document: Document) -> str:
    return json.dumps(dump_template(document), indent=2)


def write_template(document: Document, output_path: Path) -> None:
    output_path.write_text(dumps_template(document), encoding="utf-8")
    LOGGER.info("Wrote template with %d rows to %s", len(document.rows), output_path)


def _dump_row(row: Row) -> Dict[str, Any]:
    return {"id": row.id, "columns": [_dump_column(column) for column in row.columns], "style": dict(row.style)}


def _dump_column(column: Column) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": column.id,
        "elements": [_dump_element(element) for element in column.elements],
        "style": dict(column.style),
    }
    if column.vertical_align:
        data["verticalAlign"] = column.vertical_align
    return data


def _dump_element(element: Element) -> Dict[str, Any]:
    content = element.content
    if isinstance(content, TextContent):
        payload: Dict[str, Any] = {"text": content.text}
    elif isinstance(content, ImageContent):
        payload = {"src": content.src, "alt": content.alt}
    elif isinstance(content, ButtonContent):
        payload = {"text": content.text, "href": content.href}
    elif isinstance(content, SocialContent):
        payload = {"links": [{"platform": link.platform, "href": link.href} for link in content.links]}
    else:
        payload = {}
    return {"id": element.id, "type": element.type, "content": payload, "style": dict(element.style)}


# ----------------------------------------------------------------------
# Import
def loads_template(text: str, ids: Optional[IdGenerator] = None) -> Document:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TemplateImportError(f"Template is not valid JSON: {exc}") from exc
    return load_template(payload, ids)


def read_template(path: Path, ids: Optional[IdGenerator] = None) -> Document:
    if not path.exists():
        raise FileNotFoundError(f"Template file not found: {path}")
    return loads_template(path.read_text(encoding="utf-8"), ids)


def load_template(payload: Any, ids: Optional[IdGenerator] = None) -> Document:
    """Validate and convert a decoded template payload."""
    if not isinstance(payload, Mapping):
        raise TemplateImportError("Template must be a JSON object")
    rows = payload.get(TEMPLATE_ROWS_KEY)
    styles = payload.get(TEMPLATE_STYLES_KEY)
    if not isinstance(rows, list):
        raise TemplateImportError("Template 'rows' must be a list")
    if not isinstance(styles, Mapping):
        raise TemplateImportError("Template 'styles' must be an object")
    loader = _TemplateReader(ids or IdGenerator())
    document = Document(
        rows=tuple(loader.row(row, index) for index, row in enumerate(rows)),
        styles=GlobalStyle.from_dict(styles),
    )
    LOGGER.debug("Loaded template with %d rows", len(document.rows))
    return document


class _TemplateReader:
    """Converts nested template records, keeping ids unique."""

    def __init__(self, ids: IdGenerator) -> None:
        self._ids = ids
        self._seen: Set[str] = set()

    def row(self, data: Any, index: int) -> Row:
        data = _require_mapping(data, f"rows[{index}]")
        columns = _require_list(data.get("columns", []), f"rows[{index}].columns")
        return Row(
            id=self._unique_id(data.get("id"), "row"),
            columns=tuple(self.column(column, f"rows[{index}].columns[{i}]") for i, column in enumerate(columns)),
            style=_style(data.get("style"), f"rows[{index}].style"),
        )

    def column(self, data: Any, where: str) -> Column:
        data = _require_mapping(data, where)
        elements = _require_list(data.get("elements", []), f"{where}.elements")
        vertical_align = data.get("verticalAlign")
        if vertical_align is not None and not isinstance(vertical_align, str):
            raise TemplateImportError(f"{where}.verticalAlign must be a string")
        return Column(
            id=self._unique_id(data.get("id"), "col"),
            elements=tuple(self.element(element, f"{where}.elements[{i}]") for i, element in enumerate(elements)),
            style=_style(data.get("style"), f"{where}.style"),
            vertical_align=vertical_align or None,
        )

    def element(self, data: Any, where: str) -> Element:
        data = _require_mapping(data, where)
        element_type = data.get("type")
        if element_type not in ELEMENT_TYPES:
            raise TemplateImportError(f"{where}.type {element_type!r} is not a supported element type")
        content = _require_mapping(data.get("content") or {}, f"{where}.content")
        return Element(
            id=self._unique_id(data.get("id"), "el"),
            type=element_type,
            content=_content(element_type, content, f"{where}.content"),
            style=_style(data.get("style"), f"{where}.style"),
        )

    def _unique_id(self, value: Any, prefix: str) -> str:
        if isinstance(value, (str, int)) and str(value) and str(value) not in self._seen:
            identifier = str(value)
        else:
            identifier = self._ids.new_id(prefix)
            if value is not None:
                LOGGER.warning("Replacing duplicate or invalid id %r with %s", value, identifier)
        self._seen.add(identifier)
        return identifier


def _content(element_type: str, data: Mapping[str, Any], where: str) -> ElementContent:
    if element_type == TEXT:
        return TextContent(text=_string(data.get("text"), f"{where}.text"))
    if element_type == IMAGE:
        return ImageContent(src=_string(data.get("src"), f"{where}.src"), alt=_string(data.get("alt"), f"{where}.alt"))
    if element_type == BUTTON:
        return ButtonContent(
            text=_string(data.get("text"), f"{where}.text"),
            href=_string(data.get("href"), f"{where}.href"),
        )
    if element_type == SOCIAL:
        links: List[SocialLink] = []
        for index, link in enumerate(_require_list(data.get("links", []), f"{where}.links")):
            link = _require_mapping(link, f"{where}.links[{index}]")
            links.append(
                SocialLink(
                    platform=_string(link.get("platform"), f"{where}.links[{index}].platform"),
                    href=_string(link.get("href"), f"{where}.links[{index}].href"),
                )
            )
        return SocialContent(links=tuple(links))
    return EmptyContent()


def _style(value: Any, where: str) -> Style:
    if value is None:
        return {}
    value = _require_mapping(value, where)
    style: Style = {}
    for key, item in value.items():
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            raise TemplateImportError(f"{where}.{key} must be a string or a number")
        style[str(key)] = item
    return style


def _string(value: Any, where: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TemplateImportError(f"{where} must be a string")
    return value


def _require_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TemplateImportError(f"{where} must be an object")
    return value


def _require_list(value: Any, where: str) -> List[Any]:
    if not isinstance(value, list):
        raise TemplateImportError(f"{where} must be a list")
    return value

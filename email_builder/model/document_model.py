"""Aggregate model combining rows and the global style."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Tuple

from email_builder.config.defaults import DEFAULT_VERTICAL_ALIGN
from email_builder.model.elements import Column, Element, Row
from email_builder.model.style_model import GlobalStyle


@dataclass(frozen=True, slots=True)
class Document:
    """Immutable snapshot of an email template that the codec consumes."""

    rows: Tuple[Row, ...] = ()
    styles: GlobalStyle = field(default_factory=GlobalStyle)

    def iter_elements(self) -> Iterator[Element]:
        """Yield every element in reading order."""
        for row in self.rows:
            for column in row.columns:
                yield from column.elements


def effective_vertical_align(column: Column) -> str:
    """Column alignment: its own value, else the first element that sets one."""
    if column.vertical_align:
        return column.vertical_align
    for element in column.elements:
        value = (element.style or {}).get("verticalAlign")
        if value:
            return str(value)
    return DEFAULT_VERTICAL_ALIGN

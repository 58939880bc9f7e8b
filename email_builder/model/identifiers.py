"""Identifier generation for rows, columns and elements."""
from __future__ import annotations

import itertools
import uuid
from typing import Iterator, Optional


class IdGenerator:
    """Produces ids unique within a generator and, via a random token, across them.

    Ids look like ``el-3f9a1c2b-7``: prefix, session token, monotonic counter.
    """

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token or uuid.uuid4().hex[:8]
        self._counter: Iterator[int] = itertools.count(1)

    @property
    def token(self) -> str:
        return self._token

    def new_id(self, prefix: str) -> str:
        return f"{prefix}-{self._token}-{next(self._counter)}"


_DEFAULT_GENERATOR = IdGenerator()


def new_id(prefix: str) -> str:
    """Return an id from the process-wide generator."""
    return _DEFAULT_GENERATOR.new_id(prefix)

"""Read-only parsed view of one fetched archive page."""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

# html.parser never raises on unbalanced or unterminated markup; it closes
# what it can and keeps going.
_PARSER = "html.parser"
_WS_RE = re.compile(r"\s+")


class DocumentError(ValueError):
    """Raised when page content cannot be turned into a document at all."""


class ParsedDocument:
    """Parsed markup tree plus the raw source it was built from.

    The tree is never modified after construction, so any number of
    extractors may query the same instance concurrently.
    """

    __slots__ = ("_raw_text", "_soup")

    def __init__(self, raw_text: str | bytes) -> None:
        if isinstance(raw_text, bytes):
            raw_text = raw_text.decode("utf-8", errors="replace")
        if not isinstance(raw_text, str):
            raise DocumentError(f"page content must be text, got {type(raw_text).__name__}")
        self._raw_text = raw_text
        self._soup = BeautifulSoup(raw_text, _PARSER)

    @property
    def raw_text(self) -> str:
        return self._raw_text

    def select_first(self, selector: str) -> Optional[Tag]:
        """First element matching ``selector`` in document order."""
        return self._soup.select_one(selector)

    def select_all(self, selector: str) -> list[Tag]:
        return list(self._soup.select(selector))

    def attr_values(self, selector: str, attr: str) -> list[str]:
        """Non-empty ``attr`` values of every element matching ``selector``."""
        values = []
        for el in self._soup.select(selector):
            value = el.get(attr)
            if isinstance(value, list):
                value = " ".join(value)
            if value and value.strip():
                values.append(value.strip())
        return values

    def search_raw(self, pattern: re.Pattern[str]) -> list[str]:
        """Captures of ``pattern`` over the raw source, in source order.

        Each match contributes its first participating group, or the whole
        match when the pattern has no groups. This is the single seam for
        inline payload scraping; a structured payload parser can replace it
        without touching extractor call sites.
        """
        return [next((g for g in m.groups() if g is not None), m.group(0)) for m in pattern.finditer(self._raw_text)]

    @staticmethod
    def text_of(el: Optional[Tag]) -> str:
        """Visible text of ``el`` with whitespace collapsed."""
        if el is None:
            return ""
        return _WS_RE.sub(" ", el.get_text(" ", strip=True)).strip()


__all__ = ["DocumentError", "ParsedDocument"]

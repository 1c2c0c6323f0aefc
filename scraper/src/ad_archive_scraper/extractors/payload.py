"""Raw-text scraping of inline JSON-like payloads.

The archive page embeds its ad snapshot as script text such as
``"original_image_url":"https:\\/\\/scontent.xx.fbcdn.net\\/..."``. It is not
parsed as JSON; keys are located by pattern and their string values decoded.
"""

from __future__ import annotations

import json
import re
from functools import lru_cache

from ..document import ParsedDocument
from ..urls import is_absolute_http_url

_QUOTED = r'"((?:[^"\\]|\\.)*)"'


@lru_cache(maxsize=None)
def key_pattern(keys: tuple[str, ...]) -> re.Pattern[str]:
    """``"key": "string"`` or ``"key": 123`` for any of ``keys``."""
    alt = "|".join(re.escape(k) for k in keys)
    return re.compile(rf'"(?:{alt})"\s*:\s*(?:{_QUOTED}|(-?\d+))')


@lru_cache(maxsize=None)
def nested_text_pattern(keys: tuple[str, ...]) -> re.Pattern[str]:
    """``"key": {"text": "string"}`` for any of ``keys``."""
    alt = "|".join(re.escape(k) for k in keys)
    return re.compile(rf'"(?:{alt})"\s*:\s*\{{\s*"text"\s*:\s*{_QUOTED}')


def unescape_payload(raw: str) -> str:
    try:
        return json.loads(f'"{raw}"')
    except ValueError:
        # Literal control characters make the string invalid JSON.
        return raw.replace("\\/", "/").replace("\\", "")


def payload_values(doc: ParsedDocument, pattern: re.Pattern[str]) -> list[str]:
    """Decoded, stripped, non-empty payload values in source order."""
    values = []
    for raw in doc.search_raw(pattern):
        value = unescape_payload(raw).strip()
        if value:
            values.append(value)
    return values


def payload_urls(doc: ParsedDocument, keys: tuple[str, ...]) -> list[str]:
    return [v for v in payload_values(doc, key_pattern(keys)) if is_absolute_http_url(v)]


__all__ = ["key_pattern", "nested_text_pattern", "payload_urls", "payload_values", "unescape_payload"]

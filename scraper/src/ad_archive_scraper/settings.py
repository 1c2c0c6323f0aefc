"""Tunable extraction heuristics.

Every value here was tuned by observation against live archive pages, whose
markup is unversioned and changes without notice. They are grouped in one
frozen object so a re-tune never touches the strategy chains themselves.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

T = TypeVar("T")


class Occurrence(str, Enum):
    """Which match to keep when a strategy sees several candidates."""

    FIRST = "first"
    LAST = "last"

    def pick(self, candidates: Sequence[T]) -> T | None:
        if not candidates:
            return None
        return candidates[0] if self is Occurrence.FIRST else candidates[-1]


@dataclass(frozen=True)
class ExtractionSettings:
    # Creative assets are served from the CDN; anything else is page chrome.
    asset_host_token: str = "fbcdn"
    # Profile avatars and other thumbnails carry these dimension tokens.
    thumbnail_tokens: tuple[str, ...] = ("60x60",)

    source_hosts: tuple[str, ...] = ("facebook.com", "fb.com", "fb.me", "fbcdn.net")
    redirect_endpoint: str = "l.facebook.com/l.php"
    redirect_param: str = "u"

    # Inline payload keys, searched in the raw page source.
    payload_image_keys: tuple[str, ...] = ("original_image_url",)
    payload_video_keys: tuple[str, ...] = ("video_hd_url",)
    payload_link_keys: tuple[str, ...] = ("link_url",)
    payload_cta_text_keys: tuple[str, ...] = ("cta_text",)
    payload_page_name_keys: tuple[str, ...] = ("page_name",)
    payload_archive_id_keys: tuple[str, ...] = ("ad_archive_id",)
    payload_body_keys: tuple[str, ...] = ("body",)

    # Payloads embed progressively resized variants in ascending order; the
    # primary creative renders first in the DOM.
    payload_occurrence: Occurrence = Occurrence.LAST
    dom_occurrence: Occurrence = Occurrence.FIRST

    min_ad_text_chars: int = 20
    min_cta_text_chars: int = 2
    min_advertiser_chars: int = 2
    sponsored_label: str = "Sponsored"

    def is_asset_url(self, url: str | None) -> bool:
        return bool(url) and self.asset_host_token in url

    def is_thumbnail(self, url: str | None) -> bool:
        return bool(url) and any(token in url for token in self.thumbnail_tokens)


DEFAULT_SETTINGS = ExtractionSettings()

__all__ = ["DEFAULT_SETTINGS", "ExtractionSettings", "Occurrence"]

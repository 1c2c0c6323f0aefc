"""URL helpers for ad archive pages and their outbound links."""

from __future__ import annotations

import re
import urllib.parse
from collections.abc import Iterable

ARCHIVE_URL_RE = re.compile(r"facebook\.com/ads/archive/render_ad/")
AD_ID_RE = re.compile(r"^\d+$")


def parse_ad_id_from_url(url: str | None) -> str | None:
    """Return the numeric ``id`` query parameter of an archive URL, if any."""

    try:
        if not url:
            return None
        qs = urllib.parse.parse_qs(urllib.parse.urlparse(url).query)
        for candidate in qs.get("id", []):
            if AD_ID_RE.match(candidate):
                return candidate
        return None
    except ValueError:
        return None


def is_archive_url(url: str) -> bool:
    return bool(url) and bool(ARCHIVE_URL_RE.search(url))


def is_absolute_http_url(url: str | None) -> bool:
    if not url:
        return False
    try:
        parsed = urllib.parse.urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def host_matches(url: str, hosts: Iterable[str]) -> bool:
    """True when ``url``'s hostname is one of ``hosts`` or a subdomain of one.

    Raises ``ValueError`` for URLs ``urllib.parse`` refuses to split.
    """

    hostname = (urllib.parse.urlparse(url).hostname or "").lower()
    if not hostname:
        return False
    return any(hostname == h or hostname.endswith("." + h) for h in hosts)


def decode_redirect_target(href: str, param: str) -> str | None:
    """Return the destination carried in a redirect link's ``param`` query value.

    ``parse_qs`` percent-decodes the value, so ``?u=https%3A%2F%2Fexample.com``
    yields ``https://example.com``. Unparseable links yield ``None``.
    """

    try:
        parsed = urllib.parse.urlparse(href)
        qs = urllib.parse.parse_qs(parsed.query)
    except ValueError:
        return None
    target = qs.get(param, [None])[0]
    if not target or not is_absolute_http_url(target):
        return None
    return target


def normalize_domain(url: str | None) -> str | None:
    """Return the hostname of ``url`` with a leading ``www.`` label removed."""

    try:
        if not url:
            return None
        hostname = urllib.parse.urlparse(url).hostname
        if not hostname:
            return None
        if hostname.startswith("www."):
            hostname = hostname[len("www.") :]
        return hostname or None
    except ValueError:
        return None


__all__ = [
    "AD_ID_RE",
    "ARCHIVE_URL_RE",
    "decode_redirect_target",
    "host_matches",
    "is_absolute_http_url",
    "is_archive_url",
    "normalize_domain",
    "parse_ad_id_from_url",
]

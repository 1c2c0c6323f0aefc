"""Advertiser identity chains: page name, library ID, sponsorship flag."""

from __future__ import annotations

import re
from typing import Optional

from ..chain import FieldResult, Observer, first_long_enough, first_success, strategy
from ..document import ParsedDocument
from ..settings import ExtractionSettings
from .payload import key_pattern, payload_values

NAME_FIELD = "advertiser_name"
LIBRARY_ID_FIELD = "library_id"
SPONSORED_FIELD = "is_sponsored"

LIBRARY_ID_RE = re.compile(r"Library ID:?\s*(\d+)", re.IGNORECASE)


@strategy("payload_page_name")
def payload_page_name(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[str]:
    names = payload_values(doc, key_pattern(settings.payload_page_name_keys))
    return first_long_enough(names, settings.min_advertiser_chars)


@strategy("profile_link_text")
def profile_link_text(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[str]:
    spans = doc.select_all('a[href*="facebook.com/"] span')
    return first_long_enough([doc.text_of(s) for s in spans], settings.min_advertiser_chars)


@strategy("profile_image_alt")
def profile_image_alt(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[str]:
    return first_long_enough(doc.attr_values("img.img[alt]", "alt"), settings.min_advertiser_chars)


ADVERTISER_NAME_CHAIN = (payload_page_name, profile_link_text, profile_image_alt)


@strategy("library_id_label")
def library_id_label(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[str]:
    for el in doc.select_all('span:-soup-contains("Library ID")'):
        match = LIBRARY_ID_RE.search(doc.text_of(el))
        if match:
            return match.group(1)
    return None


@strategy("payload_archive_id")
def payload_archive_id(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[str]:
    for value in payload_values(doc, key_pattern(settings.payload_archive_id_keys)):
        if value.isdigit():
            return value
    return None


LIBRARY_ID_CHAIN = (library_id_label, payload_archive_id)


@strategy("sponsored_label")
def sponsored_label(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[bool]:
    label = settings.sponsored_label
    for el in doc.select_all(f':-soup-contains-own("{label}")'):
        if doc.text_of(el).casefold() == label.casefold():
            return True
    return None


@strategy("sponsored_attribute")
def sponsored_attribute(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[bool]:
    if doc.select_first(f'[aria-label="{settings.sponsored_label}"]') is not None:
        return True
    return None


SPONSORED_CHAIN = (sponsored_label, sponsored_attribute)


def extract_advertiser_name(
    doc: ParsedDocument,
    settings: ExtractionSettings,
    observer: Optional[Observer] = None,
) -> FieldResult[str]:
    return first_success(NAME_FIELD, ADVERTISER_NAME_CHAIN, doc, settings, observer)


def extract_library_id(
    doc: ParsedDocument,
    settings: ExtractionSettings,
    observer: Optional[Observer] = None,
) -> FieldResult[str]:
    return first_success(LIBRARY_ID_FIELD, LIBRARY_ID_CHAIN, doc, settings, observer)


def extract_is_sponsored(
    doc: ParsedDocument,
    settings: ExtractionSettings,
    observer: Optional[Observer] = None,
) -> FieldResult[bool]:
    """Sponsorship is only ever asserted; absence means "not shown as sponsored"."""
    return first_success(SPONSORED_FIELD, SPONSORED_CHAIN, doc, settings, observer)


__all__ = [
    "ADVERTISER_NAME_CHAIN",
    "LIBRARY_ID_CHAIN",
    "SPONSORED_CHAIN",
    "extract_advertiser_name",
    "extract_is_sponsored",
    "extract_library_id",
]

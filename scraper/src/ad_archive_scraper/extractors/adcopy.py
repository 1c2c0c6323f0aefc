"""Ad copy (primary body text) chain."""

from __future__ import annotations

from typing import Optional

from ..chain import FieldResult, Observer, first_long_enough, first_success, strategy
from ..document import ParsedDocument
from ..settings import ExtractionSettings
from .payload import nested_text_pattern, payload_values

FIELD = "ad_text"


@strategy("payload_body_text")
def payload_body_text(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[str]:
    bodies = payload_values(doc, nested_text_pattern(settings.payload_body_keys))
    return first_long_enough(bodies, settings.min_ad_text_chars)


@strategy("preview_message")
def preview_message(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[str]:
    messages = doc.select_all('[data-ad-preview="message"]')
    return first_long_enough([doc.text_of(m) for m in messages], settings.min_ad_text_chars)


@strategy("auto_dir_text")
def auto_dir_text(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[str]:
    blocks = doc.select_all('div[dir="auto"]')
    return first_long_enough([doc.text_of(b) for b in blocks], settings.min_ad_text_chars)


AD_TEXT_CHAIN = (payload_body_text, preview_message, auto_dir_text)


def extract_ad_text(
    doc: ParsedDocument,
    settings: ExtractionSettings,
    observer: Optional[Observer] = None,
) -> FieldResult[str]:
    return first_success(FIELD, AD_TEXT_CHAIN, doc, settings, observer)


__all__ = ["AD_TEXT_CHAIN", "extract_ad_text"]

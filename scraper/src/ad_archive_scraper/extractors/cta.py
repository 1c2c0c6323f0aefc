"""Call-to-action chains: destination URL and button label."""

from __future__ import annotations

from typing import Optional

from ..chain import FieldResult, Observer, first_long_enough, first_success, strategy
from ..document import ParsedDocument
from ..settings import ExtractionSettings
from ..urls import decode_redirect_target, host_matches
from .payload import key_pattern, payload_urls, payload_values

URL_FIELD = "cta_url"
TEXT_FIELD = "cta_text"


def _redirect_selector(settings: ExtractionSettings) -> str:
    return f'a[href*="{settings.redirect_endpoint}"]'


@strategy("payload_link")
def payload_link(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[str]:
    return settings.payload_occurrence.pick(payload_urls(doc, settings.payload_link_keys))


@strategy("redirect_anchor")
def redirect_anchor(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[str]:
    targets = []
    for href in doc.attr_values(_redirect_selector(settings), "href"):
        target = decode_redirect_target(href, settings.redirect_param)
        if target:
            targets.append(target)
    return settings.dom_occurrence.pick(targets)


@strategy("external_anchor")
def external_anchor(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[str]:
    external = []
    for href in doc.attr_values('a[href^="http"]', "href"):
        try:
            if host_matches(href, settings.source_hosts):
                continue
        except ValueError:
            continue
        external.append(href)
    return settings.dom_occurrence.pick(external)


CTA_URL_CHAIN = (payload_link, redirect_anchor, external_anchor)


@strategy("payload_cta_text")
def payload_cta_text(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[str]:
    texts = payload_values(doc, key_pattern(settings.payload_cta_text_keys))
    return first_long_enough(texts, settings.min_cta_text_chars)


@strategy("cta_button_text")
def cta_button_text(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[str]:
    buttons = doc.select_all(f'{_redirect_selector(settings)} [role="button"]')
    return first_long_enough([doc.text_of(b) for b in buttons], settings.min_cta_text_chars)


@strategy("cta_aria_label")
def cta_aria_label(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[str]:
    selector = _redirect_selector(settings)
    labels = doc.attr_values(f"{selector}[aria-label], {selector} [aria-label]", "aria-label")
    return first_long_enough(labels, settings.min_cta_text_chars)


CTA_TEXT_CHAIN = (payload_cta_text, cta_button_text, cta_aria_label)


def extract_cta_url(
    doc: ParsedDocument,
    settings: ExtractionSettings,
    observer: Optional[Observer] = None,
) -> FieldResult[str]:
    return first_success(URL_FIELD, CTA_URL_CHAIN, doc, settings, observer)


def extract_cta_text(
    doc: ParsedDocument,
    settings: ExtractionSettings,
    observer: Optional[Observer] = None,
) -> FieldResult[str]:
    return first_success(TEXT_FIELD, CTA_TEXT_CHAIN, doc, settings, observer)


__all__ = ["CTA_TEXT_CHAIN", "CTA_URL_CHAIN", "extract_cta_text", "extract_cta_url"]

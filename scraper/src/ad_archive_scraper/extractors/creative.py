"""Creative asset chain.

Tiers run from best to worst quality: a native video source, the full-size
image the ad links from, images inside the ad content containers, the
full-resolution image and HD video referenced in the inline payload, any CDN
image on the page, and finally the video poster frame.
"""

from __future__ import annotations

from typing import Optional

from ..chain import FieldResult, Observer, first_success, strategy
from ..document import ParsedDocument
from ..models import Creative, CreativeType
from ..settings import ExtractionSettings
from .payload import payload_urls

FIELD = "creative"

HOVER_LINK_IMAGE_SELECTOR = 'a[data-lynx-mode="hover"] img[src]'
AD_CONTENT_IMAGE_SELECTOR = (
    '[data-testid="ad-content-body-video-container"] img[src], '
    '[data-testid="ad-content-body-image-container"] img[src]'
)


def _full_size_images(doc: ParsedDocument, selector: str, settings: ExtractionSettings) -> list[str]:
    return [
        src
        for src in doc.attr_values(selector, "src")
        if settings.is_asset_url(src) and not settings.is_thumbnail(src)
    ]


def _creative(url: Optional[str], kind: CreativeType) -> Optional[Creative]:
    return Creative(url=url, type=kind) if url else None


@strategy("video_src")
def video_src(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[Creative]:
    sources = [src for src in doc.attr_values("video[src], video > source[src]", "src") if settings.is_asset_url(src)]
    return _creative(settings.dom_occurrence.pick(sources), CreativeType.VIDEO)


@strategy("hover_link_image")
def hover_link_image(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[Creative]:
    images = _full_size_images(doc, HOVER_LINK_IMAGE_SELECTOR, settings)
    return _creative(settings.dom_occurrence.pick(images), CreativeType.IMAGE)


@strategy("ad_content_image")
def ad_content_image(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[Creative]:
    images = _full_size_images(doc, AD_CONTENT_IMAGE_SELECTOR, settings)
    return _creative(settings.dom_occurrence.pick(images), CreativeType.IMAGE)


@strategy("payload_image")
def payload_image(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[Creative]:
    urls = payload_urls(doc, settings.payload_image_keys)
    return _creative(settings.payload_occurrence.pick(urls), CreativeType.IMAGE)


@strategy("payload_hd_video")
def payload_hd_video(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[Creative]:
    urls = payload_urls(doc, settings.payload_video_keys)
    return _creative(settings.payload_occurrence.pick(urls), CreativeType.VIDEO)


@strategy("asset_image")
def asset_image(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[Creative]:
    images = _full_size_images(doc, "img[src]", settings)
    return _creative(settings.dom_occurrence.pick(images), CreativeType.IMAGE)


@strategy("video_poster")
def video_poster(doc: ParsedDocument, settings: ExtractionSettings) -> Optional[Creative]:
    posters = doc.attr_values("video[poster]", "poster")
    return _creative(settings.dom_occurrence.pick(posters), CreativeType.VIDEO_THUMBNAIL)


CREATIVE_CHAIN = (
    video_src,
    hover_link_image,
    ad_content_image,
    payload_image,
    payload_hd_video,
    asset_image,
    video_poster,
)


def extract_creative(
    doc: ParsedDocument,
    settings: ExtractionSettings,
    observer: Optional[Observer] = None,
) -> FieldResult[Creative]:
    return first_success(FIELD, CREATIVE_CHAIN, doc, settings, observer)


__all__ = ["CREATIVE_CHAIN", "extract_creative"]

from dataclasses import replace

from ad_archive_scraper.document import ParsedDocument
from ad_archive_scraper.extractors import extract_creative
from ad_archive_scraper.models import CreativeType
from ad_archive_scraper.settings import DEFAULT_SETTINGS, Occurrence


def _creative(html, settings=DEFAULT_SETTINGS):
    return extract_creative(ParsedDocument(html), settings)


def test_native_video_beats_payload_hd_video():
    html = r"""
    <video src="https://video.xx.fbcdn.net/v/native.mp4" poster="https://scontent.xx.fbcdn.net/v/poster.jpg"></video>
    <script>{"video_hd_url":"https:\/\/video.xx.fbcdn.net\/v\/hd.mp4"}</script>
    """
    result = _creative(html)
    assert result.strategy == "video_src"
    assert result.value.url == "https://video.xx.fbcdn.net/v/native.mp4"
    assert result.value.type is CreativeType.VIDEO


def test_payload_hd_video_is_unescaped():
    html = r'<script>{"video_hd_url":"https:\/\/video.xx.fbcdn.net\/v\/hd.mp4?efg=a%3D"}</script>'
    result = _creative(html)
    assert result.strategy == "payload_hd_video"
    assert result.value.url == "https://video.xx.fbcdn.net/v/hd.mp4?efg=a%3D"
    assert result.value.type is CreativeType.VIDEO


def test_payload_image_takes_last_occurrence_by_default():
    html = r"""
    <script>
      {"original_image_url":"https:\/\/scontent.xx.fbcdn.net\/v\/small.jpg"}
      {"original_image_url":"https:\/\/scontent.xx.fbcdn.net\/v\/full.jpg"}
    </script>
    """
    assert _creative(html).value.url == "https://scontent.xx.fbcdn.net/v/full.jpg"

    first = replace(DEFAULT_SETTINGS, payload_occurrence=Occurrence.FIRST)
    assert _creative(html, first).value.url == "https://scontent.xx.fbcdn.net/v/small.jpg"


def test_hover_link_image_beats_other_cdn_images():
    html = """
    <img src="https://scontent.xx.fbcdn.net/v/unrelated.jpg">
    <a data-lynx-mode="hover" href="#"><img src="https://scontent.xx.fbcdn.net/v/creative.jpg"></a>
    """
    result = _creative(html)
    assert result.strategy == "hover_link_image"
    assert result.value.url == "https://scontent.xx.fbcdn.net/v/creative.jpg"
    assert result.value.type is CreativeType.IMAGE


def test_ad_content_container_image():
    html = """
    <div data-testid="ad-content-body-image-container">
      <img src="https://scontent.xx.fbcdn.net/v/body.jpg">
    </div>
    """
    result = _creative(html)
    assert result.strategy == "ad_content_image"
    assert result.value.url == "https://scontent.xx.fbcdn.net/v/body.jpg"


def test_thumbnails_are_never_selected():
    html = """
    <a data-lynx-mode="hover" href="#"><img src="https://scontent.xx.fbcdn.net/v/t39/p60x60/avatar.jpg"></a>
    <img src="https://scontent.xx.fbcdn.net/v/t39/p60x60/logo.jpg">
    <img src="https://scontent.xx.fbcdn.net/v/t45/full.jpg">
    """
    result = _creative(html)
    assert result.strategy == "asset_image"
    assert result.value.url == "https://scontent.xx.fbcdn.net/v/t45/full.jpg"

    only_thumbs = '<img src="https://scontent.xx.fbcdn.net/v/t39/p60x60/avatar.jpg">'
    assert not _creative(only_thumbs).found


def test_non_cdn_video_falls_back_to_poster():
    html = '<video src="https://cdn.example/v.mp4" poster="https://scontent.xx.fbcdn.net/v/poster.jpg"></video>'
    result = _creative(html)
    assert result.strategy == "video_poster"
    assert result.value.url == "https://scontent.xx.fbcdn.net/v/poster.jpg"
    assert result.value.type is CreativeType.VIDEO_THUMBNAIL


def test_page_without_media_has_no_creative():
    result = _creative("<html><body><p>nothing to see</p></body></html>")
    assert not result.found
    assert result.strategy == "none"

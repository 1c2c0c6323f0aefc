from ad_archive_scraper.document import ParsedDocument
from ad_archive_scraper.extractors import (
    extract_ad_text,
    extract_advertiser_name,
    extract_is_sponsored,
    extract_library_id,
)
from ad_archive_scraper.settings import DEFAULT_SETTINGS


def _doc(html):
    return ParsedDocument(html)


def test_ad_text_rejects_short_blocks():
    short = "Shop now!!"
    long = "Fresh coffee, every day!!"
    assert len(short) == 10 and len(long) == 25

    html = f'<div dir="auto">{short}</div><div dir="auto">{long}</div>'
    result = extract_ad_text(_doc(html), DEFAULT_SETTINGS)
    assert (result.strategy, result.value) == ("auto_dir_text", long)

    assert not extract_ad_text(_doc(f'<div dir="auto">{short}</div>'), DEFAULT_SETTINGS).found


def test_ad_text_prefers_payload_body_then_preview_message():
    html = r"""
    <script>{"body":{"text":"Summer sale – everything must go this week"}}</script>
    <div data-ad-preview="message">Preview copy that is long enough to count</div>
    """
    result = extract_ad_text(_doc(html), DEFAULT_SETTINGS)
    assert result.strategy == "payload_body_text"
    assert result.value == "Summer sale – everything must go this week"

    html = '<div data-ad-preview="message">Preview copy that is long enough to count</div>'
    assert extract_ad_text(_doc(html), DEFAULT_SETTINGS).strategy == "preview_message"


def test_advertiser_name_tiers():
    payload = r'<script>{"page_name":"Acme Outdoors"}</script><a href="https://www.facebook.com/x"><span>Other</span></a>'
    result = extract_advertiser_name(_doc(payload), DEFAULT_SETTINGS)
    assert (result.strategy, result.value) == ("payload_page_name", "Acme Outdoors")

    link = '<a href="https://www.facebook.com/acme"><span>Acme Outdoors</span></a>'
    result = extract_advertiser_name(_doc(link), DEFAULT_SETTINGS)
    assert (result.strategy, result.value) == ("profile_link_text", "Acme Outdoors")

    alt = '<img class="x1 img" alt="Acme Outdoors" src="https://scontent.xx.fbcdn.net/p60x60/a.jpg">'
    result = extract_advertiser_name(_doc(alt), DEFAULT_SETTINGS)
    assert (result.strategy, result.value) == ("profile_image_alt", "Acme Outdoors")


def test_library_id_from_label_then_payload():
    html = '<span>Library ID: 987654321</span><script>{"ad_archive_id":"111"}</script>'
    result = extract_library_id(_doc(html), DEFAULT_SETTINGS)
    assert (result.strategy, result.value) == ("library_id_label", "987654321")

    html = '<script>{"ad_archive_id":"2500687420313026"}</script>'
    result = extract_library_id(_doc(html), DEFAULT_SETTINGS)
    assert (result.strategy, result.value) == ("payload_archive_id", "2500687420313026")

    assert not extract_library_id(_doc("<span>Library ID: pending</span>"), DEFAULT_SETTINGS).found


def test_sponsored_label_and_attribute():
    assert extract_is_sponsored(_doc("<div><span>Sponsored</span></div>"), DEFAULT_SETTINGS).value is True

    result = extract_is_sponsored(_doc('<a aria-label="Sponsored" href="#"></a>'), DEFAULT_SETTINGS)
    assert (result.strategy, result.value) == ("sponsored_attribute", True)


def test_sponsored_is_absent_without_the_exact_label():
    html = "<p>Sponsored content guidelines apply to this page.</p>"
    assert not extract_is_sponsored(_doc(html), DEFAULT_SETTINGS).found

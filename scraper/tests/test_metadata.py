from ad_archive_scraper.metadata import build_record_row
from ad_archive_scraper.models import AdRecord, CreativeType, RecordStatus
from ad_archive_scraper.session import failed_record

URL = "https://www.facebook.com/ads/archive/render_ad/?id=123&access_token=X"
TS = "2025-01-01T00:00:00+00:00"


def test_build_record_row_success_layout():
    record = AdRecord(
        source_url=URL,
        crawled_at=TS,
        status=RecordStatus.SUCCESS,
        ad_id="123",
        advertiser_name="Acme",
        creative_url="https://scontent.xx.fbcdn.net/v/a.jpg",
        creative_type=CreativeType.IMAGE,
        provenance=(("creative", "asset_image"),),
    )
    row = build_record_row(record, scraper_version="ad_archive:test")
    assert list(row) == [
        "status",
        "source_url",
        "ad_id",
        "crawled_at",
        "advertiser_name",
        "library_id",
        "is_sponsored",
        "ad_text",
        "creative_url",
        "creative_type",
        "cta_url",
        "cta_text",
        "cta_domain",
        "provenance",
        "scraper_version",
    ]
    assert row["status"] == "SUCCESS"
    assert row["creative_type"] == "image"
    assert row["is_sponsored"] is False
    assert row["provenance"] == {"creative": "asset_image"}
    assert row["scraper_version"] == "ad_archive:test"


def test_build_record_row_error_keeps_identity_and_reason():
    record = AdRecord(source_url=URL, crawled_at=TS, status=RecordStatus.ERROR, ad_id="123", error="DocumentError: bad")
    row = build_record_row(record, scraper_version="v")
    assert row["status"] == "ERROR"
    assert row["error"] == "DocumentError: bad"
    assert row["creative_type"] == "unknown"
    assert list(row)[-1] == "scraper_version"


def test_build_record_row_failed_has_no_content_fields():
    row = build_record_row(failed_record(URL, "timeout", 2, TS), scraper_version="v")
    assert list(row) == ["status", "source_url", "ad_id", "crawled_at", "error", "retry_count", "scraper_version"]
    assert row["status"] == "FAILED"
    assert row["ad_id"] == "123"
    assert row["retry_count"] == 2

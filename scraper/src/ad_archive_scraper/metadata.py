"""Deterministic row layout shared by every sink."""

from __future__ import annotations

from collections import OrderedDict
from typing import Any
from typing import OrderedDict as OrderedDictType

from .models import AdRecord, RecordStatus

CONTENT_FIELDS = (
    "advertiser_name",
    "library_id",
    "is_sponsored",
    "ad_text",
    "creative_url",
    "creative_type",
    "cta_url",
    "cta_text",
    "cta_domain",
)


def build_record_row(record: AdRecord, *, scraper_version: str) -> OrderedDictType[str, Any]:
    """Return the sink row with fixed key ordering for auditability.

    ``FAILED`` rows carry identity, the transport error and the retry count
    only; no content fields exist for a page that was never fetched.
    """

    data = record.to_dict()
    row: OrderedDictType[str, Any] = OrderedDict()
    row["status"] = data["status"]
    row["source_url"] = data["source_url"]
    row["ad_id"] = data["ad_id"]
    row["crawled_at"] = data["crawled_at"]
    if record.status is RecordStatus.FAILED:
        row["error"] = data["error"]
        row["retry_count"] = data["retry_count"]
    else:
        for name in CONTENT_FIELDS:
            row[name] = data[name]
        if data["error"]:
            row["error"] = data["error"]
        row["provenance"] = data["provenance"]
    row["scraper_version"] = scraper_version
    return row


__all__ = ["CONTENT_FIELDS", "build_record_row"]

"""Entry points invoked once per archive URL."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Union

from .assembler import RecordAssembler
from .chain import Observer
from .document import ParsedDocument
from .models import AdRecord, RecordStatus
from .settings import DEFAULT_SETTINGS, ExtractionSettings
from .urls import parse_ad_id_from_url

UTC = getattr(datetime, "UTC", timezone.utc)

Timestamp = Union[datetime, str, None]


def capture_timestamp(value: Timestamp = None) -> str:
    """ISO-8601 UTC capture time; ``None`` means now, naive datetimes are taken as UTC."""

    if isinstance(value, str):
        return value
    if value is None:
        value = datetime.now(UTC)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()


def _describe(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__


def extract_ad_record(
    source_url: str,
    content: Union[str, bytes],
    crawled_at: Timestamp = None,
    *,
    settings: Optional[ExtractionSettings] = None,
    observer: Optional[Observer] = None,
) -> AdRecord:
    """Turn one fetched page into exactly one finalized record.

    Field misses come back as absent values on a ``SUCCESS`` record. A fault
    at the session level, such as content that cannot form a document, yields
    an ``ERROR`` record carrying the identity fields and the fault description.
    """

    assembler = RecordAssembler(source_url, capture_timestamp(crawled_at))
    try:
        doc = ParsedDocument(content)
        assembler.populate(doc, settings or DEFAULT_SETTINGS, observer)
    except Exception as exc:  # session boundary: never let one page take down the run
        return assembler.finalize(error=_describe(exc))
    return assembler.finalize()


def failed_record(
    source_url: str,
    error: str,
    retry_count: int,
    crawled_at: Timestamp = None,
) -> AdRecord:
    """Minimal record for a page the fetch layer gave up on. No extractor runs."""

    return AdRecord(
        source_url=source_url,
        crawled_at=capture_timestamp(crawled_at),
        status=RecordStatus.FAILED,
        ad_id=parse_ad_id_from_url(source_url),
        error=error,
        retry_count=retry_count,
    )


__all__ = ["capture_timestamp", "extract_ad_record", "failed_record"]

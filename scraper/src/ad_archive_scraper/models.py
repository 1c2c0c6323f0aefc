"""Record types handed from the extraction engine to the sinks."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional


class RecordStatus(str, Enum):
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"  # the page was fetched but could not be processed
    FAILED = "FAILED"  # the page was never fetched


class CreativeType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    VIDEO_THUMBNAIL = "video_thumbnail"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Creative:
    url: str
    type: CreativeType


@dataclass(frozen=True)
class AdRecord:
    """One output row per crawled archive URL. Never mutated once built."""

    source_url: str
    crawled_at: str
    status: RecordStatus
    ad_id: Optional[str] = None
    advertiser_name: Optional[str] = None
    library_id: Optional[str] = None
    is_sponsored: bool = False
    ad_text: Optional[str] = None
    creative_url: Optional[str] = None
    creative_type: CreativeType = CreativeType.UNKNOWN
    cta_url: Optional[str] = None
    cta_text: Optional[str] = None
    cta_domain: Optional[str] = None
    error: Optional[str] = None
    retry_count: Optional[int] = None
    # (field, strategy) pairs in extraction order
    provenance: tuple[tuple[str, str], ...] = ()

    def strategy_for(self, field: str) -> Optional[str]:
        return dict(self.provenance).get(field)

    def to_dict(self) -> dict[str, Any]:
        """Flat key/value form with enums rendered as their string values."""

        row = asdict(self)
        row["status"] = self.status.value
        row["creative_type"] = self.creative_type.value
        row["provenance"] = dict(self.provenance)
        return row


__all__ = ["AdRecord", "Creative", "CreativeType", "RecordStatus"]

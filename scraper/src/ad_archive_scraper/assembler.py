"""Merge per-field results into one finalized ``AdRecord``."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Optional

from .chain import NO_STRATEGY, FieldResult, Observer, StrategyAttempt
from .document import ParsedDocument
from .extractors import FIELD_EXTRACTORS
from .models import AdRecord, CreativeType, RecordStatus
from .settings import DEFAULT_SETTINGS, ExtractionSettings
from .urls import normalize_domain, parse_ad_id_from_url

Extractor = Callable[[ParsedDocument, ExtractionSettings, Optional[Observer]], FieldResult[Any]]


class AssemblerState(str, Enum):
    INITIALIZED = "INITIALIZED"
    FIELDS_POPULATED = "FIELDS_POPULATED"
    FINALIZED = "FINALIZED"


class AssemblerStateError(RuntimeError):
    """Raised on an out-of-order call; always a caller bug."""


class RecordAssembler:
    """Owns one record from creation to its single finalization.

    ``INITIALIZED`` holds identity only. ``populate`` runs every field
    extractor exactly once (``FIELDS_POPULATED``). ``finalize`` computes the
    status and returns the immutable record (``FINALIZED``).
    """

    def __init__(self, source_url: str, crawled_at: str) -> None:
        self.source_url = source_url
        self.crawled_at = crawled_at
        self.ad_id = parse_ad_id_from_url(source_url)
        self.state = AssemblerState.INITIALIZED
        self._results: dict[str, FieldResult[Any]] = {}

    def populate(
        self,
        doc: ParsedDocument,
        settings: ExtractionSettings = DEFAULT_SETTINGS,
        observer: Optional[Observer] = None,
        extractors: Mapping[str, Extractor] = FIELD_EXTRACTORS,
    ) -> None:
        if self.state is not AssemblerState.INITIALIZED:
            raise AssemblerStateError(f"populate() called in state {self.state.value}")
        for field, extract in extractors.items():
            try:
                result = extract(doc, settings, observer)
            except Exception as exc:  # a faulty chain costs its own field only
                if observer is not None:
                    observer(StrategyAttempt(field=field, strategy=NO_STRATEGY, matched=False, error=repr(exc)))
                result = FieldResult.absent()
            self._results[field] = result
        self.state = AssemblerState.FIELDS_POPULATED

    def result(self, field: str) -> FieldResult[Any]:
        return self._results.get(field, FieldResult.absent())

    def finalize(self, *, error: Optional[str] = None) -> AdRecord:
        """Build the record. ``error`` marks a session fault and yields ``ERROR``."""

        if self.state is AssemblerState.FINALIZED:
            raise AssemblerStateError("record already finalized")
        if error is None and self.state is not AssemblerState.FIELDS_POPULATED:
            raise AssemblerStateError("finalize() without error requires populated fields")

        creative = self.result("creative").value
        cta_url = self.result("cta_url").value
        record = AdRecord(
            source_url=self.source_url,
            crawled_at=self.crawled_at,
            status=RecordStatus.ERROR if error is not None else RecordStatus.SUCCESS,
            ad_id=self.ad_id,
            advertiser_name=self.result("advertiser_name").value,
            library_id=self.result("library_id").value,
            is_sponsored=bool(self.result("is_sponsored").value),
            ad_text=self.result("ad_text").value,
            creative_url=creative.url if creative else None,
            creative_type=creative.type if creative else CreativeType.UNKNOWN,
            cta_url=cta_url,
            cta_text=self.result("cta_text").value,
            cta_domain=normalize_domain(cta_url),
            error=error,
            provenance=tuple((field, res.strategy) for field, res in self._results.items()),
        )
        self.state = AssemblerState.FINALIZED
        return record


__all__ = ["AssemblerState", "AssemblerStateError", "RecordAssembler"]

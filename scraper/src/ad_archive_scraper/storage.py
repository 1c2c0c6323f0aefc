"""Append-only dataset sink writing one JSON object per line."""

from __future__ import annotations

import json
import os
from typing import IO, Any, Optional, Protocol

from .logging import jlog
from .metadata import build_record_row
from .models import AdRecord

DEFAULT_DATASET_PATH = "storage/datasets/default/records.jsonl"


class RecordSink(Protocol):
    def append(self, record: AdRecord) -> None: ...

    def close(self) -> None: ...


def serialize_row(row: dict[str, Any]) -> str:
    return json.dumps(row, ensure_ascii=False)


class JsonlDatasetSink:
    """Appends finalized records to a JSON Lines file. Rows are never rewritten."""

    def __init__(self, path: str = DEFAULT_DATASET_PATH, *, scraper_version: str, dry_run: bool = False) -> None:
        self.path = os.path.expanduser(path)
        self.scraper_version = scraper_version
        self.dry_run = dry_run
        self._fh: Optional[IO[str]] = None

    def _handle(self) -> IO[str]:
        if self._fh is None:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            self._fh = open(self.path, "a", encoding="utf-8")
        return self._fh

    def append(self, record: AdRecord) -> None:
        row = build_record_row(record, scraper_version=self.scraper_version)
        if self.dry_run:
            jlog("info", event="dry_run_append", path=self.path, ad_id=record.ad_id, status=row["status"])
            return
        fh = self._handle()
        fh.write(serialize_row(row) + "\n")
        fh.flush()

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None


__all__ = ["DEFAULT_DATASET_PATH", "JsonlDatasetSink", "RecordSink", "serialize_row"]

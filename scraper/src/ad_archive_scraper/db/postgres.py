"""Postgres sink for finalized ad records (append-only)."""

from __future__ import annotations

import os
from typing import Any, Optional

import psycopg2
from psycopg2.extras import Json

from ..logging import jlog
from ..metadata import build_record_row
from ..models import AdRecord

DEFAULT_TABLE = "ad_records"

AD_RECORDS_DDL = """
CREATE TABLE IF NOT EXISTS {table} (
    id              BIGSERIAL PRIMARY KEY,
    status          TEXT NOT NULL,
    source_url      TEXT NOT NULL,
    ad_id           TEXT,
    crawled_at      TIMESTAMPTZ NOT NULL,
    advertiser_name TEXT,
    library_id      TEXT,
    is_sponsored    BOOLEAN,
    ad_text         TEXT,
    creative_url    TEXT,
    creative_type   TEXT,
    cta_url         TEXT,
    cta_text        TEXT,
    cta_domain      TEXT,
    error           TEXT,
    retry_count     INTEGER,
    provenance      JSONB,
    scraper_version TEXT,
    inserted_at     TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""

_COLUMNS = (
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
    "error",
    "retry_count",
    "provenance",
    "scraper_version",
)


def sql_connect(sql_conn: str | None, db_host: str | None = None, db_port: int | None = None):
    """Return a psycopg2 connection using either TCP or a Cloud SQL socket."""

    dbname = os.getenv("DB_NAME", "adsdb")
    user = os.getenv("DB_USER", "postgres")
    password = os.getenv("DB_PASSWORD")
    if not password:
        raise RuntimeError("DB_PASSWORD environment variable is required for database connections")

    if db_host:
        return psycopg2.connect(
            host=db_host,
            port=db_port or 5432,
            dbname=dbname,
            user=user,
            password=password,
            connect_timeout=10,
            sslmode=os.getenv("DB_SSLMODE", "prefer"),
        )

    if not sql_conn:
        raise RuntimeError("sql_conn must be provided when db_host is not set")
    return psycopg2.connect(
        host=f"/cloudsql/{sql_conn}",
        dbname=dbname,
        user=user,
        password=password,
        connect_timeout=10,
    )


def ensure_schema(con, *, table: str = DEFAULT_TABLE) -> None:
    with con.cursor() as cur:
        cur.execute(AD_RECORDS_DDL.format(table=table))
    con.commit()


def record_values(record: AdRecord, *, scraper_version: str) -> tuple[Any, ...]:
    """Column values in ``_COLUMNS`` order; keys a row does not carry become NULL."""

    row = build_record_row(record, scraper_version=scraper_version)
    values = []
    for col in _COLUMNS:
        value = row.get(col)
        if col == "provenance" and value is not None:
            value = Json(value)
        values.append(value)
    return tuple(values)


def insert_record(
    con,
    record: AdRecord,
    *,
    scraper_version: str,
    table: str = DEFAULT_TABLE,
    dry_run: bool = False,
) -> None:
    """Append one record. There is no update path; every call adds a row."""

    if dry_run:
        jlog(
            "info",
            event="dry_run_insert",
            table=table,
            ad_id=record.ad_id,
            status=record.status.value,
        )
        return
    placeholders = ", ".join(["%s"] * len(_COLUMNS))
    try:
        with con.cursor() as cur:
            cur.execute(
                f"INSERT INTO {table} ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                record_values(record, scraper_version=scraper_version),
            )
        con.commit()
    except Exception:
        # leave the connection usable for the next record
        con.rollback()
        raise


class PostgresSink:
    def __init__(self, con, *, scraper_version: str, table: str = DEFAULT_TABLE, dry_run: bool = False) -> None:
        self.con = con
        self.scraper_version = scraper_version
        self.table = table
        self.dry_run = dry_run
        if not dry_run:
            ensure_schema(con, table=table)

    def append(self, record: AdRecord) -> None:
        insert_record(self.con, record, scraper_version=self.scraper_version, table=self.table, dry_run=self.dry_run)

    def close(self) -> None:
        con: Optional[Any] = self.con
        if con is not None:
            con.close()
            self.con = None


__all__ = [
    "AD_RECORDS_DDL",
    "DEFAULT_TABLE",
    "PostgresSink",
    "ensure_schema",
    "insert_record",
    "record_values",
    "sql_connect",
]

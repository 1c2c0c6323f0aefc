"""Database helpers for the record sink."""

from .postgres import (
    AD_RECORDS_DDL,
    DEFAULT_TABLE,
    PostgresSink,
    ensure_schema,
    insert_record,
    record_values,
    sql_connect,
)

__all__ = [
    "AD_RECORDS_DDL",
    "DEFAULT_TABLE",
    "PostgresSink",
    "ensure_schema",
    "insert_record",
    "record_values",
    "sql_connect",
]

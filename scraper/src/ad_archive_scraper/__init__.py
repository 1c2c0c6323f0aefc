"""Structured ad record extraction from ad archive pages."""

from .assembler import AssemblerState, AssemblerStateError, RecordAssembler
from .chain import FieldResult, Strategy, StrategyAttempt, first_success
from .document import DocumentError, ParsedDocument
from .logging import adlog, jlog, strategy_observer
from .metadata import build_record_row
from .models import AdRecord, Creative, CreativeType, RecordStatus
from .session import extract_ad_record, failed_record
from .settings import DEFAULT_SETTINGS, ExtractionSettings, Occurrence
from .urls import normalize_domain, parse_ad_id_from_url
from .versioning import get_scraper_version

__version__ = "0.1.0"

__all__ = [
    "AdRecord",
    "AssemblerState",
    "AssemblerStateError",
    "Creative",
    "CreativeType",
    "DEFAULT_SETTINGS",
    "DocumentError",
    "ExtractionSettings",
    "FieldResult",
    "Occurrence",
    "ParsedDocument",
    "RecordAssembler",
    "RecordStatus",
    "Strategy",
    "StrategyAttempt",
    "adlog",
    "build_record_row",
    "extract_ad_record",
    "failed_record",
    "first_success",
    "get_scraper_version",
    "jlog",
    "normalize_domain",
    "parse_ad_id_from_url",
    "strategy_observer",
]

"""Scraper version resolution helpers."""

from __future__ import annotations

import os

SCRIPT_NAME = "ad_archive"
SCRIPT_VERSION = "2025-11-04.1"


def get_scraper_version(script_name: str = SCRIPT_NAME, script_version: str = SCRIPT_VERSION) -> str:
    """Return the version stamped on every sink row; ``AD_SCRAPER_VERSION`` overrides it."""

    return os.getenv("AD_SCRAPER_VERSION", f"{script_name}:{script_version}")


__all__ = ["SCRIPT_NAME", "SCRIPT_VERSION", "get_scraper_version"]

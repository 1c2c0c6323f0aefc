#!/usr/bin/env python3
"""CLI shim for the ad archive record scraper."""
from __future__ import annotations

import asyncio
import logging
import os

from ad_archive_scraper.logging import configure_logging, jlog, logging_context, set_global_context
from ad_archive_scraper.pipeline import CliArgs, ConfigError, parse_args, run
from ad_archive_scraper.versioning import SCRIPT_NAME, get_scraper_version


def main() -> None:
    """Parse CLI arguments and crawl every configured archive URL."""
    configure_logging(logging.DEBUG if os.getenv("AD_SCRAPER_DEBUG") else logging.INFO)
    set_global_context(app="ad_archive_scraper", pipeline=SCRIPT_NAME)
    with logging_context(script=SCRIPT_NAME, scraper_version=get_scraper_version()):
        try:
            args: CliArgs = parse_args()
        except ConfigError as exc:
            jlog("error", event="invalid_config", error=str(exc))
            raise SystemExit(2) from exc
        asyncio.run(run(args))


if __name__ == "__main__":
    main()

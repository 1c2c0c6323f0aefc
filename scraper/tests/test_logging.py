import json
import logging

from ad_archive_scraper.chain import StrategyAttempt
from ad_archive_scraper.logging import jlog, logging_context, strategy_observer


def _payloads(caplog):
    return [json.loads(r.getMessage()) for r in caplog.records if r.name == "scraper"]


def test_jlog_merges_context(caplog):
    caplog.set_level(logging.INFO, logger="scraper")
    with logging_context(run_id="r1"):
        jlog("info", event="run_config", url_count=2)
    jlog("info", event="run_finished")

    inside, outside = _payloads(caplog)
    assert inside["run_id"] == "r1"
    assert inside["url_count"] == 2
    assert "run_id" not in outside


def test_strategy_observer_levels(caplog):
    caplog.set_level(logging.DEBUG, logger="scraper")
    observe = strategy_observer(ad_id="42", url="https://example.com/?id=42")
    observe(StrategyAttempt(field="creative", strategy="video_src", matched=False))
    observe(StrategyAttempt(field="cta_url", strategy="redirect_anchor", matched=False, error="ValueError('x')"))

    levels = [r.levelno for r in caplog.records if r.name == "scraper"]
    assert levels == [logging.DEBUG, logging.WARNING]
    miss, fault = _payloads(caplog)
    assert miss["event"] == "strategy_attempt"
    assert miss["ad_id"] == "42"
    assert miss["strategy"] == "video_src"
    assert fault["error"] == "ValueError('x')"

import pytest

from ad_archive_scraper.chain import NO_STRATEGY, FieldResult, Strategy, first_long_enough, first_success
from ad_archive_scraper.document import ParsedDocument
from ad_archive_scraper.settings import DEFAULT_SETTINGS, Occurrence

DOC = ParsedDocument("<p>hello</p>")


def _const(name, value):
    return Strategy(name=name, func=lambda doc, settings: value)


def _raises(name, exc):
    def func(doc, settings):
        raise exc

    return Strategy(name=name, func=func)


def test_first_success_stops_at_first_non_empty_value():
    calls = []
    chain = (
        _const("empty", None),
        _const("blank", "   "),
        _const("winner", "value"),
        Strategy(name="never", func=lambda doc, settings: calls.append("never") or "late"),
    )
    result = first_success("field", chain, DOC, DEFAULT_SETTINGS)
    assert result == FieldResult(value="value", strategy="winner")
    assert calls == []


def test_exhausted_chain_is_absent_not_an_error():
    result = first_success("field", (_const("a", None), _const("b", "")), DOC, DEFAULT_SETTINGS)
    assert not result.found
    assert result.strategy == NO_STRATEGY


def test_value_error_in_one_tier_falls_through_to_the_next():
    attempts = []
    chain = (_raises("broken", ValueError("Invalid IPv6 URL")), _const("fallback", "ok"))
    result = first_success("field", chain, DOC, DEFAULT_SETTINGS, attempts.append)
    assert result.strategy == "fallback"
    assert [(a.strategy, a.matched) for a in attempts] == [("broken", False), ("fallback", True)]
    assert "Invalid IPv6 URL" in attempts[0].error


def test_unexpected_faults_propagate_to_the_caller():
    with pytest.raises(RuntimeError):
        first_success("field", (_raises("bad", RuntimeError("boom")),), DOC, DEFAULT_SETTINGS)


def test_first_long_enough_filters_short_candidates():
    assert first_long_enough(["ok", "", "long enough"], 5) == "long enough"
    assert first_long_enough(["no"], 5) is None


def test_occurrence_pick():
    assert Occurrence.FIRST.pick(["a", "b", "c"]) == "a"
    assert Occurrence.LAST.pick(["a", "b", "c"]) == "c"
    assert Occurrence.LAST.pick([]) is None

"""Ordered fallback chains: named strategies tried until the first success."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from .document import ParsedDocument
from .settings import ExtractionSettings

T = TypeVar("T")

NO_STRATEGY = "none"


@dataclass(frozen=True)
class FieldResult(Generic[T]):
    """Outcome of one field chain: a value and the strategy that produced it."""

    value: Optional[T] = None
    strategy: str = NO_STRATEGY

    @property
    def found(self) -> bool:
        return self.value is not None

    @classmethod
    def absent(cls) -> "FieldResult[T]":
        return cls()


@dataclass(frozen=True)
class StrategyAttempt:
    """What a single strategy did, as reported to an observer."""

    field: str
    strategy: str
    matched: bool
    error: Optional[str] = None


Observer = Callable[[StrategyAttempt], None]
StrategyFunc = Callable[[ParsedDocument, ExtractionSettings], Optional[Any]]


@dataclass(frozen=True)
class Strategy:
    name: str
    func: StrategyFunc

    def __call__(self, doc: ParsedDocument, settings: ExtractionSettings) -> Optional[Any]:
        return self.func(doc, settings)


def strategy(name: str) -> Callable[[StrategyFunc], Strategy]:
    """Decorator turning a ``(doc, settings) -> value | None`` function into a named tier."""

    def wrap(func: StrategyFunc) -> Strategy:
        return Strategy(name=name, func=func)

    return wrap


def first_long_enough(texts: Sequence[str], min_chars: int) -> Optional[str]:
    """First candidate of at least ``min_chars``; shorter text is usually UI chrome."""
    for text in texts:
        if text and len(text) >= min_chars:
            return text
    return None


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def first_success(
    field: str,
    strategies: Sequence[Strategy],
    doc: ParsedDocument,
    settings: ExtractionSettings,
    observer: Optional[Observer] = None,
) -> FieldResult[Any]:
    """Run ``strategies`` in order and return the first non-empty value.

    A ``ValueError`` raised by a strategy (URL or number parsing) counts as a
    miss for that tier only. Anything else propagates to the caller, which
    owns field-level containment.
    """

    for strat in strategies:
        try:
            value = strat(doc, settings)
        except ValueError as exc:
            if observer is not None:
                observer(StrategyAttempt(field=field, strategy=strat.name, matched=False, error=repr(exc)))
            continue
        matched = _is_present(value)
        if observer is not None:
            observer(StrategyAttempt(field=field, strategy=strat.name, matched=matched))
        if matched:
            return FieldResult(value=value, strategy=strat.name)
    return FieldResult.absent()


__all__ = [
    "FieldResult",
    "NO_STRATEGY",
    "Observer",
    "Strategy",
    "StrategyAttempt",
    "first_long_enough",
    "first_success",
    "strategy",
]

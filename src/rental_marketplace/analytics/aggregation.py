"""Group-by aggregations over fetched rows.

Every function here is pure: inputs are read, never mutated, and results are
new dicts/lists. Rows whose grouping key or value cannot be resolved (for
instance a rental whose product was deleted) are left out of the result and
recorded on an :class:`AggregationStats` so the loss stays observable.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Hashable, Iterable, Optional, TypeVar

from dateutil import parser

from rental_marketplace.logging_config import get_logger

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

KeyFn = Callable[[T], Optional[K]]
ValueFn = Callable[[T], Optional[float]]

logger = get_logger(__name__)


@dataclass
class AggregationStats:
    """Counts rows that an aggregation had to skip."""

    skipped: int = 0
    reasons: Counter = field(default_factory=Counter)

    def record(self, reason: str) -> None:
        self.skipped += 1
        self.reasons[reason] += 1


def _skip(stats: Optional[AggregationStats], reason: str, row: Any) -> None:
    logger.warning("Skipping row (%s): %r", reason, row)
    if stats is not None:
        stats.record(reason)


def _safe_call(fn: Callable[[Any], Any], row: Any) -> Any:
    try:
        return fn(row)
    except (KeyError, TypeError, AttributeError, ValueError):
        return None


def _numeric(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


def count_by_group(
    rows: Iterable[T],
    key_fn: KeyFn,
    stats: Optional[AggregationStats] = None,
) -> dict[K, int]:
    """Count rows per ``key_fn(row)``."""
    counts: dict[K, int] = {}
    for row in rows:
        key = _safe_call(key_fn, row)
        if key is None:
            _skip(stats, "missing key", row)
            continue
        counts[key] = counts.get(key, 0) + 1
    return counts


def _sum_and_count(
    rows: Iterable[T],
    key_fn: KeyFn,
    value_fn: ValueFn,
    stats: Optional[AggregationStats],
) -> dict[K, tuple[float, int]]:
    totals: dict[K, tuple[float, int]] = {}
    for row in rows:
        key = _safe_call(key_fn, row)
        if key is None:
            _skip(stats, "missing key", row)
            continue
        value = _numeric(_safe_call(value_fn, row))
        if value is None:
            _skip(stats, "missing value", row)
            continue
        total, count = totals.get(key, (0.0, 0))
        totals[key] = (total + value, count + 1)
    return totals


def sum_by_group(
    rows: Iterable[T],
    key_fn: KeyFn,
    value_fn: ValueFn,
    stats: Optional[AggregationStats] = None,
) -> dict[K, float]:
    """Sum ``value_fn(row)`` per ``key_fn(row)``."""
    return {
        key: total
        for key, (total, _count) in _sum_and_count(rows, key_fn, value_fn, stats).items()
    }


def average_by_group(
    rows: Iterable[T],
    key_fn: KeyFn,
    value_fn: ValueFn,
    stats: Optional[AggregationStats] = None,
    *,
    keys: Iterable[K] = (),
) -> dict[K, Optional[float]]:
    """Average ``value_fn(row)`` per ``key_fn(row)``.

    Keys listed in ``keys`` that receive no rows map to ``None`` so that
    callers can render them as "no value" instead of zero.
    """
    averages: dict[K, Optional[float]] = {key: None for key in keys}
    for key, (total, count) in _sum_and_count(rows, key_fn, value_fn, stats).items():
        averages[key] = total / count if count else None
    return averages


def top_n(
    summary_rows: Iterable[T],
    key_fn: Callable[[T], Optional[float]],
    n: int,
) -> list[T]:
    """Return the ``n`` rows with the highest ``key_fn`` value.

    Ties keep their input order; rows without a value sort last.
    """
    if n <= 0:
        return []

    def sort_key(row: T) -> tuple[bool, float]:
        value = _numeric(_safe_call(key_fn, row))
        return (value is None, -(value or 0.0))

    return sorted(summary_rows, key=sort_key)[:n]


def global_mean(values: Iterable[Any]) -> Optional[float]:
    """Mean of the numeric values, or ``None`` when there are none."""
    numbers = [number for number in map(_numeric, values) if number is not None]
    if not numbers:
        return None
    return sum(numbers) / len(numbers)


def set_difference(
    items: Iterable[T],
    excluded_keys: Iterable[Any],
    key_fn: Callable[[T], Any],
) -> list[T]:
    """Items whose key is absent from ``excluded_keys``, in input order."""
    excluded = {key for key in excluded_keys if key is not None}
    return [item for item in items if _safe_call(key_fn, item) not in excluded]


def shared_keys(left: Iterable[Any], right: Iterable[Any]) -> list[Any]:
    """Distinct keys present in both collections, in first-seen order."""
    right_keys = {key for key in right if key is not None}
    seen: dict[Any, None] = {}
    for key in left:
        if key is not None and key in right_keys:
            seen.setdefault(key, None)
    return list(seen)


def _to_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return parser.isoparse(str(value)).date()
    except (ValueError, OverflowError):
        return None


def rental_duration_days(start: Any, end: Any) -> Optional[int]:
    """Whole days between ``start`` and ``end``.

    Returns ``None`` for unparsable dates or when ``end`` precedes ``start``.
    """
    start_date = _to_date(start)
    end_date = _to_date(end)
    if start_date is None or end_date is None or end_date < start_date:
        return None
    return (end_date - start_date).days

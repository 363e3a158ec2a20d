"""Shape derived rows for tables and charts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Literal, Mapping, Optional, Sequence

from rental_marketplace.config import NO_RATING_LABEL

ChartKind = Literal["bar", "pie"]

RATING_KEYS = frozenset({"avg_rating", "rating"})
MONEY_KEYS = frozenset(
    {
        "rental_price",
        "total_cost",
        "total_revenue",
        "revenue",
        "total_spent",
        "total_spent_on_rentals",
        "avg_category_price",
        "amount",
    }
)


@dataclass(frozen=True)
class Column:
    key: str
    label: str


@dataclass(frozen=True)
class TableSpec:
    """Flat rows plus the column manifest used to render them."""

    title: str
    columns: tuple[Column, ...]
    rows: tuple[dict[str, Any], ...]
    description: str = ""

    @property
    def keys(self) -> list[str]:
        return [column.key for column in self.columns]

    @property
    def labels(self) -> list[str]:
        return [column.label for column in self.columns]

    def is_empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class ChartSeries:
    title: str
    labels: tuple[str, ...]
    values: tuple[float, ...]
    kind: ChartKind = "bar"
    value_label: str = ""


@dataclass(frozen=True)
class Metric:
    label: str
    value: Any
    description: str = ""


def columns(*pairs: tuple[str, str]) -> tuple[Column, ...]:
    return tuple(Column(key, label) for key, label in pairs)


def format_money(value: Any) -> str:
    try:
        return f"${float(value):,.2f}"
    except (TypeError, ValueError):
        return ""


def format_rating(value: Any) -> str:
    if value is None:
        return NO_RATING_LABEL
    try:
        return f"{float(value):.1f}"
    except (TypeError, ValueError):
        return NO_RATING_LABEL


def format_cell(key: str, value: Any) -> Any:
    """Scalar value safe to place in a table cell."""
    if key in RATING_KEYS:
        return format_rating(value)
    if value is None:
        return ""
    if key in MONEY_KEYS:
        return format_money(value)
    if isinstance(value, float):
        return round(value, 2)
    if isinstance(value, (Mapping, list, tuple, set)):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


def project_row(row: Mapping[str, Any], manifest: Sequence[Column]) -> dict[str, Any]:
    """Keep exactly the manifest keys, formatted as flat cells."""
    return {column.key: format_cell(column.key, row.get(column.key)) for column in manifest}


def build_table(
    title: str,
    manifest: Sequence[Column],
    rows: Iterable[Mapping[str, Any]],
    description: str = "",
) -> TableSpec:
    manifest = tuple(manifest)
    return TableSpec(
        title=title,
        columns=manifest,
        rows=tuple(project_row(row, manifest) for row in rows),
        description=description,
    )


def build_chart(
    title: str,
    rows: Iterable[Mapping[str, Any]],
    label_key: str,
    value_key: str,
    *,
    kind: ChartKind = "bar",
    value_label: str = "",
) -> ChartSeries:
    labels: list[str] = []
    values: list[float] = []
    for row in rows:
        value = row.get(value_key)
        if value is None:
            continue
        labels.append(str(row.get(label_key)))
        values.append(float(value))
    return ChartSeries(
        title=title,
        labels=tuple(labels),
        values=tuple(values),
        kind=kind,
        value_label=value_label,
    )


@dataclass(frozen=True)
class ReportResult:
    """What a view needs to render one report, or why it cannot."""

    key: str
    table: Optional[TableSpec] = None
    chart: Optional[ChartSeries] = None
    metrics: tuple[Metric, ...] = field(default_factory=tuple)
    error: Optional[Exception] = None
    skipped: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_message(self) -> str:
        if self.error is None:
            return ""
        return f"Error loading data: {self.error}"

"""Client-side aggregation, filtering and row shaping."""

from rental_marketplace.analytics.aggregation import (
    AggregationStats,
    average_by_group,
    count_by_group,
    global_mean,
    rental_duration_days,
    set_difference,
    shared_keys,
    sum_by_group,
    top_n,
)
from rental_marketplace.analytics.category import (
    above_category_average,
    above_global_average,
    category_averages,
)
from rental_marketplace.analytics.filters import ProductFilter, SortOption, sort_rows
from rental_marketplace.analytics.presentation import (
    ChartSeries,
    Column,
    Metric,
    ReportResult,
    TableSpec,
    build_table,
)

__all__ = [
    "AggregationStats",
    "ChartSeries",
    "Column",
    "Metric",
    "ProductFilter",
    "ReportResult",
    "SortOption",
    "TableSpec",
    "above_category_average",
    "above_global_average",
    "average_by_group",
    "build_table",
    "category_averages",
    "count_by_group",
    "global_mean",
    "rental_duration_days",
    "set_difference",
    "shared_keys",
    "sort_rows",
    "sum_by_group",
    "top_n",
]

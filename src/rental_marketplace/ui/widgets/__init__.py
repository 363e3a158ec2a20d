"""Reusable widgets for the RentalMarketplace UI."""

from rental_marketplace.ui.widgets.cards import KpiCard, MetricsRow
from rental_marketplace.ui.widgets.chart_panel import ChartPanel

__all__ = ["ChartPanel", "KpiCard", "MetricsRow"]

"""Matplotlib rendering for report chart series."""

from __future__ import annotations

from pathlib import Path

from matplotlib.axes import Axes
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.ticker import FuncFormatter

from rental_marketplace.analytics.presentation import ChartSeries, format_money

BAR_COLOR = "#4C78A8"
LABEL_MAX_LENGTH = 18


def short_label(label: str) -> str:
    return label if len(label) <= LABEL_MAX_LENGTH else f"{label[:15]}..."


def has_data(series: ChartSeries | None) -> bool:
    return bool(series and series.values and any(value != 0 for value in series.values))


def draw_chart(axis: Axes, series: ChartSeries, *, currency: bool = False) -> None:
    """Draw ``series`` on ``axis`` as a bar or pie chart."""
    axis.clear()
    labels = [short_label(label) for label in series.labels]
    if series.kind == "pie":
        axis.pie(series.values, labels=labels, autopct="%1.1f%%", startangle=90)
        axis.axis("equal")
    else:
        positions = range(len(series.values))
        axis.bar(positions, series.values, color=BAR_COLOR)
        axis.set_xticks(list(positions))
        axis.set_xticklabels(labels, rotation=45, ha="right")
        axis.set_ylim(bottom=0)
        if series.value_label:
            axis.set_ylabel(series.value_label)
        if currency:
            axis.yaxis.set_major_formatter(
                FuncFormatter(lambda value, _: format_money(value))
            )
    axis.set_title(series.title)


def build_figure(series: ChartSeries, *, currency: bool = False) -> Figure:
    figure = Figure(figsize=(10, 4))
    axis = figure.add_subplot(111)
    draw_chart(axis, series, currency=currency)
    figure.tight_layout()
    return figure


def render_chart_png(series: ChartSeries, output_path: Path, *, currency: bool = False) -> Path:
    """Render ``series`` to a PNG without a GUI backend."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    figure = build_figure(series, currency=currency)
    FigureCanvasAgg(figure).print_png(str(output_path))
    return output_path

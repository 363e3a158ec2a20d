from __future__ import annotations

import json

from rental_marketplace.analytics.presentation import ChartSeries, Metric, build_table, columns
from rental_marketplace.db.demo_data import has_data, seed_demo_data
from rental_marketplace.paths import get_app_data_dir, get_exports_dir
from rental_marketplace.services.report_service import ReportService
from rental_marketplace.utils.charts import has_data as chart_has_data
from rental_marketplace.utils.charts import render_chart_png, short_label
from rental_marketplace.utils.config_store import load_config_data, update_config_data
from rental_marketplace.utils.pdf_report import generate_report_pdf


def test_report_pdf_is_written(seeded, tmp_path):
    result = ReportService(seeded).rental_pairs()
    path = generate_report_pdf(result.table, tmp_path / "pairs.pdf", metrics=[Metric("Rows", 8)])
    assert path.read_bytes().startswith(b"%PDF")


def test_empty_and_wide_tables_export(tmp_path):
    manifest = columns(*[(f"c{index}", f"Column {index}") for index in range(8)])
    empty = generate_report_pdf(build_table("Nothing", manifest, []), tmp_path / "empty.pdf")
    wide = generate_report_pdf(
        build_table("Wide", manifest, [{"c0": "x", "c3": None}]),
        tmp_path / "nested" / "wide.pdf",
    )
    assert empty.stat().st_size > 0
    assert wide.exists()


def test_chart_png_is_written(seeded, tmp_path):
    chart = ReportService(seeded).top_revenue_products().chart
    path = render_chart_png(chart, tmp_path / "revenue.png", currency=True)
    assert path.read_bytes().startswith(b"\x89PNG")


def test_pie_chart_png(tmp_path):
    series = ChartSeries("Roles", ("Customer", "Owner"), (4.0, 3.0), kind="pie")
    assert render_chart_png(series, tmp_path / "roles.png").exists()


def test_chart_helpers():
    assert short_label("Short") == "Short"
    assert short_label("A very long product name indeed") == "A very long pro..."
    assert not chart_has_data(None)
    assert not chart_has_data(ChartSeries("Empty", (), ()))
    assert not chart_has_data(ChartSeries("Zeros", ("a",), (0.0,)))


def test_config_store_merges_and_recovers(tmp_path):
    path = tmp_path / "config.json"
    assert load_config_data(path) == {}
    update_config_data(path, theme="dark")
    update_config_data(path, last_user_id=3)
    assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark", "last_user_id": 3}
    path.write_text("{broken", encoding="utf-8")
    assert load_config_data(path) == {}


def test_app_dirs_follow_home_override(tmp_path, monkeypatch):
    monkeypatch.setenv("RENTAL_MARKETPLACE_HOME", str(tmp_path / "home"))
    assert get_app_data_dir() == tmp_path / "home"
    assert get_exports_dir().is_dir()


def test_seed_demo_data_counts(connection):
    assert not has_data(connection)
    counts = seed_demo_data(connection)
    assert counts == {
        "users": 8,
        "products": 10,
        "rentals": 8,
        "payments": 8,
        "reviews": 6,
        "maintenance": 10,
    }
    assert has_data(connection)

"""PDF export for report tables."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from rental_marketplace.analytics.presentation import Metric, TableSpec
from rental_marketplace.config import APP_NAME

WIDE_TABLE_COLUMNS = 6


def _cell(value: object) -> str:
    if value is None or value == "":
        return "-"
    return str(value)


def _table_data(table: TableSpec) -> list[list[str]]:
    data = [table.labels]
    for row in table.rows:
        data.append([_cell(row.get(key)) for key in table.keys])
    return data


def generate_report_pdf(
    table: TableSpec,
    output_path: Path,
    *,
    metrics: Sequence[Metric] = (),
) -> Path:
    """Write ``table`` (and any headline metrics) to a PDF file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    pagesize = landscape(A4) if len(table.columns) > WIDE_TABLE_COLUMNS else A4
    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=pagesize,
        rightMargin=15 * mm,
        leftMargin=15 * mm,
        topMargin=18 * mm,
        bottomMargin=18 * mm,
        title=table.title,
        author=APP_NAME,
    )

    styles = getSampleStyleSheet()
    styles.add(
        ParagraphStyle(
            name="SmallText",
            parent=styles["Normal"],
            fontSize=9,
            leading=12,
        )
    )

    elements: list[object] = []
    elements.append(Paragraph(f"<b>{table.title}</b>", styles["Title"]))
    if table.description:
        elements.append(Paragraph(table.description, styles["Normal"]))
    elements.append(Spacer(1, 8))

    if metrics:
        metrics_table = Table(
            [[metric.label, _cell(metric.value)] for metric in metrics],
            colWidths=[50 * mm, 40 * mm],
        )
        metrics_table.setStyle(
            TableStyle(
                [
                    ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                    ("BACKGROUND", (0, 0), (0, -1), colors.whitesmoke),
                ]
            )
        )
        elements.append(metrics_table)
        elements.append(Spacer(1, 12))

    if table.is_empty():
        elements.append(Paragraph("No data available.", styles["Normal"]))
    else:
        available = pagesize[0] - 30 * mm
        width = available / len(table.columns)
        data_table = Table(
            _table_data(table),
            colWidths=[width] * len(table.columns),
            repeatRows=1,
        )
        data_table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                    ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 8),
                ]
            )
        )
        elements.append(data_table)

    footer = f"{APP_NAME} - generated {datetime.now().strftime('%Y-%m-%d %H:%M')}"
    elements.append(Spacer(1, 12))
    elements.append(Paragraph(footer, styles["SmallText"]))

    doc.build(elements)
    return output_path

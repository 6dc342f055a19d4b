from __future__ import annotations

"""
stormrank report generator
--------------------------
Turns the ranked CategorySummary list into static artifacts:

- a horizontal bar chart (PNG) of fatalities + injuries for the top N
  categories,
- an HTML table of the top N categories with thousands separators and
  whole-dollar damage figures,
- optionally, a DOCX summary embedding both.

Design goals:
- Keep the pipeline usable without plotting/report dependencies (lazy imports).
- Never re-rank here: the summaries arrive sorted from `engine.aggregate`,
  the report only truncates and formats.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence
import html
import logging
import os

import pandas as pd

from .models import CategorySummary
from .engine import top_n as _top_n, totals

logger = logging.getLogger(__name__)

TABLE_COLUMNS = ["Category", "Observations", "Fatalities", "Injuries", "Total Damage (US$)"]


# -----------------------------
# Configuration / output types
# -----------------------------

@dataclass
class ReportConfig:
    """High-level knobs to control how the report is written."""
    title: str = "Severe Weather Impact by Event Category"
    subtitle: str = "NOAA Storm Database, canonicalized event types"
    dataset_name: str = "NOAA Storm Data (StormData.csv.bz2)"

    # How many categories to show in the chart and table
    top_n: int = 20

    chart_name: str = "harm_by_category.png"
    table_name: str = "top_categories.html"

    # DOCX summary is optional (needs python-docx)
    docx: bool = False
    docx_name: str = "storm_report.docx"

    # Optional: file the summaries were computed from (shown in the DOCX)
    source_file: Optional[str] = None


@dataclass
class ReportArtifacts:
    """Paths written by `generate_report`."""
    chart_path: str
    table_path: str
    docx_path: Optional[str] = None


# -----------------------------
# Formatting helpers
# -----------------------------

def _fmt_int(v) -> str:
    return f"{int(v):,}"


def _fmt_money(v) -> str:
    """Whole-dollar currency magnitude: 2000000.4 -> '$2,000,000'."""
    return f"${int(round(float(v))):,}"


def summary_frame(summaries: Sequence[CategorySummary]) -> pd.DataFrame:
    """Numeric DataFrame view of the summaries (one row each, same order)."""
    return pd.DataFrame(
        [
            {
                "Category": s.category,
                "Observations": s.observation_count,
                "Fatalities": s.fatalities,
                "Injuries": s.injuries,
                "Total Damage (US$)": s.total_damage,
            }
            for s in summaries
        ],
        columns=TABLE_COLUMNS,
    )


# -----------------------------
# Chart
# -----------------------------

def render_chart(
    summaries: Sequence[CategorySummary],
    out_path: str,
    *,
    top_n: int = 20,
    title: Optional[str] = None,
) -> str:
    """Horizontal bar chart of (fatalities + injuries) per category.

    The first summary is drawn at the top.
    """
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        import numpy as np
        from matplotlib.ticker import FuncFormatter
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib (and numpy).\n"
            "Install with: python -m pip install matplotlib numpy"
        ) from e

    rows = _top_n(summaries, top_n)
    labels = [s.category for s in rows]
    values = [s.harm for s in rows]
    y = np.arange(len(rows))

    fig, ax = plt.subplots(figsize=(9, max(3.0, 0.35 * len(rows) + 1.5)))
    ax.barh(y, values, color="C3")
    if not rows:
        ax.text(0.5, 0.5, "No data", ha="center", va="center", transform=ax.transAxes)
    ax.set_yticks(y)
    ax.set_yticklabels(labels)
    ax.invert_yaxis()
    ax.set_xlabel("Fatalities + Injuries")
    ax.set_title(title or (f"Top {len(rows)} event categories by total damage" if rows else "No event categories"))
    ax.xaxis.set_major_formatter(FuncFormatter(lambda v, _: f"{int(v):,}"))

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    fig.tight_layout()
    fig.savefig(out_path, dpi=200)
    plt.close(fig)
    logger.info("Chart written to %s", out_path)
    return out_path


# -----------------------------
# HTML table
# -----------------------------

def render_html_table(summaries: Sequence[CategorySummary], *, top_n: int = 20) -> str:
    """HTML <table> for the top N summaries, numbers thousands-separated."""
    df = summary_frame(_top_n(summaries, top_n))
    return df.to_html(
        index=False,
        border=0,
        classes="stormrank-table",
        justify="left",
        formatters={
            "Observations": _fmt_int,
            "Fatalities": _fmt_int,
            "Injuries": _fmt_int,
            "Total Damage (US$)": _fmt_money,
        },
    )


def write_html_table(
    summaries: Sequence[CategorySummary],
    out_path: str,
    *,
    top_n: int = 20,
    title: str = "Top event categories",
) -> str:
    """Write the table as a small standalone HTML page."""
    table = render_html_table(summaries, top_n=top_n)
    page = (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n<meta charset=\"utf-8\">\n"
        f"<title>{html.escape(title)}</title>\n"
        "<style>\n"
        "table.stormrank-table { border-collapse: collapse; font-family: sans-serif; }\n"
        "table.stormrank-table th, table.stormrank-table td { padding: 4px 10px; }\n"
        "table.stormrank-table td { text-align: right; }\n"
        "table.stormrank-table td:first-child { text-align: left; }\n"
        "</style>\n</head>\n<body>\n"
        f"<h1>{html.escape(title)}</h1>\n"
        f"{table}\n"
        "</body>\n</html>\n"
    )
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(page)
    logger.info("HTML table written to %s", out_path)
    return out_path


# -----------------------------
# DOCX summary
# -----------------------------

def write_docx_report(
    summaries: Sequence[CategorySummary],
    out_path: str,
    *,
    chart_path: Optional[str] = None,
    config: Optional[ReportConfig] = None,
) -> str:
    config = config or ReportConfig()

    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    doc = Document()
    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
        p = doc.add_paragraph()
        r = p.add_run(text)
        r.bold = bold
        r.italic = italic
        r.font.size = Pt(size)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _kv(key: str, value: str) -> None:
        p = doc.add_paragraph()
        r = p.add_run(f"{key}: ")
        r.bold = True
        p.add_run(value)

    _center_title(config.title, 20, bold=True)
    _center_title(config.subtitle, 12, italic=True)

    t = totals(summaries)
    doc.add_paragraph("")
    _kv("Dataset", config.dataset_name)
    if config.source_file:
        _kv("Data file", os.path.basename(config.source_file))
    _kv("Categories", _fmt_int(len(summaries)))
    _kv("Observations", _fmt_int(sum(s.observation_count for s in summaries)))
    _kv("Fatalities", _fmt_int(t["fatalities"]))
    _kv("Injuries", _fmt_int(t["injuries"]))
    _kv("Total damage", _fmt_money(t["total_damage"]))

    if chart_path:
        doc.add_heading("Fatalities and injuries by category", level=1)
        doc.add_picture(chart_path, width=Inches(6.5))

    rows = _top_n(summaries, config.top_n)
    doc.add_heading(f"Top {len(rows)} categories by total damage", level=1)
    table = doc.add_table(rows=1, cols=len(TABLE_COLUMNS))
    for i, name in enumerate(TABLE_COLUMNS):
        table.rows[0].cells[i].text = name
    for s in rows:
        r = table.add_row().cells
        r[0].text = s.category
        r[1].text = _fmt_int(s.observation_count)
        r[2].text = _fmt_int(s.fatalities)
        r[3].text = _fmt_int(s.injuries)
        r[4].text = _fmt_money(s.total_damage)

    doc.add_heading("Notes", level=1)
    doc.add_paragraph(
        "Damage figures use only the K/M/B scale codes; rows with any other "
        "code count as zero dollars. Event types that match no category rule "
        "are kept as their own category."
    )

    from . import __version__
    doc.add_paragraph(f"stormrank version: {__version__}")
    doc.add_paragraph(f"Report generated at: {datetime.now().isoformat(timespec='seconds')}")

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    logger.info("DOCX report written to %s", out_path)
    return out_path


# -----------------------------
# Main entry point used by CLI
# -----------------------------

def generate_report(
    summaries: Sequence[CategorySummary],
    out_dir: str,
    *,
    config: Optional[ReportConfig] = None,
) -> ReportArtifacts:
    """Write chart + HTML table (+ DOCX if enabled) into `out_dir`."""
    config = config or ReportConfig()
    if not summaries:
        logger.warning("No categories to report on; writing empty chart and table")

    os.makedirs(out_dir, exist_ok=True)
    chart = render_chart(
        summaries,
        os.path.join(out_dir, config.chart_name),
        top_n=config.top_n,
    )
    table = write_html_table(
        summaries,
        os.path.join(out_dir, config.table_name),
        top_n=config.top_n,
        title=config.title,
    )
    docx_path = None
    if config.docx:
        docx_path = write_docx_report(
            summaries,
            os.path.join(out_dir, config.docx_name),
            chart_path=chart,
            config=config,
        )
    return ReportArtifacts(chart_path=chart, table_path=table, docx_path=docx_path)

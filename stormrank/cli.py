"""
stormrank Command Line Interface (CLI)
======================================

Runs the whole analysis once:

    python -m stormrank.cli --csv "path/to/StormData.csv.bz2" --out-dir out

Steps:
1) Load the storm data file
2) Scale damage + canonicalize event types
3) Group and rank by category
4) Print the top rows, write the chart and the HTML table (and optional DOCX
   and CSV/JSON exports)

The input file is never modified.
"""

from __future__ import annotations
from typing import List, Optional, Sequence
import argparse
import logging
import sys

from .loader import load_storm_data
from .engine import export_csv, export_json, normalize_events, aggregate, top_n, totals, unmatched_types
from .report import ReportConfig, generate_report
from .categories import RULES, match_rule
from .models import CategorySummary

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="stormrank",
        description="Rank NOAA storm event categories by damage and harm.",
    )
    ap.add_argument("--csv", help="Path to the storm data file (.csv, .csv.bz2, .xlsx)")
    ap.add_argument("--out-dir", default="stormrank_out", help="Directory for the chart and table")
    ap.add_argument("--top", type=int, default=20, help="Number of categories to show (default 20)")
    ap.add_argument("--docx", action="store_true", help="Also write a DOCX summary (needs python-docx)")
    ap.add_argument("--export-csv", metavar="PATH", help="Write the full summary table as CSV")
    ap.add_argument("--export-json", metavar="PATH", help="Write the full summary table as JSON")
    ap.add_argument("--explain", action="store_true",
                    help="Print the rule table and the most frequent unmatched event types")
    ap.add_argument("--classify", metavar="EVTYPE", action="append",
                    help="Show which category an event type maps to (repeatable, no --csv needed)")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the stormrank CLI. Returns the process exit code."""
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.classify:
        for text in args.classify:
            print(explain(text))
        if not args.csv:
            return 0
    if not args.csv:
        ap.error("--csv is required")
    if args.top < 1:
        print("Error: --top must be >= 1", file=sys.stderr)
        return 2

    try:
        print("Loading dataset...")
        events = load_storm_data(args.csv)
        normalized = normalize_events(events)
        summaries = aggregate(normalized)
        print(f"Loaded {len(events)} events in {len(summaries)} categories.")

        if args.explain:
            _print_rules()
            _print_unmatched(unmatched_types(normalized))

        rows = top_n(summaries, args.top)
        print(f"Top {len(rows)} categories by total damage:")
        _print_rows(rows)
        t = totals(summaries)
        print(f"All categories: fatalities={int(t['fatalities']):,} injuries={int(t['injuries']):,} "
              f"damage=${int(round(t['total_damage'])):,}")

        cfg = ReportConfig(top_n=args.top, docx=args.docx, source_file=args.csv)
        artifacts = generate_report(summaries, args.out_dir, config=cfg)
        print(f"Chart written to {artifacts.chart_path}")
        print(f"Table written to {artifacts.table_path}")
        if artifacts.docx_path:
            print(f"Report written to {artifacts.docx_path}")

        if args.export_csv:
            export_csv(summaries, args.export_csv)
            print(f"Exported CSV to {args.export_csv}")
        if args.export_json:
            export_json(summaries, args.export_json)
            print(f"Exported JSON to {args.export_json}")
    except (OSError, KeyError, ValueError, ImportError) as e:
        logger.debug("Run failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def explain(event_type: str) -> str:
    """One line saying which rule (if any) claims `event_type`."""
    rule = match_rule(event_type)
    if rule is None:
        return f"{event_type!r} -> {event_type.upper()!r} (no rule, passthrough)"
    order = RULES.index(rule) + 1
    return f"{event_type!r} -> {rule.label!r} (rule {order})"


def _print_rules() -> None:
    print("Category rules (first match wins):")
    for i, r in enumerate(RULES, start=1):
        pats = ", ".join("+".join(p) for p in r.patterns)
        print(f"  {i:>2}. {r.label:<22} {pats}")


def _print_unmatched(pairs: List[tuple], limit: int = 15) -> None:
    print(f"Unmatched event types: {len(pairs)}")
    for name, n in pairs[:limit]:
        print(f"  {n:>7,}  {name}")
    if len(pairs) > limit:
        print(f"  ... ({len(pairs)} total, showing {limit})")


def _print_rows(rows: Sequence[CategorySummary]) -> None:
    for i, s in enumerate(rows, start=1):
        print(f"{i:>3}. {s.category:<24} | n={s.observation_count:,} | fatalities={s.fatalities:,} "
              f"injuries={s.injuries:,} | damage=${int(round(s.total_damage)):,}")


if __name__ == "__main__":
    sys.exit(main())

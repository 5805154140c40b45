#!/usr/bin/env python3
# Copyright (c) 2025-2026 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

"""
Speed details report.

Builds the comparative speed report for one set of result files (one JSON
file per interpreter config) and writes:

- <prefix>.svg             speedup bar chart
- <prefix>.csv             per-benchmark statistics
- <prefix>.txt             the same statistics as a text table, plus headline
- <prefix>.tripwires.json  primary-config mean/RSD per benchmark

Usage:
    speedreport results/*_basic_benchmark_*.json -o reports/blog_speed_details_2026-10-19
    speedreport results/*.json --benchmarks railsbench,liquid-render --print
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .chart import Scene, layout
from .configs import DEFAULT_POLICY, NamingPolicy, ResolvedConfigs, resolve_roles
from .errors import ReportError
from .headline import Headline, headline
from .results import ResultSet, load_result_files
from .stats import StatsBundle, compute, select_benchmarks, sort_benchmark_names, tripwires
from .svg import render_svg
from .table import to_rows, to_text, write_csv

logger = logging.getLogger(__name__)

ORDERINGS = ("report", "name", "input")


@dataclass(frozen=True)
class SpeedReport:
    """Every artifact of one report, computed before anything is written."""

    configs: ResolvedConfigs
    stats: StatsBundle
    scene: Scene
    rows: list
    tripwires: dict
    headline: Headline

    @property
    def svg(self) -> str:
        return render_svg(self.scene)

    def to_text(self) -> str:
        return to_text(self.stats) + "\n" + self.headline.to_text()

    def write_files(self, prefix: Path) -> list[Path]:
        """Write the .svg, .txt, .tripwires.json and .csv files next to *prefix*.

        On a write failure the files already written are removed again.
        """
        prefix = Path(prefix)
        prefix.parent.mkdir(parents=True, exist_ok=True)
        svg_text = self.svg
        report_text = self.to_text()
        tripwire_text = json.dumps(self.tripwires, indent=2, sort_keys=True) + "\n"

        written = []
        try:
            for suffix, content in ((".svg", svg_text), (".txt", report_text),
                                    (".tripwires.json", tripwire_text)):
                path = prefix.with_name(prefix.name + suffix)
                path.write_text(content)
                written.append(path)
            csv_path = prefix.with_name(prefix.name + ".csv")
            write_csv(self.stats, csv_path)
            written.append(csv_path)
        except OSError:
            for path in written:
                path.unlink(missing_ok=True)
            raise
        return written


def order_benchmarks(names: list[str], result_set: ResultSet, primary: str, ordering: str) -> list[str]:
    if ordering == "report":
        return sort_benchmark_names(names, result_set, primary)
    if ordering == "name":
        return sorted(names)
    if ordering == "input":
        return list(names)
    raise ValueError(f"Unknown benchmark ordering {ordering!r}, expected one of {ORDERINGS}")


def build_report(result_set: ResultSet,
                 policy: NamingPolicy = DEFAULT_POLICY,
                 benchmarks: Iterable[str] | None = None,
                 ordering: str = "report") -> SpeedReport:
    """Resolve configs, compute statistics and lay out every artifact."""
    configs = resolve_roles(result_set.config_names, policy)
    logger.info("Resolved configs: %s", configs)

    names = select_benchmarks(result_set, configs.primary, benchmarks)
    names = order_benchmarks(names, result_set, configs.primary, ordering)

    bundle = compute(result_set, configs, names)
    return SpeedReport(
        configs=configs,
        stats=bundle,
        scene=layout(bundle, configs.with_labels()),
        rows=to_rows(bundle),
        tripwires=tripwires(bundle),
        headline=headline(bundle),
    )


def _split_list(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Comparative interpreter speed report")
    parser.add_argument("files", nargs="+",
                        help="Result JSON files, one per interpreter config")
    parser.add_argument("-o", "--output", default="blog_speed_details",
                        help="Output path prefix (default: blog_speed_details)")
    parser.add_argument("--benchmarks", default=None,
                        help="Comma-separated benchmark names to include (default: all)")
    parser.add_argument("--order", choices=ORDERINGS, default="report",
                        help="Benchmark ordering (default: report)")
    parser.add_argument("--print", dest="print_table", action="store_true",
                        help="Also print the text table to stdout")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log progress")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    paths = [Path(p) for p in args.files]
    missing = [p for p in paths if not p.exists()]
    if missing:
        for path in missing:
            print(f"ERROR: Result file not found: {path}", file=sys.stderr)
        return 1

    try:
        result_set = load_result_files(paths)
        report = build_report(result_set, benchmarks=_split_list(args.benchmarks), ordering=args.order)
    except (ReportError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    try:
        written = report.write_files(Path(args.output))
    except OSError as e:
        print(f"ERROR: Could not write report to {args.output}: {e}", file=sys.stderr)
        return 1
    if args.print_table:
        print(report.to_text())
    for path in written:
        print(f"Report written to: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

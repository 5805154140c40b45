# Copyright (c) 2025-2026 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

"""Row-table and text-table renderings of a :class:`StatsBundle`."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd

from .constants import TABLE_FOOTNOTE
from .stats import StatsBundle


def headings(bundle: StatsBundle) -> list[str]:
    configs = bundle.configs.with_labels()
    baseline = bundle.configs.baseline
    primary_label = next(label for label, config in configs if config == bundle.configs.primary)
    return (
        ["bench"]
        + [h for label, _ in configs for h in (f"{label} (ms)", f"{label} RSD")]
        + [h for label, config in configs if config != baseline
           for h in (f"{label} spd", f"{label} spd RSD")]
        + [f"% in {primary_label}"]
    )


def col_formats(bundle: StatsBundle) -> list[str]:
    """printf-style formats, one per column; only used for the text table."""
    n_configs = len(bundle.configs)
    return (
        ["%s"]                                  # benchmark name
        + ["%.1f", "%.2f%%"] * n_configs        # mean and RSD per config
        + ["%.2fx", "%.2f%%"] * (n_configs - 1)  # speedups
        + ["%.2f%%"]                            # tier ratio
    )


def to_rows(bundle: StatsBundle) -> list[list]:
    """One row per benchmark, in the bundle's benchmark order."""
    configs = bundle.configs.names
    baseline = bundle.configs.baseline
    rows = []
    for idx, bench in enumerate(bundle.benchmark_names):
        row: list = [bench]
        for config in configs:
            stats = bundle.by_config[config]
            row += [stats.means[idx], stats.rsd_pcts[idx]]
        for config in configs:
            if config == baseline:
                continue
            row += list(bundle.speedups[config][idx])
        row.append(bundle.tier_ratios[idx])
        rows.append(row)
    return rows


def format_as_table(headings: Sequence[str], col_formats: Sequence[str], rows: Sequence[Sequence]) -> str:
    """Fixed-width text table. The first column is left-aligned, the rest right."""
    if len(headings) != len(col_formats):
        raise ValueError(f"Got {len(headings)} headings but {len(col_formats)} column formats")
    for row_idx, row in enumerate(rows):
        if len(row) != len(headings):
            raise ValueError(f"Row {row_idx} has {len(row)} columns, expected {len(headings)}")
    cells = [[fmt % value for fmt, value in zip(col_formats, row)] for row in rows]
    widths = [len(h) for h in headings]
    for row in cells:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    def fmt_line(values):
        parts = [values[0].ljust(widths[0])]
        parts += [value.rjust(width) for value, width in zip(values[1:], widths[1:])]
        return "  ".join(parts).rstrip()

    lines = [fmt_line(list(headings)), "  ".join("-" * w for w in widths)]
    lines += [fmt_line(row) for row in cells]
    return "\n".join(lines) + "\n"


def to_text(bundle: StatsBundle) -> str:
    return format_as_table(headings(bundle), col_formats(bundle), to_rows(bundle)) + "\n" + TABLE_FOOTNOTE


def to_dataframe(bundle: StatsBundle) -> pd.DataFrame:
    return pd.DataFrame(to_rows(bundle), columns=headings(bundle))


def write_csv(bundle: StatsBundle, path: Path) -> None:
    to_dataframe(bundle).to_csv(path, index=False)

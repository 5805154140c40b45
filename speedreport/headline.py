# Copyright (c) 2025-2026 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

"""Headline numbers: how much faster is the primary config overall?"""

from __future__ import annotations

from dataclasses import dataclass

from .configs import Role
from .constants import FEATURED_BENCHMARK, SAME_SPEED_TOLERANCE
from .stats import StatsBundle


def format_speedup(ratio: float) -> str:
    if ratio >= 1.0 + SAME_SPEED_TOLERANCE:
        return f"{(ratio - 1.0) * 100:.1f}% faster"
    if ratio < 1.0 - SAME_SPEED_TOLERANCE:
        return f"{(1.0 - ratio) * 100:.1f}% slower"
    return "the same speed"


@dataclass(frozen=True)
class Headline:
    primary_label: str
    baseline_label: str
    secondary_label: str | None
    # Ratios of total time; above 1.0 means the primary config is faster.
    primary_vs_baseline: float
    primary_vs_secondary: float | None
    featured_benchmark: str | None = None
    featured_vs_baseline: float | None = None
    featured_vs_secondary: float | None = None

    def to_text(self) -> str:
        lines = [f"{self.primary_label} is {format_speedup(self.primary_vs_baseline)} "
                 f"than {self.baseline_label} overall."]
        if self.primary_vs_secondary is not None:
            lines.append(f"{self.primary_label} is {format_speedup(self.primary_vs_secondary)} "
                         f"than {self.secondary_label} overall.")
        if self.featured_benchmark is not None:
            lines.append(f"On {self.featured_benchmark}, {self.primary_label} is "
                         f"{format_speedup(self.featured_vs_baseline)} than {self.baseline_label}.")
            if self.featured_vs_secondary is not None:
                lines.append(f"On {self.featured_benchmark}, {self.primary_label} is "
                             f"{format_speedup(self.featured_vs_secondary)} than {self.secondary_label}.")
        return "\n".join(lines) + "\n"


def headline(bundle: StatsBundle, featured_benchmark: str | None = FEATURED_BENCHMARK) -> Headline:
    labels = {entry.role: entry.label for entry in bundle.configs}
    baseline = bundle.by_config[bundle.configs.baseline]
    primary = bundle.by_config[bundle.configs.primary]
    secondary_name = bundle.configs.get(Role.OPTIMIZED_SECONDARY)
    secondary = bundle.by_config[secondary_name] if secondary_name else None

    featured = None
    featured_vs_baseline = featured_vs_secondary = None
    if featured_benchmark is not None and featured_benchmark in bundle.benchmark_names:
        featured = featured_benchmark
        idx = bundle.index_of(featured_benchmark)
        featured_vs_baseline = baseline.means[idx] / primary.means[idx]
        if secondary is not None:
            featured_vs_secondary = secondary.means[idx] / primary.means[idx]

    return Headline(
        primary_label=labels[Role.OPTIMIZED_PRIMARY],
        baseline_label=labels[Role.BASELINE],
        secondary_label=labels.get(Role.OPTIMIZED_SECONDARY),
        primary_vs_baseline=baseline.total_time / primary.total_time,
        primary_vs_secondary=(secondary.total_time / primary.total_time) if secondary else None,
        featured_benchmark=featured,
        featured_vs_baseline=featured_vs_baseline,
        featured_vs_secondary=featured_vs_secondary,
    )

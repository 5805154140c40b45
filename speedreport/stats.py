# Copyright (c) 2025-2026 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

"""Per-benchmark statistics for a speed report.

:func:`compute` turns a :class:`~speedreport.results.ResultSet` and a set of
resolved configs into a :class:`StatsBundle`: mean and relative standard
deviation per (config, benchmark), speedup over the baseline with
propagated error, total time per config and the share of instructions
retired in the optimizing tier.

Either the whole bundle is produced or an exception is raised; there is no
partial result.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping, NamedTuple, Sequence

import numpy as np

from .configs import ResolvedConfigs
from .constants import (
    BENCH_DISPLAY_SUFFIX,
    COUNTER_COMPILED_ISEQS,
    COUNTER_FALLBACK_INSNS,
    COUNTER_TOTAL_INSNS,
)
from .errors import DivisionByZeroError, MissingCounterDataError, MissingResultsError
from .results import ResultSet

logger = logging.getLogger(__name__)


class Speedup(NamedTuple):
    ratio: float
    rsd_pct: float


@dataclass(frozen=True)
class ConfigStats:
    """Statistics for one config, indexed like ``StatsBundle.benchmark_names``."""

    means: tuple[float, ...]
    rsd_pcts: tuple[float, ...]
    total_time: float


@dataclass(frozen=True)
class StatsBundle:
    benchmark_names: tuple[str, ...]
    configs: ResolvedConfigs
    by_config: Mapping[str, ConfigStats]
    speedups: Mapping[str, tuple[Speedup, ...]]
    tier_ratios: tuple[float, ...]
    metadata: Mapping[str, dict] = field(default_factory=dict)

    @property
    def max_speedup_ratio(self) -> float:
        return max(s.ratio for per_bench in self.speedups.values() for s in per_bench)

    def index_of(self, benchmark: str) -> int:
        return self.benchmark_names.index(benchmark)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def mean(values: Sequence[float]) -> float:
    return float(np.mean(np.asarray(values, dtype=float)))


def rel_stddev_pct(values: Sequence[float], mean_value: float) -> float:
    """Sample standard deviation as a percentage of *mean_value*.

    One sample has no defined variance, so it reports 0.
    """
    if len(values) < 2:
        return 0.0
    stddev = float(np.std(np.asarray(values, dtype=float), ddof=1))
    if stddev == 0.0:
        return 0.0
    return 100.0 * stddev / mean_value


def propagated_rsd_pct(rsd_pct_a: float, rsd_pct_b: float) -> float:
    """Relative error of a ratio of two independent means, in percent."""
    a = rsd_pct_a / 100.0
    b = rsd_pct_b / 100.0
    return 100.0 * math.sqrt(a * a + b * b)


def speedup(baseline_mean: float, baseline_rsd_pct: float,
            this_mean: float, this_rsd_pct: float) -> Speedup:
    return Speedup(baseline_mean / this_mean, propagated_rsd_pct(baseline_rsd_pct, this_rsd_pct))


def combine_counters(runs: Iterable[Mapping[str, int]]) -> dict[str, int]:
    """Add counters from every captured run of one benchmark together."""
    combined: dict[str, int] = {}
    for run in runs:
        for key, value in run.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                continue
            combined[key] = combined.get(key, 0) + value
    return combined


def tier_ratio_pct(counters: Mapping[str, int], config: str, benchmark: str) -> float:
    """Percentage of instructions retired inside the optimizing tier."""
    for key in (COUNTER_TOTAL_INSNS, COUNTER_FALLBACK_INSNS):
        if key not in counters:
            raise MissingCounterDataError(config, [benchmark], field=key)
    fallback = counters[COUNTER_FALLBACK_INSNS]
    retired_in_tier = counters[COUNTER_TOTAL_INSNS] - fallback
    total = retired_in_tier + fallback
    if total == 0:
        raise DivisionByZeroError(config, benchmark, "instruction count")
    return 100.0 * float(retired_in_tier) / float(total)


# ---------------------------------------------------------------------------
# Benchmark selection
# ---------------------------------------------------------------------------

def select_benchmarks(result_set: ResultSet, primary: str,
                      allow_list: Iterable[str] | None = None) -> list[str]:
    """Benchmarks reported by *primary*, optionally limited to *allow_list*."""
    names = result_set.benchmark_names(primary)
    if allow_list is None:
        return names
    wanted = list(dict.fromkeys(allow_list))
    unknown = [name for name in wanted if name not in names]
    if unknown:
        raise MissingResultsError(primary, unknown)
    return [name for name in names if name in wanted]


def sort_benchmark_names(names: Iterable[str], result_set: ResultSet, primary: str) -> list[str]:
    """Report order: ``.rb`` names first, then by compiled ISEQ count, then name."""
    def sort_key(bench):
        runs = result_set.counters(primary, bench)
        compiled = runs[0].get(COUNTER_COMPILED_ISEQS, 0) if runs else 0
        return (1 if bench.endswith(BENCH_DISPLAY_SUFFIX) else 2, compiled, bench)

    return sorted(names, key=sort_key)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _check_results(result_set: ResultSet, configs: ResolvedConfigs, benchmark_names: Sequence[str]) -> None:
    for config in configs.names:
        missing = [b for b in benchmark_names if not result_set.samples(config, b)]
        if missing:
            raise MissingResultsError(config, missing)

    primary = configs.primary
    no_counters = []
    for bench in benchmark_names:
        runs = result_set.counters(primary, bench)
        if not runs or not runs[0]:
            no_counters.append(bench)
    if no_counters:
        raise MissingCounterDataError(primary, no_counters)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def compute(result_set: ResultSet, configs: ResolvedConfigs, benchmark_names: Sequence[str]) -> StatsBundle:
    """Compute every statistic for *benchmark_names*, in the order given."""
    benchmark_names = tuple(benchmark_names)
    if not benchmark_names:
        raise MissingResultsError(configs.primary, [])
    _check_results(result_set, configs, benchmark_names)

    baseline = configs.baseline
    means: dict[str, list[float]] = {config: [] for config in configs.names}
    rsds: dict[str, list[float]] = {config: [] for config in configs.names}
    totals: dict[str, float] = {config: 0.0 for config in configs.names}
    speedups: dict[str, list[Speedup]] = {config: [] for config in configs.non_baseline}
    tier_ratios: list[float] = []

    for bench in benchmark_names:
        for config in configs.names:
            times = result_set.samples(config, bench)
            this_mean = mean(times)
            if this_mean == 0.0:
                raise DivisionByZeroError(config, bench, "mean elapsed time")
            means[config].append(this_mean)
            rsds[config].append(rel_stddev_pct(times, this_mean))
            totals[config] += float(np.sum(np.asarray(times, dtype=float)))

        base_mean = means[baseline][-1]
        base_rsd = rsds[baseline][-1]
        for config in configs.non_baseline:
            speedups[config].append(speedup(base_mean, base_rsd, means[config][-1], rsds[config][-1]))

        counters = combine_counters(result_set.counters(configs.primary, bench))
        tier_ratios.append(tier_ratio_pct(counters, configs.primary, bench))

    logger.debug("Computed stats for %d benchmarks across %d configs",
                 len(benchmark_names), len(configs))

    return StatsBundle(
        benchmark_names=benchmark_names,
        configs=configs,
        by_config={
            config: ConfigStats(tuple(means[config]), tuple(rsds[config]), totals[config])
            for config in configs.names
        },
        speedups={config: tuple(values) for config, values in speedups.items()},
        tier_ratios=tuple(tier_ratios),
        metadata={config: result_set.metadata(config) for config in configs.names},
    )


def tripwires(bundle: StatsBundle) -> dict[str, dict[str, float]]:
    """Per-benchmark mean and RSD of the primary config, for regression alerts."""
    primary = bundle.by_config[bundle.configs.primary]
    return {
        bench: {"mean": primary.means[idx], "relative_stddev_pct": primary.rsd_pcts[idx]}
        for idx, bench in enumerate(bundle.benchmark_names)
    }

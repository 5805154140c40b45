# Copyright (c) 2025-2026 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

"""Read-only container for parsed benchmark results.

A result set holds, per configuration name:

* ``times``      -- benchmark name → elapsed-time samples
* ``metadata``   -- interpreter build info, passed through untouched
* ``counters``   -- benchmark name → one counter mapping per captured run
* ``benchmark_metadata`` -- benchmark name → free-form per-benchmark info

Accessors hand out copies so callers can never modify the stored data.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Mapping, Sequence

logger = logging.getLogger(__name__)

_PAYLOAD_KEYS = ("config", "times")


def read_json(path: Path):
    """Read and parse a JSON file."""
    return json.loads(Path(path).read_text())


class ResultSet:
    """Per-configuration, per-benchmark samples, metadata and counters."""

    def __init__(self,
                 times: Mapping[str, Mapping[str, Sequence[float]]],
                 metadata: Mapping[str, Mapping[str, str]] | None = None,
                 counters: Mapping[str, Mapping[str, Sequence[Mapping[str, int]]]] | None = None,
                 benchmark_metadata: Mapping[str, Mapping[str, Mapping]] | None = None):
        self._times = {
            config: {bench: tuple(float(v) for v in values) for bench, values in by_bench.items()}
            for config, by_bench in times.items()
        }
        self._metadata = {config: dict(meta) for config, meta in (metadata or {}).items()}
        self._counters = {
            config: {bench: tuple(dict(run) for run in runs) for bench, runs in by_bench.items()}
            for config, by_bench in (counters or {}).items()
        }
        self._benchmark_metadata = {
            config: {bench: dict(info) for bench, info in by_bench.items()}
            for config, by_bench in (benchmark_metadata or {}).items()
        }

    # ------------------------------------------------------------------
    # Construction from parsed files
    # ------------------------------------------------------------------

    @classmethod
    def from_payloads(cls, payloads: Iterable[dict]) -> "ResultSet":
        """Build a result set from one parsed payload per configuration.

        Each payload looks like::

            {"config": "prod_ruby_with_yjit",
             "metadata": {...},
             "times": {"fib": [0.51, 0.50]},
             "counters": {"fib": [{"instructions_executed_total": 10}]},
             "benchmark_metadata": {"fib": {...}}}
        """
        times, metadata, counters, bench_meta = {}, {}, {}, {}
        for idx, payload in enumerate(payloads):
            if not isinstance(payload, dict):
                raise ValueError(f"Result payload #{idx} is not a JSON object")
            for key in _PAYLOAD_KEYS:
                if key not in payload:
                    raise ValueError(f"Result payload #{idx} is missing required key {key!r}")
            config = str(payload["config"])
            if config in times:
                raise ValueError(f"Duplicate results for configuration {config!r}")
            times[config] = payload["times"]
            metadata[config] = payload.get("metadata", {})
            counters[config] = payload.get("counters", {})
            bench_meta[config] = payload.get("benchmark_metadata", {})
        return cls(times, metadata, counters, bench_meta)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config_names(self) -> list[str]:
        return list(self._times)

    def benchmark_names(self, config: str) -> list[str]:
        return list(self._times.get(config, {}))

    def samples(self, config: str, benchmark: str) -> tuple[float, ...]:
        """Elapsed-time samples, or an empty tuple when there are none."""
        return self._times.get(config, {}).get(benchmark, ())

    def metadata(self, config: str) -> dict[str, str]:
        return dict(self._metadata.get(config, {}))

    def counters(self, config: str, benchmark: str) -> list[dict[str, int]]:
        """One counter mapping per captured run, or an empty list."""
        return [dict(run) for run in self._counters.get(config, {}).get(benchmark, ())]

    def benchmark_metadata(self, config: str, benchmark: str) -> dict:
        return dict(self._benchmark_metadata.get(config, {}).get(benchmark, {}))

    def __contains__(self, config: str) -> bool:
        return config in self._times

    def __repr__(self) -> str:
        return f"ResultSet(configs={self.config_names!r})"


def load_result_files(paths: Iterable[Path]) -> ResultSet:
    """Load one JSON result file per configuration into a :class:`ResultSet`."""
    payloads = []
    for path in sorted(Path(p) for p in paths):
        try:
            payloads.append(read_json(path))
        except json.JSONDecodeError as e:
            raise ValueError(f"Malformed JSON in {path}: {e}") from e
        logger.info("Loaded results from %s", path)
    return ResultSet.from_payloads(payloads)

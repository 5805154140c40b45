# Copyright (c) 2025-2026 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

"""Exception hierarchy for report generation.

Every error here is fatal to the report being built. Nothing catches them
inside the library; the CLI prints them and exits non-zero.
"""

from __future__ import annotations


class ReportError(Exception):
    """Base class for all report generation failures."""


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------

class AmbiguousConfigError(ReportError):
    """More than one configuration matched a role."""

    def __init__(self, role_label: str, candidates: list[str]):
        self.role_label = role_label
        self.candidates = list(candidates)
        super().__init__(
            f"Found more than one candidate {role_label} config "
            f"({self.candidates!r}) in this result set"
        )


class ConfigRoleConflictError(ReportError):
    """One configuration matched the rules of two roles."""

    def __init__(self, config: str, role_labels: list[str]):
        self.config = config
        self.role_labels = list(role_labels)
        super().__init__(
            f"Config {config!r} matched more than one role "
            f"({', '.join(self.role_labels)})"
        )


class MissingConfigError(ReportError):
    """No configuration matched a required role."""

    def __init__(self, role_label: str, config_names: list[str]):
        self.role_label = role_label
        self.config_names = list(config_names)
        super().__init__(
            f"Did not find any {role_label} config among {self.config_names!r}"
        )


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

class MissingResultsError(ReportError):
    """A resolved configuration has no samples for one or more benchmarks."""

    def __init__(self, config: str, benchmarks: list[str]):
        self.config = config
        self.benchmarks = list(benchmarks)
        if self.benchmarks:
            msg = f"No results in config {config!r} for benchmark(s) {self.benchmarks!r}"
        else:
            msg = f"No results for configuration {config!r}"
        super().__init__(msg)


class MissingCounterDataError(ReportError):
    """Interpreter counters are absent for one or more active benchmarks."""

    def __init__(self, config: str, benchmarks: list[str], field: str | None = None):
        self.config = config
        self.benchmarks = list(benchmarks)
        self.field = field
        if field:
            msg = (f"Counter {field!r} missing in config {config!r} "
                   f"for benchmark(s) {self.benchmarks!r}")
        else:
            msg = f"No counter data in config {config!r} for benchmark(s) {self.benchmarks!r}"
        super().__init__(msg)


class DivisionByZeroError(ReportError, ZeroDivisionError):
    """A mean or instruction total of zero would be used as a divisor."""

    def __init__(self, config: str, benchmark: str, quantity: str):
        self.config = config
        self.benchmark = benchmark
        self.quantity = quantity
        super().__init__(
            f"Zero {quantity} in config {config!r} for benchmark {benchmark!r}"
        )

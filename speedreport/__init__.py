# Copyright (c) 2025-2026 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

"""speedreport - comparative interpreter speed reports."""

from .__version__ import __version__
from .chart import Line, Rect, Scene, Text, choose_tick_step, layout, tick_values
from .configs import (
    DEFAULT_POLICY,
    NamingPolicy,
    ResolvedConfigs,
    Role,
    RoleRule,
    resolve_config,
    resolve_roles,
)
from .errors import (
    AmbiguousConfigError,
    ConfigRoleConflictError,
    DivisionByZeroError,
    MissingConfigError,
    MissingCounterDataError,
    MissingResultsError,
    ReportError,
)
from .headline import format_speedup, headline
from .report import SpeedReport, build_report
from .results import ResultSet, load_result_files
from .stats import ConfigStats, Speedup, StatsBundle, compute, tripwires
from .svg import render_svg
from .table import format_as_table, to_dataframe, to_rows, to_text

__all__ = [
    "__version__",
    # Data
    "ResultSet",
    "load_result_files",
    # Config resolution
    "Role",
    "RoleRule",
    "NamingPolicy",
    "DEFAULT_POLICY",
    "ResolvedConfigs",
    "resolve_config",
    "resolve_roles",
    # Statistics
    "ConfigStats",
    "Speedup",
    "StatsBundle",
    "compute",
    "tripwires",
    # Chart
    "Scene",
    "Rect",
    "Line",
    "Text",
    "layout",
    "choose_tick_step",
    "tick_values",
    "render_svg",
    # Tables and summaries
    "to_rows",
    "to_text",
    "to_dataframe",
    "format_as_table",
    "headline",
    "format_speedup",
    "SpeedReport",
    "build_report",
    # Errors
    "ReportError",
    "AmbiguousConfigError",
    "ConfigRoleConflictError",
    "MissingConfigError",
    "MissingResultsError",
    "MissingCounterDataError",
    "DivisionByZeroError",
]

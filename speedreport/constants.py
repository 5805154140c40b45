# Copyright (c) 2025-2026 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

"""Canonical constants for speed reports.

Every module imports from here: chart geometry, colours, the default
config naming rules and the counter names the statistics engine reads.
"""

from __future__ import annotations

from collections import OrderedDict

# ---------------------------------------------------------------------------
# Default config naming rules
#
# role → (substring matched against config names, display label, optional)
# Order is display order: baseline first, optional extra last.
# ---------------------------------------------------------------------------
DEFAULT_ROLE_RULES: OrderedDict[str, tuple[str, str, bool]] = OrderedDict([
    ("baseline",            ("no_jit",      "No JIT",  False)),
    ("optimized_primary",   ("with_yjit",   "YJIT",    False)),
    ("optimized_secondary", ("with_mjit",   "MJIT",    False)),
    ("optional_extra",      ("truffleruby", "Truffle", True)),
])

# ---------------------------------------------------------------------------
# Interpreter counters
# ---------------------------------------------------------------------------
COUNTER_TOTAL_INSNS = "instructions_executed_total"
COUNTER_FALLBACK_INSNS = "instructions_executed_by_fallback_vm"
COUNTER_COMPILED_ISEQS = "compiled_iseq_count"

# ---------------------------------------------------------------------------
# Canvas and plot geometry (fractions of the canvas unless noted)
# ---------------------------------------------------------------------------
CANVAS_WIDTH = 1000
CANVAS_HEIGHT = 600

LEFT_AXIS_WIDTH = 0.15
RIGHT_WHITESPACE = 0.05
TOP_WHITESPACE = 0.05
BOTTOM_KEY_HEIGHT = 0.20

# Fraction of the plot width left empty at each side of the bar area.
PLOT_PADDING_RATIO = 0.05
# Fraction of the plot height kept free above the tallest bar.
PLOT_TOP_WHITESPACE_RATIO = 0.07

TICK_LENGTH = 0.008
FONT_SIZE = "small"

LEGEND_BOX_WIDTH = 0.08
LEGEND_BOX_HEIGHT = 0.03
LEGEND_TEXT_HEIGHT = 0.025
LEGEND_CENTER_OFFSET = 0.025

BENCH_LABEL_ROTATION = -60

# ---------------------------------------------------------------------------
# Colours
# ---------------------------------------------------------------------------
AXIS_COLOUR = "#000"
BACKGROUND_COLOUR = "#EEE"
TEXT_COLOUR = "#111"
LEGEND_BOX_STROKE_COLOUR = "#888"

# Assigned positionally to configs in display order.
BAR_COLOURS: list[str] = ["#7070f8", "orange", "green", "red"]

# ---------------------------------------------------------------------------
# Axis ticks
# ---------------------------------------------------------------------------
# Multipliers of the largest power of ten below the max ratio, tried in order.
TICK_STEP_MULTIPLIERS: list[float] = [5.0, 2.0, 1.0, 1 / 2, 1 / 5, 1 / 10, 1 / 20]
# Division counts accepted: strictly between these bounds.
MIN_DIVISIONS_EXCLUSIVE = 4
MAX_DIVISIONS_EXCLUSIVE = 10

# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------
BENCH_DISPLAY_SUFFIX = ".rb"
FEATURED_BENCHMARK = "railsbench"
# Speedups within this distance of 1.0 read as "the same speed".
SAME_SPEED_TOLERANCE = 0.01

TABLE_FOOTNOTE = (
    "RSD is relative standard deviation (stddev / mean), expressed as a percent.\n"
    "Spd is the speed (iters/second) of the optimised implementation -- "
    "2.0x would be twice as many iters per second.\n"
)

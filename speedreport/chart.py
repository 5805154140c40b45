# Copyright (c) 2025-2026 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

"""Chart layout for the speedup bar chart.

Positions are first worked out as ratios (0..1) of the canvas and converted
to canvas units (1000 x 600) when a primitive is emitted. The result is a
:class:`Scene`, a flat ordered list of :class:`Rect`, :class:`Line` and
:class:`Text` primitives that :mod:`speedreport.svg` (or anything else) can
render.

Layout, left to right and top to bottom:

* 15% left margin for the axis scale, 5% right whitespace
* 5% top whitespace, 20% bottom margin for benchmark names
* inside the plot, 5% padding at both sides and 7% free above the
  tallest bar
* one band per benchmark holding one bar per config plus one empty slot
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence, Union

from .constants import (
    AXIS_COLOUR,
    BACKGROUND_COLOUR,
    BAR_COLOURS,
    BENCH_DISPLAY_SUFFIX,
    BENCH_LABEL_ROTATION,
    BOTTOM_KEY_HEIGHT,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    FONT_SIZE,
    LEFT_AXIS_WIDTH,
    LEGEND_BOX_HEIGHT,
    LEGEND_BOX_STROKE_COLOUR,
    LEGEND_BOX_WIDTH,
    LEGEND_CENTER_OFFSET,
    LEGEND_TEXT_HEIGHT,
    MAX_DIVISIONS_EXCLUSIVE,
    MIN_DIVISIONS_EXCLUSIVE,
    PLOT_PADDING_RATIO,
    PLOT_TOP_WHITESPACE_RATIO,
    RIGHT_WHITESPACE,
    TEXT_COLOUR,
    TICK_LENGTH,
    TICK_STEP_MULTIPLIERS,
    TOP_WHITESPACE,
)
from .stats import StatsBundle


# ---------------------------------------------------------------------------
# Scene primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: str
    stroke: str | None = None
    tag: str = ""


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str = AXIS_COLOUR
    tag: str = ""


@dataclass(frozen=True)
class Text:
    text: str
    x: float
    y: float
    anchor: str = "middle"
    fill: str = TEXT_COLOUR
    font_size: str = FONT_SIZE
    font_weight: str = "bold"
    font_family: str | None = None
    rotate: float | None = None
    tag: str = ""


Primitive = Union[Rect, Line, Text]


@dataclass(frozen=True)
class Scene:
    width: int
    height: int
    primitives: tuple[Primitive, ...] = field(default_factory=tuple)

    def tagged(self, tag: str) -> list[Primitive]:
        return [p for p in self.primitives if p.tag == tag]

    def __len__(self) -> int:
        return len(self.primitives)

    def __iter__(self):
        return iter(self.primitives)


def ratio_to_x(ratio: float) -> float:
    return ratio * CANVAS_WIDTH


def ratio_to_y(ratio: float) -> float:
    return ratio * CANVAS_HEIGHT


# ---------------------------------------------------------------------------
# Axis ticks
# ---------------------------------------------------------------------------

def _divisions(max_ratio: float, step: float) -> int:
    return int(max_ratio / step)


def tick_step_candidates(max_ratio: float) -> list[float]:
    """Round step sizes around the largest power of ten below *max_ratio*."""
    if not (max_ratio > 0 and math.isfinite(max_ratio)):
        raise ValueError(f"Cannot scale an axis to a maximum of {max_ratio!r}")
    largest_power_of_10 = 10.0 ** math.floor(math.log10(max_ratio))
    return [largest_power_of_10 * m for m in TICK_STEP_MULTIPLIERS]


def choose_tick_step(max_ratio: float) -> float:
    """Pick the first candidate step giving 5 to 9 divisions up to *max_ratio*.

    When no candidate lands in that window (a max ratio of 2.0 to 2.5 times a
    power of ten misses it), take the candidate whose division count is
    closest to it, earliest candidate first on ties.
    """
    candidates = tick_step_candidates(max_ratio)
    for step in candidates:
        if MIN_DIVISIONS_EXCLUSIVE < _divisions(max_ratio, step) < MAX_DIVISIONS_EXCLUSIVE:
            return step

    def distance(step):
        divs = _divisions(max_ratio, step)
        if divs <= MIN_DIVISIONS_EXCLUSIVE:
            return MIN_DIVISIONS_EXCLUSIVE + 1 - divs
        return divs - (MAX_DIVISIONS_EXCLUSIVE - 1)

    return min(candidates, key=distance)


def tick_values(max_ratio: float, step: float) -> list[float]:
    """Multiples of *step* from 0 through the first one above *max_ratio*."""
    ticks = []
    k = 0
    while True:
        value = k * step
        ticks.append(value)
        if value > max_ratio:
            return ticks
        k += 1


def _tick_label(value: float, step: float) -> str:
    decimals = max(1, -math.floor(math.log10(step) + 1e-9))
    return f"{value:.{decimals}f}"


def bar_height_ratio(ratio: float, max_ratio: float) -> float:
    """Fraction of the effective plot height a bar for *ratio* fills."""
    return ratio / max_ratio


def display_name(benchmark: str) -> str:
    if benchmark.endswith(BENCH_DISPLAY_SUFFIX):
        return benchmark[: -len(BENCH_DISPLAY_SUFFIX)]
    return benchmark


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlotGeometry:
    """Plot-area measurements as canvas ratios."""

    n_benchmarks: int
    n_configs: int
    plot_left: float = LEFT_AXIS_WIDTH
    plot_top: float = TOP_WHITESPACE
    plot_bottom: float = 1.0 - BOTTOM_KEY_HEIGHT
    plot_width: float = 1.0 - LEFT_AXIS_WIDTH - RIGHT_WHITESPACE
    plot_height: float = 1.0 - BOTTOM_KEY_HEIGHT - TOP_WHITESPACE

    @property
    def effective_left(self) -> float:
        return self.plot_left + self.plot_width * PLOT_PADDING_RATIO

    @property
    def effective_width(self) -> float:
        return self.plot_width * (1.0 - 2 * PLOT_PADDING_RATIO)

    @property
    def effective_top(self) -> float:
        return self.plot_top + PLOT_TOP_WHITESPACE_RATIO * self.plot_height

    @property
    def effective_height(self) -> float:
        return self.plot_height - PLOT_TOP_WHITESPACE_RATIO * self.plot_height

    @property
    def bench_width(self) -> float:
        return self.effective_width / self.n_benchmarks

    @property
    def bar_width(self) -> float:
        return self.bench_width / (self.n_configs + 1)

    def bench_left(self, bench_idx: int) -> float:
        return self.effective_left + bench_idx * self.bench_width

    def y_for(self, height_ratio: float) -> float:
        """Canvas ratio of the point *height_ratio* of the way up the bars."""
        return self.effective_top + (1.0 - height_ratio) * self.effective_height


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

def _plot_frame(geo: PlotGeometry) -> list[Primitive]:
    return [Rect(ratio_to_x(geo.plot_left), ratio_to_y(geo.plot_top),
                 ratio_to_x(geo.plot_width), ratio_to_y(geo.plot_height),
                 fill=BACKGROUND_COLOUR, stroke=AXIS_COLOUR, tag="plot")]


def _axis_ticks(geo: PlotGeometry, max_ratio: float) -> list[Primitive]:
    out: list[Primitive] = []
    step = choose_tick_step(max_ratio)
    for value in tick_values(max_ratio, step):
        tick_y = geo.y_for(value / max_ratio)
        # The multiple above the max can sit over the frame or off the canvas.
        if tick_y < geo.plot_top:
            continue
        out.append(Line(ratio_to_x(geo.plot_left - TICK_LENGTH), ratio_to_y(tick_y),
                        ratio_to_x(geo.plot_left), ratio_to_y(tick_y), tag="tick"))
        out.append(Text(_tick_label(value, step),
                        ratio_to_x(geo.plot_left - 3 * TICK_LENGTH), ratio_to_y(tick_y),
                        anchor="end", tag="tick_label"))
    return out


def _legend(geo: PlotGeometry, labels: Sequence[str]) -> list[Primitive]:
    out: list[Primitive] = []
    item_width = geo.effective_width / len(labels)
    center_y = geo.plot_top + LEGEND_CENTER_OFFSET
    for idx, label in enumerate(labels):
        center_x = geo.effective_left + item_width * (idx + 0.5)
        out.append(Rect(ratio_to_x(center_x - 0.5 * LEGEND_BOX_WIDTH),
                        ratio_to_y(center_y - 0.5 * LEGEND_BOX_HEIGHT),
                        ratio_to_x(LEGEND_BOX_WIDTH), ratio_to_y(LEGEND_BOX_HEIGHT),
                        fill=BAR_COLOURS[idx % len(BAR_COLOURS)],
                        stroke=LEGEND_BOX_STROKE_COLOUR, tag="legend_box"))
        out.append(Text(label, ratio_to_x(center_x),
                        ratio_to_y(center_y + 0.5 * LEGEND_TEXT_HEIGHT), tag="legend_label"))
    return out


def _bar_with_whiskers(geo: PlotGeometry, left: float, ratio: float, rsd_pct: float,
                       max_ratio: float, colour: str) -> list[Primitive]:
    height_ratio = bar_height_ratio(ratio, max_ratio)
    # Whiskers are one relative stddev of the bar's own height.
    whisker_ratio = height_ratio * (rsd_pct / 100.0)

    right = left + geo.bar_width
    center = left + 0.5 * geo.bar_width
    top = geo.y_for(height_ratio)
    top_whisker = top - whisker_ratio * geo.effective_height
    bottom_whisker = top + whisker_ratio * geo.effective_height

    return [
        Rect(ratio_to_x(left), ratio_to_y(top),
             ratio_to_x(geo.bar_width), ratio_to_y(height_ratio * geo.effective_height),
             fill=colour, tag="bar"),
        Line(ratio_to_x(left), ratio_to_y(top_whisker),
             ratio_to_x(right), ratio_to_y(top_whisker), tag="whisker"),
        Line(ratio_to_x(left), ratio_to_y(bottom_whisker),
             ratio_to_x(right), ratio_to_y(bottom_whisker), tag="whisker"),
        Line(ratio_to_x(center), ratio_to_y(top_whisker),
             ratio_to_x(center), ratio_to_y(bottom_whisker), tag="whisker"),
    ]


def _bench_label(geo: PlotGeometry, bench_idx: int, bench_name: str) -> list[Primitive]:
    middle = geo.bench_left(bench_idx) + 0.5 * geo.bench_width
    text_y = geo.plot_bottom + 3 * TICK_LENGTH
    return [
        Line(ratio_to_x(middle), ratio_to_y(geo.plot_bottom),
             ratio_to_x(middle), ratio_to_y(geo.plot_bottom + TICK_LENGTH), tag="bench_tick"),
        Text(display_name(bench_name), ratio_to_x(middle), ratio_to_y(text_y),
             anchor="end", font_family="monospace",
             rotate=BENCH_LABEL_ROTATION, tag="bench_label"),
    ]


def layout(bundle: StatsBundle, configs_with_labels: Sequence[tuple[str, str]] | None = None) -> Scene:
    """Lay out the speedup chart for *bundle*.

    *configs_with_labels* is a sequence of ``(label, config name)`` pairs in
    display order; it defaults to the bundle's resolved configs.
    """
    if configs_with_labels is None:
        configs_with_labels = bundle.configs.with_labels()
    labels = [label for label, _ in configs_with_labels]
    config_names = [config for _, config in configs_with_labels]
    baseline = bundle.configs.baseline

    geo = PlotGeometry(n_benchmarks=len(bundle.benchmark_names), n_configs=len(config_names))
    max_ratio = bundle.max_speedup_ratio

    primitives: list[Primitive] = []
    primitives += _plot_frame(geo)
    primitives += _axis_ticks(geo, max_ratio)
    primitives += _legend(geo, labels)

    for bench_idx, bench_name in enumerate(bundle.benchmark_names):
        bars_left = geo.bench_left(bench_idx)
        for config_idx, config in enumerate(config_names):
            if config == baseline:
                # The baseline is exactly 1x itself.
                ratio = 1.0
                rsd_pct = bundle.by_config[baseline].rsd_pcts[bench_idx]
            else:
                ratio, rsd_pct = bundle.speedups[config][bench_idx]
            primitives += _bar_with_whiskers(
                geo, bars_left + config_idx * geo.bar_width, ratio, rsd_pct, max_ratio,
                BAR_COLOURS[config_idx % len(BAR_COLOURS)])
        primitives += _bench_label(geo, bench_idx, bench_name)

    return Scene(CANVAS_WIDTH, CANVAS_HEIGHT, tuple(primitives))

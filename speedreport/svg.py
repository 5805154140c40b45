# Copyright (c) 2025-2026 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

"""SVG serialization of a chart :class:`~speedreport.chart.Scene`.

Output is byte-for-byte reproducible: attributes are written in a fixed
order and coordinates with a fixed number of decimals.
"""

from __future__ import annotations

from html import escape as html_escape

from .chart import Line, Rect, Scene, Text


def _num(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _attrs(pairs) -> str:
    return " ".join(f'{name}="{html_escape(str(value), quote=True)}"'
                    for name, value in pairs if value is not None)


def _rect(r: Rect) -> str:
    return "<rect " + _attrs([
        ("x", _num(r.x)), ("y", _num(r.y)),
        ("width", _num(r.width)), ("height", _num(r.height)),
        ("fill", r.fill), ("stroke", r.stroke),
    ]) + " />"


def _line(line: Line) -> str:
    return "<line " + _attrs([
        ("x1", _num(line.x1)), ("y1", _num(line.y1)),
        ("x2", _num(line.x2)), ("y2", _num(line.y2)),
        ("stroke", line.stroke),
    ]) + " />"


def _text(t: Text) -> str:
    transform = None
    if t.rotate is not None:
        transform = f"rotate({_num(t.rotate)}, {_num(t.x)}, {_num(t.y)})"
    return "<text " + _attrs([
        ("x", _num(t.x)), ("y", _num(t.y)),
        ("fill", t.fill), ("font-size", t.font_size),
        ("font-family", t.font_family), ("font-weight", t.font_weight),
        ("text-anchor", t.anchor), ("transform", transform),
    ]) + f">{html_escape(t.text)}</text>"


_RENDERERS = {Rect: _rect, Line: _line, Text: _text}


def render_svg(scene: Scene) -> str:
    """Render *scene* as a standalone SVG document."""
    parts = [
        f'<svg viewBox="0 0 {scene.width} {scene.height}" '
        'xmlns="http://www.w3.org/2000/svg" '
        'xmlns:xlink="http://www.w3.org/1999/xlink">'
    ]
    for primitive in scene.primitives:
        renderer = _RENDERERS.get(type(primitive))
        if renderer is None:
            raise TypeError(f"Cannot render scene primitive {primitive!r}")
        parts.append(renderer(primitive))
    parts.append("</svg>")
    return "\n".join(parts) + "\n"

# Copyright (c) 2025-2026 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

import xml.etree.ElementTree as ET

import pytest

from speedreport.chart import Line, Rect, Scene, Text, layout
from speedreport.configs import resolve_roles
from speedreport.stats import compute
from speedreport.svg import render_svg

SVG_NS = "{http://www.w3.org/2000/svg}"


def test_render_primitives():
    scene = Scene(1000, 600, (
        Rect(10.0, 20.5, 30.25, 40.0, fill="#EEE", stroke="#000"),
        Line(0.0, 1.0, 2.0, 3.0),
        Text("a<b", 5.0, 6.0, anchor="end", rotate=-60),
    ))
    svg = render_svg(scene)
    assert svg.startswith('<svg viewBox="0 0 1000 600"')
    assert '<rect x="10" y="20.5" width="30.25" height="40" fill="#EEE" stroke="#000" />' in svg
    assert '<line x1="0" y1="1" x2="2" y2="3" stroke="#000" />' in svg
    assert 'transform="rotate(-60, 5, 6)"' in svg
    assert ">a&lt;b</text>" in svg
    assert svg.endswith("</svg>\n")


def test_unknown_primitive_rejected():
    with pytest.raises(TypeError):
        render_svg(Scene(10, 10, ("not a primitive",)))


def test_full_chart_is_valid_xml_and_reproducible(full_result_set):
    configs = resolve_roles(full_result_set.config_names)
    benches = ["railsbench", "fib.rb", "liquid-render"]
    first = render_svg(layout(compute(full_result_set, configs, benches)))
    second = render_svg(layout(compute(full_result_set, configs, benches)))
    assert first == second

    root = ET.fromstring(first)
    assert root.tag == SVG_NS + "svg"
    assert len(root.findall(SVG_NS + "rect")) == 1 + 4 + 12  # frame, legend, bars
    texts = [el.text for el in root.findall(SVG_NS + "text")]
    assert "Truffle" in texts
    assert "fib" in texts

# Copyright (c) 2025-2026 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

import json

import pytest

from speedreport.errors import MissingCounterDataError
from speedreport.report import build_report, main, order_benchmarks
from speedreport.results import ResultSet


def _write_payloads(tmp_path, payloads):
    paths = []
    for payload in payloads:
        path = tmp_path / f"{payload['config']}.json"
        path.write_text(json.dumps(payload))
        paths.append(str(path))
    return paths


def test_build_report_uses_report_order(full_result_set):
    report = build_report(full_result_set)
    assert report.stats.benchmark_names == ("fib.rb", "liquid-render", "railsbench")
    assert [row[0] for row in report.rows] == list(report.stats.benchmark_names)
    assert [t.text for t in report.scene.tagged("bench_label")] == ["fib", "liquid-render", "railsbench"]
    assert list(report.tripwires) == list(report.stats.benchmark_names)


def test_build_report_allow_list(full_result_set):
    report = build_report(full_result_set, benchmarks=["railsbench"])
    assert report.stats.benchmark_names == ("railsbench",)
    assert len(report.scene.tagged("bar")) == 4


def test_build_report_two_configs(loop_bench_result_set, two_config_policy):
    report = build_report(loop_bench_result_set, two_config_policy)
    assert report.rows[0][0] == "loop_bench"
    assert report.rows[0][5] == pytest.approx(2.0)
    assert len(report.scene.tagged("legend_box")) == 2


def test_build_report_missing_counters_produces_nothing(full_times, full_counters):
    del full_counters["prod_ruby_with_yjit"]["railsbench"]
    rs = ResultSet(full_times, counters=full_counters)
    report = None
    with pytest.raises(MissingCounterDataError):
        report = build_report(rs)
    assert report is None


def test_order_benchmarks(full_result_set):
    names = ["railsbench", "fib.rb", "liquid-render"]
    primary = "prod_ruby_with_yjit"
    assert order_benchmarks(names, full_result_set, primary, "name") == ["fib.rb", "liquid-render", "railsbench"]
    assert order_benchmarks(names, full_result_set, primary, "input") == names
    with pytest.raises(ValueError):
        order_benchmarks(names, full_result_set, primary, "random")


def test_write_files(full_result_set, tmp_path):
    report = build_report(full_result_set)
    written = report.write_files(tmp_path / "out" / "blog_speed_details_2026-10-19")
    names = sorted(p.name for p in written)
    assert names == [
        "blog_speed_details_2026-10-19.csv",
        "blog_speed_details_2026-10-19.svg",
        "blog_speed_details_2026-10-19.tripwires.json",
        "blog_speed_details_2026-10-19.txt",
    ]
    wires = json.loads((tmp_path / "out" / "blog_speed_details_2026-10-19.tripwires.json").read_text())
    assert wires["railsbench"]["mean"] == pytest.approx(80.0)
    svg = (tmp_path / "out" / "blog_speed_details_2026-10-19.svg").read_text()
    assert svg == report.svg


def test_main_writes_report(tmp_path, full_payloads, capsys):
    paths = _write_payloads(tmp_path, full_payloads)
    prefix = tmp_path / "reports" / "speed"
    assert main(paths + ["-o", str(prefix), "--print"]) == 0
    out = capsys.readouterr().out
    assert "5.00x" in out
    assert "Report written to:" in out
    assert (tmp_path / "reports" / "speed.svg").exists()
    assert (tmp_path / "reports" / "speed.csv").exists()


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.json")]) == 1
    assert "Result file not found" in capsys.readouterr().err


def test_main_fails_without_partial_output(tmp_path, full_payloads, capsys):
    for payload in full_payloads:
        if payload["config"] == "prod_ruby_with_yjit":
            payload["counters"] = {}
    paths = _write_payloads(tmp_path, full_payloads)
    prefix = tmp_path / "reports" / "speed"
    assert main(paths + ["-o", str(prefix)]) == 1
    assert "ERROR:" in capsys.readouterr().err
    assert not (tmp_path / "reports").exists()


def test_main_unwritable_output(tmp_path, full_payloads, capsys):
    paths = _write_payloads(tmp_path, full_payloads)
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")
    assert main(paths + ["-o", str(blocker / "speed")]) == 1
    err = capsys.readouterr().err
    assert "ERROR: Could not write report" in err


def test_write_files_removes_partial_output(full_result_set, tmp_path):
    report = build_report(full_result_set)
    prefix = tmp_path / "speed"
    # A directory where the CSV should go makes the last write fail.
    (tmp_path / "speed.csv").mkdir()
    with pytest.raises(OSError):
        report.write_files(prefix)
    assert sorted(p.name for p in tmp_path.iterdir()) == ["speed.csv"]

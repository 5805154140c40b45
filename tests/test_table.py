# Copyright (c) 2025-2026 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

import unittest

import pandas as pd
import pytest

from speedreport.configs import resolve_roles
from speedreport.stats import compute
from speedreport.table import (
    col_formats,
    format_as_table,
    headings,
    to_dataframe,
    to_rows,
    to_text,
    write_csv,
)

BENCHES = ["railsbench", "fib.rb", "liquid-render"]


@pytest.fixture
def bundle(full_result_set):
    return compute(full_result_set, resolve_roles(full_result_set.config_names), BENCHES)


def test_headings(bundle):
    assert headings(bundle) == [
        "bench",
        "No JIT (ms)", "No JIT RSD",
        "YJIT (ms)", "YJIT RSD",
        "MJIT (ms)", "MJIT RSD",
        "Truffle (ms)", "Truffle RSD",
        "YJIT spd", "YJIT spd RSD",
        "MJIT spd", "MJIT spd RSD",
        "Truffle spd", "Truffle spd RSD",
        "% in YJIT",
    ]
    assert len(col_formats(bundle)) == len(headings(bundle))


def test_rows(bundle):
    rows = to_rows(bundle)
    assert [row[0] for row in rows] == BENCHES
    fib = rows[1]
    assert len(fib) == 16
    assert fib[1] == pytest.approx(50.0)      # No JIT mean
    assert fib[3] == pytest.approx(10.0)      # YJIT mean
    assert fib[9] == pytest.approx(5.0)       # YJIT speedup
    assert fib[13] == pytest.approx(10.0)     # Truffle speedup
    assert fib[15] == pytest.approx(100.0)    # % in YJIT


def test_text_table(bundle):
    text = to_text(bundle)
    lines = text.splitlines()
    assert lines[0].startswith("bench")
    assert set(lines[1].replace(" ", "")) == {"-"}
    fib_line = next(line for line in lines if line.startswith("fib.rb"))
    assert "50.0" in fib_line
    assert "5.00x" in fib_line
    assert "100.00%" in fib_line
    assert "RSD is relative standard deviation" in text


class TestFormatAsTable(unittest.TestCase):
    """Column alignment."""

    def test_alignment(self):
        out = format_as_table(["name", "value"], ["%s", "%.2fx"], [["a", 1.0], ["longer", 12.5]])
        lines = out.splitlines()
        self.assertEqual(lines[0], "name     value")
        self.assertEqual(lines[1], "------  ------")
        self.assertEqual(lines[2], "a        1.00x")
        self.assertEqual(lines[3], "longer  12.50x")

    def test_mismatched_formats(self):
        with self.assertRaises(ValueError):
            format_as_table(["a", "b"], ["%s"], [])

    def test_mismatched_row(self):
        with self.assertRaises(ValueError):
            format_as_table(["a", "b"], ["%s", "%s"], [["x", "y", "z"]])

    def test_empty_row_is_a_value_error(self):
        with self.assertRaises(ValueError):
            format_as_table(["a", "b"], ["%s", "%s"], [[]])


def test_dataframe_and_csv(bundle, tmp_path):
    df = to_dataframe(bundle)
    assert list(df.columns) == headings(bundle)
    assert list(df["bench"]) == BENCHES

    path = tmp_path / "report.csv"
    write_csv(bundle, path)
    read_back = pd.read_csv(path)
    assert list(read_back.columns) == headings(bundle)
    assert read_back["YJIT spd"].tolist() == pytest.approx([1.25, 5.0, 1.25])

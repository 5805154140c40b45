# Copyright (c) 2025-2026 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

"""
Pytest configuration and shared fixtures for speedreport tests.

Both unittest.TestCase subclasses and plain pytest functions are discovered
automatically by ``pytest``.  Run the full suite with::

    pytest tests/ -v
"""

import copy
import os
import sys

import pytest

# ---------------------------------------------------------------------------
# Ensure speedreport is importable regardless of working directory
# ---------------------------------------------------------------------------
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from speedreport.configs import NamingPolicy, Role, RoleRule  # noqa: E402
from speedreport.results import ResultSet  # noqa: E402


def counters(total, fallback, compiled=10):
    return {
        "instructions_executed_total": total,
        "instructions_executed_by_fallback_vm": fallback,
        "compiled_iseq_count": compiled,
    }


# No JIT / YJIT / MJIT / Truffle, three benchmarks. Means are exact:
#   railsbench    100  80  95  200
#   fib.rb         50  10  25    5
#   liquid-render  20  16  22   10
FULL_TIMES = {
    "prod_ruby_no_jit": {
        "railsbench": [100.0, 102.0, 98.0],
        "fib.rb": [50.0, 50.0],
        "liquid-render": [20.0, 21.0, 19.0],
    },
    "prod_ruby_with_yjit": {
        "railsbench": [80.0, 81.0, 79.0],
        "fib.rb": [10.0, 10.5, 9.5],
        "liquid-render": [16.0],
    },
    "prod_ruby_with_mjit": {
        "railsbench": [95.0, 96.0, 94.0],
        "fib.rb": [25.0, 25.0],
        "liquid-render": [22.0, 22.0],
    },
    "truffleruby": {
        "railsbench": [200.0, 190.0, 210.0],
        "fib.rb": [5.0, 5.0],
        "liquid-render": [10.0, 10.0],
    },
}

FULL_COUNTERS = {
    "prod_ruby_with_yjit": {
        "railsbench": [counters(1000, 250, compiled=500)],
        "fib.rb": [counters(400, 0, compiled=3)],
        "liquid-render": [counters(300, 100, compiled=120), counters(100, 100, compiled=120)],
    },
}

FULL_METADATA = {
    "prod_ruby_no_jit": {"RUBY_DESCRIPTION": "ruby 3.4.0dev"},
    "prod_ruby_with_yjit": {"RUBY_DESCRIPTION": "ruby 3.4.0dev +YJIT"},
    "prod_ruby_with_mjit": {"RUBY_DESCRIPTION": "ruby 3.4.0dev +MJIT"},
    "truffleruby": {"RUBY_DESCRIPTION": "truffleruby 24.1"},
}


@pytest.fixture
def full_times():
    return copy.deepcopy(FULL_TIMES)


@pytest.fixture
def full_counters():
    return copy.deepcopy(FULL_COUNTERS)


@pytest.fixture
def full_result_set(full_times, full_counters):
    return ResultSet(full_times, copy.deepcopy(FULL_METADATA), full_counters)


@pytest.fixture
def full_payloads(full_times, full_counters):
    return [
        {
            "config": config,
            "metadata": FULL_METADATA[config],
            "times": times,
            "counters": full_counters.get(config, {}),
        }
        for config, times in full_times.items()
    ]


@pytest.fixture
def two_config_policy():
    return NamingPolicy({
        Role.BASELINE: RoleRule("baseline", "Baseline"),
        Role.OPTIMIZED_PRIMARY: RoleRule("optimized", "Optimized"),
    })


@pytest.fixture
def loop_bench_result_set():
    return ResultSet(
        {
            "baseline": {"loop_bench": [10.0, 10.2, 9.8]},
            "optimized": {"loop_bench": [5.0, 5.1, 4.9]},
        },
        counters={"optimized": {"loop_bench": [counters(900, 100)]}},
    )

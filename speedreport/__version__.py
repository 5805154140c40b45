# Copyright (c) 2025 Tobias Weber <weber.tobias.md@gmail.com>
#
# This file is part of the speedreport library.
#
# Licensed under the MIT License. See LICENSE file in the project root
# for full license information.

"""Version information for speedreport."""

__version__ = "0.3.0"
__author__ = "Tobias Weber"
__email__ = "weber.tobias.md@gmail.com"
__license__ = "MIT"

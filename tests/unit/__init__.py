"""
PySATL Empirical
================

Unit tests for the generator, empirical distributions and goodness-of-fit
machinery.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

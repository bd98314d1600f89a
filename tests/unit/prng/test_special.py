from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest

from pysatl_empirical.errors import InvalidArgumentError
from pysatl_empirical.prng.special import LN_FACTORIAL_TABLE_SIZE, ln_factorial


class TestLnFactorial:
    @pytest.mark.parametrize("n", [0, 1])
    def test_trivial_values(self, n: int) -> None:
        assert ln_factorial(n) == 0.0

    @pytest.mark.parametrize("n", [2, 5, 10, 50, LN_FACTORIAL_TABLE_SIZE - 1])
    def test_table_matches_lgamma(self, n: int) -> None:
        assert ln_factorial(n) == pytest.approx(math.lgamma(n + 1), rel=1e-12)

    @pytest.mark.parametrize("n", [LN_FACTORIAL_TABLE_SIZE, 150, 1_000, 10**6, 2 * 10**9])
    def test_stirling_series_matches_lgamma(self, n: int) -> None:
        assert ln_factorial(n) == pytest.approx(math.lgamma(n + 1), rel=1e-12)

    def test_monotone_across_table_boundary(self) -> None:
        boundary = LN_FACTORIAL_TABLE_SIZE
        values = [ln_factorial(n) for n in range(boundary - 3, boundary + 3)]
        assert all(b > a for a, b in zip(values, values[1:], strict=False))
        step = ln_factorial(LN_FACTORIAL_TABLE_SIZE) - ln_factorial(LN_FACTORIAL_TABLE_SIZE - 1)
        assert step == pytest.approx(math.log(LN_FACTORIAL_TABLE_SIZE), rel=1e-10)

    def test_negative_argument(self) -> None:
        with pytest.raises(InvalidArgumentError):
            ln_factorial(-1)

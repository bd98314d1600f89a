from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math

import numpy as np
import pytest

from pysatl_empirical.distributions.histogram import (
    discrete_histogram_to_histogram,
    paired_components,
    samples_to_histogram_1d,
    samples_to_histogram_2d,
    value_counts_to_histogram,
)
from pysatl_empirical.distributions.sampling import ArraySample
from pysatl_empirical.errors import InvalidArgumentError


class TestHistogram1D:
    def test_counts_and_order(self) -> None:
        hist = samples_to_histogram_1d([3.0, 1.0, 3.0, 2.0, 3.0])
        assert hist == {1.0: 1, 2.0: 1, 3.0: 3}
        assert list(hist) == [1.0, 2.0, 3.0]

    def test_non_finite_values_are_discarded(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="pysatl_empirical"):
            hist = samples_to_histogram_1d([1.0, math.nan, math.inf, -math.inf, 1.0])
        assert hist == {1.0: 2}
        assert "3 non-finite" in caplog.text

    def test_accepts_array_sample(self) -> None:
        sample = ArraySample(np.array([[0.5], [0.5], [1.5]]))
        assert samples_to_histogram_1d(sample) == {0.5: 2, 1.5: 1}

    def test_empty_input(self) -> None:
        assert samples_to_histogram_1d([]) == {}


class TestHistogram2D:
    def test_counts_pairs(self) -> None:
        hist = samples_to_histogram_2d([[1.0, 1.0, 2.0], [5.0, 5.0, 5.0]])
        assert hist == {(1.0, 5.0): 2, (2.0, 5.0): 1}

    def test_drops_pairs_with_non_finite_coordinate(self) -> None:
        hist = samples_to_histogram_2d([[1.0, math.nan, 2.0], [0.0, 1.0, math.inf]])
        assert hist == {(1.0, 0.0): 1}

    def test_accepts_array_sample(self) -> None:
        sample = ArraySample(np.array([[0.0, 1.0], [0.0, 1.0], [2.0, 3.0]]))
        assert samples_to_histogram_2d(sample) == {(0.0, 1.0): 2, (2.0, 3.0): 1}

    @pytest.mark.parametrize(
        "samples",
        [
            [[1.0, 2.0]],
            [[1.0], [2.0], [3.0]],
            [[1.0, 2.0], [3.0]],
            [[[1.0]], [[2.0]]],
        ],
    )
    def test_shape_errors(self, samples: list) -> None:
        with pytest.raises(InvalidArgumentError):
            paired_components(samples)

    def test_array_sample_must_have_two_columns(self) -> None:
        with pytest.raises(InvalidArgumentError, match="exactly two components"):
            samples_to_histogram_2d(ArraySample(np.zeros((4, 3))))


class TestOtherHistogramSources:
    def test_discrete_histogram(self) -> None:
        assert discrete_histogram_to_histogram([2, 0, 5]) == {0.0: 2, 1.0: 0, 2.0: 5}

    def test_value_counts_accumulate(self) -> None:
        hist = value_counts_to_histogram([2.0, 1.0, 2.0], [1, 4, 3])
        assert hist == {1.0: 4, 2.0: 4}
        assert list(hist) == [1.0, 2.0]

    def test_value_counts_skip_non_finite(self) -> None:
        assert value_counts_to_histogram([math.nan, 1.0], [3, 1]) == {1.0: 1}

    def test_value_counts_length_mismatch(self) -> None:
        with pytest.raises(InvalidArgumentError, match="differ in length"):
            value_counts_to_histogram([1.0, 2.0], [1])

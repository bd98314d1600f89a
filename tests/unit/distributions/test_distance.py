from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy import stats

from pysatl_empirical.distributions import (
    DistanceResult,
    EmpiricalDistribution1D,
    EmpiricalDistribution2D,
    compare_1d,
    compare_2d,
)
from pysatl_empirical.errors import InvalidArgumentError, PreconditionViolationError
from pysatl_empirical.prng import RandomGenerator
from pysatl_empirical.types import DistanceKind


def normal_distribution(
    rng: RandomGenerator, n: int, mean: float = 0.0
) -> EmpiricalDistribution1D:
    return EmpiricalDistribution1D.from_sample([rng.normal(mean, 1.0) for _ in range(n)])


class TestCompare1D:
    def test_hand_computed_distances(self) -> None:
        a = EmpiricalDistribution1D.from_sample([0.0, 1.0])
        b = EmpiricalDistribution1D.from_sample([0.0, 1.0, 1.0])
        result = compare_1d(a, b)

        assert result.ks == pytest.approx(1.0 / 6.0)
        assert result.l2 == pytest.approx(1.0 / 6.0)
        assert result.cvm == pytest.approx(math.sqrt(1.0 / 90.0))
        assert result.scale_factor == pytest.approx(math.sqrt(6.0 / 5.0))
        assert result.dimension == 1

    def test_identical_distributions(self, numpy_rng: np.random.Generator) -> None:
        data = numpy_rng.normal(size=300)
        a = EmpiricalDistribution1D.from_sample(data)
        b = EmpiricalDistribution1D.from_sample(data[::-1])
        result = a.compute_distance_to(b)
        assert (result.l2, result.ks, result.cvm) == (0.0, 0.0, 0.0)

    def test_single_common_point(self) -> None:
        a = EmpiricalDistribution1D.from_sample([2.0])
        b = EmpiricalDistribution1D.from_sample([2.0, 2.0])
        result = compare_1d(a, b)
        assert result.l2 == 0.0
        assert result.ks == 0.0

    def test_disjoint_supports(self) -> None:
        a = EmpiricalDistribution1D.from_sample([0.0, 1.0])
        b = EmpiricalDistribution1D.from_sample([2.0, 3.0])
        result = compare_1d(a, b)
        assert result.ks == 1.0
        # F - G is 1/2 on [0, 1), 1 on [1, 2), 1/2 on [2, 3), over an extent of 3
        assert result.l2 == pytest.approx(math.sqrt((0.25 + 1.0 + 0.25) / 3.0))

    def test_symmetry(self, numpy_rng: np.random.Generator) -> None:
        a = EmpiricalDistribution1D.from_sample(numpy_rng.normal(size=40))
        b = EmpiricalDistribution1D.from_sample(numpy_rng.uniform(size=70))
        ab, ba = compare_1d(a, b), compare_1d(b, a)
        assert ab.ks == pytest.approx(ba.ks)
        assert ab.l2 == pytest.approx(ba.l2)
        assert ab.cvm == pytest.approx(ba.cvm)
        assert (ab.n0, ab.n1) == (ba.n1, ba.n0)

    def test_statistics_match_scipy(self, numpy_rng: np.random.Generator) -> None:
        x = numpy_rng.normal(size=60)
        y = numpy_rng.normal(0.3, 1.2, size=45)
        result = compare_1d(
            EmpiricalDistribution1D.from_sample(x), EmpiricalDistribution1D.from_sample(y)
        )
        assert result.ks == pytest.approx(stats.ks_2samp(x, y).statistic, rel=1e-12)
        t = stats.cramervonmises_2samp(x, y).statistic
        assert result.scaled_cvm**2 == pytest.approx(t, rel=1e-9)

    def test_empty_distribution(self) -> None:
        a = EmpiricalDistribution1D.from_sample([1.0])
        empty = EmpiricalDistribution1D({})
        with pytest.raises(PreconditionViolationError):
            compare_1d(a, empty)
        with pytest.raises(PreconditionViolationError):
            empty.compute_distance_to(a)


class TestDistanceResult:
    def test_scaling(self) -> None:
        result = DistanceResult(l2=0.1, ks=0.2, cvm=0.3, n0=4, n1=12)
        factor = math.sqrt(48.0 / 16.0)
        assert result.scale_factor == pytest.approx(factor)
        assert result.scaled_l2 == pytest.approx(0.1 * factor)
        assert result.scaled_ks == pytest.approx(0.2 * factor)
        assert result.scaled_cvm == pytest.approx(0.3 * factor)
        assert result.domain_scaled_l2 == 0.1
        assert result.scaled(DistanceKind.KS) == result.scaled_ks
        assert result.scaled("cvm") == result.scaled_cvm
        assert result.unscaled(DistanceKind.L2) == 0.1

    def test_unknown_kind(self) -> None:
        result = DistanceResult(l2=0.1, ks=0.2, cvm=0.3, n0=4, n1=12)
        with pytest.raises(InvalidArgumentError):
            result.scaled("linf")

    def test_scaling_requires_samples(self) -> None:
        result = DistanceResult(l2=0.0, ks=0.0, cvm=0.0, n0=0, n1=3)
        with pytest.raises(PreconditionViolationError):
            _ = result.scale_factor
        with pytest.raises(PreconditionViolationError):
            result.ks_probability()

    def test_small_samples_use_exact_probability(self, numpy_rng: np.random.Generator) -> None:
        x = numpy_rng.normal(size=15)
        y = numpy_rng.normal(0.8, 1.0, size=20)
        result = compare_1d(
            EmpiricalDistribution1D.from_sample(x), EmpiricalDistribution1D.from_sample(y)
        )
        expected = stats.ks_2samp(x, y, method="exact").pvalue
        assert result.ks_probability() == pytest.approx(expected, rel=1e-7)

    def test_large_samples_use_asymptotic_probability(self, rng: RandomGenerator) -> None:
        a = normal_distribution(rng, 150)
        b = normal_distribution(rng, 120, mean=0.2)
        result = compare_1d(a, b)
        assert result.n0 * result.n1 >= 10_000
        expected = stats.kstwobign.sf(result.scaled_ks)
        assert result.ks_probability() == pytest.approx(expected, rel=1e-6, abs=1e-12)

    def test_asymptotic_on_tiny_samples_warns(self) -> None:
        result = DistanceResult(l2=0.1, ks=0.5, cvm=0.3, n0=3, n1=4)
        with pytest.warns(UserWarning, match="unreliable"):
            result.ks_probability(exact=False)

    def test_cvm_probability_matches_scipy(self, numpy_rng: np.random.Generator) -> None:
        x = numpy_rng.normal(size=80)
        y = numpy_rng.normal(0.4, 1.0, size=50)
        result = compare_1d(
            EmpiricalDistribution1D.from_sample(x), EmpiricalDistribution1D.from_sample(y)
        )
        expected = stats.cramervonmises_2samp(x, y, method="asymptotic").pvalue
        assert result.cvm_probability() == pytest.approx(expected, rel=1e-5, abs=1e-9)


class TestGoodnessOfFit:
    def test_same_distribution_is_accepted(self) -> None:
        rng = RandomGenerator(2718)
        p_values = []
        for _ in range(20):
            result = compare_1d(normal_distribution(rng, 200), normal_distribution(rng, 200))
            p_values.append(result.ks_probability())
        assert sum(p > 0.05 for p in p_values) >= 15
        assert float(np.mean(p_values)) > 0.3

    def test_shifted_distribution_is_rejected(self) -> None:
        rng = RandomGenerator(2718)
        result = compare_1d(normal_distribution(rng, 200), normal_distribution(rng, 200, 5.0))
        assert result.ks_probability() < 0.01
        assert result.cvm_probability() < 0.01


class TestCompare2D:
    def test_hand_computed_distances(self) -> None:
        a = EmpiricalDistribution2D({(0.0, 0.0): 1})
        b = EmpiricalDistribution2D({(1.0, 1.0): 1})
        result = compare_2d(a, b)
        assert result.ks == 1.0
        assert result.l2 == pytest.approx(1.0)
        assert result.cvm == pytest.approx(math.sqrt(0.5))
        assert (result.n0, result.n1) == (1, 1)

    def test_quadrants_detect_anti_diagonal_difference(self) -> None:
        # Same marginals; only the joint arrangement differs.
        a = EmpiricalDistribution2D({(0.0, 1.0): 1, (1.0, 0.0): 1})
        b = EmpiricalDistribution2D({(0.0, 0.0): 1, (1.0, 1.0): 1})
        assert compare_2d(a, b).ks == pytest.approx(0.5)

    def test_identical_samples(self, numpy_rng: np.random.Generator) -> None:
        data = numpy_rng.normal(size=(2, 80))
        a = EmpiricalDistribution2D.from_sample(data)
        b = EmpiricalDistribution2D.from_sample(data[:, ::-1])
        result = a.compute_distance_to(b)
        assert (result.l2, result.ks, result.cvm) == (0.0, 0.0, 0.0)

    def test_ks_is_symmetric_and_bounded(self, numpy_rng: np.random.Generator) -> None:
        a = EmpiricalDistribution2D.from_sample(numpy_rng.normal(size=(2, 60)))
        b = EmpiricalDistribution2D.from_sample(numpy_rng.uniform(size=(2, 90)))
        ab, ba = compare_2d(a, b), compare_2d(b, a)
        assert ab.ks == pytest.approx(ba.ks)
        assert ab.cvm == pytest.approx(ba.cvm)
        assert 0.0 < ab.ks <= 1.0

    def test_dependence_is_detected(self, numpy_rng: np.random.Generator) -> None:
        n = 600
        x = numpy_rng.normal(size=n)
        dependent = EmpiricalDistribution2D.from_sample([x, x + 0.1 * numpy_rng.normal(size=n)])
        independent = EmpiricalDistribution2D.from_sample(numpy_rng.normal(size=(2, n)))
        reference = EmpiricalDistribution2D.from_sample(numpy_rng.normal(size=(2, n)))
        assert compare_2d(dependent, reference).ks > 0.18 > compare_2d(independent, reference).ks

    def test_empty_distribution(self) -> None:
        with pytest.raises(PreconditionViolationError):
            compare_2d(EmpiricalDistribution2D({}), EmpiricalDistribution2D({(0.0, 0.0): 1}))

    def test_probabilities_are_refused(self, numpy_rng: np.random.Generator) -> None:
        a = EmpiricalDistribution2D.from_sample(numpy_rng.normal(size=(2, 40)))
        b = EmpiricalDistribution2D.from_sample(numpy_rng.normal(size=(2, 50)))
        result = compare_2d(a, b)
        assert result.dimension == 2
        assert result.scaled_ks == pytest.approx(result.ks * math.sqrt(2000.0 / 90.0))
        with pytest.raises(PreconditionViolationError, match="1D"):
            result.ks_probability()
        with pytest.raises(PreconditionViolationError, match="1D"):
            result.ks_probability(exact=False)
        with pytest.raises(PreconditionViolationError, match="1D"):
            result.cvm_probability()

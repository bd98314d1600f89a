"""
Distances Between Empirical Distributions
=========================================

:func:`compare_1d` and :func:`compare_2d` evaluate two empirical CDFs on the
union of their breakpoints and report three distances in a
:class:`DistanceResult`:

- ``l2``: root of the integrated squared CDF difference over the common
  support rescaled to the unit interval (unit square in 2D);
- ``ks``: maximum absolute CDF difference; in 2D the maximum over the four
  quadrant CDFs (Fasano–Franceschini);
- ``cvm``: root of the squared CDF difference weighted by the pooled sample
  masses (Cramér–von Mises).

Sample-size scaling and p-values are derived from the result on demand; the
p-values use the 1D null distributions and are refused for 2D results.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
import warnings
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from pysatl_empirical.distributions.probabilities import (
    cramer_von_mises_prob,
    kolmogorov_prob,
    kolmogorov_prob_two_small_samples,
)
from pysatl_empirical.errors import InvalidArgumentError, PreconditionViolationError
from pysatl_empirical.types import DistanceKind

if TYPE_CHECKING:
    from pysatl_empirical.distributions.empirical import (
        EmpiricalDistribution1D,
        EmpiricalDistribution2D,
    )
    from pysatl_empirical.types import NumericArray

logger = logging.getLogger(__name__)

EXACT_KS_LIMIT = 10_000
"""Use the exact two-sample KS distribution while ``n0 * n1`` is below this."""

_ASYMPTOTIC_KS_MIN_PRODUCT = 100


@dataclass(frozen=True, slots=True)
class DistanceResult:
    """
    Outcome of comparing two empirical distributions.

    Attributes
    ----------
    l2 : float
        Domain-normalized L2 distance.
    ks : float
        Kolmogorov–Smirnov distance.
    cvm : float
        Cramér–von Mises distance.
    n0, n1 : int
        Sample counts of the compared distributions.
    dimension : int, default 1
        Dimension of the compared distributions. The p-value methods only
        apply to 1D results.
    """

    l2: float
    ks: float
    cvm: float
    n0: int
    n1: int
    dimension: int = 1

    @property
    def scale_factor(self) -> float:
        """``sqrt(n0 * n1 / (n0 + n1))``."""
        if self.n0 <= 0 or self.n1 <= 0:
            raise PreconditionViolationError("Scaling requires two non-empty samples")
        return math.sqrt(self.n0 * self.n1 / (self.n0 + self.n1))

    @property
    def scaled_l2(self) -> float:
        return self.l2 * self.scale_factor

    @property
    def domain_scaled_l2(self) -> float:
        """L2 distance on the unit-normalized domain, without sample-size scaling."""
        return self.l2

    @property
    def scaled_ks(self) -> float:
        return self.ks * self.scale_factor

    @property
    def scaled_cvm(self) -> float:
        """Scaled CvM distance; its square is the two-sample criterion ``T``."""
        return self.cvm * self.scale_factor

    def _require_one_dimension(self, test: str) -> None:
        # Fasano-Franceschini and 2D CvM statistics have no distribution-free null law.
        if self.dimension != 1:
            raise PreconditionViolationError(
                f"{test} probability is only defined for 1D comparisons, "
                f"got a {self.dimension}D result"
            )

    def unscaled(self, kind: DistanceKind | str) -> float:
        try:
            kind = DistanceKind(kind)
        except ValueError:
            raise InvalidArgumentError(f"Unknown distance kind: {kind!r}") from None
        match kind:
            case DistanceKind.L2:
                return self.l2
            case DistanceKind.KS:
                return self.ks
            case DistanceKind.CVM:
                return self.cvm

    def scaled(self, kind: DistanceKind | str) -> float:
        """Distance of the given kind multiplied by :attr:`scale_factor`."""
        return self.unscaled(kind) * self.scale_factor

    def ks_probability(self, exact: bool | None = None) -> float:
        """
        p-value of the two-sample Kolmogorov–Smirnov test.

        Parameters
        ----------
        exact : bool | None, default None
            Force the exact small-sample distribution (``True``) or the
            asymptotic Kolmogorov distribution (``False``). By default the
            exact one is used while ``n0 * n1 < 10000``.

        Raises
        ------
        PreconditionViolationError
            If either sample is empty or the result is not one-dimensional.
        """
        self._require_one_dimension("KS")
        if self.n0 <= 0 or self.n1 <= 0:
            raise PreconditionViolationError("KS probability requires two non-empty samples")
        if exact is None:
            exact = self.n0 * self.n1 < EXACT_KS_LIMIT
        if exact:
            return kolmogorov_prob_two_small_samples(self.ks, self.n0, self.n1)
        if self.n0 * self.n1 < _ASYMPTOTIC_KS_MIN_PRODUCT:
            warnings.warn(
                f"Asymptotic KS probability is unreliable for samples of size "
                f"{self.n0} and {self.n1}",
                UserWarning,
                stacklevel=2,
            )
        return kolmogorov_prob(self.scaled_ks)

    def cvm_probability(self) -> float:
        """p-value of the two-sample Cramér–von Mises test (asymptotic)."""
        self._require_one_dimension("CvM")
        return cramer_von_mises_prob(self.scaled_cvm, self.n0, self.n1)


def _require_samples(
    first: EmpiricalDistribution1D | EmpiricalDistribution2D,
    second: EmpiricalDistribution1D | EmpiricalDistribution2D,
) -> None:
    if first.n == 0 or second.n == 0:
        raise PreconditionViolationError(
            f"Cannot compare empty distributions (sample counts {first.n} and {second.n})"
        )


def _unit_widths(grid: NumericArray) -> NumericArray:
    """Width of each step interval after mapping ``grid`` onto ``[0, 1]``."""
    extent = grid[-1] - grid[0]
    if extent <= 0:
        return np.ones(1)
    return np.append(np.diff(grid), 0.0) / extent


def _pooled_weights(
    masses0: NumericArray, masses1: NumericArray, n0: int, n1: int
) -> NumericArray:
    return (n0 * masses0 + n1 * masses1) / (n0 + n1)


def compare_1d(first: EmpiricalDistribution1D, second: EmpiricalDistribution1D) -> DistanceResult:
    """
    Compare two 1D empirical distributions.

    Raises
    ------
    PreconditionViolationError
        If either distribution holds no samples.
    """
    _require_samples(first, second)
    grid = np.union1d(first.values, second.values)
    f0 = first.cdf(grid)
    f1 = second.cdf(grid)
    diff = f0 - f1

    ks = float(np.max(np.abs(diff)))
    l2 = math.sqrt(float(np.sum(diff**2 * _unit_widths(grid))))
    weights = _pooled_weights(
        np.diff(f0, prepend=0.0), np.diff(f1, prepend=0.0), first.n, second.n
    )
    cvm = math.sqrt(float(np.sum(diff**2 * weights)))

    logger.debug("1D distances on %d breakpoints: l2=%g ks=%g cvm=%g", grid.size, l2, ks, cvm)
    return DistanceResult(l2=l2, ks=ks, cvm=cvm, n0=first.n, n1=second.n)


def _project_lower_left(
    dist: EmpiricalDistribution2D, xs: NumericArray, ys: NumericArray
) -> NumericArray:
    """Evaluate the joint CDF of ``dist`` on the grid ``xs x ys``."""
    own_x, own_y = dist.coordinates
    ix = np.searchsorted(own_x, xs, side="right")
    iy = np.searchsorted(own_y, ys, side="right")
    padded = np.zeros((own_x.size + 1, own_y.size + 1))
    padded[1:, 1:] = dist.lower_left_cdf
    return padded[np.ix_(ix, iy)]


def _grid_masses(lower_left: NumericArray) -> NumericArray:
    return np.diff(np.diff(lower_left, axis=0, prepend=0.0), axis=1, prepend=0.0)


def compare_2d(first: EmpiricalDistribution2D, second: EmpiricalDistribution2D) -> DistanceResult:
    """
    Compare two 2D empirical distributions.

    The KS distance is the largest difference of any of the four quadrant
    CDFs over the union grid. L2 integrates the squared difference of the
    lower-left CDFs over the unit square; CvM weights it by the pooled point
    masses.

    Raises
    ------
    PreconditionViolationError
        If either distribution holds no samples.
    """
    _require_samples(first, second)
    xs = np.union1d(first.coordinates[0], second.coordinates[0])
    ys = np.union1d(first.coordinates[1], second.coordinates[1])
    f0 = _project_lower_left(first, xs, ys)
    f1 = _project_lower_left(second, xs, ys)
    diff = f0 - f1

    # Quadrant differences follow from the lower-left and marginal differences.
    dx = diff[:, -1][:, None]
    dy = diff[-1, :][None, :]
    ks = float(
        max(
            np.max(np.abs(diff)),
            np.max(np.abs(dx - diff)),
            np.max(np.abs(dy - diff)),
            np.max(np.abs(diff - dx - dy)),
        )
    )

    area = _unit_widths(xs)[:, None] * _unit_widths(ys)[None, :]
    l2 = math.sqrt(float(np.sum(diff**2 * area)))
    weights = _pooled_weights(_grid_masses(f0), _grid_masses(f1), first.n, second.n)
    cvm = math.sqrt(float(np.sum(diff**2 * weights)))

    logger.debug(
        "2D distances on a %dx%d grid: l2=%g ks=%g cvm=%g", xs.size, ys.size, l2, ks, cvm
    )
    return DistanceResult(l2=l2, ks=ks, cvm=cvm, n0=first.n, n1=second.n, dimension=2)


__all__ = [
    "EXACT_KS_LIMIT",
    "DistanceResult",
    "compare_1d",
    "compare_2d",
]

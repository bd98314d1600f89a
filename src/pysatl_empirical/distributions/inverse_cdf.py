"""
Inverse-CDF Sampling
====================

Draw samples that follow an empirical distribution by piecewise linear
interpolation of its inverse CDF.

The cumulative table ``v_i -> F(v_i)`` is inverted into knots
``F(v_i) -> v_i``. An anchor knot with probability ``0`` is placed just below
the smallest value so that uniform draws below ``F(v_0)`` interpolate towards
the lower end of the support instead of collapsing onto ``v_0``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from typing import TYPE_CHECKING, NoReturn, overload

import numpy as np

from pysatl_empirical.distributions.empirical import EmpiricalDistribution1D
from pysatl_empirical.distributions.sampling import ArraySample
from pysatl_empirical.errors import (
    InvalidArgumentError,
    PreconditionViolationError,
    UnsupportedOperationError,
)
from pysatl_empirical.prng.generator import RandomGenerator

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    import numpy.typing as npt

    from pysatl_empirical.config import SamplerConfig
    from pysatl_empirical.distributions.sampling import Sample
    from pysatl_empirical.types import Number, NumericArray, SampleLike

logger = logging.getLogger(__name__)

ANCHOR_OFFSET = 1.0e-6
"""Distance of the probability-zero anchor below the smallest value."""


class InverseCDFInterpolant:
    """
    Piecewise linear inverse of a cumulative distribution table.

    Parameters
    ----------
    probabilities : array_like
        Strictly increasing cumulative probabilities in ``[0, 1]``.
    values : array_like
        Non-decreasing values at which those probabilities are attained.

    Raises
    ------
    PreconditionViolationError
        If the table is empty, the probabilities are not strictly increasing
        or leave ``[0, 1]``, or the values decrease.
    """

    __slots__ = ("_probabilities", "_values")

    def __init__(
        self,
        probabilities: npt.ArrayLike,
        values: npt.ArrayLike,
    ) -> None:
        probs = np.asarray(probabilities, dtype=np.float64).ravel()
        vals = np.asarray(values, dtype=np.float64).ravel()
        if probs.size == 0 or probs.size != vals.size:
            raise PreconditionViolationError(
                "Inverse CDF needs a non-empty table of matching probabilities and values"
            )
        if np.any(np.diff(probs) <= 0) or probs[0] < 0.0 or probs[-1] > 1.0:
            raise PreconditionViolationError(
                "Cumulative probabilities must be strictly increasing within [0, 1]"
            )
        if np.any(np.diff(vals) < 0):
            raise PreconditionViolationError("Inverse CDF values must be non-decreasing")

        probs.flags.writeable = False
        vals.flags.writeable = False
        self._probabilities: NumericArray = probs
        self._values: NumericArray = vals

    @classmethod
    def from_cdf_table(cls, table: Mapping[float, float]) -> InverseCDFInterpolant:
        """
        Build from a ``value -> cumulative probability`` mapping.

        A knot with probability ``0`` is inserted ``1e-6`` below the smallest
        value.
        """
        if not table:
            raise PreconditionViolationError("Cannot invert an empty CDF table")
        items = sorted((float(v), float(p)) for v, p in table.items())
        values = [items[0][0] - ANCHOR_OFFSET] + [v for v, _ in items]
        probabilities = [0.0] + [p for _, p in items]
        return cls(probabilities, values)

    @classmethod
    def from_distribution(cls, distribution: EmpiricalDistribution1D) -> InverseCDFInterpolant:
        """Invert the cumulative table of an empirical distribution."""
        if distribution.is_empty:
            raise PreconditionViolationError("Cannot invert the CDF of an empty distribution")
        values = distribution.values
        return cls(
            np.concatenate(([0.0], distribution.cumulative)),
            np.concatenate(([values[0] - ANCHOR_OFFSET], values)),
        )

    @property
    def probabilities(self) -> NumericArray:
        return self._probabilities

    @property
    def values(self) -> NumericArray:
        return self._values

    @overload
    def __call__(self, u: Number) -> float: ...
    @overload
    def __call__(self, u: npt.NDArray[Any]) -> NumericArray: ...

    def __call__(self, u: Number | npt.NDArray[Any]) -> float | NumericArray:
        """Map probabilities ``u`` to values (clamped outside the knot range)."""
        result = np.interp(u, self._probabilities, self._values)
        if np.ndim(result) == 0:
            return float(result)
        return result


class InverseCDFSampler:
    """
    Sampler reproducing an empirical distribution.

    Parameters
    ----------
    distribution : EmpiricalDistribution1D | SampleLike | Sample
        Target distribution, or raw samples to build it from.
    seed : int | None, default None
        Seed of the owned :class:`RandomGenerator`; ``config.seed`` if ``None``.
    config : SamplerConfig | None, default None
        Generator configuration.

    Raises
    ------
    PreconditionViolationError
        If the target distribution is empty.

    Examples
    --------
    >>> sampler = InverseCDFSampler([1.0, 2.0, 2.0, 4.0], seed=3)
    >>> sampler.sample(5).shape
    (5, 1)
    """

    __slots__ = ("_interpolant", "_rng")

    def __init__(
        self,
        distribution: EmpiricalDistribution1D | SampleLike | Sample,
        seed: int | None = None,
        config: SamplerConfig | None = None,
    ) -> None:
        if not isinstance(distribution, EmpiricalDistribution1D):
            distribution = EmpiricalDistribution1D.from_sample(distribution)
        self._interpolant = InverseCDFInterpolant.from_distribution(distribution)
        self._rng = RandomGenerator(seed, config)
        logger.debug(
            "Inverse-CDF sampler over %d knots, seed %d",
            self._interpolant.values.size,
            self._rng.seed,
        )

    @property
    def interpolant(self) -> InverseCDFInterpolant:
        return self._interpolant

    @property
    def seed(self) -> int:
        return self._rng.seed

    def reseed(self, seed: int) -> None:
        self._rng.reseed(seed)

    def randomize(self) -> int:
        """Reseed from the wall clock and return the new seed."""
        return self._rng.randomize()

    def draw(self) -> float:
        """Return one sample."""
        return self._interpolant(self._rng.uniform_real())

    def sample(self, n: int) -> ArraySample:
        """
        Draw ``n`` samples.

        Returns
        -------
        ArraySample
            Samples of shape ``(n, 1)``.

        Raises
        ------
        InvalidArgumentError
            If ``n`` is negative.
        """
        if n < 0:
            raise InvalidArgumentError(f"Sample size must be non-negative, got {n}")
        u = np.fromiter((self._rng.uniform_real() for _ in range(n)), dtype=np.float64, count=n)
        return ArraySample(self._interpolant(u).reshape(n, 1))

    def __copy__(self) -> NoReturn:
        raise UnsupportedOperationError("InverseCDFSampler owns its generator and cannot be copied")

    def __deepcopy__(self, memo: dict[int, Any]) -> NoReturn:
        raise UnsupportedOperationError("InverseCDFSampler owns its generator and cannot be copied")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(knots={self._interpolant.values.size}, seed={self.seed})"


__all__ = [
    "ANCHOR_OFFSET",
    "InverseCDFInterpolant",
    "InverseCDFSampler",
]

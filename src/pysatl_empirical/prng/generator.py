"""
Derived Random Samplers
=======================

:class:`RandomGenerator` turns the raw word stream of a
:class:`~pysatl_empirical.prng.mersenne.MersenneTwister` into samples of

- uniform booleans, integers and reals on arbitrary half-open ranges;
- the normal distribution (Marsaglia polar method);
- the Poisson distribution (inversion for small means, ratio-of-uniforms
  rejection for large means, after A. Fog's ``stocc`` library).

All samplers only consume :meth:`MersenneTwister.next_word`, so for a fixed
seed every sampler is reproducible across platforms.

Notes
-----
- Floating point rounding can push a rescaled draw onto the excluded upper
  bound; such candidates are rejected and redrawn. The number of consecutive
  rejections is capped by :attr:`SamplerConfig.max_rejections`.
- Instances are not thread-safe and cannot be copied.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import itertools
import math
from typing import TYPE_CHECKING, NoReturn, TypeVar

from pysatl_empirical.config import SamplerConfig
from pysatl_empirical.errors import (
    InvalidArgumentError,
    SamplingExhaustedError,
    UnsupportedOperationError,
)
from pysatl_empirical.prng.mersenne import MersenneTwister
from pysatl_empirical.prng.special import ln_factorial

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Any

_WORD_RANGE = 4294967296.0  # 2**32
_UINT_LIMIT = 1 << 32

POISSON_MAX_MEAN = 2.0e9
POISSON_SMALL_MEAN = 1.0e-6
POISSON_INVERSION_LIMIT = 17.0
POISSON_INVERSION_BOUND = 130

_SHAT1 = 2.943035529371538573  # 8/e
_SHAT2 = 0.8989161620588987408  # 3 - sqrt(12/e)


T = TypeVar("T", int, float)


def _in_range(value: T, low: T, high: T) -> bool:
    """Check whether ``value`` lies in ``[low, high)``."""
    return low <= value < high


class RandomGenerator:
    """
    Uniform, normal and Poisson samplers driven by a Mersenne Twister.

    Parameters
    ----------
    seed : int | None, default None
        Unsigned 32-bit seed. If ``None``, ``config.seed`` is used.
    config : SamplerConfig | None, default None
        Sampler configuration. If ``None``, ``SamplerConfig()`` is used.

    Examples
    --------
    >>> rng = RandomGenerator(seed=7)
    >>> 0.0 <= rng.uniform_real() < 1.0
    True
    >>> -3 <= rng.uniform_int(-3, 4) < 4
    True
    """

    __slots__ = ("_engine", "_config")

    def __init__(self, seed: int | None = None, config: SamplerConfig | None = None) -> None:
        self._config = config or SamplerConfig()
        self._engine = MersenneTwister(self._config.seed if seed is None else seed)

    # ------------------------------------------------------------------ #
    # Seeding
    # ------------------------------------------------------------------ #

    @property
    def seed(self) -> int:
        """Seed of the underlying word generator."""
        return self._engine.seed

    @property
    def config(self) -> SamplerConfig:
        """Sampler configuration."""
        return self._config

    def reseed(self, seed: int) -> None:
        """Restart the sequence from ``seed``."""
        self._engine.reseed(seed)

    def randomize(self) -> int:
        """Reseed from the wall clock and return the new seed."""
        return self._engine.randomize()

    def fork(self, seed: int) -> RandomGenerator:
        """Create an independent generator with the same configuration and a new seed."""
        return type(self)(seed, self._config)

    # ------------------------------------------------------------------ #
    # Rejection bookkeeping
    # ------------------------------------------------------------------ #

    def _attempts(self) -> Iterable[int]:
        cap = self._config.max_rejections
        return itertools.count() if cap is None else range(cap + 1)

    def _exhausted(self, sampler: str) -> NoReturn:
        raise SamplingExhaustedError(
            f"{sampler}: no candidate accepted after {self._config.max_rejections} rejections"
        )

    # ------------------------------------------------------------------ #
    # Uniform samplers
    # ------------------------------------------------------------------ #

    def raw_word(self) -> int:
        """Return an unsigned 32-bit integer in ``[0, 2**32)``."""
        return self._engine.next_word()

    def random_bool(self) -> bool:
        """Return ``True`` or ``False`` with equal probability."""
        return self._engine.next_word() % 2 == 1

    def _unit_real(self) -> float:
        """Real number in ``[0, 1)`` built from two words (64 random bits)."""
        for _ in self._attempts():
            more_significant = float(self._engine.next_word())
            less_significant = float(self._engine.next_word()) / _WORD_RANGE
            value = (more_significant + less_significant) / _WORD_RANGE
            if _in_range(value, 0.0, 1.0):
                return value
        self._exhausted("uniform_real")

    def uniform_real(self, start: float | None = None, stop: float | None = None) -> float:
        """
        Return a uniformly distributed real number.

        ``uniform_real()`` draws from ``[0, 1)``, ``uniform_real(stop)`` from
        ``[0, stop)`` and ``uniform_real(start, stop)`` from ``[start, stop)``.

        Raises
        ------
        InvalidArgumentError
            If the range is empty.
        SamplingExhaustedError
            If rounding keeps producing values outside the range.
        """
        if start is None:
            return self._unit_real()
        low, high = (0.0, float(start)) if stop is None else (float(start), float(stop))
        if not low < high:
            raise InvalidArgumentError(f"Empty range [{low}, {high})")
        for _ in self._attempts():
            value = low + self._unit_real() * (high - low)
            if _in_range(value, low, high):
                return value
        self._exhausted("uniform_real")

    def uniform_int(self, start: int, stop: int | None = None) -> int:
        """
        Return a uniformly distributed integer.

        ``uniform_int(stop)`` draws from ``[0, stop)`` and
        ``uniform_int(start, stop)`` from ``[start, stop)``.

        The real draw over ``[start, stop)`` is floored. This agrees with
        truncation toward zero when ``start >= 0``; for ranges reaching
        below zero, truncation would map ``(-1, 1)`` onto ``0`` and double
        its weight, so flooring yields a different draw stream than a
        truncating generator with the same seed.

        Raises
        ------
        InvalidArgumentError
            If the range is empty.
        """
        low, high = (0, int(start)) if stop is None else (int(start), int(stop))
        if not low < high:
            raise InvalidArgumentError(f"Empty integer range [{low}, {high})")
        for _ in self._attempts():
            value = math.floor(self.uniform_real(low, high))
            if _in_range(value, low, high):
                return value
        self._exhausted("uniform_int")

    def uniform_uint(self, start: int, stop: int | None = None) -> int:
        """
        Unsigned variant of :meth:`uniform_int`.

        Raises
        ------
        InvalidArgumentError
            If a bound is negative, exceeds ``2**32`` or the range is empty.
        """
        bounds = (start,) if stop is None else (start, stop)
        if any(b < 0 or b > _UINT_LIMIT for b in bounds):
            raise InvalidArgumentError(f"Unsigned bounds must lie in [0, 2**32], got {bounds}")
        return self.uniform_int(start, stop)

    # ------------------------------------------------------------------ #
    # Normal and Poisson samplers
    # ------------------------------------------------------------------ #

    def normal(self, mean: float = 0.0, stddev: float = 1.0) -> float:
        """
        Return a normally distributed real number (Marsaglia polar method).

        Parameters
        ----------
        mean : float, default 0.0
            Mean of the distribution.
        stddev : float, default 1.0
            Standard deviation of the distribution.
        """
        for _ in self._attempts():
            x1 = self.uniform_real(-1.0, 1.0)
            x2 = self.uniform_real(-1.0, 1.0)
            w = x1 * x1 + x2 * x2
            if 1e-30 <= w < 1.0:
                return x1 * math.sqrt(-2.0 * math.log(w) / w) * stddev + mean
        self._exhausted("normal")

    def poisson(self, lam: float) -> int:
        """
        Return a Poisson distributed integer with mean ``lam``.

        Parameters
        ----------
        lam : float
            Mean of the distribution, ``0 <= lam <= 2e9``.

        Returns
        -------
        int
            ``0`` for ``lam == 0``; otherwise a sample obtained by

            - a second order approximation for ``lam < 1e-6``;
            - chop-down inversion for ``lam < 17`` (restarted when the
              search exceeds 130);
            - ratio-of-uniforms rejection with a quick acceptance test for
              larger means.

        Raises
        ------
        InvalidArgumentError
            If ``lam`` is negative, not finite or larger than ``2e9``.
        """
        if not math.isfinite(lam) or lam < 0:
            raise InvalidArgumentError(f"Poisson mean must be finite and >= 0, got {lam}")
        if lam == 0:
            return 0
        if lam < POISSON_SMALL_MEAN:
            return self._poisson_low(lam)
        if lam < POISSON_INVERSION_LIMIT:
            return self._poisson_inversion(lam)
        if lam > POISSON_MAX_MEAN:
            raise InvalidArgumentError(f"Poisson mean {lam} is too large to sample from")
        return self._poisson_ratio_of_uniforms(lam)

    def _poisson_low(self, lam: float) -> int:
        # P(0) ~ 1 - lam, P(1) ~ lam (1 - lam), P(2) ~ lam^2 (1 - lam) / 2
        d = math.sqrt(lam)
        if self._unit_real() >= d:
            return 0
        r = self._unit_real() * d
        if r > lam * (1.0 - lam):
            return 0
        if r > 0.5 * lam * lam * (1.0 - lam):
            return 1
        return 2

    def _poisson_inversion(self, lam: float) -> int:
        f0 = math.exp(-lam)
        for _ in self._attempts():
            r = self._unit_real()
            x = 0
            f = f0
            while x <= POISSON_INVERSION_BOUND:
                r -= f
                if r <= 0:
                    return x
                x += 1
                f *= lam
                r *= x
        self._exhausted("poisson")

    def _poisson_ratio_of_uniforms(self, lam: float) -> int:
        a = lam + 0.5
        mode = int(lam)
        g = math.log(lam)
        f0 = mode * g - ln_factorial(mode)
        h = math.sqrt(_SHAT1 * a) + _SHAT2
        bound = int(a + 6.0 * h)

        for _ in self._attempts():
            u = self._unit_real()
            if u == 0:
                continue
            x = a + h * (self._unit_real() - 0.5) / u
            if x < 0 or x >= bound:
                continue
            k = int(x)
            lf = k * g - ln_factorial(k) - f0
            if lf >= u * (4.0 - u) - 3.0:
                return k  # quick acceptance
            if u * (u - lf) > 1.0:
                continue  # quick rejection
            if 2.0 * math.log(u) <= lf:
                return k
        self._exhausted("poisson")

    # ------------------------------------------------------------------ #
    # Ownership
    # ------------------------------------------------------------------ #

    def __copy__(self) -> NoReturn:
        raise UnsupportedOperationError(
            "RandomGenerator cannot be copied; use fork(seed) for an independent generator"
        )

    def __deepcopy__(self, memo: dict[int, Any]) -> NoReturn:
        raise UnsupportedOperationError(
            "RandomGenerator cannot be copied; use fork(seed) for an independent generator"
        )

    def __reduce__(self) -> NoReturn:
        raise UnsupportedOperationError("RandomGenerator cannot be pickled")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self.seed})"


__all__ = [
    "POISSON_MAX_MEAN",
    "RandomGenerator",
]

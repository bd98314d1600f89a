"""
Goodness-of-Fit Probabilities
=============================

p-values for the distances reported by
:class:`~pysatl_empirical.distributions.distance.DistanceResult`:

- :func:`kolmogorov_prob`: asymptotic Kolmogorov distribution;
- :func:`kolmogorov_prob_two_small_samples`: exact two-sample KS
  distribution (Massey lattice-path recursion);
- :func:`cramer_von_mises_prob`: two-sample Cramér–von Mises criterion via
  Anderson's normalization and the limiting distribution of the one-sample
  statistic.

References
----------
.. [1] F. J. Massey, "The distribution of the maximum deviation between two
       sample cumulative step functions", Ann. Math. Stat. 22 (1951).
.. [2] T. W. Anderson, "On the distribution of the two-sample Cramér–von
       Mises criterion", Ann. Math. Stat. 33 (1962).
.. [3] S. Csörgő, J. J. Faraway, "The exact and asymptotic distributions of
       Cramér–von Mises statistics", J. R. Stat. Soc. B 58 (1996).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import operator
import warnings

from scipy.special import gammaln, kv

from pysatl_empirical.errors import InvalidArgumentError

KOLMOGOROV_MAX_TERMS = 100
CVM_MAX_TERMS = 100

_KOLMOGOROV_MIN_Z = 0.2
_KOLMOGOROV_REL_PREVIOUS = 0.001
_KOLMOGOROV_REL_SUM = 1.0e-8
_MASSEY_ROUNDING = 1.0e-7
_CVM_SERIES_TOL = 1.0e-7
_CVM_MIN_STATISTIC = 0.003
_CVM_MAX_STATISTIC = 10.0


def kolmogorov_prob(z: float) -> float:
    """
    Survival function of the Kolmogorov distribution.

    Parameters
    ----------
    z : float
        Scaled KS distance ``sqrt(n0 n1 / (n0 + n1)) * D``.

    Returns
    -------
    float
        ``2 * sum_{k>=1} (-1)^(k-1) exp(-2 k^2 z^2)``; ``1.0`` for ``z < 0.2``.

    Warns
    -----
    UserWarning
        If the series does not converge within 100 terms; ``1.0`` is
        returned in that case.
    """
    if z < _KOLMOGOROV_MIN_Z:
        return 1.0

    a2 = -2.0 * z * z
    fac = 2.0
    total = 0.0
    previous = 0.0
    for j in range(1, KOLMOGOROV_MAX_TERMS + 1):
        term = fac * math.exp(a2 * j * j)
        total += term
        if (
            abs(term) <= _KOLMOGOROV_REL_PREVIOUS * previous
            or abs(term) <= _KOLMOGOROV_REL_SUM * total
        ):
            return total
        fac = -fac
        previous = abs(term)

    warnings.warn(
        f"Kolmogorov series did not converge for z={z}", UserWarning, stacklevel=2
    )
    return 1.0


def _sample_count(value: int, name: str) -> int:
    try:
        count = operator.index(value)
    except TypeError:
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}") from None
    if count <= 0:
        raise InvalidArgumentError(f"{name} must be positive, got {count}")
    return count


def kolmogorov_prob_two_small_samples(x: float, n0: int, n1: int) -> float:
    """
    Exact p-value ``P(D >= x)`` of the two-sample KS statistic.

    Counts the lattice paths from ``(0, 0)`` to ``(n0, n1)`` that stay
    strictly inside the band ``|i/m - j/n| <= x``. The statistic is rounded
    onto the lattice ``k / (n0 n1)`` first, so ties in ``x`` are handled
    consistently.

    Parameters
    ----------
    x : float
        Unscaled KS distance.
    n0, n1 : int
        Sample sizes (both positive).

    Raises
    ------
    InvalidArgumentError
        If a sample size is not a positive integer.

    Examples
    --------
    >>> round(kolmogorov_prob_two_small_samples(1.0, 2, 2), 6)
    0.333333
    """
    m, n = sorted((_sample_count(n0, "n0"), _sample_count(n1, "n1")))
    md, nd = float(m), float(n)
    q = (0.5 + math.floor(x * md * nd - _MASSEY_ROUNDING)) / (md * nd)

    u = [0.0 if j / nd > q else 1.0 for j in range(n + 1)]
    for i in range(1, m + 1):
        w = i / (i + n)
        u[0] = 0.0 if i / md > q else w * u[0]
        for j in range(1, n + 1):
            u[j] = 0.0 if abs(i / md - j / nd) > q else w * u[j] + u[j - 1]

    return min(1.0, max(0.0, 1.0 - u[n]))


def _anderson_darling_cdf(x: float) -> float:
    """Limiting CDF of the one-sample Cramér–von Mises statistic [3]_."""
    total = 0.0
    for k in range(CVM_MAX_TERMS):
        u = math.exp(gammaln(k + 0.5) - gammaln(k + 1)) / (math.pi**1.5 * math.sqrt(x))
        y = 4 * k + 1
        q = y * y / (16.0 * x)
        term = u * math.sqrt(y) * math.exp(-q) * float(kv(0.25, q))
        total += term
        if abs(term) < _CVM_SERIES_TOL:
            return total

    warnings.warn(
        f"Cramér–von Mises series did not converge for T={x}", UserWarning, stacklevel=3
    )
    return total


def cramer_von_mises_prob(z: float, n0: int, n1: int) -> float:
    """
    Asymptotic p-value of the two-sample Cramér–von Mises test.

    Parameters
    ----------
    z : float
        Scaled CvM distance; ``T = z**2`` is Anderson's criterion.
    n0, n1 : int
        Sample sizes (both positive).

    Returns
    -------
    float
        p-value in ``[0, 1]``.

    Raises
    ------
    InvalidArgumentError
        If ``z`` is not finite or a sample size is not a positive integer.

    Warns
    -----
    UserWarning
        If the limiting-distribution series does not converge within
        ``CVM_MAX_TERMS`` terms.

    Notes
    -----
    ``T`` is standardized with its finite-sample mean and variance [2]_ and
    compared against the limiting distribution of the one-sample statistic.
    """
    n0 = _sample_count(n0, "n0")
    n1 = _sample_count(n1, "n1")
    if not math.isfinite(z):
        raise InvalidArgumentError(f"CvM distance must be finite, got {z}")
    t = z * z
    total = n0 + n1
    k = n0 * n1

    mean = (1.0 + 1.0 / total) / 6.0
    variance = (total + 1) * (4 * k * total - 3 * (n0 * n0 + n1 * n1) - 2 * k)
    variance /= 45.0 * total * total * 4 * k
    if variance <= 0:
        raise InvalidArgumentError(
            f"Cramér–von Mises probability needs larger samples, got {n0} and {n1}"
        )
    tn = 1.0 / 6.0 + (t - mean) / math.sqrt(45.0 * variance)

    # The limiting CDF is below 1e-18 here.
    if tn < _CVM_MIN_STATISTIC:
        return 1.0
    # Beyond this the limiting upper tail is below 1e-20.
    if tn > _CVM_MAX_STATISTIC:
        return 0.0
    return min(1.0, max(0.0, 1.0 - _anderson_darling_cdf(tn)))


__all__ = [
    "CVM_MAX_TERMS",
    "KOLMOGOROV_MAX_TERMS",
    "cramer_von_mises_prob",
    "kolmogorov_prob",
    "kolmogorov_prob_two_small_samples",
]

"""
Special Functions
=================

Natural logarithm of the factorial used by the Poisson sampler.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np

from pysatl_empirical.errors import InvalidArgumentError

LN_FACTORIAL_TABLE_SIZE = 100

# Stirling series coefficients: C0 = ln(sqrt(2 pi)), C1 = 1/12, C3 = -1/360.
_C0 = 0.918938533204672722
_C1 = 1.0 / 12.0
_C3 = -1.0 / 360.0

_LN_FACTORIAL_TABLE: tuple[float, ...] = tuple(
    float(v)
    for v in np.concatenate(
        ([0.0], np.cumsum(np.log(np.arange(1, LN_FACTORIAL_TABLE_SIZE, dtype=np.float64))))
    )
)


def ln_factorial(n: int) -> float:
    """
    Natural logarithm of ``n!``.

    Parameters
    ----------
    n : int
        Non-negative integer.

    Returns
    -------
    float
        ``ln(n!)``. Exact partial sums of ``ln(i)`` are tabulated for
        ``n < 100``; larger arguments use the Stirling series
        ``(n + 1/2) ln n - n + ln sqrt(2 pi) + 1/(12 n) - 1/(360 n^3)``.

    Raises
    ------
    InvalidArgumentError
        If ``n`` is negative.
    """
    if n < 0:
        raise InvalidArgumentError(f"ln_factorial requires a non-negative argument, got {n}")
    if n < LN_FACTORIAL_TABLE_SIZE:
        return _LN_FACTORIAL_TABLE[n]
    r = 1.0 / n
    return (n + 0.5) * math.log(n) - n + _C0 + r * (_C1 + r * r * _C3)


__all__ = [
    "LN_FACTORIAL_TABLE_SIZE",
    "ln_factorial",
]

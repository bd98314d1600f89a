"""
Core Type Definitions
=====================

Type aliases and small enumerations shared by the generator and the
empirical distribution modules.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Mapping, Sequence
from enum import StrEnum
from typing import Any, TypeAlias

import numpy as np
from numpy.typing import NDArray

NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

NumericArray = NDArray[np.float64]
"""Type alias for floating-point arrays."""

WordArray = NDArray[np.uint32]
"""Type alias for arrays of unsigned 32-bit words."""

SampleLike = Sequence[Number] | NDArray[Any]
"""Anything that can be read as a flat sequence of real samples."""

Histogram1D: TypeAlias = Mapping[float, int]
"""Mapping from a sample value to the number of times it occurred."""

Point2D: TypeAlias = tuple[float, float]
"""Paired coordinates of a 2D sample."""

Histogram2D: TypeAlias = Mapping[Point2D, int]
"""Mapping from a 2D sample point to the number of times it occurred."""


class DistanceKind(StrEnum):
    """
    Distances computed between two empirical distributions.

    Attributes
    ----------
    L2 : str
        Integrated squared difference of the CDFs on the unit domain.
    KS : str
        Kolmogorov–Smirnov (L-infinity) distance.
    CVM : str
        Cramér–von Mises distance (squared difference weighted by mass).
    """

    L2 = "l2"
    KS = "ks"
    CVM = "cvm"


__all__ = [
    "NumPyNumber",
    "Number",
    "NumericArray",
    "WordArray",
    "SampleLike",
    "Histogram1D",
    "Point2D",
    "Histogram2D",
    "DistanceKind",
]

"""
Empirical Distributions
=======================

Empirical cumulative distribution functions built from samples or histograms:

- :class:`EmpiricalDistribution1D`: step CDF over the distinct sample values.
- :class:`EmpiricalDistribution2D`: joint step CDF over the grid of distinct
  x and y coordinates, together with the four quadrant CDF tables used by
  the 2D Kolmogorov–Smirnov distance.

Both are immutable after construction. Comparisons are delegated to
:mod:`pysatl_empirical.distributions.distance` and return a
:class:`~pysatl_empirical.distributions.distance.DistanceResult`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
import os
import sys
from typing import TYPE_CHECKING, TextIO, overload

import numpy as np

from pysatl_empirical.distributions.distance import compare_1d, compare_2d
from pysatl_empirical.distributions.histogram import (
    discrete_histogram_to_histogram,
    samples_to_histogram_1d,
    samples_to_histogram_2d,
    value_counts_to_histogram,
)
from pysatl_empirical.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import Any, TypeAlias

    import numpy.typing as npt

    from pysatl_empirical.distributions.distance import DistanceResult
    from pysatl_empirical.distributions.sampling import Sample
    from pysatl_empirical.types import (
        Histogram1D,
        Histogram2D,
        Number,
        NumericArray,
        Point2D,
        SampleLike,
    )

    QuadrantTables: TypeAlias = tuple[
        tuple[NumericArray, NumericArray], tuple[NumericArray, NumericArray]
    ]

logger = logging.getLogger(__name__)


def _frozen(arr: npt.NDArray[Any]) -> npt.NDArray[Any]:
    arr.flags.writeable = False
    return arr


def _validated_counts(items: Sequence[tuple[Any, Any]]) -> list[tuple[Any, int]]:
    """Reject negative counts and drop empty bins."""
    kept: list[tuple[Any, int]] = []
    for key, count in items:
        count = int(count)
        if count < 0:
            raise InvalidArgumentError(f"Histogram count for {key!r} is negative: {count}")
        if count > 0:
            kept.append((key, count))
    return kept


def quadrant_tables(lower_left: NumericArray) -> QuadrantTables:
    """
    Derive the four quadrant CDF tables from a lower-left joint CDF table.

    Parameters
    ----------
    lower_left : numpy.ndarray
        ``F[i, j] = P(X <= x_i, Y <= y_j)`` on a coordinate grid.

    Returns
    -------
    tuple
        ``tables[a][b]`` where ``a`` selects ``X <= x`` (0) or ``X > x`` (1)
        and ``b`` selects ``Y <= y`` (0) or ``Y > y`` (1).
    """
    if lower_left.size == 0:
        empty = _frozen(np.zeros_like(lower_left))
        return (empty, empty), (empty, empty)

    px = lower_left[:, -1][:, None]
    py = lower_left[-1, :][None, :]
    le_gt = np.clip(px - lower_left, 0.0, 1.0)
    gt_le = np.clip(py - lower_left, 0.0, 1.0)
    gt_gt = np.clip(1.0 - px - py + lower_left, 0.0, 1.0)
    return (
        (_frozen(lower_left), _frozen(le_gt)),
        (_frozen(gt_le), _frozen(gt_gt)),
    )


class EmpiricalDistribution1D:
    """
    Empirical distribution of a one-dimensional sample.

    Parameters
    ----------
    histogram : Histogram1D
        Number of observations of each value. Keys need not be sorted;
        zero counts are ignored.

    Raises
    ------
    InvalidArgumentError
        If a count is negative or a key is not finite.

    Notes
    -----
    The cumulative table maps each distinct value ``v`` to ``P(X <= v)``.
    It is strictly increasing and ends at exactly ``1.0``.
    """

    __slots__ = ("_values", "_counts", "_cumulative", "_n")

    def __init__(self, histogram: Histogram1D) -> None:
        items = _validated_counts(sorted((float(v), c) for v, c in histogram.items()))
        if any(not math.isfinite(v) for v, _ in items):
            raise InvalidArgumentError("Histogram keys must be finite")

        self._values: NumericArray = _frozen(np.array([v for v, _ in items], dtype=np.float64))
        self._counts = _frozen(np.array([c for _, c in items], dtype=np.int64))
        self._n = int(self._counts.sum())
        cumulative = np.cumsum(self._counts) / self._n if self._n else np.empty(0)
        self._cumulative: NumericArray = _frozen(cumulative.astype(np.float64))
        logger.debug(
            "Built 1D empirical distribution: %d samples, %d distinct values",
            self._n,
            self._values.size,
        )

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def from_sample(cls, samples: SampleLike | Sample) -> EmpiricalDistribution1D:
        """Build from raw samples; non-finite values are discarded."""
        return cls(samples_to_histogram_1d(samples))

    @classmethod
    def from_discrete_histogram(
        cls, counts: Sequence[int] | npt.NDArray[Any]
    ) -> EmpiricalDistribution1D:
        """Build from ``counts[i]`` = number of events with integer value ``i``."""
        return cls(discrete_histogram_to_histogram(counts))

    @classmethod
    def from_value_counts(
        cls,
        values: Sequence[Number] | npt.NDArray[Any],
        counts: Sequence[int] | npt.NDArray[Any],
    ) -> EmpiricalDistribution1D:
        """Build from parallel value and count sequences."""
        return cls(value_counts_to_histogram(values, counts))

    @classmethod
    def from_histogram(cls, histogram: Histogram1D) -> EmpiricalDistribution1D:
        """Build from a value -> count mapping."""
        return cls(histogram)

    # ------------------------------------------------------------------ #
    # Accessors
    # ------------------------------------------------------------------ #

    @property
    def n(self) -> int:
        """Total number of (finite) samples."""
        return self._n

    num_samples = n

    @property
    def values(self) -> NumericArray:
        """Distinct sample values in ascending order (read-only)."""
        return self._values

    @property
    def counts(self) -> npt.NDArray[np.int64]:
        """Number of samples at each value (read-only)."""
        return self._counts

    @property
    def cumulative(self) -> NumericArray:
        """Cumulative probability at each value (read-only)."""
        return self._cumulative

    @property
    def masses(self) -> NumericArray:
        """Probability mass at each value."""
        return self._counts / self._n if self._n else np.empty(0)

    @property
    def cdf_table(self) -> dict[float, float]:
        """Mapping from each distinct value to its cumulative probability."""
        return dict(zip(self._values.tolist(), self._cumulative.tolist(), strict=True))

    @property
    def is_empty(self) -> bool:
        return self._n == 0

    def __len__(self) -> int:
        """Number of distinct values (CDF breakpoints)."""
        return int(self._values.size)

    @overload
    def cdf(self, x: Number) -> float: ...
    @overload
    def cdf(self, x: npt.NDArray[Any]) -> NumericArray: ...

    def cdf(self, x: Number | npt.NDArray[Any]) -> float | NumericArray:
        """Evaluate the right-continuous step CDF ``P(X <= x)``."""
        idx = np.searchsorted(self._values, x, side="right")
        result = np.concatenate(([0.0], self._cumulative))[idx]
        if np.ndim(result) == 0:
            return float(result)
        return result

    # ------------------------------------------------------------------ #
    # Comparison
    # ------------------------------------------------------------------ #

    def compute_distance_to(self, other: EmpiricalDistribution1D) -> DistanceResult:
        """
        Compare with another distribution.

        Returns
        -------
        DistanceResult
            Unscaled L2, Kolmogorov–Smirnov and Cramér–von Mises distances and
            the two sample counts.
        """
        return compare_1d(self, other)

    # ------------------------------------------------------------------ #
    # Output
    # ------------------------------------------------------------------ #

    def dump(self, out: TextIO | None = None) -> None:
        """Write one ``value probability`` line per distinct value."""
        out = sys.stdout if out is None else out
        pairs = zip(self._values.tolist(), self._cumulative.tolist(), strict=True)
        for value, probability in pairs:
            out.write(f"{value!r} {probability!r}\n")

    def print_for_gnuplot(self, target: str | os.PathLike[str] | TextIO) -> None:
        """
        Write the CDF as a step curve for gnuplot.

        Each value contributes two ``value probability`` lines, the level
        before and after the jump. ``target`` is a path or a text stream;
        I/O errors propagate.
        """
        if isinstance(target, (str, os.PathLike)):
            with open(target, "w", encoding="utf-8") as stream:
                self._write_steps(stream)
        else:
            self._write_steps(target)

    def _write_steps(self, out: TextIO) -> None:
        previous = 0.0
        pairs = zip(self._values.tolist(), self._cumulative.tolist(), strict=True)
        for value, probability in pairs:
            out.write(f"{value!r} {previous!r}\n")
            out.write(f"{value!r} {probability!r}\n")
            previous = probability

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={self._n}, distinct={self._values.size})"


class EmpiricalDistribution2D:
    """
    Empirical distribution of a paired two-dimensional sample.

    Parameters
    ----------
    histogram : Histogram2D
        Number of observations of each ``(x, y)`` point.

    Notes
    -----
    The joint CDF lives on the grid of distinct x and distinct y
    coordinates. ``quadrant_cdfs[a][b]`` holds, per grid node ``(x_i, y_j)``,
    the probability of the quadrant selected by ``a`` (0: ``X <= x_i``,
    1: ``X > x_i``) and ``b`` (0: ``Y <= y_j``, 1: ``Y > y_j``).
    """

    __slots__ = ("_coordinates", "_point_counts", "_quadrants", "_n")

    def __init__(self, histogram: Histogram2D) -> None:
        items = _validated_counts(list(histogram.items()))
        points = np.array([p for p, _ in items], dtype=np.float64).reshape(-1, 2)
        if not np.isfinite(points).all():
            raise InvalidArgumentError("Histogram points must be finite")
        counts = np.array([c for _, c in items], dtype=np.int64)

        xs = np.unique(points[:, 0])
        ys = np.unique(points[:, 1])
        grid = np.zeros((xs.size, ys.size), dtype=np.int64)
        np.add.at(
            grid, (np.searchsorted(xs, points[:, 0]), np.searchsorted(ys, points[:, 1])), counts
        )

        self._n = int(counts.sum())
        self._coordinates = (_frozen(xs), _frozen(ys))
        self._point_counts = _frozen(grid)
        lower_left = grid.cumsum(axis=0).cumsum(axis=1) / self._n if self._n else grid.astype(float)
        self._quadrants = quadrant_tables(lower_left.astype(np.float64))
        logger.debug(
            "Built 2D empirical distribution: %d samples on a %dx%d grid",
            self._n,
            xs.size,
            ys.size,
        )

    @classmethod
    def from_sample(cls, samples: Sequence[SampleLike] | Sample) -> EmpiricalDistribution2D:
        """
        Build from exactly two paired coordinate sequences (or an ``(n, 2)``
        :class:`ArraySample`). Points with a non-finite coordinate are discarded.
        """
        return cls(samples_to_histogram_2d(samples))

    @property
    def n(self) -> int:
        """Total number of (finite) sample points."""
        return self._n

    num_samples = n

    @property
    def coordinates(self) -> tuple[NumericArray, NumericArray]:
        """Distinct x and distinct y coordinates in ascending order."""
        return self._coordinates

    @property
    def point_counts(self) -> npt.NDArray[np.int64]:
        """Number of samples at each grid node."""
        return self._point_counts

    @property
    def quadrant_cdfs(self) -> QuadrantTables:
        """The 2x2 quadrant probability tables on the coordinate grid."""
        return self._quadrants

    @property
    def lower_left_cdf(self) -> NumericArray:
        """Joint CDF ``P(X <= x_i, Y <= y_j)`` on the coordinate grid."""
        return self._quadrants[0][0]

    @property
    def is_empty(self) -> bool:
        return self._n == 0

    def coord(self, ix: int, iy: int) -> Point2D:
        """Coordinates of grid node ``(ix, iy)``."""
        xs, ys = self._coordinates
        return float(xs[ix]), float(ys[iy])

    def cdf(self, x: float, y: float) -> float:
        """Evaluate the joint step CDF ``P(X <= x, Y <= y)``."""
        xs, ys = self._coordinates
        ix = int(np.searchsorted(xs, x, side="right")) - 1
        iy = int(np.searchsorted(ys, y, side="right")) - 1
        if ix < 0 or iy < 0:
            return 0.0
        return float(self.lower_left_cdf[ix, iy])

    def compute_distance_to(self, other: EmpiricalDistribution2D) -> DistanceResult:
        """Compare with another 2D distribution, see :func:`compare_2d`."""
        return compare_2d(self, other)

    def dump(self, out: TextIO | None = None) -> None:
        """
        Write ``x y probability`` lines of the joint CDF, one block per x
        coordinate separated by blank lines (gnuplot ``splot`` layout).
        """
        out = sys.stdout if out is None else out
        xs, ys = self._coordinates
        for i, x in enumerate(xs.tolist()):
            for j, y in enumerate(ys.tolist()):
                out.write(f"{x!r} {y!r} {float(self.lower_left_cdf[i, j])!r}\n")
            out.write("\n")

    def __repr__(self) -> str:
        xs, ys = self._coordinates
        return f"{type(self).__name__}(n={self._n}, grid={xs.size}x{ys.size})"


__all__ = [
    "EmpiricalDistribution1D",
    "EmpiricalDistribution2D",
    "quadrant_tables",
]

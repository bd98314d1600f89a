"""
Histogram Builders
==================

Helpers converting raw inputs into value -> count histograms, the common
input of :class:`~pysatl_empirical.distributions.empirical.EmpiricalDistribution1D`
and :class:`~pysatl_empirical.distributions.empirical.EmpiricalDistribution2D`.

Non-finite sample values (``nan``, ``inf``) are discarded.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

import numpy as np

from pysatl_empirical.distributions.sampling import ArraySample
from pysatl_empirical.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import Any

    import numpy.typing as npt

    from pysatl_empirical.distributions.sampling import Sample
    from pysatl_empirical.types import Number, SampleLike

logger = logging.getLogger(__name__)


def as_flat_array(samples: SampleLike | Sample) -> npt.NDArray[np.float64]:
    """Read ``samples`` (sequence, array or :class:`Sample`) as a flat float array."""
    data: Any = samples.array if isinstance(samples, ArraySample) else samples
    return np.asarray(data, dtype=np.float64).ravel()


def samples_to_histogram_1d(samples: SampleLike | Sample) -> dict[float, int]:
    """
    Count occurrences of each finite sample value.

    Parameters
    ----------
    samples : sequence of numbers, numpy.ndarray or Sample
        Raw sample.

    Returns
    -------
    dict[float, int]
        Histogram with keys in ascending order.
    """
    arr = as_flat_array(samples)
    finite = np.isfinite(arr)
    discarded = int(arr.size - np.count_nonzero(finite))
    if discarded:
        logger.debug("Ignoring %d non-finite sample values", discarded)

    values, counts = np.unique(arr[finite], return_counts=True)
    return dict(zip(values.tolist(), counts.tolist(), strict=True))


def paired_components(
    samples: Sequence[SampleLike] | Sample,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Split a 2D sample into its x and y coordinate arrays.

    Parameters
    ----------
    samples : pair of sequences or Sample
        Either exactly two equal-length coordinate sequences ``(xs, ys)`` or an
        :class:`ArraySample` of shape ``(n, 2)``.

    Raises
    ------
    InvalidArgumentError
        If the input is not exactly two paired sequences of equal length.
    """
    if isinstance(samples, ArraySample):
        if samples.dimension != 2:
            raise InvalidArgumentError(
                f"2D samples require exactly two components, got {samples.dimension}"
            )
        xs, ys = samples.component(0), samples.component(1)
    else:
        components = list(samples)  # type: ignore[arg-type]
        if len(components) != 2:
            raise InvalidArgumentError(
                f"2D samples require exactly two components, got {len(components)}"
            )
        xs, ys = components

    x_arr = np.asarray(xs, dtype=np.float64)
    y_arr = np.asarray(ys, dtype=np.float64)
    if x_arr.ndim != 1 or y_arr.ndim != 1:
        raise InvalidArgumentError("2D sample components must be one-dimensional sequences")
    if x_arr.size != y_arr.size:
        raise InvalidArgumentError(
            f"2D sample components differ in length: {x_arr.size} != {y_arr.size}"
        )
    return x_arr, y_arr


def samples_to_histogram_2d(
    samples: Sequence[SampleLike] | Sample,
) -> dict[tuple[float, float], int]:
    """
    Count occurrences of each finite 2D sample point.

    Points with a non-finite coordinate are discarded.

    Returns
    -------
    dict[tuple[float, float], int]
        Histogram keyed by ``(x, y)`` in lexicographic order.
    """
    xs, ys = paired_components(samples)
    finite = np.isfinite(xs) & np.isfinite(ys)
    discarded = int(xs.size - np.count_nonzero(finite))
    if discarded:
        logger.debug("Ignoring %d non-finite 2D sample points", discarded)

    points = np.column_stack((xs[finite], ys[finite]))
    if points.shape[0] == 0:
        return {}
    unique, counts = np.unique(points, axis=0, return_counts=True)
    return {
        (float(x), float(y)): int(c) for (x, y), c in zip(unique, counts, strict=True)
    }


def discrete_histogram_to_histogram(counts: Sequence[int] | npt.NDArray[Any]) -> dict[float, int]:
    """
    Interpret ``counts[i]`` as the number of events with integer value ``i``.

    Returns
    -------
    dict[float, int]
        Histogram ``{float(i): counts[i]}``.
    """
    return {float(i): int(c) for i, c in enumerate(np.asarray(counts).ravel().tolist())}


def value_counts_to_histogram(
    values: Sequence[Number] | npt.NDArray[Any],
    counts: Sequence[int] | npt.NDArray[Any],
) -> dict[float, int]:
    """
    Build a histogram from parallel value and count sequences.

    Counts of repeated values accumulate; non-finite values are discarded.

    Raises
    ------
    InvalidArgumentError
        If the sequences differ in length.
    """
    value_arr = np.asarray(values, dtype=np.float64).ravel()
    count_arr = np.asarray(counts).ravel()
    if value_arr.size != count_arr.size:
        raise InvalidArgumentError(
            f"Value and count sequences differ in length: {value_arr.size} != {count_arr.size}"
        )

    histogram: defaultdict[float, int] = defaultdict(int)
    for value, count in zip(value_arr.tolist(), count_arr.tolist(), strict=True):
        if not np.isfinite(value):
            logger.debug("Ignoring non-finite histogram value %r", value)
            continue
        histogram[value] += int(count)
    return dict(sorted(histogram.items()))


__all__ = [
    "as_flat_array",
    "discrete_histogram_to_histogram",
    "paired_components",
    "samples_to_histogram_1d",
    "samples_to_histogram_2d",
    "value_counts_to_histogram",
]

"""
Sample Containers
=================

Draws produced by :class:`~pysatl_empirical.distributions.inverse_cdf.InverseCDFSampler`
come back as an :class:`ArraySample`; the empirical distributions and the
histogram helpers accept anything satisfying the :class:`Sample` protocol.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from pysatl_empirical.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Iterator

    import numpy.typing as npt

    from pysatl_empirical.types import NumericArray


@runtime_checkable
class Sample(Protocol):
    """Row-per-draw matrix of shape ``(n, d)``."""

    def __len__(self) -> int: ...
    @property
    def array(self) -> NumericArray: ...
    @property
    def shape(self) -> tuple[int, ...]: ...


class ArraySample:
    """
    Draws stored as the rows of a float64 matrix.

    Parameters
    ----------
    data : array_like
        Matrix of shape ``(n, d)``; one row per draw, one column per
        coordinate. Float64 input is kept without copying.

    Raises
    ------
    InvalidArgumentError
        If ``data`` is not a matrix.
    """

    __slots__ = ("_data",)

    def __init__(self, data: npt.ArrayLike) -> None:
        matrix = np.asarray(data, dtype=np.float64)
        if matrix.ndim != 2:
            raise InvalidArgumentError(
                f"ArraySample expects a 2D array of shape (n, d), got {matrix.ndim}D"
            )
        self._data: NumericArray = matrix

    @property
    def array(self) -> NumericArray:
        return self._data

    @property
    def shape(self) -> tuple[int, ...]:
        rows, columns = self._data.shape
        return int(rows), int(columns)

    @property
    def dimension(self) -> int:
        """Number of coordinates per draw."""
        return int(self._data.shape[1])

    def __len__(self) -> int:
        return int(self._data.shape[0])

    def __iter__(self) -> Iterator[NumericArray]:
        return iter(self._data)

    def component(self, axis: int) -> NumericArray:
        """Coordinates of every draw along ``axis``."""
        return self._data[:, axis]

    def __repr__(self) -> str:
        rows, columns = self.shape
        return f"{type(self).__name__}(n={rows}, dimension={columns})"


__all__ = [
    "ArraySample",
    "Sample",
]

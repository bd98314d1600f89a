"""
Mersenne Twister Word Generator
===============================

A 32-bit MT19937 generator (Matsumoto & Nishimura, ACM TOMACS 8(1), 1998).

For a fixed seed the word stream is identical on every platform: the state is
kept in a ``numpy.uint32`` array and only exact unsigned 32-bit integer
arithmetic touches it. Seeding follows the reference ``init_genrand``
recurrence, so the initial key equals the one produced by numpy's legacy
``RandomState(seed)``.

Notes
-----
- The generator is not suitable for cryptographic use.
- Instances are not thread-safe; use one instance per thread.
- Instances cannot be copied. Use :meth:`MersenneTwister.fork` to obtain an
  independent generator with a fresh seed.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, NoReturn

import numpy as np

from pysatl_empirical.config import validate_seed
from pysatl_empirical.errors import UnsupportedOperationError

if TYPE_CHECKING:
    from typing import Any

    from pysatl_empirical.types import WordArray

logger = logging.getLogger(__name__)

STATE_SIZE = 624
SHIFT_SIZE = 397

_MATRIX_A = np.uint32(0x9908B0DF)
_UPPER_MASK = np.uint32(0x80000000)
_LOWER_MASK = np.uint32(0x7FFFFFFF)
_TEMPER_B = np.uint32(0x9D2C5680)
_TEMPER_C = np.uint32(0xEFC60000)
_INIT_MULTIPLIER = 1812433253

# Slices of the twist that only read words already final at that point:
# (start, stop, offset of the word mixed in).
_TWIST_BLOCKS = (
    (0, STATE_SIZE - SHIFT_SIZE, SHIFT_SIZE),
    (STATE_SIZE - SHIFT_SIZE, 2 * (STATE_SIZE - SHIFT_SIZE), SHIFT_SIZE - STATE_SIZE),
    (2 * (STATE_SIZE - SHIFT_SIZE), STATE_SIZE - 1, SHIFT_SIZE - STATE_SIZE),
)


@dataclass(frozen=True, slots=True)
class GeneratorState:
    """
    Read-only snapshot of a generator state.

    Parameters
    ----------
    seed : int
        Seed the generator was last initialized with.
    index : int
        Position of the next word in the current batch, in ``[0, 624]``.
        ``624`` means the batch is exhausted and the next draw twists.
    words : tuple[int, ...]
        The 624 untempered state words.
    """

    seed: int
    index: int
    words: tuple[int, ...]


def _initial_words(seed: int) -> WordArray:
    words = [seed]
    for i in range(1, STATE_SIZE):
        prev = words[-1]
        words.append((_INIT_MULTIPLIER * (prev ^ (prev >> 30)) + i) & 0xFFFFFFFF)
    return np.array(words, dtype=np.uint32)


def _twist(mt: WordArray) -> None:
    """Regenerate all 624 words in place."""
    for start, stop, offset in _TWIST_BLOCKS:
        y = (mt[start:stop] & _UPPER_MASK) | (mt[start + 1 : stop + 1] & _LOWER_MASK)
        mt[start:stop] = mt[start + offset : stop + offset] ^ (y >> 1) ^ ((y & 1) * _MATRIX_A)

    last = STATE_SIZE - 1
    y = (mt[last] & _UPPER_MASK) | (mt[0] & _LOWER_MASK)
    mt[last] = mt[SHIFT_SIZE - 1] ^ (y >> 1) ^ ((y & 1) * _MATRIX_A)


def _temper(mt: WordArray) -> WordArray:
    y = mt.copy()
    y ^= y >> 11
    y ^= (y << 7) & _TEMPER_B
    y ^= (y << 15) & _TEMPER_C
    y ^= y >> 18
    return y


class MersenneTwister:
    """
    MT19937 pseudorandom generator of unsigned 32-bit words.

    Parameters
    ----------
    seed : int, default 0
        Unsigned 32-bit seed.

    Raises
    ------
    InvalidArgumentError
        If ``seed`` is not an integer in ``[0, 2**32)``.

    Examples
    --------
    >>> mt = MersenneTwister(5489)
    >>> mt.next_word()
    3499211612
    """

    __slots__ = ("_seed", "_index", "_words", "_output")

    def __init__(self, seed: int = 0) -> None:
        self._seed = 0
        self._index = STATE_SIZE
        self._words: WordArray = np.zeros(STATE_SIZE, dtype=np.uint32)
        self._output: list[int] = []
        self.reseed(seed)

    @property
    def seed(self) -> int:
        """Seed the generator was last initialized with."""
        return self._seed

    @property
    def state(self) -> GeneratorState:
        """Snapshot of the current state."""
        return GeneratorState(
            seed=self._seed,
            index=self._index,
            words=tuple(int(w) for w in self._words),
        )

    def reseed(self, seed: int) -> None:
        """
        Reinitialize the state from ``seed``.

        All previously generated output is invalidated; the next word starts
        a fresh sequence. Other instances are unaffected.
        """
        self._seed = validate_seed(seed)
        self._words = _initial_words(self._seed)
        self._index = STATE_SIZE
        self._output = []
        logger.debug("Mersenne twister seeded with %d", self._seed)

    def randomize(self) -> int:
        """
        Reseed from the wall clock (milliseconds, truncated to 32 bits).

        Returns
        -------
        int
            The new seed.
        """
        seed = int(time.time() * 1000) & 0xFFFFFFFF
        self.reseed(seed)
        return seed

    def fork(self, seed: int) -> MersenneTwister:
        """Create an independent generator initialized with ``seed``."""
        return type(self)(seed)

    def _refill(self) -> None:
        _twist(self._words)
        self._output = _temper(self._words).tolist()
        self._index = 0

    def next_word(self) -> int:
        """Return the next tempered 32-bit word."""
        if self._index >= STATE_SIZE:
            self._refill()
        word = self._output[self._index]
        self._index += 1
        return word

    def words(self, n: int) -> WordArray:
        """
        Return the next ``n`` words as a ``uint32`` array.

        Equivalent to calling :meth:`next_word` ``n`` times.
        """
        out = np.empty(n, dtype=np.uint32)
        filled = 0
        while filled < n:
            if self._index >= STATE_SIZE:
                self._refill()
            take = min(n - filled, STATE_SIZE - self._index)
            out[filled : filled + take] = self._output[self._index : self._index + take]
            self._index += take
            filled += take
        return out

    def __copy__(self) -> NoReturn:
        raise UnsupportedOperationError(
            "MersenneTwister cannot be copied; use fork(seed) for an independent generator"
        )

    def __deepcopy__(self, memo: dict[int, Any]) -> NoReturn:
        raise UnsupportedOperationError(
            "MersenneTwister cannot be copied; use fork(seed) for an independent generator"
        )

    def __reduce__(self) -> NoReturn:
        raise UnsupportedOperationError("MersenneTwister cannot be pickled")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self._seed}, index={self._index})"

"""
Sampler Configuration
=====================

Configuration shared by :class:`~pysatl_empirical.prng.generator.RandomGenerator`
and :class:`~pysatl_empirical.distributions.inverse_cdf.InverseCDFSampler`.

Values usually come from a key-value parameter source; use
:meth:`SamplerConfig.from_mapping` to read them.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import operator
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from pysatl_empirical.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

DEFAULT_MAX_REJECTIONS = 1_000_000
"""Default number of consecutive rejections tolerated by a sampling loop."""

MAX_SEED = 0xFFFFFFFF
"""Largest admissible generator seed (seeds are unsigned 32-bit integers)."""


def validate_seed(seed: object) -> int:
    """
    Check that ``seed`` is an unsigned 32-bit integer and return it as ``int``.

    Raises
    ------
    InvalidArgumentError
        If ``seed`` is not an integer in ``[0, 2**32)``.
    """
    if isinstance(seed, bool):
        raise InvalidArgumentError(f"Seed must be an integer, got {seed!r}")
    try:
        value = operator.index(seed)  # type: ignore[call-overload]
    except TypeError:
        raise InvalidArgumentError(f"Seed must be an integer, got {seed!r}") from None
    if not 0 <= value <= MAX_SEED:
        raise InvalidArgumentError(f"Seed must lie in [0, {MAX_SEED}], got {value}")
    return value


@dataclass(frozen=True, slots=True)
class SamplerConfig:
    """
    Configuration of a random sampler.

    Parameters
    ----------
    seed : int, default 0
        Initial seed of the underlying Mersenne Twister.
    max_rejections : int | None, default 1_000_000
        Maximum number of consecutive rejected candidates in any rejection
        loop before :class:`~pysatl_empirical.errors.SamplingExhaustedError`
        is raised. ``None`` lets the loops run unbounded.

    Notes
    -----
    Every rejection loop of the samplers accepts with overwhelming
    probability after a handful of draws; the cap only guards against
    pathological floating point ranges (e.g. ``uniform_real(x, nextafter(x))``).
    """

    seed: int = 0
    max_rejections: int | None = DEFAULT_MAX_REJECTIONS

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        object.__setattr__(self, "seed", validate_seed(self.seed))
        if self.max_rejections is not None and self.max_rejections <= 0:
            raise InvalidArgumentError(
                f"max_rejections must be positive or None, got {self.max_rejections}"
            )

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> SamplerConfig:
        """
        Build a configuration from a key-value source.

        Parameters
        ----------
        params : Mapping[str, Any]
            Parsed parameters. Recognised keys are ``seed`` and
            ``max_rejections``; a ``max_rejections`` of ``0`` or ``None``
            disables the cap.

        Raises
        ------
        InvalidArgumentError
            If an unknown key is present or a value has the wrong type.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(params) - known
        if unknown:
            raise InvalidArgumentError(f"Unknown sampler parameters: {sorted(unknown)}")

        kwargs: dict[str, Any] = {}
        if "seed" in params:
            kwargs["seed"] = validate_seed(params["seed"])
        if "max_rejections" in params:
            cap = params["max_rejections"]
            if cap is not None and not isinstance(cap, int):
                raise InvalidArgumentError(f"max_rejections must be an integer, got {cap!r}")
            kwargs["max_rejections"] = cap or None
        return cls(**kwargs)


__all__ = [
    "DEFAULT_MAX_REJECTIONS",
    "MAX_SEED",
    "SamplerConfig",
    "validate_seed",
]

"""
Error Kinds
===========

Exceptions raised by the PySATL empirical toolkit.

- :class:`InvalidArgumentError` — an argument is outside its admissible domain.
- :class:`UnsupportedOperationError` — the operation is deliberately not
  provided (e.g. copying a generator).
- :class:`PreconditionViolationError` — an object is not in the state the
  operation requires.
- :class:`SamplingExhaustedError` — a rejection loop exceeded its cap.

I/O failures are not wrapped; :class:`OSError` propagates unchanged.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class EmpiricalError(Exception):
    """Base class for all errors raised by this package."""


class InvalidArgumentError(EmpiricalError, ValueError):
    """Raised when an argument is outside its admissible domain."""


class UnsupportedOperationError(EmpiricalError, TypeError):
    """Raised for operations that are intentionally unsupported."""


class PreconditionViolationError(EmpiricalError, RuntimeError):
    """Raised when an object is not ready for the requested operation."""


class SamplingExhaustedError(EmpiricalError, RuntimeError):
    """
    Raised when a rejection sampling loop exceeds its configured cap.

    See :attr:`pysatl_empirical.config.SamplerConfig.max_rejections`.
    """


__all__ = [
    "EmpiricalError",
    "InvalidArgumentError",
    "UnsupportedOperationError",
    "PreconditionViolationError",
    "SamplingExhaustedError",
]

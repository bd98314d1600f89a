"""
Pseudorandom generation subpackage

- Mersenne Twister word generator (:mod:`.mersenne`);
- uniform, normal and Poisson samplers (:mod:`.generator`);
- ``ln(n!)`` helper (:mod:`.special`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .generator import RandomGenerator
from .mersenne import GeneratorState, MersenneTwister
from .special import ln_factorial

__all__ = [
    "GeneratorState",
    "MersenneTwister",
    "RandomGenerator",
    "ln_factorial",
]

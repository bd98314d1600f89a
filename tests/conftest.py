from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from pysatl_empirical.prng import RandomGenerator


@pytest.fixture
def rng() -> RandomGenerator:
    return RandomGenerator(seed=12345)


@pytest.fixture
def numpy_rng() -> np.random.Generator:
    """Independent reference stream for building test samples."""
    return np.random.default_rng(20250101)

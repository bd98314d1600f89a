"""
Distributions subpackage

Empirical distributions and the tools built on them:

- sample protocol and array-backed samples (:mod:`.sampling`);
- histogram builders (:mod:`.histogram`);
- 1D and 2D empirical distributions (:mod:`.empirical`);
- L2, Kolmogorov–Smirnov and Cramér–von Mises distances (:mod:`.distance`);
- goodness-of-fit p-values (:mod:`.probabilities`);
- inverse-CDF sampling (:mod:`.inverse_cdf`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
from .distance import EXACT_KS_LIMIT, DistanceResult, compare_1d, compare_2d
from .empirical import EmpiricalDistribution1D, EmpiricalDistribution2D
from .histogram import (
    discrete_histogram_to_histogram,
    samples_to_histogram_1d,
    samples_to_histogram_2d,
    value_counts_to_histogram,
)
from .inverse_cdf import InverseCDFInterpolant, InverseCDFSampler
from .probabilities import (
    cramer_von_mises_prob,
    kolmogorov_prob,
    kolmogorov_prob_two_small_samples,
)
from .sampling import ArraySample, Sample

__all__ = [
    # sampling
    "Sample",
    "ArraySample",
    # histograms
    "discrete_histogram_to_histogram",
    "samples_to_histogram_1d",
    "samples_to_histogram_2d",
    "value_counts_to_histogram",
    # empirical distributions
    "EmpiricalDistribution1D",
    "EmpiricalDistribution2D",
    # distances
    "EXACT_KS_LIMIT",
    "DistanceResult",
    "compare_1d",
    "compare_2d",
    # probabilities
    "cramer_von_mises_prob",
    "kolmogorov_prob",
    "kolmogorov_prob_two_small_samples",
    # inverse CDF
    "InverseCDFInterpolant",
    "InverseCDFSampler",
]

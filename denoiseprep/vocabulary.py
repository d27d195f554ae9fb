# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for the denoiseprep package.

Single source of truth for the filter kinds the convolution engine
understands and the execution strategy names accepted by configuration
files and the command line.

Author
------
geoint.org contributors

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

from enum import Enum


class FilterKind(Enum):
    """Filter algorithms applied by a single filter pass.

    ``GAUSSIAN`` is the weighted convolution with a normalized Gaussian
    kernel. ``LOCAL_MEAN`` is the unweighted sliding-window average used
    as a Wiener-filter approximation for noise suppression.
    """

    GAUSSIAN = "gaussian"
    LOCAL_MEAN = "local_mean"


class StrategyKind(Enum):
    """Execution strategies for evaluating a filter pass.

    All strategies produce identical output; they differ only in how the
    interior pixels are scheduled.
    """

    SEQUENTIAL = "sequential"
    CPU_PARALLEL = "cpu-parallel"
    GPU_PARALLEL = "gpu-parallel"

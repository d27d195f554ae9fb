# -*- coding: utf-8 -*-
"""
Sequential Strategy - Single-threaded filter pass evaluation.

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

# Third-party
import numpy as np

# denoiseprep internal
from denoiseprep.filtering.base import ExecutionStrategy
from denoiseprep.filtering.engine import evaluate_region, working_copy
from denoiseprep.partition import ChipRegion
from denoiseprep.vocabulary import FilterKind, StrategyKind


class SequentialStrategy(ExecutionStrategy):
    """Evaluate the whole interior in one control flow, row-major.

    The reference strategy: no threads, no devices. The other strategies
    must match its output exactly.

    Examples
    --------
    >>> from denoiseprep.filtering import SequentialStrategy
    >>> from denoiseprep.vocabulary import FilterKind
    >>> strategy = SequentialStrategy(kernel_size=5, sigma=1.5)
    >>> smoothed = strategy.apply(FilterKind.GAUSSIAN, image)
    """

    kind = StrategyKind.SEQUENTIAL

    def _fill_interior(
        self,
        kind: FilterKind,
        source: np.ndarray,
        out: np.ndarray,
        region: ChipRegion,
    ) -> None:
        working = working_copy(kind, source)
        out[region.slices()] = evaluate_region(
            kind, working, self._kernel, region
        )

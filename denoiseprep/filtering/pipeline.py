# -*- coding: utf-8 -*-
"""
Denoise Pipeline - Fixed two-pass Gaussian then local-mean filter chain.

Chains filter passes through a single ``ExecutionStrategy``. The output
of each pass feeds into the next; passes are never fused. Supports
progress reporting across the chain.

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

# Standard library
import logging
from typing import Callable, List, Optional, Sequence, Tuple

# Third-party
import numpy as np

# denoiseprep internal
from denoiseprep.filtering.base import ExecutionStrategy, coerce_filter_kind
from denoiseprep.vocabulary import FilterKind

logger = logging.getLogger(__name__)

#: Pass order used for dataset preprocessing.
DENOISE_PASSES: Tuple[FilterKind, ...] = (
    FilterKind.GAUSSIAN,
    FilterKind.LOCAL_MEAN,
)


class DenoisePipeline:
    """Sequential chain of filter passes evaluated by one strategy.

    Parameters
    ----------
    strategy : ExecutionStrategy
        Strategy that evaluates every pass.
    passes : Sequence[FilterKind], optional
        Ordered pass list. Defaults to Gaussian smoothing followed by
        local-mean noise suppression.

    Examples
    --------
    >>> from denoiseprep.filtering import DenoisePipeline, SequentialStrategy
    >>> pipe = DenoisePipeline(SequentialStrategy())
    >>> denoised = pipe.apply(image)

    With progress reporting:

    >>> denoised = pipe.apply(image, progress_callback=lambda f: print(f"{f:.0%}"))
    """

    def __init__(
        self,
        strategy: ExecutionStrategy,
        passes: Sequence[FilterKind] = DENOISE_PASSES,
    ) -> None:
        if not isinstance(strategy, ExecutionStrategy):
            raise TypeError(
                f"strategy is not an ExecutionStrategy: "
                f"{type(strategy).__name__}"
            )
        if not passes:
            raise ValueError("DenoisePipeline requires at least one pass")
        self._strategy = strategy
        self._passes: List[FilterKind] = [coerce_filter_kind(p) for p in passes]

    @property
    def strategy(self) -> ExecutionStrategy:
        """The strategy evaluating each pass."""
        return self._strategy

    @property
    def passes(self) -> List[FilterKind]:
        """Shallow copy of the ordered pass list."""
        return list(self._passes)

    def __len__(self) -> int:
        return len(self._passes)

    def __repr__(self) -> str:
        names = [p.value for p in self._passes]
        return f"DenoisePipeline({self._strategy!r}, {names})"

    def apply(
        self,
        image: np.ndarray,
        progress_callback: Optional[Callable[[float], None]] = None,
    ) -> np.ndarray:
        """Apply all passes in order.

        Parameters
        ----------
        image : np.ndarray
            2D ``uint8`` input image. Not modified.
        progress_callback : Callable[[float], None], optional
            Called with the completed fraction after each pass.

        Returns
        -------
        np.ndarray
            Output after all passes, same shape as *image*.
        """
        n = len(self._passes)
        result = image
        for i, kind in enumerate(self._passes):
            logger.debug("Pipeline pass %d/%d: %s", i + 1, n, kind.value)
            result = self._strategy.apply(kind, result)
            if progress_callback is not None:
                progress_callback((i + 1) / n)
        return result

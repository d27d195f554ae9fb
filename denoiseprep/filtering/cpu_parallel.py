# -*- coding: utf-8 -*-
"""
CPU Parallel Strategy - Thread-pool filter pass over disjoint row bands.

Splits the interior of each image into contiguous row bands, one per
worker, and evaluates them on a fixed-size ``ThreadPoolExecutor``. Each
task reads the shared input (never written during the pass) and writes
only the rows of its own band, so the pixel grid needs no locking. The
pass joins on every future before returning, which is the only
synchronization point. numpy releases the GIL inside the element-wise
kernels that dominate a band, so bands run concurrently.

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
import os
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Optional

# Third-party
import numpy as np

# denoiseprep internal
from denoiseprep.exceptions import ValidationError
from denoiseprep.filtering.base import ExecutionStrategy
from denoiseprep.filtering.engine import evaluate_region, working_copy
from denoiseprep.filtering.kernel import DEFAULT_KERNEL_SIZE, DEFAULT_SIGMA
from denoiseprep.partition import ChipRegion, row_bands
from denoiseprep.vocabulary import FilterKind, StrategyKind

logger = logging.getLogger(__name__)


class CpuParallelStrategy(ExecutionStrategy):
    """Evaluate interior row bands concurrently on a worker pool.

    Parameters
    ----------
    kernel_size : int
        Kernel and window side length (odd, > 0). Default 5.
    sigma : float
        Gaussian standard deviation. Default 1.5.
    workers : int, optional
        Pool size. Defaults to ``os.cpu_count()``.

    Raises
    ------
    ValidationError
        If ``workers`` is not a positive integer, or the kernel
        parameters are invalid.

    Examples
    --------
    >>> with CpuParallelStrategy(workers=4) as strategy:
    ...     smoothed = strategy.apply('gaussian', image)
    """

    kind = StrategyKind.CPU_PARALLEL

    def __init__(
        self,
        kernel_size: int = DEFAULT_KERNEL_SIZE,
        sigma: float = DEFAULT_SIGMA,
        workers: Optional[int] = None,
    ) -> None:
        super().__init__(kernel_size, sigma)
        if workers is None:
            workers = os.cpu_count() or 1
        if isinstance(workers, bool) or not isinstance(workers, int) \
                or workers <= 0:
            raise ValidationError(
                f"workers must be a positive integer, got {workers!r}"
            )
        self._workers = workers
        self._executor = ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix='denoiseprep-band'
        )
        logger.debug("Started %d filter worker threads", workers)

    @property
    def workers(self) -> int:
        """Number of worker threads in the pool."""
        return self._workers

    def _fill_interior(
        self,
        kind: FilterKind,
        source: np.ndarray,
        out: np.ndarray,
        region: ChipRegion,
    ) -> None:
        working = working_copy(kind, source)
        bands = row_bands(region, self._workers)

        def run_band(band: ChipRegion) -> int:
            out[band.slices()] = evaluate_region(
                kind, working, self._kernel, band
            )
            return band.size

        futures = [self._executor.submit(run_band, band) for band in bands]
        # Join: every band must finish before the buffer moves on.
        wait(futures)
        filtered = sum(future.result() for future in futures)
        logger.debug("%s pass filtered %d pixels in %d bands",
                     kind.value, filtered, len(bands))

    def close(self) -> None:
        """Shut down the worker pool, waiting for running bands."""
        self._executor.shutdown(wait=True)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(kernel_size={self._kernel_size}, "
                f"sigma={self._sigma}, workers={self._workers})")

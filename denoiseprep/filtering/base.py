# -*- coding: utf-8 -*-
"""
Execution Strategy Base Class - Abstract interface for evaluating filter passes.

Defines the ``ExecutionStrategy`` ABC shared by the sequential, CPU
thread-pool, and GPU strategies. The base class owns everything that
must not differ between them: parameter validation, Gaussian kernel
construction, output allocation, and the border-copy policy. Concrete
strategies only decide how the interior pixels are scheduled by
implementing ``_fill_interior``.

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
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Union

# Third-party
import numpy as np

# denoiseprep internal
from denoiseprep.exceptions import ResourceExhaustedError, ValidationError
from denoiseprep.filtering._validation import validate_image
from denoiseprep.filtering.engine import allocate_output, copy_border
from denoiseprep.filtering.kernel import (
    DEFAULT_KERNEL_SIZE,
    DEFAULT_SIGMA,
    gaussian_kernel,
)
from denoiseprep.partition import ChipRegion, interior_region
from denoiseprep.vocabulary import FilterKind, StrategyKind

logger = logging.getLogger(__name__)


class ExecutionStrategy(ABC):
    """
    Abstract base class for filter-pass execution strategies.

    A strategy applies one ``FilterKind`` to one image and returns a new
    image of the same shape. Every strategy produces identical output for
    the same input; they differ only in how interior pixels are
    scheduled. Strategies may hold resources (a worker pool, an
    accelerator device) and are usable as context managers.

    Parameters
    ----------
    kernel_size : int
        Side length of the Gaussian kernel and the local-mean window.
        Must be a positive odd integer. Default 5.
    sigma : float
        Gaussian standard deviation in pixels. Must be > 0. Default 1.5.

    Raises
    ------
    ValidationError
        If ``kernel_size`` or ``sigma`` is invalid.
    """

    #: Name under which the strategy is registered.
    kind: ClassVar[StrategyKind]

    def __init__(
        self,
        kernel_size: int = DEFAULT_KERNEL_SIZE,
        sigma: float = DEFAULT_SIGMA,
    ) -> None:
        self._kernel = gaussian_kernel(kernel_size, sigma)
        self._kernel_size = kernel_size
        self._sigma = sigma

    @property
    def kernel(self) -> np.ndarray:
        """The read-only Gaussian kernel used by the Gaussian pass."""
        return self._kernel

    @property
    def kernel_size(self) -> int:
        """Kernel and window side length."""
        return self._kernel_size

    @property
    def sigma(self) -> float:
        """Gaussian standard deviation."""
        return self._sigma

    @property
    def offset(self) -> int:
        """Neighborhood radius, ``kernel_size // 2``."""
        return self._kernel_size // 2

    def apply(
        self, kind: Union[FilterKind, str], image: np.ndarray
    ) -> np.ndarray:
        """Apply one filter pass to *image*.

        Parameters
        ----------
        kind : FilterKind or str
            ``FilterKind.GAUSSIAN`` / ``'gaussian'`` or
            ``FilterKind.LOCAL_MEAN`` / ``'local_mean'``.
        image : np.ndarray
            2D ``uint8`` image, shape ``(rows, cols)``. Not modified.

        Returns
        -------
        np.ndarray
            New 2D ``uint8`` image of the same shape. Border pixels equal
            the input; interior pixels hold the filtered values.

        Raises
        ------
        ValidationError
            If *kind* is unknown or *image* is not a non-empty 2D
            ``uint8`` array.
        ResourceExhaustedError
            If the output or working buffers cannot be allocated.
        """
        kind = coerce_filter_kind(kind)
        validate_image(image)

        out = allocate_output(image)
        copy_border(image, out, self.offset)
        region = interior_region(image.shape, self.offset)
        if region is None:
            logger.debug("%s: %s image has no interior for kernel %d",
                         type(self).__name__, image.shape, self._kernel_size)
            return out

        logger.debug("%s: %s pass over %s interior %s",
                     type(self).__name__, kind.value, image.shape, region)
        try:
            self._fill_interior(kind, image, out, region)
        except ResourceExhaustedError:
            raise
        except MemoryError as exc:
            raise ResourceExhaustedError(
                f"Out of memory during {kind.value} pass over "
                f"{image.shape} image"
            ) from exc
        return out

    @abstractmethod
    def _fill_interior(
        self,
        kind: FilterKind,
        source: np.ndarray,
        out: np.ndarray,
        region: ChipRegion,
    ) -> None:
        """Write filtered values for every pixel of *region* into *out*.

        Parameters
        ----------
        kind : FilterKind
            Filter algorithm.
        source : np.ndarray
            Validated 2D ``uint8`` input. Must not be modified.
        out : np.ndarray
            Output buffer with the border already copied.
        region : ChipRegion
            Interior region (non-empty).
        """
        ...

    def close(self) -> None:
        """Release strategy resources.

        Default implementation does nothing. Override if the strategy
        holds a worker pool or device memory.
        """
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(kernel_size={self._kernel_size}, "
                f"sigma={self._sigma})")


def coerce_filter_kind(kind: Any) -> FilterKind:
    """Convert a ``FilterKind`` or its string value to ``FilterKind``."""
    if isinstance(kind, FilterKind):
        return kind
    try:
        return FilterKind(kind)
    except ValueError:
        raise ValidationError(
            f"Unknown filter kind: {kind!r}. "
            f"Supported kinds: {[k.value for k in FilterKind]}"
        ) from None

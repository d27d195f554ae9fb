# -*- coding: utf-8 -*-
"""
Convolution Engine - Gaussian convolution and local-mean averaging kernels.

Implements the per-pixel arithmetic shared by every execution strategy:

- Weighted convolution: ``float64`` accumulation of the neighborhood
  weighted by the Gaussian kernel, clamped to ``[0, 255]`` and rounded
  half-to-even.
- Unweighted local mean: ``int64`` sum of the ``size x size``
  neighborhood, integer-truncated division by ``size**2``.

Both operate on a ``ChipRegion`` of interior pixels so a strategy can
evaluate the whole interior at once, one row band at a time, or one tile
at a time. The neighborhood is visited in row-major kernel order
regardless of region shape, so the result for any pixel does not depend
on how the interior was partitioned.

Pixels within ``offset = size // 2`` of an edge have no full
neighborhood; ``copy_border`` copies them unchanged from the input.

Dependencies
------------
numpy

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

# Third-party
import numpy as np

# denoiseprep internal
from denoiseprep.exceptions import ResourceExhaustedError
from denoiseprep.partition import ChipRegion
from denoiseprep.vocabulary import FilterKind

logger = logging.getLogger(__name__)


def allocate_output(source: np.ndarray) -> np.ndarray:
    """Allocate an output buffer with the shape and dtype of *source*.

    Raises
    ------
    ResourceExhaustedError
        If the buffer cannot be allocated.
    """
    try:
        return np.empty_like(source)
    except MemoryError as exc:
        raise ResourceExhaustedError(
            f"Could not allocate {source.shape} output buffer"
        ) from exc


def copy_border(source: np.ndarray, out: np.ndarray, offset: int) -> None:
    """Copy every pixel within *offset* of an edge from *source* to *out*.

    Copies the top and bottom ``offset`` rows in full, then the left and
    right ``offset`` columns of the remaining rows. When the image has no
    interior the whole image ends up copied.

    Parameters
    ----------
    source : np.ndarray
        2D input image.
    out : np.ndarray
        2D output image, same shape as *source*. Modified in place.
    offset : int
        Neighborhood radius (``kernel_size // 2``).
    """
    if offset == 0:
        return
    rows, cols = source.shape
    out[:offset, :] = source[:offset, :]
    out[rows - offset:, :] = source[rows - offset:, :]
    out[offset:rows - offset, :offset] = source[offset:rows - offset, :offset]
    out[offset:rows - offset, cols - offset:] = \
        source[offset:rows - offset, cols - offset:]


def working_copy(kind: FilterKind, source: np.ndarray) -> np.ndarray:
    """Widen *source* to the accumulation dtype for *kind*.

    ``float64`` for the Gaussian pass, ``int64`` for the local mean.

    Raises
    ------
    ResourceExhaustedError
        If the widened copy cannot be allocated.
    """
    dtype = np.float64 if kind is FilterKind.GAUSSIAN else np.int64
    try:
        return source.astype(dtype)
    except MemoryError as exc:
        raise ResourceExhaustedError(
            f"Could not allocate {source.shape} {np.dtype(dtype).name} "
            f"working buffer"
        ) from exc


def _window(
    working: np.ndarray, region: ChipRegion, offset: int, k: int, l: int
) -> np.ndarray:
    """View of *working* shifted by ``(k - offset, l - offset)`` over *region*."""
    dr = k - offset
    dc = l - offset
    return working[region.row_start + dr:region.row_end + dr,
                   region.col_start + dc:region.col_end + dc]


def weighted_sum(
    working: np.ndarray, weights: np.ndarray, region: ChipRegion
) -> np.ndarray:
    """Weighted neighborhood sum for every pixel of *region*.

    Parameters
    ----------
    working : np.ndarray
        ``float64`` image from ``working_copy``.
    weights : np.ndarray
        Square kernel of odd side length.
    region : ChipRegion
        Interior pixels to evaluate.

    Returns
    -------
    np.ndarray
        ``float64`` array of shape ``region.shape``.
    """
    size = weights.shape[0]
    offset = size // 2
    acc = np.zeros(region.shape, dtype=np.float64)
    for k in range(size):
        for l in range(size):
            acc += _window(working, region, offset, k, l) * weights[k, l]
    return acc


def window_sum(
    working: np.ndarray, size: int, region: ChipRegion
) -> np.ndarray:
    """Unweighted neighborhood sum for every pixel of *region*.

    Parameters
    ----------
    working : np.ndarray
        ``int64`` image from ``working_copy``.
    size : int
        Window side length (odd).
    region : ChipRegion
        Interior pixels to evaluate.

    Returns
    -------
    np.ndarray
        ``int64`` array of shape ``region.shape``.
    """
    offset = size // 2
    acc = np.zeros(region.shape, dtype=np.int64)
    for k in range(size):
        for l in range(size):
            acc += _window(working, region, offset, k, l)
    return acc


def finalize(kind: FilterKind, acc: np.ndarray, size: int) -> np.ndarray:
    """Convert accumulated sums to 8-bit samples."""
    if kind is FilterKind.GAUSSIAN:
        return np.rint(np.clip(acc, 0.0, 255.0)).astype(np.uint8)
    return (acc // (size * size)).astype(np.uint8)


def evaluate_region(
    kind: FilterKind,
    working: np.ndarray,
    weights: np.ndarray,
    region: ChipRegion,
) -> np.ndarray:
    """Filter every pixel of *region* and return the 8-bit result.

    Parameters
    ----------
    kind : FilterKind
        Filter algorithm.
    working : np.ndarray
        Widened input from ``working_copy(kind, source)``.
    weights : np.ndarray
        Gaussian kernel. For ``LOCAL_MEAN`` only its side length is used.
    region : ChipRegion
        Interior pixels to evaluate.

    Returns
    -------
    np.ndarray
        ``uint8`` array of shape ``region.shape``.
    """
    size = weights.shape[0]
    if kind is FilterKind.GAUSSIAN:
        acc = weighted_sum(working, weights, region)
    else:
        acc = window_sum(working, size, region)
    return finalize(kind, acc, size)

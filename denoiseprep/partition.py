# -*- coding: utf-8 -*-
"""
Partition - Interior regions, row bands, and tile grids over an image.

Provides the ``ChipRegion`` named tuple used throughout the filtering
engine to describe rectangular pixel ranges, plus helpers that compute
the filterable interior of an image, split it into disjoint row bands
for the CPU worker pool, and lay a tile grid over it for the GPU
strategy.

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
from typing import List, NamedTuple, Optional, Tuple, Union

# Third-party
import numpy as np


#: Default GPU tile shape, ``(tile_rows, tile_cols)``.
DEFAULT_TILE_SHAPE = (16, 16)


class ChipRegion(NamedTuple):
    """Rectangular region within an image, defined by pixel bounds.

    Use directly for numpy slicing::

        chip = image[region.row_start:region.row_end,
                     region.col_start:region.col_end]

    Attributes
    ----------
    row_start : int
        First row (inclusive).
    col_start : int
        First column (inclusive).
    row_end : int
        Last row (exclusive).
    col_end : int
        Last column (exclusive).
    """

    row_start: int
    col_start: int
    row_end: int
    col_end: int

    @property
    def shape(self) -> Tuple[int, int]:
        """Region dimensions as ``(rows, cols)``."""
        return (self.row_end - self.row_start, self.col_end - self.col_start)

    @property
    def size(self) -> int:
        """Number of pixels covered by the region."""
        rows, cols = self.shape
        return rows * cols

    def slices(self) -> Tuple[slice, slice]:
        """Return ``(row_slice, col_slice)`` for indexing an array."""
        return (slice(self.row_start, self.row_end),
                slice(self.col_start, self.col_end))


def interior_region(
    shape: Tuple[int, int], offset: int
) -> Optional[ChipRegion]:
    """Region of pixels that have a full neighborhood of radius *offset*.

    Parameters
    ----------
    shape : Tuple[int, int]
        Image ``(rows, cols)``.
    offset : int
        Neighborhood radius (``kernel_size // 2``).

    Returns
    -------
    Optional[ChipRegion]
        The interior, or ``None`` when the image is too small in either
        dimension to contain a single interior pixel.
    """
    rows, cols = shape
    if rows - 2 * offset <= 0 or cols - 2 * offset <= 0:
        return None
    return ChipRegion(offset, offset, rows - offset, cols - offset)


def row_bands(region: ChipRegion, n_bands: int) -> List[ChipRegion]:
    """Split *region* into at most *n_bands* disjoint, contiguous row bands.

    Bands cover every row of the region exactly once and differ in height
    by at most one row. Fewer bands are returned when the region has
    fewer rows than requested.

    Parameters
    ----------
    region : ChipRegion
        Region to split.
    n_bands : int
        Requested number of bands. Must be positive.

    Returns
    -------
    List[ChipRegion]
        Bands ordered top to bottom.

    Raises
    ------
    ValueError
        If ``n_bands`` is not positive.
    """
    if n_bands <= 0:
        raise ValueError(f"n_bands must be positive, got {n_bands}")
    n_rows = region.row_end - region.row_start
    n_bands = min(n_bands, n_rows)
    edges = [region.row_start + (i * n_rows) // n_bands
             for i in range(n_bands + 1)]
    return [
        ChipRegion(r0, region.col_start, r1, region.col_end)
        for r0, r1 in zip(edges[:-1], edges[1:])
    ]


def normalize_pair(
    value: Union[int, Tuple[int, int]], name: str
) -> Tuple[int, int]:
    """Convert an int or (int, int) sequence to a validated (int, int) pair.

    Parameters
    ----------
    value : int or Tuple[int, int]
        Scalar or pair value. If scalar, both elements are set equal.
    name : str
        Parameter name for error messages.

    Returns
    -------
    Tuple[int, int]
        Validated (rows, cols) pair.

    Raises
    ------
    TypeError
        If value is not int or a sequence of two ints.
    ValueError
        If any element is not positive.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")
        return (value, value)
    if isinstance(value, (tuple, list)) and len(value) == 2:
        r, c = value
        if not isinstance(r, int) or not isinstance(c, int):
            raise TypeError(f"{name} elements must be int")
        if r <= 0 or c <= 0:
            raise ValueError(
                f"{name} elements must be positive, got ({r}, {c})"
            )
        return (r, c)
    raise TypeError(
        f"{name} must be int or Tuple[int, int], got {type(value).__name__}"
    )


def tile_origins(
    region: ChipRegion, tile_shape: Tuple[int, int]
) -> Tuple[np.ndarray, np.ndarray]:
    """Compute the origins of a tile grid covering *region*.

    Tiles are laid out row-major from the region's top-left corner with
    no overlap. The last tile in each dimension may extend past the
    region; callers clip indices to the region.

    Parameters
    ----------
    region : ChipRegion
        Region to cover.
    tile_shape : Tuple[int, int]
        ``(tile_rows, tile_cols)``.

    Returns
    -------
    row_starts : np.ndarray
        1D array of tile row origins.
    col_starts : np.ndarray
        1D array of tile column origins.
    """
    tr, tc = tile_shape
    rows, cols = region.shape
    n_row_tiles = int(np.ceil(rows / tr))
    n_col_tiles = int(np.ceil(cols / tc))
    row_starts = region.row_start + np.arange(n_row_tiles) * tr
    col_starts = region.col_start + np.arange(n_col_tiles) * tc
    return row_starts, col_starts

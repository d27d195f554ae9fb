# -*- coding: utf-8 -*-
"""
Partition Tests - Interior regions, row bands, and tile grids.

Dependencies
------------
pytest

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

import pytest
import numpy as np

from denoiseprep.partition import (
    ChipRegion,
    interior_region,
    normalize_pair,
    row_bands,
    tile_origins,
)


class TestChipRegion:
    """Test the region named tuple."""

    def test_shape_and_size(self):
        """Test derived shape and pixel count."""
        region = ChipRegion(2, 3, 10, 8)
        assert region.shape == (8, 5)
        assert region.size == 40

    def test_slices(self):
        """Test slicing an array with the region."""
        data = np.arange(100).reshape(10, 10)
        region = ChipRegion(1, 2, 3, 5)
        np.testing.assert_array_equal(data[region.slices()], data[1:3, 2:5])


class TestInteriorRegion:
    """Test interior computation."""

    def test_interior(self):
        """Test a normal image."""
        assert interior_region((37, 53), 2) == ChipRegion(2, 2, 35, 51)

    def test_zero_offset(self):
        """Test that offset 0 covers the full image."""
        assert interior_region((4, 6), 0) == ChipRegion(0, 0, 4, 6)

    @pytest.mark.parametrize('shape', [(4, 10), (10, 4), (1, 1), (3, 100)])
    def test_too_small(self, shape):
        """Test that no interior is reported for small images."""
        assert interior_region(shape, 2) is None

    def test_single_pixel(self):
        """Test the 5x5 boundary case."""
        assert interior_region((5, 5), 2) == ChipRegion(2, 2, 3, 3)


class TestRowBands:
    """Test row band partitioning."""

    @pytest.mark.parametrize('n_bands', [1, 2, 3, 7, 33, 100])
    def test_cover_exactly_once(self, n_bands):
        """Test bands are contiguous, disjoint, and cover every row."""
        region = ChipRegion(2, 2, 35, 51)
        bands = row_bands(region, n_bands)
        assert bands[0].row_start == 2
        assert bands[-1].row_end == 35
        for prev, band in zip(bands[:-1], bands[1:]):
            assert prev.row_end == band.row_start
        assert all(b.row_end > b.row_start for b in bands)
        assert all(b.col_start == 2 and b.col_end == 51 for b in bands)
        heights = [b.shape[0] for b in bands]
        assert max(heights) - min(heights) <= 1

    def test_capped_at_row_count(self):
        """Test that more bands than rows yields one band per row."""
        bands = row_bands(ChipRegion(0, 0, 3, 10), 8)
        assert len(bands) == 3

    def test_invalid_count(self):
        """Test that a non-positive band count raises."""
        with pytest.raises(ValueError):
            row_bands(ChipRegion(0, 0, 3, 3), 0)


class TestTiles:
    """Test tile grid helpers."""

    def test_origins_cover_region(self):
        """Test tile origins with a partial last tile."""
        rows, cols = tile_origins(ChipRegion(2, 2, 35, 51), (16, 16))
        np.testing.assert_array_equal(rows, [2, 18, 34])
        np.testing.assert_array_equal(cols, [2, 18, 34, 50])

    def test_normalize_scalar(self):
        """Test scalar expansion."""
        assert normalize_pair(8, 'tile') == (8, 8)

    def test_normalize_pair(self):
        """Test list and tuple input."""
        assert normalize_pair([4, 2], 'tile') == (4, 2)

    @pytest.mark.parametrize('value, exc', [
        (0, ValueError), ((1, -1), ValueError),
        ('8', TypeError), ((1.0, 2), TypeError), ((1, 2, 3), TypeError),
    ])
    def test_normalize_invalid(self, value, exc):
        """Test rejection of invalid values."""
        with pytest.raises(exc):
            normalize_pair(value, 'tile')

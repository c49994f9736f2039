# -*- coding: utf-8 -*-
"""
Median Filter Tests - Shrinking borders, NaN exclusion, and validation.

Dependencies
------------
pytest

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-02-11

Modified
--------
2026-03-02
"""

import tracemalloc

import numpy as np
import pytest

from gridlab.exceptions import (
    InvalidDimensionsError,
    InvalidKernelError,
    InvalidParameterError,
)
from gridlab.grid import SampleGrid
from gridlab.image_processing.filters import MedianFilter, median_filter
from gridlab.image_processing.filters import rank


def _clipped_window_median(data, size):
    """Per-sample median over the clipped window, NaN samples dropped."""
    half = size // 2
    lines, samples = data.shape
    expected = np.empty_like(data)
    for y in range(lines):
        for x in range(samples):
            window = data[max(y - half, 0):y + half + 1,
                          max(x - half, 0):x + half + 1].ravel()
            window = np.sort(window[~np.isnan(window)])
            expected[y, x] = window[len(window) // 2] if len(window) else np.nan
    return expected


class TestMedianFilter:
    """Test MedianFilter correctness and parameters."""

    def test_window_one_is_identity(self, random_grid):
        result = MedianFilter(window_size=1).apply(random_grid)
        np.testing.assert_array_equal(result.data, random_grid.data)
        assert result is not random_grid

    def test_shrinking_border(self):
        """Border outputs use index count // 2 of the in-bounds samples."""
        grid = SampleGrid.from_array(np.arange(1, 10).reshape(3, 3))
        result = median_filter(grid, 3)
        np.testing.assert_array_equal(
            result.data, [[4, 4, 5], [5, 5, 6], [7, 7, 8]],
        )

    def test_removes_impulse(self, flat_grid):
        flat_grid.set(10, 10, 1000.0)
        result = MedianFilter(window_size=3).apply(flat_grid)
        np.testing.assert_allclose(result.data, 0.5)

    def test_within_input_range(self, random_grid):
        result = MedianFilter(window_size=5).apply(random_grid)
        assert result.data.min() >= random_grid.data.min()
        assert result.data.max() <= random_grid.data.max()

    def test_outputs_are_input_samples(self, random_grid):
        result = MedianFilter(window_size=3).apply(random_grid)
        assert np.isin(result.data, random_grid.data).all()

    def test_nan_excluded(self):
        data = np.ones((5, 5))
        data[2, 2] = np.nan
        result = median_filter(SampleGrid.from_array(data), 3)
        np.testing.assert_array_equal(result.data, np.ones((5, 5)))

    def test_all_nan_window_yields_nan(self):
        grid = SampleGrid.from_array(np.full((3, 3), np.nan))
        assert np.isnan(median_filter(grid, 3).data).all()

    def test_source_not_modified(self, random_grid):
        before = random_grid.data.copy()
        MedianFilter(window_size=3).apply(random_grid)
        np.testing.assert_array_equal(random_grid.data, before)

    @pytest.mark.parametrize("workers", [2, 7])
    def test_worker_count_does_not_change_result(self, random_grid, workers):
        single = median_filter(random_grid, 5, workers=1)
        many = median_filter(random_grid, 5, workers=workers)
        np.testing.assert_array_equal(many.data, single.data)

    def test_window_larger_than_grid(self):
        grid = SampleGrid.from_array(np.array([[3.0, 1.0, 2.0]]))
        result = median_filter(grid, 7)
        np.testing.assert_array_equal(result.data, [[2.0, 2.0, 2.0]])

    @pytest.mark.parametrize("size", [0, 2, 4, -3])
    def test_bad_window_raises(self, size):
        with pytest.raises(InvalidKernelError):
            MedianFilter(window_size=size)

    def test_runtime_window_override(self, random_grid):
        f = MedianFilter(window_size=3)
        r3 = f.apply(random_grid)
        r5 = f.apply(random_grid, window_size=5)
        assert not np.array_equal(r3.data, r5.data)

    def test_runtime_even_window_raises(self, random_grid):
        with pytest.raises(InvalidKernelError):
            MedianFilter().apply(random_grid, window_size=4)

    def test_window_above_maximum_raises(self, random_grid):
        with pytest.raises(InvalidParameterError):
            MedianFilter().apply(random_grid, window_size=101)

    def test_multiband_raises(self, multiband_grid):
        with pytest.raises(InvalidDimensionsError):
            MedianFilter().apply(multiband_grid)


class TestMedianFilterPaths:
    """Interior, border, and NaN paths agree with a direct window median."""

    @pytest.mark.parametrize("size", [3, 5, 7])
    def test_matches_direct_median(self, size):
        rng = np.random.default_rng(3)
        grid = SampleGrid.from_array(rng.normal(0.0, 10.0, (13, 17)))
        result = median_filter(grid, size, workers=3)
        np.testing.assert_array_equal(
            result.data, _clipped_window_median(grid.data, size),
        )

    def test_nan_block_matches_direct_median(self):
        rng = np.random.default_rng(5)
        data = rng.random((15, 12))
        data[7, 4] = np.nan
        data[0, 11] = np.nan
        grid = SampleGrid.from_array(data)
        result = median_filter(grid, 5, workers=2)
        np.testing.assert_array_equal(
            result.data, _clipped_window_median(grid.data, 5),
        )

    def test_small_sort_budget_chunks(self, monkeypatch):
        monkeypatch.setattr(rank, '_SORT_BUDGET_BYTES', 1)
        rng = np.random.default_rng(9)
        data = rng.random((9, 11))
        data[4, 5] = np.nan
        grid = SampleGrid.from_array(data)
        result = median_filter(grid, 3, workers=1)
        np.testing.assert_array_equal(
            result.data, _clipped_window_median(grid.data, 3),
        )

    def test_large_window_memory_bounded(self):
        """Peak scratch memory stays a small multiple of the grid size."""
        rng = np.random.default_rng(11)
        grid = SampleGrid.from_array(rng.random((512, 512)))
        tracemalloc.start()
        try:
            result = median_filter(grid, 31, workers=1)
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()
        assert result.shape == grid.shape
        assert peak < 50 * grid.data.nbytes

# -*- coding: utf-8 -*-
"""
Histogram Tests - Class assignment, normalization, and range handling.

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
2026-02-13

Modified
--------
2026-03-02
"""

import logging

import numpy as np
import pytest

from gridlab.exceptions import InvalidParameterError, InvalidRangeError
from gridlab.grid import Region, SampleGrid
from gridlab.statistics import compute_histogram


class TestComputeHistogram:
    """Test normalized histograms."""

    def test_two_classes(self):
        grid = SampleGrid.from_array(np.array([[0.0, 0.2], [0.6, 1.0]]))
        np.testing.assert_allclose(
            compute_histogram(grid, 0.0, 1.0, 2), [0.5, 0.5],
        )

    def test_sums_to_one(self, random_grid):
        hist = compute_histogram(random_grid, 0.0, 100.0, 16)
        assert hist.shape == (16,)
        assert hist.sum() == pytest.approx(1.0)

    def test_high_edge_in_last_class(self):
        grid = SampleGrid.from_array(np.array([[4.0, 4.0, 0.0, 0.0]]))
        hist = compute_histogram(grid, 0.0, 4.0, 4)
        np.testing.assert_allclose(hist, [0.5, 0.0, 0.0, 0.5])

    def test_out_of_range_skipped(self):
        grid = SampleGrid.from_array(np.array([[-1.0, 0.5, 2.0, 0.5]]))
        hist = compute_histogram(grid, 0.0, 1.0, 2)
        np.testing.assert_allclose(hist, [0.0, 1.0])

    def test_ramp_uniform(self, ramp_grid):
        hist = compute_histogram(ramp_grid, 0.0, 16.0, 4)
        np.testing.assert_allclose(hist, np.full(4, 0.25))

    def test_region(self, ramp_grid):
        hist = compute_histogram(
            ramp_grid, 0.0, 16.0, 4, region=Region(0, 3, 0, 0),
        )
        np.testing.assert_allclose(hist, [1.0, 0.0, 0.0, 0.0])

    def test_worker_count_does_not_change_result(self, random_grid):
        single = compute_histogram(random_grid, 0.0, 100.0, 10, workers=1)
        many = compute_histogram(random_grid, 0.0, 100.0, 10, workers=6)
        np.testing.assert_array_equal(single, many)

    def test_empty_range_warns_and_returns_zeros(self, flat_grid, caplog):
        with caplog.at_level(logging.WARNING, logger='gridlab'):
            hist = compute_histogram(flat_grid, 2.0, 3.0, 5)
        np.testing.assert_array_equal(hist, np.zeros(5))
        assert "No samples" in caplog.text

    @pytest.mark.parametrize("low, high", [(1.0, 1.0), (2.0, 1.0)])
    def test_bad_range_raises(self, flat_grid, low, high):
        with pytest.raises(InvalidRangeError):
            compute_histogram(flat_grid, low, high, 4)

    @pytest.mark.parametrize("classes", [0, -3, 2.0])
    def test_bad_class_count_raises(self, flat_grid, classes):
        with pytest.raises(InvalidParameterError):
            compute_histogram(flat_grid, 0.0, 1.0, classes)

# -*- coding: utf-8 -*-
"""
Pipeline Tests - Sequential composition, kwargs forwarding, and progress.

Dependencies
------------
pytest

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-02-06

Modified
--------
2026-03-02
"""

import numpy as np
import pytest

from gridlab.exceptions import InvalidParameterError
from gridlab.grid import SampleGrid
from gridlab.image_processing import (
    ConvolutionFilter,
    Decimate,
    MedianFilter,
    Pipeline,
    SaltAndPepperNoise,
    box_kernel,
)


class TestPipeline:
    """Test Pipeline composition."""

    def test_denoise_chain(self, flat_grid):
        """Median filtering removes sparse salt-and-pepper impulses."""
        pipe = Pipeline([
            SaltAndPepperNoise(0.01, 0.01),
            MedianFilter(window_size=3),
        ])
        result = pipe.apply(flat_grid.copy(), rng=np.random.default_rng(1))
        assert result.shape == flat_grid.shape
        assert np.mean(result.data == 0.5) > 0.99

    def test_order_matters(self, random_grid):
        a = Pipeline([Decimate(2), ConvolutionFilter(box_kernel(3))]).apply(random_grid)
        b = Pipeline([ConvolutionFilter(box_kernel(3)), Decimate(2)]).apply(random_grid)
        assert a.shape == b.shape == (24, 32)
        assert not np.allclose(a.data, b.data)

    def test_kwargs_forwarded(self, random_grid):
        pipe = Pipeline([MedianFilter(window_size=3)])
        direct = MedianFilter(window_size=5).apply(random_grid)
        piped = pipe.apply(random_grid, window_size=5, workers=2)
        np.testing.assert_array_equal(piped.data, direct.data)

    def test_progress_scaled(self, random_grid):
        seen = []
        pipe = Pipeline([MedianFilter(), Decimate(2)])
        pipe.apply(random_grid, progress_callback=seen.append)
        assert seen == sorted(seen)
        assert seen[-1] == pytest.approx(1.0)
        assert 0.5 in seen

    def test_nested(self, random_grid):
        inner = Pipeline([Decimate(2)])
        outer = Pipeline([inner, Decimate(2)])
        assert outer.apply(random_grid).shape == (12, 16)

    def test_len_and_repr(self):
        pipe = Pipeline([Decimate(2), MedianFilter()])
        assert len(pipe) == 2
        assert repr(pipe) == "Pipeline(['Decimate', 'MedianFilter'])"
        assert pipe.steps is not pipe.steps

    def test_empty_raises(self):
        with pytest.raises(InvalidParameterError):
            Pipeline([])

    def test_non_transform_raises(self):
        with pytest.raises(TypeError, match="Step 1"):
            Pipeline([Decimate(2), object()])


class TestDecimate:
    """Test integer decimation."""

    def test_keeps_every_step(self, ramp_grid):
        result = Decimate(2).apply(ramp_grid)
        np.testing.assert_array_equal(result.data, [[0, 2], [8, 10]])

    def test_step_one_copies(self, ramp_grid):
        result = Decimate(1).apply(ramp_grid)
        np.testing.assert_array_equal(result.data, ramp_grid.data)
        assert result is not ramp_grid

    def test_odd_size(self):
        grid = SampleGrid.from_array(np.arange(25).reshape(5, 5))
        assert Decimate(2).apply(grid).shape == (3, 3)

    def test_step_larger_than_grid(self, ramp_grid):
        result = Decimate(10).apply(ramp_grid)
        assert result.shape == (1, 1)
        assert result.get(0, 0) == 0.0

    def test_bad_step_raises(self):
        with pytest.raises(InvalidParameterError):
            Decimate(0)

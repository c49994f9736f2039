# -*- coding: utf-8 -*-
"""
Noise Injection Tests - Gaussian and salt-and-pepper determinism and bounds.

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
2026-02-18

Modified
--------
2026-03-02
"""

import numpy as np
import pytest

from gridlab.exceptions import InvalidDimensionsError, InvalidParameterError
from gridlab.grid import SampleGrid
from gridlab.image_processing.noise import GaussianNoise, SaltAndPepperNoise
from gridlab.vocabulary import ProcessorCategory


class TestGaussianNoise:
    """Test additive Gaussian noise."""

    def test_in_place(self, flat_grid):
        result = GaussianNoise(0.1).apply(flat_grid, rng=np.random.default_rng(0))
        assert result is flat_grid

    def test_reproducible_with_seed(self, flat_grid):
        a = GaussianNoise(0.1, 2.0).apply(
            flat_grid.copy(), rng=np.random.default_rng(5),
        )
        b = GaussianNoise(0.1, 2.0).apply(
            flat_grid.copy(), rng=np.random.default_rng(5),
        )
        np.testing.assert_array_equal(a.data, b.data)

    def test_row_major_draws(self, flat_grid):
        expected = flat_grid.data + 2.0 * np.random.default_rng(9).normal(
            0.0, 0.1, size=flat_grid.shape,
        )
        GaussianNoise(0.1, 2.0).apply(flat_grid, rng=np.random.default_rng(9))
        np.testing.assert_allclose(flat_grid.data, expected, rtol=1e-6, atol=1e-6)

    def test_zero_deviation_is_noop(self, random_grid):
        before = random_grid.data.copy()
        GaussianNoise(0.0).apply(random_grid, rng=np.random.default_rng(1))
        np.testing.assert_array_equal(random_grid.data, before)

    def test_statistics(self):
        grid = SampleGrid.create(200, 200)
        GaussianNoise(2.0, 0.5).apply(grid, rng=np.random.default_rng(2))
        assert abs(grid.data.mean()) < 0.02
        assert grid.data.std() == pytest.approx(1.0, rel=0.02)

    def test_negative_deviation_raises(self):
        with pytest.raises(InvalidParameterError):
            GaussianNoise(-1.0)

    def test_missing_rng_raises(self, flat_grid):
        with pytest.raises(InvalidParameterError, match="rng"):
            GaussianNoise(0.1).apply(flat_grid)

    def test_legacy_random_state_rejected(self, flat_grid):
        with pytest.raises(InvalidParameterError, match="rng"):
            GaussianNoise(0.1).apply(flat_grid, rng=np.random.RandomState(0))

    def test_multiband_raises(self, multiband_grid):
        with pytest.raises(InvalidDimensionsError):
            GaussianNoise(0.1).apply(multiband_grid, rng=np.random.default_rng(0))

    def test_category(self):
        assert GaussianNoise.__processor_tags__['category'] is ProcessorCategory.NOISE


class TestSaltAndPepperNoise:
    """Test impulsive noise."""

    def test_matches_uniform_draws(self, random_grid):
        original = random_grid.data.copy()
        u = np.random.default_rng(4).random(random_grid.shape)
        expected = np.where(
            u < 0.1, -1.0, np.where(u >= 1.0 - 0.2, 200.0, original),
        )
        SaltAndPepperNoise(0.1, 0.2, pepper_value=-1.0, salt_value=200.0).apply(
            random_grid, rng=np.random.default_rng(4),
        )
        np.testing.assert_array_equal(random_grid.data, expected.astype(np.float32))

    def test_all_pepper(self, random_grid):
        SaltAndPepperNoise(1.0, 0.0).apply(random_grid, rng=np.random.default_rng(0))
        np.testing.assert_array_equal(random_grid.data, 0.0)

    def test_all_salt(self, random_grid):
        SaltAndPepperNoise(0.0, 1.0).apply(random_grid, rng=np.random.default_rng(0))
        np.testing.assert_array_equal(random_grid.data, 1.0)

    def test_zero_probabilities_noop(self, random_grid):
        before = random_grid.data.copy()
        SaltAndPepperNoise(0.0, 0.0).apply(random_grid, rng=np.random.default_rng(0))
        np.testing.assert_array_equal(random_grid.data, before)

    def test_fraction_close_to_probability(self):
        grid = SampleGrid.create(300, 300)
        grid.data[...] = 0.5
        SaltAndPepperNoise(0.05, 0.1).apply(grid, rng=np.random.default_rng(8))
        assert np.mean(grid.data == 0.0) == pytest.approx(0.05, abs=0.01)
        assert np.mean(grid.data == 1.0) == pytest.approx(0.1, abs=0.01)

    @pytest.mark.parametrize("pepper, salt", [(-0.1, 0.0), (0.0, 1.5), (0.6, 0.6)])
    def test_bad_probabilities_raise(self, pepper, salt):
        with pytest.raises(InvalidParameterError):
            SaltAndPepperNoise(pepper, salt)

    def test_runtime_override_validated(self, flat_grid):
        f = SaltAndPepperNoise(0.5, 0.0)
        with pytest.raises(InvalidParameterError, match="<= 1"):
            f.apply(flat_grid, rng=np.random.default_rng(0), salt_probability=0.7)

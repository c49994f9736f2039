# -*- coding: utf-8 -*-
"""
Shared test fixtures - Synthetic sample grids.

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

import numpy as np
import pytest

from gridlab.grid import SampleGrid


@pytest.fixture
def flat_grid():
    """40 x 30 grid where every sample is 0.5."""
    return SampleGrid.from_array(np.full((30, 40), 0.5))


@pytest.fixture
def random_grid():
    """64 x 48 grid of uniform samples in [0, 100), fixed seed."""
    rng = np.random.default_rng(42)
    return SampleGrid.from_array(rng.random((48, 64)) * 100.0)


@pytest.fixture
def ramp_grid():
    """4 x 4 grid holding 0..15 in row-major order."""
    return SampleGrid.from_array(np.arange(16, dtype=np.float32).reshape(4, 4))


@pytest.fixture
def multiband_grid():
    """Grid declaring two bands, rejected by every operation."""
    return SampleGrid.create(8, 8, band_count=2)

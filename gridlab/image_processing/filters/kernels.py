# -*- coding: utf-8 -*-
"""
Standard Kernels - Ready-made convolution kernels as sample grids.

- ``dirac_kernel``: unit impulse, the identity under convolution
- ``box_kernel``: all-ones averaging kernel
- ``laplacian_kernel``: 4-neighbour 3x3 Laplacian (weights sum to zero)
- ``laplacian_of_gaussian_kernel``: 5x5 integer LoG approximation

The two high-pass kernels sum to zero, so they are meant for
``ConvolutionFilter(kernel, normalize=False)``.

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
2026-02-16

Modified
--------
2026-02-16
"""

# Third-party
import numpy as np

# gridlab internal
from gridlab.grid import SampleGrid
from gridlab.image_processing.filters._validation import validate_window_size


_LAPLACIAN = np.array([
    [0.0, 1.0, 0.0],
    [1.0, -4.0, 1.0],
    [0.0, 1.0, 0.0],
])

_LAPLACIAN_OF_GAUSSIAN = np.array([
    [0, -1, -2, -1, 0],
    [-1, 0, 2, 0, -1],
    [-2, 2, 8, 2, -2],
    [-1, 0, 2, 0, -1],
    [0, -1, -2, -1, 0],
], dtype=np.float64)


def dirac_kernel(size: int = 3) -> SampleGrid:
    """Square kernel with a single 1.0 at its center.

    Raises
    ------
    InvalidKernelError
        If *size* is not a positive odd integer.
    """
    validate_window_size(size, 'size')
    kernel = SampleGrid.create(size, size)
    kernel.set(size // 2, size // 2, 1.0)
    return kernel


def box_kernel(size: int = 3) -> SampleGrid:
    """Square all-ones kernel.

    Raises
    ------
    InvalidKernelError
        If *size* is not a positive odd integer.
    """
    validate_window_size(size, 'size')
    return SampleGrid.from_array(np.ones((size, size)))


def laplacian_kernel() -> SampleGrid:
    """3x3 4-neighbour Laplacian."""
    return SampleGrid.from_array(_LAPLACIAN)


def laplacian_of_gaussian_kernel() -> SampleGrid:
    """5x5 integer Laplacian-of-Gaussian approximation."""
    return SampleGrid.from_array(_LAPLACIAN_OF_GAUSSIAN)

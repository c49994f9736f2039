# -*- coding: utf-8 -*-
"""
Filters sub-module - Spatial filters for single-band sample grids.

Provides kernel convolution with renormalized borders, a set of standard
kernels, and a sliding-window median filter.

Key Classes
-----------
- ConvolutionFilter: Odd-sized kernel convolution (``convolve`` helper)
- MedianFilter: Order-statistic filter (``median_filter`` helper)

Usage
-----
Blur with a box kernel, then remove impulses:

    >>> from gridlab.image_processing.filters import (
    ...     ConvolutionFilter, MedianFilter, box_kernel,
    ... )
    >>> smoothed = ConvolutionFilter(box_kernel(5)).apply(grid)
    >>> cleaned = MedianFilter(window_size=3).apply(smoothed)

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

from gridlab.image_processing.filters.convolution import ConvolutionFilter, convolve
from gridlab.image_processing.filters.kernels import (
    box_kernel,
    dirac_kernel,
    laplacian_kernel,
    laplacian_of_gaussian_kernel,
)
from gridlab.image_processing.filters.rank import MedianFilter, median_filter

__all__ = [
    'ConvolutionFilter',
    'convolve',
    'MedianFilter',
    'median_filter',
    'dirac_kernel',
    'box_kernel',
    'laplacian_kernel',
    'laplacian_of_gaussian_kernel',
]

# -*- coding: utf-8 -*-
"""
Filter Validation Helpers - Shared kernel and window size validation.

Every sliding-window operation in this subpackage needs a unique center
sample, so kernel and window extents must be odd along both axes.

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

# gridlab internal
from gridlab.exceptions import InvalidKernelError
from gridlab.grid import SampleGrid, require_single_band


def validate_window_size(window_size: int, name: str = 'window_size') -> None:
    """Validate that a square window size is a positive odd integer.

    Parameters
    ----------
    window_size : int
        The window side length to validate.
    name : str
        Parameter name for error messages. Default ``'window_size'``.

    Raises
    ------
    InvalidKernelError
        If *window_size* is not an integer, is < 1, or is even.
    """
    if isinstance(window_size, bool) or not isinstance(window_size, int):
        raise InvalidKernelError(
            f"{name} must be an integer, got {type(window_size).__name__}"
        )
    if window_size < 1:
        raise InvalidKernelError(f"{name} must be >= 1, got {window_size}")
    if window_size % 2 == 0:
        raise InvalidKernelError(f"{name} must be odd, got {window_size}")


def validate_kernel(kernel: SampleGrid) -> None:
    """Validate a convolution kernel grid.

    Raises
    ------
    InvalidKernelError
        If the kernel's sample or line count is even.
    InvalidDimensionsError
        If the kernel is not single-band.
    """
    require_single_band(kernel, 'kernel')
    if kernel.sample_count % 2 == 0 or kernel.line_count % 2 == 0:
        raise InvalidKernelError(
            f"kernel must have odd dimensions, got "
            f"{kernel.sample_count} x {kernel.line_count}"
        )

# -*- coding: utf-8 -*-
"""
Sample Codec - 8-bit decode into grids and display conversion out of them.

The two presentation seams of the core:

- ``decode_u8`` turns a single-band unsigned 8-bit byte buffer (as read
  from a raw image file by the caller) into a ``SampleGrid``, scaling
  ``0..255`` linearly onto a target range (``[0, 1]`` by default).
- ``to_display_u8`` maps a grid, or an inclusive region of it, through an
  explicit ``[vmin, vmax]`` display range onto ``0..255``, clamping
  anything outside.

Neither function opens files; reading and writing bytes belongs to the
caller.

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
2026-02-14

Modified
--------
2026-02-14
"""

# Standard library
from typing import Optional, Tuple, Union

# Third-party
import numpy as np

# gridlab internal
from gridlab.exceptions import (
    InvalidDimensionsError,
    InvalidParameterError,
    InvalidRangeError,
)
from gridlab.grid import Region, SampleGrid, require_single_band


def decode_u8(
    buffer: Union[bytes, bytearray, memoryview, np.ndarray],
    sample_count: int,
    line_count: int,
    value_range: Tuple[float, float] = (0.0, 1.0),
) -> SampleGrid:
    """Decode row-major unsigned 8-bit samples into a grid.

    Parameters
    ----------
    buffer : bytes-like or np.ndarray
        Exactly ``sample_count * line_count`` bytes, row-major.
    sample_count : int
        Number of columns.
    line_count : int
        Number of rows.
    value_range : Tuple[float, float]
        Target ``(low, high)``; byte ``0`` maps to *low* and ``255`` to
        *high*. Default ``(0.0, 1.0)``.

    Returns
    -------
    SampleGrid

    Raises
    ------
    InvalidDimensionsError
        If the buffer length does not match the requested size.
    InvalidParameterError
        If *buffer* is an array whose dtype is not ``uint8``.

    Examples
    --------
    >>> grid = decode_u8(bytes([0, 255, 51, 102]), 2, 2)
    >>> grid.get(0, 1)
    1.0
    """
    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise InvalidParameterError(
                f"buffer array must be uint8, got {buffer.dtype}"
            )
        raw = buffer.ravel()
    else:
        raw = np.frombuffer(buffer, dtype=np.uint8)
    expected = sample_count * line_count
    if raw.size != expected:
        raise InvalidDimensionsError(
            f"buffer holds {raw.size} bytes, expected {expected} "
            f"({sample_count} x {line_count})"
        )
    low, high = value_range
    grid = SampleGrid.create(sample_count, line_count, zero_init=False)
    data = grid.data
    np.divide(raw.reshape(line_count, sample_count), np.float32(255.0),
              out=data, dtype=np.float32)
    if (low, high) != (0.0, 1.0):
        data *= np.float32(high - low)
        data += np.float32(low)
    return grid


def to_display_u8(
    grid: SampleGrid,
    vmin: float,
    vmax: float,
    region: Optional[Region] = None,
) -> np.ndarray:
    """Linearly map samples in ``[vmin, vmax]`` onto ``0..255``.

    Samples are scaled by ``255 / (vmax - vmin)`` after subtracting
    *vmin*, clamped to ``[0, 255]`` and truncated. NaN and ``-inf``
    samples map to 0, ``+inf`` samples to 255.

    Parameters
    ----------
    grid : SampleGrid
        Single-band input grid.
    vmin : float
        Sample value shown as black.
    vmax : float
        Sample value shown as white.
    region : Region, optional
        Inclusive sub-region to convert. Whole grid when None.

    Returns
    -------
    np.ndarray
        ``uint8`` array, shape ``(lines, samples)`` of the region.

    Raises
    ------
    InvalidRangeError
        If ``vmin >= vmax`` or *region* is invalid.
    """
    require_single_band(grid)
    if not vmin < vmax:
        raise InvalidRangeError(
            f"vmin ({vmin}) must be less than vmax ({vmax})"
        )
    view = grid.region_view(region)
    scaling = np.float32(255.0 / (vmax - vmin))
    scaled = (view - np.float32(vmin)) * scaling
    scaled = np.nan_to_num(scaled, nan=0.0, posinf=255.0, neginf=0.0)
    np.clip(scaled, 0.0, 255.0, out=scaled)
    return scaled.astype(np.uint8)

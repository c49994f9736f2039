# -*- coding: utf-8 -*-
"""
Rank Filters - Sliding-window median filter with shrinking borders.

``MedianFilter`` replaces each sample with the median of the in-bounds
samples under a square odd-sized window. At the grid border the window is
clipped rather than padded, so edge outputs are order statistics of fewer
samples. For an even count the upper of the two middle samples (index
``count // 2`` of the sorted samples) is used. Every output is one of the
input samples, so the filter never leaves the input's ``[min, max]`` range.
A window with no finite sample yields NaN.

Rows are processed in contiguous parallel blocks. Samples whose full
window lies inside the grid go through ``scipy.ndimage.median_filter``;
a full odd window has ``size**2`` samples, so its rank ``count // 2`` is
the true median. The border band of width ``size // 2``, and any block
whose windows touch a NaN sample, use an explicit sort instead: windows
are gathered with ``numpy.lib.stride_tricks.sliding_window_view`` over a
NaN-padded copy of the source and sorted with ``numpy.sort`` (which
orders NaN last, so the padding never reaches the median index). The sort
runs in chunks bounded by ``_SORT_BUDGET_BYTES``, so scratch memory does
not grow with the window area times the grid size. NaN samples in the
input are excluded the same way as out-of-bounds ones.

Dependencies
------------
numpy
scipy

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

# Standard library
from typing import Annotated, Any, Optional, Tuple

# Third-party
import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from scipy.ndimage import median_filter as _ndimage_median

# gridlab internal
from gridlab.grid import SampleGrid, require_single_band
from gridlab.image_processing.base import GridTransform
from gridlab.image_processing.filters._validation import validate_window_size
from gridlab.image_processing.params import Desc, Range
from gridlab.image_processing.versioning import processor_tags, processor_version
from gridlab.parallel import map_row_blocks
from gridlab.vocabulary import ProcessorCategory

# Upper bound on the scratch memory of one sorted-window chunk.
_SORT_BUDGET_BYTES = 16 * 1024 * 1024


def _sorted_median(
    src: np.ndarray,
    rows: Tuple[int, int],
    cols: Tuple[int, int],
    size: int,
    out: np.ndarray,
) -> None:
    """Median of the in-bounds, non-NaN samples by explicit sorting.

    Fills ``out[rows, cols]`` (half-open ranges). Windows are gathered from
    a NaN-padded copy of the source in chunks whose gathered and sorted
    copies stay within ``_SORT_BUDGET_BYTES``.
    """
    y0, y1 = rows
    x0, x1 = cols
    if y1 <= y0 or x1 <= x0:
        return
    half = size // 2
    lines, samples = src.shape
    area = size * size
    # gathered copy + sorted copy + NaN mask
    per_output = area * src.itemsize * 3
    max_outputs = max(1, _SORT_BUDGET_BYTES // per_output)
    width = min(x1 - x0, max_outputs)
    height = max(1, max_outputs // width)

    for cy in range(y0, y1, height):
        cy1 = min(cy + height, y1)
        for cx in range(x0, x1, width):
            cx1 = min(cx + width, x1)
            top, left = cy - half, cx - half
            padded = np.full(
                (cy1 - cy + 2 * half, cx1 - cx + 2 * half), np.nan,
                dtype=src.dtype,
            )
            sy0, sy1 = max(top, 0), min(cy1 + half, lines)
            sx0, sx1 = max(left, 0), min(cx1 + half, samples)
            padded[sy0 - top:sy1 - top, sx0 - left:sx1 - left] = \
                src[sy0:sy1, sx0:sx1]
            windows = sliding_window_view(padded, (size, size))
            ordered = np.sort(
                windows.reshape(cy1 - cy, cx1 - cx, area), axis=-1,
            )
            counts = np.count_nonzero(~np.isnan(ordered), axis=-1)
            picks = np.take_along_axis(
                ordered, (counts // 2)[..., np.newaxis], axis=-1,
            )
            out[cy:cy1, cx:cx1] = picks[..., 0]


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS,
                description='Sliding-window median')
class MedianFilter(GridTransform):
    """Spatial median filter for impulsive noise removal.

    Excellent for removing salt-and-pepper noise while preserving edges.
    Non-linear: each participating sample counts equally, and the output
    is an order statistic rather than a weighted sum.

    Parameters
    ----------
    window_size : int
        Square window side length in samples. Must be odd and >= 1;
        ``1`` is the identity. Default is 3.

    Raises
    ------
    InvalidKernelError
        If *window_size* is even or < 1.

    Examples
    --------
    >>> from gridlab.image_processing.filters import MedianFilter
    >>> f = MedianFilter(window_size=5)
    >>> denoised = f.apply(noisy_grid)
    """

    window_size: Annotated[int, Range(min=1, max=99),
                           Desc('Square window side length (odd)')] = 3

    def __init__(self, window_size: int = 3) -> None:
        validate_window_size(window_size)
        self.window_size = window_size

    def apply(self, source: SampleGrid, **kwargs: Any) -> SampleGrid:
        """Median-filter *source*.

        Parameters
        ----------
        source : SampleGrid
            Single-band input grid. Not modified.
        **kwargs
            ``window_size`` override, ``workers`` (thread count).

        Returns
        -------
        SampleGrid
            New grid of the same size as *source*.
        """
        validate_window_size(kwargs.get('window_size', self.window_size))
        size = self._resolve_params(kwargs)['window_size']
        require_single_band(source, 'source')
        workers: Optional[int] = kwargs.get('workers')

        if size == 1:
            return source.copy()

        half = size // 2
        lines, samples = source.shape
        src = source.data
        target = SampleGrid.create(samples, lines, zero_init=False)
        out = target.data

        def filter_block(start: int, stop: int) -> None:
            # rows whose full window lies inside the grid
            first = max(start, half)
            last = min(stop, lines - half)
            if first >= last or samples <= 2 * half:
                _sorted_median(src, (start, stop), (0, samples), size, out)
                return
            slab = src[first - half:last + half]
            if np.isnan(slab).any():
                _sorted_median(src, (start, stop), (0, samples), size, out)
                return
            filtered = _ndimage_median(slab, size=size, mode='nearest')
            out[first:last, half:samples - half] = \
                filtered[half:half + last - first, half:samples - half]
            _sorted_median(src, (first, last), (0, half), size, out)
            _sorted_median(src, (first, last), (samples - half, samples),
                           size, out)
            _sorted_median(src, (start, first), (0, samples), size, out)
            _sorted_median(src, (last, stop), (0, samples), size, out)

        map_row_blocks(filter_block, lines, workers)
        self._report_progress(kwargs, 1.0)
        return target


def median_filter(
    grid: SampleGrid,
    window_size: int = 3,
    workers: Optional[int] = None,
) -> SampleGrid:
    """Median-filter *grid*; see :class:`MedianFilter`."""
    return MedianFilter(window_size=window_size).apply(grid, workers=workers)

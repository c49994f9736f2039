# -*- coding: utf-8 -*-
"""
Histogram - Normalized class histogram of a grid with per-row partials.

Each row's histogram is computed independently (row-parallel) into a
``(lines, class_count)`` buffer, then the rows are added in ascending row
order and the composite is scaled so the bins sum to one.

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
2026-02-13
"""

# Standard library
import logging
from typing import Optional

# Third-party
import numpy as np

# gridlab internal
from gridlab.exceptions import InvalidParameterError, InvalidRangeError
from gridlab.grid import Region, SampleGrid, require_single_band
from gridlab.parallel import map_row_blocks

logger = logging.getLogger(__name__)


def compute_histogram(
    grid: SampleGrid,
    low: float,
    high: float,
    class_count: int,
    region: Optional[Region] = None,
    workers: Optional[int] = None,
) -> np.ndarray:
    """Build a normalized histogram of *grid* over ``[low, high]``.

    Parameters
    ----------
    grid : SampleGrid
        Single-band input grid.
    low : float
        Lower edge of the first class (inclusive).
    high : float
        Upper edge of the last class (inclusive).
    class_count : int
        Number of equally wide classes. Must be >= 1.
    region : Region, optional
        Inclusive sub-region. Whole grid when None.
    workers : int, optional
        Worker threads. ``None`` selects ``os.cpu_count()``.

    Returns
    -------
    np.ndarray
        Shape ``(class_count,)``, float64 fractions summing to 1. All
        zeros when no sample falls inside ``[low, high]``.

    Raises
    ------
    InvalidRangeError
        If ``high <= low`` or *region* is invalid.
    InvalidParameterError
        If *class_count* is not a positive integer.

    Examples
    --------
    >>> import numpy as np
    >>> from gridlab.grid import SampleGrid
    >>> grid = SampleGrid.from_array(np.array([[0.0, 0.2], [0.6, 1.0]]))
    >>> compute_histogram(grid, 0.0, 1.0, 2)
    array([0.5, 0.5])
    """
    require_single_band(grid)
    if not high > low:
        raise InvalidRangeError(
            f"high ({high}) must be greater than low ({low})"
        )
    if isinstance(class_count, bool) or not isinstance(class_count, int):
        raise InvalidParameterError(
            f"class_count must be an integer, got {type(class_count).__name__}"
        )
    if class_count < 1:
        raise InvalidParameterError(
            f"class_count must be >= 1, got {class_count}"
        )

    view = grid.region_view(region)
    lines = view.shape[0]
    inv_width = 1.0 / (high - low)
    line_histograms = np.zeros((lines, class_count), dtype=np.int64)

    def gather(start: int, stop: int) -> None:
        for y in range(start, stop):
            scaled = (view[y].astype(np.float64) - low) * inv_width
            scaled = scaled[(scaled >= 0.0) & (scaled <= 1.0)]
            # a sample equal to `high` belongs to the last class
            classes = np.minimum(
                (scaled * class_count).astype(np.int64), class_count - 1,
            )
            line_histograms[y] = np.bincount(classes, minlength=class_count)

    map_row_blocks(gather, lines, workers)

    histogram = np.cumsum(line_histograms, axis=0)[-1].astype(np.float64)
    count = histogram.sum()
    if count == 0:
        logger.warning(
            "No samples inside [%g, %g]; returning an empty histogram",
            low, high,
        )
        return histogram
    return histogram / count

# -*- coding: utf-8 -*-
"""
Statistics Engine - Min, max, mean and sample standard deviation of a grid.

Computes descriptive statistics over a whole grid or an inclusive
rectangular ``Region`` with one of three strategies:

- ``NAIVE``: sequential two-pass. The first pass keeps a running min/max
  and adds each row sum scaled by ``1/samples``; the total is scaled by
  ``1/lines`` to form the mean. The second pass adds each row's squared
  deviations scaled by ``1/(n-1)``. Scaling per row keeps the accumulator
  near the magnitude of the final value.
- ``DIVIDE_CONQUER``: per-row sums, mins and maxes are computed
  independently (row-parallel) into buffers sized ``lines``, then reduced
  in ascending row order. A second row-parallel pass produces per-row
  squared deviations once the mean is known.
- ``FORWARD``: single row-parallel pass over sum and sum of squares, then
  ``mean = S/n`` and ``variance = (Q - mean*S)/(n-1)``. Cheapest in memory
  traffic but prone to cancellation when sample magnitudes are large
  relative to their spread; prefer the two-pass strategies when precision
  matters more than throughput.

All strategies use the sample standard deviation (``n - 1``) and agree on
min/max exactly and on mean/std up to summation-order rounding. Row sums
are accumulated in float64.

Dependencies
------------
numpy

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
2026-02-12

Modified
--------
2026-03-02
"""

# Standard library
import logging
import math
from typing import Optional, Union

# Third-party
import numpy as np

# gridlab internal
from gridlab.exceptions import InvalidParameterError, InvalidRangeError
from gridlab.grid import Region, SampleGrid, require_single_band
from gridlab.parallel import map_row_blocks, resolve_workers
from gridlab.statistics.models import StatisticsResult
from gridlab.vocabulary import StatisticsStrategy

logger = logging.getLogger(__name__)


def _coerce_strategy(
    strategy: Union[StatisticsStrategy, str],
) -> StatisticsStrategy:
    if isinstance(strategy, StatisticsStrategy):
        return strategy
    try:
        return StatisticsStrategy(strategy)
    except ValueError:
        choices = tuple(s.value for s in StatisticsStrategy)
        raise InvalidParameterError(
            f"strategy must be one of {choices}, got {strategy!r}"
        ) from None


def _ordered_sum(values: np.ndarray) -> float:
    # cumsum accumulates strictly left to right, i.e. in row order.
    return float(np.cumsum(values, dtype=np.float64)[-1])


def _statistics_view(
    grid: SampleGrid,
    region: Optional[Region],
) -> np.ndarray:
    require_single_band(grid)
    view = grid.region_view(region)
    if view.shape[1] < 2:
        raise InvalidRangeError(
            f"variance needs >= 2 samples per line, got {view.shape[1]}"
        )
    return view


class StatisticsEngine:
    """Descriptive statistics over a grid with a selectable strategy.

    Parameters
    ----------
    strategy : StatisticsStrategy or str
        ``'naive'``, ``'divide_conquer'`` or ``'forward'``.
        Default ``'naive'``.
    workers : int, optional
        Worker threads for the row-parallel strategies. ``None`` selects
        ``os.cpu_count()``. Ignored by ``'naive'``.

    Raises
    ------
    InvalidParameterError
        If *strategy* or *workers* is invalid.

    Examples
    --------
    >>> import numpy as np
    >>> from gridlab.grid import SampleGrid
    >>> from gridlab.statistics import StatisticsEngine
    >>> grid = SampleGrid.from_array(np.arange(16).reshape(4, 4))
    >>> StatisticsEngine('forward').compute(grid).mean
    7.5
    """

    def __init__(
        self,
        strategy: Union[StatisticsStrategy, str] = StatisticsStrategy.NAIVE,
        workers: Optional[int] = None,
    ) -> None:
        self._strategy = _coerce_strategy(strategy)
        if workers is not None:
            resolve_workers(workers)
        self._workers = workers

    @property
    def strategy(self) -> StatisticsStrategy:
        """Selected strategy."""
        return self._strategy

    def compute(
        self,
        grid: SampleGrid,
        region: Optional[Region] = None,
        workers: Optional[int] = None,
    ) -> StatisticsResult:
        """Compute statistics of *grid* (or *region* of it).

        Parameters
        ----------
        grid : SampleGrid
            Single-band input grid.
        region : Region, optional
            Inclusive sub-region. Whole grid when None.
        workers : int, optional
            Per-call override of the worker count.

        Returns
        -------
        StatisticsResult

        Raises
        ------
        InvalidRangeError
            If *region* is invalid or spans fewer than 2 samples per line.
        InvalidDimensionsError
            If *grid* is not single-band.
        """
        view = _statistics_view(grid, region)
        n_workers = workers if workers is not None else self._workers
        logger.debug(
            "Computing %s statistics over %d x %d samples",
            self._strategy.value, view.shape[1], view.shape[0],
        )
        if self._strategy is StatisticsStrategy.NAIVE:
            return _naive(view)
        if self._strategy is StatisticsStrategy.DIVIDE_CONQUER:
            return _divide_conquer(view, n_workers)
        return _forward(view, n_workers)


def compute_statistics(
    grid: SampleGrid,
    strategy: Union[StatisticsStrategy, str] = StatisticsStrategy.NAIVE,
    region: Optional[Region] = None,
    workers: Optional[int] = None,
) -> StatisticsResult:
    """Convenience wrapper around :class:`StatisticsEngine`.

    Parameters
    ----------
    grid : SampleGrid
        Single-band input grid.
    strategy : StatisticsStrategy or str
        Strategy to use. Default ``'naive'``.
    region : Region, optional
        Inclusive sub-region. Whole grid when None.
    workers : int, optional
        Worker threads for the row-parallel strategies.

    Returns
    -------
    StatisticsResult
    """
    return StatisticsEngine(strategy, workers=workers).compute(grid, region)


# ---------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------

def _naive(view: np.ndarray) -> StatisticsResult:
    lines, samples = view.shape
    inv_lines = 1.0 / lines
    inv_samples = 1.0 / samples
    inv_count_a = 1.0 / (lines * samples - 1)

    # first pass: min, max and mean
    min_value = math.inf
    max_value = -math.inf
    mean = 0.0
    for y in range(lines):
        line = view[y]
        line_min = float(line.min())
        line_max = float(line.max())
        if line_min < min_value:
            min_value = line_min
        if line_max > max_value:
            max_value = line_max
        mean += float(np.sum(line, dtype=np.float64)) * inv_samples
    mean *= inv_lines

    # second pass: sample variance
    variance = 0.0
    for y in range(lines):
        diff = view[y].astype(np.float64) - mean
        variance += float(np.dot(diff, diff)) * inv_count_a

    return StatisticsResult.from_values(
        min_value, max_value, mean, math.sqrt(variance),
    )


def _divide_conquer(view: np.ndarray, workers: Optional[int]) -> StatisticsResult:
    lines, samples = view.shape
    count = lines * samples

    line_sums = np.empty(lines, dtype=np.float64)
    line_mins = np.empty(lines, dtype=np.float64)
    line_maxs = np.empty(lines, dtype=np.float64)

    def gather(start: int, stop: int) -> None:
        block = view[start:stop]
        line_sums[start:stop] = block.sum(axis=1, dtype=np.float64)
        line_mins[start:stop] = block.min(axis=1)
        line_maxs[start:stop] = block.max(axis=1)

    map_row_blocks(gather, lines, workers)

    min_value = float(line_mins.min())
    max_value = float(line_maxs.max())
    mean = _ordered_sum(line_sums) / count

    # the sum buffer is reused for the per-row squared deviations
    line_squares = line_sums

    def deviations(start: int, stop: int) -> None:
        diff = view[start:stop].astype(np.float64) - mean
        line_squares[start:stop] = np.einsum('ij,ij->i', diff, diff)

    map_row_blocks(deviations, lines, workers)

    variance = _ordered_sum(line_squares) / (count - 1)
    return StatisticsResult.from_values(
        min_value, max_value, mean, math.sqrt(variance),
    )


def _forward_variance(total: float, square_total: float, count: int) -> float:
    """Sample variance from a sum and a sum of squares.

    ``(sum(x**2) - mean * sum(x)) / (count - 1)``, clamped at zero: for
    nearly constant data of large magnitude the two terms cancel and
    rounding can leave a tiny negative value.
    """
    mean = total / count
    variance = (square_total - mean * total) / (count - 1)
    return max(variance, 0.0)


def _forward(view: np.ndarray, workers: Optional[int]) -> StatisticsResult:
    lines, samples = view.shape
    count = lines * samples

    line_sums = np.empty(lines, dtype=np.float64)
    line_squares = np.empty(lines, dtype=np.float64)
    line_mins = np.empty(lines, dtype=np.float64)
    line_maxs = np.empty(lines, dtype=np.float64)

    def gather(start: int, stop: int) -> None:
        block = view[start:stop].astype(np.float64)
        line_sums[start:stop] = block.sum(axis=1)
        line_squares[start:stop] = np.einsum('ij,ij->i', block, block)
        line_mins[start:stop] = block.min(axis=1)
        line_maxs[start:stop] = block.max(axis=1)

    map_row_blocks(gather, lines, workers)

    total = _ordered_sum(line_sums)
    square_total = _ordered_sum(line_squares)
    mean = total / count
    variance = _forward_variance(total, square_total, count)

    return StatisticsResult.from_values(
        float(line_mins.min()), float(line_maxs.max()),
        mean, math.sqrt(variance),
    )

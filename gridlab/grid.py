# -*- coding: utf-8 -*-
"""
Sample Grid - Owned 2D container of 32-bit floating-point samples.

``SampleGrid`` is the substrate every other gridlab component operates on.
Samples live in a single flat, row-major ``float32`` buffer of
``sample_count * line_count`` elements (``index = row * sample_count + col``)
that the grid owns exclusively. Row access and the 2D ``data`` property are
views into that buffer, valid for as long as the grid is alive; the grid is
never resized after creation.

``Region`` describes an inclusive rectangular sub-region of a grid, the
way the statistics engine and the display conversion address sub-areas.

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
2026-02-11

Modified
--------
2026-03-02
"""

# Standard library
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

# Third-party
import numpy as np

# gridlab internal
from gridlab.exceptions import (
    AllocationError,
    InvalidDimensionsError,
    InvalidRangeError,
)

logger = logging.getLogger(__name__)

SAMPLE_DTYPE = np.float32


@dataclass(frozen=True)
class Region:
    """Inclusive rectangular sub-region of a grid.

    Parameters
    ----------
    sample_first : int
        First column (inclusive).
    sample_last : int
        Last column (inclusive).
    line_first : int
        First row (inclusive).
    line_last : int
        Last row (inclusive).
    """

    sample_first: int
    sample_last: int
    line_first: int
    line_last: int

    @property
    def sample_count(self) -> int:
        """Number of columns covered by the region."""
        return self.sample_last - self.sample_first + 1

    @property
    def line_count(self) -> int:
        """Number of rows covered by the region."""
        return self.line_last - self.line_first + 1

    def validate(self, sample_count: int, line_count: int) -> None:
        """Check the region against a grid of the given size.

        Raises
        ------
        InvalidRangeError
            If ``last < first`` on either axis, or any bound falls
            outside ``[0, sample_count) x [0, line_count)``.
        """
        if self.sample_last < self.sample_first:
            raise InvalidRangeError(
                f"sample_last ({self.sample_last}) must be >= "
                f"sample_first ({self.sample_first})"
            )
        if self.line_last < self.line_first:
            raise InvalidRangeError(
                f"line_last ({self.line_last}) must be >= "
                f"line_first ({self.line_first})"
            )
        if self.sample_first < 0 or self.sample_last >= sample_count:
            raise InvalidRangeError(
                f"samples [{self.sample_first}, {self.sample_last}] "
                f"outside grid of {sample_count} samples"
            )
        if self.line_first < 0 or self.line_last >= line_count:
            raise InvalidRangeError(
                f"lines [{self.line_first}, {self.line_last}] "
                f"outside grid of {line_count} lines"
            )

    def slices(self) -> Tuple[slice, slice]:
        """Return ``(row_slice, col_slice)`` for indexing a 2D array."""
        return (
            slice(self.line_first, self.line_last + 1),
            slice(self.sample_first, self.sample_last + 1),
        )


class SampleGrid:
    """Owned 2D grid of ``float32`` samples.

    Use :meth:`create` for an empty grid and :meth:`from_array` to copy
    samples produced by an external loader. The grid owns a single flat
    row-major buffer; :meth:`row` and :attr:`data` hand out borrowed views
    into it.

    Parameters
    ----------
    sample_count : int
        Number of columns (width). Must be > 0.
    line_count : int
        Number of rows (height). Must be > 0.
    band_count : int
        Number of bands. Every gridlab operation requires 1.
    buffer : np.ndarray
        Flat ``float32`` buffer of ``sample_count * line_count`` samples.
        The grid stores a private copy, so later writes through the
        caller's array never reach the grid.

    Examples
    --------
    >>> from gridlab.grid import SampleGrid
    >>> grid = SampleGrid.create(4, 3)
    >>> grid.set(1, 2, 5.0)
    >>> grid.get(1, 2)
    5.0
    >>> grid.row(1)
    array([0., 0., 5., 0.], dtype=float32)
    """

    __slots__ = ('_sample_count', '_line_count', '_band_count', '_buffer')

    def __init__(
        self,
        sample_count: int,
        line_count: int,
        band_count: int,
        buffer: np.ndarray,
    ) -> None:
        _validate_size(sample_count, line_count, band_count)
        if buffer.ndim != 1 or buffer.size != sample_count * line_count:
            raise InvalidDimensionsError(
                f"buffer must be flat with {sample_count * line_count} "
                f"samples, got shape {buffer.shape}"
            )
        if buffer.dtype != SAMPLE_DTYPE:
            raise InvalidDimensionsError(
                f"buffer must be float32, got {buffer.dtype}"
            )
        self._sample_count = sample_count
        self._line_count = line_count
        self._band_count = band_count
        self._buffer = buffer.copy()

    @classmethod
    def _adopt(
        cls,
        sample_count: int,
        line_count: int,
        band_count: int,
        buffer: np.ndarray,
    ) -> 'SampleGrid':
        # buffer is freshly allocated and referenced nowhere else
        grid = cls.__new__(cls)
        grid._sample_count = sample_count
        grid._line_count = line_count
        grid._band_count = band_count
        grid._buffer = buffer
        return grid

    # -----------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------
    @classmethod
    def create(
        cls,
        sample_count: int,
        line_count: int,
        band_count: int = 1,
        zero_init: bool = True,
    ) -> 'SampleGrid':
        """Allocate a new grid.

        Parameters
        ----------
        sample_count : int
            Number of columns. Must be > 0.
        line_count : int
            Number of rows. Must be > 0.
        band_count : int
            Number of bands. Default 1.
        zero_init : bool
            If True, samples are initialized to zero; otherwise the
            buffer content is unspecified. Default True.

        Returns
        -------
        SampleGrid

        Raises
        ------
        InvalidDimensionsError
            If any size is not a positive integer.
        AllocationError
            If the sample buffer cannot be allocated.
        """
        _validate_size(sample_count, line_count, band_count)
        buffer = _allocate(sample_count * line_count, zero_init)
        return cls._adopt(sample_count, line_count, band_count, buffer)

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'SampleGrid':
        """Build a grid owning a ``float32`` copy of a 2D array.

        Parameters
        ----------
        array : np.ndarray
            2D array, shape ``(lines, samples)``.

        Returns
        -------
        SampleGrid

        Raises
        ------
        InvalidDimensionsError
            If *array* is not 2D or has an empty axis.
        """
        array = np.asarray(array)
        if array.ndim != 2:
            raise InvalidDimensionsError(
                f"array must be 2D (lines, samples), got {array.ndim}D"
            )
        line_count, sample_count = array.shape
        _validate_size(sample_count, line_count, 1)
        buffer = _allocate(array.size, zero_init=False)
        buffer.reshape(line_count, sample_count)[...] = array
        return cls._adopt(sample_count, line_count, 1, buffer)

    # -----------------------------------------------------------------
    # Geometry
    # -----------------------------------------------------------------
    @property
    def sample_count(self) -> int:
        """Number of columns (width)."""
        return self._sample_count

    @property
    def line_count(self) -> int:
        """Number of rows (height)."""
        return self._line_count

    @property
    def band_count(self) -> int:
        """Number of bands."""
        return self._band_count

    @property
    def size(self) -> int:
        """Total number of samples."""
        return self._sample_count * self._line_count

    @property
    def shape(self) -> Tuple[int, int]:
        """Numpy-style shape ``(line_count, sample_count)``."""
        return (self._line_count, self._sample_count)

    @property
    def data(self) -> np.ndarray:
        """Writable 2D row-major view of the sample buffer.

        The view aliases the grid's storage and must not outlive it.
        """
        return self._buffer.reshape(self._line_count, self._sample_count)

    def full_region(self) -> Region:
        """Region covering the whole grid."""
        return Region(0, self._sample_count - 1, 0, self._line_count - 1)

    # -----------------------------------------------------------------
    # Sample access
    # -----------------------------------------------------------------
    def get(self, row: int, col: int) -> float:
        """Return the sample at ``(row, col)``.

        Raises
        ------
        InvalidRangeError
            If the index lies outside the grid.
        """
        return float(self._buffer[self._index(row, col)])

    def set(self, row: int, col: int, value: float) -> None:
        """Store *value* at ``(row, col)``.

        Raises
        ------
        InvalidRangeError
            If the index lies outside the grid.
        """
        self._buffer[self._index(row, col)] = value

    def row(self, index: int) -> np.ndarray:
        """Borrowed, writable 1D view of one row.

        Raises
        ------
        InvalidRangeError
            If *index* is outside ``[0, line_count)``.
        """
        if not 0 <= index < self._line_count:
            raise InvalidRangeError(
                f"row {index} outside [0, {self._line_count})"
            )
        start = index * self._sample_count
        return self._buffer[start:start + self._sample_count]

    def _index(self, row: int, col: int) -> int:
        if not 0 <= row < self._line_count:
            raise InvalidRangeError(
                f"row {row} outside [0, {self._line_count})"
            )
        if not 0 <= col < self._sample_count:
            raise InvalidRangeError(
                f"col {col} outside [0, {self._sample_count})"
            )
        return row * self._sample_count + col

    # -----------------------------------------------------------------
    # Whole-grid operations
    # -----------------------------------------------------------------
    def flip_vertically(self) -> None:
        """Swap row ``i`` with row ``line_count - 1 - i`` in place.

        The middle row of an odd-height grid stays where it is.
        """
        data = self.data
        data[...] = data[::-1].copy()

    def copy(self) -> 'SampleGrid':
        """Return an independent grid with the same samples."""
        return SampleGrid._adopt(
            self._sample_count, self._line_count, self._band_count,
            self._buffer.copy(),
        )

    def extract(self, region: Region) -> 'SampleGrid':
        """Copy an inclusive sub-region into a new grid.

        Raises
        ------
        InvalidRangeError
            If *region* is invalid for this grid.
        """
        region.validate(self._sample_count, self._line_count)
        rows, cols = region.slices()
        return SampleGrid.from_array(self.data[rows, cols])

    def region_view(self, region: Optional[Region] = None) -> np.ndarray:
        """Borrowed 2D view of *region* (whole grid when None).

        Raises
        ------
        InvalidRangeError
            If *region* is invalid for this grid.
        """
        if region is None:
            return self.data
        region.validate(self._sample_count, self._line_count)
        rows, cols = region.slices()
        return self.data[rows, cols]

    def __repr__(self) -> str:
        return (
            f"SampleGrid(sample_count={self._sample_count}, "
            f"line_count={self._line_count}, "
            f"band_count={self._band_count})"
        )


def require_single_band(grid: SampleGrid, name: str = 'grid') -> None:
    """Raise ``InvalidDimensionsError`` unless *grid* has one band."""
    if grid.band_count != 1:
        raise InvalidDimensionsError(
            f"{name} must be single-band, got {grid.band_count} bands"
        )


def _validate_size(sample_count: int, line_count: int, band_count: int) -> None:
    for name, value in (('sample_count', sample_count),
                        ('line_count', line_count),
                        ('band_count', band_count)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidDimensionsError(
                f"{name} must be an integer, got {type(value).__name__}"
            )
        if value <= 0:
            raise InvalidDimensionsError(
                f"{name} must be > 0, got {value}"
            )


def _allocate(count: int, zero_init: bool) -> np.ndarray:
    try:
        if zero_init:
            return np.zeros(count, dtype=SAMPLE_DTYPE)
        return np.empty(count, dtype=SAMPLE_DTYPE)
    except (MemoryError, OverflowError, ValueError) as exc:
        logger.debug("Failed to allocate %d samples: %s", count, exc)
        raise AllocationError(
            f"not enough memory to create a grid of {count} samples"
        ) from exc

# -*- coding: utf-8 -*-
"""
Resample - Integer decimation of sample grids.

``Decimate`` keeps every ``step``-th sample of every ``step``-th line,
starting at the origin, and drops the rest. No anti-alias filtering is
applied; run a ``ConvolutionFilter`` with a box kernel first when that
matters.

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
2026-02-24

Modified
--------
2026-02-24
"""

# Standard library
from typing import Annotated, Any

# gridlab internal
from gridlab.grid import SampleGrid, require_single_band
from gridlab.image_processing.base import GridTransform
from gridlab.image_processing.params import Desc, Range
from gridlab.image_processing.versioning import processor_tags, processor_version
from gridlab.vocabulary import ProcessorCategory


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.RESAMPLE,
                description='Keep every step-th sample and line')
class Decimate(GridTransform):
    """Linear scale-down by an integer step.

    Parameters
    ----------
    step : int
        Keep one sample and one line out of every *step*. ``1`` copies
        the grid. Must be >= 1.

    Raises
    ------
    InvalidParameterError
        If *step* < 1.

    Examples
    --------
    >>> half = Decimate(2).apply(grid)
    >>> half.shape == ((grid.line_count + 1) // 2, (grid.sample_count + 1) // 2)
    True
    """

    step: Annotated[int, Range(min=1), Desc('Decimation step')] = 2

    def __init__(self, step: int = 2) -> None:
        self.step = step
        self._resolve_params({})

    def apply(self, source: SampleGrid, **kwargs: Any) -> SampleGrid:
        """Return a new, decimated copy of *source*."""
        step = self._resolve_params(kwargs)['step']
        require_single_band(source, 'source')
        result = SampleGrid.from_array(source.data[::step, ::step])
        self._report_progress(kwargs, 1.0)
        return result

# -*- coding: utf-8 -*-
"""
Convolution Filter - Arbitrary odd-sized kernels with renormalized borders.

Convolves a grid with a kernel grid, producing an output of the same size.
Each output sample is::

    out[y, x] = sum(K[my, mx] * G[y + my - kh//2, x + mx - kw//2]) / w_eff

where the sum runs over the part of the kernel footprint that lies inside
the grid and ``w_eff`` is the sum of the kernel weights actually used.
Border and corner samples therefore see a smaller effective kernel instead
of zero-padding, which avoids darkening the image edges. The kernel is
applied in correlation orientation (not flipped), as written above.

A kernel whose used weights cancel (a Laplacian everywhere, or an edge
detector clipped by the border) gives ``w_eff == 0`` and a non-finite
output; the configured ``DegeneracyPolicy`` decides what happens to those
samples. ``normalize=False`` skips the division and returns the plain
weighted sum with out-of-grid samples treated as absent, which is the
useful mode for zero-sum high-pass kernels.

Rows are processed in contiguous blocks in parallel; each block reads a
halo of ``kh//2`` extra rows from the source so that block seams do not
change the result. Sums are evaluated by ``scipy.ndimage.correlate`` in
float64 with ``mode='constant'``.

Dependencies
------------
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
2026-02-16

Modified
--------
2026-03-02
"""

# Standard library
import logging
from typing import Annotated, Any, Optional, Union

# Third-party
import numpy as np
from scipy.ndimage import correlate

# gridlab internal
from gridlab.grid import SampleGrid, require_single_band
from gridlab.image_processing.base import GridTransform
from gridlab.image_processing.degeneracy import (
    POLICY_NAMES,
    enforce_policy,
    policy_name,
)
from gridlab.image_processing.filters._validation import validate_kernel
from gridlab.image_processing.params import Desc, Options
from gridlab.image_processing.versioning import processor_tags, processor_version
from gridlab.parallel import map_row_blocks
from gridlab.vocabulary import DegeneracyPolicy, ProcessorCategory

logger = logging.getLogger(__name__)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS,
                description='Kernel convolution with renormalized borders')
class ConvolutionFilter(GridTransform):
    """Convolve a grid with an odd-sized kernel grid.

    Parameters
    ----------
    kernel : SampleGrid
        Single-band kernel with odd sample and line counts.
    normalize : bool
        Divide by the effective kernel weight sum. Default True.
    degeneracy : str or DegeneracyPolicy
        Handling of non-finite outputs from a zero effective weight:
        ``'propagate'`` (default), ``'clamp'`` or ``'raise'``.

    Raises
    ------
    InvalidKernelError
        If the kernel has an even dimension.
    InvalidDimensionsError
        If the kernel is not single-band.

    Examples
    --------
    >>> from gridlab.image_processing.filters import ConvolutionFilter, box_kernel
    >>> blur = ConvolutionFilter(box_kernel(9))
    >>> smoothed = blur.apply(grid, workers=4)
    """

    normalize: Annotated[bool, Desc('Divide by effective kernel weight')] = True
    degeneracy: Annotated[str, Options(*POLICY_NAMES),
                          Desc('Non-finite output handling')] = 'propagate'

    def __init__(
        self,
        kernel: SampleGrid,
        normalize: bool = True,
        degeneracy: Union[DegeneracyPolicy, str] = DegeneracyPolicy.PROPAGATE,
    ) -> None:
        validate_kernel(kernel)
        self.kernel = kernel
        self.normalize = normalize
        self.degeneracy = policy_name(degeneracy)

    def apply(self, source: SampleGrid, **kwargs: Any) -> SampleGrid:
        """Convolve *source* with the kernel.

        Parameters
        ----------
        source : SampleGrid
            Single-band input grid. Not modified.
        **kwargs
            ``normalize`` / ``degeneracy`` overrides, ``workers`` (thread
            count, default ``os.cpu_count()``).

        Returns
        -------
        SampleGrid
            New grid of the same size as *source*.

        Raises
        ------
        InvalidDimensionsError
            If *source* is not single-band.
        NumericalDegeneracyError
            Under the ``'raise'`` policy when an output is non-finite.
        """
        if 'degeneracy' in kwargs:
            kwargs['degeneracy'] = policy_name(kwargs['degeneracy'])
        params = self._resolve_params(kwargs)
        require_single_band(source, 'source')
        workers: Optional[int] = kwargs.get('workers')

        weights = self.kernel.data.astype(np.float64)
        half_lines = self.kernel.line_count // 2
        lines = source.line_count
        src = source.data
        normalize = params['normalize']

        target = SampleGrid.create(source.sample_count, lines, zero_init=False)
        out = target.data

        def convolve_block(start: int, stop: int) -> None:
            lo = max(start - half_lines, 0)
            hi = min(stop + half_lines, lines)
            slab = src[lo:hi].astype(np.float64)
            summed = correlate(slab, weights, mode='constant', cval=0.0)
            if normalize:
                effective = correlate(
                    np.ones_like(slab), weights, mode='constant', cval=0.0,
                )
                with np.errstate(divide='ignore', invalid='ignore'):
                    summed /= effective
            out[start:stop] = summed[start - lo:stop - lo]

        logger.debug(
            "Convolving %d x %d grid with %d x %d kernel",
            source.sample_count, lines,
            self.kernel.sample_count, self.kernel.line_count,
        )
        map_row_blocks(convolve_block, lines, workers)
        if normalize:
            enforce_policy(out, params['degeneracy'], 'convolution')
        self._report_progress(kwargs, 1.0)
        return target


def convolve(
    grid: SampleGrid,
    kernel: SampleGrid,
    normalize: bool = True,
    degeneracy: Union[DegeneracyPolicy, str] = DegeneracyPolicy.PROPAGATE,
    workers: Optional[int] = None,
) -> SampleGrid:
    """Convolve *grid* with *kernel*; see :class:`ConvolutionFilter`."""
    return ConvolutionFilter(
        kernel, normalize=normalize, degeneracy=degeneracy,
    ).apply(grid, workers=workers)

# -*- coding: utf-8 -*-
"""
Template Matching - Locate a small mask inside a reference grid.

``TemplateMatcher`` slides a ``w x h`` mask over every top-left placement
of a ``W x H`` reference and scores each placement, producing a score grid
of ``(W - w + 1) x (H - h + 1)`` samples. Two metrics are available:

- ``'correlation'``: normalized cross-correlation. The mask mean is
  computed once; for every placement the local reference mean is removed
  and the centred cross product is divided by the root of the product of
  both centred energies. Higher is better. Scores are not clamped.
- ``'absolute_difference'``: sum of absolute sample differences. Lower
  is better; an exact sub-window scores 0.

A flat reference window (or a flat mask) has zero energy and gives a
non-finite correlation score. Those scores are handled by the configured
``DegeneracyPolicy`` and are never selected as the best match.

Output rows are computed in parallel blocks. Each block reads the
reference rows it needs through ``sliding_window_view``, so no window is
ever copied out of the reference beyond one output row at a time.

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
2026-02-20

Modified
--------
2026-03-02
"""

# Standard library
import logging
from dataclasses import dataclass, field
from typing import Annotated, Any, Optional, Union

# Third-party
import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

# gridlab internal
from gridlab.exceptions import InvalidDimensionsError, InvalidParameterError
from gridlab.grid import SampleGrid, require_single_band
from gridlab.image_processing.base import ImageProcessor
from gridlab.image_processing.degeneracy import (
    POLICY_NAMES,
    enforce_policy,
    policy_name,
)
from gridlab.image_processing.params import Desc, Options
from gridlab.image_processing.versioning import processor_tags, processor_version
from gridlab.parallel import map_row_blocks
from gridlab.vocabulary import DegeneracyPolicy, MatchMetric, ProcessorCategory

logger = logging.getLogger(__name__)

METRIC_NAMES = tuple(m.value for m in MatchMetric)


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a template match.

    Attributes
    ----------
    best_offset_x : int
        Sample offset of the best placement's top-left corner.
    best_offset_y : int
        Line offset of the best placement's top-left corner.
    min_score : float
        Smallest finite score, NaN if no score is finite.
    max_score : float
        Largest finite score, NaN if no score is finite.
    scores : SampleGrid
        Score per placement, ``(W - w + 1)`` samples by ``(H - h + 1)``
        lines.
    metric : MatchMetric
        Metric that produced the scores.
    """

    best_offset_x: int
    best_offset_y: int
    min_score: float
    max_score: float
    scores: SampleGrid = field(repr=False, compare=False)
    metric: MatchMetric = MatchMetric.CORRELATION

    @property
    def best_score(self) -> float:
        """Score at the best offset."""
        return self.scores.get(self.best_offset_y, self.best_offset_x)


def _coerce_metric(metric: Union[MatchMetric, str]) -> str:
    if isinstance(metric, MatchMetric):
        return metric.value
    if metric not in METRIC_NAMES:
        raise InvalidParameterError(
            f"metric must be one of {METRIC_NAMES}, got {metric!r}"
        )
    return metric


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.MATCHING,
                description='Template matching by NCC or SAD')
class TemplateMatcher(ImageProcessor):
    """Score every placement of a mask over a reference grid.

    Parameters
    ----------
    metric : str or MatchMetric
        ``'correlation'`` (default) or ``'absolute_difference'``.
    degeneracy : str or DegeneracyPolicy
        Handling of non-finite correlation scores. Default ``'propagate'``.

    Examples
    --------
    >>> matcher = TemplateMatcher(metric='absolute_difference')
    >>> result = matcher.match(reference, mask, workers=4)
    >>> result.best_offset_x, result.best_offset_y
    (12, 40)
    """

    metric: Annotated[str, Options(*METRIC_NAMES),
                      Desc('Placement score')] = 'correlation'
    degeneracy: Annotated[str, Options(*POLICY_NAMES),
                          Desc('Non-finite score handling')] = 'propagate'

    def __init__(
        self,
        metric: Union[MatchMetric, str] = MatchMetric.CORRELATION,
        degeneracy: Union[DegeneracyPolicy, str] = DegeneracyPolicy.PROPAGATE,
    ) -> None:
        self.metric = _coerce_metric(metric)
        self.degeneracy = policy_name(degeneracy)

    def match(
        self,
        reference: SampleGrid,
        mask: SampleGrid,
        **kwargs: Any,
    ) -> MatchResult:
        """Match *mask* against *reference*.

        Parameters
        ----------
        reference : SampleGrid
            Single-band grid to search. Not modified.
        mask : SampleGrid
            Single-band template, no larger than *reference* on either
            axis. Not modified.
        **kwargs
            ``metric`` / ``degeneracy`` overrides, ``workers`` (thread
            count), ``progress_callback``.

        Returns
        -------
        MatchResult

        Raises
        ------
        InvalidDimensionsError
            If either grid is multi-band or the mask is larger than the
            reference.
        NumericalDegeneracyError
            Under the ``'raise'`` policy when a score is non-finite.
        """
        if 'metric' in kwargs:
            kwargs['metric'] = _coerce_metric(kwargs['metric'])
        if 'degeneracy' in kwargs:
            kwargs['degeneracy'] = policy_name(kwargs['degeneracy'])
        params = self._resolve_params(kwargs)
        require_single_band(reference, 'reference')
        require_single_band(mask, 'mask')
        if (mask.sample_count > reference.sample_count
                or mask.line_count > reference.line_count):
            raise InvalidDimensionsError(
                f"mask ({mask.sample_count} x {mask.line_count}) is larger "
                f"than reference ({reference.sample_count} x "
                f"{reference.line_count})"
            )
        workers: Optional[int] = kwargs.get('workers')
        metric = MatchMetric(params['metric'])

        mask_data = mask.data.astype(np.float64)
        h, w = mask_data.shape
        out_lines = reference.line_count - h + 1
        out_samples = reference.sample_count - w + 1
        ref = reference.data
        scores = SampleGrid.create(out_samples, out_lines, zero_init=False)
        out = scores.data

        if metric is MatchMetric.CORRELATION:
            centred_mask = mask_data - mask_data.mean()
            mask_energy = float(np.sum(centred_mask * centred_mask))

            def score_row(windows: np.ndarray) -> np.ndarray:
                local = windows - windows.mean(axis=(1, 2), keepdims=True)
                cross = np.einsum('xij,ij->x', local, centred_mask)
                energy = np.einsum('xij,xij->x', local, local)
                with np.errstate(divide='ignore', invalid='ignore'):
                    return cross / np.sqrt(energy * mask_energy)
        else:
            def score_row(windows: np.ndarray) -> np.ndarray:
                return np.abs(windows - mask_data).sum(axis=(1, 2))

        def score_block(start: int, stop: int) -> None:
            slab = ref[start:stop + h - 1].astype(np.float64)
            views = sliding_window_view(slab, (h, w))
            for y in range(stop - start):
                out[start + y] = score_row(views[y])

        logger.debug(
            "Matching %d x %d mask over %d x %d reference (%s)",
            w, h, reference.sample_count, reference.line_count, metric.value,
        )
        map_row_blocks(score_block, out_lines, workers)
        enforce_policy(out, params['degeneracy'], 'template matching')
        self._report_progress(kwargs, 1.0)
        return _best_match(scores, metric)


def _best_match(scores: SampleGrid, metric: MatchMetric) -> MatchResult:
    """Row-major scan for the best finite score; first occurrence wins."""
    values = scores.data
    finite = np.isfinite(values)
    if not finite.any():
        logger.warning("Template matching produced no finite score")
        return MatchResult(0, 0, float('nan'), float('nan'), scores, metric)

    if metric is MatchMetric.CORRELATION:
        flat = np.where(finite, values, -np.inf).argmax()
    else:
        flat = np.where(finite, values, np.inf).argmin()
    best_y, best_x = divmod(int(flat), scores.sample_count)
    kept = values[finite]
    return MatchResult(
        best_offset_x=best_x,
        best_offset_y=best_y,
        min_score=float(kept.min()),
        max_score=float(kept.max()),
        scores=scores,
        metric=metric,
    )


def match_template(
    reference: SampleGrid,
    mask: SampleGrid,
    metric: Union[MatchMetric, str] = MatchMetric.CORRELATION,
    degeneracy: Union[DegeneracyPolicy, str] = DegeneracyPolicy.PROPAGATE,
    workers: Optional[int] = None,
) -> MatchResult:
    """Match *mask* against *reference*; see :class:`TemplateMatcher`."""
    return TemplateMatcher(metric=metric, degeneracy=degeneracy).match(
        reference, mask, workers=workers,
    )

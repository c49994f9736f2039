# -*- coding: utf-8 -*-
"""
Pipeline - Composable sequence of grid transforms.

Chains multiple ``GridTransform`` instances into a single transform. The
output of each step feeds into the next. Keyword arguments such as
``rng`` and ``workers`` are forwarded to every step, and an optional
``progress_callback`` is rescaled so that each step reports its share of
overall progress.

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
2026-02-06

Modified
--------
2026-03-02
"""

# Standard library
import logging
from typing import Any, List, Sequence

# gridlab internal
from gridlab.exceptions import InvalidParameterError
from gridlab.grid import SampleGrid
from gridlab.image_processing.base import GridTransform
from gridlab.image_processing.versioning import processor_version

logger = logging.getLogger(__name__)


@processor_version('1.0.0')
class Pipeline(GridTransform):
    """Sequential chain of grid transforms.

    The pipeline is itself a ``GridTransform``, so pipelines nest.

    Parameters
    ----------
    steps : Sequence[GridTransform]
        Ordered transforms to apply. Must contain at least one.

    Raises
    ------
    InvalidParameterError
        If *steps* is empty.
    TypeError
        If a step is not a ``GridTransform``.

    Examples
    --------
    >>> pipe = Pipeline([
    ...     SaltAndPepperNoise(0.02, 0.02),
    ...     MedianFilter(window_size=3),
    ... ])
    >>> cleaned = pipe.apply(grid.copy(), rng=np.random.default_rng(1))
    """

    def __init__(self, steps: Sequence[GridTransform]) -> None:
        if not steps:
            raise InvalidParameterError("Pipeline requires at least one transform")
        for i, step in enumerate(steps):
            if not isinstance(step, GridTransform):
                raise TypeError(
                    f"Step {i} is not a GridTransform: {type(step).__name__}"
                )
        self._steps: List[GridTransform] = list(steps)

    @property
    def steps(self) -> List[GridTransform]:
        """Shallow copy of the step list."""
        return list(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        step_names = [type(s).__name__ for s in self._steps]
        return f"Pipeline({step_names})"

    def apply(self, source: SampleGrid, **kwargs: Any) -> SampleGrid:
        """Apply all steps in order.

        Parameters
        ----------
        source : SampleGrid
            Input grid. Steps that work in place (noise injection) modify
            it; pass a copy to keep the original.
        **kwargs
            Forwarded to each step's ``apply()``. ``progress_callback`` is
            intercepted and rescaled per step.

        Returns
        -------
        SampleGrid
            Output of the last step.
        """
        n = len(self._steps)
        outer_cb = kwargs.pop('progress_callback', None)

        result = source
        for i, step in enumerate(self._steps):
            logger.debug("Pipeline step %d/%d: %s", i + 1, n,
                         type(step).__qualname__)

            step_kwargs = dict(kwargs)
            if outer_cb is not None:
                step_kwargs['progress_callback'] = (
                    lambda f, _b=i / n, _s=1.0 / n: outer_cb(_b + f * _s)
                )

            result = step.apply(result, **step_kwargs)

            if outer_cb is not None:
                outer_cb((i + 1) / n)

        return result

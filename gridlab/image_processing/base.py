# -*- coding: utf-8 -*-
"""
Image Processing Base Classes - Abstract interfaces for grid processors.

Defines the ``ImageProcessor`` common base class for every gridlab processor
(transforms, noise injectors, the template matcher) and the
``GridTransform`` ABC for processors that turn one ``SampleGrid`` into
another. ``ImageProcessor`` provides version checking at first
instantiation and ``typing.Annotated``-based tunable parameter declarations
with runtime resolution through ``**kwargs``.

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
2026-01-30

Modified
--------
2026-03-02
"""

# Standard library
import logging
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

# gridlab internal
from gridlab.grid import SampleGrid
from gridlab.image_processing.params import ParamSpec, collect_param_specs

logger = logging.getLogger(__name__)


class ImageProcessor(ABC):
    """
    Common base class for all grid processors.

    **Version checking**: concrete subclasses that do not declare a
    version via ``@processor_version('x.y.z')`` trigger a ``UserWarning``
    at first instantiation. The check runs in ``__new__`` so that class
    decorators have already been applied.

    **Tunable parameters**: subclasses declare tunable parameters as
    ``typing.Annotated`` class-body fields using the markers from
    :mod:`gridlab.image_processing.params`. ``__init_subclass__`` collects
    them into ``__param_specs__``; ``_resolve_params(kwargs)`` merges
    instance values with per-call overrides and validates them.
    """

    # Track which classes have been checked to warn only once per class.
    _version_warned_classes: set = set()

    #: Built by ``__init_subclass__`` from ``Annotated`` fields.
    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        if cls not in ImageProcessor._version_warned_classes:
            ImageProcessor._version_warned_classes.add(cls)
            if (
                not getattr(cls, '__processor_version__', None)
                and not getattr(cls, '__abstractmethods__', None)
            ):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance values with runtime *kwargs* overrides.

        Each declared parameter takes its value from *kwargs* when present,
        otherwise from ``self.<name>``, and is validated against its spec.
        Keys of *kwargs* that are not declared parameters (``rng``,
        ``workers``, ``progress_callback``) are ignored.

        Returns
        -------
        Dict[str, Any]
            ``{param_name: resolved_value}`` for every declared param.

        Raises
        ------
        TypeError
            If a value has the wrong type.
        InvalidParameterError
            If a value violates a range or choices constraint.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            value = kwargs.get(spec.name, getattr(self, spec.name))
            spec.validate(value)
            resolved[spec.name] = value
        return resolved

    def _report_progress(self, kwargs: Dict[str, Any], fraction: float) -> None:
        """Call the optional ``progress_callback`` keyword with *fraction*."""
        cb = kwargs.get('progress_callback')
        if cb is not None:
            cb(float(fraction))


class GridTransform(ImageProcessor):
    """
    Abstract base class for grid-to-grid transforms.

    Subclasses implement ``apply``. Whether the source grid is modified
    in place (noise injection) or left untouched (filters) is part of
    each subclass's contract.
    """

    @abstractmethod
    def apply(self, source: SampleGrid, **kwargs: Any) -> SampleGrid:
        """
        Apply the transform to a single-band grid.

        Parameters
        ----------
        source : SampleGrid
            Input grid.

        Returns
        -------
        SampleGrid
            Transformed grid.
        """
        ...

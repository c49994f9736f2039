# -*- coding: utf-8 -*-
"""
Gridlab Exception Hierarchy - Domain-specific exceptions for grid operations.

Provides a small exception hierarchy that lets callers catch gridlab errors
distinctly from Python built-in exceptions. All gridlab exceptions subclass
both ``GridlabError`` and the appropriate built-in exception, so existing
``except ValueError`` / ``except MemoryError`` handlers keep working.

Precondition violations (``ValidationError`` and its subclasses) are
programmer errors: they are raised eagerly at the start of an operation,
before any sample is touched.

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


class GridlabError(Exception):
    """Base exception for all gridlab errors."""


class ValidationError(GridlabError, ValueError):
    """Invalid input data, parameters, or configuration.

    Base class for all precondition violations detected at the entry of
    an operation.
    """


class InvalidRangeError(ValidationError):
    """Index or region bounds outside the grid, or an empty range.

    Raised for out-of-bounds sample access, regions with ``last < first``,
    regions too small for a variance, and degenerate display ranges.
    """


class InvalidDimensionsError(ValidationError):
    """Mismatched or unsupported grid dimensions.

    Raised for non-positive grid sizes, masks larger than the reference
    grid, multi-band inputs, and byte buffers of the wrong length.
    """


class InvalidKernelError(ValidationError):
    """Kernel or filter window without a unique center sample.

    Raised when a convolution kernel or a median window has an even (or
    non-positive) size along either axis.
    """


class InvalidParameterError(ValidationError):
    """Out-of-range scalar parameter.

    Raised for probabilities outside ``[0, 1]`` or summing above one,
    negative standard deviations, and non-positive counts.
    """


class AllocationError(GridlabError, MemoryError):
    """Grid or intermediate buffer storage could not be obtained.

    Fatal to the operation and never retried internally.
    """


class ProcessorError(GridlabError, RuntimeError):
    """Algorithm or processing failure during ``apply()`` / ``match()``.

    Raised when a processor encounters a non-recoverable error during
    execution (not an input validation issue).
    """


class NumericalDegeneracyError(ProcessorError):
    """Non-finite output under the ``'raise'`` degeneracy policy.

    Raised when a division by a zero variance or a zero effective kernel
    weight produced non-finite samples and the caller asked to fail
    instead of propagating or clamping them.
    """

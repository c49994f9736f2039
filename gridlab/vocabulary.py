# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for the gridlab framework.

Defines the single source of truth for controlled vocabularies used across
gridlab: processor categories, statistics strategies, template matching
metrics, and numerical degeneracy policies. Processors accept either the
enum member or its string value.

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
2026-02-10

Modified
--------
2026-03-02
"""

from enum import Enum


class ProcessorCategory(Enum):
    """Processing categories for processor tagging.

    Each value corresponds to a functional grouping of grid operations.
    """

    FILTERS = "filters"
    NOISE = "noise"
    MATCHING = "matching"
    RESAMPLE = "resample"


class StatisticsStrategy(Enum):
    """Algorithmic strategy used by the statistics engine.

    ``NAIVE`` is the sequential two-pass formula, ``DIVIDE_CONQUER``
    computes per-row partials independently and reduces them in row
    order, and ``FORWARD`` is the single-pass sum / sum-of-squares
    formula.
    """

    NAIVE = "naive"
    DIVIDE_CONQUER = "divide_conquer"
    FORWARD = "forward"


class MatchMetric(Enum):
    """Score computed per placement by the template matcher.

    ``CORRELATION`` scores are higher-is-better, ``ABSOLUTE_DIFFERENCE``
    scores are lower-is-better.
    """

    CORRELATION = "correlation"
    ABSOLUTE_DIFFERENCE = "absolute_difference"


class DegeneracyPolicy(Enum):
    """What to do with non-finite samples produced by a division by zero.

    ``PROPAGATE`` keeps them, ``CLAMP`` replaces them with ``0.0`` and
    ``RAISE`` fails with ``NumericalDegeneracyError``.
    """

    PROPAGATE = "propagate"
    CLAMP = "clamp"
    RAISE = "raise"

# -*- coding: utf-8 -*-
"""
Statistics - Descriptive statistics and histograms of sample grids.

Key Classes
-----------
``StatisticsEngine``
    Min, max, mean and sample standard deviation with a selectable
    ``StatisticsStrategy`` (naive two-pass, divide-and-conquer, forward).
``StatisticsResult``
    Immutable result tuple.

Functions
---------
``compute_statistics``
    One-shot wrapper around ``StatisticsEngine``.
``compute_histogram``
    Normalized class histogram built from per-row partial histograms.

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
2026-02-13
"""

from gridlab.statistics.models import StatisticsResult
from gridlab.statistics.engine import StatisticsEngine, compute_statistics
from gridlab.statistics.histogram import compute_histogram

__all__ = [
    'StatisticsResult',
    'StatisticsEngine',
    'compute_statistics',
    'compute_histogram',
]

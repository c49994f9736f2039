# -*- coding: utf-8 -*-
"""
gridlab - Numeric core for single-band sample grids.

Descriptive statistics, template matching, renormalizing convolution,
noise injection, and median filtering over ``float32`` raster grids.

Dependencies
------------
numpy
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
2026-01-30

Modified
--------
2026-03-02
"""

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from gridlab.exceptions import (
    GridlabError,
    ValidationError,
    InvalidRangeError,
    InvalidDimensionsError,
    InvalidKernelError,
    InvalidParameterError,
    AllocationError,
    ProcessorError,
    NumericalDegeneracyError,
)
from gridlab.vocabulary import (
    ProcessorCategory,
    StatisticsStrategy,
    MatchMetric,
    DegeneracyPolicy,
)
from gridlab.grid import Region, SampleGrid
from gridlab.statistics import (
    StatisticsEngine,
    StatisticsResult,
    compute_histogram,
    compute_statistics,
)

__all__ = [
    'GridlabError',
    'ValidationError',
    'InvalidRangeError',
    'InvalidDimensionsError',
    'InvalidKernelError',
    'InvalidParameterError',
    'AllocationError',
    'ProcessorError',
    'NumericalDegeneracyError',
    'ProcessorCategory',
    'StatisticsStrategy',
    'MatchMetric',
    'DegeneracyPolicy',
    'Region',
    'SampleGrid',
    'StatisticsEngine',
    'StatisticsResult',
    'compute_histogram',
    'compute_statistics',
]

# -*- coding: utf-8 -*-
"""
Image Processing Module - Filters, noise injection, and template matching.

Provides the processors that consume or produce ``SampleGrid`` objects.
All processor types inherit from ``ImageProcessor``, which provides
version checking and tunable parameter validation.

Sub-modules
-----------
filters/
    Kernel convolution with renormalized borders, standard kernels, and
    the sliding-window median filter.
noise.py
    In-place ``GaussianNoise`` and ``SaltAndPepperNoise`` injection.
matching.py
    ``TemplateMatcher`` (normalized cross-correlation and sum of
    absolute differences) and ``MatchResult``.
resample.py
    ``Decimate`` integer scale-down.
degeneracy.py
    ``DegeneracyPolicy`` enforcement for non-finite outputs.
pipeline.py
    Sequential composition of ``GridTransform`` steps.
versioning.py
    ``@processor_version`` and ``@processor_tags`` decorators.
params.py
    ``Range``, ``Options``, ``Desc`` constraint markers for tunable
    parameters via ``Annotated`` type hints.

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

from gridlab.image_processing.base import ImageProcessor, GridTransform
from gridlab.image_processing.filters import (
    ConvolutionFilter,
    MedianFilter,
    convolve,
    median_filter,
    dirac_kernel,
    box_kernel,
    laplacian_kernel,
    laplacian_of_gaussian_kernel,
)
from gridlab.image_processing.noise import GaussianNoise, SaltAndPepperNoise
from gridlab.image_processing.matching import (
    MatchResult,
    TemplateMatcher,
    match_template,
)
from gridlab.image_processing.resample import Decimate
from gridlab.image_processing.pipeline import Pipeline
from gridlab.image_processing.versioning import processor_version, processor_tags
from gridlab.image_processing.params import Range, Options, Desc, ParamSpec

__all__ = [
    'ImageProcessor',
    'GridTransform',
    'ConvolutionFilter',
    'MedianFilter',
    'convolve',
    'median_filter',
    'dirac_kernel',
    'box_kernel',
    'laplacian_kernel',
    'laplacian_of_gaussian_kernel',
    'GaussianNoise',
    'SaltAndPepperNoise',
    'MatchResult',
    'TemplateMatcher',
    'match_template',
    'Decimate',
    'Pipeline',
    'processor_version',
    'processor_tags',
    'Range',
    'Options',
    'Desc',
    'ParamSpec',
]

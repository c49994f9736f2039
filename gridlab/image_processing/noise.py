# -*- coding: utf-8 -*-
"""
Noise Injection - Additive Gaussian and impulsive salt-and-pepper noise.

Both injectors modify the source grid in place and return it, so they can
be chained in a ``Pipeline`` ahead of the filters they are meant to test.
Randomness comes from a ``numpy.random.Generator`` that the caller owns
and passes as the ``rng`` keyword to ``apply``; draws are made for the
whole grid in row-major order, so a fixed seed reproduces the same noise
regardless of the worker count used elsewhere in the pipeline.

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
2026-02-18

Modified
--------
2026-03-02
"""

# Standard library
import logging
from typing import Annotated, Any, Dict

# Third-party
import numpy as np

# gridlab internal
from gridlab.exceptions import InvalidParameterError
from gridlab.grid import SampleGrid, require_single_band
from gridlab.image_processing.base import GridTransform
from gridlab.image_processing.params import Desc, Range
from gridlab.image_processing.versioning import processor_tags, processor_version
from gridlab.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)


def _require_rng(kwargs: Dict[str, Any]) -> np.random.Generator:
    rng = kwargs.get('rng')
    if not isinstance(rng, np.random.Generator):
        raise InvalidParameterError(
            "noise injection requires rng=numpy.random.Generator, "
            f"got {type(rng).__name__}"
        )
    return rng


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.NOISE,
                description='Additive white Gaussian noise')
class GaussianNoise(GridTransform):
    """Add ``gain * N(0, standard_deviation)`` to every sample in place.

    Parameters
    ----------
    standard_deviation : float
        Standard deviation of the zero-mean normal draw. Must be >= 0.
    gain : float
        Multiplier applied to each draw. Default 1.0.

    Raises
    ------
    InvalidParameterError
        If *standard_deviation* is negative.

    Examples
    --------
    >>> rng = np.random.default_rng(7)
    >>> noisy = GaussianNoise(0.05).apply(grid, rng=rng)
    """

    standard_deviation: Annotated[float, Range(min=0.0),
                                  Desc('Normal draw standard deviation')] = 1.0
    gain: Annotated[float, Desc('Draw multiplier')] = 1.0

    def __init__(self, standard_deviation: float = 1.0, gain: float = 1.0) -> None:
        self.standard_deviation = standard_deviation
        self.gain = gain
        self._resolve_params({})

    def apply(self, source: SampleGrid, **kwargs: Any) -> SampleGrid:
        """Add noise to *source* in place.

        Parameters
        ----------
        source : SampleGrid
            Single-band grid, modified in place.
        **kwargs
            ``rng`` (required ``numpy.random.Generator``),
            ``standard_deviation`` / ``gain`` overrides.

        Returns
        -------
        SampleGrid
            *source*, for chaining.
        """
        params = self._resolve_params(kwargs)
        rng = _require_rng(kwargs)
        require_single_band(source, 'source')

        draws = rng.normal(0.0, params['standard_deviation'], size=source.shape)
        data = source.data
        data += (params['gain'] * draws).astype(data.dtype)
        self._report_progress(kwargs, 1.0)
        return source


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.NOISE,
                description='Impulsive salt-and-pepper noise')
class SaltAndPepperNoise(GridTransform):
    """Replace random samples with fixed pepper and salt values in place.

    One uniform draw ``u`` in ``[0, 1)`` is made per sample. Samples with
    ``u < pepper_probability`` become *pepper_value*; otherwise samples with
    ``u >= 1 - salt_probability`` become *salt_value*. All other samples
    are left untouched.

    Parameters
    ----------
    pepper_probability : float
        Probability of a sample becoming pepper, in ``[0, 1]``.
    salt_probability : float
        Probability of a sample becoming salt, in ``[0, 1]``.
    pepper_value : float
        Value written for pepper. Default 0.0.
    salt_value : float
        Value written for salt. Default 1.0.

    Raises
    ------
    InvalidParameterError
        If a probability is outside ``[0, 1]`` or both sum to more than 1.
    """

    pepper_probability: Annotated[float, Range(min=0.0, max=1.0),
                                  Desc('Pepper probability')] = 0.05
    salt_probability: Annotated[float, Range(min=0.0, max=1.0),
                                Desc('Salt probability')] = 0.05
    pepper_value: Annotated[float, Desc('Value written for pepper')] = 0.0
    salt_value: Annotated[float, Desc('Value written for salt')] = 1.0

    def __init__(
        self,
        pepper_probability: float = 0.05,
        salt_probability: float = 0.05,
        pepper_value: float = 0.0,
        salt_value: float = 1.0,
    ) -> None:
        self.pepper_probability = pepper_probability
        self.salt_probability = salt_probability
        self.pepper_value = pepper_value
        self.salt_value = salt_value
        self._check_probabilities(self._resolve_params({}))

    @staticmethod
    def _check_probabilities(params: Dict[str, Any]) -> None:
        total = params['pepper_probability'] + params['salt_probability']
        if total > 1.0:
            raise InvalidParameterError(
                f"pepper_probability + salt_probability must be <= 1, got {total}"
            )

    def apply(self, source: SampleGrid, **kwargs: Any) -> SampleGrid:
        """Inject salt-and-pepper noise into *source* in place.

        Parameters
        ----------
        source : SampleGrid
            Single-band grid, modified in place.
        **kwargs
            ``rng`` (required ``numpy.random.Generator``) and overrides of
            any constructor parameter.

        Returns
        -------
        SampleGrid
            *source*, for chaining.
        """
        params = self._resolve_params(kwargs)
        self._check_probabilities(params)
        rng = _require_rng(kwargs)
        require_single_band(source, 'source')

        draws = rng.random(size=source.shape)
        pepper = draws < params['pepper_probability']
        salt = ~pepper & (draws >= 1.0 - params['salt_probability'])
        data = source.data
        data[pepper] = params['pepper_value']
        data[salt] = params['salt_value']
        logger.debug(
            "Salt-and-pepper: %d pepper, %d salt of %d samples",
            int(np.count_nonzero(pepper)), int(np.count_nonzero(salt)),
            source.size,
        )
        self._report_progress(kwargs, 1.0)
        return source

# -*- coding: utf-8 -*-
"""
Statistics Models - Immutable result of a statistics computation.

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
2026-02-12

Modified
--------
2026-02-12
"""

# Standard library
from dataclasses import dataclass

# Third-party
import numpy as np


@dataclass(frozen=True)
class StatisticsResult:
    """Descriptive statistics of a grid or grid region.

    Values are rounded to 32-bit float precision on construction through
    :meth:`from_values`.

    Parameters
    ----------
    min : float
        Smallest sample.
    max : float
        Largest sample.
    mean : float
        Arithmetic mean.
    standard_deviation : float
        Sample standard deviation (``n - 1`` denominator).
    """

    min: float
    max: float
    mean: float
    standard_deviation: float

    @classmethod
    def from_values(
        cls,
        min_value: float,
        max_value: float,
        mean: float,
        standard_deviation: float,
    ) -> 'StatisticsResult':
        """Build a result, rounding every value to ``float32``."""
        return cls(
            min=float(np.float32(min_value)),
            max=float(np.float32(max_value)),
            mean=float(np.float32(mean)),
            standard_deviation=float(np.float32(standard_deviation)),
        )

    @property
    def variance(self) -> float:
        """Sample variance (square of the standard deviation)."""
        return self.standard_deviation * self.standard_deviation

    def __str__(self) -> str:
        return (
            f"Range {self.min:.6f} .. {self.max:.6f}, "
            f"mean {self.mean:.6f} +/- {self.standard_deviation:.6f}"
        )

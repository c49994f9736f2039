# -*- coding: utf-8 -*-
"""
Degeneracy Policy - Handling of non-finite samples from divisions by zero.

Normalized correlation divides by the product of two variances and
renormalizing convolution divides by an effective kernel weight sum; both
produce non-finite samples over flat regions or fully cancelling kernels.
``enforce_policy`` applies a ``DegeneracyPolicy`` to such a result:

- ``'propagate'``: keep the non-finite samples (default) and log their count.
- ``'clamp'``: replace them with ``0.0``.
- ``'raise'``: fail with ``NumericalDegeneracyError``.

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
2026-02-16

Modified
--------
2026-02-16
"""

# Standard library
import logging
from typing import Union

# Third-party
import numpy as np

# gridlab internal
from gridlab.exceptions import InvalidParameterError, NumericalDegeneracyError
from gridlab.vocabulary import DegeneracyPolicy

logger = logging.getLogger(__name__)

POLICY_NAMES = tuple(p.value for p in DegeneracyPolicy)


def policy_name(policy: Union[DegeneracyPolicy, str]) -> str:
    """Normalize a policy member or name to its string value.

    Raises
    ------
    InvalidParameterError
        If *policy* is not a known policy.
    """
    if isinstance(policy, DegeneracyPolicy):
        return policy.value
    if policy not in POLICY_NAMES:
        raise InvalidParameterError(
            f"degeneracy must be one of {POLICY_NAMES}, got {policy!r}"
        )
    return policy


def enforce_policy(values: np.ndarray, policy: str, context: str) -> int:
    """Apply *policy* to the non-finite entries of *values* in place.

    Parameters
    ----------
    values : np.ndarray
        Result array, modified in place under ``'clamp'``.
    policy : str
        ``'propagate'``, ``'clamp'`` or ``'raise'``.
    context : str
        Operation name used in log and error messages.

    Returns
    -------
    int
        Number of non-finite entries found.

    Raises
    ------
    NumericalDegeneracyError
        Under ``'raise'`` when any entry is non-finite.
    """
    bad = ~np.isfinite(values)
    count = int(np.count_nonzero(bad))
    if count == 0:
        return 0
    if policy == DegeneracyPolicy.RAISE.value:
        raise NumericalDegeneracyError(
            f"{context} produced {count} non-finite samples"
        )
    if policy == DegeneracyPolicy.CLAMP.value:
        values[bad] = 0.0
        logger.debug("%s: clamped %d non-finite samples to 0", context, count)
    else:
        logger.warning(
            "%s produced %d non-finite samples (zero variance or weight)",
            context, count,
        )
    return count

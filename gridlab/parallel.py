# -*- coding: utf-8 -*-
"""
Row-Parallel Execution - Fork-join map over contiguous row blocks.

Every data-parallel loop in gridlab runs over independent rows. This module
partitions ``[0, line_count)`` into contiguous row blocks, maps a worker
function over them with a ``concurrent.futures.ThreadPoolExecutor``, and
joins. Results come back in ascending row order no matter which worker
finished first, so downstream reductions that iterate the results
sequentially have deterministic floating-point rounding across runs and
worker counts.

numpy releases the GIL inside its vectorized kernels, so threads give real
speed-ups for the per-block numpy work gridlab does. Workers must only
write to their own output rows.

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
2026-03-02
"""

# Standard library
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple, TypeVar

# gridlab internal
from gridlab.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Blocks per worker; a few blocks each keeps the pool busy when rows have
# uneven cost without paying per-row task overhead.
_BLOCKS_PER_WORKER = 4


def resolve_workers(workers: Optional[int]) -> int:
    """Return the effective worker count.

    Parameters
    ----------
    workers : int, optional
        Requested worker count. ``None`` selects ``os.cpu_count()``.

    Returns
    -------
    int
        Worker count >= 1.

    Raises
    ------
    InvalidParameterError
        If *workers* is not a positive integer.
    """
    if workers is None:
        return os.cpu_count() or 1
    if isinstance(workers, bool) or not isinstance(workers, int):
        raise InvalidParameterError(
            f"workers must be an integer, got {type(workers).__name__}"
        )
    if workers < 1:
        raise InvalidParameterError(f"workers must be >= 1, got {workers}")
    return workers


def row_blocks(line_count: int, block_count: int) -> List[Tuple[int, int]]:
    """Partition ``[0, line_count)`` into contiguous half-open blocks.

    Block sizes differ by at most one row, larger blocks first.

    Parameters
    ----------
    line_count : int
        Number of rows to partition.
    block_count : int
        Desired number of blocks. Clamped to ``[1, line_count]``.

    Returns
    -------
    List[Tuple[int, int]]
        ``(start, stop)`` pairs in ascending order covering every row
        exactly once.

    Examples
    --------
    >>> row_blocks(10, 3)
    [(0, 4), (4, 7), (7, 10)]
    """
    if line_count <= 0:
        return []
    block_count = max(1, min(block_count, line_count))
    base, extra = divmod(line_count, block_count)
    blocks = []
    start = 0
    for i in range(block_count):
        stop = start + base + (1 if i < extra else 0)
        blocks.append((start, stop))
        start = stop
    return blocks


def map_row_blocks(
    func: Callable[[int, int], T],
    line_count: int,
    workers: Optional[int] = None,
) -> List[T]:
    """Apply ``func(start, stop)`` to each row block and join.

    Parameters
    ----------
    func : Callable[[int, int], T]
        Worker function receiving a half-open row range. Must not
        mutate shared state other than its own output rows.
    line_count : int
        Number of rows to cover.
    workers : int, optional
        Worker threads. ``None`` selects ``os.cpu_count()``; ``1`` runs
        inline on the calling thread.

    Returns
    -------
    List[T]
        One result per block, in ascending row order.
    """
    n_workers = resolve_workers(workers)
    if n_workers == 1 or line_count <= 1:
        blocks = row_blocks(line_count, 1)
        return [func(start, stop) for start, stop in blocks]

    blocks = row_blocks(line_count, n_workers * _BLOCKS_PER_WORKER)
    logger.debug(
        "Mapping %d rows over %d blocks with %d workers",
        line_count, len(blocks), n_workers,
    )
    with ThreadPoolExecutor(max_workers=n_workers) as pool:
        futures = [pool.submit(func, start, stop) for start, stop in blocks]
        # Collect in submission order, which is ascending row order.
        return [future.result() for future in futures]

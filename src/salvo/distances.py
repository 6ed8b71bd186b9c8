"""Run-length maintenance for the belief board.

For every cell ``p`` and line direction ``d`` the board stores::

    run(p, d) = -1                    if p is off-board or blocked
    run(p, d) = 1 + run(p + d, d)     otherwise

so an open cell holds the number of open cells lying beyond it in that
direction.  The recurrence is evaluated as an explicit scan starting at the
board edge the direction points away from, one whole row or column at a time:
a single new block can shorten runs arbitrarily far along its line, so a
local patch is never enough.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .coord_utils import Direction


def scan_runs(blocked: np.ndarray) -> np.ndarray:
    """Return ``run`` for a direction pointing toward index 0 of *blocked*.

    ``blocked`` is a 1-D boolean line.  Reverse the input (and the result) to
    get the opposite direction.
    """
    out = np.empty(blocked.shape[0], dtype=np.int32)
    prev = -1
    for i, is_blocked in enumerate(blocked):
        prev = -1 if is_blocked else prev + 1
        out[i] = prev
    return out


def recompute_row(runs: np.ndarray, blocked: np.ndarray, y: int) -> None:
    """Rewrite LEFT/RIGHT runs of row *y* in place."""
    line = blocked[:, y]
    runs[Direction.LEFT, :, y] = scan_runs(line)
    runs[Direction.RIGHT, :, y] = scan_runs(line[::-1])[::-1]


def recompute_column(runs: np.ndarray, blocked: np.ndarray, x: int) -> None:
    """Rewrite UP/DOWN runs of column *x* in place."""
    line = blocked[x, :]
    runs[Direction.UP, x, :] = scan_runs(line)
    runs[Direction.DOWN, x, :] = scan_runs(line[::-1])[::-1]


def recompute_lines(runs: np.ndarray, blocked: np.ndarray, xs: Iterable[int], ys: Iterable[int]) -> None:
    """Recompute every column in *xs* and every row in *ys*."""
    for x in sorted(set(xs)):
        recompute_column(runs, blocked, x)
    for y in sorted(set(ys)):
        recompute_row(runs, blocked, y)


from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from .board import Board
from .config import BIGGEST_SHIP_HIT_SCORE, SMALL_SHIP_HIT_SCORE
from .coord_utils import Coord, Direction
from .engine import GameState
from .errors import InvariantViolation

logger = logging.getLogger(__name__)


def select_target(state: GameState) -> Coord:
    """
    1. While a hit ship is afloat, extend it: the first unknown line
       neighbour of any hit cell, in scan order.
    2. Otherwise rate every unknown cell and take the best one; ties go to
       the cell with more open space around it, then to scan order.
    3. Weak check: if the fleet still has several sizes and the best rating
       is no better than a single biggest-ship hit, ignore the ratings and
       take the cell with the most open space instead.
    """
    board = state.board
    if not board.has_unknown():
        raise InvariantViolation("no unknown cell left to shoot at")

    if state.hunting:
        target = _wounded_target(board)
        logger.debug("hunting target %s", target)
        return target

    unknown = board.unknown_mask()
    rates = rate_map(state)
    space = board.line_space()
    target = _first_best(unknown, rates, space)
    if _weak(state, int(rates[target])):
        target = _first_best(unknown, space)
        logger.debug("weak check: max open space target %s", target)
    else:
        logger.debug("exploring target %s rate=%d", target, rates[target])
    return target


def _wounded_target(board: Board) -> Coord:
    candidates = {
        q for p in board.hit_cells() for q in board.nearby["lines"][p] if board.is_unknown(q)
    }
    if not candidates:
        raise InvariantViolation("hunting without any open cell next to a hit")
    # (x, y) tuple order is scan order
    return min(candidates)


def _first_best(mask: np.ndarray, *keys: np.ndarray) -> Coord:
    """First cell of *mask* (scan order) maximising *keys* lexicographically."""
    candidates = mask.copy()
    for key in keys:
        best = key[candidates].max()
        candidates &= key == best
    x, y = np.unravel_index(int(np.flatnonzero(candidates)[0]), candidates.shape)
    return int(x), int(y)


def _weak(state: GameState, rate: int) -> bool:
    return not state.fleet.is_single_size_fleet() and rate <= BIGGEST_SHIP_HIT_SCORE


def is_weak_check(state: GameState, target: Coord) -> bool:
    return _weak(state, rate_target(state, target))


# ---------------------------------------------------------------------------
# Rating
# ---------------------------------------------------------------------------


def _check_lengths(state: GameState) -> Tuple[int, int]:
    return state.fleet.max_size - 1, state.fleet.second_max_size - 1


def _ship_hit(d0, d1, check_length: int, score: int):
    """*score* where a ship spanning *check_length* extra cells could cover the cell."""
    if check_length <= 0:
        return np.zeros_like(d0)
    chance = (d0 + d1 >= check_length) & (d0 <= check_length) & (d1 <= check_length)
    return np.where(chance, score, 0)


def _rate_axis(d0, d1, max_check: int, second_check: int):
    # The biggest ship fits through the cell with room to spare on both sides
    redundant = d0 + d1 + 1 <= 2 * max_check
    anchored = _ship_hit(d0, d1, max_check, BIGGEST_SHIP_HIT_SCORE) + _ship_hit(
        d0, d1, second_check, SMALL_SHIP_HIT_SCORE
    )
    edges = (d0 == max_check) * BIGGEST_SHIP_HIT_SCORE + (d1 == max_check) * BIGGEST_SHIP_HIT_SCORE
    return np.where(redundant, anchored, edges)


def rate_map(state: GameState) -> np.ndarray:
    """Rating of every cell, shape (width, height); only unknown cells are meaningful."""
    runs = state.board.runs
    max_check, second_check = _check_lengths(state)
    return _rate_axis(runs[Direction.LEFT], runs[Direction.RIGHT], max_check, second_check) + _rate_axis(
        runs[Direction.UP], runs[Direction.DOWN], max_check, second_check
    )


def rate_target(state: GameState, p: Coord) -> int:
    """Rating of a single cell."""
    board = state.board
    max_check, second_check = _check_lengths(state)
    horizontal = np.array(board.horizontal_runs(p))
    vertical = np.array(board.vertical_runs(p))
    return int(
        _rate_axis(horizontal[0], horizontal[1], max_check, second_check)
        + _rate_axis(vertical[0], vertical[1], max_check, second_check)
    )

"""Game state machine: applies protocol events to the belief state.

One ``GameState`` lives for one game.  ``apply_event`` validates an event
against it first and only then mutates the board and fleet, so a rejected
event leaves the state exactly as it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Type

from .board import Board, Knowledge
from .commands import Event, Hit, Miss, NewGame, Sunk, Terminate
from .coord_utils import Coord
from .errors import InvariantViolation, ProtocolError
from .fleet import FleetTracker

logger = logging.getLogger(__name__)


@dataclass
class GameState:
    board: Board
    fleet: FleetTracker
    hunting: bool = False  # a hit ship is still afloat

    @classmethod
    def new(cls, width: int, height: int, ships: Iterable[int]) -> "GameState":
        return cls(board=Board(width, height), fleet=FleetTracker(ships))


def apply_event(state: Optional[GameState], event: Event) -> Optional[GameState]:
    """Apply *event* and return the state the next turn should see.

    ``NewGame`` always yields a fresh state; ``Terminate`` returns *state*
    untouched and the caller stops polling.  Shot events require a game.
    """
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise ProtocolError(f"Unsupported event: {event!r}")
    if isinstance(event, (NewGame, Terminate)):
        return handler(state, event)
    if state is None:
        raise InvariantViolation(f"{type(event).__name__} received before any new game")
    _check_bounds(state.board, event.coord)
    return handler(state, event)


def _check_bounds(board: Board, p: Coord) -> None:
    if not board.in_bounds(p):
        raise ProtocolError(f"{p} is outside the {board.width}x{board.height} board")


def _require_unknown(board: Board, p: Coord, what: str) -> None:
    if not board.is_unknown(p):
        raise InvariantViolation(f"{what} reported at {p} which is already {board.state(p).name}")


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _start_new_game(state: Optional[GameState], event: NewGame) -> GameState:
    logger.debug("new game %dx%d fleet=%s", event.width, event.height, list(event.ships))
    return GameState.new(event.width, event.height, event.ships)


def _wound_ship(state: GameState, event: Hit) -> GameState:
    board, p = state.board, event.coord
    _require_unknown(board, p, "Hit")

    if not state.hunting:
        narrow_orientation(state, p)

    board.mark_hit(p)
    # Ships never touch, not even by a corner
    board.mark_eliminated(board.nearby["diagonal"][p])
    state.hunting = True
    logger.debug("hit at %s", p)
    return state


def _kill_ship(state: GameState, event: Sunk) -> GameState:
    board, p = state.board, event.coord
    if board.state(p) == Knowledge.ELIMINATED:
        raise InvariantViolation(f"Sunk reported at {p} which is already ELIMINATED")

    ship = board.connected_hit_cells(p) if board.is_hit(p) else _connected_after_hit(board, p)
    # Fleet is checked before the neighbourhood is touched
    state.fleet.remove(len(ship))
    if board.is_unknown(p):
        board.mark_hit(p)
    board.mark_eliminated(board.neighbors_of(ship))
    state.hunting = False
    logger.debug("sunk ship of length %d at %s, remaining fleet %s", len(ship), sorted(ship), state.fleet.remaining)
    return state


def _connected_after_hit(board: Board, p: Coord) -> set:
    """Cells the ship would have once the killing shot at *p* is counted as hit."""
    collected = {p}
    for q in board.nearby["all"][p]:
        if board.is_hit(q) and q not in collected:
            collected |= board.connected_hit_cells(q)
    return collected


def _note_miss(state: GameState, event: Miss) -> GameState:
    board, p = state.board, event.coord
    _require_unknown(board, p, "Miss")

    board.mark_eliminated(p)
    if state.hunting:
        wounds = sorted(q for q in board.nearby["lines"][p] if board.is_hit(q))
        if wounds:
            narrow_orientation(state, wounds[0])
    logger.debug("miss at %s", p)
    return state


def _terminate(state: Optional[GameState], event: Terminate) -> Optional[GameState]:
    logger.debug("terminate")
    return state


_HANDLERS: Dict[Type, Callable] = {
    NewGame: _start_new_game,
    Hit: _wound_ship,
    Sunk: _kill_ship,
    Miss: _note_miss,
    Terminate: _terminate,
}


# ---------------------------------------------------------------------------
# Inference
# ---------------------------------------------------------------------------


def narrow_orientation(state: GameState, pivot: Coord) -> None:
    """Rule out an axis through *pivot* that is too short for any remaining ship.

    The open span along an axis is both run lengths plus the pivot itself.
    When it is shorter than the smallest ship afloat, no ship through the
    pivot can lie on that axis and its two line neighbours are eliminated.
    """
    board, min_size = state.board, state.fleet.min_size
    if sum(board.horizontal_runs(pivot)) + 1 < min_size:
        logger.debug("horizontal axis at %s too short for size %d", pivot, min_size)
        board.mark_eliminated(board.nearby["horizontal"][pivot])
    if sum(board.vertical_runs(pivot)) + 1 < min_size:
        logger.debug("vertical axis at %s too short for size %d", pivot, min_size)
        board.mark_eliminated(board.nearby["vertical"][pivot])

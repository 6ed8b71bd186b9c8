"""
board.py

Belief-state board of the opponent's hidden grid, including:
 - Knowledge flags per cell (unknown, eliminated, hit)
 - Run lengths in the four line directions, kept eagerly up to date
 - Neighbour lookup, flood fill of a wounded ship, and a text rendering
   used for debug logs

"""

from __future__ import annotations

import enum
from collections import deque
from typing import Dict, Iterable, List, NamedTuple, Set, Tuple, Union

import numpy as np

from . import distances
from .coord_utils import (
    ALL,
    DIAGONALS,
    HORIZONTAL,
    HORIZONTAL_DIRECTIONS,
    LINES,
    VERTICAL,
    VERTICAL_DIRECTIONS,
    Coord,
    Direction,
    shift,
)


class Knowledge(enum.IntEnum):
    UNKNOWN = 0  # never fired upon
    ELIMINATED = 1  # missed, or inferred impossible
    HIT = 2  # confirmed ship cell


# Rendering symbols, same alphabet as the display grid of the game server
SYMBOLS = {
    Knowledge.UNKNOWN: ".",
    Knowledge.ELIMINATED: "o",
    Knowledge.HIT: "X",
}

NEIGHBOUR_SHIFTS = {
    "horizontal": HORIZONTAL,
    "vertical": VERTICAL,
    "diagonal": DIAGONALS,
    "lines": LINES,
    "all": ALL,
}


class Cell(NamedTuple):
    """Snapshot of one board cell."""

    knowledge: Knowledge
    up: int
    down: int
    left: int
    right: int


class Board:
    """
    Represents what we know about the opponent's grid.
    We store:
      - self.knowledge: int8 array indexed [x, y] holding a Knowledge value
      - self.runs: int32 array indexed [direction, x, y] holding run lengths
      - self.nearby: neighbour lists per kind ('horizontal', 'vertical',
        'diagonal', 'lines', 'all') per coordinate, fixed at construction

    Iteration order everywhere is column-major (all y for x=0, then x=1, ...),
    which is also numpy's flat order for a (width, height) array.  Queries
    that pick the first match rely on this order for tie-breaking.
    """

    def __init__(self, width: int, height: int):
        """Initialise a *width*×*height* board where every cell is unknown."""
        if width <= 0 or height <= 0:
            raise ValueError(f"board dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.knowledge = np.full((width, height), Knowledge.UNKNOWN, dtype=np.int8)
        self.runs = np.zeros((len(Direction), width, height), dtype=np.int32)
        self.nearby: Dict[str, Dict[Coord, List[Coord]]] = {
            kind: {p: self.neighbors_by_shift(p, shifts) for p in self.all_coords()}
            for kind, shifts in NEIGHBOUR_SHIFTS.items()
        }
        self._recompute(range(width), range(height))

    # ------------------------------------------------------------------ #
    # Basic access
    # ------------------------------------------------------------------ #
    def in_bounds(self, p: Coord) -> bool:
        x, y = p
        return 0 <= x < self.width and 0 <= y < self.height

    def all_coords(self) -> List[Coord]:
        """Every coordinate in scan order."""
        return [(x, y) for x in range(self.width) for y in range(self.height)]

    def __getitem__(self, p: Coord) -> Cell:
        x, y = p
        return Cell(Knowledge(int(self.knowledge[x, y])), *(int(v) for v in self.runs[:, x, y]))

    def state(self, p: Coord) -> Knowledge:
        return Knowledge(int(self.knowledge[p]))

    def is_unknown(self, p: Coord) -> bool:
        return self.knowledge[p] == Knowledge.UNKNOWN

    def is_hit(self, p: Coord) -> bool:
        return self.knowledge[p] == Knowledge.HIT

    def unknown_mask(self) -> np.ndarray:
        return self.knowledge == Knowledge.UNKNOWN

    def has_unknown(self) -> bool:
        return bool(self.unknown_mask().any())

    def hit_cells(self) -> List[Coord]:
        """All HIT coordinates in scan order."""
        return [(int(x), int(y)) for x, y in np.argwhere(self.knowledge == Knowledge.HIT)]

    # ------------------------------------------------------------------ #
    # Mutation
    # ------------------------------------------------------------------ #
    def mark_eliminated(self, points: Union[Coord, Iterable[Coord]]) -> None:
        """Eliminate unknown cells among *points*; off-board members are ignored.

        HIT cells are left untouched, knowledge never moves backwards.
        """
        if _is_coord(points):
            points = [points]  # type: ignore[list-item]
        changed = [p for p in points if self.in_bounds(p) and self.is_unknown(p)]  # type: ignore[union-attr]
        for p in changed:
            self.knowledge[p] = Knowledge.ELIMINATED
        if changed:
            self._recompute((x for x, _ in changed), (y for _, y in changed))

    def mark_hit(self, p: Coord) -> None:
        """Record a confirmed ship cell at *p* and refresh its row and column."""
        if not self.in_bounds(p):
            raise IndexError(f"{p} is outside a {self.width}x{self.height} board")
        self.knowledge[p] = Knowledge.HIT
        self._recompute([p[0]], [p[1]])

    def _recompute(self, xs: Iterable[int], ys: Iterable[int]) -> None:
        blocked = self.knowledge == Knowledge.ELIMINATED
        distances.recompute_lines(self.runs, blocked, xs, ys)

    # ------------------------------------------------------------------ #
    # Neighbourhoods
    # ------------------------------------------------------------------ #
    def neighbors_by_shift(self, p: Coord, shifts: Iterable[Coord]) -> List[Coord]:
        """In-bounds coordinates reached from *p* by each of *shifts*."""
        return [q for q in (shift(p, d) for d in shifts) if self.in_bounds(q)]

    def neighbors_of(self, points: Iterable[Coord]) -> Set[Coord]:
        """Union of the 8-neighbourhoods of *points*, excluding the points themselves."""
        members = set(points)
        around: Set[Coord] = set()
        for p in members:
            around.update(self.nearby["all"][p])
        return around - members

    def connected_hit_cells(self, seed: Coord) -> Set[Coord]:
        """Flood-fill HIT cells reachable from *seed* through the 8-neighbourhood."""
        if not self.is_hit(seed):
            raise ValueError(f"flood fill seed {seed} is not a hit cell")
        collected = {seed}
        frontier = deque([seed])
        while frontier:
            p = frontier.popleft()
            for q in self.nearby["all"][p]:
                if q not in collected and self.is_hit(q):
                    collected.add(q)
                    frontier.append(q)
        return collected

    # ------------------------------------------------------------------ #
    # Run-length accessors
    # ------------------------------------------------------------------ #
    def run_length(self, p: Coord, direction: Direction) -> int:
        return int(self.runs[direction, p[0], p[1]])

    def horizontal_runs(self, p: Coord) -> Tuple[int, int]:
        return tuple(self.run_length(p, d) for d in HORIZONTAL_DIRECTIONS)  # type: ignore[return-value]

    def vertical_runs(self, p: Coord) -> Tuple[int, int]:
        return tuple(self.run_length(p, d) for d in VERTICAL_DIRECTIONS)  # type: ignore[return-value]

    def line_runs(self, p: Coord) -> Tuple[int, int, int, int]:
        return tuple(self.run_length(p, d) for d in Direction)  # type: ignore[return-value]

    def line_space(self) -> np.ndarray:
        """Sum of the four run lengths for every cell, shape (width, height)."""
        return self.runs.sum(axis=0)

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #
    def rows(self) -> List[str]:
        """Board as text, one string per y, '.' unknown / 'o' eliminated / 'X' hit."""
        return [
            " ".join(SYMBOLS[Knowledge(int(self.knowledge[x, y]))] for x in range(self.width))
            for y in range(self.height)
        ]


def _is_coord(value: object) -> bool:
    return isinstance(value, tuple) and len(value) == 2 and all(isinstance(v, (int, np.integer)) for v in value)

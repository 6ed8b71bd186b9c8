import enum
from typing import Tuple

# (x, y); x indexes columns, y indexes rows
Coord = Tuple[int, int]

HORIZONTAL: Tuple[Coord, ...] = ((-1, 0), (1, 0))
VERTICAL: Tuple[Coord, ...] = ((0, -1), (0, 1))
DIAGONALS: Tuple[Coord, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
LINES: Tuple[Coord, ...] = VERTICAL + HORIZONTAL
ALL: Tuple[Coord, ...] = LINES + DIAGONALS


class Direction(enum.IntEnum):
    """The four line directions; the value doubles as the index into run arrays."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @property
    def delta(self) -> Coord:
        return _DELTAS[self]


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

HORIZONTAL_DIRECTIONS = (Direction.LEFT, Direction.RIGHT)
VERTICAL_DIRECTIONS = (Direction.UP, Direction.DOWN)


def shift(coord: Coord, delta: Coord) -> Coord:
    """Return *coord* moved by *delta*."""
    return coord[0] + delta[0], coord[1] + delta[1]


def format_coord(coord: Coord) -> str:
    """
    Convert an (x, y) pair to the protocol form 'x y'.
    """
    x, y = coord
    return f"{x} {y}"

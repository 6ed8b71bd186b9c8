from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .coord_utils import Coord, format_coord
from .errors import ProtocolError


class CommandParseError(ProtocolError):
    """Raised when a line cannot be parsed as a valid command."""


@dataclass(frozen=True)
class NewGame:
    width: int
    height: int
    ships: Tuple[int, ...]


@dataclass(frozen=True)
class Hit:
    x: int
    y: int

    @property
    def coord(self) -> Coord:
        return self.x, self.y


@dataclass(frozen=True)
class Sunk:
    x: int
    y: int

    @property
    def coord(self) -> Coord:
        return self.x, self.y


@dataclass(frozen=True)
class Miss:
    x: int
    y: int

    @property
    def coord(self) -> Coord:
        return self.x, self.y


@dataclass(frozen=True)
class Terminate:
    pass


Event = Union[NewGame, Hit, Sunk, Miss, Terminate]

# Protocol verb -> event type for the three shot results
SHOT_VERBS = {"Wound": Hit, "Kill": Sunk, "Miss": Miss}


def _ints(tokens: List[str], raw: str) -> List[int]:
    try:
        return [int(tok) for tok in tokens]
    except ValueError:
        raise CommandParseError(f"Non-integer argument in: {raw}") from None


def parse_command(line: Optional[str]) -> Event:
    """Turn one protocol line into an event.

    ``None`` stands for a closed input stream and is treated like ``Exit``.
    """
    if line is None:
        return Terminate()
    raw = line.strip()
    if not raw:
        raise CommandParseError("Empty command")
    parts = raw.split()
    verb, args = parts[0], parts[1:]
    if verb == "Init":
        values = _ints(args, raw)
        if len(values) < 3:
            raise CommandParseError("Init requires width, height and at least one ship length")
        width, height, ships = values[0], values[1], tuple(values[2:])
        if width <= 0 or height <= 0:
            raise CommandParseError(f"Invalid board size: {width}x{height}")
        if any(length <= 0 for length in ships):
            raise CommandParseError(f"Invalid ship lengths: {ships}")
        return NewGame(width=width, height=height, ships=ships)
    elif verb in SHOT_VERBS:
        values = _ints(args, raw)
        if len(values) != 2:
            raise CommandParseError(f"{verb} requires exactly two coordinates")
        x, y = values
        return SHOT_VERBS[verb](x=x, y=y)
    elif verb == "Exit" and not args:
        return Terminate()
    else:
        raise CommandParseError(f"Unknown command: {raw}")


def format_target(coord: Coord) -> str:
    """Serialise a shot for the output stream."""
    return format_coord(coord)

"""
simulate.py

Local self-play harness for the bot, including:
 - Referee class holding a hidden fleet placed under the no-touch rule
   (ships share neither an edge nor a corner) and answering shots with the
   protocol verbs Miss / Wound / Kill
 - play_game() which drives the engine through the text protocol against a
   referee and returns the number of shots it needed
 - main() for the `salvo-sim` command

"""

from __future__ import annotations

import argparse
import logging
import os
import random
import statistics
import sys
from typing import Dict, List, Optional, Sequence, Set

from . import config as _cfg
from .commands import format_target, parse_command
from .coord_utils import ALL, Coord, shift
from .engine import apply_event
from .targeting import select_target

logger = logging.getLogger(__name__)

# Full-layout restarts before the fleet is declared impossible to place
MAX_PLACEMENT_ATTEMPTS = 1000


class PlacementError(RuntimeError):
    """Raised when the fleet does not fit on the board under the no-touch rule."""


class Referee:
    """
    Represents the opponent's hidden board.
    We store:
      - self.ships: one set of (x, y) cells per ship, still afloat or not
      - self.occupied: cell -> index into self.ships
      - self.hits: cells already hit
    """

    def __init__(self, width: int, height: int, ships: Sequence[int], rng: Optional[random.Random] = None):
        self.width = width
        self.height = height
        self.rng = rng or random.Random()
        self.ships: List[Set[Coord]] = []
        self.occupied: Dict[Coord, int] = {}
        self.hits: Set[Coord] = set()
        self.place_ships_randomly(ships)

    def _in_bounds(self, p: Coord) -> bool:
        return 0 <= p[0] < self.width and 0 <= p[1] < self.height

    def place_ships_randomly(self, ships: Sequence[int]) -> None:
        """Position *ships* (largest first) without any two touching."""
        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            self.ships.clear()
            self.occupied.clear()
            if all(self._place_one(length) for length in sorted(ships, reverse=True)):
                return
        raise PlacementError(f"cannot place fleet {list(ships)} on a {self.width}x{self.height} board")

    def _place_one(self, length: int) -> bool:
        spots = [
            (x, y, horizontal)
            for x in range(self.width)
            for y in range(self.height)
            for horizontal in (True, False)
            if self.can_place_ship(x, y, length, horizontal)
        ]
        if not spots:
            return False
        x, y, horizontal = self.rng.choice(spots)
        self.do_place_ship(x, y, length, horizontal)
        return True

    def _cells(self, x: int, y: int, length: int, horizontal: bool) -> List[Coord]:
        return [(x + i, y) if horizontal else (x, y + i) for i in range(length)]

    def can_place_ship(self, x: int, y: int, length: int, horizontal: bool) -> bool:
        """Return `True` if the ship fits and no cell touches another ship."""
        cells = self._cells(x, y, length, horizontal)
        if not all(self._in_bounds(p) for p in cells):
            return False
        for p in cells:
            if p in self.occupied:
                return False
            if any(shift(p, d) in self.occupied for d in ALL):
                return False
        return True

    def do_place_ship(self, x: int, y: int, length: int, horizontal: bool) -> Set[Coord]:
        cells = set(self._cells(x, y, length, horizontal))
        index = len(self.ships)
        self.ships.append(cells)
        for p in cells:
            self.occupied[p] = index
        return cells

    def fire_at(self, p: Coord) -> str:
        """Process a shot at *p* and return the protocol verb for the result."""
        index = self.occupied.get(p)
        if index is None:
            return "Miss"
        self.hits.add(p)
        return "Kill" if self.ships[index] <= self.hits else "Wound"

    def all_ships_sunk(self) -> bool:
        return all(ship <= self.hits for ship in self.ships)


def play_game(width: int, height: int, ships: Sequence[int], seed: Optional[int] = None) -> int:
    """Play one full game against a fresh referee and return the shot count."""
    referee = Referee(width, height, ships, random.Random(seed))
    state = apply_event(None, parse_command(f"Init {width} {height} " + " ".join(str(s) for s in ships)))
    shots = 0
    while not referee.all_ships_sunk():
        if shots >= width * height:
            raise RuntimeError(f"game did not finish within {shots} shots (seed={seed})")
        target = select_target(state)
        reply = referee.fire_at(target)
        shots += 1
        state = apply_event(state, parse_command(f"{reply} {format_target(target)}"))
    apply_event(state, parse_command("Exit"))
    logger.debug("game seed=%s finished in %d shots", seed, shots)
    return shots


def main() -> None:  # pragma: no cover – CLI entry
    parser = argparse.ArgumentParser(description="Play the bot against a random referee")
    parser.add_argument("--games", type=int, default=_cfg.GAMES)
    parser.add_argument("--seed", type=int, default=_cfg.SEED)
    parser.add_argument("--width", type=int, default=_cfg.BOARD_WIDTH)
    parser.add_argument("--height", type=int, default=_cfg.BOARD_HEIGHT)
    parser.add_argument("--ships", type=int, nargs="+", default=_cfg.SHIPS)
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    args = parser.parse_args()

    if args.debug:
        os.environ["SALVO_DEBUG"] = "1"
    logging.basicConfig(
        level=logging.DEBUG if args.debug or _cfg.DEBUG else logging.INFO,
        format=_cfg.LOG_FORMAT,
        stream=sys.stderr,
    )

    base = args.seed if args.seed is not None else random.randrange(2**31)
    results = [play_game(args.width, args.height, args.ships, seed=base + i) for i in range(args.games)]
    logger.info("base seed %d", base)
    print(
        f"{args.games} games on {args.width}x{args.height} fleet={args.ships}: "
        f"mean={statistics.mean(results):.2f} min={min(results)} max={max(results)}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()

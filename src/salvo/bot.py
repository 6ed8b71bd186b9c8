"""Line-protocol bot entrypoint.

Reads one command per line from stdin and answers every non-terminal
command with the next shot as ``"x y"`` on stdout.  Logging goes to stderr.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, TextIO

from . import config as _cfg
from .commands import Terminate, format_target, parse_command
from .engine import GameState, apply_event
from .errors import SalvoError
from .targeting import select_target

logger = logging.getLogger(__name__)


def run(reader: TextIO, writer: TextIO) -> int:
    """Serve one protocol session; return the number of shots written."""
    state: Optional[GameState] = None
    shots = 0
    while True:
        line = reader.readline()
        event = parse_command(line if line else None)
        logger.debug("recv %r -> %r", line.rstrip("\n"), event)
        state = apply_event(state, event)
        if isinstance(event, Terminate):
            logger.info("Exit received after %d shots", shots)
            return shots
        if not state.board.has_unknown():
            logger.warning("No unknown cell left, nothing to shoot at")
            continue
        target = select_target(state)
        if logger.isEnabledFor(logging.DEBUG):
            for row in state.board.rows():
                logger.debug("  %s", row)
        writer.write(format_target(target) + "\n")
        writer.flush()
        shots += 1


def main() -> None:  # pragma: no cover – CLI entry
    parser = argparse.ArgumentParser(description="Battleship targeting bot (stdin/stdout line protocol)")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log errors.",
    )
    args = parser.parse_args()

    if args.debug:
        os.environ["SALVO_DEBUG"] = "1"

    if args.quiet:
        level = logging.ERROR
    elif args.debug or _cfg.DEBUG:
        level = logging.DEBUG
    elif args.verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=_cfg.LOG_FORMAT, stream=sys.stderr)

    try:
        run(sys.stdin, sys.stdout)
    except SalvoError:
        logger.exception("Bot stopped on invalid input")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Bot exiting")


if __name__ == "__main__":  # pragma: no cover
    main()

"""Central configuration for runtime-tunable parameters.

All constants can be overridden via environment variables so that the bot
runs with sensible defaults while the self-play harness and the test-suite
can pick different boards, fleets or seeds without touching the code.
"""

from __future__ import annotations

import os

# ===========================================================================
# Debugging and Logging
# ===========================================================================
# SALVO_DEBUG: If "1", enables detailed debug logging (events, targets, board).
#   Defaults to "0" (disabled).
#   Can also be set via the `--debug` CLI flag on `salvo` and `salvo-sim`.
#   Example: export SALVO_DEBUG=1
DEBUG: bool = os.getenv("SALVO_DEBUG", "0") == "1"

# Log lines go to stderr; stdout is reserved for the shot protocol.
LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


# ===========================================================================
# Scoring Constants
# ===========================================================================
# Score awarded to an axis where the largest remaining ship could be anchored.
# Also the threshold of the "weak check": a best rating at or below this
# value is not informative enough and the bot falls back to open space.
BIGGEST_SHIP_HIT_SCORE: int = 3

# Score awarded to an axis where the second-largest ship could be anchored.
SMALL_SHIP_HIT_SCORE: int = 1


# ===========================================================================
# Self-play Defaults (salvo-sim)
# ===========================================================================
# SALVO_BOARD_WIDTH / SALVO_BOARD_HEIGHT: board used by the referee.
#   Defaults to 10x10.
#   Example: export SALVO_BOARD_WIDTH=8
BOARD_WIDTH: int = int(os.getenv("SALVO_BOARD_WIDTH", "10"))
BOARD_HEIGHT: int = int(os.getenv("SALVO_BOARD_HEIGHT", "10"))

# SALVO_SHIPS: space-separated ship lengths for the referee's hidden fleet.
#   Defaults to the classic ten-ship fleet (one 4, two 3s, three 2s, four 1s).
#   Example: export SALVO_SHIPS="5 4 3 3 2"
SHIPS: list[int] = [int(tok) for tok in os.getenv("SALVO_SHIPS", "4 3 3 2 2 2 1 1 1 1").split()]

# SALVO_GAMES: number of games played by one `salvo-sim` run.
GAMES: int = int(os.getenv("SALVO_GAMES", "100"))

# SALVO_SEED: base seed for fleet placement; unset means a fresh seed per run.
SEED: int | None = int(os.environ["SALVO_SEED"]) if os.getenv("SALVO_SEED") else None

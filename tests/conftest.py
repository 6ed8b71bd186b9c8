import sys
from pathlib import Path

import pytest
import logging

# Ensure local `src` directory is importable before project is installed.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from salvo.commands import parse_command
from salvo.engine import apply_event

# Keep DEBUG board dumps out of test output
logging.basicConfig(level=logging.WARNING)


@pytest.fixture
def play() -> callable:
    """Factory that feeds protocol lines through the engine and returns the state."""

    def _play(*lines, state=None):
        for line in lines:
            state = apply_event(state, parse_command(line))
        return state

    return _play

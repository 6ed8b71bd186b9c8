"""Event processing: hits, kills, misses and the inference they trigger."""

from __future__ import annotations

import pytest

from salvo.board import Knowledge
from salvo.commands import Hit, Miss, NewGame, Sunk, Terminate
from salvo.engine import GameState, apply_event, narrow_orientation
from salvo.errors import InvariantViolation, ProtocolError
from salvo.targeting import select_target


def test_new_game_creates_fresh_state(play) -> None:
    state = play("Init 6 4 3 2")
    assert isinstance(state, GameState)
    assert (state.board.width, state.board.height) == (6, 4)
    assert state.fleet.remaining == (3, 2)
    assert not state.hunting
    assert state.board.unknown_mask().all()


def test_new_game_replaces_previous_state(play) -> None:
    old = play("Init 5 5 3", "Wound 1 2")
    new = apply_event(old, NewGame(width=4, height=4, ships=(2,)))
    assert new is not old
    assert not new.hunting
    assert new.board.unknown_mask().all()


def test_hit_marks_cell_and_diagonals(play) -> None:
    state = play("Init 5 5 3", "Wound 1 2")
    board = state.board
    assert state.hunting
    assert board.state((1, 2)) == Knowledge.HIT
    for p in [(0, 1), (0, 3), (2, 1), (2, 3)]:
        assert board.state(p) == Knowledge.ELIMINATED
    for p in [(0, 2), (2, 2), (1, 1), (1, 3)]:
        assert board.state(p) == Knowledge.UNKNOWN


def test_hunt_extends_along_a_line(play) -> None:
    state = play("Init 5 5 3", "Wound 1 2")
    target = select_target(state)
    assert target in {(0, 2), (2, 2)}
    assert target == (0, 2)


def test_first_hit_narrows_short_axis(play) -> None:
    # Only two rows: no ship of length 3 can stand vertically
    state = play("Init 5 2 3", "Wound 2 0")
    board = state.board
    assert board.state((2, 1)) == Knowledge.ELIMINATED
    assert select_target(state) == (1, 0)


def test_miss_while_hunting_renarrows_at_adjacent_hit(play) -> None:
    state = play("Init 6 6 3", "Wound 1 0")
    assert state.board.state((0, 0)) == Knowledge.UNKNOWN
    state = play("Miss 2 0", state=state)
    # the horizontal span through (1, 0) is now only two cells
    assert state.board.state((0, 0)) == Knowledge.ELIMINATED
    assert state.hunting
    assert select_target(state) == (1, 1)


def test_miss_without_hunting_only_marks_cell(play) -> None:
    state = play("Init 5 5 3 2", "Miss 2 2")
    assert state.board.state((2, 2)) == Knowledge.ELIMINATED
    assert int(state.board.unknown_mask().sum()) == 24


def test_sunk_after_hits() -> None:
    state = None
    for event in [
        NewGame(width=6, height=6, ships=(3, 2)),
        Hit(2, 2),
        Hit(3, 2),
        Hit(1, 2),
        Sunk(2, 2),
    ]:
        state = apply_event(state, event)

    board = state.board
    ship = {(1, 2), (2, 2), (3, 2)}
    assert not state.hunting
    assert state.fleet.remaining == (2,)
    for p in ship:
        assert board.state(p) == Knowledge.HIT
    for p in board.neighbors_of(ship):
        assert board.state(p) == Knowledge.ELIMINATED
    target = select_target(state)
    assert board.is_unknown(target)
    assert target not in board.neighbors_of(ship)


def test_kill_on_final_shot(play) -> None:
    state = play("Init 6 6 3 2", "Wound 2 2", "Wound 3 2", "Kill 1 2")
    board = state.board
    assert board.connected_hit_cells((1, 2)) == {(1, 2), (2, 2), (3, 2)}
    assert state.fleet.remaining == (2,)
    assert not state.hunting
    assert board.state((0, 2)) == Knowledge.ELIMINATED


def test_kill_single_cell_ship(play) -> None:
    state = play("Init 4 4 2 1", "Kill 0 0")
    board = state.board
    assert board.state((0, 0)) == Knowledge.HIT
    for p in [(1, 0), (0, 1), (1, 1)]:
        assert board.state(p) == Knowledge.ELIMINATED
    assert state.fleet.remaining == (2,)


def test_terminate_keeps_state(play) -> None:
    state = play("Init 4 4 2")
    assert apply_event(state, Terminate()) is state
    assert apply_event(None, Terminate()) is None


def test_narrow_orientation_ignores_long_axes(play) -> None:
    state = play("Init 5 5 3")
    narrow_orientation(state, (2, 2))
    assert state.board.unknown_mask().all()


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


def test_shot_before_new_game() -> None:
    with pytest.raises(InvariantViolation):
        apply_event(None, Hit(0, 0))


@pytest.mark.parametrize("event", [Hit(5, 0), Miss(0, -1), Sunk(7, 7)])
def test_out_of_range_coordinate_leaves_state_untouched(play, event) -> None:
    state = play("Init 5 5 3", "Wound 1 1")
    before = state.board.knowledge.copy()
    with pytest.raises(ProtocolError):
        apply_event(state, event)
    assert (state.board.knowledge == before).all()
    assert state.hunting


def test_hit_on_resolved_cell(play) -> None:
    state = play("Init 5 5 3", "Miss 0 0")
    with pytest.raises(InvariantViolation):
        apply_event(state, Hit(0, 0))


def test_miss_on_hit_cell(play) -> None:
    state = play("Init 5 5 3", "Wound 0 0")
    with pytest.raises(InvariantViolation):
        apply_event(state, Miss(0, 0))


def test_sunk_with_unknown_length_leaves_state_untouched(play) -> None:
    state = play("Init 5 5 3", "Wound 0 0")
    before = state.board.knowledge.copy()
    with pytest.raises(InvariantViolation):
        apply_event(state, Sunk(1, 0))
    assert (state.board.knowledge == before).all()
    assert state.hunting
    assert state.fleet.remaining == (3,)


def test_sunk_on_eliminated_cell(play) -> None:
    state = play("Init 5 5 3", "Miss 4 4")
    with pytest.raises(InvariantViolation):
        apply_event(state, Sunk(4, 4))


def test_game_state_new_accepts_any_iterable() -> None:
    state = GameState.new(4, 3, (length for length in [2, 3, 2]))
    assert state.fleet.remaining == (3, 2, 2)
    assert (state.board.width, state.board.height) == (4, 3)

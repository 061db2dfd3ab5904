import random

import pytest

from mineswept.board import Board, CellState, Outcome, mine_count_for
from mineswept.savefile import SavedGame
from mineswept.session import (
    DESKTOP_INITIAL_GRID_SIZE,
    DESKTOP_MAX_GRID_SIZE,
    MOBILE_INITIAL_GRID_SIZE,
    MOBILE_MAX_GRID_SIZE,
    Session,
    Sound,
    parse_grid_size,
)

CENTRE_MINE = [[0, 0, 0], [0, 1, 0], [0, 0, 0]]


def make_session(mobile=False, pattern=CENTRE_MINE):
    session = Session(mobile=mobile, rng=random.Random(7))
    session.restore(SavedGame(board=Board.from_mines(pattern)))
    session.drain_sounds()
    return session


def test_initial_sizes():
    assert Session(rng=random.Random(1)).size == DESKTOP_INITIAL_GRID_SIZE
    assert Session(mobile=True, rng=random.Random(1)).size == MOBILE_INITIAL_GRID_SIZE


def test_new_session_has_mines_and_no_flags():
    session = Session(rng=random.Random(3))
    assert session.remaining_mines == mine_count_for(session.size)
    assert not session.game_over and session.game_time == 0.0


@pytest.mark.parametrize(
    "text, expected",
    [("10", 10), ("10x10", 10), ("10X10", 10), ("3", 5), ("25", 20), ("x", 5), ("", 5),
     ("99999999999", 5)],
)
def test_parse_grid_size(text, expected):
    assert parse_grid_size(text) == expected


def test_set_custom_size():
    session = Session(rng=random.Random(2))
    assert session.set_custom_size("12x12")
    assert session.size == 12 and session.board.size == 12
    assert not session.set_custom_size("")
    assert session.size == 12


def test_reveal_safe_cell_plays_action():
    session = make_session()
    assert session.left_click(0, 0) is Outcome.SAFE
    assert session.board.cells[0][0].state is CellState.REVEALED
    assert session.drain_sounds() == [Sound.ACTION]
    assert session.drain_sounds() == []


def test_reveal_mine_loses():
    session = make_session()
    assert session.left_click(1, 1) is Outcome.LOST
    assert session.game_over and not session.game_won
    assert session.waiting_for_game_over
    assert session.drain_sounds() == [Sound.HIT]
    assert session.left_click(0, 0) is Outcome.IGNORED


def test_win_advances_size_on_randomize():
    session = make_session()
    cells = [(r, c) for r in range(3) for c in range(3) if (r, c) != (1, 1)]
    outcomes = [session.left_click(r, c) for r, c in cells]
    assert outcomes[-1] is Outcome.WON
    assert session.waiting_for_next_level and session.game_won
    before = session.size
    session.randomize()
    assert session.size == before + 1
    assert not session.waiting and not session.game_won


def test_win_at_max_size_keeps_size():
    session = make_session()
    session.size = DESKTOP_MAX_GRID_SIZE
    session.game_won = True
    assert session.beaten
    session.randomize()
    assert session.size == DESKTOP_MAX_GRID_SIZE


def test_reset_to_initial_size():
    session = Session(rng=random.Random(4))
    session.set_custom_size("15")
    session.reset_to_initial_size()
    assert session.size == DESKTOP_INITIAL_GRID_SIZE


def test_right_click_toggles_flag():
    session = make_session()
    before = session.remaining_mines
    assert session.right_click(1, 1) is Outcome.SAFE
    assert session.board.cells[1][1].state is CellState.FLAGGED
    assert session.remaining_mines == before - 1
    assert session.right_click(1, 1) is Outcome.SAFE
    assert session.remaining_mines == before
    assert session.drain_sounds() == [Sound.ACTION, Sound.ACTION]


def test_chord_with_correct_flag_reveals_neighbours():
    session = make_session()
    session.left_click(0, 0)
    session.right_click(1, 1)
    assert session.left_click(0, 0) is Outcome.IGNORED
    assert session.left_click(0, 0, right_down=True) is Outcome.SAFE
    assert session.board.cells[0][1].state is CellState.REVEALED
    assert session.board.cells[1][0].state is CellState.REVEALED


def test_chord_with_wrong_flag_loses():
    session = make_session()
    session.left_click(0, 0)
    session.right_click(0, 1)
    assert session.right_click(0, 0, left_down=True) is Outcome.LOST
    assert session.waiting_for_game_over
    assert session.board.cells[1][1].state is CellState.REVEALED


def test_tick_runs_clock_only_during_play():
    session = make_session()
    session.tick(0.5)
    session.tick(0.25)
    assert session.game_time == pytest.approx(0.75)
    session.left_click(1, 1)
    session.tick(1.0)
    assert session.game_time == pytest.approx(0.75)


def test_click_after_loaded_finished_game_restarts():
    session = make_session()
    session.restore(SavedGame(board=Board.from_mines(CENTRE_MINE), game_over=True))
    assert not session.waiting
    assert session.left_click(0, 0) is Outcome.IGNORED
    assert not session.game_over
    assert session.board.size == 3


def test_short_tap_reveals():
    session = make_session(mobile=True)
    session.tap_press(0, 0)
    assert session.tap_release(0, 0) is Outcome.SAFE
    assert session.board.cells[0][0].state is CellState.REVEALED


def test_long_hold_flags_once():
    session = make_session(mobile=True)
    session.tap_press(1, 1)
    assert not session.tap_hold()
    session.tick(0.5)
    assert session.tap_hold()
    assert not session.tap_hold()
    assert session.board.cells[1][1].state is CellState.FLAGGED
    assert session.tap_release(1, 1) is Outcome.IGNORED
    assert session.board.cells[1][1].state is CellState.FLAGGED


def test_long_hold_on_flag_unflags():
    session = make_session(mobile=True)
    session.board.toggle_flag(0, 2)
    session.tap_press(0, 2)
    session.tick(0.5)
    assert session.tap_hold()
    assert session.board.cells[0][2].state is CellState.HIDDEN


def test_release_on_other_cell_does_nothing():
    session = make_session(mobile=True)
    session.tap_press(0, 0)
    assert session.tap_release(2, 2) is Outcome.IGNORED
    assert session.board.cells[0][0].state is CellState.HIDDEN
    assert not session.is_tapping


def test_mobile_limits():
    session = Session(mobile=True, rng=random.Random(5))
    assert session.max_size == MOBILE_MAX_GRID_SIZE


def test_save_and_load_round_trip(tmp_path):
    session = make_session()
    session.left_click(0, 0)
    session.right_click(1, 1)
    session.tick(0.5)
    path = tmp_path / "game.sav"
    session.save(path)
    other = Session(rng=random.Random(9))
    other.load(path)
    assert other.board == session.board
    assert other.size == session.size
    assert other.game_time == session.game_time
    assert other.remaining_mines == session.remaining_mines


def test_load_missing_file_raises(tmp_path):
    session = make_session()
    with pytest.raises(OSError):
        session.load(tmp_path / "missing.sav")
"""Game session: level progression, timers, click and tap handling."""

from __future__ import annotations

import copy
import enum
import os
import random
import re

from mineswept import savefile
from mineswept.board import Board, CellState, Outcome, mine_count_for

DESKTOP_INITIAL_GRID_SIZE = 5
MOBILE_INITIAL_GRID_SIZE = 3
DESKTOP_MAX_GRID_SIZE = 20
MOBILE_MAX_GRID_SIZE = 8
CUSTOM_MIN_GRID_SIZE = 5
CUSTOM_MAX_GRID_SIZE = 20
LONG_TAP_THRESHOLD = 0.3

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class Sound(enum.Enum):
    """Sound effects the session asks to be played."""

    HIT = "hit"
    ACTION = "action"


def parse_grid_size(text: str) -> int:
    """Grid size from text such as "12" or "12x12", clamped to the custom range.

    Text with no leading number, or one too large for a 32-bit integer, counts as 0.
    """
    head = text.split("x", 1)[0]
    match = _LEADING_INT.match(head)
    size = 0
    if match:
        value = int(match.group(1))
        if _INT32_MIN <= value <= _INT32_MAX:
            size = value
    return max(CUSTOM_MIN_GRID_SIZE, min(CUSTOM_MAX_GRID_SIZE, size))


class Session:
    """One player's run of games, from the first grid up to the largest."""

    def __init__(self, mobile: bool = False, rng: random.Random | None = None) -> None:
        self.mobile = mobile
        self.rng = rng if rng is not None else random.Random()
        self.size = self.initial_size
        self.board = Board(self.size)
        self.game_over = False
        self.game_won = False
        self.game_time = 0.0
        self.game_over_text_timer = 0.0
        self.waiting_for_next_level = False
        self.waiting_for_game_over = False
        self.is_tapping = False
        self.tap_start_time = 0.0
        self.tap_cell: tuple[int, int] | None = None
        self.long_tap_performed = False
        self._sounds: list[Sound] = []
        self.randomize()

    @property
    def initial_size(self) -> int:
        return MOBILE_INITIAL_GRID_SIZE if self.mobile else DESKTOP_INITIAL_GRID_SIZE

    @property
    def max_size(self) -> int:
        return MOBILE_MAX_GRID_SIZE if self.mobile else DESKTOP_MAX_GRID_SIZE

    @property
    def waiting(self) -> bool:
        """Whether a finished game is waiting for a click to move on."""
        return self.waiting_for_next_level or self.waiting_for_game_over

    @property
    def remaining_mines(self) -> int:
        """Mines for this grid size minus the flags placed."""
        return mine_count_for(self.size) - self.board.flagged_count()

    @property
    def beaten(self) -> bool:
        """Whether the largest grid has been won."""
        return self.game_won and self.size == self.max_size

    def randomize(self) -> None:
        """Start a new game, one size larger after a win below the maximum."""
        if self.game_won and self.size < self.max_size:
            self.size += 1
        self.board = Board.random(self.size, self.rng)
        self.game_over = False
        self.game_won = False
        self.game_over_text_timer = 0.0
        self.game_time = 0.0
        self.waiting_for_next_level = False
        self.waiting_for_game_over = False

    def reset_to_initial_size(self) -> None:
        """Start over on the first grid size."""
        self.size = self.initial_size
        self.randomize()

    def set_custom_size(self, text: str) -> bool:
        """Start a game on the size given as text; empty text changes nothing."""
        if not text:
            return False
        self.size = parse_grid_size(text)
        self.randomize()
        return True

    def tick(self, dt: float) -> None:
        """Advance the game clock while a game is in progress."""
        if self.waiting:
            return
        if not self.game_over and not self.game_won:
            self.game_time += dt
        if self.game_over and not self.game_won:
            self.game_over_text_timer += dt

    def _finish(self, outcome: Outcome) -> Outcome:
        if outcome is Outcome.LOST:
            self.game_over = True
            self.game_won = False
            self.waiting_for_game_over = True
        elif outcome is Outcome.WON:
            self.game_over = True
            self.game_won = True
            self.waiting_for_next_level = True
        return outcome

    def _reveal(self, row: int, col: int) -> Outcome:
        outcome = self.board.reveal(row, col)
        if outcome is Outcome.LOST:
            self._sounds.append(Sound.HIT)
        elif outcome is not Outcome.IGNORED:
            self._sounds.append(Sound.ACTION)
        return self._finish(outcome)

    def _chord(self, row: int, col: int) -> Outcome:
        outcome = self.board.chord(row, col)
        if outcome in (Outcome.SAFE, Outcome.WON):
            self._sounds.append(Sound.ACTION)
        return self._finish(outcome)

    def _is_numbered(self, row: int, col: int) -> bool:
        cell = self.board.cells[row][col]
        return cell.state is CellState.REVEALED and cell.adjacent_mines > 0

    def _restart_if_over(self, row: int, col: int) -> bool:
        if self.game_over and self.board.is_valid(row, col):
            self.randomize()
            return True
        return self.game_over

    def left_click(self, row: int, col: int, right_down: bool = False) -> Outcome:
        """Reveal a hidden cell, or chord on a number while the right button is held."""
        if self.waiting or self._restart_if_over(row, col) or not self.board.is_valid(row, col):
            return Outcome.IGNORED
        state = self.board.cells[row][col].state
        if state is CellState.HIDDEN:
            return self._reveal(row, col)
        if self._is_numbered(row, col) and right_down:
            return self._chord(row, col)
        return Outcome.IGNORED

    def right_click(self, row: int, col: int, left_down: bool = False) -> Outcome:
        """Toggle a flag (SAFE when it changed), or chord while the left button is held."""
        if self.waiting or self._restart_if_over(row, col) or not self.board.is_valid(row, col):
            return Outcome.IGNORED
        if self.board.toggle_flag(row, col):
            self._sounds.append(Sound.ACTION)
            return Outcome.SAFE
        if self._is_numbered(row, col) and left_down:
            return self._chord(row, col)
        return Outcome.IGNORED

    def tap_press(self, row: int, col: int) -> None:
        """Begin a touch on a cell."""
        if self.waiting or self._restart_if_over(row, col) or not self.board.is_valid(row, col):
            return
        self.is_tapping = True
        self.tap_start_time = self.game_time
        self.tap_cell = (row, col)
        self.long_tap_performed = False

    def tap_release(self, row: int, col: int) -> Outcome:
        """End a touch: a short tap reveals, a tap on a number chords."""
        if self.waiting or self._restart_if_over(row, col) or not self.is_tapping:
            return Outcome.IGNORED
        self.is_tapping = False
        if self.tap_cell != (row, col) or not self.board.is_valid(row, col):
            return Outcome.IGNORED
        duration = self.game_time - self.tap_start_time
        cell = self.board.cells[row][col]
        if cell.state is CellState.HIDDEN:
            if duration < LONG_TAP_THRESHOLD:
                return self._reveal(row, col)
        elif cell.state is CellState.FLAGGED:
            if duration >= LONG_TAP_THRESHOLD and not self.long_tap_performed:
                cell.state = CellState.HIDDEN
        elif cell.adjacent_mines > 0:
            return self._chord(row, col)
        return Outcome.IGNORED

    def tap_hold(self) -> bool:
        """While a touch is held past the threshold, toggle the flag once."""
        if self.game_over or not self.is_tapping or self.tap_cell is None:
            return False
        row, col = self.tap_cell
        if not self.board.is_valid(row, col):
            return False
        if self.game_time - self.tap_start_time < LONG_TAP_THRESHOLD or self.long_tap_performed:
            return False
        if self.board.toggle_flag(row, col):
            self.long_tap_performed = True
            return True
        return False

    def drain_sounds(self) -> list[Sound]:
        """Sounds requested since the last call, in order."""
        sounds, self._sounds = self._sounds, []
        return sounds

    def to_saved(self) -> savefile.SavedGame:
        """A snapshot of the current game."""
        return savefile.SavedGame(
            board=copy.deepcopy(self.board),
            game_over=self.game_over,
            game_won=self.game_won,
            game_time=self.game_time,
            remaining_mines=self.remaining_mines,
        )

    def restore(self, saved: savefile.SavedGame) -> None:
        """Continue from a snapshot."""
        self.board = copy.deepcopy(saved.board)
        self.size = self.board.size
        self.game_over = saved.game_over
        self.game_won = saved.game_won
        self.game_time = saved.game_time

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write the current game to a file."""
        savefile.save(path, self.to_saved())

    def load(self, path: str | os.PathLike[str]) -> None:
        """Continue from a game saved in a file."""
        self.restore(savefile.load(path))
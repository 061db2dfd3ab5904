"""Minefield model: cells, mine placement, reveals and chording."""

from __future__ import annotations

import enum
import random as _random
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass


class CellState(enum.IntEnum):
    """Visible state of a cell; the values are those stored in save files."""

    HIDDEN = 0
    REVEALED = 1
    FLAGGED = 2


class Outcome(enum.Enum):
    """Result of revealing or chording on a board."""

    IGNORED = "ignored"
    SAFE = "safe"
    LOST = "lost"
    WON = "won"


@dataclass
class Cell:
    """One square of the minefield."""

    has_mine: bool = False
    state: CellState = CellState.HIDDEN
    adjacent_mines: int = 0


def mine_count_for(size: int) -> int:
    """Number of mines for a square grid: 15% of the cells, at least one."""
    return max(1, size * size * 3 // 20)


class Board:
    """A square minefield that tracks how many safe cells are still hidden."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"grid size must be positive, got {size}")
        self.size = size
        self.cells: list[list[Cell]] = [[Cell() for _ in range(size)] for _ in range(size)]
        self.remaining_cells = size * size - mine_count_for(size)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.size == other.size
            and self.cells == other.cells
            and self.remaining_cells == other.remaining_cells
        )

    def __repr__(self) -> str:
        return f"Board(size={self.size}, remaining_cells={self.remaining_cells})"

    @classmethod
    def random(cls, size: int, rng: _random.Random | None = None) -> Board:
        """A board of the given size with randomly placed mines."""
        board = cls(size)
        board.place_mines(rng)
        board.calculate_adjacent()
        return board

    @classmethod
    def from_mines(cls, mines: Iterable[Sequence[object]]) -> Board:
        """A board built from a square pattern of truthy (mine) and falsy values."""
        rows = [list(row) for row in mines]
        size = len(rows)
        if size == 0 or any(len(row) != size for row in rows):
            raise ValueError("mine pattern must be a non-empty square")
        board = cls(size)
        for pattern_row, cell_row in zip(rows, board.cells):
            for value, cell in zip(pattern_row, cell_row):
                cell.has_mine = bool(value)
        board.calculate_adjacent()
        board.remaining_cells = size * size - board._mine_total()
        return board

    def _mine_total(self) -> int:
        return sum(cell.has_mine for row in self.cells for cell in row)

    def _corners(self) -> set[tuple[int, int]]:
        last = self.size - 1
        return {(0, 0), (0, last), (last, 0), (last, last)}

    def is_valid(self, row: int, col: int) -> bool:
        """Whether (row, col) lies on the board."""
        return 0 <= row < self.size and 0 <= col < self.size

    def neighbours(self, row: int, col: int) -> Iterator[tuple[int, int]]:
        """The on-board cells around (row, col), row by row, excluding itself."""
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                r, c = row + dr, col + dc
                if self.is_valid(r, c):
                    yield r, c

    def place_mines(self, rng: _random.Random | None = None) -> None:
        """Scatter the board's quota of mines, never on one of the four corners."""
        rng = rng if rng is not None else _random.Random()
        corners = self._corners()
        to_place = mine_count_for(self.size)
        free = sum(
            1
            for r, row in enumerate(self.cells)
            for c, cell in enumerate(row)
            if (r, c) not in corners and not cell.has_mine
        )
        if to_place > free:
            raise ValueError(
                f"cannot place {to_place} mines on a {self.size}x{self.size} grid"
            )
        placed = 0
        while placed < to_place:
            row = rng.randrange(self.size)
            col = rng.randrange(self.size)
            cell = self.cells[row][col]
            if (row, col) in corners or cell.has_mine:
                continue
            cell.has_mine = True
            placed += 1
        self.remaining_cells = self.size * self.size - self._mine_total()

    def calculate_adjacent(self) -> None:
        """Recount the neighbouring mines of every safe cell."""
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                if not cell.has_mine:
                    cell.adjacent_mines = sum(
                        self.cells[nr][nc].has_mine for nr, nc in self.neighbours(r, c)
                    )

    def toggle_flag(self, row: int, col: int) -> bool:
        """Flag a hidden cell or unflag a flagged one; report whether it changed."""
        if not self.is_valid(row, col):
            return False
        cell = self.cells[row][col]
        if cell.state is CellState.HIDDEN:
            cell.state = CellState.FLAGGED
            return True
        if cell.state is CellState.FLAGGED:
            cell.state = CellState.HIDDEN
            return True
        return False

    def flagged_count(self) -> int:
        """Number of flagged cells."""
        return sum(cell.state is CellState.FLAGGED for row in self.cells for cell in row)

    def reveal(self, row: int, col: int) -> Outcome:
        """Reveal a hidden cell, flooding outward from cells with no adjacent mines."""
        if not self.is_valid(row, col) or self.cells[row][col].state is not CellState.HIDDEN:
            return Outcome.IGNORED
        start = self.cells[row][col]
        if start.has_mine:
            start.state = CellState.REVEALED
            self.remaining_cells -= 1
            self.reveal_all_mines()
            return Outcome.LOST
        pending = [(row, col)]
        while pending:
            r, c = pending.pop()
            cell = self.cells[r][c]
            if cell.state is not CellState.HIDDEN:
                continue
            cell.state = CellState.REVEALED
            self.remaining_cells -= 1
            if cell.adjacent_mines == 0:
                pending.extend(
                    (nr, nc)
                    for nr, nc in self.neighbours(r, c)
                    if self.cells[nr][nc].state is CellState.HIDDEN
                )
        return Outcome.WON if self.remaining_cells == 0 else Outcome.SAFE

    def reveal_all_mines(self) -> None:
        """Show every mine on the board."""
        for row in self.cells:
            for cell in row:
                if cell.has_mine:
                    cell.state = CellState.REVEALED

    def reveal_neighbouring_mines(self, row: int, col: int) -> None:
        """Show the mines around (row, col)."""
        for r, c in self.neighbours(row, col):
            if self.cells[r][c].has_mine:
                self.cells[r][c].state = CellState.REVEALED

    def chord(self, row: int, col: int) -> Outcome:
        """Reveal the unflagged neighbours of a cell whose mine count is fully flagged."""
        if not self.is_valid(row, col):
            return Outcome.IGNORED
        around = list(self.neighbours(row, col))
        flagged = [(r, c) for r, c in around if self.cells[r][c].state is CellState.FLAGGED]
        if len(flagged) != self.cells[row][col].adjacent_mines:
            return Outcome.IGNORED
        if any(not self.cells[r][c].has_mine for r, c in flagged):
            self.reveal_neighbouring_mines(row, col)
            return Outcome.LOST
        outcome = Outcome.SAFE
        for r, c in around:
            cell = self.cells[r][c]
            if cell.state is CellState.FLAGGED:
                continue
            if cell.has_mine:
                self.reveal_neighbouring_mines(r, c)
                return Outcome.LOST
            if self.reveal(r, c) is Outcome.WON:
                outcome = Outcome.WON
        return outcome
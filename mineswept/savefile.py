"""Binary save files holding a board and the state of the game around it."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass

from mineswept.board import Board, CellState

_HEADER = struct.Struct("<i")
_CELL = struct.Struct("<?ii")
_TRAILER = struct.Struct("<??fii")


class SaveFileError(ValueError):
    """Raised when save data is truncated or malformed."""


@dataclass
class SavedGame:
    """Everything a save file records."""

    board: Board
    game_over: bool = False
    game_won: bool = False
    game_time: float = 0.0
    remaining_mines: int = 0


def encode(saved: SavedGame) -> bytes:
    """Serialise a saved game to bytes."""
    board = saved.board
    parts = [_HEADER.pack(board.size)]
    parts.extend(
        _CELL.pack(cell.has_mine, int(cell.state), cell.adjacent_mines)
        for row in board.cells
        for cell in row
    )
    parts.append(
        _TRAILER.pack(
            saved.game_over,
            saved.game_won,
            saved.game_time,
            board.remaining_cells,
            saved.remaining_mines,
        )
    )
    return b"".join(parts)


def decode(data: bytes) -> SavedGame:
    """Parse bytes written by encode."""
    if len(data) < _HEADER.size:
        raise SaveFileError("save data too short for grid size")
    (size,) = _HEADER.unpack_from(data, 0)
    if size < 1:
        raise SaveFileError(f"invalid grid size {size}")
    expected = _HEADER.size + size * size * _CELL.size + _TRAILER.size
    if len(data) < expected:
        raise SaveFileError(f"save data truncated: {len(data)} of {expected} bytes")
    board = Board(size)
    offset = _HEADER.size
    for row in board.cells:
        for cell in row:
            has_mine, state, adjacent = _CELL.unpack_from(data, offset)
            offset += _CELL.size
            try:
                cell.state = CellState(state)
            except ValueError as exc:
                raise SaveFileError(f"invalid cell state {state}") from exc
            cell.has_mine = has_mine
            cell.adjacent_mines = adjacent
    game_over, game_won, game_time, remaining_cells, remaining_mines = _TRAILER.unpack_from(
        data, offset
    )
    board.remaining_cells = remaining_cells
    return SavedGame(
        board=board,
        game_over=game_over,
        game_won=game_won,
        game_time=game_time,
        remaining_mines=remaining_mines,
    )


def save(path: str | os.PathLike[str], saved: SavedGame) -> None:
    """Write a saved game to a file."""
    with open(path, "wb") as handle:
        handle.write(encode(saved))


def load(path: str | os.PathLike[str]) -> SavedGame:
    """Read a saved game from a file."""
    with open(path, "rb") as handle:
        return decode(handle.read())
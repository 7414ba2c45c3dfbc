"""
board.py - Immutable board representation for connect4ai

The Board is a value object: it wraps a read-only numpy grid and every
transformation returns a new Board, so successive game states never share
mutable storage. Row 0 is the top row; pieces settle towards row ROWS - 1.
"""

from typing import Iterable, Optional, Sequence

import numpy as np

from connect4ai.utils import (ROWS, COLS, Player, ColumnFullError, InvalidBoardError,
                              OutOfRangeError, as_player, check_column, is_valid_position,
                              render_board_ascii)

GRID_DTYPE = np.int8


def _validated_grid(grid) -> np.ndarray:
    """Copy grid into a fresh array, checking shape, symbols and gravity."""
    try:
        arr = np.array(grid, dtype=GRID_DTYPE)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidBoardError(f"Cannot build a grid from {grid!r}: {e}") from None

    if arr.shape != (ROWS, COLS):
        raise InvalidBoardError(f"Grid must be {ROWS}x{COLS}, got {arr.shape}")

    if not np.isin(arr, [p.value for p in Player]).all():
        raise InvalidBoardError("Grid contains values other than 0, 1 and 2")

    occupied = arr != Player.EMPTY.value
    # A piece directly above an empty cell is floating
    floating = occupied[:-1] & ~occupied[1:]
    if floating.any():
        cols = sorted({int(c) for c in np.nonzero(floating)[1]})
        raise InvalidBoardError(f"Pieces float above empty cells in columns {cols}")

    return arr


class Board:
    """
    A 6x7 Connect Four grid with value semantics.

    Boards compare equal when their cells match and can be used as dict keys.
    """

    __slots__ = ('_grid',)

    def __init__(self, grid: Optional[Sequence[Sequence[int]]] = None):
        """
        Create a board.

        Args:
            grid: Optional ROWS x COLS cell values (0 empty, 1 and 2 players),
                top row first. Omit for an empty board.

        Raises:
            InvalidBoardError: if grid is malformed or breaks gravity
        """
        if grid is None:
            arr = np.zeros((ROWS, COLS), dtype=GRID_DTYPE)
        else:
            arr = _validated_grid(grid)
        arr.setflags(write=False)
        self._grid = arr

    @classmethod
    def empty(cls) -> 'Board':
        """Create a board with all cells empty."""
        return cls()

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[int]]) -> 'Board':
        """Create a board from nested lists, top row first."""
        return cls([list(r) for r in rows])

    @classmethod
    def from_moves(cls, columns: Iterable[int], first_player=Player.ONE) -> 'Board':
        """
        Create a board by dropping pieces into columns in order, players alternating.

        Raises:
            OutOfRangeError, ColumnFullError: for an unplayable column
            InvalidPlayerError: if first_player is not 1 or 2
        """
        board = cls()
        player = as_player(first_player)
        for col in columns:
            board = board.with_piece(ROWS - 1 - board.column_height(col), col, player)
            player = player.other()
        return board

    @classmethod
    def _wrap(cls, arr: np.ndarray) -> 'Board':
        # Skips validation; callers guarantee arr is a fresh valid grid
        board = cls.__new__(cls)
        arr.setflags(write=False)
        board._grid = arr
        return board

    @property
    def grid(self) -> np.ndarray:
        """Read-only view of the cells."""
        return self._grid

    def to_array(self) -> np.ndarray:
        """Writable copy of the cells."""
        return self._grid.copy()

    def cell_at(self, row: int, col: int) -> Player:
        """
        Get the contents of a cell.

        Raises:
            OutOfRangeError: if row or col is outside the grid
        """
        if not is_valid_position(row, col):
            raise OutOfRangeError(f"Cell ({row}, {col}) out of range")
        return Player(int(self._grid[row, col]))

    def column_height(self, col: int) -> int:
        """Number of pieces in a column (0 to ROWS)."""
        check_column(col)
        return int(np.count_nonzero(self._grid[:, col]))

    def is_full(self) -> bool:
        """True when every column holds ROWS pieces."""
        # With gravity the top row fills last
        return bool(np.all(self._grid[0] != Player.EMPTY.value))

    def piece_count(self, player=None) -> int:
        """Count occupied cells, or only those of one player."""
        if player is None:
            return int(np.count_nonzero(self._grid))
        return int(np.count_nonzero(self._grid == as_player(player).value))

    def with_piece(self, row: int, col: int, player) -> 'Board':
        """
        Return a copy of this board with player's piece at (row, col).

        row must be the cell the piece would settle on, directly above the
        column's existing pieces.

        Raises:
            OutOfRangeError: if row or col is outside the grid
            ColumnFullError: if the column already holds ROWS pieces
            InvalidBoardError: if the piece would float or overwrite a cell
        """
        height = self.column_height(col)
        if height >= ROWS:
            raise ColumnFullError(f"Column {col} is full")
        if not is_valid_position(row, col):
            raise OutOfRangeError(f"Cell ({row}, {col}) out of range")
        landing = ROWS - 1 - height
        if row != landing:
            raise InvalidBoardError(f"A piece in column {col} lands on row {landing}, not {row}")
        value = as_player(player).value

        arr = self._grid.copy()
        arr[row, col] = value
        return Board._wrap(arr)

    def render(self) -> str:
        return render_board_ascii(self._grid)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board({self._grid.tolist()!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self._grid, other._grid)

    def __hash__(self) -> int:
        return hash(self._grid.tobytes())


if __name__ == "__main__":
    board = Board.from_rows([
        [0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 2, 0, 0, 0],
        [0, 0, 1, 1, 0, 0, 0],
        [0, 2, 1, 1, 2, 0, 0],
    ])
    print(board)
    print("Heights:", [board.column_height(c) for c in range(COLS)])
    print("Full:", board.is_full())

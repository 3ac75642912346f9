from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .pieces import ActivePiece


logger = logging.getLogger(__name__)

EMPTY = 0


@dataclass
class PlacementResult:
    lines_cleared: int


class Board:
    """Fixed-size grid of landed cells.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Integer values are the color ids of the pieces that landed there.
    Row 0 is the top of the board.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"board dimensions must be positive, got {self.width}x{self.height}")
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_filled(self, x: int, y: int) -> bool:
        return bool(self.grid[y, x] != EMPTY)

    def merge(self, piece: ActivePiece) -> PlacementResult:
        """Write the piece into the terrain, clear complete rows and return the result."""
        for x, y in piece.cells():
            # Cells above the top edge have nowhere to go.
            if y >= 0:
                self.grid[y, x] = piece.color
        return self._clear_full_lines()

    def _clear_full_lines(self) -> PlacementResult:
        full_rows = np.where(np.all(self.grid != EMPTY, axis=1))[0]
        if full_rows.size == 0:
            return PlacementResult(lines_cleared=0)
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        kept = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=self.grid.dtype)
        self.grid = np.vstack((new_rows, kept))
        assert self.grid.shape == (self.height, self.width)
        logger.debug("cleared rows %s", full_rows.tolist())
        return PlacementResult(lines_cleared=num)

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        top_index = int(non_empty_rows[0])
        return self.height - top_index

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            column = self.grid[:, x]
            seen_block = False
            for cell in column:
                if cell != EMPTY:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()


def create_board(height: int, width: int) -> Board:
    return Board(width, height)


def collides(piece: ActivePiece, board: Board) -> bool:
    """True if any filled cell of ``piece`` is off the sides or bottom, or on a filled cell.

    Rows above the top edge are not checked.
    """
    for x, y in piece.cells():
        if y >= board.height or x < 0 or x >= board.width:
            return True
        if y >= 0 and board.grid[y, x] != EMPTY:
            return True
    return False


def composite(board: Board, piece: Optional[ActivePiece]) -> np.ndarray:
    """Copy of the board with the active piece painted over it, for rendering."""
    state = board.clone_state()
    if piece is not None:
        for x, y in piece.cells():
            if board.is_inside(x, y):
                state[y, x] = piece.color
    return state

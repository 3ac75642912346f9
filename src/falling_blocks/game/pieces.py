from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Sequence, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    Z = 4
    S = 5
    L = 6
    J = 7


Shape = np.ndarray

MAX_SHAPE_SIZE = 4

# Boards, previews and observations store color ids as int8.
MAX_COLOR_ID = int(np.iinfo(np.int8).max)


def rotate_cw(shape: Shape) -> Shape:
    """Rotate clockwise: an R x C shape becomes C x R with out[c, R-1-r] = shape[r, c]."""
    return np.rot90(shape, 1, axes=(1, 0)).copy()


@dataclass(frozen=True, eq=False)
class ShapeTemplate:
    name: str
    cells: Shape
    color: int

    def __post_init__(self) -> None:
        cells = np.array(self.cells, dtype=np.int8)
        if cells.ndim != 2:
            raise ValueError(f"template {self.name!r} must be a 2-D grid")
        h, w = cells.shape
        if not (1 <= h <= MAX_SHAPE_SIZE and 1 <= w <= MAX_SHAPE_SIZE):
            raise ValueError(f"template {self.name!r} must fit in a {MAX_SHAPE_SIZE}x{MAX_SHAPE_SIZE} box")
        if not cells.any():
            raise ValueError(f"template {self.name!r} has no filled cell")
        if not 0 < int(self.color) <= MAX_COLOR_ID:
            raise ValueError(f"template {self.name!r} needs a color id in [1, {MAX_COLOR_ID}]")
        cells = (cells != 0).astype(np.int8)
        cells.setflags(write=False)
        object.__setattr__(self, "cells", cells)
        object.__setattr__(self, "color", int(self.color))

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])


def _template(kind: TetrominoType, rows: Sequence[Sequence[int]]) -> ShapeTemplate:
    return ShapeTemplate(name=kind.name, cells=np.array(rows, dtype=np.int8), color=int(kind))


TETROMINOES: Tuple[ShapeTemplate, ...] = (
    _template(TetrominoType.I, [[1, 1, 1, 1]]),
    _template(TetrominoType.O, [[1, 1], [1, 1]]),
    _template(TetrominoType.T, [[1, 1, 1], [0, 1, 0]]),
    _template(TetrominoType.Z, [[1, 1, 0], [0, 1, 1]]),
    _template(TetrominoType.S, [[0, 1, 1], [1, 1, 0]]),
    _template(TetrominoType.L, [[1, 1, 1], [1, 0, 0]]),
    _template(TetrominoType.J, [[1, 1, 1], [0, 0, 1]]),
)


def validate_catalog(catalog: Sequence[ShapeTemplate], board_width: int) -> Tuple[ShapeTemplate, ...]:
    catalog = tuple(catalog)
    if not catalog:
        raise ValueError("piece catalog is empty")
    for template in catalog:
        if not isinstance(template, ShapeTemplate):
            raise ValueError(f"catalog entry {template!r} is not a ShapeTemplate")
        if template.width > board_width:
            raise ValueError(f"template {template.name!r} is wider than the board")
    return catalog


@dataclass(eq=False)
class ActivePiece:
    """The falling piece. ``shape`` is a private copy of the template cells."""

    shape: Shape
    color: int
    x: int
    y: int
    name: str = ""

    @classmethod
    def spawn(cls, template: ShapeTemplate, board_width: int) -> "ActivePiece":
        x = board_width // 2 - template.width // 2
        return cls(shape=np.array(template.cells, dtype=np.int8), color=template.color, x=x, y=0, name=template.name)

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return ActivePiece(self.shape.copy(), self.color, self.x + dx, self.y + dy, self.name)

    def rotated(self) -> "ActivePiece":
        return ActivePiece(rotate_cw(self.shape), self.color, self.x, self.y, self.name)

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Absolute (x, y) board coordinates of every filled cell."""
        h, w = self.shape.shape
        for dy in range(h):
            for dx in range(w):
                if self.shape[dy, dx]:
                    yield self.x + dx, self.y + dy

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])


def preview_grid(template: ShapeTemplate, size: int = MAX_SHAPE_SIZE) -> np.ndarray:
    """Centre a template in a ``size`` x ``size`` window, filled cells carrying its color."""
    grid = np.zeros((size, size), dtype=np.int8)
    off_x = (size - template.width) // 2
    off_y = (size - template.height) // 2
    window = grid[off_y : off_y + template.height, off_x : off_x + template.width]
    window[template.cells != 0] = template.color
    return grid

from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Set

import numpy as np

from .pieces import Piece


GRID_SIZE = 10
NO_CHAR = -1


class Position(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class Cell:
    filled: bool = False
    color: Optional[str] = None
    char: Optional[str] = None
    char_index: Optional[int] = None
    collected: bool = False


class Grid:
    """Square board of cells, row-major with the origin at the top-left.

    Cell state lives in parallel numpy planes indexed ``[y, x]``:
    ``filled`` and ``collected`` are boolean, ``color`` and ``char`` are
    object arrays holding ``None`` for empty, and ``char_index`` uses
    ``NO_CHAR`` when the cell carries no phrase character.
    """

    def __init__(self, size: int = GRID_SIZE) -> None:
        self.size = int(size)
        shape = (self.size, self.size)
        self.filled = np.zeros(shape, dtype=np.bool_)
        self.color = np.full(shape, None, dtype=object)
        self.char = np.full(shape, None, dtype=object)
        self.char_index = np.full(shape, NO_CHAR, dtype=np.int32)
        self.collected = np.zeros(shape, dtype=np.bool_)

    @classmethod
    def empty(cls, size: int = GRID_SIZE) -> "Grid":
        return cls(size)

    def copy(self) -> "Grid":
        new_grid = Grid.__new__(Grid)
        new_grid.size = self.size
        new_grid.filled = self.filled.copy()
        new_grid.color = self.color.copy()
        new_grid.char = self.char.copy()
        new_grid.char_index = self.char_index.copy()
        new_grid.collected = self.collected.copy()
        return new_grid

    def cell(self, x: int, y: int) -> Cell:
        index = int(self.char_index[y, x])
        return Cell(
            filled=bool(self.filled[y, x]),
            color=self.color[y, x],
            char=self.char[y, x],
            char_index=None if index == NO_CHAR else index,
            collected=bool(self.collected[y, x]),
        )

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def collides(self, piece: Piece, pos: Position) -> bool:
        """True if any occupied shape cell is out of bounds or already filled."""
        for x, y in piece.cells_at(pos[0], pos[1]):
            if not self.is_inside(x, y):
                return True
            if self.filled[y, x]:
                return True
        return False

    def stamp(self, piece: Piece, pos: Position) -> "Grid":
        """Return a copy with the piece's cells filled; bounds are not checked."""
        new_grid = self.copy()
        for x, y in piece.cells_at(pos[0], pos[1]):
            new_grid.filled[y, x] = True
            new_grid.color[y, x] = piece.color
        return new_grid

    def complete_rows(self) -> List[int]:
        return [int(row) for row in np.flatnonzero(np.all(self.filled, axis=1))]

    def complete_cols(self) -> List[int]:
        return [int(col) for col in np.flatnonzero(np.all(self.filled, axis=0))]

    def filled_ratio(self) -> float:
        return float(np.count_nonzero(self.filled)) / float(self.size * self.size)

    def char_indices(self) -> Set[int]:
        return {int(i) for i in self.char_index[self.char_index != NO_CHAR]}

    def uncollected_char_indices(self) -> Set[int]:
        mask = (self.char_index != NO_CHAR) & ~self.collected
        return {int(i) for i in self.char_index[mask]}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.size == other.size
            and np.array_equal(self.filled, other.filled)
            and np.array_equal(self.color, other.color)
            and np.array_equal(self.char, other.char)
            and np.array_equal(self.char_index, other.char_index)
            and np.array_equal(self.collected, other.collected)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows = []
        for y in range(self.size):
            line = []
            for x in range(self.size):
                ch = self.char[y, x]
                if ch is not None and not self.collected[y, x]:
                    line.append(ch)
                else:
                    line.append("█" if self.filled[y, x] else "·")
            rows.append("".join(line))
        return "\n".join(rows)


def empty_grid(size: int = GRID_SIZE) -> Grid:
    return Grid.empty(size)


def collides(grid: Grid, piece: Piece, pos: Position) -> bool:
    return grid.collides(piece, pos)


def stamp(grid: Grid, piece: Piece, pos: Position) -> Grid:
    return grid.stamp(piece, pos)

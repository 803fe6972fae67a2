from __future__ import annotations

import random
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np


class PieceType(IntEnum):
    I = 0
    O = 1
    T = 2
    S = 3
    Z = 4
    J = 5
    L = 6


Shape = np.ndarray


BASE_SHAPES = {
    PieceType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    PieceType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    PieceType.T: np.array([[1, 1, 1], [0, 1, 0]], dtype=np.int8),
    PieceType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    PieceType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
    PieceType.J: np.array([[1, 0, 0], [1, 1, 1]], dtype=np.int8),
    PieceType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
}

PIECE_COLORS = {
    PieceType.I: "#06b6d4",
    PieceType.O: "#eab308",
    PieceType.T: "#a855f7",
    PieceType.S: "#22c55e",
    PieceType.Z: "#ef4444",
    PieceType.J: "#3b82f6",
    PieceType.L: "#f97316",
}


def _frozen(shape: Shape) -> Shape:
    out = np.array(shape, dtype=np.int8, copy=True)
    out.flags.writeable = False
    return out


class Piece:
    """A tetromino value: type, 0/1 shape matrix and color.

    The shape array is read-only; rotating yields a new piece.
    """

    __slots__ = ("kind", "shape", "color")

    def __init__(self, kind: PieceType, shape: Optional[Shape] = None, color: Optional[str] = None) -> None:
        self.kind = PieceType(kind)
        self.shape = _frozen(BASE_SHAPES[self.kind] if shape is None else shape)
        self.color = PIECE_COLORS[self.kind] if color is None else color

    @classmethod
    def of(cls, kind: PieceType) -> "Piece":
        return cls(kind)

    @property
    def rows(self) -> int:
        return int(self.shape.shape[0])

    @property
    def cols(self) -> int:
        return int(self.shape.shape[1])

    @property
    def area(self) -> int:
        return int(np.count_nonzero(self.shape))

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        cells: List[Tuple[int, int]] = []
        for dy in range(self.rows):
            for dx in range(self.cols):
                if self.shape[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.color == other.color
            and np.array_equal(self.shape, other.shape)
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.color, self.shape.shape, self.shape.tobytes()))

    def __repr__(self) -> str:
        return f"Piece({self.kind.name}, {self.rows}x{self.cols})"


def random_piece(rng: Optional[random.Random] = None) -> Piece:
    """Pick one of the seven tetrominoes uniformly at random."""
    rng = rng or random.Random()
    kind = rng.choice(list(PieceType))
    return Piece(kind)


def rotate(piece: Piece) -> Piece:
    """Rotate 90 degrees clockwise: new[c][rows - 1 - r] = old[r][c]."""
    return Piece(piece.kind, np.rot90(piece.shape, 1, axes=(1, 0)), piece.color)


def unique_rotations(piece: Piece) -> List[Piece]:
    rotations: List[Piece] = []
    current = piece
    for _ in range(4):
        if not any(np.array_equal(current.shape, seen.shape) for seen in rotations):
            rotations.append(current)
        current = rotate(current)
    return rotations

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .grid import Grid, Position
from .pieces import Piece, rotate


def can_place_anywhere(grid: Grid, piece: Piece) -> bool:
    """Exhaustive search over 4 rotations x every in-bounds anchor."""
    candidate = piece
    for _ in range(4):
        for y in range(grid.size - candidate.rows + 1):
            for x in range(grid.size - candidate.cols + 1):
                if not grid.collides(candidate, Position(x, y)):
                    return True
        candidate = rotate(candidate)
    return False


def valid_placements(grid: Grid, piece: Piece) -> List[Tuple[int, int, int]]:
    """All legal (x, y, rotation) for ``piece``, rotation counted clockwise."""
    placements: List[Tuple[int, int, int]] = []
    candidate = piece
    for rotation in range(4):
        for y in range(grid.size - candidate.rows + 1):
            for x in range(grid.size - candidate.cols + 1):
                if not grid.collides(candidate, Position(x, y)):
                    placements.append((x, y, rotation))
        candidate = rotate(candidate)
    return placements


def is_game_over(grid: Grid, tray: Iterable[Optional[Piece]]) -> bool:
    remaining = [piece for piece in tray if piece is not None]
    if not remaining:
        return False
    return not any(can_place_anywhere(grid, piece) for piece in remaining)

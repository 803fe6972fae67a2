from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

import numpy as np

from .grid import NO_CHAR, Grid, Position
from .pieces import Piece
from .rules import ScoringRules


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacementResult:
    accepted: bool
    grid: Grid
    cleared_char_indices: FrozenSet[int] = frozenset()
    score_delta: int = 0
    new_combo: int = 0
    rows_cleared: Tuple[int, ...] = field(default=())
    cols_cleared: Tuple[int, ...] = field(default=())

    @property
    def lines_cleared(self) -> int:
        return len(self.rows_cleared) + len(self.cols_cleared)


def in_bounds(grid: Grid, piece: Piece, pos: Position) -> bool:
    x, y = pos
    return 0 <= x <= grid.size - piece.cols and 0 <= y <= grid.size - piece.rows


def resolve_placement(
    grid: Grid,
    piece: Piece,
    pos: Position,
    combo: int,
    rules: Optional[ScoringRules] = None,
) -> PlacementResult:
    """Place ``piece`` at ``pos``, clear complete lines and score the move.

    A placement that leaves the board or overlaps a filled cell is rejected:
    the input grid and combo are returned untouched. The input grid is never
    mutated. Clearing only resets ``filled``; a cleared cell keeps its last
    ``color``.
    """
    rules = rules or ScoringRules()
    pos = Position(int(pos[0]), int(pos[1]))
    if not in_bounds(grid, piece, pos) or grid.collides(piece, pos):
        logger.debug("Rejected %r at (%d, %d)", piece, pos.x, pos.y)
        return PlacementResult(accepted=False, grid=grid, new_combo=combo)

    new_grid = grid.stamp(piece, pos)
    rows = tuple(new_grid.complete_rows())
    cols = tuple(new_grid.complete_cols())

    # A cell on both a full row and a full column is credited once.
    cleared = np.zeros_like(new_grid.filled)
    for row in rows:
        cleared[row, :] = True
    for col in cols:
        cleared[:, col] = True

    newly_collected = cleared & (new_grid.char_index != NO_CHAR) & ~new_grid.collected
    collected = frozenset(int(i) for i in new_grid.char_index[newly_collected])
    new_grid.collected[newly_collected] = True
    new_grid.filled[cleared] = False

    lines = len(rows) + len(cols)
    score = rules.score_for_lines(lines, combo)
    new_combo = rules.next_combo(lines, combo)
    if lines:
        logger.debug(
            "Cleared rows %s cols %s, collected %d chars, +%d (combo %d)",
            list(rows), list(cols), len(collected), score, new_combo,
        )
    return PlacementResult(
        accepted=True,
        grid=new_grid,
        cleared_char_indices=collected,
        score_delta=score,
        new_combo=new_combo,
        rows_cleared=rows,
        cols_cleared=cols,
    )

from __future__ import annotations

import logging
import math
import random
from typing import List, Optional

import numpy as np

from .grid import NO_CHAR, Grid


logger = logging.getLogger(__name__)


def max_per_line(length: int, size: int) -> int:
    """Soft cap on phrase characters landing in any single row or column."""
    return math.ceil(length / (size / 2)) + 1


def _shuffled_indices(total: int, rng: random.Random) -> List[int]:
    indices = list(range(total))
    rng.shuffle(indices)
    return indices


def distribute(grid: Grid, text: str, rng: Optional[random.Random] = None) -> Grid:
    """Scatter the characters of ``text`` over a copy of ``grid``.

    All previous character state is wiped first; ``filled`` and ``color`` are
    kept. Characters are assigned in phrase order to cells taken from a
    shuffled walk of the board, skipping any cell whose row or column already
    holds ``max_per_line`` characters. When the walk runs out first, the
    remaining characters stay unplaced (see ``unplaced_indices``).
    """
    rng = rng or random.Random()
    new_grid = grid.copy()
    new_grid.char.fill(None)
    new_grid.char_index.fill(NO_CHAR)
    new_grid.collected.fill(False)

    size = new_grid.size
    cap = max_per_line(len(text), size)
    row_counts = np.zeros(size, dtype=np.int32)
    col_counts = np.zeros(size, dtype=np.int32)

    placed = 0
    for idx in _shuffled_indices(size * size, rng):
        if placed >= len(text):
            break
        x = idx % size
        y = idx // size
        if row_counts[y] < cap and col_counts[x] < cap:
            new_grid.char[y, x] = text[placed]
            new_grid.char_index[y, x] = placed
            row_counts[y] += 1
            col_counts[x] += 1
            placed += 1

    if placed < len(text):
        logger.warning(
            "Placed %d of %d phrase characters (cap %d per line); the rest cannot be collected",
            placed, len(text), cap,
        )
    else:
        logger.debug("Distributed %d characters, cap %d per line", placed, cap)
    return new_grid


def unplaced_indices(grid: Grid, text: str) -> List[int]:
    present = grid.char_indices()
    return [i for i in range(len(text)) if i not in present]

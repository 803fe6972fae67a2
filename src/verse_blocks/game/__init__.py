"""Placement and resolution engine for Verse Blocks.

Exports the core game engine and supporting classes:
- Piece, PieceType, random_piece, rotate: tetromino catalog and rotation
- Grid, Cell, Position, empty_grid, collides, stamp: board model
- distribute: scatters phrase characters over the board
- resolve_placement, PlacementResult: placement, line clearing and scoring
- can_place_anywhere, is_game_over: move-availability search
- GameState, apply, new_game: immutable state and reducer
- VerseBlocksGame, GameConfig: stateful session driver
"""

from .pieces import Piece, PieceType, random_piece, rotate, unique_rotations
from .grid import Cell, Grid, Position, collides, empty_grid, stamp
from .text import distribute, max_per_line, unplaced_indices
from .rules import ScoringRules
from .resolver import PlacementResult, resolve_placement
from .oracle import can_place_anywhere, is_game_over, valid_placements
from .state import GameState, NextPhrase, PlacePiece, RotatePiece, Transition, apply, new_game
from .core import GameConfig, VerseBlocksGame

__all__ = [
    "Piece",
    "PieceType",
    "random_piece",
    "rotate",
    "unique_rotations",
    "Cell",
    "Grid",
    "Position",
    "collides",
    "empty_grid",
    "stamp",
    "distribute",
    "max_per_line",
    "unplaced_indices",
    "ScoringRules",
    "PlacementResult",
    "resolve_placement",
    "can_place_anywhere",
    "is_game_over",
    "valid_placements",
    "GameState",
    "NextPhrase",
    "PlacePiece",
    "RotatePiece",
    "Transition",
    "apply",
    "new_game",
    "GameConfig",
    "VerseBlocksGame",
]

"""Immutable game state and the reducer that advances it one action at a time.

``apply`` never mutates its input: every transition builds a new ``GameState``.
Randomness (tray refills, phrase distribution) comes from the ``rng`` passed
in by the caller.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional, Tuple, Union

from ..phrases import Phrase
from .grid import Grid, Position, empty_grid
from .oracle import is_game_over
from .pieces import Piece, random_piece, rotate
from .resolver import PlacementResult, resolve_placement
from .rules import ScoringRules
from .text import distribute


logger = logging.getLogger(__name__)


Tray = Tuple[Optional[Piece], ...]


@dataclass(frozen=True)
class GameState:
    grid: Grid
    tray: Tray
    phrase: Phrase
    score: int = 0
    high_score: int = 0
    combo: int = 0
    collected_indices: FrozenSet[int] = frozenset()
    completed_phrases: Tuple[str, ...] = ()
    game_over: bool = False
    round_complete: bool = False

    @property
    def round_progress(self) -> float:
        if not self.phrase.text:
            return 1.0
        return len(self.collected_indices) / len(self.phrase.text)

    @property
    def remaining_pieces(self) -> Tuple[Piece, ...]:
        return tuple(piece for piece in self.tray if piece is not None)


@dataclass(frozen=True)
class PlacePiece:
    slot: int
    x: int
    y: int


@dataclass(frozen=True)
class RotatePiece:
    slot: int


@dataclass(frozen=True)
class NextPhrase:
    phrase: Phrase


Action = Union[PlacePiece, RotatePiece, NextPhrase]


@dataclass(frozen=True)
class Transition:
    state: GameState
    placement: Optional[PlacementResult] = field(default=None)

    @property
    def accepted(self) -> bool:
        return self.placement is None or self.placement.accepted


def new_tray(rng: random.Random, size: int = 3) -> Tray:
    return tuple(random_piece(rng) for _ in range(size))


def new_game(
    phrase: Phrase,
    rng: random.Random,
    grid_size: int = 10,
    tray_size: int = 3,
    high_score: int = 0,
    completed_phrases: Tuple[str, ...] = (),
) -> GameState:
    grid = distribute(empty_grid(grid_size), phrase.text, rng)
    return GameState(
        grid=grid,
        tray=new_tray(rng, tray_size),
        phrase=phrase,
        high_score=high_score,
        completed_phrases=tuple(completed_phrases),
    )


def _piece_in_slot(state: GameState, slot: int) -> Piece:
    if not 0 <= slot < len(state.tray):
        raise IndexError(f"tray slot {slot} out of range")
    piece = state.tray[slot]
    if piece is None:
        raise ValueError(f"tray slot {slot} is empty")
    return piece


def _place(state: GameState, action: PlacePiece, rng: random.Random, rules: ScoringRules) -> Transition:
    if state.round_complete:
        raise ValueError("round complete; apply NextPhrase before placing")
    piece = _piece_in_slot(state, action.slot)
    result = resolve_placement(state.grid, piece, Position(action.x, action.y), state.combo, rules)
    if not result.accepted:
        return Transition(state, result)

    tray = list(state.tray)
    tray[action.slot] = None
    if all(p is None for p in tray):
        tray = list(new_tray(rng, len(tray)))

    score = state.score + result.score_delta
    collected = state.collected_indices | result.cleared_char_indices
    next_state = replace(
        state,
        grid=result.grid,
        tray=tuple(tray),
        score=score,
        combo=result.new_combo,
        collected_indices=collected,
    )

    if len(collected) >= len(state.phrase.text):
        logger.info("Phrase revealed: %s", state.phrase.reference or state.phrase.text)
        completed = state.completed_phrases
        if state.phrase.reference not in completed:
            completed = completed + (state.phrase.reference,)
        return Transition(replace(next_state, round_complete=True, completed_phrases=completed), result)

    return Transition(_end_if_stuck(next_state), result)


def _end_if_stuck(state: GameState) -> GameState:
    if not is_game_over(state.grid, state.tray):
        return state
    logger.info("No legal move left, final score %d", state.score)
    return replace(state, game_over=True, high_score=max(state.high_score, state.score))


def _next_phrase(state: GameState, action: NextPhrase, rng: random.Random) -> Transition:
    grid = distribute(state.grid, action.phrase.text, rng)
    next_state = replace(
        state,
        grid=grid,
        phrase=action.phrase,
        collected_indices=frozenset(),
        round_complete=False,
    )
    # The tray left over from the completing move may not fit the board.
    return Transition(_end_if_stuck(next_state))


def apply(
    state: GameState,
    action: Action,
    rng: Optional[random.Random] = None,
    rules: Optional[ScoringRules] = None,
) -> Transition:
    rng = rng or random.Random()
    rules = rules or ScoringRules()
    if isinstance(action, NextPhrase):
        return _next_phrase(state, action, rng)
    if state.game_over:
        raise ValueError("game is over")
    if isinstance(action, PlacePiece):
        return _place(state, action, rng, rules)
    if isinstance(action, RotatePiece):
        if state.round_complete:
            raise ValueError("round complete; apply NextPhrase before rotating")
        piece = _piece_in_slot(state, action.slot)
        tray = list(state.tray)
        tray[action.slot] = rotate(piece)
        return Transition(replace(state, tray=tuple(tray)))
    raise TypeError(f"unknown action {action!r}")

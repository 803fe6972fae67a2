from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..phrases import PhraseBook
from .oracle import valid_placements
from .resolver import PlacementResult
from .rules import ScoringRules
from .state import GameState, NextPhrase, PlacePiece, RotatePiece, apply, new_game


@dataclass
class GameConfig:
    grid_size: int = 10
    tray_size: int = 3
    random_seed: Optional[int] = None
    max_episode_steps: int = 10000


class VerseBlocksGame:
    """Stateful driver around the pure reducer.

    Holds the random source, the phrase book and the current ``GameState``;
    each call threads the state through ``apply`` and keeps the result.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        phrases: Optional[PhraseBook] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.phrases = phrases or PhraseBook()
        self.rng = random.Random(self.config.random_seed)
        self.step_count = 0
        self.state: GameState = self._fresh_state()

    def _fresh_state(self, high_score: int = 0, completed: Tuple[str, ...] = ()) -> GameState:
        return new_game(
            self.phrases.choose(self.rng),
            self.rng,
            grid_size=self.config.grid_size,
            tray_size=self.config.tray_size,
            high_score=high_score,
            completed_phrases=completed,
        )

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        # High score and revealed phrases carry over between runs.
        self.step_count = 0
        self.state = self._fresh_state(self.state.high_score, self.state.completed_phrases)

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    def place(self, slot: int, x: int, y: int) -> PlacementResult:
        transition = apply(self.state, PlacePiece(slot, x, y), self.rng, self.rules)
        self.state = transition.state
        if transition.accepted:
            self.step_count += 1
        assert transition.placement is not None
        return transition.placement

    def rotate(self, slot: int) -> None:
        self.state = apply(self.state, RotatePiece(slot), self.rng, self.rules).state

    def place_rotated(self, slot: int, x: int, y: int, rotation: int) -> PlacementResult:
        """Rotate the slot's piece ``rotation`` times clockwise, then place it.

        The tray keeps the rotated orientation even when placement is rejected.
        """
        for _ in range(rotation % 4):
            self.rotate(slot)
        return self.place(slot, x, y)

    def advance_phrase(self) -> None:
        self.state = apply(self.state, NextPhrase(self.phrases.choose(self.rng)), self.rng, self.rules).state

    def get_current_piece_types(self) -> List[int]:
        return [-1 if piece is None else int(piece.kind) for piece in self.state.tray]

    def get_valid_actions(self) -> List[Tuple[int, int, int, int]]:
        """List of (slot, x, y, rotation) legal placements."""
        actions: List[Tuple[int, int, int, int]] = []
        if self.state.game_over or self.state.round_complete:
            return actions
        for slot, piece in enumerate(self.state.tray):
            if piece is None:
                continue
            for x, y, rotation in valid_placements(self.state.grid, piece):
                actions.append((slot, x, y, rotation))
        return actions

    def get_state(self) -> dict:
        state = self.state
        return {
            "grid": state.grid.filled.copy(),
            "current_pieces": self.get_current_piece_types(),
            "pieces_remaining": len(state.remaining_pieces),
            "score": state.score,
            "high_score": state.high_score,
            "combo": state.combo,
            "phrase": state.phrase.text,
            "reference": state.phrase.reference,
            "collected": sorted(state.collected_indices),
            "round_complete": state.round_complete,
            "game_over": state.game_over,
            "step_count": self.step_count,
            "filled_ratio": state.grid.filled_ratio(),
        }


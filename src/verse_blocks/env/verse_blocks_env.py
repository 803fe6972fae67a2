from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from verse_blocks.game import GameConfig, PieceType, ScoringRules, VerseBlocksGame
from verse_blocks.phrases import PhraseBook


MAX_COMBO_OBS = 255


def _compute_action_mask(game: VerseBlocksGame) -> np.ndarray:
    size = game.config.grid_size
    k = game.config.tray_size
    mask = np.zeros((k, size, size, 4), dtype=np.bool_)
    for slot, x, y, r in game.get_valid_actions():
        mask[slot, y, x, r] = True
    return mask


class VerseBlocksEnv(gym.Env):
    """Place-a-piece environment: one step is one (slot, x, y, rotation) attempt.

    Rewards are the engine's score delta times ``score_scale``, plus
    ``round_bonus`` when a placement reveals the whole phrase. A revealed round
    is advanced to a fresh phrase inside the same step.
    """

    metadata = {"render_modes": [], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 phrases: Optional[PhraseBook] = None,
                 score_scale: float = 0.01,
                 round_bonus: float = 10.0,
                 invalid_action_penalty: float = -0.1,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = VerseBlocksGame(config, rules, phrases)

        self.score_scale = float(score_scale)
        self.round_bonus = float(round_bonus)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)

        size = self.game.config.grid_size
        k = self.game.config.tray_size

        # grid: filled cells, chars: cells still hiding an uncollected character
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "chars": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=len(PieceType) - 1, shape=(k,), dtype=np.int8),
                "combo": spaces.Discrete(MAX_COMBO_OBS + 1),
            }
        )

        # Action: (slot, x, y, rotation)
        self.action_space = spaces.MultiDiscrete((k, size, size, 4))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        state = self.game.state
        grid = state.grid
        chars = (grid.char_index >= 0) & ~grid.collected
        return {
            "grid": grid.filled.astype(np.int8),
            "chars": chars.astype(np.int8),
            "pieces": np.array(self.game.get_current_piece_types(), dtype=np.int8),
            "combo": min(state.combo, MAX_COMBO_OBS),
        }

    def _get_info(self) -> Dict[str, Any]:
        state = self.game.state
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": state.score,
            "combo": state.combo,
            "phrase": state.phrase.text,
            "collected": len(state.collected_indices),
            "completed_phrases": len(state.completed_phrases),
            "steps": self.game.step_count,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        slot, x, y, r = map(int, action)
        reward_components: Dict[str, float] = {}
        gained = 0

        mask = _compute_action_mask(self.game)
        valid = 0 <= slot < mask.shape[0] and 0 <= y < mask.shape[1] and 0 <= x < mask.shape[2] \
            and 0 <= r < 4 and bool(mask[slot, y, x, r])
        if valid:
            result = self.game.place_rotated(slot, x, y, r)
            gained = result.score_delta
            reward_components["score"] = self.score_scale * float(gained)
            if self.game.state.round_complete:
                reward_components["round"] = self.round_bonus
                self.game.advance_phrase()
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        terminated = bool(self.game.game_over)
        self._steps += 1
        truncated = self._steps >= self.game.config.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))
        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = float(gained)
        return self._get_obs(), reward, terminated, truncated, info

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def close(self) -> None:
        pass

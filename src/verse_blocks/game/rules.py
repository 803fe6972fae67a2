from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    placement_score: int = 10
    line_base_score: int = 100
    combo_multiplier: int = 2

    def score_for_lines(self, lines: int, combo: int = 0) -> int:
        """Points for one placement given the combo counter going into it.

        No line: flat placement score. Otherwise ``lines ** 2 * base``,
        multiplied when the previous placement also cleared a line.
        """
        if lines <= 0:
            return self.placement_score
        score = lines * lines * self.line_base_score
        if combo > 0:
            score *= self.combo_multiplier
        return score

    def next_combo(self, lines: int, combo: int) -> int:
        return combo + 1 if lines > 0 else 0

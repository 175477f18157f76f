from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    placement_score: int = 10

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        # Clears beyond four score as four
        return self.line_clear_scores[min(lines, 4) - 1]

    def score_for_placement(self, lines: int) -> int:
        """Line-clear bonus when rows were cleared, otherwise the flat placement bonus."""
        if lines > 0:
            return self.score_for_lines(lines)
        return self.placement_score

    def hard_drop_bonus(self, drop_distance: int) -> int:
        return max(drop_distance - 1, 0)

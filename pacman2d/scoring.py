"""
Point table helpers, extra-life thresholds and the session high score.
"""

from __future__ import annotations

from .config import EXTRA_LIFE_SCORE, GHOST_EAT_POINTS


def ghost_points(combo_index: int) -> int:
    """Points for the n-th ghost (0-based) eaten in one frightened window."""
    index = max(0, min(combo_index, len(GHOST_EAT_POINTS) - 1))
    return GHOST_EAT_POINTS[index]


def extra_lives_earned(old_score: int, new_score: int) -> int:
    if new_score <= old_score:
        return 0
    return new_score // EXTRA_LIFE_SCORE - old_score // EXTRA_LIFE_SCORE


class ScoreBoard:
    """Keeps the best score seen this session, seeded from storage."""

    def __init__(self, high_score: int = 0):
        self.high_score = max(0, int(high_score))

    def observe(self, *scores: int) -> int:
        for score in scores:
            if score > self.high_score:
                self.high_score = score
        return self.high_score

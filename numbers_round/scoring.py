"""Scoring for a committed round."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .game_models import Done, Number

# (max distance, points), checked in order
POINT_BANDS: Tuple[Tuple[int, int], ...] = ((0, 10), (5, 7), (10, 5))


@dataclass(frozen=True)
class RoundScore:
    target: int
    final_value: Number
    distance: Number
    points: int

    @property
    def exact(self) -> bool:
        return self.distance == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target": self.target,
            "final_value": self.final_value,
            "distance": self.distance,
            "points": self.points,
        }


def distance_to_target(target: int, value: Number) -> Number:
    if isinstance(value, float) and not math.isfinite(value):
        return math.inf
    return abs(target - value)


def points_for_distance(distance: Number) -> int:
    for limit, points in POINT_BANDS:
        if distance <= limit:
            return points
    return 0


def score_round(done: Done) -> RoundScore:
    distance = distance_to_target(done.target, done.final_value)
    return RoundScore(
        target=done.target,
        final_value=done.final_value,
        distance=distance,
        points=points_for_distance(distance),
    )


__all__ = ["POINT_BANDS", "RoundScore", "distance_to_target", "points_for_distance", "score_round"]

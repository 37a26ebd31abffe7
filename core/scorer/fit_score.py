#!/usr/bin/env python3
"""
Fit Score - weighted blend of the résumé and answer-quality ratings.

Ratings (1-5) map linearly onto 0-100 and are averaged with the job's
resume/answers weights:

    fit = round((resume_rating/5*100 * resume_weight
                 + answer_rating/5*100 * answers_weight)
                / (resume_weight + answers_weight))

Rounding is half-up (68.5 -> 69), not Python's banker's rounding.
"""

import math
from typing import Any, Tuple

MIN_RATING = 1
MAX_RATING = 5
DEFAULT_WEIGHT = 5


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def normalize_weights(resume_weight: Any, answers_weight: Any) -> Tuple[int, int]:
    """Fall back to the default weight for missing or non-positive values."""
    def _one(w: Any) -> int:
        try:
            w = int(w)
        except (TypeError, ValueError):
            return DEFAULT_WEIGHT
        return w if w > 0 else DEFAULT_WEIGHT

    return _one(resume_weight), _one(answers_weight)


def weight_percentages(resume_weight: int, answers_weight: int) -> Tuple[int, int]:
    """Each share rounded independently; the pair may not sum to exactly 100."""
    total = resume_weight + answers_weight
    return (
        round_half_up(resume_weight / total * 100),
        round_half_up(answers_weight / total * 100),
    )


def clamp_rating(raw: Any) -> int:
    """Coerce a model-supplied rating into an integer in [1, 5].

    Missing, zero or non-numeric values count as the neutral 3.
    """
    try:
        value = float(raw) if raw else 3.0
    except (TypeError, ValueError):
        value = 3.0
    if math.isnan(value) or math.isinf(value):
        value = 3.0
    return int(clamp(round_half_up(value), MIN_RATING, MAX_RATING))


def compute_fit_score(
    resume_rating: int,
    answer_quality_rating: int,
    resume_weight: int,
    answers_weight: int,
) -> int:
    resume_score = resume_rating / MAX_RATING * 100
    answer_score = answer_quality_rating / MAX_RATING * 100
    weighted = (resume_score * resume_weight + answer_score * answers_weight) / (resume_weight + answers_weight)
    return int(clamp(round_half_up(weighted), 0, 100))

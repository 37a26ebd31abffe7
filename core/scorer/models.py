#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict

from core.llm.schema_models import UNKNOWN_EXPERIENCE_LEVEL

NEUTRAL_FIT_SCORE = 50
NEUTRAL_RATING = 3

AI_UNAVAILABLE_SUMMARY = "AI scoring not available."
AI_ERROR_SUMMARY = "Error during AI evaluation."
NO_SUMMARY = "No summary available."


@dataclass(frozen=True)
class ScoringResult:
    """AI evaluation of one candidate, ready to persist.

    fit_score is in [0, 100]; both ratings are in [1, 5].
    """
    fit_score: int
    resume_rating: int
    answer_quality_rating: int
    resume_summary: str
    experience_level: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def neutral(cls, summary: str) -> "ScoringResult":
        return cls(
            fit_score=NEUTRAL_FIT_SCORE,
            resume_rating=NEUTRAL_RATING,
            answer_quality_rating=NEUTRAL_RATING,
            resume_summary=summary,
            experience_level=UNKNOWN_EXPERIENCE_LEVEL,
        )


# Returned when no AI provider is configured
UNAVAILABLE_RESULT = ScoringResult.neutral(AI_UNAVAILABLE_SUMMARY)

# Returned when the provider call fails or its reply cannot be used
ERROR_RESULT = ScoringResult.neutral(AI_ERROR_SUMMARY)

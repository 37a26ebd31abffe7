#!/usr/bin/env python3
"""
Scoring Service - AI evaluation of a candidate against a job.

One provider call per invocation, never retried. Provider errors and
malformed replies degrade to ERROR_RESULT; a missing provider yields
UNAVAILABLE_RESULT. ``score`` does not raise.
"""

import logging
from typing import Any, Dict, Optional

from core.config_loader import LlmConfig
from core.dto import CandidateDTO, JobDTO
from core.llm.interfaces import LLMProvider
from core.llm.schema_models import (
    CANDIDATE_EVALUATION_SCHEMA,
    EXPERIENCE_LEVELS,
    UNKNOWN_EXPERIENCE_LEVEL,
)
from core.llm.system_prompts import CANDIDATE_EVALUATION_SYSTEM_PROMPT
from core.scorer.fit_score import (
    clamp_rating,
    compute_fit_score,
    normalize_weights,
    weight_percentages,
)
from core.scorer.models import ERROR_RESULT, NO_SUMMARY, UNAVAILABLE_RESULT, ScoringResult
from core.scorer.prompt import build_evaluation_prompt

logger = logging.getLogger(__name__)


def normalize_experience_level(raw: Any) -> str:
    if not isinstance(raw, str):
        return UNKNOWN_EXPERIENCE_LEVEL
    for level in EXPERIENCE_LEVELS:
        if raw.strip().lower() == level.lower():
            return level
    return UNKNOWN_EXPERIENCE_LEVEL


class CandidateScoringService:
    """
    Builds the weighted evaluation prompt, calls the provider and turns the
    reply into a ScoringResult.

    Args:
        llm: Provider, or None when AI scoring is disabled
        config: LLM settings (résumé character budget)
    """

    def __init__(self, llm: Optional[LLMProvider], config: Optional[LlmConfig] = None):
        self.llm = llm
        self.config = config or LlmConfig()

    def score(self, candidate: CandidateDTO, job: JobDTO, resume_text: str) -> ScoringResult:
        if self.llm is None:
            logger.info("AI provider not configured. Returning default scores.")
            return UNAVAILABLE_RESULT

        resume_weight, answers_weight = normalize_weights(job.resume_weight, job.answers_weight)
        resume_percent, answers_percent = weight_percentages(resume_weight, answers_weight)

        prompt = build_evaluation_prompt(
            candidate,
            job,
            resume_text,
            resume_percent,
            answers_percent,
            resume_char_budget=self.config.resume_char_budget,
            scoring_instructions=job.scoring_instructions,
        )

        try:
            reply = self.llm.extract_structured_data(
                prompt,
                CANDIDATE_EVALUATION_SCHEMA,
                system_prompt=CANDIDATE_EVALUATION_SYSTEM_PROMPT,
            )
            return self._to_result(reply, resume_weight, answers_weight)
        except Exception as e:
            logger.error(f"Error scoring candidate {candidate.id}: {e}")
            return ERROR_RESULT

    @staticmethod
    def _to_result(reply: Dict[str, Any], resume_weight: int, answers_weight: int) -> ScoringResult:
        if not isinstance(reply, dict):
            raise ValueError(f"Unexpected evaluation reply type: {type(reply).__name__}")

        resume_rating = clamp_rating(reply.get("resume_rating"))
        answer_rating = clamp_rating(reply.get("answer_quality_rating"))
        summary = reply.get("resume_summary")

        return ScoringResult(
            fit_score=compute_fit_score(resume_rating, answer_rating, resume_weight, answers_weight),
            resume_rating=resume_rating,
            answer_quality_rating=answer_rating,
            resume_summary=summary if isinstance(summary, str) and summary.strip() else NO_SUMMARY,
            experience_level=normalize_experience_level(reply.get("experience_level")),
        )

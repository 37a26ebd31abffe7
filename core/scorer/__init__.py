#!/usr/bin/env python3
"""
Scoring Module - AI candidate evaluation.

Public API:
- CandidateScoringService: prompt, provider call and result clamping
- ScoringResult: Dataclass for scoring output

- models.py: Data structures and the fixed fallback results
- fit_score.py: Weight normalization, rating clamps, fit score formula
- prompt.py: Evaluation prompt assembly
- service.py: CandidateScoringService orchestrator
"""

from core.scorer.models import ScoringResult
from core.scorer.service import CandidateScoringService

__all__ = ['CandidateScoringService', 'ScoringResult']

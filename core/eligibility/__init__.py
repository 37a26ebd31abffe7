from core.eligibility.engine import (
    elimination_reasons,
    evaluate_eliminatory_questions,
    has_elimination,
)
from core.eligibility.models import (
    ApplicationAnswer,
    ApplicationQuestion,
    DisqualificationFlag,
    EliminatoryCriteria,
    QuestionType,
    Severity,
)

__all__ = [
    "ApplicationAnswer",
    "ApplicationQuestion",
    "DisqualificationFlag",
    "EliminatoryCriteria",
    "QuestionType",
    "Severity",
    "elimination_reasons",
    "evaluate_eliminatory_questions",
    "has_elimination",
]

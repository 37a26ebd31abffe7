import logging
from typing import Iterable, List, Sequence

from core.eligibility.models import (
    ApplicationAnswer,
    ApplicationQuestion,
    DisqualificationFlag,
    Severity,
)
from core.eligibility.rules import build_rule

logger = logging.getLogger(__name__)


def evaluate_eliminatory_questions(
    questions: Sequence[ApplicationQuestion],
    answers: Sequence[ApplicationAnswer],
) -> List[DisqualificationFlag]:
    """
    Evaluate a candidate's answers against the job's eliminatory questions.

    Pure and deterministic. Questions that are not eliminatory, have no
    criteria, or were left unanswered produce no flag.

    Returns:
        Flags in question order, severity 'eliminated' or 'warning'.
    """
    answers_by_question = {}
    for answer in answers:
        # First answer wins if a question was answered twice
        answers_by_question.setdefault(answer.question_id, answer.answer)

    flags: List[DisqualificationFlag] = []
    for question in questions:
        rule = build_rule(question)
        if rule is None:
            continue

        value = (answers_by_question.get(question.id) or "").strip()
        if not value:
            continue

        flag = rule.evaluate(question, value)
        if flag is not None:
            logger.debug(f"Question {question.id} flagged as {flag.severity.value}: {flag.reason}")
            flags.append(flag)

    return flags


def has_elimination(flags: Iterable[DisqualificationFlag]) -> bool:
    return any(flag.severity == Severity.ELIMINATED for flag in flags)


def elimination_reasons(flags: Iterable[DisqualificationFlag]) -> str:
    """Join the reasons of all eliminated flags, used as the candidate's flagged_reason."""
    return "; ".join(f.reason for f in flags if f.severity == Severity.ELIMINATED)

"""
Eligibility Rules - One criteria type per eliminatory question family.

Each rule evaluates a single (question, trimmed answer) pair and returns a
DisqualificationFlag or None. Rules never raise.
"""
import math
import re
from dataclasses import dataclass, field
from typing import List, Optional, Union

from core.eligibility.models import (
    ApplicationQuestion,
    DEFAULT_TOLERANCE_PERCENT,
    DisqualificationFlag,
    MULTI_VALUE_DELIMITER,
    QuestionType,
    Severity,
)

# Currency markers, whitespace and '.' thousands separators are dropped before parsing
_NUMERIC_NOISE_RE = re.compile(r"[R$€£\s.]")
_LEADING_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

# Free-text answers are the only ones checked against numeric bounds
NUMERIC_ANSWER_TYPES = (QuestionType.SHORT_TEXT, QuestionType.LONG_TEXT)


def parse_numeric_answer(value: str) -> Optional[float]:
    """Parse answers such as 'R$ 8.500,00' or '€9200' into a float.

    Returns None when no leading number can be read.
    """
    cleaned = _NUMERIC_NOISE_RE.sub("", value).replace(",", ".", 1)
    match = _LEADING_NUMBER_RE.match(cleaned)
    if not match:
        return None
    parsed = float(match.group(0))
    if math.isnan(parsed) or math.isinf(parsed):
        return None
    return parsed


def format_number(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}".rstrip("0").rstrip(".")


def format_percent(value: float) -> str:
    return format_number(value)


def _flag(question: ApplicationQuestion, candidate_answer: str,
          severity: Severity, reason: str) -> DisqualificationFlag:
    return DisqualificationFlag(
        question_id=question.id,
        question_text=question.question,
        candidate_answer=candidate_answer,
        severity=severity,
        reason=reason,
    )


@dataclass(frozen=True)
class YesNoCriteria:
    expected_answer: str

    def evaluate(self, question: ApplicationQuestion, answer: str) -> Optional[DisqualificationFlag]:
        if answer == self.expected_answer:
            return None
        return _flag(
            question, answer, Severity.ELIMINATED,
            f'Answered "{answer}", expected "{self.expected_answer}"',
        )


@dataclass(frozen=True)
class ChoiceCriteria:
    accepted_values: List[str]
    multiple: bool = False

    def evaluate(self, question: ApplicationQuestion, answer: str) -> Optional[DisqualificationFlag]:
        values = answer.split(MULTI_VALUE_DELIMITER) if self.multiple else [answer]
        rejected = [v for v in values if v not in self.accepted_values]
        if not rejected:
            return None
        return _flag(
            question,
            answer.replace(MULTI_VALUE_DELIMITER, ", "),
            Severity.ELIMINATED,
            f"Answer outside the accepted options: {', '.join(rejected)}",
        )


@dataclass(frozen=True)
class NumericRangeCriteria:
    range_min: Optional[float] = None
    range_max: Optional[float] = None
    tolerance_percent: float = DEFAULT_TOLERANCE_PERCENT

    def evaluate(self, question: ApplicationQuestion, answer: str) -> Optional[DisqualificationFlag]:
        value = parse_numeric_answer(answer)
        if value is None:
            return None
        if self.range_min is None and self.range_max is None:
            return None

        pct = format_percent(self.tolerance_percent)

        if self.range_max is not None and value > self.range_max:
            # Compare scaled by 100 so 8000 + 15% admits exactly 9200
            scaled_limit = self.range_max * (100 + self.tolerance_percent)
            hard_limit = scaled_limit / 100
            if value * 100 <= scaled_limit:
                return _flag(
                    question, answer, Severity.WARNING,
                    f"Value {format_number(value)} is above the maximum {format_number(self.range_max)} "
                    f"but within the {pct}% tolerance (limit {format_number(hard_limit)}), negotiable",
                )
            return _flag(
                question, answer, Severity.ELIMINATED,
                f"Value {format_number(value)} is well above the maximum {format_number(self.range_max)} "
                f"({pct}% tolerance exceeded, limit {format_number(hard_limit)})",
            )

        if self.range_min is not None and value < self.range_min:
            scaled_limit = self.range_min * (100 - self.tolerance_percent)
            hard_limit = scaled_limit / 100
            if value * 100 >= scaled_limit:
                return _flag(
                    question, answer, Severity.WARNING,
                    f"Value {format_number(value)} is below the minimum {format_number(self.range_min)} "
                    f"but within the {pct}% tolerance (limit {format_number(hard_limit)}), negotiable",
                )
            return _flag(
                question, answer, Severity.ELIMINATED,
                f"Value {format_number(value)} is well below the minimum {format_number(self.range_min)} "
                f"({pct}% tolerance exceeded, limit {format_number(hard_limit)})",
            )

        return None


EligibilityRule = Union[YesNoCriteria, ChoiceCriteria, NumericRangeCriteria]


def build_rule(question: ApplicationQuestion) -> Optional[EligibilityRule]:
    """Map an eliminatory question to its rule, or None if nothing can be checked."""
    if not question.is_eliminatory or question.eliminatory_criteria is None:
        return None

    criteria = question.eliminatory_criteria

    if question.type == QuestionType.YES_NO:
        if not criteria.expected_answer:
            return None
        return YesNoCriteria(expected_answer=criteria.expected_answer)

    if question.type in (QuestionType.SINGLE_CHOICE, QuestionType.MULTIPLE_CHOICE):
        if not criteria.accepted_values:
            return None
        return ChoiceCriteria(
            accepted_values=list(criteria.accepted_values),
            multiple=question.type == QuestionType.MULTIPLE_CHOICE,
        )

    # NUMBER is intentionally not listed here; see NUMERIC_ANSWER_TYPES
    if question.type in NUMERIC_ANSWER_TYPES:
        return NumericRangeCriteria(
            range_min=criteria.range_min,
            range_max=criteria.range_max,
            tolerance_percent=criteria.tolerance_percent,
        )

    return None

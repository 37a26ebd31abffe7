#!/usr/bin/env python3
"""
Eligibility Models - Application questions, answers and disqualification flags.

Questions and answers are stored as JSON on the job/candidate rows; these
models validate that JSON on the way in and serialise flags on the way out.
Stored JSON is edited by hand in the recruiter UI, so nulls are read as
"not set" and entries that still fail validation are skipped with a warning.
"""

import logging
from enum import Enum
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

# Multiple-choice answers store the selected labels joined by this delimiter
MULTI_VALUE_DELIMITER = "|||"

YES_NO_OPTIONS = ("Yes", "No")

DEFAULT_TOLERANCE_PERCENT = 15.0


class QuestionType(str, Enum):
    SHORT_TEXT = "short_text"
    LONG_TEXT = "long_text"
    NUMBER = "number"
    YES_NO = "yes_no"
    SINGLE_CHOICE = "single_choice"
    MULTIPLE_CHOICE = "multiple_choice"
    FILE = "file"


class Severity(str, Enum):
    ELIMINATED = "eliminated"
    WARNING = "warning"


def _null_to_empty_list(v: Any) -> Any:
    return [] if v is None else v


class EliminatoryCriteria(BaseModel):
    """
    Recruiter-defined elimination rule, as stored on the question.

    Which fields are meaningful depends on the question type:
    - yes_no: expected_answer
    - single_choice / multiple_choice: accepted_values
    - text answers: range_min, range_max, tolerance_percent
    """
    expected_answer: Optional[str] = None
    accepted_values: List[str] = Field(default_factory=list)
    range_min: Optional[float] = None
    range_max: Optional[float] = None
    tolerance_percent: float = DEFAULT_TOLERANCE_PERCENT

    @field_validator("accepted_values", mode="before")
    @classmethod
    def _accepted_values_null(cls, v: Any) -> Any:
        return _null_to_empty_list(v)

    @field_validator("tolerance_percent", mode="before")
    @classmethod
    def _tolerance_null(cls, v: Any) -> Any:
        return DEFAULT_TOLERANCE_PERCENT if v is None else v


class ApplicationQuestion(BaseModel):
    id: str
    question: str
    type: QuestionType = QuestionType.SHORT_TEXT
    required: bool = False
    is_eliminatory: bool = False
    options: List[str] = Field(default_factory=list)
    eliminatory_criteria: Optional[EliminatoryCriteria] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("type", mode="before")
    @classmethod
    def _type_null(cls, v: Any) -> Any:
        return QuestionType.SHORT_TEXT if v is None else v

    @field_validator("required", "is_eliminatory", mode="before")
    @classmethod
    def _flag_null(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("options", mode="before")
    @classmethod
    def _options_null(cls, v: Any) -> Any:
        return _null_to_empty_list(v)


class ApplicationAnswer(BaseModel):
    question_id: str
    answer: str = ""

    @field_validator("question_id", mode="before")
    @classmethod
    def _question_id_as_str(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("answer", mode="before")
    @classmethod
    def _answer_null(cls, v: Any) -> Any:
        return "" if v is None else v


class DisqualificationFlag(BaseModel):
    """Snapshot of a rule violation, stored on the candidate."""
    question_id: str
    question_text: str
    candidate_answer: str
    severity: Severity
    reason: str


M = TypeVar("M", bound=BaseModel)


def _parse_each(model: Type[M], raw: Optional[list]) -> List[M]:
    """Validate entries one at a time so one bad entry cannot block the rest."""
    parsed: List[M] = []
    for i, item in enumerate(raw or []):
        try:
            parsed.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(
                f"Skipping malformed {model.__name__} #{i} ({e.error_count()} error(s)): {item!r}"
            )
    return parsed


def parse_questions(raw: Optional[list]) -> List[ApplicationQuestion]:
    return _parse_each(ApplicationQuestion, raw)


def parse_answers(raw: Optional[list]) -> List[ApplicationAnswer]:
    return _parse_each(ApplicationAnswer, raw)


def parse_flags(raw: Optional[list]) -> List[DisqualificationFlag]:
    return _parse_each(DisqualificationFlag, raw)

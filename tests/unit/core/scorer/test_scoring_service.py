import unittest
from unittest.mock import MagicMock

from core.config_loader import LlmConfig
from core.dto import CandidateDTO, JobDTO
from core.eligibility import ApplicationAnswer
from core.eligibility.models import parse_questions
from core.llm.schema_models import CANDIDATE_EVALUATION_SCHEMA
from core.scorer import CandidateScoringService
from core.scorer.models import ERROR_RESULT, UNAVAILABLE_RESULT
from core.scorer.prompt import NO_ANSWER, TRUNCATION_MARKER, truncate_resume
from core.scorer.service import normalize_experience_level
from tests.conftest import RELOCATE_QUESTION, SALARY_QUESTION


def _job(**overrides):
    data = dict(
        id="job-1",
        title="Backend Engineer",
        description="Build APIs in Python.",
        resume_weight=7,
        answers_weight=3,
        questions=parse_questions([SALARY_QUESTION, RELOCATE_QUESTION]),
    )
    data.update(overrides)
    return JobDTO(**data)


def _candidate(job=None):
    job = job or _job()
    return CandidateDTO(
        id="cand-1",
        name="Ada Lovelace",
        email="ada@example.com",
        resume_url="https://files.example.com/ada.pdf",
        job=job,
        answers=[ApplicationAnswer(question_id="q-salary", answer="7500")],
    )


class TestCandidateScoringService(unittest.TestCase):
    def setUp(self):
        self.llm = MagicMock()
        self.llm.extract_structured_data.return_value = {
            "resume_rating": 4,
            "answer_quality_rating": 2,
            "resume_summary": "Solid Python background.",
            "experience_level": "Senior",
        }
        self.service = CandidateScoringService(self.llm, LlmConfig(resume_char_budget=100))

    def test_scores_with_job_weights(self):
        job = _job()
        result = self.service.score(_candidate(job), job, "Python developer")

        self.assertEqual(result.fit_score, 68)
        self.assertEqual(result.resume_rating, 4)
        self.assertEqual(result.answer_quality_rating, 2)
        self.assertEqual(result.resume_summary, "Solid Python background.")
        self.assertEqual(result.experience_level, "Senior")

    def test_single_call_with_schema_and_weights_in_prompt(self):
        job = _job(scoring_instructions="Prefer open source contributors.")
        self.service.score(_candidate(job), job, "Python developer")

        self.llm.extract_structured_data.assert_called_once()
        args, kwargs = self.llm.extract_structured_data.call_args
        prompt = args[0]
        self.assertIs(args[1], CANDIDATE_EVALUATION_SCHEMA)
        self.assertIn("Resume evaluation weight: 70%", prompt)
        self.assertIn("Application answers weight: 30%", prompt)
        self.assertIn("Prefer open source contributors.", prompt)
        self.assertIn("Q: What is your salary expectation?\nA: 7500", prompt)
        self.assertIn(f"Q: Can you relocate?\nA: {NO_ANSWER}", prompt)

    def test_without_provider_returns_unavailable(self):
        service = CandidateScoringService(None)
        job = _job()
        self.assertEqual(service.score(_candidate(job), job, "text"), UNAVAILABLE_RESULT)
        self.assertEqual(UNAVAILABLE_RESULT.fit_score, 50)
        self.assertEqual(UNAVAILABLE_RESULT.experience_level, "Unknown")

    def test_provider_error_returns_error_result(self):
        self.llm.extract_structured_data.side_effect = RuntimeError("timeout")
        job = _job()
        result = self.service.score(_candidate(job), job, "text")
        self.assertEqual(result, ERROR_RESULT)
        self.assertEqual(self.llm.extract_structured_data.call_count, 1)

    def test_non_dict_reply_returns_error_result(self):
        self.llm.extract_structured_data.return_value = ["not", "a", "dict"]
        job = _job()
        self.assertEqual(self.service.score(_candidate(job), job, "text"), ERROR_RESULT)

    def test_malformed_reply_is_clamped(self):
        self.llm.extract_structured_data.return_value = {
            "resume_rating": 11,
            "answer_quality_rating": None,
            "resume_summary": "   ",
            "experience_level": "Wizard",
        }
        job = _job(resume_weight=5, answers_weight=5)
        result = self.service.score(_candidate(job), job, "text")

        self.assertEqual(result.resume_rating, 5)
        self.assertEqual(result.answer_quality_rating, 3)
        self.assertEqual(result.fit_score, 80)
        self.assertEqual(result.resume_summary, "No summary available.")
        self.assertEqual(result.experience_level, "Unknown")

    def test_resume_is_truncated_to_budget(self):
        job = _job()
        self.service.score(_candidate(job), job, "x" * 500)
        prompt = self.llm.extract_structured_data.call_args[0][0]
        self.assertIn("x" * 100 + " " + TRUNCATION_MARKER, prompt)
        self.assertNotIn("x" * 101, prompt)


def test_truncate_resume_keeps_short_text():
    assert truncate_resume("short", 10) == "short"
    assert truncate_resume("abcdef", 3) == f"abc {TRUNCATION_MARKER}"


def test_normalize_experience_level():
    assert normalize_experience_level("senior") == "Senior"
    assert normalize_experience_level(" Mid-Level ") == "Mid-Level"
    assert normalize_experience_level("Guru") == "Unknown"
    assert normalize_experience_level(None) == "Unknown"


if __name__ == "__main__":
    unittest.main()

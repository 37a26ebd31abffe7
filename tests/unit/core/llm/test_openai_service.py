import json
import unittest
from unittest.mock import MagicMock, patch

from core.llm.openai_service import OpenAIService, _unwrap_schema_spec
from core.llm.schema_models import CANDIDATE_EVALUATION_SCHEMA
from core.llm.system_prompts import CANDIDATE_EVALUATION_SYSTEM_PROMPT


def _response(content):
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


class TestOpenAIService(unittest.TestCase):
    def setUp(self):
        patcher = patch("core.llm.openai_service.OpenAI")
        self.openai_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.client = self.openai_cls.return_value
        self.service = OpenAIService(
            api_key="sk-test",
            model_config={"model": "gpt-4o-mini", "temperature": 0.3, "max_tokens": 500},
        )

    def test_client_is_built_without_retries(self):
        kwargs = self.openai_cls.call_args.kwargs
        self.assertEqual(kwargs["max_retries"], 0)
        self.assertEqual(kwargs["api_key"], "sk-test")
        self.assertNotIn("base_url", kwargs)

    def test_base_url_is_passed_through(self):
        OpenAIService(api_key="k", base_url="http://localhost:8080/v1")
        self.assertEqual(self.openai_cls.call_args.kwargs["base_url"], "http://localhost:8080/v1")

    def test_sends_json_schema_request(self):
        reply = {"resume_rating": 4, "answer_quality_rating": 3,
                 "resume_summary": "ok", "experience_level": "Junior"}
        self.client.chat.completions.create.return_value = _response(json.dumps(reply))

        data = self.service.extract_structured_data("prompt text", CANDIDATE_EVALUATION_SCHEMA)

        self.assertEqual(data, reply)
        self.client.chat.completions.create.assert_called_once()
        kwargs = self.client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs["model"], "gpt-4o-mini")
        self.assertEqual(kwargs["temperature"], 0.3)
        self.assertEqual(kwargs["max_tokens"], 500)
        self.assertEqual(kwargs["messages"][0],
                         {"role": "system", "content": CANDIDATE_EVALUATION_SYSTEM_PROMPT})
        self.assertEqual(kwargs["messages"][1], {"role": "user", "content": "prompt text"})
        fmt = kwargs["response_format"]
        self.assertEqual(fmt["type"], "json_schema")
        self.assertEqual(fmt["json_schema"]["name"], "candidate_evaluation")
        self.assertTrue(fmt["json_schema"]["strict"])

    def test_custom_system_prompt(self):
        self.client.chat.completions.create.return_value = _response("{}")
        self.service.extract_structured_data("p", CANDIDATE_EVALUATION_SCHEMA, system_prompt="Be brief.")
        messages = self.client.chat.completions.create.call_args.kwargs["messages"]
        self.assertEqual(messages[0]["content"], "Be brief.")

    def test_invalid_json_raises(self):
        self.client.chat.completions.create.return_value = _response("not json")
        with self.assertRaises(json.JSONDecodeError):
            self.service.extract_structured_data("p", CANDIDATE_EVALUATION_SCHEMA)

    def test_empty_content_raises(self):
        self.client.chat.completions.create.return_value = _response("")
        with self.assertRaises(ValueError):
            self.service.extract_structured_data("p", CANDIDATE_EVALUATION_SCHEMA)

    def test_non_object_reply_raises(self):
        self.client.chat.completions.create.return_value = _response("[1, 2]")
        with self.assertRaises(ValueError):
            self.service.extract_structured_data("p", CANDIDATE_EVALUATION_SCHEMA)

    def test_transport_error_propagates_without_retry(self):
        self.client.chat.completions.create.side_effect = RuntimeError("boom")
        with self.assertRaises(RuntimeError):
            self.service.extract_structured_data("p", CANDIDATE_EVALUATION_SCHEMA)
        self.assertEqual(self.client.chat.completions.create.call_count, 1)

    def test_rejects_non_object_schema(self):
        with self.assertRaises(ValueError):
            self.service.extract_structured_data("p", {"type": "array"})


def test_unwrap_raw_schema():
    raw = {"type": "object", "properties": {}}
    assert _unwrap_schema_spec(raw) == ("extraction_response", False, raw)


if __name__ == "__main__":
    unittest.main()

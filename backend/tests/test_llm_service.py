import unittest
from unittest.mock import MagicMock, patch

from mealprep.exceptions import GenerationError
from mealprep.services import llm_service
from mealprep.services.llm_service import _parse_json_from_text


class TestParseJson(unittest.TestCase):
    def test_plain_object(self):
        self.assertEqual(_parse_json_from_text('{"days": []}'), {"days": []})

    def test_markdown_fence(self):
        text = 'Here is your plan:\n```json\n{"days": [1, 2]}\n```\nEnjoy!'
        self.assertEqual(_parse_json_from_text(text), {"days": [1, 2]})

    def test_surrounding_prose(self):
        self.assertEqual(_parse_json_from_text('Sure! {"a": 1} hope this helps'), {"a": 1})

    def test_trailing_commas_repaired(self):
        self.assertEqual(_parse_json_from_text('{"a": [1, 2,], "b": 3,}'), {"a": [1, 2], "b": 3})

    def test_single_quoted_keys_repaired(self):
        self.assertEqual(_parse_json_from_text("{'a': 1}"), {"a": 1})

    def test_array_is_not_an_object(self):
        self.assertIsNone(_parse_json_from_text('[1, 2, 3]'))

    def test_garbage(self):
        self.assertIsNone(_parse_json_from_text("I cannot help with that"))


class TestCallLlmJson(unittest.TestCase):
    def _llm_returning(self, content):
        llm = MagicMock()
        llm.invoke.return_value = MagicMock(content=content, response_metadata={})
        return llm

    @patch("mealprep.services.llm_service.get_llm")
    def test_returns_parsed_object(self, mock_get_llm):
        mock_get_llm.return_value = self._llm_returning('{"mealOptions": []}')
        result = llm_service.call_llm_json("system", "user", temperature=0.2)

        self.assertEqual(result, {"mealOptions": []})
        mock_get_llm.assert_called_once_with(temperature=0.2, max_tokens=16384, json_mode=True)

    @patch("mealprep.services.llm_service.get_llm")
    def test_empty_reply(self, mock_get_llm):
        mock_get_llm.return_value = self._llm_returning("   ")
        with self.assertRaises(GenerationError) as ctx:
            llm_service.call_llm_json("system", "user")
        self.assertIn("empty", ctx.exception.message)

    @patch("mealprep.services.llm_service.get_llm")
    def test_unparsable_reply(self, mock_get_llm):
        mock_get_llm.return_value = self._llm_returning("not json at all")
        with self.assertRaises(GenerationError) as ctx:
            llm_service.call_llm_json("system", "user")
        self.assertEqual(ctx.exception.details, "not json at all")

    @patch("mealprep.services.llm_service.get_llm")
    def test_timeout(self, mock_get_llm):
        llm = MagicMock()
        llm.invoke.side_effect = TimeoutError("Request timed out")
        mock_get_llm.return_value = llm
        with self.assertRaises(GenerationError) as ctx:
            llm_service.call_llm_json("system", "user")
        self.assertEqual(ctx.exception.message, "Model call timed out")

    @patch("mealprep.services.llm_service.get_llm")
    def test_upstream_failure(self, mock_get_llm):
        llm = MagicMock()
        llm.invoke.side_effect = ConnectionError("connection refused")
        mock_get_llm.return_value = llm
        with self.assertRaises(GenerationError) as ctx:
            llm_service.call_llm_json("system", "user")
        self.assertEqual(ctx.exception.message, "Model call failed")
        self.assertIn("connection refused", ctx.exception.details)


if __name__ == "__main__":
    unittest.main()

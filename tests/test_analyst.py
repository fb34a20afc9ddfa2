import json
import unittest
from types import SimpleNamespace

from analyst import MissingApiKeyError, analyze_matchup, build_prompt
from sample_analysis import ANALYSIS, ANNOTATIONS


class _Annotation:
    def __init__(self, payload):
        self._payload = payload

    def model_dump(self):
        return dict(self._payload)


class _FakeCompletions:
    def __init__(self, content, annotations):
        self.content = content
        self.annotations = annotations
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        message = SimpleNamespace(content=self.content, annotations=self.annotations)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(content, annotations=None):
    completions = _FakeCompletions(content, annotations)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


class AnalyzeMatchupTests(unittest.TestCase):
    def test_prompt_names_the_matchup_and_schema(self) -> None:
        prompt = build_prompt("Yasuo", "Zed", "mid")
        self.assertIn("Yasuo (me) vs Zed (enemy) in the mid role", prompt)
        self.assertIn('"champion": "Yasuo"', prompt)
        self.assertIn('"powerCurve"', prompt)
        self.assertIn("```json", prompt)

    def test_resolves_model_answer_and_annotations(self) -> None:
        content = "```json\n" + json.dumps(ANALYSIS) + "\n```"
        client, completions = fake_client(content, [_Annotation(a) for a in ANNOTATIONS])

        result = analyze_matchup(client, "Yasuo", "Zed", "mid", model="test-model", web_search=True)

        self.assertTrue(result.ok)
        self.assertEqual(3, len(result.sources))
        call = completions.calls[0]
        self.assertEqual("test-model", call["model"])
        self.assertEqual({}, call["web_search_options"])
        self.assertEqual("system", call["messages"][0]["role"])

    def test_web_search_can_be_disabled(self) -> None:
        client, completions = fake_client("no json")
        result = analyze_matchup(client, "Yasuo", "Zed", "mid", web_search=False)

        self.assertIsNone(result.data)
        self.assertEqual([], result.sources)
        self.assertNotIn("web_search_options", completions.calls[0])

    def test_missing_client(self) -> None:
        with self.assertRaises(MissingApiKeyError):
            analyze_matchup(None, "Yasuo", "Zed", "mid")


if __name__ == "__main__":
    unittest.main()

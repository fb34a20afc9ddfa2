import copy
import json
import unittest

from response_parser import (
    NO_DATA_ERROR, REQUIRED_SECTIONS, extract_brace_span, extract_citations,
    extract_fenced_block, resolve_response,
)

from sample_analysis import ANALYSIS, ANNOTATIONS


def fenced(payload: str) -> str:
    return f"Here is the analysis.\n\n```json\n{payload}\n```\n\nGood luck on the Rift!"


class ExtractionStageTests(unittest.TestCase):
    def test_fenced_block_interior(self) -> None:
        self.assertEqual('{"a": 1}', extract_fenced_block(fenced('{"a": 1}')))
        self.assertEqual('{"a": 1}', extract_fenced_block('```JSON {"a": 1} ```'))
        self.assertIsNone(extract_fenced_block('```python\nprint(1)\n```'))
        self.assertIsNone(extract_fenced_block(None))

    def test_brace_span_is_first_to_last_brace(self) -> None:
        text = 'intro {"a": {"b": 1}} tail } end'
        self.assertEqual('{"a": {"b": 1}} tail }', extract_brace_span(text))
        self.assertIsNone(extract_brace_span("no braces here"))
        self.assertIsNone(extract_brace_span("} backwards {"))


class ResolveResponseTests(unittest.TestCase):
    def test_well_formed_fenced_block(self) -> None:
        result = resolve_response(fenced(json.dumps(ANALYSIS)), ANNOTATIONS)

        self.assertTrue(result.ok)
        self.assertIsNone(result.error)
        data = result.data
        self.assertEqual("Yasuo", data.champion)
        self.assertEqual("Zed", data.opponent)
        self.assertEqual("48%", data.win_rate_prediction)
        self.assertEqual("Conqueror", data.runes.keystone)
        self.assertEqual(["Q", "E", "W"], data.skills.max_order)
        self.assertEqual("Infinity Edge", data.build.core[1].name)
        self.assertEqual("112% gold efficient", data.math_analysis.efficiency_stats)
        self.assertEqual([0.0, 5.0, 10.0], [p.time for p in data.power_curve])
        self.assertEqual(65.0, data.power_curve[2].my_power)
        self.assertEqual(3, len(result.sources))

    def test_wire_names_round_trip(self) -> None:
        result = resolve_response(fenced(json.dumps(ANALYSIS)))
        restored = result.data.to_dict()
        self.assertEqual(ANALYSIS["runes"], restored["runes"])
        self.assertEqual(ANALYSIS["build"], restored["build"])
        self.assertEqual(ANALYSIS["mathAnalysis"], restored["mathAnalysis"])

    def test_no_metadata_gives_no_citations(self) -> None:
        result = resolve_response(fenced(json.dumps(ANALYSIS)))
        self.assertTrue(result.ok)
        self.assertEqual([], result.sources)

    def test_malformed_block_falls_back_to_loose_object(self) -> None:
        text = "```json\nnot json at all\n```\nCorrected output: " + json.dumps(ANALYSIS)
        result = resolve_response(text)
        self.assertTrue(result.ok)
        self.assertEqual("Zed", result.data.opponent)

    def test_block_with_trailing_note_falls_back_to_brace_span(self) -> None:
        text = "```json\n" + json.dumps(ANALYSIS) + "\n(values estimated)\n```"
        result = resolve_response(text)
        self.assertTrue(result.ok)

    def test_loose_object_without_any_fence(self) -> None:
        result = resolve_response("Sure! " + json.dumps(ANALYSIS) + " Hope this helps.")
        self.assertTrue(result.ok)

    def test_nothing_parseable_still_returns_citations(self) -> None:
        result = resolve_response("I could not find data for this matchup.", ANNOTATIONS)
        self.assertIsNone(result.data)
        self.assertEqual(NO_DATA_ERROR, result.error)
        self.assertEqual(3, len(result.sources))

    def test_missing_section_is_rejected(self) -> None:
        for key in REQUIRED_SECTIONS:
            partial = copy.deepcopy(ANALYSIS)
            del partial[key]
            result = resolve_response(fenced(json.dumps(partial)), ANNOTATIONS)
            self.assertIsNone(result.data, key)
            self.assertIn(key, result.error)
            self.assertEqual(3, len(result.sources))

    def test_wrong_container_type_is_rejected(self) -> None:
        broken = copy.deepcopy(ANALYSIS)
        broken["powerCurve"] = "rising"
        result = resolve_response(fenced(json.dumps(broken)))
        self.assertIsNone(result.data)
        self.assertIn("powerCurve", result.error)

    def test_top_level_array_is_rejected(self) -> None:
        result = resolve_response(fenced('["Yasuo", "Zed"]'))
        self.assertIsNone(result.data)
        self.assertEqual(NO_DATA_ERROR, result.error)

    def test_inner_fields_are_not_deep_validated(self) -> None:
        loose = copy.deepcopy(ANALYSIS)
        loose["runes"] = {"keystone": "Conqueror"}
        loose["build"]["core"] = ["Infinity Edge", None]
        loose["powerCurve"] = [{"time": 0, "myPower": 250, "enemyPower": -5}, "noise"]
        result = resolve_response(fenced(json.dumps(loose)))

        self.assertTrue(result.ok)
        self.assertEqual([], result.data.runes.shards)
        self.assertEqual("", result.data.runes.explanation)
        self.assertEqual("Infinity Edge", result.data.build.core[0].name)
        self.assertEqual(1, len(result.data.power_curve))
        self.assertEqual(250.0, result.data.power_curve[0].my_power)


class CitationTests(unittest.TestCase):
    def test_keeps_order_and_duplicates(self) -> None:
        sources = extract_citations(ANNOTATIONS)
        self.assertEqual(
            ["https://example.test/yasuo", "https://example.test/zed", "https://example.test/yasuo"],
            [s.url for s in sources],
        )
        self.assertEqual("", sources[1].title)

    def test_malformed_metadata(self) -> None:
        self.assertEqual([], extract_citations(None))
        self.assertEqual([], extract_citations({"url_citation": {"url": "x"}}))
        self.assertEqual([], extract_citations(["text", {"url_citation": "x"}]))


if __name__ == "__main__":
    unittest.main()

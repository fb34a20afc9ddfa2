"""
Turns the model's free-form answer into a MatchupAnalysis.

The model is asked for one JSON object inside a ```json fence, but it does not
always comply. Extraction runs in two stages:

    1. the interior of the first ```json fenced block
    2. if there is no block or it does not decode, the span from the first
       "{" to the last "}" of the whole text

The decoded object must contain every required top-level section; inner
fields are taken as given. Citations are read from the message annotations
independently, so a failed extraction still returns its sources.

Nothing in this module raises on bad input.
"""

import json
import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from models import AnalysisResult, CitationEntry, MatchupAnalysis

logger = logging.getLogger(__name__)

FENCED_JSON_RE = re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE)

REQUIRED_SECTIONS = (
    "champion",
    "opponent",
    "role",
    "patch",
    "winRatePrediction",
    "runes",
    "build",
    "skills",
    "mathAnalysis",
    "powerCurve",
)
OBJECT_SECTIONS = ("runes", "build", "skills", "mathAnalysis")
LIST_SECTIONS = ("powerCurve",)

NO_DATA_ERROR = "no structured data found"


def extract_fenced_block(text: str) -> Optional[str]:
    match = FENCED_JSON_RE.search(text or "")
    if not match:
        return None
    return match.group(1)


def extract_brace_span(text: str) -> Optional[str]:
    """Widest {...} span: first opening brace to last closing brace."""
    if not text:
        return None
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start:end + 1]


def parse_json_object(fragment: Optional[str]) -> Optional[Dict[str, Any]]:
    if fragment is None:
        return None
    try:
        value = json.loads(fragment)
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse JSON fragment: %s", e)
        return None
    if not isinstance(value, dict):
        logger.warning("Decoded JSON is a %s, not an object", type(value).__name__)
        return None
    return value


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Run both extraction stages and return the first decoded object."""
    data = parse_json_object(extract_fenced_block(text))
    if data is not None:
        return data

    # Fallback: raw JSON somewhere in the text
    return parse_json_object(extract_brace_span(text))


def missing_sections(data: Mapping[str, Any]) -> List[str]:
    """Required sections that are absent or have the wrong container type."""
    missing = [key for key in REQUIRED_SECTIONS if key not in data or data[key] is None]
    missing += [key for key in OBJECT_SECTIONS if key not in missing and not isinstance(data[key], Mapping)]
    missing += [key for key in LIST_SECTIONS if key not in missing and not isinstance(data[key], list)]
    return missing


def extract_citations(grounding_metadata: Any) -> List[CitationEntry]:
    """
    Read web citations from message annotations.

    Each entry carrying a ``url_citation`` mapping becomes one CitationEntry,
    in order, without de-duplication. Anything malformed yields nothing.
    """
    if not isinstance(grounding_metadata, (list, tuple)):
        return []

    sources = []
    for entry in grounding_metadata:
        if not isinstance(entry, Mapping):
            continue
        web = entry.get("url_citation")
        if not isinstance(web, Mapping):
            continue
        sources.append(CitationEntry(
            title=str(web.get("title") or ""),
            url=str(web.get("url") or ""),
        ))
    return sources


def resolve_response(raw_text: str, grounding_metadata: Any = None) -> AnalysisResult:
    """Extract, validate and pair the analysis with its citations."""
    sources = extract_citations(grounding_metadata)

    data = extract_json_object(raw_text)
    if data is None:
        logger.warning("No parseable JSON in model response (%d chars)", len(raw_text or ""))
        return AnalysisResult(data=None, sources=sources, error=NO_DATA_ERROR)

    missing = missing_sections(data)
    if missing:
        logger.warning("Model response rejected, missing sections: %s", ", ".join(missing))
        return AnalysisResult(data=None, sources=sources, error=f"missing sections: {', '.join(missing)}")

    return AnalysisResult(data=MatchupAnalysis.from_dict(data), sources=sources)

import logging
from typing import Any, Dict, List, Optional

from openai import OpenAI

from config import MODEL_NAME, WEB_SEARCH_ENABLED
from models import AnalysisResult
from prompts import MATCHUP_ANALYSIS_PROMPT, MATCHUP_SYSTEM_PROMPT
from response_parser import resolve_response

logger = logging.getLogger(__name__)


class MissingApiKeyError(ValueError):
    """No OpenAI API key was configured."""


def build_prompt(champion: str, opponent: str, role: str) -> str:
    return MATCHUP_ANALYSIS_PROMPT.format(champion=champion, opponent=opponent, role=role)


def _annotation_dicts(message: Any) -> List[Dict[str, Any]]:
    """Message annotations as plain dicts (url_citation entries and friends)."""
    annotations = getattr(message, "annotations", None) or []
    result = []
    for annotation in annotations:
        if isinstance(annotation, dict):
            result.append(annotation)
        elif hasattr(annotation, "model_dump"):
            result.append(annotation.model_dump())
    return result


def request_analysis(
    client: OpenAI,
    champion: str,
    opponent: str,
    role: str,
    model: str = MODEL_NAME,
    web_search: bool = WEB_SEARCH_ENABLED,
) -> Dict[str, Any]:
    """
    Ask the model for a matchup analysis.

    Returns the raw answer text and its annotations:
    {"text": str, "annotations": [ {...}, ... ]}
    """
    kwargs: Dict[str, Any] = {}
    if web_search:
        kwargs["web_search_options"] = {}

    response = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": MATCHUP_SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(champion, opponent, role)},
        ],
        **kwargs,
    )

    message = response.choices[0].message
    return {
        "text": (message.content or "").strip(),
        "annotations": _annotation_dicts(message),
    }


def analyze_matchup(
    client: Optional[OpenAI],
    champion: str,
    opponent: str,
    role: str,
    model: str = MODEL_NAME,
    web_search: bool = WEB_SEARCH_ENABLED,
) -> AnalysisResult:
    """Request an analysis and resolve it into a validated record."""
    if client is None:
        raise MissingApiKeyError("OPENAI_API_KEY is missing from environment variables.")

    logger.info("Analyzing %s vs %s (%s) with %s", champion, opponent, role, model)
    raw = request_analysis(client, champion, opponent, role, model=model, web_search=web_search)
    return resolve_response(raw["text"], raw["annotations"])


if __name__ == "__main__":
    # Manual check against the live API
    import json
    from config import OPENAI_API_KEY
    from logging_setup import configure_logging

    configure_logging()
    result = analyze_matchup(OpenAI(api_key=OPENAI_API_KEY), "Yasuo", "Zed", "mid")
    if result.data:
        print(json.dumps(result.data.to_dict(), indent=2))
    else:
        print(f"Failed: {result.error}")
    for source in result.sources:
        print(f"- {source.title}: {source.url}")

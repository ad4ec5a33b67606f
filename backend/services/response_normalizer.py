"""Recover the analysis JSON object from free-form model text.

The model may wrap its JSON in commentary or code fences, so the first
``{`` through the last ``}`` is parsed. This is a heuristic: a reply with
two separate top-level objects, or with stray braces in the surrounding
prose, yields an unparseable slice and a ParseError rather than a guess.
When the reply has no brace pair at all, the whole text is parsed.
"""

import json
import logging
import math

from models.responses import AnalysisResult
from services.errors import ParseError

logger = logging.getLogger(__name__)

DEFAULT_SUMMARY = "Analysis completed"

LIST_FIELDS = {
    "strengths": "strengths",
    "weaknesses": "weaknesses",
    "recommendations": "recommendations",
    "keyAlignments": "key_alignments",
    "missingSkills": "missing_skills",
}


def extract_json_candidate(raw_text: str) -> str:
    start = raw_text.find("{")
    end = raw_text.rfind("}")
    if start == -1 or end < start:
        return raw_text
    return raw_text[start:end + 1]


def _coerce_match(value: object) -> int:
    """Clamp to 0-100; anything non-numeric (or NaN) counts as 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return 0
    if isinstance(value, int):
        return max(0, min(100, value))
    if not isinstance(value, float) or math.isnan(value):
        return 0
    if math.isinf(value):
        return 100 if value > 0 else 0
    return max(0, min(100, round(value)))


def _coerce_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else json.dumps(item) for item in value if item is not None]


def normalize(raw_text: str) -> AnalysisResult:
    """Parse a model reply into a fully populated AnalysisResult."""
    candidate = extract_json_candidate(raw_text)
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse model response as JSON: %s", e)
        raise ParseError(f"Failed to parse AI response: {e}") from e

    if not isinstance(parsed, dict):
        logger.error("Model response JSON is a %s, not an object", type(parsed).__name__)
        raise ParseError("Failed to parse AI response: expected a JSON object")

    summary = parsed.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        summary = DEFAULT_SUMMARY

    return AnalysisResult(
        overall_match=_coerce_match(parsed.get("overallMatch")),
        summary=summary,
        **{attr: _coerce_list(parsed.get(key)) for key, attr in LIST_FIELDS.items()},
    )

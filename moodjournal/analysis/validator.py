"""
Turns the model's raw text into a structured classification.

The model is asked for a bare JSON object but routinely wraps it in a
Markdown fence, changes the mood's case, or answers in prose. Formatting slips
degrade to a safe fallback; a parseable object missing required keys is a
schema violation and is raised.
"""

import json
import logging
import re
from typing import Any

from moodjournal.analysis.errors import SchemaViolationError
from moodjournal.analysis.schemas import (
    ClassificationResult,
    FallbackClassification,
    ParsedClassification,
    normalize_mood,
)

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\n?")


def strip_code_fences(text: str) -> str:
    """Remove every ```json / ``` marker and trim the result."""
    return _FENCE_RE.sub("", text or "").strip()


def parse_json_reply(text: str) -> Any:
    """Strict JSON parse after fence stripping. Raises ValueError on failure."""
    return json.loads(strip_code_fences(text))


def validate_mood_response(raw: str) -> ClassificationResult:
    """
    Validates the model's reply to a mood classification prompt.

    Args:
        raw (str): Text content of the first completion choice.

    Returns:
        ClassificationResult: `ParsedClassification` when the reply held a
        usable object, otherwise `FallbackClassification`.

    Raises:
        SchemaViolationError: The reply parsed but lacks `mood` or `response`.
    """
    try:
        data = parse_json_reply(raw)
    except ValueError:
        logger.warning(f"Failed to parse AI response, using fallback: {raw!r}")
        return FallbackClassification()

    if not isinstance(data, dict) or not data.get("mood") or not data.get("response"):
        raise SchemaViolationError("Invalid response format from AI")

    response = data["response"]
    if not isinstance(response, str) or not response.strip():
        raise SchemaViolationError("Invalid response format from AI")

    mood = normalize_mood(data["mood"])
    if mood.value != str(data["mood"]).strip().lower():
        logger.info(f"Coerced unknown mood {data['mood']!r} to neutral")
    return ParsedClassification(mood=mood, response=response.strip())

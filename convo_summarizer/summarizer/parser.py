"""Coerce free-form model output into the canonical summary schema."""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Dict, List

from convo_summarizer.summarizer.errors import ParseError
from convo_summarizer.summarizer.fallback import generate_fallback
from convo_summarizer.summarizer.models import (
    SENTIMENTS,
    URGENCIES,
    SpeakerBreakdown,
    SummaryResult,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Conversation Summary"
DEFAULT_SUMMARY = "Summary not available"
DEFAULT_SPEAKER = "Unknown speaker"
DEFAULT_CONFIDENCE = 0.8

_THINK_BLOCK = re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE)
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def extract_json_object(content: str) -> Dict[str, Any]:
    """
    Decode the outermost ``{...}`` region of ``content``.

    Raises:
        ParseError: If no JSON object can be decoded.
    """
    cleaned = _THINK_BLOCK.sub("", content)
    match = _JSON_OBJECT.search(cleaned)
    candidate = match.group(0) if match else cleaned
    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError) as exc:
        # ValueError also covers oversized integer literals
        raise ParseError(f"Invalid JSON in model response: {exc}") from exc
    if not isinstance(parsed, dict):
        raise ParseError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def _string(value: Any, default: str) -> str:
    if isinstance(value, str) and value:
        return value
    return default


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value if item is not None]


def _enum(value: Any, allowed: tuple, default: str) -> str:
    return value if value in allowed else default


def _confidence(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_CONFIDENCE
    if not math.isfinite(value):
        return DEFAULT_CONFIDENCE
    return max(0.0, min(1.0, float(value)))


def _speakers(value: Any) -> List[SpeakerBreakdown]:
    if not isinstance(value, list):
        return []
    speakers = []
    for entry in value:
        if not isinstance(entry, dict):
            continue
        speakers.append(
            SpeakerBreakdown(
                speaker=_string(entry.get("speaker"), DEFAULT_SPEAKER),
                key_points=_string_list(entry.get("keyPoints")),
                sentiment=_enum(entry.get("sentiment"), SENTIMENTS, "neutral"),
            )
        )
    return speakers


def coerce_summary(parsed: Dict[str, Any], model: str) -> SummaryResult:
    """Apply per-field type and enum guards to a decoded payload."""
    return SummaryResult(
        title=_string(parsed.get("title"), DEFAULT_TITLE),
        summary=_string(parsed.get("summary"), DEFAULT_SUMMARY),
        bullets=_string_list(parsed.get("bullets")),
        action_items=_string_list(parsed.get("actionItems")),
        speaker_breakdown=_speakers(parsed.get("speakerBreakdown")),
        skills=_string_list(parsed.get("skills")),
        red_flags=_string_list(parsed.get("redFlags")),
        sentiment=_enum(parsed.get("sentiment"), SENTIMENTS, "neutral"),
        urgency=_enum(parsed.get("urgency"), URGENCIES, "medium"),
        confidence=_confidence(parsed.get("confidence")),
        model=model,
    )


def parse_ai_response(content: str, model: str) -> SummaryResult:
    """
    Turn raw model output into a summary. Never raises.

    Unparseable output is summarized by the degraded-mode generator, treating
    the raw reply as the transcript.
    """
    try:
        parsed = extract_json_object(content)
    except ParseError as exc:
        logger.warning(f"Failed to parse response from {model}: {exc}")
        return generate_fallback(content)
    return coerce_summary(parsed, model)

"""Deterministic, network-free summary used when no model output is available."""

from __future__ import annotations

import re
from typing import List, Optional

from convo_summarizer.summarizer.models import (
    FALLBACK_MODEL_TAG,
    SpeakerBreakdown,
    SummaryResult,
)


FALLBACK_CONFIDENCE = 0.2
UNAVAILABLE_FLAG = "AI service unavailable - limited analysis"
DEFAULT_SKILL = "General Discussion"

SKILL_PATTERNS = {
    "JavaScript": re.compile(r"javascript|js\b|node\.?js", re.IGNORECASE),
    "React": re.compile(r"react|jsx|hooks", re.IGNORECASE),
    "TypeScript": re.compile(r"typescript|ts\b", re.IGNORECASE),
    "Python": re.compile(r"python|django|flask", re.IGNORECASE),
    "Communication": re.compile(r"communication|discuss|explain|present", re.IGNORECASE),
    "Leadership": re.compile(r"lead|manage|coordinate|organize", re.IGNORECASE),
    "Problem Solving": re.compile(r"solve|fix|debug|troubleshoot", re.IGNORECASE),
    "Testing": re.compile(r"test|qa|quality|bug", re.IGNORECASE),
    "Database": re.compile(r"database|sql|mongodb|postgres", re.IGNORECASE),
    "API": re.compile(r"api|rest|graphql|endpoint", re.IGNORECASE),
}

REMEDIAL_ACTIONS = (
    "Configure AI API keys for enhanced analysis",
    "Review content manually for specific insights",
    "Consider re-processing when AI services are available",
)


def plural(count: int, noun: str) -> str:
    """Return a pluralized string for the given count and noun."""
    suffix = noun if count == 1 else f"{noun}s"
    return f"{count} {suffix}"


def extract_basic_skills(text: str) -> List[str]:
    """Match the fixed keyword dictionary against ``text``."""
    detected = [skill for skill, pattern in SKILL_PATTERNS.items() if pattern.search(text)]
    return detected or [DEFAULT_SKILL]


def generate_fallback(text: str, last_error: Optional[str] = None) -> SummaryResult:
    """
    Build a low-confidence summary from simple text statistics.

    The result is a pure function of ``(text, last_error)``: no randomness, no
    clock, no I/O. ``last_error`` is echoed into the narrative and the red flags
    so callers can tell why the AI path was skipped.
    """
    word_count = len(text.split(" "))
    has_questions = "?" in text
    has_numbers = any(char.isdigit() for char in text)

    error_note = f" ({last_error})" if last_error else ""
    red_flags = [UNAVAILABLE_FLAG]
    if last_error:
        red_flags.append(f"Service error: {last_error}")

    return SummaryResult(
        title="Fallback Analysis Summary",
        summary=(
            f"Fallback analysis of {word_count} word conversation. "
            f"AI services were unavailable{error_note}. "
            "This summary provides basic content analysis."
        ),
        bullets=[
            "Content analyzed using fallback system",
            f"Document contains {plural(word_count, 'word')}",
            "Interactive discussion detected"
            if has_questions
            else "Informational content detected",
            "Quantitative data present" if has_numbers else "Qualitative content focus",
            "Manual review recommended for detailed insights",
        ],
        action_items=list(REMEDIAL_ACTIONS),
        speaker_breakdown=[
            SpeakerBreakdown(
                speaker="Content Analysis",
                key_points=["Basic content structure analyzed"],
                sentiment="neutral",
            )
        ],
        skills=extract_basic_skills(text),
        red_flags=red_flags,
        sentiment="neutral",
        urgency="low",
        confidence=FALLBACK_CONFIDENCE,
        model=FALLBACK_MODEL_TAG,
    )

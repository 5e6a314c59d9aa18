"""Content-driven style, tone and focus suggestions."""

import re
from typing import Dict, List

from convo_summarizer.personalization.models import SettingsSuggestion


ACTION_PATTERN = re.compile(
    r"action|task|todo|assign|responsible|due|deadline", re.IGNORECASE
)
TECHNICAL_PATTERN = re.compile(
    r"api|database|code|deploy|bug|feature|implementation", re.IGNORECASE
)
DECISION_PATTERN = re.compile(
    r"decide|decision|agree|approve|consensus|vote", re.IGNORECASE
)
METRIC_PATTERN = re.compile(
    r"\d+%|\$\d+|metric|kpi|performance|revenue", re.IGNORECASE
)
FORMAL_PATTERN = re.compile(
    r"please|kindly|regards|sincerely|meeting|agenda", re.IGNORECASE
)

STYLE_RECOMMENDATIONS: Dict[str, List[str]] = {
    "standup": ["bullet_points", "action_focused"],
    "planning": ["executive", "meeting_minutes"],
    "technical": ["technical", "bullet_points"],
    "brainstorming": ["paragraph", "bullet_points"],
    "review": ["technical", "action_focused"],
    "client": ["executive", "professional"],
    "team": ["casual", "action_focused"],
}
DEFAULT_RECOMMENDATIONS = ["bullet_points", "professional"]


def get_style_recommendations(conversation_type: str) -> List[str]:
    """Preset ids suited to a kind of conversation."""
    return list(
        STYLE_RECOMMENDATIONS.get(conversation_type.lower(), DEFAULT_RECOMMENDATIONS)
    )


def suggest_optimal_settings(content: str) -> SettingsSuggestion:
    """
    Infer a style, tone and focus areas from keyword signals in ``content``.

    Precedence for style: actions with decisions > technical > metrics > bullets.
    """
    has_actions = bool(ACTION_PATTERN.search(content))
    has_technical = bool(TECHNICAL_PATTERN.search(content))
    has_decisions = bool(DECISION_PATTERN.search(content))
    has_metrics = bool(METRIC_PATTERN.search(content))

    if has_actions and has_decisions:
        style = "action_focused"
    elif has_technical:
        style = "technical"
    elif has_metrics:
        style = "executive"
    else:
        style = "bullet_points"

    focus_areas = []
    if has_decisions:
        focus_areas.append("decisions")
    if has_actions:
        focus_areas.append("actions")
    if has_technical:
        focus_areas.append("technical")
    if has_metrics:
        focus_areas.append("metrics")

    tone = "professional" if FORMAL_PATTERN.search(content) else "casual"

    return SettingsSuggestion(
        style=style,
        tone=tone,
        focus_areas=focus_areas or ["decisions", "actions"],
    )

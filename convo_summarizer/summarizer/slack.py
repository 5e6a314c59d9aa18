"""Slack channel summarization with a sectioned, non-JSON reply format."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Literal, Optional, Tuple

from convo_summarizer.summarizer.errors import ModelUnavailableError
from convo_summarizer.summarizer.models import (
    Sentiment,
    SpeakerBreakdown,
    SummaryResult,
    Urgency,
)
from convo_summarizer.summarizer.service import SummarizationOrchestrator

logger = logging.getLogger(__name__)


SLACK_SYSTEM_PROMPT = (
    "You are an expert at analyzing Slack team conversations and creating concise, "
    "actionable summaries. Focus on extracting key decisions, action items, and "
    "important discussions."
)

MAX_PARTICIPANTS = 5
ACTION_WORDS = ("will", "should", "need to", "must", "have to", "going to")

_MESSAGE_LINE = re.compile(r"^\s*\[[^\]]*\]\s*([^:\n]+):\s?(.*)$")
_BULLET_PREFIX = re.compile(r"^\s*[-•*]\s*")
_TITLE = re.compile(r"title[:\-\s]*([^\n]+)", re.IGNORECASE)
_SUMMARY = re.compile(
    r"summary[:\-\s]*([^\n]+(?:\n(?!(?:key|action|decision|topic|sentiment|urgency|participant))[^\n]*)*)",
    re.IGNORECASE,
)
_SENTIMENT = re.compile(r"sentiment[:\-\s]*(\w+)", re.IGNORECASE)
_URGENCY = re.compile(r"urgency[:\-\s]*(\w+)", re.IGNORECASE)


def _section(label: str) -> re.Pattern:
    return re.compile(rf"(?:{label})[:\-\s]*\n?((?:\s*[-•*]\s*[^\n]+\n?)+)", re.IGNORECASE)


_BULLET_SECTION = _section(r"key points?|bullets?")
_ACTION_SECTION = _section(r"action items?|tasks?")
_DECISION_SECTION = _section(r"decisions?")
_TOPIC_SECTION = _section(r"topics?|themes?")


@dataclass(slots=True)
class SlackSummarizationOptions:
    style: Literal["brief", "detailed", "executive"] = "detailed"
    focus: Literal["decisions", "actions", "discussion", "all"] = "all"
    include_participants: bool = True
    include_timestamps: bool = False
    max_length: int = 500


def _messages(content: str) -> List[Tuple[str, str]]:
    """``(speaker, text)`` pairs for every ``[timestamp] name: message`` line."""
    messages = []
    for line in content.split("\n"):
        match = _MESSAGE_LINE.match(line)
        if match:
            messages.append((match.group(1).strip(), match.group(2)))
    return messages


def extract_participants(content: str) -> List[str]:
    """Speaker names in first-seen order."""
    return list(dict.fromkeys(speaker for speaker, _ in _messages(content)))


def _extract_list(pattern: re.Pattern, text: str) -> List[str]:
    match = pattern.search(text)
    if not match:
        return []
    items = (_BULLET_PREFIX.sub("", line).strip() for line in match.group(1).split("\n"))
    return [item for item in items if item]


def extract_sentiment(text: str) -> Sentiment:
    match = _SENTIMENT.search(text)
    value = match.group(1).lower() if match else ""
    return value if value in ("positive", "negative") else "neutral"


def extract_urgency(text: str) -> Urgency:
    match = _URGENCY.search(text)
    value = match.group(1).lower() if match else ""
    return value if value in ("low", "high") else "medium"


def create_slack_prompt(
    content: str, channel_name: str, options: SlackSummarizationOptions
) -> str:
    prompt = f"""Please analyze the following Slack conversation from channel #{channel_name} and provide a structured summary.

The conversation content:
{content}

Please provide:
1. A concise title for this conversation (max 60 characters)
2. A {options.style} summary of the main discussion points
3. Key points discussed (3-5 most important points)
4. Action items or tasks mentioned
5. Decisions made during the conversation
6. Main topics/themes discussed
7. Overall sentiment (positive, neutral, or negative)
8. Urgency level (low, medium, or high)"""

    if options.include_participants:
        prompt += "\n9. Key participants who contributed significantly"

    if options.focus != "all":
        prompt += f"\n\nPay special attention to {options.focus} in the conversation."

    if options.include_timestamps:
        prompt += "\n\nReference message timestamps where they clarify the sequence of events."

    prompt += f"\n\nKeep the summary under {options.max_length} words."
    prompt += "\n\nFormat your response clearly with sections for each element."
    return prompt


def _speaker_entries(participants: List[str], channel_name: str) -> List[SpeakerBreakdown]:
    return [
        SpeakerBreakdown(
            speaker=name,
            key_points=[f"Participated in #{channel_name} discussion"],
            sentiment="neutral",
        )
        for name in participants[:MAX_PARTICIPANTS]
    ]


def parse_slack_summary_response(
    ai_response: str, content: str, channel_name: str
) -> SummaryResult:
    """Pull labelled sections out of a prose reply."""
    participants = extract_participants(content)
    message_count = len(_messages(content))

    title_match = _TITLE.search(ai_response)
    summary_match = _SUMMARY.search(ai_response)
    bullets = _extract_list(_BULLET_SECTION, ai_response)

    return SummaryResult(
        title=(title_match.group(1).strip() if title_match else "")
        or f"#{channel_name} Discussion",
        summary=(summary_match.group(1).strip() if summary_match else "")
        or f"Discussion in #{channel_name} with {len(participants)} participants",
        bullets=bullets,
        action_items=_extract_list(_ACTION_SECTION, ai_response),
        speaker_breakdown=_speaker_entries(participants, channel_name),
        skills=[],
        red_flags=[],
        sentiment=extract_sentiment(ai_response),
        urgency=extract_urgency(ai_response),
        confidence=0.8,
        model="fallback-parser",
        key_points=list(bullets),
        decisions=_extract_list(_DECISION_SECTION, ai_response),
        participants=participants[:MAX_PARTICIPANTS],
        topics=_extract_list(_TOPIC_SECTION, ai_response) or ["General Discussion"],
        word_count=len(content.split(" ")),
        message_count=message_count,
        channel_name=channel_name,
    )


def create_slack_fallback_summary(content: str, channel_name: str) -> SummaryResult:
    """Keyword heuristics used when no model reply is available."""
    messages = _messages(content)
    participants = extract_participants(content)

    action_items = [
        text for _, text in messages if any(word in text.lower() for word in ACTION_WORDS)
    ][:3]

    return SummaryResult(
        title=f"#{channel_name} Team Discussion",
        summary=(
            f"Discussion in #{channel_name} involving {len(participants)} participants "
            f"with {len(messages)} messages."
        ),
        bullets=[
            f"{len(messages)} messages exchanged",
            f"{len(participants)} participants involved",
        ],
        action_items=action_items or ["Review full conversation for action items"],
        speaker_breakdown=_speaker_entries(participants, channel_name),
        skills=[],
        red_flags=[],
        sentiment="neutral",
        urgency="medium",
        confidence=0.6,
        model="simple-parser",
        key_points=["Team discussion took place", "Multiple participants contributed"],
        decisions=["Review conversation for decisions made"],
        participants=participants[:MAX_PARTICIPANTS],
        topics=["General Discussion"],
        word_count=len(content.split(" ")),
        message_count=len(messages),
        channel_name=channel_name,
    )


async def summarize_slack_conversation(
    orchestrator: SummarizationOrchestrator,
    content: str,
    channel_name: str,
    options: Optional[SlackSummarizationOptions] = None,
) -> SummaryResult:
    """
    Summarize a Slack channel export.

    Uses the orchestrator's attempt plan with the Slack token budget. Never
    raises for model failures; the keyword fallback is returned instead.
    """
    options = options or SlackSummarizationOptions()
    prompt = create_slack_prompt(content, channel_name, options)

    try:
        reply, model = await orchestrator.generate(
            SLACK_SYSTEM_PROMPT, prompt, orchestrator.settings.slack_max_tokens
        )
    except ModelUnavailableError as exc:
        logger.error(f"Slack summarization failed for #{channel_name}: {exc}")
        return create_slack_fallback_summary(content, channel_name)

    logger.debug(f"Parsing Slack summary from {model}")
    return parse_slack_summary_response(reply, content, channel_name)

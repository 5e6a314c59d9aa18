"""Instruction text sent to the model gateway."""

from __future__ import annotations

import logging
from typing import Optional

from convo_summarizer.personalization.engine import generate_personalized_prompt
from convo_summarizer.personalization.models import PersonalizationSettings
from convo_summarizer.summarizer.models import SummaryContext

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are an expert AI assistant that analyzes conversations and creates "
    "structured summaries. Always respond with valid JSON."
)

JSON_SCHEMA_BLOCK = """{
  "title": "Brief descriptive title (max 60 chars)",
  "summary": "2-3 sentence overview of the conversation",
  "bullets": ["Key point 1", "Key point 2", "Key point 3"],
  "actionItems": ["Action item 1", "Action item 2"],
  "speakerBreakdown": [
    {
      "speaker": "Speaker name or role",
      "keyPoints": ["Point 1", "Point 2"],
      "sentiment": "positive|neutral|negative"
    }
  ],
  "skills": ["Skill 1", "Skill 2"],
  "redFlags": ["Red flag 1", "Red flag 2"],
  "sentiment": "positive|neutral|negative",
  "urgency": "low|medium|high",
  "confidence": 0.95
}"""

JSON_ONLY_INSTRUCTION = "Respond only with valid JSON. No additional text or formatting."


def _format_duration(duration: float) -> str:
    return f"{int(duration)}" if float(duration).is_integer() else f"{duration:g}"


def format_context(context: Optional[SummaryContext]) -> str:
    """Render the optional context header; empty when there is no context."""
    if context is None:
        return ""
    header = f"Context: {context.source} conversation"
    if context.channel:
        header += f" in {context.channel}"
    lines = [header]
    if context.participants:
        lines.append(f"Participants: {', '.join(context.participants)}")
    if context.duration:
        lines.append(f"Duration: {_format_duration(context.duration)} minutes")
    return "\n".join(lines) + "\n"


def build_default_prompt(text: str, context: Optional[SummaryContext] = None) -> str:
    return f"""{format_context(context)}
Please analyze the following conversation transcript and provide a structured summary in JSON format:

{JSON_SCHEMA_BLOCK}

Transcript:
{text}

{JSON_ONLY_INSTRUCTION}"""


def build_prompt(
    text: str,
    context: Optional[SummaryContext] = None,
    personalization: Optional[PersonalizationSettings] = None,
) -> str:
    """
    Build the user prompt for a summarization attempt.

    Personalized prompts keep the JSON output contract so the response parser
    can read them. Any failure while personalizing falls back to the default
    template; this function does not raise for bad settings.
    """
    if personalization is not None:
        try:
            personalized = generate_personalized_prompt(text, personalization)
        except Exception as e:
            logger.warning(
                f"Failed to generate personalized prompt, falling back to default: {e}"
            )
        else:
            return (
                f"{format_context(context)}{personalized}\n\n"
                f"Return the summary as a single JSON object with these keys:\n"
                f"{JSON_SCHEMA_BLOCK}\n\n{JSON_ONLY_INSTRUCTION}"
            )

    return build_default_prompt(text, context)

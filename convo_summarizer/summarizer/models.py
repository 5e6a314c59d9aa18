from __future__ import annotations

"""Domain models shared across the summarization pipeline."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Literal, Optional

if TYPE_CHECKING:
    from convo_summarizer.personalization.models import PersonalizationSettings


Sentiment = Literal["positive", "neutral", "negative"]
Urgency = Literal["low", "medium", "high"]
SourceOption = Literal["slack", "manual", "api"]

SENTIMENTS = ("positive", "neutral", "negative")
URGENCIES = ("low", "medium", "high")

FALLBACK_MODEL_TAG = "enhanced-fallback"


@dataclass(slots=True)
class SummaryContext:
    source: SourceOption = "manual"
    channel: Optional[str] = None
    participants: List[str] = field(default_factory=list)
    duration: Optional[float] = None


@dataclass(slots=True)
class SummaryRequest:
    text: str
    user_id: str
    team_id: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    context: Optional[SummaryContext] = None
    personalization: Optional["PersonalizationSettings"] = None


@dataclass(frozen=True, slots=True)
class SpeakerBreakdown:
    speaker: str
    key_points: List[str] = field(default_factory=list)
    sentiment: Sentiment = "neutral"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "speaker": self.speaker,
            "keyPoints": list(self.key_points),
            "sentiment": self.sentiment,
        }


@dataclass(frozen=True, slots=True)
class SummaryResult:
    title: str
    summary: str
    bullets: List[str]
    action_items: List[str]
    speaker_breakdown: List[SpeakerBreakdown]
    skills: List[str]
    red_flags: List[str]
    sentiment: Sentiment
    urgency: Urgency
    confidence: float
    model: str
    processing_time_ms: int = 0
    # Populated by the Slack conversation variant only.
    key_points: Optional[List[str]] = None
    decisions: Optional[List[str]] = None
    participants: Optional[List[str]] = None
    topics: Optional[List[str]] = None
    word_count: Optional[int] = None
    message_count: Optional[int] = None
    channel_name: Optional[str] = None

    @property
    def is_degraded(self) -> bool:
        return self.model == FALLBACK_MODEL_TAG

    def to_dict(self) -> Dict[str, Any]:
        """Render the camelCase wire shape consumed by API clients."""
        payload: Dict[str, Any] = {
            "title": self.title,
            "summary": self.summary,
            "bullets": list(self.bullets),
            "actionItems": list(self.action_items),
            "speakerBreakdown": [entry.to_dict() for entry in self.speaker_breakdown],
            "skills": list(self.skills),
            "redFlags": list(self.red_flags),
            "sentiment": self.sentiment,
            "urgency": self.urgency,
            "confidence": self.confidence,
            "processingTimeMs": self.processing_time_ms,
            "model": self.model,
        }
        extras = {
            "keyPoints": self.key_points,
            "decisions": self.decisions,
            "participants": self.participants,
            "topics": self.topics,
            "wordCount": self.word_count,
            "messageCount": self.message_count,
            "channelName": self.channel_name,
        }
        payload.update({key: value for key, value in extras.items() if value is not None})
        return payload


@dataclass(frozen=True, slots=True)
class Chunk:
    index: int
    start: int
    end: int
    text: str

    def __len__(self) -> int:
        return self.end - self.start

"""Summarization core: orchestration, chunking, parsing and fallback."""

from convo_summarizer.summarizer.errors import InvalidInputError, SummarizationError
from convo_summarizer.summarizer.models import (
    SpeakerBreakdown,
    SummaryContext,
    SummaryRequest,
    SummaryResult,
)
from convo_summarizer.summarizer.service import (
    ModelPolicy,
    SummarizationOrchestrator,
    summarize,
)

__all__ = [
    "InvalidInputError",
    "ModelPolicy",
    "SpeakerBreakdown",
    "SummarizationError",
    "SummarizationOrchestrator",
    "SummaryContext",
    "SummaryRequest",
    "SummaryResult",
    "summarize",
]

"""Merge per-chunk summaries into one bounded result."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from convo_summarizer.summarizer.models import Sentiment, SummaryResult, Urgency


MAX_SKILLS = 15
MAX_RED_FLAGS = 10
MAX_ACTION_ITEMS = 8
MAX_BULLETS = 10

URGENCY_RANK = {"low": 0, "medium": 1, "high": 2}


def _ordered_union(groups: Iterable[Sequence[str]], limit: int) -> List[str]:
    merged = dict.fromkeys(item for group in groups for item in group)
    return list(merged)[:limit]


def combined_sentiment(results: Sequence[SummaryResult]) -> Sentiment:
    positive = sum(1 for result in results if result.sentiment == "positive")
    negative = sum(1 for result in results if result.sentiment == "negative")
    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


def combined_urgency(results: Sequence[SummaryResult]) -> Urgency:
    return max((result.urgency for result in results), key=URGENCY_RANK.__getitem__)


def combine_results(results: Sequence[SummaryResult], source_length: int) -> SummaryResult:
    """
    Combine chunk results, given in chunk order, into a new summary.

    List fields are capped regardless of how many chunks contributed. Earlier
    chunks win when a cap is hit, and the first chunk names the model.

    Args:
        results: Per-chunk summaries ordered by chunk index
        source_length: Character length of the original transcript

    Returns:
        A freshly built result; the inputs are left untouched.
    """
    if not results:
        raise ValueError("combine_results requires at least one result")

    count = len(results)
    bullets = [bullet for result in results for bullet in result.bullets][:MAX_BULLETS]

    return SummaryResult(
        title=f"Combined Analysis ({count} parts)",
        summary=(
            f"Combined analysis of {source_length} character transcript processed "
            f"in {count} chunks. Key themes and insights have been merged from all "
            "sections."
        ),
        bullets=bullets,
        action_items=_ordered_union(
            (result.action_items for result in results), MAX_ACTION_ITEMS
        ),
        speaker_breakdown=[
            entry for result in results for entry in result.speaker_breakdown
        ],
        skills=_ordered_union((result.skills for result in results), MAX_SKILLS),
        red_flags=_ordered_union((result.red_flags for result in results), MAX_RED_FLAGS),
        sentiment=combined_sentiment(results),
        urgency=combined_urgency(results),
        confidence=sum(result.confidence for result in results) / count,
        processing_time_ms=sum(result.processing_time_ms for result in results),
        model=f"combined-{results[0].model or 'unknown'}",
    )

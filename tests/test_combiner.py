import pytest

from convo_summarizer.summarizer.combiner import (
    MAX_ACTION_ITEMS,
    MAX_BULLETS,
    MAX_RED_FLAGS,
    MAX_SKILLS,
    combine_results,
)
from convo_summarizer.summarizer.models import SpeakerBreakdown, SummaryResult


def make_result(index=0, **overrides):
    values = dict(
        title=f"Part {index}",
        summary=f"Summary {index}",
        bullets=[f"bullet {index}"],
        action_items=[f"action {index}"],
        speaker_breakdown=[SpeakerBreakdown(speaker="Alice", key_points=[f"point {index}"])],
        skills=["Python", f"skill {index}"],
        red_flags=[f"flag {index}"],
        sentiment="neutral",
        urgency="low",
        confidence=0.5,
        model="primary/model",
        processing_time_ms=100,
    )
    values.update(overrides)
    return SummaryResult(**values)


def test_requires_at_least_one_result():
    with pytest.raises(ValueError):
        combine_results([], 0)


def test_lists_are_capped_for_many_chunks():
    results = [make_result(i, bullets=[f"b{i}-1", f"b{i}-2"]) for i in range(30)]
    combined = combine_results(results, 1_200_000)

    assert len(combined.skills) == MAX_SKILLS
    assert len(combined.red_flags) == MAX_RED_FLAGS
    assert len(combined.action_items) == MAX_ACTION_ITEMS
    assert len(combined.bullets) == MAX_BULLETS
    assert combined.bullets[:3] == ["b0-1", "b0-2", "b1-1"]


def test_unions_remove_duplicates_in_first_seen_order():
    results = [
        make_result(0, skills=["Python", "SQL"], action_items=["Ship it"]),
        make_result(1, skills=["SQL", "Go"], action_items=["Ship it", "Test it"]),
    ]
    combined = combine_results(results, 100)

    assert combined.skills == ["Python", "SQL", "Go"]
    assert combined.action_items == ["Ship it", "Test it"]


def test_speakers_concatenate_without_dedup():
    combined = combine_results([make_result(0), make_result(1)], 100)
    assert [entry.speaker for entry in combined.speaker_breakdown] == ["Alice", "Alice"]


def test_single_high_urgency_wins():
    results = [make_result(0), make_result(1, urgency="high"), make_result(2)]
    assert combine_results(results, 100).urgency == "high"


def test_medium_beats_low():
    results = [make_result(0), make_result(1, urgency="medium")]
    assert combine_results(results, 100).urgency == "medium"


@pytest.mark.parametrize(
    "sentiments, expected",
    [
        (["positive", "positive", "negative"], "positive"),
        (["negative", "neutral", "negative", "positive"], "negative"),
        (["positive", "negative"], "neutral"),
        (["neutral", "neutral"], "neutral"),
    ],
)
def test_sentiment_majority_vote(sentiments, expected):
    results = [make_result(i, sentiment=value) for i, value in enumerate(sentiments)]
    assert combine_results(results, 100).sentiment == expected


def test_numeric_fields_and_model_tag():
    results = [
        make_result(0, confidence=0.9, processing_time_ms=120, model="deepseek"),
        make_result(1, confidence=0.3, processing_time_ms=80, model="gpt"),
    ]
    combined = combine_results(results, 45_000)

    assert combined.confidence == pytest.approx(0.6)
    assert combined.processing_time_ms == 200
    assert combined.model == "combined-deepseek"
    assert combined.title == "Combined Analysis (2 parts)"
    assert combined.summary.startswith(
        "Combined analysis of 45000 character transcript processed in 2 chunks."
    )


def test_empty_first_model_is_reported_as_unknown():
    combined = combine_results([make_result(0, model="")], 10)
    assert combined.model == "combined-unknown"


def test_inputs_are_not_mutated():
    results = [make_result(0), make_result(1)]
    snapshot = [(list(r.bullets), list(r.skills), list(r.red_flags)) for r in results]

    combined = combine_results(results, 100)

    assert [(list(r.bullets), list(r.skills), list(r.red_flags)) for r in results] == snapshot
    assert combined is not results[0]

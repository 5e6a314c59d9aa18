import pytest

from convo_summarizer.summarizer.chunking import split_text


def _sentences(total_chars):
    sentence = "The team reviewed the roadmap and agreed on next steps. "
    text = sentence * (total_chars // len(sentence) + 1)
    return text[:total_chars]


def test_short_text_is_single_chunk():
    chunks = split_text("hello world.", chunk_size=100)
    assert len(chunks) == 1
    assert chunks[0].text == "hello world."
    assert (chunks[0].start, chunks[0].end) == (0, 12)


def test_empty_text_has_no_chunks():
    assert split_text("") == []


def test_non_positive_chunk_size_rejected():
    with pytest.raises(ValueError):
        split_text("abc", chunk_size=0)


def test_45k_transcript_splits_on_sentence_boundaries():
    text = _sentences(45_000)
    chunks = split_text(text)

    assert len(chunks) >= 2
    assert all(len(chunk.text) <= 40_000 for chunk in chunks)
    assert chunks[0].text.endswith(".")
    assert len(chunks[0].text) > 40_000 * 0.8


def test_chunks_are_lossless_and_ordered():
    text = _sentences(12_345) + "\ntrailing line without a terminator"
    chunks = split_text(text, chunk_size=1000)

    assert "".join(chunk.text for chunk in chunks) == text
    assert sum(len(chunk) for chunk in chunks) == len(text)
    assert [chunk.index for chunk in chunks] == list(range(len(chunks)))
    assert chunks[0].start == 0
    for previous, current in zip(chunks, chunks[1:]):
        assert previous.end == current.start
    assert chunks[-1].end == len(text)


def test_newline_counts_as_boundary():
    text = "a" * 90 + "\n" + "b" * 200
    chunks = split_text(text, chunk_size=100)
    assert chunks[0].text == "a" * 90 + "\n"


def test_early_boundary_ignored_and_raw_cut_used():
    text = "a" * 10 + "." + "b" * 300
    chunks = split_text(text, chunk_size=100)
    assert len(chunks[0].text) == 100
    assert "".join(chunk.text for chunk in chunks) == text


def test_final_window_is_never_trimmed():
    text = "x" * 150 + ". tail"
    chunks = split_text(text, chunk_size=100)
    assert chunks[-1].text == text[100:]

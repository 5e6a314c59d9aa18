"""Non-fatal quality checks run on transcripts before prompting."""

from __future__ import annotations

import re
from collections import Counter
from typing import List


REPETITION_RATIO = 0.1
MAX_LINE_LENGTH = 1000

_WHITESPACE = re.compile(r"\s+")


def validate_transcript_content(text: str) -> List[str]:
    """
    Return human-readable descriptions of suspicious content.

    Nothing here blocks summarization; callers log the issues and carry on.
    """
    issues: List[str] = []

    words = _WHITESPACE.split(text.lower())
    word_counts = Counter(words)
    if word_counts:
        word, count = word_counts.most_common(1)[0]
        if count > len(words) * REPETITION_RATIO:
            issues.append(f'Excessive repetition of word "{word}" ({count} times)')

    if "\ufffd" in text:
        issues.append("Potential encoding issues detected")

    long_lines = [line for line in text.split("\n") if len(line) > MAX_LINE_LENGTH]
    if long_lines:
        issues.append(
            f"{len(long_lines)} very long lines detected (potential formatting issues)"
        )

    return issues

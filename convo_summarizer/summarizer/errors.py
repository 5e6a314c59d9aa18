"""Error types raised inside the summarization core."""

from __future__ import annotations


class SummarizationError(Exception):
    """Base class for summarization failures."""


class InvalidInputError(SummarizationError):
    """Request text is missing, blank, or below the minimum length."""


class ModelUnavailableError(SummarizationError):
    """A single model attempt failed or returned nothing."""

    def __init__(self, message: str, model: str | None = None) -> None:
        super().__init__(message)
        self.model = model


class ParseError(SummarizationError):
    """Model output could not be decoded into a summary object."""


class ChunkingDefect(SummarizationError):
    """Chunking produced no segments for input that passed validation."""

"""Conversation summarization service with multi-model fallback."""

__version__ = "1.0.0"

"""Abstract base class for text-generation backends."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ModelGateway(ABC):
    name: str

    @abstractmethod
    async def invoke(
        self,
        model_id: str,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Return the raw completion text for one model call."""

"""Model gateway implementations."""

from convo_summarizer.summarizer.gateways.base import ModelGateway
from convo_summarizer.summarizer.gateways.providers import (
    AnthropicGateway,
    OllamaGateway,
    OpenAICompatibleGateway,
    build_gateway,
)

__all__ = [
    "AnthropicGateway",
    "ModelGateway",
    "OllamaGateway",
    "OpenAICompatibleGateway",
    "build_gateway",
]

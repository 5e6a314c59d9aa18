# convo_summarizer/summarizer/gateways/providers.py
"""
Concrete model gateways.

Each gateway performs exactly one network call per ``invoke`` and lets SDK
errors propagate; retry and fallback policy belongs to the orchestrator.
"""

from typing import Dict, Optional
import logging

from convo_summarizer.config import Settings
from convo_summarizer.summarizer.gateways.base import ModelGateway

logger = logging.getLogger(__name__)


class OpenAICompatibleGateway(ModelGateway):
    """OpenAI chat completions API, or any compatible router such as OpenRouter."""

    name = "openai-compatible"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        default_headers: Optional[Dict[str, str]] = None,
    ):
        try:
            from openai import AsyncOpenAI
        except ImportError:
            raise ImportError(
                "OpenAI package not installed. Install with: pip install openai"
            )

        self.client = AsyncOpenAI(
            api_key=api_key, base_url=base_url, default_headers=default_headers
        )

    async def invoke(
        self,
        model_id: str,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Generate a completion via the chat completions endpoint."""
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        response = await self.client.chat.completions.create(
            model=model_id,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


class AnthropicGateway(ModelGateway):
    """Anthropic Claude API gateway."""

    name = "anthropic"

    def __init__(self, api_key: str):
        try:
            from anthropic import AsyncAnthropic
        except ImportError:
            raise ImportError(
                "Anthropic package not installed. Install with: pip install anthropic"
            )

        self.client = AsyncAnthropic(api_key=api_key)

    async def invoke(
        self,
        model_id: str,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Generate a completion from the messages API."""
        response = await self.client.messages.create(
            model=model_id,
            max_tokens=max_tokens,
            temperature=temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )


class OllamaGateway(ModelGateway):
    """Ollama local LLM gateway."""

    name = "ollama"

    def __init__(self, base_url: str = "http://localhost:11434", timeout: float = 120.0):
        """
        Initialize Ollama gateway.

        Args:
            base_url: Ollama server URL (default: http://localhost:11434)
            timeout: HTTP timeout in seconds for a single generation
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        logger.info(f"Initialized Ollama gateway at {base_url}")

    async def invoke(
        self,
        model_id: str,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Generate response from Ollama API."""
        import httpx

        payload = {
            "model": model_id,
            "system": system_prompt,
            "prompt": user_prompt,
            "stream": False,
            "options": {
                "temperature": temperature,
                "num_predict": max_tokens,
            },
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(f"{self.base_url}/api/generate", json=payload)
            response.raise_for_status()
            result = response.json()

        return result.get("response", "")


def _usable_key(key: Optional[str]) -> bool:
    return bool(key) and not key.startswith("your_")


def build_gateway(settings: Settings) -> Optional[ModelGateway]:
    """
    Create the gateway selected by ``settings.llm_provider``.

    Returns None when the provider is disabled or its credentials are missing;
    the orchestrator then serves degraded summaries.
    """
    provider = settings.llm_provider
    if provider == "none":
        return None

    try:
        if provider == "openrouter":
            if not _usable_key(settings.openrouter_api_key):
                logger.warning("OpenRouter API key not configured, skipping gateway")
                return None
            gateway = OpenAICompatibleGateway(
                api_key=settings.openrouter_api_key,
                base_url=settings.llm_base_url,
                default_headers={
                    "HTTP-Referer": settings.app_url,
                    "X-Title": settings.app_title,
                },
            )

        elif provider == "openai":
            if not _usable_key(settings.openai_api_key):
                logger.warning("OpenAI API key not configured, skipping gateway")
                return None
            gateway = OpenAICompatibleGateway(api_key=settings.openai_api_key)

        elif provider == "anthropic":
            if not _usable_key(settings.anthropic_api_key):
                logger.warning("Anthropic API key not configured, skipping gateway")
                return None
            gateway = AnthropicGateway(api_key=settings.anthropic_api_key)

        elif provider == "ollama":
            gateway = OllamaGateway(base_url=settings.ollama_base_url)

        else:
            logger.warning(f"Unknown LLM provider: {provider}")
            return None

    except ImportError as e:
        logger.error(f"Failed to initialize {provider} gateway: {e}")
        return None

    logger.info(
        f"Initialized {provider} gateway (primary: {settings.primary_model}, "
        f"fallback: {settings.fallback_model})"
    )
    return gateway

"""Summarization orchestrator: validation, retries, chunking and degradation."""

from __future__ import annotations

import dataclasses
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

import anyio

from convo_summarizer.config import Settings, get_settings
from convo_summarizer.summarizer.chunking import split_text
from convo_summarizer.summarizer.combiner import combine_results
from convo_summarizer.summarizer.content_checks import validate_transcript_content
from convo_summarizer.summarizer.errors import (
    ChunkingDefect,
    InvalidInputError,
    ModelUnavailableError,
    SummarizationError,
)
from convo_summarizer.summarizer.fallback import generate_fallback
from convo_summarizer.summarizer.gateways import ModelGateway, build_gateway
from convo_summarizer.summarizer.models import Chunk, SummaryRequest, SummaryResult
from convo_summarizer.summarizer.parser import parse_ai_response
from convo_summarizer.summarizer.prompts import SYSTEM_PROMPT, build_prompt

logger = logging.getLogger(__name__)

CHUNKS_FAILED_ERROR = "Failed to process any chunks of large transcript"

SleepFn = Callable[[float], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class ModelPolicy:
    """How many sequential attempts one model gets before moving on."""

    model: str
    attempts: int


def attempt_plan_from_settings(settings: Settings) -> List[ModelPolicy]:
    plan = [ModelPolicy(settings.primary_model, settings.primary_attempts)]
    if settings.fallback_model and settings.fallback_attempts:
        plan.append(ModelPolicy(settings.fallback_model, settings.fallback_attempts))
    return plan


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class SummarizationOrchestrator:
    """
    Turns a ``SummaryRequest`` into a ``SummaryResult``.

    Only ``InvalidInputError`` escapes ``summarize``. Model outages, malformed
    output and chunking problems all end in a well-formed, low-confidence
    degraded result instead.
    """

    def __init__(
        self,
        gateway: Optional[ModelGateway],
        settings: Settings,
        attempt_plan: Optional[Sequence[ModelPolicy]] = None,
        sleep: SleepFn = anyio.sleep,
    ) -> None:
        self.gateway = gateway
        self.settings = settings
        self.attempt_plan = list(attempt_plan or attempt_plan_from_settings(settings))
        self._sleep = sleep

    def validate(self, request: SummaryRequest) -> str:
        """Return the trimmed text or raise ``InvalidInputError``."""
        if not request.text or not request.text.strip():
            raise InvalidInputError("Transcript text is required")
        text = request.text.strip()
        if len(text) < self.settings.min_text_length:
            raise InvalidInputError(
                f"Transcript too short (minimum {self.settings.min_text_length} characters)"
            )
        return text

    async def summarize(self, request: SummaryRequest) -> SummaryResult:
        start = time.perf_counter()
        text = self.validate(request)

        if len(text) > self.settings.chunking_threshold_chars:
            logger.warning(
                f"Large transcript detected ({len(text)} chars), using chunked processing"
            )
            return await self._summarize_chunked(request, text, start)

        issues = validate_transcript_content(text)
        if issues:
            logger.warning(f"Content validation issues: {'; '.join(issues)}")

        prompt = build_prompt(text, request.context, request.personalization)
        try:
            content, model = await self.generate(
                SYSTEM_PROMPT, prompt, self.settings.llm_max_tokens
            )
        except ModelUnavailableError as exc:
            logger.warning(f"AI service failed, using degraded summary: {exc}")
            result = generate_fallback(text, str(exc))
        else:
            result = parse_ai_response(content, model)

        return dataclasses.replace(result, processing_time_ms=_elapsed_ms(start))

    async def generate(
        self, system_prompt: str, user_prompt: str, max_tokens: int
    ) -> Tuple[str, str]:
        """
        Walk the attempt plan until one model returns text.

        Attempts are strictly sequential. A failed attempt is followed by a
        ``retry_backoff_ms * attempt`` pause before the same model is retried;
        the next model starts once the previous one is out of attempts.

        Returns:
            ``(content, model_id)`` of the first non-empty response

        Raises:
            ModelUnavailableError: If no gateway is configured or every attempt failed
        """
        if self.gateway is None:
            raise ModelUnavailableError("No AI provider configured")

        failures: Dict[str, str] = {}
        for policy in self.attempt_plan:
            for attempt in range(1, policy.attempts + 1):
                try:
                    content = await self._attempt(
                        policy.model, system_prompt, user_prompt, max_tokens
                    )
                except ModelUnavailableError as exc:
                    failures[policy.model] = str(exc)
                    logger.warning(
                        f"Model {policy.model} attempt {attempt}/{policy.attempts} failed: {exc}"
                    )
                    if attempt < policy.attempts and self.settings.retry_backoff_ms:
                        await self._sleep(self.settings.retry_backoff_ms * attempt / 1000)
                    continue

                if attempt > 1 or policy is not self.attempt_plan[0]:
                    logger.info(f"Model {policy.model} succeeded on attempt {attempt}")
                return content, policy.model

        detail = "; ".join(f"{model}: {error}" for model, error in failures.items())
        raise ModelUnavailableError(f"All AI models failed. {detail}")

    async def _attempt(
        self, model: str, system_prompt: str, user_prompt: str, max_tokens: int
    ) -> str:
        timeout = self.settings.llm_attempt_timeout_s
        logger.debug(f"Calling {model} with prompt length: {len(user_prompt)}")
        try:
            with anyio.fail_after(timeout):
                content = await self.gateway.invoke(
                    model,
                    system_prompt,
                    user_prompt,
                    max_tokens,
                    self.settings.llm_temperature,
                )
        except TimeoutError as exc:
            raise ModelUnavailableError(f"timed out after {timeout}s", model) from exc
        except Exception as exc:
            raise ModelUnavailableError(str(exc) or type(exc).__name__, model) from exc

        if not content or not content.strip():
            raise ModelUnavailableError(f"No response from {model}", model)
        return content

    async def _summarize_chunked(
        self, request: SummaryRequest, text: str, start: float
    ) -> SummaryResult:
        try:
            chunks = split_text(
                text,
                chunk_size=self.settings.chunk_size_chars,
                boundary_ratio=self.settings.chunk_boundary_ratio,
            )
            if not chunks:
                raise ChunkingDefect(f"No chunks produced for {len(text)} characters")
        except ChunkingDefect as exc:
            logger.error(f"Chunking defect: {exc}", exc_info=True)
            result = generate_fallback(text, f"Chunking defect: {exc}")
            return dataclasses.replace(result, processing_time_ms=_elapsed_ms(start))

        logger.info(f"Processing large transcript in {len(chunks)} chunks")
        results = await self._summarize_chunks(request, chunks)
        successful = [result for result in results if result is not None]

        if not successful:
            logger.warning(f"{CHUNKS_FAILED_ERROR} ({len(chunks)} chunks)")
            result = generate_fallback(text, CHUNKS_FAILED_ERROR)
            return dataclasses.replace(result, processing_time_ms=_elapsed_ms(start))

        return combine_results(successful, len(text))

    async def _summarize_chunks(
        self, request: SummaryRequest, chunks: Sequence[Chunk]
    ) -> List[Optional[SummaryResult]]:
        """Summarize every chunk; the returned list is indexed by chunk index."""
        results: List[Optional[SummaryResult]] = [None] * len(chunks)
        parallelism = self.settings.chunk_parallelism

        if parallelism <= 1:
            for chunk in chunks:
                results[chunk.index] = await self._summarize_chunk(request, chunk)
            return results

        limiter = anyio.CapacityLimiter(parallelism)

        async def run(chunk: Chunk) -> None:
            async with limiter:
                results[chunk.index] = await self._summarize_chunk(request, chunk)

        async with anyio.create_task_group() as tg:
            for chunk in chunks:
                tg.start_soon(run, chunk)
        return results

    async def _summarize_chunk(
        self, request: SummaryRequest, chunk: Chunk
    ) -> Optional[SummaryResult]:
        chunk_request = dataclasses.replace(request, text=chunk.text)
        try:
            return await self.summarize(chunk_request)
        except SummarizationError as exc:
            logger.warning(f"Skipping chunk {chunk.index + 1}: {exc}")
            return None


_orchestrator: Optional[SummarizationOrchestrator] = None


def get_orchestrator() -> SummarizationOrchestrator:
    """Process-wide orchestrator built from the cached settings."""
    global _orchestrator
    if _orchestrator is None:
        settings = get_settings()
        _orchestrator = SummarizationOrchestrator(build_gateway(settings), settings)
    return _orchestrator


def reset_orchestrator() -> None:
    global _orchestrator
    _orchestrator = None


async def summarize(
    request: SummaryRequest, orchestrator: Optional[SummarizationOrchestrator] = None
) -> SummaryResult:
    """Summarize with the given or process-wide orchestrator."""
    orchestrator = orchestrator or get_orchestrator()
    return await orchestrator.summarize(request)

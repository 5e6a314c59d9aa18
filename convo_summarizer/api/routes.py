"""HTTP route handlers for the summarization API."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Type, TypeVar

import orjson
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from convo_summarizer.config import get_settings
from convo_summarizer.personalization.engine import (
    get_available_styles,
    get_default_settings,
    validate_settings,
)
from convo_summarizer.personalization.loader import get_preset_catalog
from convo_summarizer.personalization.suggestions import (
    get_style_recommendations,
    suggest_optimal_settings,
)
from convo_summarizer.summarizer.service import (
    SummarizationOrchestrator,
    get_orchestrator,
)
from convo_summarizer.summarizer.slack import summarize_slack_conversation

from .schemas import (
    PersonalizationDraftModel,
    PersonalizationOptionsModel,
    SlackSummarizeRequestModel,
    SuggestRequestModel,
    SuggestResponseModel,
    SummarizeRequestModel,
    SummaryResponseModel,
    ValidationResponseModel,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

router = APIRouter()


def _payload_too_large(limit: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail={"error": "payload_too_large", "limit_bytes": limit},
    )


def json_body(model_cls: Type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    """
    Dependency that reads the raw body with a size cap and validates it.

    The declared ``Content-Length`` is checked before reading so oversized
    uploads are refused early; the byte count is checked again after reading.
    """

    async def load(http_request: Request) -> ModelT:
        limit = get_settings().max_payload_bytes
        declared = http_request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > limit:
            raise _payload_too_large(limit)

        raw = await http_request.body()
        if len(raw) > limit:
            raise _payload_too_large(limit)

        try:
            data: Any = orjson.loads(raw) if raw else {}
        except orjson.JSONDecodeError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "invalid_json", "details": str(exc)},
            ) from exc

        try:
            return model_cls.model_validate(data)
        except ValidationError as exc:
            raise RequestValidationError(exc.errors()) from exc

    return load


load_summarize_request = json_body(SummarizeRequestModel)
load_slack_request = json_body(SlackSummarizeRequestModel)


@router.post("/v1/summarize", response_model=SummaryResponseModel)
async def summarize_transcript(
    summary_request: SummarizeRequestModel = Depends(load_summarize_request),
    orchestrator: SummarizationOrchestrator = Depends(get_orchestrator),
):
    # InvalidInputError is mapped to a 400 by the app-level handler
    result = await orchestrator.summarize(summary_request.to_domain())
    if result.is_degraded:
        logger.warning(
            f"Served degraded summary for user {summary_request.user_id} "
            f"({len(summary_request.text)} chars)"
        )
    return JSONResponse(content={"data": result.to_dict()})


@router.post("/v1/slack/summarize", response_model=SummaryResponseModel)
async def summarize_slack(
    slack_request: SlackSummarizeRequestModel = Depends(load_slack_request),
    orchestrator: SummarizationOrchestrator = Depends(get_orchestrator),
):
    result = await summarize_slack_conversation(
        orchestrator,
        slack_request.content,
        slack_request.channel_name,
        slack_request.options.to_domain(),
    )
    return JSONResponse(content={"data": result.to_dict()})


@router.get("/v1/personalization/options", response_model=PersonalizationOptionsModel)
async def personalization_options(is_pro: bool = False):
    catalog = get_preset_catalog()
    return PersonalizationOptionsModel(
        styles=get_available_styles(is_pro, catalog),
        tones=catalog.list_tones(),
        focus_areas=catalog.list_focus_areas(),
        defaults=get_default_settings(),
    )


@router.post("/v1/personalization/validate", response_model=ValidationResponseModel)
async def personalization_validate(draft: PersonalizationDraftModel):
    report = validate_settings(draft.to_domain())
    return ValidationResponseModel(valid=report.valid, errors=report.errors)


@router.post("/v1/personalization/suggest", response_model=SuggestResponseModel)
async def personalization_suggest(suggest_request: SuggestRequestModel):
    suggestion = suggest_optimal_settings(suggest_request.content)
    recommended = (
        get_style_recommendations(suggest_request.conversation_type)
        if suggest_request.conversation_type
        else [suggestion.style]
    )
    return SuggestResponseModel(
        style=suggestion.style,
        tone=suggestion.tone,
        focus_areas=suggestion.focus_areas,
        recommended_styles=recommended,
    )

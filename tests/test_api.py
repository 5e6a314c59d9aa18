import pytest
from httpx import ASGITransport, AsyncClient

from conftest import ScriptedGateway, summary_json
from convo_summarizer.config import get_settings
from convo_summarizer.main import create_application
from convo_summarizer.summarizer.service import get_orchestrator

TRANSCRIPT = "Alice: we ship on Friday. Bob: I will update the release notes."


@pytest.fixture
def gateway():
    return ScriptedGateway(default=summary_json())


@pytest.fixture
def test_app(gateway, make_orchestrator):
    app = create_application()
    orchestrator = make_orchestrator(gateway)
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    return app


def _client(app):
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")


@pytest.mark.anyio
async def test_healthz(test_app):
    async with _client(test_app) as client:
        response = await client.get("/healthz")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["models"] == [get_settings().primary_model, get_settings().fallback_model]


@pytest.mark.anyio
async def test_summarize_returns_wire_shape(test_app, gateway):
    payload = {"transcriptText": TRANSCRIPT, "userId": "u-1", "tags": "standup"}
    async with _client(test_app) as client:
        response = await client.post("/v1/summarize", json=payload)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["model"] == "primary/model"
    assert data["actionItems"] == ["Alice drafts the spec"]
    assert data["speakerBreakdown"][0]["keyPoints"] == ["Owns the spec"]
    assert isinstance(data["processingTimeMs"], int)
    assert "channelName" not in data
    assert len(gateway.calls) == 1


@pytest.mark.anyio
async def test_summarize_passes_personalization(test_app, gateway):
    payload = {
        "text": TRANSCRIPT,
        "context": {"source": "slack", "channel": "#eng"},
        "personalization": {"style": "technical", "focusAreas": ["technical"]},
    }
    async with _client(test_app) as client:
        response = await client.post("/v1/summarize", json=payload)

    assert response.status_code == 200
    user_prompt = gateway.calls[0][2]
    assert "Context: slack conversation in #eng" in user_prompt
    assert "- Technical Details:" in user_prompt


@pytest.mark.anyio
async def test_short_transcript_rejected(test_app, gateway):
    async with _client(test_app) as client:
        response = await client.post("/v1/summarize", json={"transcriptText": "short"})

    assert response.status_code == 400
    assert response.json() == {
        "error": "invalid_input",
        "details": "Transcript too short (minimum 10 characters)",
    }
    assert gateway.calls == []


@pytest.mark.anyio
async def test_degraded_summary_is_still_200(make_orchestrator):
    app = create_application()
    orchestrator = make_orchestrator(ScriptedGateway(default=RuntimeError("down")))
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator

    async with _client(app) as client:
        response = await client.post("/v1/summarize", json={"transcriptText": TRANSCRIPT})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["model"] == "enhanced-fallback"
    assert data["confidence"] == 0.2
    assert "AI service unavailable - limited analysis" in data["redFlags"]


@pytest.mark.anyio
async def test_missing_text_is_validation_error(test_app):
    async with _client(test_app) as client:
        response = await client.post("/v1/summarize", json={"userId": "u-1"})

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


@pytest.mark.anyio
async def test_long_custom_instructions_rejected(test_app):
    payload = {
        "transcriptText": TRANSCRIPT,
        "personalization": {"customInstructions": "x" * 501},
    }
    async with _client(test_app) as client:
        response = await client.post("/v1/summarize", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


@pytest.mark.anyio
async def test_invalid_json_body(test_app):
    async with _client(test_app) as client:
        response = await client.post(
            "/v1/summarize",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_json"


@pytest.mark.anyio
async def test_payload_too_large(test_app):
    settings = get_settings()
    original_limit = settings.max_payload_bytes
    settings.max_payload_bytes = 1024
    try:
        async with _client(test_app) as client:
            response = await client.post(
                "/v1/summarize", json={"transcriptText": "word " * 1000}
            )
    finally:
        settings.max_payload_bytes = original_limit

    assert response.status_code == 413
    body = response.json()
    assert body["error"] == "payload_too_large"
    assert body["limit_bytes"] == 1024


@pytest.mark.anyio
async def test_slack_summarize(test_app, gateway):
    gateway.default = "Title: Deploy sync\nSummary: Deploy moved to Monday.\nUrgency: high"
    payload = {
        "content": "[10:00] dana: we need to move the deploy\n[10:05] eli: Monday works",
        "channelName": "ops",
        "options": {"style": "brief", "maxLength": 200},
    }
    async with _client(test_app) as client:
        response = await client.post("/v1/slack/summarize", json=payload)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Deploy sync"
    assert data["channelName"] == "ops"
    assert data["participants"] == ["dana", "eli"]
    assert data["urgency"] == "high"
    assert "under 200 words" in gateway.calls[0][2]


@pytest.mark.anyio
async def test_personalization_options(test_app):
    async with _client(test_app) as client:
        free = await client.get("/v1/personalization/options")
        pro = await client.get("/v1/personalization/options", params={"is_pro": "true"})

    assert free.status_code == 200
    assert [style["id"] for style in free.json()["styles"]] == ["bullet_points", "paragraph"]
    assert len(pro.json()["styles"]) == 6
    body = pro.json()
    assert len(body["tones"]) == 5
    assert len(body["focus_areas"]) == 8
    assert body["defaults"]["style"] == "bullet_points"


@pytest.mark.anyio
async def test_personalization_validate(test_app):
    payload = {
        "style": "nope",
        "tone": "professional",
        "focusAreas": ["decisions", "bogus"],
        "customInstructions": "x" * 600,
    }
    async with _client(test_app) as client:
        response = await client.post("/v1/personalization/validate", json=payload)

    assert response.status_code == 200
    assert response.json() == {
        "valid": False,
        "errors": [
            "Invalid summary style selected",
            "Invalid focus areas: bogus",
            "Custom instructions must be under 500 characters",
        ],
    }


@pytest.mark.anyio
async def test_personalization_suggest(test_app):
    payload = {
        "content": "Please assign the deploy task to Bob; we decided to ship Friday.",
        "conversationType": "standup",
    }
    async with _client(test_app) as client:
        response = await client.post("/v1/personalization/suggest", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["style"] == "action_focused"
    assert body["tone"] == "professional"
    assert body["recommended_styles"] == ["bullet_points", "action_focused"]

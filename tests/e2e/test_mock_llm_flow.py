"""
E2E tests for the chat flow against the mock language model server.

The real OpenAI SDK talks to mock_services/llm_server over an in-process
ASGI transport, so classification, dispatch and explanation all run
end to end without network access.

Personas:
- direct: states amount and timeframe, resolved on the first pass
- colloquial: vague wording, resolved by the permissive second pass
- vague_purchase: no amount anywhere, ends as unknown
"""

import httpx
import pytest
from decimal import Decimal
from typing import AsyncIterator
from fastapi.testclient import TestClient
from openai import AsyncOpenAI
from liquidity_gateway.api.dependencies import get_llm_client, get_today
from liquidity_gateway.api.main import create_app
from liquidity_gateway.api.v1.schemas import SnapshotSchema
from liquidity_gateway.domain.engine import build_snapshot
from liquidity_gateway.infrastructure.clients.llm import LLMClient
from liquidity_gateway.prompts import UNKNOWN_INTENT_REPLY
from mock_services.llm_server.main import app as mock_llm_app
from conftest import TODAY


async def mock_llm_client() -> AsyncIterator[LLMClient]:
    http_client = httpx.AsyncClient(
        transport=httpx.ASGITransport(app=mock_llm_app),
        base_url="http://mock-llm",
    )
    sdk = AsyncOpenAI(
        api_key="test-key",
        base_url="http://mock-llm/v1",
        max_retries=0,
        http_client=http_client,
    )
    llm_client = LLMClient(client=sdk)
    try:
        yield llm_client
    finally:
        await llm_client.close()


@pytest.fixture
def mock_client() -> TestClient:
    app = create_app()
    app.dependency_overrides[get_llm_client] = mock_llm_client
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def snapshot_payload() -> dict:
    snapshot = build_snapshot([], Decimal("2000"), TODAY)
    return SnapshotSchema.from_domain(snapshot).model_dump(mode="json")


@pytest.mark.integration
def test_direct_affordability_question(mock_client: TestClient, snapshot_payload):
    response = mock_client.post(
        "/v1/chat",
        json={"question": "Can I afford $400 this weekend?", "snapshot": snapshot_payload},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["intent"] == "affordability_check"
    assert data["assumption_made"] is False
    assert data["engine_result"]["amount"] == 400
    assert data["engine_result"]["can_afford"] is True
    assert data["explanation"].startswith("Mock answer")


@pytest.mark.integration
def test_colloquial_balance_question(mock_client: TestClient, snapshot_payload):
    response = mock_client.post(
        "/v1/chat",
        json={"question": "What do I have left to work with?", "snapshot": snapshot_payload},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["intent"] == "balance_query"
    assert data["engine_result"]["kind"] == "balance"


@pytest.mark.integration
def test_vague_purchase_is_unknown(mock_client: TestClient, snapshot_payload):
    response = mock_client.post(
        "/v1/chat",
        json={"question": "Can I swing it tomorrow?", "snapshot": snapshot_payload},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["intent"] == "unknown"
    assert data["explanation"] == UNKNOWN_INTENT_REPLY


@pytest.mark.integration
def test_briefing(mock_client: TestClient, snapshot_payload):
    response = mock_client.post("/v1/briefing", json={"snapshot": snapshot_payload})

    assert response.status_code == 200
    assert response.json()["briefing"] == "Mock answer based on: Financial Snapshot:"

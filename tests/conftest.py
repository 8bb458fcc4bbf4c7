"""Pytest fixtures for testing"""

import json
import pytest
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Callable, List
from fastapi.testclient import TestClient
from liquidity_gateway.api.main import create_app
from liquidity_gateway.api.dependencies import get_llm_client, get_today
from liquidity_gateway.domain.engine import build_snapshot
from liquidity_gateway.domain.models import FinancialSnapshot, Transaction


# Monday
TODAY = date(2026, 10, 19)


class StubLLMClient:
    """Deterministic stand-in for the language model client.

    classifications are consumed in order, one per classify() call; an
    Exception instance in the queue is raised instead of returned.
    """

    def __init__(self, classifications: List[Any] | None = None, explanation: Any = "Stub explanation."):
        self.classifications = list(classifications or [])
        self.explanation = explanation
        self.classify_calls: List[tuple] = []
        self.explain_calls: List[tuple] = []
        self.closed = False

    async def classify(self, system_instructions: str, question: str) -> str:
        self.classify_calls.append((system_instructions, question))
        if not self.classifications:
            return json.dumps({"intent": "unknown", "params": {}})
        response = self.classifications.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def explain(self, system_instructions: str, content: str, operation: str = "explain") -> str:
        self.explain_calls.append((system_instructions, content, operation))
        if isinstance(self.explanation, Exception):
            raise self.explanation
        return self.explanation

    async def close(self) -> None:
        self.closed = True


def intent_json(intent: str, params: dict | None = None) -> str:
    return json.dumps({"intent": intent, "params": params or {}})


def make_transaction(days_ago: int, amount: str | int | float, today: date = TODAY) -> Transaction:
    return Transaction(date=today - timedelta(days=days_ago), description="test", amount=Decimal(str(amount)))


def make_snapshot(balance: int | str, avg_daily_spend: int | str, today: date = TODAY) -> FinancialSnapshot:
    """Snapshot with a given burn rate, via one debit inside the 30-day window"""
    rate = Decimal(str(avg_daily_spend))
    transactions = [make_transaction(5, -rate * 30, today)] if rate else []
    return build_snapshot(transactions, Decimal(str(balance)), today)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def stub_llm() -> StubLLMClient:
    return StubLLMClient()


@pytest.fixture
def stub_llm_factory() -> Callable[..., StubLLMClient]:
    return StubLLMClient


@pytest.fixture
def client(stub_llm: StubLLMClient) -> TestClient:
    """Create FastAPI test client with the stub language model client and a pinned date"""
    app = create_app()
    app.dependency_overrides[get_llm_client] = lambda: stub_llm
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Two months of salary, rent and weekly groceries"""
    transactions = []

    for month in range(2):
        transactions.append(make_transaction(55 - month * 30, 3000))
        transactions.append(make_transaction(54 - month * 30, -1200))

    for day in range(0, 56, 7):
        transactions.append(make_transaction(day, -90))

    return transactions

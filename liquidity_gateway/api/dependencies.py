"""Dependency injection for FastAPI endpoints"""

from datetime import date
from typing import AsyncIterator
from fastapi import Depends, Request
from liquidity_gateway.infrastructure.clients.llm import LLMClient
from liquidity_gateway.infrastructure.clients.explainer import Explainer


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Reference date for snapshots, projections and timeframe resolution"""
    return date.today()


async def get_llm_client() -> AsyncIterator[LLMClient]:
    """Provide language model client instance (classifier and explainer), closed after the request"""
    llm_client = LLMClient()
    try:
        yield llm_client
    finally:
        await llm_client.close()


def get_explainer(llm_client: LLMClient = Depends(get_llm_client)) -> Explainer:
    """Provide explainer backed by the request's language model client"""
    return Explainer(llm_client)

"""POST /v1/briefing - morning briefing for a snapshot"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from liquidity_gateway.api.v1.schemas import BriefingRequest, BriefingResponse
from liquidity_gateway.api.dependencies import get_explainer, get_request_id
from liquidity_gateway.domain.exceptions import LLMServiceError
from liquidity_gateway.infrastructure.clients.explainer import Explainer
from liquidity_gateway.infrastructure.observability.metrics import llm_failure_counter

router = APIRouter()


@router.post("/briefing", response_model=BriefingResponse)
async def create_briefing(
    request_body: BriefingRequest,
    request_id: str = Depends(get_request_id),
    explainer: Explainer = Depends(get_explainer),
):
    """Summarize balance, burn rate and projected low in 3-4 sentences"""
    try:
        briefing = await explainer.briefing(request_body.snapshot.to_domain())
    except LLMServiceError as e:
        llm_failure_counter.labels(endpoint="briefing").inc()
        logging.error(f"Briefing failed: {e}", extra={"request_id": request_id})
        raise HTTPException(
            status_code=503,
            detail="Failed to generate briefing. Check that your API key is valid.",
        )

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return BriefingResponse(briefing=briefing)

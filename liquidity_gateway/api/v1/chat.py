"""POST /v1/chat - answer a question about a snapshot"""

import time
import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException

from liquidity_gateway.api.v1.schemas import ChatRequest, ChatResponse, engine_result_to_dict
from liquidity_gateway.api.dependencies import get_explainer, get_llm_client, get_request_id, get_today
from liquidity_gateway.domain.dispatch import dispatch
from liquidity_gateway.domain.exceptions import LLMServiceError
from liquidity_gateway.domain.intent import extract_intent
from liquidity_gateway.infrastructure.clients.explainer import Explainer
from liquidity_gateway.infrastructure.clients.llm import LLMClient
from liquidity_gateway.infrastructure.observability.logging import log_question_answered
from liquidity_gateway.infrastructure.observability.metrics import llm_failure_counter, record_intent

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
async def answer_question(
    request_body: ChatRequest,
    request_id: str = Depends(get_request_id),
    llm_client: LLMClient = Depends(get_llm_client),
    explainer: Explainer = Depends(get_explainer),
    today: date = Depends(get_today),
):
    """
    Route a free-text question through the deterministic engine.

    Flow:
    1. Re-inflate the snapshot (ISO text to dates, numbers to Decimal)
    2. Classify the question (one or two classifier calls)
    3. Dispatch to the engine computation for that intent
    4. Explain the engine result in prose (skipped for unknown)
    """
    start_time = time.time()
    snapshot = request_body.snapshot.to_domain()

    try:
        intent_result = await extract_intent(request_body.question, llm_client)
        result = dispatch(intent_result, snapshot, today)
        explanation = await explainer.explain(request_body.question, result)

    except LLMServiceError as e:
        llm_failure_counter.labels(endpoint="chat").inc()
        logging.error(f"Chat failed: {e}", extra={"request_id": request_id})
        raise HTTPException(
            status_code=503,
            detail="Failed to process your question. Check that your API key is valid.",
        )

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_intent(intent_result)
    log_question_answered(
        request_id,
        intent_result.intent.value,
        intent_result.passes,
        result.assumption_made,
        duration_ms,
    )

    return ChatResponse(
        explanation=explanation,
        engine_result=engine_result_to_dict(result.engine_result),
        intent=result.intent.value,
        assumption_made=result.assumption_made,
    )

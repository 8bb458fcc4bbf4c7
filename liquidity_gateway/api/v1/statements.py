"""POST /v1/statements/parse and POST /v1/snapshot - statement ingestion"""

import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException

from liquidity_gateway.api.v1.schemas import (
    ParseStatementRequest,
    ParseStatementResponse,
    SnapshotRequest,
    SnapshotResponse,
    SnapshotSchema,
)
from liquidity_gateway.api.dependencies import get_request_id, get_today
from liquidity_gateway.domain.engine import build_snapshot
from liquidity_gateway.domain.exceptions import InvalidBalanceError, ParseError
from liquidity_gateway.domain.parser import parse_balance_input, parse_csv_text
from liquidity_gateway.infrastructure.observability.logging import log_snapshot_built
from liquidity_gateway.infrastructure.observability.metrics import record_snapshot

router = APIRouter()


@router.post("/statements/parse", response_model=ParseStatementResponse)
def parse_statement(
    request_body: ParseStatementRequest,
    request_id: str = Depends(get_request_id),
    today: date = Depends(get_today),
):
    """
    Normalize an uploaded CSV export.

    When the export carries a balance column the snapshot is built right
    away; otherwise needs_balance_input is set and the client must call
    POST /v1/snapshot with a manually entered balance.
    """
    try:
        parsed = parse_csv_text(request_body.csv_text)
    except ParseError as e:
        logging.warning(f"Statement rejected: {e.message}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=e.message)

    snapshot = None
    if not parsed.needs_balance_input:
        snapshot = build_snapshot(parsed.transactions, parsed.starting_balance, today)
        record_snapshot(snapshot)
        log_snapshot_built(request_id, snapshot, balance_source="statement")

    return ParseStatementResponse.from_domain(parsed, snapshot)


@router.post("/snapshot", response_model=SnapshotResponse)
def create_snapshot(
    request_body: SnapshotRequest,
    request_id: str = Depends(get_request_id),
    today: date = Depends(get_today),
):
    """
    Build a snapshot from parsed transactions and a manually entered balance.

    The balance text is validated before any engine call.
    """
    try:
        balance = parse_balance_input(request_body.balance)
    except InvalidBalanceError as e:
        logging.warning(f"Invalid balance input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail="Please enter a valid balance amount.")

    transactions = [t.to_domain() for t in request_body.transactions]
    snapshot = build_snapshot(transactions, balance, today)
    record_snapshot(snapshot)
    log_snapshot_built(request_id, snapshot, balance_source="manual")

    return SnapshotResponse(snapshot=SnapshotSchema.from_domain(snapshot))

"""Pydantic schemas for API request/response validation"""

import datetime
from dataclasses import asdict
from decimal import Decimal
from typing import Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field

from liquidity_gateway.domain.dispatch import EngineResult
from liquidity_gateway.domain.models import (
    DailyProjection,
    DateRange,
    FinancialSnapshot,
    ParsedCSV,
    Transaction,
)
from liquidity_gateway.infrastructure.clients.explainer import round_money


def _to_decimal(value: float) -> Decimal:
    return Decimal(str(value))


class TransactionSchema(BaseModel):
    """Single statement line"""

    date: datetime.date
    description: str = ""
    amount: float

    @classmethod
    def from_domain(cls, txn: Transaction) -> "TransactionSchema":
        return cls(date=txn.date, description=txn.description, amount=float(txn.amount))

    def to_domain(self) -> Transaction:
        return Transaction(date=self.date, description=self.description, amount=_to_decimal(self.amount))


class DailyProjectionSchema(BaseModel):
    date: datetime.date
    projected_balance: float


class DateRangeSchema(BaseModel):
    start: datetime.date
    end: datetime.date


class SnapshotSchema(BaseModel):
    """Financial snapshot as it crosses the HTTP boundary (ISO dates, JSON numbers)"""

    current_balance: float
    avg_daily_spend: float = Field(..., ge=0)
    projection: List[DailyProjectionSchema] = Field(..., min_length=1)
    lowest_projected_balance: float
    lowest_projected_date: datetime.date
    risk_flag: bool
    transaction_count: int = Field(..., ge=0)
    date_range: DateRangeSchema

    @classmethod
    def from_domain(cls, snapshot: FinancialSnapshot) -> "SnapshotSchema":
        return cls(
            current_balance=float(snapshot.current_balance),
            avg_daily_spend=float(snapshot.avg_daily_spend),
            projection=[
                DailyProjectionSchema(date=p.date, projected_balance=float(p.projected_balance))
                for p in snapshot.projection
            ],
            lowest_projected_balance=float(snapshot.lowest_projected_balance),
            lowest_projected_date=snapshot.lowest_projected_date,
            risk_flag=snapshot.risk_flag,
            transaction_count=snapshot.transaction_count,
            date_range=DateRangeSchema(start=snapshot.date_range.start, end=snapshot.date_range.end),
        )

    def to_domain(self) -> FinancialSnapshot:
        """Re-inflate into engine types (real dates, Decimal money)"""
        return FinancialSnapshot(
            current_balance=_to_decimal(self.current_balance),
            avg_daily_spend=_to_decimal(self.avg_daily_spend),
            projection=tuple(
                DailyProjection(date=p.date, projected_balance=_to_decimal(p.projected_balance))
                for p in sorted(self.projection, key=lambda p: p.date)
            ),
            lowest_projected_balance=_to_decimal(self.lowest_projected_balance),
            lowest_projected_date=self.lowest_projected_date,
            risk_flag=self.risk_flag,
            transaction_count=self.transaction_count,
            date_range=DateRange(start=self.date_range.start, end=self.date_range.end),
        )


class ParseStatementRequest(BaseModel):
    """Request body for POST /v1/statements/parse"""

    csv_text: str = Field(..., description="Raw CSV export, header row first")


class ParseStatementResponse(BaseModel):
    """Response for POST /v1/statements/parse"""

    transactions: List[TransactionSchema]
    has_balance_column: bool
    starting_balance: Optional[float] = None
    needs_balance_input: bool
    snapshot: Optional[SnapshotSchema] = None

    @classmethod
    def from_domain(cls, parsed: ParsedCSV, snapshot: FinancialSnapshot | None) -> "ParseStatementResponse":
        return cls(
            transactions=[TransactionSchema.from_domain(t) for t in parsed.transactions],
            has_balance_column=parsed.has_balance_column,
            starting_balance=float(parsed.starting_balance) if parsed.starting_balance is not None else None,
            needs_balance_input=parsed.needs_balance_input,
            snapshot=SnapshotSchema.from_domain(snapshot) if snapshot is not None else None,
        )


class SnapshotRequest(BaseModel):
    """Request body for POST /v1/snapshot (manual balance entry)"""

    transactions: List[TransactionSchema]
    balance: str = Field(..., description="Balance as typed by the user, e.g. '$1,250.00'")


class SnapshotResponse(BaseModel):
    snapshot: SnapshotSchema


class BriefingRequest(BaseModel):
    """Request body for POST /v1/briefing"""

    snapshot: SnapshotSchema


class BriefingResponse(BaseModel):
    briefing: str


class ChatRequest(BaseModel):
    """Request body for POST /v1/chat"""

    question: str = Field(..., min_length=1)
    snapshot: SnapshotSchema


class ChatResponse(BaseModel):
    """Response for POST /v1/chat; engine_result carries a "kind" tag"""

    explanation: str
    engine_result: Dict[str, Any]
    intent: str
    assumption_made: bool


def engine_result_to_dict(result: EngineResult) -> Dict[str, Any]:
    """Dispatch variant as JSON-ready dict (ISO dates, money rounded to cents)"""
    return jsonable_encoder(asdict(result), custom_encoder={Decimal: round_money})

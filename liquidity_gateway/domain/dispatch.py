"""Engine dispatch - classified intent to the matching deterministic computation"""

import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Tuple, Union
from liquidity_gateway.domain.affordability import compute_affordability
from liquidity_gateway.domain.models import (
    AffordabilityResult,
    DailyProjection,
    DateRange,
    FinancialSnapshot,
    Intent,
    IntentResult,
)
from liquidity_gateway.domain.parser import parse_amount
from liquidity_gateway.domain.timeframe import resolve_timeframe


@dataclass(frozen=True)
class BalanceResult:
    current_balance: Decimal
    kind: str = "balance"


@dataclass(frozen=True)
class ProjectionResult:
    lowest_projected_balance: Decimal
    lowest_projected_date: date
    risk_flag: bool
    projection: Tuple[DailyProjection, ...]
    kind: str = "projection"


@dataclass(frozen=True)
class SpendingResult:
    avg_daily_spend: Decimal
    date_range: DateRange
    transaction_count: int
    kind: str = "spending"


@dataclass(frozen=True)
class SnapshotContext:
    """Whole snapshot, for general and unknown questions"""

    snapshot: FinancialSnapshot
    kind: str = "snapshot"


EngineResult = Union[AffordabilityResult, BalanceResult, ProjectionResult, SpendingResult, SnapshotContext]


@dataclass(frozen=True)
class DispatchResult:
    intent: Intent
    engine_result: EngineResult
    assumption_made: bool = False


def coerce_amount(raw: Any) -> Decimal:
    """Classifier amount as a finite Decimal; anything unusable becomes 0"""
    if raw is None or isinstance(raw, bool):
        return Decimal("0")
    if isinstance(raw, Decimal):
        return raw if raw.is_finite() else Decimal("0")
    if isinstance(raw, int):
        return Decimal(raw)
    if isinstance(raw, float):
        return Decimal(str(raw)) if math.isfinite(raw) else Decimal("0")
    if isinstance(raw, str):
        value = parse_amount(raw)
        if value is not None:
            return value
    return Decimal("0")


def dispatch(
    intent_result: IntentResult,
    snapshot: FinancialSnapshot,
    today: date | None = None,
) -> DispatchResult:
    """
    Run the engine computation for an intent. No I/O.

    Only the affordability path can set assumption_made, inherited from
    timeframe resolution. general, unknown and anything unrecognized get the
    whole snapshot as context.
    """
    intent = intent_result.intent
    params = intent_result.params

    if intent is Intent.AFFORDABILITY_CHECK:
        amount = coerce_amount(params.get("amount"))
        timeframe = params.get("timeframe")
        resolution = resolve_timeframe(timeframe if isinstance(timeframe, str) else None, today)
        result = compute_affordability(
            amount, snapshot, resolution.date, assumption_made=resolution.assumption_made
        )
        return DispatchResult(intent=intent, engine_result=result, assumption_made=resolution.assumption_made)

    if intent is Intent.BALANCE_QUERY:
        return DispatchResult(intent=intent, engine_result=BalanceResult(current_balance=snapshot.current_balance))

    if intent is Intent.PROJECTION_QUERY:
        return DispatchResult(
            intent=intent,
            engine_result=ProjectionResult(
                lowest_projected_balance=snapshot.lowest_projected_balance,
                lowest_projected_date=snapshot.lowest_projected_date,
                risk_flag=snapshot.risk_flag,
                projection=snapshot.projection,
            ),
        )

    if intent is Intent.SPENDING_QUERY:
        return DispatchResult(
            intent=intent,
            engine_result=SpendingResult(
                avg_daily_spend=snapshot.avg_daily_spend,
                date_range=snapshot.date_range,
                transaction_count=snapshot.transaction_count,
            ),
        )

    return DispatchResult(intent=intent, engine_result=SnapshotContext(snapshot=snapshot))

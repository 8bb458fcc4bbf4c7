"""Unit tests for engine dispatch"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from liquidity_gateway.domain.dispatch import (
    BalanceResult,
    ProjectionResult,
    SnapshotContext,
    SpendingResult,
    coerce_amount,
    dispatch,
)
from liquidity_gateway.domain.models import AffordabilityResult, Intent, IntentResult
from conftest import make_snapshot


@pytest.fixture
def snapshot():
    return make_snapshot(2000, 50)


def test_balance_query(snapshot, today):
    result = dispatch(IntentResult(Intent.BALANCE_QUERY), snapshot, today)

    assert isinstance(result.engine_result, BalanceResult)
    assert result.engine_result.current_balance == Decimal("2000")
    assert result.engine_result.kind == "balance"
    assert result.assumption_made is False


def test_projection_query(snapshot, today):
    result = dispatch(IntentResult(Intent.PROJECTION_QUERY), snapshot, today)

    assert isinstance(result.engine_result, ProjectionResult)
    assert result.engine_result.lowest_projected_balance == Decimal("1650")
    assert result.engine_result.lowest_projected_date == today + timedelta(days=7)
    assert result.engine_result.risk_flag is False
    assert len(result.engine_result.projection) == 7


def test_spending_query(snapshot, today):
    result = dispatch(IntentResult(Intent.SPENDING_QUERY), snapshot, today)

    assert isinstance(result.engine_result, SpendingResult)
    assert result.engine_result.avg_daily_spend == Decimal("50")
    assert result.engine_result.transaction_count == 1
    assert result.engine_result.date_range == snapshot.date_range


@pytest.mark.parametrize("intent", [Intent.GENERAL, Intent.UNKNOWN])
def test_general_and_unknown_get_whole_snapshot(snapshot, today, intent):
    result = dispatch(IntentResult(intent), snapshot, today)

    assert isinstance(result.engine_result, SnapshotContext)
    assert result.engine_result.snapshot is snapshot
    assert result.assumption_made is False


def test_affordability_with_stated_timeframe(snapshot, today):
    intent_result = IntentResult(Intent.AFFORDABILITY_CHECK, {"amount": 400, "timeframe": "tomorrow"})

    result = dispatch(intent_result, snapshot, today)

    assert isinstance(result.engine_result, AffordabilityResult)
    assert result.engine_result.target_date == today + timedelta(days=1)
    assert result.engine_result.projected_balance_at_date == Decimal("1950")
    assert result.engine_result.remaining_after_purchase == Decimal("1550")
    assert result.engine_result.can_afford is True
    assert result.assumption_made is False
    assert result.engine_result.assumption_made is False


def test_affordability_without_timeframe_assumes_weekend(snapshot, today):
    result = dispatch(IntentResult(Intent.AFFORDABILITY_CHECK, {"amount": 400}), snapshot, today)

    # today is a Monday; nearest Saturday is 5 days out
    assert result.engine_result.target_date == date(2026, 10, 24)
    assert result.assumption_made is True
    assert result.engine_result.assumption_made is True


def test_affordability_missing_amount_defaults_to_zero(snapshot, today):
    result = dispatch(IntentResult(Intent.AFFORDABILITY_CHECK, {"timeframe": "tomorrow"}), snapshot, today)
    assert result.engine_result.amount == Decimal("0")


def test_affordability_exponent_amount_defaults_to_zero(snapshot, today):
    intent_result = IntentResult(Intent.AFFORDABILITY_CHECK, {"amount": "1e999999999", "timeframe": "tomorrow"})

    result = dispatch(intent_result, snapshot, today)

    assert result.engine_result.amount == Decimal("0")
    assert result.engine_result.can_afford is True


@pytest.mark.parametrize(
    "raw,expected",
    [
        (150, Decimal("150")),
        (19.99, Decimal("19.99")),
        ("$1,250", Decimal("1250")),
        (Decimal("42.10"), Decimal("42.10")),
        (None, Decimal("0")),
        ("a lot", Decimal("0")),
        (float("nan"), Decimal("0")),
        (float("inf"), Decimal("0")),
        (1e16, Decimal("1E+16")),
        ("1e999999999", Decimal("0")),
        (True, Decimal("0")),
        ({"value": 10}, Decimal("0")),
    ],
)
def test_coerce_amount(raw, expected):
    assert coerce_amount(raw) == expected

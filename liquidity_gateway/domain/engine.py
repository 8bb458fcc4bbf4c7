"""Snapshot builder - balance, burn rate and linear 7-day liquidity projection"""

from datetime import date, timedelta
from decimal import Decimal
from typing import List, Sequence
from liquidity_gateway.domain.models import DailyProjection, DateRange, FinancialSnapshot, Transaction
from liquidity_gateway.utils.date_utils import generate_forward_dates

LIQUIDITY_RISK_THRESHOLD = Decimal("500.00")
PROJECTION_DAYS = 7
AVG_SPEND_LOOKBACK_DAYS = 30


def compute_balance(transactions: Sequence[Transaction]) -> Decimal:
    """Sum of all signed amounts"""
    return sum((t.amount for t in transactions), Decimal("0"))


def compute_avg_daily_spend(transactions: Sequence[Transaction], as_of: date) -> Decimal:
    """
    Trailing daily burn rate as a non-negative number.

    Only debits dated inside the closed window [as_of - 30 days, as_of] count;
    credits never contribute. The total is always divided by the full window
    length, not by the number of active days.
    """
    cutoff = as_of - timedelta(days=AVG_SPEND_LOOKBACK_DAYS)
    recent_debits = sum(
        (-t.amount for t in transactions if t.amount < 0 and cutoff <= t.date <= as_of),
        Decimal("0"),
    )
    return recent_debits / AVG_SPEND_LOOKBACK_DAYS


def compute_projection(
    balance: Decimal,
    avg_daily_spend: Decimal,
    horizon_days: int,
    today: date | None = None,
) -> List[DailyProjection]:
    """
    Linear depletion at the trailing burn rate.

    Entry i (1-based) is dated today + i and holds balance - avg_daily_spend * i.
    No compounding and no expected credits.
    """
    if today is None:
        today = date.today()

    return [
        DailyProjection(date=day, projected_balance=balance - avg_daily_spend * i)
        for i, day in enumerate(generate_forward_dates(today, horizon_days), start=1)
    ]


def build_snapshot(
    transactions: Sequence[Transaction],
    starting_balance: Decimal,
    today: date | None = None,
) -> FinancialSnapshot:
    """
    Main entry point: build a fresh snapshot from a statement.

    The projection starts from starting_balance, not from the sum of the
    transactions: the statement's own balance column or a manually entered
    balance is authoritative.
    """
    if today is None:
        today = date.today()

    avg_daily_spend = compute_avg_daily_spend(transactions, today)
    projection = compute_projection(starting_balance, avg_daily_spend, PROJECTION_DAYS, today)

    # Strict < keeps the first entry on ties
    lowest = projection[0]
    for entry in projection[1:]:
        if entry.projected_balance < lowest.projected_balance:
            lowest = entry

    risk_flag = any(entry.projected_balance < LIQUIDITY_RISK_THRESHOLD for entry in projection)

    dates = sorted(t.date for t in transactions)
    date_range = DateRange(start=dates[0], end=dates[-1]) if dates else DateRange(start=today, end=today)

    return FinancialSnapshot(
        current_balance=starting_balance,
        avg_daily_spend=avg_daily_spend,
        projection=tuple(projection),
        lowest_projected_balance=lowest.projected_balance,
        lowest_projected_date=lowest.date,
        risk_flag=risk_flag,
        transaction_count=len(transactions),
        date_range=date_range,
    )

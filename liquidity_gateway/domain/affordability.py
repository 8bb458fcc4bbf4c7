"""Affordability evaluator - projected balance at a date minus a purchase"""

from datetime import date
from decimal import Decimal
from liquidity_gateway.domain.engine import LIQUIDITY_RISK_THRESHOLD
from liquidity_gateway.domain.models import AffordabilityResult, FinancialSnapshot
from liquidity_gateway.utils.date_utils import days_between


def projected_balance_at(snapshot: FinancialSnapshot, target_date: date) -> Decimal:
    """
    Balance the snapshot expects on target_date.

    Inside the projection window the closest entry is used (first entry wins
    ties). Past the last entry the burn rate is extended linearly from it.
    """
    last_entry = snapshot.projection[-1]
    if target_date > last_entry.date:
        extra_days = days_between(last_entry.date, target_date)
        return last_entry.projected_balance - snapshot.avg_daily_spend * extra_days

    closest = snapshot.projection[0]
    min_diff = abs(days_between(closest.date, target_date))
    for entry in snapshot.projection:
        diff = abs(days_between(entry.date, target_date))
        if diff < min_diff:
            min_diff = diff
            closest = entry
    return closest.projected_balance


def compute_affordability(
    amount: Decimal,
    snapshot: FinancialSnapshot,
    target_date: date,
    assumption_made: bool = False,
) -> AffordabilityResult:
    """
    Decide whether spending amount on target_date keeps the balance at or
    above the liquidity risk threshold.

    amount must already be a finite number. assumption_made is carried
    through as given; how target_date was obtained is the caller's concern.
    """
    projected_balance = projected_balance_at(snapshot, target_date)
    remaining = projected_balance - amount

    return AffordabilityResult(
        amount=amount,
        target_date=target_date,
        projected_balance_at_date=projected_balance,
        remaining_after_purchase=remaining,
        can_afford=remaining >= LIQUIDITY_RISK_THRESHOLD,
        assumption_made=assumption_made,
    )

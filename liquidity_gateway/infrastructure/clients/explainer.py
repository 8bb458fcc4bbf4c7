"""Prose explanations of engine output via the language model"""

import json
from dataclasses import asdict
from datetime import date
from decimal import Decimal
from typing import Any, Protocol
from liquidity_gateway.domain.dispatch import DispatchResult
from liquidity_gateway.domain.engine import LIQUIDITY_RISK_THRESHOLD
from liquidity_gateway.domain.models import FinancialSnapshot, Intent
from liquidity_gateway.prompts import (
    ASSUMPTION_NOTE,
    BRIEFING_SYSTEM_PROMPT,
    CHAT_EXPLAIN_PROMPT,
    UNKNOWN_INTENT_REPLY,
)


class ExplainerBackend(Protocol):
    async def explain(self, system_instructions: str, content: str, operation: str = "explain") -> str:
        ...


def format_currency(value: Decimal) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_long_date(value: date) -> str:
    return f"{value:%A}, {value:%B} {value.day}"


def round_money(value: Decimal) -> float:
    """Money as a JSON number rounded to cents"""
    return round(float(value), 2)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return round_money(value)
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Not JSON serializable: {type(value).__name__}")


def engine_result_json(dispatch_result: DispatchResult) -> str:
    """Engine result as pretty JSON, money rounded to cents"""
    return json.dumps(asdict(dispatch_result.engine_result), indent=2, default=_json_default)


def format_snapshot_for_prompt(snapshot: FinancialSnapshot) -> str:
    threshold = format_currency(LIQUIDITY_RISK_THRESHOLD)
    if snapshot.risk_flag:
        risk_line = f"YES - projected balance drops below {threshold} within 7 days"
    else:
        risk_line = f"No - all projected days are above {threshold}"

    return "\n".join(
        [
            "Financial Snapshot:",
            f"- Current balance: {format_currency(snapshot.current_balance)}",
            f"- Average daily spend (last 30 days): {format_currency(snapshot.avg_daily_spend)}",
            f"- 7-day projected low: {format_currency(snapshot.lowest_projected_balance)} "
            f"on {format_long_date(snapshot.lowest_projected_date)}",
            f"- Liquidity risk flag: {risk_line}",
            f"- Transactions loaded: {snapshot.transaction_count}",
        ]
    )


class Explainer:
    """Turns snapshots and dispatch results into user-facing prose"""

    def __init__(self, backend: ExplainerBackend):
        self.backend = backend

    async def briefing(self, snapshot: FinancialSnapshot) -> str:
        text = await self.backend.explain(
            BRIEFING_SYSTEM_PROMPT, format_snapshot_for_prompt(snapshot), operation="briefing"
        )
        return text or "Could not generate briefing."

    async def explain(self, question: str, dispatch_result: DispatchResult) -> str:
        """
        Explain an engine result in 2-3 sentences.

        Unknown intents get a fixed rephrase request without calling the model.
        """
        if dispatch_result.intent is Intent.UNKNOWN:
            return UNKNOWN_INTENT_REPLY

        content = f'User question: "{question}"\n\nEngine result:\n{engine_result_json(dispatch_result)}'
        if dispatch_result.assumption_made:
            content = f"{content}\n{ASSUMPTION_NOTE}"

        text = await self.backend.explain(CHAT_EXPLAIN_PROMPT, content)
        return text or "Could not generate a response."

"""Timeframe resolver - loose phrases such as "this_weekend" to calendar dates"""

import re
from datetime import date, timedelta
from liquidity_gateway.domain.models import TimeframeResolution
from liquidity_gateway.utils.date_utils import FRIDAY, SATURDAY, next_weekday

_SEPARATORS = re.compile(r"[_\s]+")


def normalize_phrase(phrase: str) -> str:
    return _SEPARATORS.sub(" ", phrase).strip().lower()


def resolve_timeframe(phrase: str | None, today: date | None = None) -> TimeframeResolution:
    """
    Map a timeframe phrase to a date.

    Keywords are checked in priority order, first match wins:
    tomorrow, weekend/saturday/sunday, friday, week. A missing or
    unrecognized phrase falls back to the nearest upcoming Saturday and is
    flagged as an assumption.
    """
    if today is None:
        today = date.today()

    if phrase is None or not phrase.strip():
        return TimeframeResolution(date=next_weekday(today, SATURDAY), assumption_made=True)

    text = normalize_phrase(phrase)

    if "tomorrow" in text:
        return TimeframeResolution(date=today + timedelta(days=1), assumption_made=False)
    if "weekend" in text or "saturday" in text or "sunday" in text:
        return TimeframeResolution(date=next_weekday(today, SATURDAY), assumption_made=False)
    if "friday" in text:
        return TimeframeResolution(date=next_weekday(today, FRIDAY), assumption_made=False)
    if "week" in text:
        return TimeframeResolution(date=today + timedelta(days=7), assumption_made=False)

    return TimeframeResolution(date=next_weekday(today, SATURDAY), assumption_made=True)

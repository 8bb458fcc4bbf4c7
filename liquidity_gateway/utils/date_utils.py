"""Date manipulation utilities"""

from datetime import date, timedelta
from typing import List

SATURDAY = 5
FRIDAY = 4


def generate_forward_dates(start: date, days: int) -> List[date]:
    """Dates start+1 .. start+days (inclusive), one per calendar day"""
    return [start + timedelta(days=i) for i in range(1, days + 1)]


def next_weekday(from_date: date, weekday: int) -> date:
    """Nearest upcoming weekday (Mon=0). Same weekday as from_date is 7 days out"""
    days_ahead = (weekday - from_date.weekday()) % 7 or 7
    return from_date + timedelta(days=days_ahead)


def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative when end is earlier)"""
    return (end - start).days

"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Transaction:
    """Statement line. Positive amount = credit, negative = debit"""

    date: date
    description: str
    amount: Decimal


@dataclass(frozen=True)
class DailyProjection:
    """Projected end-of-day balance"""

    date: date
    projected_balance: Decimal


@dataclass(frozen=True)
class DateRange:
    """Earliest and latest transaction dates"""

    start: date
    end: date


@dataclass(frozen=True)
class FinancialSnapshot:
    """Point-in-time balance, burn rate and 7-day projection"""

    current_balance: Decimal
    avg_daily_spend: Decimal
    projection: Tuple[DailyProjection, ...]
    lowest_projected_balance: Decimal
    lowest_projected_date: date
    risk_flag: bool
    transaction_count: int
    date_range: DateRange


@dataclass(frozen=True)
class AffordabilityResult:
    """Outcome of a hypothetical purchase on a target date"""

    amount: Decimal
    target_date: date
    projected_balance_at_date: Decimal
    remaining_after_purchase: Decimal
    can_afford: bool
    assumption_made: bool = False
    kind: str = "affordability"


@dataclass
class ParsedCSV:
    """Normalized statement, before a starting balance is settled"""

    transactions: List[Transaction]
    has_balance_column: bool
    starting_balance: Optional[Decimal] = None

    @property
    def needs_balance_input(self) -> bool:
        return not self.has_balance_column


class Intent(str, Enum):
    """Closed set of question purposes the engine can answer"""

    BALANCE_QUERY = "balance_query"
    PROJECTION_QUERY = "projection_query"
    AFFORDABILITY_CHECK = "affordability_check"
    SPENDING_QUERY = "spending_query"
    GENERAL = "general"
    UNKNOWN = "unknown"


@dataclass
class IntentResult:
    """Classified question; passes = classifier calls spent producing it"""

    intent: Intent
    params: Dict[str, Any] = field(default_factory=dict)
    passes: int = 1

    @classmethod
    def unknown(cls, passes: int = 1) -> "IntentResult":
        return cls(intent=Intent.UNKNOWN, params={}, passes=passes)


@dataclass(frozen=True)
class TimeframeResolution:
    """Concrete date for a timeframe phrase"""

    date: date
    assumption_made: bool

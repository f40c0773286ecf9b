"""Domain models - pure Python dataclasses representing ledger entities"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import FrozenSet, List, Optional

EXPENSE = "expense"
REVENUE = "revenue"


@dataclass(frozen=True)
class InstallmentInfo:
    """Position of a transaction inside an installment plan"""

    current: int
    total: int


@dataclass(frozen=True)
class Transaction:
    """Household transaction as delivered by the persistence layer"""

    id: str
    title: str
    amount: Decimal
    category: str
    date: str  # DD/MM/YYYY anchor date
    spender_id: str
    type: str  # "expense" or "revenue"
    is_fixed: bool = False
    is_paid: bool = False
    paid_months: FrozenSet[str] = field(default_factory=frozenset)
    installments: Optional[InstallmentInfo] = None
    emoji: str = ""


@dataclass(frozen=True)
class HouseholdMember:
    """One of the two people sharing the ledger"""

    id: str
    name: str
    income: Decimal


@dataclass(frozen=True)
class HouseholdSettings:
    """Household-wide display name and spending alert level (percent of income)"""

    family_name: str
    alert_threshold: int


@dataclass
class MonthlyStats:
    """Aggregated totals for one target month"""

    effective_income: Decimal
    paid_total: Decimal
    pending_total: Decimal
    balance: Decimal
    expense_ratio: float
    health_score: float


@dataclass
class HealthReport:
    """Monthly stats plus the presentation band derived from the score"""

    month_key: str
    stats: MonthlyStats
    status: str
    display_score: int


@dataclass
class TrendBucket:
    """Income and expenses projected into a single month"""

    year: int
    month: int
    month_key: str
    income: Decimal
    expenses: Decimal
    balance: Decimal


@dataclass
class HomeSummary:
    """Headline figures for the home screen"""

    month_key: str
    effective_income: Decimal
    total_expenses: Decimal
    balance: Decimal
    expense_percentage: float
    recent_transactions: List[Transaction]

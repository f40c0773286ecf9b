"""Ledger aggregation engine - month projection, totals and health score"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Tuple
from household_ledger.domain.models import (
    EXPENSE,
    REVENUE,
    HealthReport,
    HomeSummary,
    MonthlyStats,
    Transaction,
    TrendBucket,
)
from household_ledger.domain.settlement import is_settled
from household_ledger.utils.date_utils import month_key, parse_anchor_date, trailing_months

ZERO = Decimal("0")

# Status bands (score is 0-100, higher means more income left over)
EXCELLENT_THRESHOLD = 30
WARNING_THRESHOLD = 10


def _anchor_all(transactions: Iterable[Transaction]) -> List[Tuple[date, Transaction]]:
    """Parse every anchor date up front so a bad record fails the whole call"""
    return [(parse_anchor_date(t.date, t.id), t) for t in transactions]


def _is_relevant(anchor: date, transaction: Transaction, year: int, month: int) -> bool:
    if anchor.year == year and anchor.month == month:
        return True
    # Fixed items project into every month at or after their anchor month
    return transaction.is_fixed and (anchor.year, anchor.month) <= (year, month)


def _sum_amounts(transactions: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in transactions), ZERO)


def relevant_transactions(transactions: Iterable[Transaction], year: int, month: int) -> List[Transaction]:
    """
    Select the transactions that count toward a target month.

    Rules:
    - One-off transactions count only in the month of their anchor date
    - Fixed transactions count in their anchor month and every later month
    - Result is ordered by anchor date, most recent first; ties keep input order

    Raises:
        InvalidDateFormatError: Any transaction date is not DD/MM/YYYY
    """
    anchored = _anchor_all(transactions)
    selected = [(anchor, t) for anchor, t in anchored if _is_relevant(anchor, t, year, month)]
    # sorted() stays stable with reverse=True
    selected = sorted(selected, key=lambda pair: pair[0], reverse=True)
    return [t for _, t in selected]


def expense_ratio(effective_income: Decimal, paid_total: Decimal) -> float:
    """Share of income already spent; 1.0 (fully spent) when there is no income"""
    if effective_income <= 0:
        return 1.0
    return float(Decimal(paid_total) / Decimal(effective_income))


def health_score(effective_income: Decimal, paid_total: Decimal) -> float:
    """
    Financial health score from 0 (everything spent) to 100 (nothing spent).

    score = 100 - expense_ratio * 100, clamped to [0, 100]
    """
    score = 100.0 - expense_ratio(effective_income, paid_total) * 100.0
    return max(0.0, min(100.0, score))


def health_status(score: float) -> str:
    """
    Map a health score to its status band.

    - 30+:    excellent
    - 10-30:  warning
    - <10:    critical
    """
    if score >= EXCELLENT_THRESHOLD:
        return "excellent"
    elif score >= WARNING_THRESHOLD:
        return "warning"
    else:
        return "critical"


def display_score(score: float) -> int:
    """Round a score half-up for display (66.67 -> 67, 12.5 -> 13)"""
    return int(Decimal(str(score)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def monthly_stats(relevant: List[Transaction], base_income: Decimal, target_month_key: str) -> MonthlyStats:
    """
    Aggregate the relevant transactions of a month.

    Args:
        relevant: Output of relevant_transactions for the same month
        base_income: Combined declared income of the household
        target_month_key: Month-key used for fixed-item settlement lookups

    Balance only subtracts settled expenses; pending ones are reported
    separately and do not reduce it.
    """
    expenses = [t for t in relevant if t.type == EXPENSE]
    revenues = [t for t in relevant if t.type == REVENUE]

    effective_income = Decimal(base_income) + _sum_amounts(revenues)
    paid_total = _sum_amounts(t for t in expenses if is_settled(t, target_month_key))
    pending_total = _sum_amounts(t for t in expenses if not is_settled(t, target_month_key))

    return MonthlyStats(
        effective_income=effective_income,
        paid_total=paid_total,
        pending_total=pending_total,
        balance=effective_income - paid_total,
        expense_ratio=expense_ratio(effective_income, paid_total),
        health_score=health_score(effective_income, paid_total),
    )


def build_health_report(
    transactions: Iterable[Transaction],
    base_income: Decimal,
    year: int,
    month: int,
) -> HealthReport:
    """Main entry point for the analytics view: stats plus status band for one month"""
    key = month_key(year, month)
    stats = monthly_stats(relevant_transactions(transactions, year, month), base_income, key)

    return HealthReport(
        month_key=key,
        stats=stats,
        status=health_status(stats.health_score),
        display_score=display_score(stats.health_score),
    )


def monthly_trend(
    transactions: Iterable[Transaction],
    base_income: Decimal,
    year: int,
    month: int,
    months: int = 6,
) -> List[TrendBucket]:
    """
    Income vs expenses for the target month and the months before it.

    Each bucket applies the same projection as relevant_transactions and
    counts every expense, settled or not. Buckets are oldest first.
    """
    anchored = _anchor_all(transactions)
    buckets = []

    for bucket_year, bucket_month in trailing_months(year, month, months):
        relevant = [t for anchor, t in anchored if _is_relevant(anchor, t, bucket_year, bucket_month)]
        income = Decimal(base_income) + _sum_amounts(t for t in relevant if t.type == REVENUE)
        expenses = _sum_amounts(t for t in relevant if t.type == EXPENSE)

        buckets.append(
            TrendBucket(
                year=bucket_year,
                month=bucket_month,
                month_key=month_key(bucket_year, bucket_month),
                income=income,
                expenses=expenses,
                balance=income - expenses,
            )
        )

    return buckets


def home_summary(
    transactions: Iterable[Transaction],
    base_income: Decimal,
    year: int,
    month: int,
    recent_limit: int = 3,
) -> HomeSummary:
    """Headline totals for a month plus the most recent transactions overall"""
    anchored = _anchor_all(transactions)
    relevant = [t for anchor, t in anchored if _is_relevant(anchor, t, year, month)]

    effective_income = Decimal(base_income) + _sum_amounts(t for t in relevant if t.type == REVENUE)
    total_expenses = _sum_amounts(t for t in relevant if t.type == EXPENSE)
    expense_percentage = (
        float(total_expenses / effective_income) * 100.0 if effective_income > 0 else 0.0
    )

    recent = sorted(anchored, key=lambda pair: pair[0], reverse=True)[:recent_limit]

    return HomeSummary(
        month_key=month_key(year, month),
        effective_income=effective_income,
        total_expenses=total_expenses,
        balance=effective_income - total_expenses,
        expense_percentage=expense_percentage,
        recent_transactions=[t for _, t in recent],
    )

"""Unit tests for month projection and ledger aggregation"""

import pytest
from decimal import Decimal
from household_ledger.domain.exceptions import InvalidDateFormatError
from household_ledger.domain.ledger import (
    build_health_report,
    display_score,
    health_score,
    health_status,
    home_summary,
    monthly_stats,
    monthly_trend,
    relevant_transactions,
)


def ids(transactions):
    return [t.id for t in transactions]


def test_relevant_transactions_projects_fixed_and_orders_newest_first(sample_transactions):
    """Test March 2023 statement contents and ordering"""
    relevant = relevant_transactions(sample_transactions, 2023, 3)

    assert ids(relevant) == ["dinner", "bonus", "market", "gym", "rent"]


def test_relevant_transactions_excludes_one_off_outside_month(sample_transactions):
    """Test one-off items only count in their anchor month"""
    february = ids(relevant_transactions(sample_transactions, 2023, 2))
    april = ids(relevant_transactions(sample_transactions, 2023, 4))

    assert "shoes" in february
    assert "shoes" not in april
    assert "trip" in april
    assert "trip" not in february


def test_relevant_transactions_fixed_never_before_anchor(make_transaction):
    """Test fixed item anchored in a later month is not projected backwards"""
    fixed = make_transaction(id="fixed", date="01/06/2023", is_fixed=True)

    assert relevant_transactions([fixed], 2023, 5) == []
    assert relevant_transactions([fixed], 2022, 12) == []
    assert ids(relevant_transactions([fixed], 2023, 6)) == ["fixed"]
    assert ids(relevant_transactions([fixed], 2023, 12)) == ["fixed"]


def test_relevant_transactions_fixed_crosses_year_boundary(make_transaction):
    """Test an earlier-year anchor applies to every month of later years"""
    fixed = make_transaction(id="fixed", date="20/11/2022", is_fixed=True)

    # Anchor month number (11) is greater than target month (2) but the year is earlier
    assert ids(relevant_transactions([fixed], 2023, 2)) == ["fixed"]
    assert ids(relevant_transactions([fixed], 2030, 1)) == ["fixed"]


def test_relevant_transactions_ties_keep_input_order(make_transaction):
    """Test equal anchor dates are returned in input order"""
    first = make_transaction(id="first", date="10/03/2023")
    second = make_transaction(id="second", date="10/03/2023")
    newer = make_transaction(id="newer", date="11/03/2023")

    assert ids(relevant_transactions([first, second, newer], 2023, 3)) == ["newer", "first", "second"]


def test_relevant_transactions_invalid_date_aborts(make_transaction):
    """Test malformed date raises instead of silently skipping the record"""
    good = make_transaction(id="good", date="10/01/2023")
    bad = make_transaction(id="bad", date="2023-01-15")

    with pytest.raises(InvalidDateFormatError) as exc_info:
        relevant_transactions([good, bad], 2023, 1)

    assert exc_info.value.transaction_id == "bad"
    assert exc_info.value.value == "2023-01-15"


def test_relevant_transactions_invalid_date_outside_target_month(make_transaction):
    """Test a bad record fails the call even when it would not be selected"""
    bad = make_transaction(id="bad", date="15/13/2022")

    with pytest.raises(InvalidDateFormatError):
        relevant_transactions([bad], 2023, 1)


@pytest.mark.parametrize("value", ["15/01/2023\n", "١٥/01/2023"])
def test_relevant_transactions_rejects_near_miss_dates(make_transaction, value):
    """Test trailing newlines and non-ASCII digits are not accepted as DD/MM/YYYY"""
    with pytest.raises(InvalidDateFormatError):
        relevant_transactions([make_transaction(date=value)], 2023, 1)


def test_monthly_stats_march(sample_transactions):
    """Test paid/pending partition with per-month settlement of fixed items"""
    relevant = relevant_transactions(sample_transactions, 2023, 3)
    stats = monthly_stats(relevant, Decimal("5000"), "2023-3")

    assert stats.effective_income == Decimal("6000")
    assert stats.paid_total == Decimal("500")  # gym (fixed, paid for March) + groceries
    assert stats.pending_total == Decimal("1650")  # rent (not paid for March) + dinner
    assert stats.balance == Decimal("5500")  # pending does not reduce balance
    assert stats.expense_ratio == pytest.approx(500 / 6000)
    assert stats.health_score == pytest.approx(100 - 500 / 6000 * 100)


def test_monthly_stats_paid_plus_pending_equals_expenses(sample_transactions):
    """Test totals partition the expenses for every month"""
    for year, month in [(2022, 12), (2023, 1), (2023, 2), (2023, 3), (2023, 4), (2024, 7)]:
        relevant = relevant_transactions(sample_transactions, year, month)
        stats = monthly_stats(relevant, Decimal("0"), f"{year}-{month}")
        expenses = sum((t.amount for t in relevant if t.type == "expense"), Decimal("0"))

        assert stats.paid_total + stats.pending_total == expenses
        assert stats.paid_total >= 0
        assert stats.pending_total >= 0


def test_monthly_stats_fixed_uses_paid_months_not_is_paid(make_transaction):
    """Test is_paid is ignored for fixed items and paid_months for one-off items"""
    fixed = make_transaction(amount=500, date="01/01/2023", is_fixed=True, is_paid=True)
    one_off = make_transaction(amount=200, date="10/03/2023", is_paid=False, paid_months={"2023-3"})

    relevant = relevant_transactions([fixed, one_off], 2023, 3)
    stats = monthly_stats(relevant, Decimal("1000"), "2023-3")

    assert stats.paid_total == Decimal("0")
    assert stats.pending_total == Decimal("700")


def test_monthly_stats_fixed_revenue_adds_to_income(make_transaction):
    """Test recurring revenue counts toward effective income in later months"""
    salary = make_transaction(amount=2500, type="revenue", date="05/01/2023", is_fixed=True)

    stats = monthly_stats(relevant_transactions([salary], 2023, 8), Decimal("1000"), "2023-8")

    assert stats.effective_income == Decimal("3500")
    assert stats.paid_total == Decimal("0")


def test_scenario_paid_one_off_with_extra_revenue(make_transaction):
    """Scenario: base 5000, revenue 1000, paid expense 2000 in the same month"""
    transactions = [
        make_transaction(amount=1000, type="revenue", date="10/03/2023"),
        make_transaction(amount=2000, date="15/03/2023", is_paid=True),
    ]

    report = build_health_report(transactions, Decimal("5000"), 2023, 3)

    assert report.stats.effective_income == Decimal("6000")
    assert report.stats.paid_total == Decimal("2000")
    assert report.stats.pending_total == Decimal("0")
    assert report.stats.balance == Decimal("4000")
    assert report.stats.health_score == pytest.approx(66.6667, abs=1e-3)
    assert report.display_score == 67
    assert report.status == "excellent"


def test_scenario_fixed_unpaid_for_target_month(make_transaction):
    """Scenario: fixed expense paid in Jan and Feb is pending in March"""
    rent = make_transaction(amount=500, date="01/01/2023", is_fixed=True, paid_months={"2023-1", "2023-2"})

    relevant = relevant_transactions([rent], 2023, 3)
    stats = monthly_stats(relevant, Decimal("0"), "2023-3")

    assert relevant == [rent]
    assert stats.paid_total == Decimal("0")
    assert stats.pending_total == Decimal("500")


def test_scenario_empty_month():
    """Scenario: no transactions, base income 3000"""
    report = build_health_report([], Decimal("3000"), 2023, 3)

    assert report.stats.effective_income == Decimal("3000")
    assert report.stats.paid_total == Decimal("0")
    assert report.stats.pending_total == Decimal("0")
    assert report.stats.balance == Decimal("3000")
    assert report.stats.health_score == 100
    assert report.status == "excellent"
    assert report.month_key == "2023-3"


def test_health_score_boundaries():
    """Test score at the ends of the range"""
    assert health_score(Decimal("1000"), Decimal("0")) == 100
    assert health_score(Decimal("1000"), Decimal("1000")) == 0
    # Overspending floors at zero
    assert health_score(Decimal("1000"), Decimal("1500")) == 0


def test_health_score_without_income():
    """Test zero income counts as fully spent"""
    assert health_score(Decimal("0"), Decimal("250")) == 0
    assert health_score(Decimal("0"), Decimal("0")) == 0


def test_health_score_monotonic_in_paid_total():
    """Test score never increases as paid total grows"""
    income = Decimal("4000")
    scores = [health_score(income, Decimal(paid)) for paid in range(0, 6001, 250)]

    assert all(a >= b for a, b in zip(scores, scores[1:]))
    assert all(0 <= s <= 100 for s in scores)


def test_health_status_bands():
    """Test status band thresholds"""
    assert health_status(100) == "excellent"
    assert health_status(30) == "excellent"
    assert health_status(29.99) == "warning"
    assert health_status(10) == "warning"
    assert health_status(9.99) == "critical"
    assert health_status(0) == "critical"


def test_display_score_rounds_half_up():
    assert display_score(66.66666666666667) == 67
    assert display_score(12.5) == 13
    assert display_score(0.4) == 0


def test_monthly_trend_buckets(make_transaction):
    """Test trend projects each month and counts paid and pending expenses"""
    transactions = [
        make_transaction(amount=500, date="01/01/2023", is_fixed=True, paid_months={"2023-1"}),
        make_transaction(amount=200, date="15/02/2023"),
        make_transaction(amount=1000, type="revenue", date="10/03/2023"),
    ]

    trend = monthly_trend(transactions, Decimal("3000"), 2023, 3, months=4)

    assert [b.month_key for b in trend] == ["2022-12", "2023-1", "2023-2", "2023-3"]
    assert [b.income for b in trend] == [Decimal("3000"), Decimal("3000"), Decimal("3000"), Decimal("4000")]
    assert [b.expenses for b in trend] == [Decimal("0"), Decimal("500"), Decimal("700"), Decimal("500")]
    assert trend[-1].balance == Decimal("3500")


def test_monthly_trend_default_length(sample_transactions):
    trend = monthly_trend(sample_transactions, Decimal("0"), 2023, 3)

    assert len(trend) == 6
    assert (trend[0].year, trend[0].month) == (2022, 10)
    assert (trend[-1].year, trend[-1].month) == (2023, 3)


def test_home_summary(make_transaction):
    """Test home totals and the most recent transactions across all months"""
    transactions = [
        make_transaction(id="old", amount=100, date="01/12/2022"),
        make_transaction(id="salary_bonus", amount=1000, type="revenue", date="05/03/2023"),
        make_transaction(id="rent", amount=500, date="01/01/2023", is_fixed=True),
        make_transaction(id="laptop", amount=2000, date="10/03/2023"),
        make_transaction(id="trip", amount=300, date="20/04/2023"),
    ]

    summary = home_summary(transactions, Decimal("5000"), 2023, 3)

    assert summary.effective_income == Decimal("6000")
    assert summary.total_expenses == Decimal("2500")
    assert summary.balance == Decimal("3500")
    assert summary.expense_percentage == pytest.approx(2500 / 6000 * 100)
    assert ids(summary.recent_transactions) == ["trip", "laptop", "salary_bonus"]


def test_home_summary_without_income():
    summary = home_summary([], Decimal("0"), 2023, 3)

    assert summary.expense_percentage == 0.0
    assert summary.recent_transactions == []

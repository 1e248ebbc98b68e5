import pytest

from flowbudget_core.domain.models import (
    Frequency,
    ObservedEntry,
    RecurringRule,
    SimulationConfig,
    TransactionKind,
    WeeklyBehavior,
)
from flowbudget_core.services.dates import (
    count_weekday_occurrences,
    days_in_month,
    month_key,
    months_through_next_year,
    weekday_sunday_first,
)
from flowbudget_core.services.pipeline import run_month
from flowbudget_core.services.simulator import simulate_month
from flowbudget_core.services.summary import category_breakdown, monthly_amount, summarize_month


def _rule(rule_id, amount, kind, frequency=Frequency.ONCE, **kwargs):
    return RecurringRule(id=rule_id, name=rule_id, amount=amount, kind=kind, frequency=frequency, **kwargs)


def _february_rules():
    return [
        _rule("pay", 3000, TransactionKind.INCOME, day_of_month=1, category="Work"),
        _rule("rent", 1000, TransactionKind.EXPENSE, day_of_month=1, category="Rent"),
        _rule(
            "food",
            70,
            TransactionKind.EXPENSE,
            Frequency.WEEKLY,
            weekly_behavior=WeeklyBehavior.SMOOTH,
            category="Food",
        ),
        _rule(
            "fund",
            50,
            TransactionKind.SAVING,
            Frequency.WEEKLY,
            weekly_behavior=WeeklyBehavior.LUMP_SUM,
            day_of_week=1,
            category="Emergency",
        ),
        _rule("gym", 40, TransactionKind.EXPENSE, day_of_month=31, category="Gym"),
        _rule("snacks", 20, TransactionKind.EXPENSE, day_of_month=10, category="Food"),
    ]


def test_category_breakdown_groups_outflows_in_first_seen_order():
    shares = category_breakdown(_february_rules(), 2025, 2)
    assert [(s.name, s.amount) for s in shares] == [
        ("Rent", 1000.0),
        ("Food", 300.0),
        ("Saving: Emergency", 200.0),
        ("Gym", 0.0),
    ]


def test_summary_totals_come_from_the_last_day():
    rules = _february_rules()
    points = simulate_month(0.0, 2025, 2, rules)
    summary = summarize_month(points, rules, 2025, 2)

    assert summary.total_income == 3000.0
    assert summary.total_expenses == pytest.approx(1500.0)
    assert summary.end_balance == pytest.approx(1500.0)
    assert summary.net == pytest.approx(1500.0)
    assert summary.total_saving == 200.0
    assert summary.total_allocation == pytest.approx(1500.0)


def test_summary_of_empty_month():
    summary = summarize_month([], [], 2025, 2)
    assert summary.end_balance == 0.0
    assert summary.categories == []
    assert summary.total_allocation == 0


def test_monthly_amount_smooth_uses_month_length():
    rule = _rule("s", 7, TransactionKind.EXPENSE, Frequency.WEEKLY, weekly_behavior=WeeklyBehavior.SMOOTH)
    assert monthly_amount(rule, 2024, 2) == pytest.approx(29.0)
    assert monthly_amount(rule, 2025, 1) == pytest.approx(31.0)


def test_calendar_helpers():
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2025, 2) == 28
    assert weekday_sunday_first(2025, 6, 1) == 0  # a Sunday
    assert weekday_sunday_first(2025, 6, 7) == 6
    assert count_weekday_occurrences(2025, 6, 0) == 5
    assert count_weekday_occurrences(2025, 6, 6) == 4
    assert count_weekday_occurrences(2025, 2, 1) == 4
    assert month_key(2025, 3) == "2025_03"


def test_months_through_next_year():
    periods = months_through_next_year(2025, 11)
    assert periods[0] == (2025, 11)
    assert periods[-1] == (2026, 12)
    assert len(periods) == 14

    with pytest.raises(ValueError):
        months_through_next_year(2025, 13)


def test_run_month_bundles_daily_weekly_and_summary():
    config = SimulationConfig(year=2025, month=2, initial_balance=0.0)
    report = run_month(config, _february_rules(), [ObservedEntry(day=20, value=100.0)])

    assert len(report.daily) == 28
    assert len(report.weekly) == 4
    assert report.weekly[-1].balance == report.summary.end_balance

    payload = report.to_dict()
    assert payload["daily"][19]["actual_balance"] == 100.0
    assert payload["daily"][0]["date"] == "1"
    assert payload["summary"]["net"] == report.summary.net


def test_daily_flex_spreads_end_balance_over_the_month():
    rules = _february_rules()
    summary = summarize_month(simulate_month(0.0, 2025, 2, rules), rules, 2025, 2)

    assert not summary.deficit
    assert summary.daily_flex == pytest.approx(1500.0 / 28, abs=0.005)


def test_deficit_month_has_no_daily_flex():
    rules = [_rule("rent", 100, TransactionKind.EXPENSE, day_of_month=1)]
    config = SimulationConfig(year=2025, month=2, initial_balance=0.0)
    report = run_month(config, rules)

    assert report.summary.end_balance == -100.0
    assert report.summary.deficit
    assert report.summary.daily_flex is None

    payload = report.to_dict()["summary"]
    assert payload["deficit"] is True
    assert payload["daily_flex"] is None

from __future__ import annotations

from typing import List, Optional, Sequence

import pandas as pd

from flowbudget_core.domain.models import (
    CategoryShare,
    Frequency,
    MonthSummary,
    RecurringRule,
    SimulationPoint,
    TransactionKind,
)
from flowbudget_core.services.dates import count_weekday_occurrences, days_in_month


def monthly_amount(rule: RecurringRule, year: int, month: int) -> float:
    """Unsigned total a rule posts over the whole month."""
    days = days_in_month(year, month)
    if rule.frequency == Frequency.ONCE:
        return rule.amount if rule.day_of_month <= days else 0.0
    if rule.is_smooth:
        return rule.amount / 7 * days
    return rule.amount * count_weekday_occurrences(year, month, rule.effective_day_of_week)


def _category_key(rule: RecurringRule) -> str:
    if rule.kind == TransactionKind.SAVING:
        return f"Saving: {rule.category}"
    return rule.category


def category_breakdown(rules: Sequence[RecurringRule], year: int, month: int) -> List[CategoryShare]:
    """
    Monthly allocation of every outflow rule, grouped by category.
    Saving rules are reported under "Saving: <category>".
    """
    rows = [
        {"name": _category_key(r), "amount": monthly_amount(r, year, month)}
        for r in rules
        if not r.is_income
    ]
    if not rows:
        return []

    df = pd.DataFrame(rows)
    grouped = df.groupby("name", sort=False)["amount"].sum()
    return [CategoryShare(name=str(name), amount=round(float(amount), 2)) for name, amount in grouped.items()]


def daily_flex(end_balance: float, year: int, month: int) -> Optional[float]:
    """What can be spent per day and still end the month at zero; None when a deficit is projected."""
    if end_balance < 0:
        return None
    return round(end_balance / days_in_month(year, month), 2)


def summarize_month(
    points: Sequence[SimulationPoint],
    rules: Sequence[RecurringRule],
    year: int,
    month: int,
) -> MonthSummary:
    last = points[-1] if points else None
    end_balance = last.balance if last else 0.0
    categories = category_breakdown(rules, year, month)
    total_saving = sum(
        monthly_amount(r, year, month) for r in rules if r.kind == TransactionKind.SAVING
    )
    return MonthSummary(
        end_balance=end_balance,
        total_income=last.cumulative_income if last else 0.0,
        total_expenses=last.cumulative_expenses if last else 0.0,
        total_saving=round(total_saving, 2),
        categories=categories,
        total_allocation=round(sum(c.amount for c in categories), 2),
        daily_flex=daily_flex(end_balance, year, month),
    )

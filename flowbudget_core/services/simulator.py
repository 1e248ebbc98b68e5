from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from flowbudget_core.domain.models import Frequency, ObservedEntry, RecurringRule, SimulationPoint
from flowbudget_core.services.dates import days_in_month, weekday_sunday_first

logger = logging.getLogger(__name__)


def _cents(value: float) -> float:
    return float(np.round(value, 2))


def rule_magnitudes(rules: Sequence[RecurringRule], year: int, month: int) -> np.ndarray:
    """
    Unsigned amount each rule posts on each day of the month, shape (rules, days).

    - once: the full amount on its day of month (days past month end never fire)
    - weekly smooth: amount / 7 on every day
    - weekly lump sum: the full amount on every day matching its weekday
    """
    days = days_in_month(year, month)
    day_numbers = np.arange(1, days + 1)
    weekdays = np.array([weekday_sunday_first(year, month, int(d)) for d in day_numbers])

    magnitudes = np.zeros((len(rules), days), dtype=float)
    for idx, rule in enumerate(rules):
        if rule.frequency == Frequency.ONCE:
            magnitudes[idx] = np.where(day_numbers == rule.day_of_month, rule.amount, 0.0)
        elif rule.is_smooth:
            magnitudes[idx] = rule.amount / 7
        else:
            magnitudes[idx] = np.where(weekdays == rule.effective_day_of_week, rule.amount, 0.0)
    return magnitudes


def _fold_observed(observed: Sequence[ObservedEntry], days: int) -> Dict[int, float]:
    by_day: Dict[int, float] = {}
    for entry in observed:
        if not 1 <= entry.day <= days:
            logger.warning("Ignoring observed balance for day %s (month has %s days)", entry.day, days)
            continue
        # later entries for the same day win
        by_day[entry.day] = float(entry.value)
    return by_day


def project_actuals(
    raw_deltas: np.ndarray,
    observed: Sequence[ObservedEntry],
) -> List[Optional[float]]:
    """
    Reality trajectory: observed values on observed days, and from the latest
    observation onward the anchor value plus the planned deltas of every later day.
    Days before the anchor without an observation stay None.
    """
    days = len(raw_deltas)
    by_day = _fold_observed(observed, days)
    if not by_day:
        return [None] * days

    anchor = max(by_day)
    prefix = np.cumsum(raw_deltas)
    anchor_value = by_day[anchor]
    logger.debug("Projecting reality from day %s at %.2f", anchor, anchor_value)

    actuals: List[Optional[float]] = []
    for day in range(1, days + 1):
        if day in by_day:
            actuals.append(_cents(by_day[day]))
        elif day > anchor:
            actuals.append(_cents(anchor_value + prefix[day - 1] - prefix[anchor - 1]))
        else:
            actuals.append(None)
    return actuals


def simulate_month(
    initial_balance: float,
    year: int,
    month: int,
    rules: Sequence[RecurringRule],
    observed: Sequence[ObservedEntry] = (),
) -> List[SimulationPoint]:
    """
    Day-by-day planned balance for one month, with the reality trajectory
    overlaid when observed balances are given.
    """
    days = days_in_month(year, month)
    logger.debug("Simulating %04d-%02d: %s days, %s rules", year, month, days, len(rules))

    magnitudes = rule_magnitudes(rules, year, month)
    income_mask = np.array([r.is_income for r in rules], dtype=bool)

    income = magnitudes[income_mask].sum(axis=0)
    outflow = magnitudes[~income_mask].sum(axis=0)
    raw_deltas = income - outflow

    balances = initial_balance + np.cumsum(raw_deltas)
    cumulative_income = np.cumsum(income)
    cumulative_expenses = np.cumsum(outflow)
    actuals = project_actuals(raw_deltas, observed)

    points: List[SimulationPoint] = []
    for i in range(days):
        points.append(
            SimulationPoint(
                day=i + 1,
                balance=_cents(balances[i]),
                daily_delta=_cents(raw_deltas[i]),
                cumulative_income=_cents(cumulative_income[i]),
                cumulative_expenses=_cents(cumulative_expenses[i]),
                actual_balance=actuals[i],
            )
        )
    return points

from __future__ import annotations

from typing import Sequence

from flowbudget_core.domain.models import MonthReport, ObservedEntry, RecurringRule, SimulationConfig
from flowbudget_core.services import aggregator, summary
from flowbudget_core.services import simulator


def run_month(
    config: SimulationConfig,
    rules: Sequence[RecurringRule],
    observed: Sequence[ObservedEntry] = (),
) -> MonthReport:
    daily = simulator.simulate_month(config.initial_balance, config.year, config.month, rules, observed)
    weekly = aggregator.aggregate_weekly(daily)
    month_summary = summary.summarize_month(daily, rules, config.year, config.month)
    return MonthReport(config=config, daily=daily, weekly=weekly, summary=month_summary)

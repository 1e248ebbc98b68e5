from __future__ import annotations

from typing import List, Sequence

import numpy as np

from flowbudget_core.domain.models import SimulationPoint, WeeklyPoint

WEEK_LENGTH = 7


def aggregate_weekly(points: Sequence[SimulationPoint]) -> List[WeeklyPoint]:
    """
    Collapse daily points into consecutive 7-day chunks starting at day 1.
    The last chunk keeps whatever days remain; balances are end-of-chunk snapshots.
    """
    weekly: List[WeeklyPoint] = []
    for week_index, start in enumerate(range(0, len(points), WEEK_LENGTH), start=1):
        chunk = points[start : start + WEEK_LENGTH]
        last = chunk[-1]
        deltas = np.array([p.daily_delta for p in chunk], dtype=float)
        weekly.append(
            WeeklyPoint(
                week_label=f"Week {week_index}",
                balance=last.balance,
                actual_balance=last.actual_balance,
                income=float(np.round(deltas[deltas > 0].sum(), 2)),
                expenses=float(np.round(np.abs(deltas[deltas < 0]).sum(), 2)),
            )
        )
    return weekly

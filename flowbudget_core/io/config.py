from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any, Dict

from flowbudget_core.domain.models import SimulationConfig


def load_simulation_config(path: str | Path) -> SimulationConfig:
    data = _read_json(path)
    today = dt.date.today()
    month = int(data.get("month", today.month))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month in config: {month}")
    return SimulationConfig(
        year=int(data.get("year", today.year)),
        month=month,
        initial_balance=float(data.get("initial_balance", 2500.0)),
    )


def _read_json(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)

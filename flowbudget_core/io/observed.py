from __future__ import annotations

from pathlib import Path
from typing import List

import pandas as pd

from flowbudget_core.domain.models import ObservedEntry


REQUIRED_COLUMNS = {"day", "value"}


def load_observed(csv_path: str | Path) -> List[ObservedEntry]:
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(path)

    df = pd.read_csv(path)
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns in observed CSV: {missing}")

    df = df.dropna(subset=["day", "value"])
    entries: List[ObservedEntry] = []
    for _, row in df.iterrows():
        day = float(row["day"])
        if not day.is_integer():
            raise ValueError(f"Observed day must be a whole number, got {row['day']!r}")
        entries.append(ObservedEntry(day=int(day), value=float(row["value"])))
    return entries

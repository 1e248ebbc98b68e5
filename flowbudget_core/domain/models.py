from __future__ import annotations

import dataclasses
import enum
from typing import Any, Dict, List, Optional


class TransactionKind(str, enum.Enum):
    INCOME = "income"
    EXPENSE = "expense"
    SAVING = "saving"


class Frequency(str, enum.Enum):
    ONCE = "once"
    WEEKLY = "weekly"


class WeeklyBehavior(str, enum.Enum):
    SMOOTH = "smooth"
    LUMP_SUM = "lump_sum"


DEFAULT_DAY_OF_WEEK = 1  # Monday, Sunday-first numbering


@dataclasses.dataclass(frozen=True)
class RecurringRule:
    id: str
    name: str
    amount: float  # unsigned magnitude
    kind: TransactionKind
    frequency: Frequency
    day_of_month: int = 1
    day_of_week: Optional[int] = None  # 0=Sun..6=Sat
    weekly_behavior: Optional[WeeklyBehavior] = None
    category: str = "General"

    @property
    def is_income(self) -> bool:
        return self.kind == TransactionKind.INCOME

    @property
    def is_smooth(self) -> bool:
        return self.frequency == Frequency.WEEKLY and self.weekly_behavior == WeeklyBehavior.SMOOTH

    @property
    def sign(self) -> float:
        return 1.0 if self.is_income else -1.0

    @property
    def effective_day_of_week(self) -> int:
        return DEFAULT_DAY_OF_WEEK if self.day_of_week is None else self.day_of_week


@dataclasses.dataclass(frozen=True)
class ObservedEntry:
    day: int
    value: float


@dataclasses.dataclass(frozen=True)
class SimulationConfig:
    year: int
    month: int  # 1..12
    initial_balance: float = 2500.0


@dataclasses.dataclass
class SimulationPoint:
    day: int
    balance: float
    daily_delta: float
    cumulative_income: float
    cumulative_expenses: float
    actual_balance: Optional[float] = None

    @property
    def date(self) -> str:
        return str(self.day)


@dataclasses.dataclass
class WeeklyPoint:
    week_label: str
    balance: float
    income: float
    expenses: float
    actual_balance: Optional[float] = None


@dataclasses.dataclass
class CategoryShare:
    name: str
    amount: float


@dataclasses.dataclass
class MonthSummary:
    end_balance: float
    total_income: float
    total_expenses: float
    total_saving: float
    categories: List[CategoryShare]
    total_allocation: float
    daily_flex: Optional[float] = None  # end balance spread over the month; None on a deficit

    @property
    def net(self) -> float:
        return round(self.total_income - self.total_expenses, 2)

    @property
    def deficit(self) -> bool:
        return self.end_balance < 0


@dataclasses.dataclass
class MonthReport:
    config: SimulationConfig
    daily: List[SimulationPoint]
    weekly: List[WeeklyPoint]
    summary: MonthSummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "config": dataclasses.asdict(self.config),
            "daily": [dict(dataclasses.asdict(p), date=p.date) for p in self.daily],
            "weekly": [dataclasses.asdict(w) for w in self.weekly],
            "summary": dict(dataclasses.asdict(self.summary), net=self.summary.net, deficit=self.summary.deficit),
        }

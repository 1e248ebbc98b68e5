from flowbudget_core.domain.models import (  # noqa: F401
    CategoryShare,
    Frequency,
    MonthReport,
    MonthSummary,
    ObservedEntry,
    RecurringRule,
    SimulationConfig,
    SimulationPoint,
    TransactionKind,
    WeeklyBehavior,
    WeeklyPoint,
)

__all__ = [
    "CategoryShare",
    "Frequency",
    "MonthReport",
    "MonthSummary",
    "ObservedEntry",
    "RecurringRule",
    "SimulationConfig",
    "SimulationPoint",
    "TransactionKind",
    "WeeklyBehavior",
    "WeeklyPoint",
]

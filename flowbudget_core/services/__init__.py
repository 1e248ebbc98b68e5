from flowbudget_core.services.aggregator import aggregate_weekly  # noqa: F401
from flowbudget_core.services.pipeline import run_month  # noqa: F401
from flowbudget_core.services.propagation import propagate_delete, propagate_upsert  # noqa: F401
from flowbudget_core.services.simulator import simulate_month  # noqa: F401
from flowbudget_core.services.summary import category_breakdown, summarize_month  # noqa: F401

__all__ = [
    "simulate_month",
    "aggregate_weekly",
    "summarize_month",
    "category_breakdown",
    "run_month",
    "propagate_upsert",
    "propagate_delete",
]

from __future__ import annotations

import json
import math
import uuid
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

from flowbudget_core.domain.models import Frequency, RecurringRule, TransactionKind, WeeklyBehavior

E = TypeVar("E", bound=Enum)

# camelCase keys written by the browser app
_ALIASES = {
    "type": "kind",
    "dayOfMonth": "day_of_month",
    "dayOfWeek": "day_of_week",
    "weeklyBehavior": "weekly_behavior",
}


def load_rules(path: str | Path) -> List[RecurringRule]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON list of rules in {path}")
    return [rule_from_dict(item) for item in data]


def save_rules(path: str | Path, rules: List[RecurringRule]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump([rule_to_dict(r) for r in rules], f, indent=2)


def rule_to_dict(rule: RecurringRule) -> Dict[str, Any]:
    return {
        "id": rule.id,
        "name": rule.name,
        "amount": rule.amount,
        "kind": rule.kind.value,
        "frequency": rule.frequency.value,
        "day_of_month": rule.day_of_month,
        "day_of_week": rule.day_of_week,
        "weekly_behavior": rule.weekly_behavior.value if rule.weekly_behavior else None,
        "category": rule.category,
    }


def rule_from_dict(raw: Dict[str, Any]) -> RecurringRule:
    if not isinstance(raw, dict):
        raise ValueError(f"Rule must be an object, got {type(raw).__name__}")
    data = {_ALIASES.get(k, k): v for k, v in raw.items()}
    rule_id = str(data.get("id") or uuid.uuid4())

    try:
        amount = float(data["amount"])
    except KeyError:
        raise ValueError(f"Rule {rule_id}: missing amount") from None
    except (TypeError, ValueError):
        raise ValueError(f"Rule {rule_id}: amount must be numeric, got {data['amount']!r}") from None
    if not math.isfinite(amount):
        raise ValueError(f"Rule {rule_id}: amount must be a finite number, got {data['amount']!r}")
    if amount < 0:
        raise ValueError(f"Rule {rule_id}: amount must be non-negative, got {amount}")

    day_of_month = _int_in_range(data.get("day_of_month", 1), 1, 31, "day_of_month", rule_id)
    day_of_week = data.get("day_of_week")
    if day_of_week is not None:
        day_of_week = _int_in_range(day_of_week, 0, 6, "day_of_week", rule_id)

    behavior = data.get("weekly_behavior")
    return RecurringRule(
        id=rule_id,
        name=str(data.get("name", "")),
        amount=amount,
        kind=_parse_enum(TransactionKind, data.get("kind"), "kind", rule_id),
        frequency=_parse_enum(Frequency, data.get("frequency", "once"), "frequency", rule_id),
        day_of_month=day_of_month,
        day_of_week=day_of_week,
        weekly_behavior=_parse_enum(WeeklyBehavior, behavior, "weekly_behavior", rule_id) if behavior else None,
        category=str(data.get("category") or "General"),
    )


def _parse_enum(enum_cls: Type[E], raw: Optional[Any], field: str, rule_id: str) -> E:
    try:
        return enum_cls(str(raw).strip().lower())
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValueError(f"Rule {rule_id}: invalid {field} {raw!r} (expected one of {allowed})") from None


def _int_in_range(raw: Any, low: int, high: int, field: str, rule_id: str) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"Rule {rule_id}: {field} must be an integer, got {raw!r}") from None
    if not low <= value <= high:
        raise ValueError(f"Rule {rule_id}: {field} must be within {low}..{high}, got {value}")
    return value

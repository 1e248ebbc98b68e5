from __future__ import annotations

import logging
from typing import Dict, List, Protocol

from flowbudget_core.domain.models import RecurringRule
from flowbudget_core.services.dates import month_key, months_through_next_year

logger = logging.getLogger(__name__)


class RuleStore(Protocol):
    def get(self, key: str) -> List[RecurringRule]:
        ...

    def put(self, key: str, rules: List[RecurringRule]) -> None:
        ...


class InMemoryRuleStore:
    """Month key ("YYYY_MM") -> rule list, held in a dict."""

    def __init__(self, months: Dict[str, List[RecurringRule]] | None = None):
        self._months: Dict[str, List[RecurringRule]] = {k: list(v) for k, v in (months or {}).items()}

    def get(self, key: str) -> List[RecurringRule]:
        return list(self._months.get(key, []))

    def put(self, key: str, rules: List[RecurringRule]) -> None:
        self._months[key] = list(rules)

    def keys(self) -> List[str]:
        return sorted(self._months)


def propagate_upsert(store: RuleStore, rule: RecurringRule, year: int, month: int) -> List[str]:
    """
    Write the rule into every month from (year, month) through December of next year,
    replacing an existing rule with the same id in place or appending it.
    """
    touched: List[str] = []
    for y, m in months_through_next_year(year, month):
        key = month_key(y, m)
        current = store.get(key)
        replaced = [rule if r.id == rule.id else r for r in current]
        if not any(r.id == rule.id for r in current):
            replaced.append(rule)
        store.put(key, replaced)
        touched.append(key)
    logger.debug("Upserted rule %s into %s months", rule.id, len(touched))
    return touched


def propagate_delete(store: RuleStore, rule_id: str, year: int, month: int) -> List[str]:
    """Remove the rule from every month in the same horizon; returns the keys that changed."""
    changed: List[str] = []
    for y, m in months_through_next_year(year, month):
        key = month_key(y, m)
        current = store.get(key)
        kept = [r for r in current if r.id != rule_id]
        if len(kept) != len(current):
            store.put(key, kept)
            changed.append(key)
    logger.debug("Deleted rule %s from %s months", rule_id, len(changed))
    return changed

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List

from flowbudget_core.domain.models import RecurringRule
from flowbudget_core.io.rules import rule_from_dict, rule_to_dict


class JsonRuleStore:
    """
    Rule store backed by one JSON file: {"YYYY_MM": [rule, ...], ...}.
    Every put rewrites the file.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._months: Dict[str, List[RecurringRule]] = {}
        if self.path.exists():
            with self.path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
            if not isinstance(raw, dict):
                raise ValueError(f"Expected a JSON object of month keys in {self.path}")
            for key, rules in raw.items():
                if not isinstance(rules, list):
                    raise ValueError(f"Expected a list of rules for {key} in {self.path}")
                self._months[key] = [rule_from_dict(r) for r in rules]

    def get(self, key: str) -> List[RecurringRule]:
        return list(self._months.get(key, []))

    def put(self, key: str, rules: List[RecurringRule]) -> None:
        self._months[key] = list(rules)
        self._flush()

    def keys(self) -> List[str]:
        return sorted(self._months)

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {key: [rule_to_dict(r) for r in self._months[key]] for key in sorted(self._months)}
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

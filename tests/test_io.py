import datetime as dt
import json
from pathlib import Path

import pytest

from flowbudget_core.domain.models import Frequency, TransactionKind, WeeklyBehavior
from flowbudget_core.io.config import load_simulation_config
from flowbudget_core.io.observed import load_observed
from flowbudget_core.io.rules import load_rules, rule_from_dict, rule_to_dict, save_rules


DATA = Path(__file__).parent / "data"


def test_load_rules_accepts_camel_case_export():
    rules = load_rules(DATA / "rules.json")
    assert [r.id for r in rules] == ["salary", "rent", "groceries", "emergency-fund"]

    fund = rules[-1]
    assert fund.kind == TransactionKind.SAVING
    assert fund.frequency == Frequency.WEEKLY
    assert fund.weekly_behavior == WeeklyBehavior.LUMP_SUM
    assert fund.day_of_week == 1
    assert rules[2].is_smooth


def test_saved_rules_load_back_unchanged(tmp_path):
    rules = load_rules(DATA / "rules.json")
    path = tmp_path / "out" / "rules.json"
    save_rules(path, rules)
    assert load_rules(path) == rules
    assert json.loads(path.read_text())[2]["weekly_behavior"] == "smooth"
    assert rule_from_dict(rule_to_dict(rules[0])) == rules[0]


@pytest.mark.parametrize(
    "raw,message",
    [
        ({"id": "x", "amount": "lots", "kind": "expense"}, "numeric"),
        ({"id": "x", "amount": -5, "kind": "expense"}, "non-negative"),
        ({"id": "x", "amount": "nan", "kind": "expense"}, "finite"),
        ({"id": "x", "amount": "inf", "kind": "expense"}, "finite"),
        ({"id": "x", "amount": "-Infinity", "kind": "expense"}, "finite"),
        ({"id": "x", "kind": "expense"}, "missing amount"),
        ({"id": "x", "amount": 5, "kind": "loan"}, "invalid kind"),
        ({"id": "x", "amount": 5, "kind": "expense", "frequency": "daily"}, "invalid frequency"),
        ({"id": "x", "amount": 5, "kind": "expense", "day_of_week": 7}, "day_of_week"),
        ({"id": "x", "amount": 5, "kind": "expense", "dayOfMonth": 0}, "day_of_month"),
    ],
)
def test_malformed_rules_are_rejected(raw, message):
    with pytest.raises(ValueError, match=message):
        rule_from_dict(raw)


def test_rule_without_id_gets_one():
    rule = rule_from_dict({"amount": 10, "kind": "income"})
    assert rule.id
    assert rule.frequency == Frequency.ONCE
    assert rule.category == "General"


def test_load_rules_requires_a_list(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"id": "x"}))
    with pytest.raises(ValueError):
        load_rules(path)


def test_load_observed():
    entries = load_observed(DATA / "observed.csv")
    assert [(e.day, e.value) for e in entries] == [(5, 2100.5), (10, 1900.0)]


def test_load_observed_missing_columns(tmp_path):
    path = tmp_path / "observed.csv"
    path.write_text("date,balance\n2025-01-01,10\n")
    with pytest.raises(ValueError, match="Missing columns"):
        load_observed(path)


def test_load_observed_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_observed(tmp_path / "nope.csv")


def test_load_simulation_config(tmp_path):
    config = load_simulation_config(DATA / "config.json")
    assert (config.initial_balance, config.year, config.month) == (500.0, 2025, 2)

    path = tmp_path / "empty.json"
    path.write_text("{}")
    defaults = load_simulation_config(path)
    today = dt.date.today()
    assert defaults.initial_balance == 2500.0
    assert (defaults.year, defaults.month) == (today.year, today.month)


def test_load_observed_rejects_fractional_days(tmp_path):
    path = tmp_path / "observed.csv"
    path.write_text("day,value\n3,100\n10.7,5\n")
    with pytest.raises(ValueError, match="whole number"):
        load_observed(path)


def test_load_observed_accepts_whole_float_days(tmp_path):
    path = tmp_path / "observed.csv"
    path.write_text("day,value\n3.0,100\n12,5.5\n")
    assert [(e.day, e.value) for e in load_observed(path)] == [(3, 100.0), (12, 5.5)]

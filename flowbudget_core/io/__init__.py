from flowbudget_core.io.config import load_simulation_config  # noqa: F401
from flowbudget_core.io.observed import load_observed  # noqa: F401
from flowbudget_core.io.rules import load_rules, rule_from_dict, rule_to_dict, save_rules  # noqa: F401
from flowbudget_core.io.store import JsonRuleStore  # noqa: F401

__all__ = [
    "load_rules",
    "save_rules",
    "rule_from_dict",
    "rule_to_dict",
    "load_observed",
    "load_simulation_config",
    "JsonRuleStore",
]

"""Classification system for hdrlang."""

from .engine import ScoreAccumulator, classify
from .patterns import DEFAULT_RULES, load_rule_records, parse_rule_records
from .rules import RuleTable
from .utils import is_header_candidate

__all__ = [
    "classify",
    "ScoreAccumulator",
    "RuleTable",
    "DEFAULT_RULES",
    "load_rule_records",
    "parse_rule_records",
    "is_header_candidate",
]

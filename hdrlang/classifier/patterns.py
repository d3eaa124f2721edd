"""Rule records: the reference rule set and the declarative rule-source loader."""

import json
import logging
import math
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from ..errors import ErrorCode, RuleError, RuleSourceError, validate_weight
from ..models import Language, Rule

logger = logging.getLogger("hdrlang.classifier.patterns")


# Default rules shipped with hdrlang
DEFAULT_RULES: list[dict[str, Any]] = [
    # Editor mode lines
    {"languages": ["c"], "weight": 1.0, "pattern": r"-\*-\s*c\s*-\*-"},
    {"languages": ["c++"], "weight": 1.0, "pattern": r"-\*-\s*c\+\+\s*-\*-"},
    {"languages": ["objc"], "weight": 1.0, "pattern": r"-\*-\s*objc\s*-\*-"},
    {"languages": ["objc++"], "weight": 1.0, "pattern": r"-\*-\s*objc\+\+\s*-\*-"},
    # extern "C" guards only make sense in headers meant to be consumed from C
    {"languages": ["c", "objc"], "weight": 0.8, "pattern": r"#\s*ifdef\s+__cplusplus"},
    # C++ syntax
    {"languages": ["c++", "objc++"], "weight": 0.8, "pattern": r"template\s*<.*?>"},
    {"languages": ["c++", "objc++"], "weight": 0.8, "pattern": r"\s+class\s+[a-zA-Z0-9_:]+"},
    {"languages": ["c++", "objc++"], "weight": 0.8, "pattern": r"#\s*include\s+<[^.]+>"},
    # Objective-C directives and framework headers
    {
        "languages": ["objc", "objc++"],
        "weight": 0.8,
        "pattern": r"@end|@implementation|@interface|@property|@synthesize",
    },
    {
        "languages": ["objc", "objc++"],
        "weight": 0.5,
        "pattern": r"#\s*(?:include|import)\s+[\"<](?:.+?/)*Cocoa\.h[\">]",
    },
    {
        "languages": ["objc", "objc++"],
        "weight": 0.5,
        "pattern": r"#\s*(?:include|import)\s+[\"<](?:.+?/)*Foundation\.h[\">]",
    },
]


def load_rule_records(rules_file: Path) -> list[dict[str, Any]]:
    """
    Read rule records from a JSON file.

    The document is either a list of records or an object with a "rules" list.

    Raises:
        RuleSourceError: If the file cannot be read or is not a rule document.
    """
    try:
        with open(rules_file, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise RuleSourceError(
            code=ErrorCode.RULE_SOURCE_UNREADABLE,
            message=f"Cannot read rules file {rules_file}",
            details={"path": str(rules_file)},
            cause=e,
        ) from e
    except json.JSONDecodeError as e:
        raise RuleSourceError(
            code=ErrorCode.RULE_SOURCE_MALFORMED,
            message=f"Rules file {rules_file} is not valid JSON",
            details={"path": str(rules_file), "line": e.lineno},
            cause=e,
        ) from e

    if isinstance(data, Mapping):
        data = data.get("rules")
    if not isinstance(data, list):
        raise RuleSourceError(
            code=ErrorCode.RULE_SOURCE_MALFORMED,
            message=f"Rules file {rules_file} must hold a list of rules",
            details={"path": str(rules_file)},
        )

    logger.debug("Loaded %d rule records from %s", len(data), rules_file)
    return data


def parse_rule_record(record: Any, index: int) -> Rule:
    """
    Convert a single record into an uncompiled Rule.

    Raises:
        RuleError: If the record cannot describe a rule.
    """
    context = f"rule #{index}"
    if not isinstance(record, Mapping):
        raise RuleError(
            code=ErrorCode.RULE_RECORD_INVALID,
            message=f"{context} is not a mapping",
            details={"index": index},
        )

    pattern = record.get("pattern")
    if not isinstance(pattern, str) or not pattern:
        raise RuleError(
            code=ErrorCode.RULE_RECORD_INVALID,
            message=f"{context} has no pattern",
            details={"index": index},
        )

    names = record.get("languages")
    if isinstance(names, str):
        names = [names]
    if names is not None and not isinstance(names, (list, tuple)):
        raise RuleError(
            code=ErrorCode.RULE_RECORD_INVALID,
            message=f"{context} languages must be a list",
            details={"index": index, "languages": names},
        )
    if not names:
        raise RuleError(
            code=ErrorCode.RULE_LANGUAGES_EMPTY,
            message=f"{context} cites no languages",
            details={"index": index, "pattern": pattern},
        )
    try:
        languages = frozenset(Language.from_name(str(name)) for name in names)
    except ValueError as e:
        raise RuleError(
            code=ErrorCode.RULE_LANGUAGE_UNKNOWN,
            message=f"{context} cites an unknown language",
            details={"index": index, "languages": list(names)},
            cause=e,
        ) from e

    raw_weight = record.get("weight", 1.0)
    if isinstance(raw_weight, bool):
        raw_weight = None
    try:
        weight = float(raw_weight)
    except (TypeError, ValueError) as e:
        raise RuleError(
            code=ErrorCode.RULE_WEIGHT_INVALID,
            message=f"{context} has a non-numeric weight",
            details={"index": index, "weight": record.get("weight")},
            cause=e,
        ) from e
    if not math.isfinite(weight):
        raise RuleError(
            code=ErrorCode.RULE_WEIGHT_INVALID,
            message=f"{context} has a non-finite weight",
            details={"index": index, "weight": weight},
        )

    return Rule(
        languages=languages,
        weight=validate_weight(weight, context),
        pattern=pattern,
    )


def parse_rule_records(records: Iterable[Any]) -> tuple[list[Rule], list[RuleError]]:
    """
    Convert records into uncompiled rules, skipping the unusable ones.

    Returns:
        (rules, errors) where errors lists every skipped record.
    """
    rules: list[Rule] = []
    errors: list[RuleError] = []

    for index, record in enumerate(records):
        try:
            rules.append(parse_rule_record(record, index))
        except RuleError as e:
            logger.warning(
                "Skipping invalid rule record: %s",
                e.message,
                extra={"error_code": e.code.value, "details": e.details},
            )
            errors.append(e)

    return rules, errors

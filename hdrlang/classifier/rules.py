"""Rule table: owns the evidence rules and their compiled patterns."""

import dataclasses
import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..errors import ErrorCode, RuleError
from ..models import Rule
from .patterns import DEFAULT_RULES, load_rule_records, parse_rule_records

logger = logging.getLogger("hdrlang.classifier.rules")


class RuleTable:
    """An ordered, read-only set of rules shared across classifications.

    The table starts unbuilt. ``build()`` compiles every pattern; a pattern
    that fails to compile leaves its rule inert instead of failing the table.
    ``release()`` drops the compiled patterns. Both are safe to repeat, but
    must not run concurrently with readers.
    """

    def __init__(self, rules: Iterable[Rule] = (), errors: Iterable[RuleError] = ()):
        self._definitions: tuple[Rule, ...] = tuple(rules)
        self._load_errors: list[RuleError] = list(errors)
        self._compile_errors: list[RuleError] = []
        self._compiled: tuple[Rule, ...] | None = None

    @classmethod
    def from_records(cls, records: Iterable[Any]) -> "RuleTable":
        """Create an unbuilt table from declarative rule records."""
        rules, errors = parse_rule_records(records)
        return cls(rules, errors)

    @classmethod
    def from_file(cls, rules_file: Path) -> "RuleTable":
        """Create an unbuilt table from a JSON rules file."""
        return cls.from_records(load_rule_records(Path(rules_file)))

    @classmethod
    def default(cls) -> "RuleTable":
        """Create an unbuilt table holding the reference rule set."""
        return cls.from_records(DEFAULT_RULES)

    @property
    def is_built(self) -> bool:
        return self._compiled is not None

    @property
    def diagnostics(self) -> list[RuleError]:
        """Problems found while loading records and compiling patterns."""
        return self._load_errors + self._compile_errors

    def __len__(self) -> int:
        return len(self._definitions)

    def __enter__(self) -> "RuleTable":
        self.build()
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()

    def build(self) -> "RuleTable":
        """Compile every rule's pattern, rebuilding from scratch if already built."""
        self.release()
        compiled: list[Rule] = []
        self._compile_errors = []

        for index, rule in enumerate(self._definitions):
            try:
                regex = re.compile(rule.pattern)
            except (re.error, OverflowError, RecursionError) as e:
                error = RuleError(
                    code=ErrorCode.RULE_PATTERN_INVALID,
                    message=f"Failed to compile pattern for rule #{index}",
                    details={"index": index, "pattern": rule.pattern},
                    cause=e,
                )
                logger.warning(
                    "Failed to compile regex %r: %s; rule disabled",
                    rule.pattern,
                    e,
                    extra={"index": index, "pattern": rule.pattern},
                )
                self._compile_errors.append(error)
                regex = None
            compiled.append(dataclasses.replace(rule, regex=regex))

        self._compiled = tuple(compiled)
        logger.debug(
            "Built rule table with %d rules (%d inert)",
            len(compiled),
            len(self._compile_errors),
        )
        return self

    def rules(self) -> tuple[Rule, ...]:
        """The compiled rules in table order; empty when the table is not built."""
        if self._compiled is None:
            return ()
        return self._compiled

    def release(self) -> None:
        """Drop compiled patterns. A no-op when nothing is built."""
        if self._compiled is None:
            return
        self._compiled = None
        logger.debug("Released rule table")

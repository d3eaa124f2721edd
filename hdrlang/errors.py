"""Custom exception types and error handling utilities for hdrlang."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger("hdrlang.errors")


class ErrorCode(Enum):
    """Error codes for classification and categorization."""

    # Rule errors
    RULE_PATTERN_INVALID = "rule_pattern_invalid"
    RULE_LANGUAGE_UNKNOWN = "rule_language_unknown"
    RULE_LANGUAGES_EMPTY = "rule_languages_empty"
    RULE_WEIGHT_INVALID = "rule_weight_invalid"
    RULE_RECORD_INVALID = "rule_record_invalid"

    # Rule source errors
    RULE_SOURCE_UNREADABLE = "rule_source_unreadable"
    RULE_SOURCE_MALFORMED = "rule_source_malformed"


@dataclass
class HdrlangError(Exception):
    """Base exception for hdrlang with structured error information."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        parts = [f"[{self.code.value}] {self.message}"]
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f" ({details_str})")
        if self.cause:
            parts.append(f" caused by: {self.cause}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
        }


class RuleError(HdrlangError):
    """A single rule record or pattern is unusable.

    Collected as a diagnostic by the rule table rather than raised.
    """

    pass


class RuleSourceError(HdrlangError):
    """A rule source file could not be read or parsed."""

    pass


def validate_weight(weight: float, context: str = "") -> float:
    """
    Validate and clamp a rule weight to the [0.0, 1.0] range.

    Args:
        weight: The weight to validate
        context: Optional context for log messages

    Returns:
        Clamped weight

    Logs a warning if the value was out of range.
    """
    if weight < 0.0 or weight > 1.0:
        logger.warning(
            "Rule weight %.4f out of range [0.0, 1.0]%s, clamping",
            weight,
            f" in {context}" if context else "",
            extra={"original_weight": weight, "context": context},
        )
        return max(0.0, min(1.0, weight))
    return weight


def truncate_text(text: str, max_length: int | None) -> str:
    """
    Bound the amount of text handed to the classifier.

    Args:
        text: Full document text
        max_length: Maximum length in characters, or None for no limit

    Returns:
        The first max_length characters of text
    """
    if max_length is None or max_length < 0 or len(text) <= max_length:
        return text
    logger.debug(
        "Truncating text from %d to %d characters",
        len(text),
        max_length,
        extra={"original_length": len(text), "max_length": max_length},
    )
    return text[:max_length]

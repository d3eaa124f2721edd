"""Data models for hdrlang."""

import math
import re
from dataclasses import dataclass, field
from enum import Enum


class Language(Enum):
    """Languages a header file can be resolved to.

    Declaration order doubles as the tie-break order used by the classifier.
    """

    C = "c"
    CPP = "c++"
    OBJC = "objc"
    OBJCPP = "objc++"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_name(cls, name: str) -> "Language":
        """Look up a language by value or common alias (case-insensitive)."""
        key = name.strip().lower()
        try:
            return _ALIASES[key]
        except KeyError:
            raise ValueError(f"Unknown language: {name!r}") from None


_DISPLAY_NAMES = {
    Language.C: "C",
    Language.CPP: "C++",
    Language.OBJC: "Objective-C",
    Language.OBJCPP: "Objective-C++",
}

_ALIASES = {
    "c": Language.C,
    "c++": Language.CPP,
    "cpp": Language.CPP,
    "cxx": Language.CPP,
    "objc": Language.OBJC,
    "obj-c": Language.OBJC,
    "objectivec": Language.OBJC,
    "objective-c": Language.OBJC,
    "objc++": Language.OBJCPP,
    "obj-c++": Language.OBJCPP,
    "objcpp": Language.OBJCPP,
    "objcxx": Language.OBJCPP,
    "objective-c++": Language.OBJCPP,
}


@dataclass(frozen=True)
class Rule:
    """One piece of evidence: a pattern, its weight, and the languages it supports.

    ``regex`` is None until the owning rule table compiles the pattern, and
    stays None for a rule whose pattern failed to compile (an inert rule).
    """

    languages: frozenset[Language]
    weight: float  # 0.0 - 1.0
    pattern: str
    regex: re.Pattern | None = field(default=None, compare=False, repr=False)

    @property
    def inert(self) -> bool:
        return self.regex is None

    def matches(self, text: str) -> bool:
        """Whether the pattern occurs anywhere in text. Inert rules never match."""
        if self.regex is None:
            return False
        return self.regex.search(text) is not None

    def describe_languages(self) -> str:
        ordered = [lang for lang in Language if lang in self.languages]
        return " | ".join(lang.display_name for lang in ordered)


@dataclass
class LanguageScore:
    """Evidence gathered for one language during a single classification."""

    language: Language
    total: int = 0
    matched_weights: list[float] = field(default_factory=list)

    @property
    def value(self) -> float:
        # fsum keeps the sum independent of the order rules were evaluated in
        return math.fsum(self.matched_weights)

    @property
    def matched(self) -> int:
        return len(self.matched_weights)

    @property
    def average(self) -> float | None:
        """Mean matched weight over every rule citing this language.

        None when no rule cites the language at all.
        """
        if self.total == 0:
            return None
        return self.value / self.total

    @property
    def percentage(self) -> float | None:
        average = self.average
        return None if average is None else average * 100.0


@dataclass
class Verdict:
    """Result of classifying a text buffer."""

    language: Language | None
    confidence: float = 0.0
    scores: dict[Language, LanguageScore] = field(default_factory=dict)
    matches: list[tuple[Rule, bool]] = field(default_factory=list)

    @property
    def has_opinion(self) -> bool:
        return self.language is not None

    def resolve(self, current: Language | None) -> Language | None:
        """Language the caller should use: the verdict, or current when there is none."""
        return self.language if self.language is not None else current

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "language": self.language.value if self.language else None,
            "confidence": self.confidence,
            "scores": {
                lang.value: {
                    "value": score.value,
                    "total": score.total,
                    "matched": score.matched,
                    "average": score.average,
                }
                for lang, score in self.scores.items()
            },
        }

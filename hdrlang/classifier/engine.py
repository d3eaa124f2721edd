"""Classification engine: scores text against a rule table."""

import logging

from ..models import Language, LanguageScore, Rule, Verdict
from .rules import RuleTable

logger = logging.getLogger("hdrlang.classifier.engine")


class ScoreAccumulator:
    """Per-call running totals for every language."""

    def __init__(self):
        self.scores: dict[Language, LanguageScore] = {
            lang: LanguageScore(lang) for lang in Language
        }

    def add(self, rule: Rule, matched: bool) -> None:
        """Count a rule against each language it cites."""
        for lang in rule.languages:
            score = self.scores[lang]
            score.total += 1
            if matched:
                score.matched_weights.append(rule.weight)

    def best(self) -> tuple[Language | None, float]:
        """
        Pick the language with the highest average.

        Languages no rule cites are skipped. Ties go to the language declared
        first in Language. Returns (None, 0.0) when nothing scored above zero.
        """
        best_lang: Language | None = None
        best_avg = 0.0

        for lang in Language:
            average = self.scores[lang].average
            if average is None:
                continue
            if average > best_avg:
                best_lang = lang
                best_avg = average

        return best_lang, best_avg


def _log_summary(scores: dict[Language, LanguageScore]) -> None:
    lines = ["Detection summary:"]
    for lang, score in scores.items():
        if score.total:
            lines.append(
                f"  {lang.display_name:<14}: {score.value:f} of {score.total} "
                f"({score.percentage:f}%)"
            )
        else:
            lines.append(f"  {lang.display_name:<14}: no rules")
    logger.debug("\n".join(lines))


def classify(text: str | bytes, table: RuleTable) -> Verdict:
    """
    Classify a header's text as C, C++, Objective-C or Objective-C++.

    Every rule in the table is tested once against the whole text. Each
    language averages the weights of its matched rules over all the rules
    that cite it, and the best average wins.

    Args:
        text: Full content of the candidate file
        table: A built rule table

    Returns:
        Verdict whose language is None when no rule matched at all
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")

    if not table.is_built:
        logger.warning("Classifying against a rule table that is not built; no verdict")

    accumulator = ScoreAccumulator()
    matches: list[tuple[Rule, bool]] = []

    for rule in table.rules():
        matched = rule.matches(text)
        if matched:
            logger.debug("Match for pattern: %s", rule.pattern)
        else:
            logger.debug("No match for pattern: %s", rule.pattern)
        accumulator.add(rule, matched)
        matches.append((rule, matched))

    if logger.isEnabledFor(logging.DEBUG):
        _log_summary(accumulator.scores)

    language, confidence = accumulator.best()
    if language is None:
        logger.debug("No rule matched; keeping current language")
    else:
        logger.debug(
            "Most likely language: %s (%.2f)",
            language.display_name,
            confidence,
            extra={"language": language.value, "confidence": confidence},
        )

    return Verdict(
        language=language,
        confidence=confidence,
        scores=accumulator.scores,
        matches=matches,
    )

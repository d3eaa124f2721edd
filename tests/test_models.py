"""Tests for data models and error helpers."""

import re

import pytest

from hdrlang.errors import (
    ErrorCode,
    HdrlangError,
    RuleError,
    truncate_text,
    validate_weight,
)
from hdrlang.models import Language, LanguageScore, Rule, Verdict


class TestLanguage:
    """Tests for the Language enum."""

    def test_declaration_order(self):
        """Test the enum order is the tie-break order."""
        assert list(Language) == [Language.C, Language.CPP, Language.OBJC, Language.OBJCPP]

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("c", Language.C),
            ("C", Language.C),
            ("c++", Language.CPP),
            ("CXX", Language.CPP),
            ("Objective-C", Language.OBJC),
            ("objc", Language.OBJC),
            (" objective-c++ ", Language.OBJCPP),
            ("objcpp", Language.OBJCPP),
        ],
    )
    def test_from_name(self, name, expected):
        """Test names and aliases resolve case-insensitively."""
        assert Language.from_name(name) == expected

    def test_from_name_unknown(self):
        """Test unknown names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown language"):
            Language.from_name("swift")

    def test_display_names(self):
        """Test human-readable names."""
        assert Language.OBJCPP.display_name == "Objective-C++"
        assert Language.CPP.display_name == "C++"


class TestRule:
    """Tests for the Rule model."""

    def test_uncompiled_rule_is_inert(self):
        """Test a rule without a compiled pattern never matches."""
        rule = Rule(frozenset({Language.C}), 1.0, "int")
        assert rule.inert
        assert rule.matches("int x;") is False

    def test_compiled_rule_searches_anywhere(self):
        """Test the pattern may match anywhere in the text."""
        rule = Rule(frozenset({Language.C}), 1.0, "int", regex=re.compile("int"))
        assert rule.matches("static int x;") is True
        assert rule.matches("char c;") is False

    def test_describe_languages_in_declaration_order(self):
        """Test language listing follows enum order."""
        rule = Rule(frozenset({Language.OBJCPP, Language.CPP}), 0.8, "x")
        assert rule.describe_languages() == "C++ | Objective-C++"


class TestLanguageScore:
    """Tests for per-language scores."""

    def test_no_rules(self):
        """Test a language with no citing rules has no average."""
        score = LanguageScore(Language.C)
        assert score.average is None
        assert score.value == 0.0

    def test_average_and_percentage(self):
        """Test average is matched weight over total citing rules."""
        score = LanguageScore(Language.C, total=4, matched_weights=[1.0, 0.5])
        assert score.value == 1.5
        assert score.matched == 2
        assert score.average == 0.375
        assert score.percentage == 37.5


class TestVerdict:
    """Tests for the Verdict model."""

    def test_resolve_keeps_current_without_opinion(self):
        """Test no verdict keeps the caller's language."""
        verdict = Verdict(language=None)
        assert verdict.resolve(Language.CPP) == Language.CPP
        assert verdict.resolve(None) is None

    def test_resolve_prefers_verdict(self):
        """Test a verdict overrides the current language."""
        verdict = Verdict(language=Language.OBJC, confidence=0.3)
        assert verdict.resolve(Language.C) == Language.OBJC


class TestErrors:
    """Tests for structured errors and helpers."""

    def test_error_str(self):
        """Test error formatting includes code, details and cause."""
        error = RuleError(
            code=ErrorCode.RULE_PATTERN_INVALID,
            message="bad pattern",
            details={"index": 2},
            cause=ValueError("boom"),
        )
        assert str(error) == "[rule_pattern_invalid] bad pattern (index=2) caused by: boom"
        assert isinstance(error, HdrlangError)

    def test_to_dict(self):
        """Test errors serialize for logging."""
        error = HdrlangError(code=ErrorCode.RULE_SOURCE_MALFORMED, message="oops")
        assert error.to_dict() == {
            "code": "rule_source_malformed",
            "message": "oops",
            "details": {},
            "cause": None,
        }

    def test_error_codes_cover_rule_loading_only(self):
        """Test every error code belongs to rule loading; config problems fall back to defaults."""
        assert {code.value for code in ErrorCode} == {
            "rule_pattern_invalid",
            "rule_language_unknown",
            "rule_languages_empty",
            "rule_weight_invalid",
            "rule_record_invalid",
            "rule_source_unreadable",
            "rule_source_malformed",
        }
        assert {cls.__name__ for cls in HdrlangError.__subclasses__()} == {
            "RuleError",
            "RuleSourceError",
        }

    @pytest.mark.parametrize(
        "weight, expected",
        [(0.0, 0.0), (0.5, 0.5), (1.0, 1.0), (-0.2, 0.0), (3.0, 1.0)],
    )
    def test_validate_weight(self, weight, expected):
        """Test weights are clamped to [0, 1]."""
        assert validate_weight(weight) == expected

    def test_truncate_text(self):
        """Test text is bounded only when a limit is given."""
        assert truncate_text("abcdef", 3) == "abc"
        assert truncate_text("abc", 10) == "abc"
        assert truncate_text("abcdef", None) == "abcdef"

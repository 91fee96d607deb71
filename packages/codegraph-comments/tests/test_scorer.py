"""
Obviousness scorer.
"""

import pytest

from codegraph_comments.analysis.scorer import is_obvious
from codegraph_comments.config import ScoringConfig, Sensitivity

LEVELS = (Sensitivity.LOW, Sensitivity.MEDIUM, Sensitivity.HIGH)


class TestExactAndPrefix:
    def test_exact_match(self):
        assert is_obvious("Increment i", ["increment i"], Sensitivity.LOW)

    def test_exact_after_normalization(self):
        assert is_obvious("  CALL   foo()!", ["call foo"], Sensitivity.LOW)

    def test_prefix_with_short_remainder(self):
        assert is_obvious("call foo now", ["call foo"], Sensitivity.LOW)

    def test_prefix_with_long_remainder(self):
        assert not is_obvious("call foo eventually", ["call foo"], Sensitivity.LOW)


class TestOverlap:
    def test_overlap_at_medium(self):
        assert is_obvious("returns the total", ["returns total"], Sensitivity.MEDIUM)

    def test_overlap_ignored_at_low(self):
        assert not is_obvious("returns the total", ["returns total"], Sensitivity.LOW)

    def test_single_token_gloss_needs_high(self):
        glosses = ["check if"]
        assert not is_obvious("check if x is ready", glosses, Sensitivity.MEDIUM)
        assert is_obvious("check if x is ready", glosses, Sensitivity.HIGH)

    def test_short_tokens_do_not_count(self):
        assert not is_obvious("do it", ["do it now"], Sensitivity.MEDIUM)


class TestHighSubstring:
    def test_substring_covering_half(self):
        glosses = ["increment counter"]
        assert is_obvious("now increment counter", glosses, Sensitivity.HIGH)
        assert not is_obvious("now increment counter", glosses, Sensitivity.LOW)

    def test_substring_below_coverage(self):
        # "ice" occurs inside "service" but covers too little of the comment
        assert not is_obvious("call the remote service for fresh data", ["ice"], Sensitivity.HIGH)


class TestGates:
    def test_empty_glosses(self):
        for level in LEVELS:
            assert not is_obvious("increment i", [], level)

    def test_long_comment_never_flagged(self):
        comment = "increment i so that every later lookup stays aligned"
        assert len(comment.split()) > 8
        for level in LEVELS:
            assert not is_obvious(comment, ["increment i"], level)

    def test_nine_tokens_of_gloss_never_flagged(self):
        comment = " ".join(["increment"] * 9)
        assert not is_obvious(comment, ["increment"], Sensitivity.HIGH)

    def test_empty_gloss_is_skipped(self):
        assert not is_obvious("anything here", ["", "!!!"], Sensitivity.HIGH)

    def test_string_sensitivity(self):
        assert is_obvious("returns the total", ["returns total"], "medium")

    def test_custom_config(self):
        strict = ScoringConfig(MAX_COMMENT_TOKENS=1)
        assert not is_obvious("increment i", ["increment i"], Sensitivity.HIGH, strict)


class TestMonotonicity:
    CASES = [
        ("increment i", ["increment i", "i++"]),
        ("call foo now", ["call foo"]),
        ("returns the total", ["return", "returns total"]),
        ("check if x is ready", ["if", "check if"]),
        ("now increment counter", ["increment counter"]),
        ("set the user name", ["set name", "assign name"]),
        ("fetch all users from db", ["call fetchUsers"]),
        ("loop through all items", ["loop", "loop through", "iterate over"]),
        ("declare the count variable", ["declare count", "variable count"]),
        ("unrelated remark", ["throw error"]),
    ]

    @pytest.mark.parametrize("comment,glosses", CASES)
    def test_widening(self, comment, glosses):
        results = [is_obvious(comment, glosses, level) for level in LEVELS]

        if results[0]:
            assert results[1]
        if results[1]:
            assert results[2]

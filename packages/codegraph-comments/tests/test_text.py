"""
Text normalization and comment text helpers.
"""

import pytest

from codegraph_comments.models import CommentKind
from codegraph_comments.text import comment_text, first_comment_line, normalize_text, truncate

from conftest import make_comment


class TestNormalizeText:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Increment i", "increment i"),
            ("  increment   I!  ", "increment i"),
            ("i++", "i"),
            ("set x = 5;", "set x 5"),
            ("call foo()", "call foo"),
            ("", ""),
            ("!!!", ""),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_text(raw) == expected

    @pytest.mark.parametrize("raw", ["Hello, World!", "  a\tb\nc  ", "x--", "Return the TOTAL."])
    def test_idempotent(self, raw):
        once = normalize_text(raw)
        assert normalize_text(once) == once

    def test_case_and_punctuation_insensitive(self):
        assert normalize_text("Call FOO!") == normalize_text("call foo")


class TestCommentText:
    def test_line_comment_is_stripped(self):
        comment = make_comment(1, "  increment i  ")
        assert first_comment_line(comment) == "increment i"

    def test_block_comment_first_meaningful_line(self):
        comment = make_comment(1, "*\n * \n * Loads the config\n * second line\n ", kind=CommentKind.BLOCK)
        assert first_comment_line(comment) == "Loads the config"

    def test_block_comment_full_text(self):
        comment = make_comment(1, "\n * first\n * second\n ", kind=CommentKind.BLOCK)
        assert comment_text(comment) == "first second"

    def test_empty_block_comment(self):
        comment = make_comment(1, "  ", kind=CommentKind.BLOCK)
        assert first_comment_line(comment) == ""


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("increment i") == "increment i"

    def test_exactly_limit_unchanged(self):
        text = "x" * 50
        assert truncate(text) == text

    def test_long_text_truncated(self):
        result = truncate("y" * 60)
        assert result == "y" * 47 + "..."
        assert len(result) == 50

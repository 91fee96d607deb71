"""
Text normalization and comment text helpers.
"""

import re

from codegraph_comments.models import CommentKind, SourceComment

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_BLOCK_LINE_PREFIX = re.compile(r"^\s*\*?\s?")


def normalize_text(text: str) -> str:
    """
    Canonicalize free text for comparison.

    Lowercases, replaces anything outside [a-z0-9] and whitespace with a
    space, collapses whitespace runs and trims.

    >>> normalize_text("Increment i!")
    'increment i'
    """
    lowered = text.lower()
    stripped = _NON_ALNUM.sub(" ", lowered)
    return _WHITESPACE.sub(" ", stripped).strip()


def _block_lines(value: str) -> list[str]:
    lines = (_BLOCK_LINE_PREFIX.sub("", line).strip() for line in value.strip().split("\n"))
    return [line for line in lines if line]


def first_comment_line(comment: SourceComment) -> str:
    """First meaningful line of a comment body."""
    if comment.kind is CommentKind.LINE:
        return comment.value.strip()

    lines = _block_lines(comment.value)
    return lines[0] if lines else ""


def comment_text(comment: SourceComment) -> str:
    """Whole comment body; block comments are joined with their `*` decoration removed."""
    if comment.kind is CommentKind.LINE:
        return comment.value.strip()
    return " ".join(_block_lines(comment.value))


def truncate(text: str, limit: int = 50) -> str:
    """Shorten text for messages: `limit - 3` characters plus an ellipsis."""
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text

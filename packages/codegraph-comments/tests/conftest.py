"""
Shared fixtures for codegraph-comments tests.
"""

from textwrap import dedent

import pytest

from codegraph_comments.cache import CacheRegistry
from codegraph_comments.config import LintSettings
from codegraph_comments.models import CommentKind, ConstructKind, SourceComment, Span, SyntaxConstruct
from codegraph_comments.parsing import parse_content
from codegraph_comments.rules import RedundantCommentRule

LINE_WIDTH = 100


def make_span(line: int, col: int = 0, end_line: int | None = None, end_col: int | None = None) -> Span:
    """Span with offsets derived from a fixed line width."""
    end_line = line if end_line is None else end_line
    end_col = col + 5 if end_col is None else end_col
    return Span(
        start_line=line,
        start_col=col,
        end_line=end_line,
        end_col=end_col,
        start_offset=(line - 1) * LINE_WIDTH + col,
        end_offset=(end_line - 1) * LINE_WIDTH + end_col,
    )


def make_construct(
    kind: ConstructKind,
    line: int,
    col: int = 0,
    name: str | None = None,
    literal: str | None = None,
    operator: str | None = None,
    node_type: str = "test_node",
) -> SyntaxConstruct:
    return SyntaxConstruct(
        kind=kind,
        node_type=node_type,
        span=make_span(line, col),
        names=(name,) if name else (),
        literals=(literal,) if literal is not None else (),
        operator=operator,
    )


def make_root(*children: SyntaxConstruct) -> SyntaxConstruct:
    root = SyntaxConstruct(kind=ConstructKind.UNKNOWN, node_type="program")
    for child in children:
        root.add_child(child)
    return root


def make_comment(
    line: int,
    value: str,
    col: int = 0,
    kind: CommentKind = CommentKind.LINE,
    trailing: bool = False,
) -> SourceComment:
    return SourceComment(
        span=make_span(line, col, end_col=col + len(value) + 2),
        kind=kind,
        value=value,
        preceded_by_token=trailing,
    )


@pytest.fixture
def caches():
    """Fresh cache registry per test."""
    return CacheRegistry()


@pytest.fixture
def parse_js():
    def _parse(source: str, file_path: str = "test.js"):
        return parse_content(dedent(source).lstrip("\n"), "javascript", file_path)

    return _parse


@pytest.fixture
def parse_py():
    def _parse(source: str, file_path: str = "test.py"):
        return parse_content(dedent(source).lstrip("\n"), "python", file_path)

    return _parse


@pytest.fixture
def lint_js(parse_js, caches):
    """Run the rule over a JavaScript snippet with optional settings overrides."""

    def _lint(source: str, **overrides):
        rule = RedundantCommentRule(LintSettings(**overrides), caches)
        return rule.check(parse_js(source))

    return _lint


@pytest.fixture
def lint_py(parse_py, caches):
    def _lint(source: str, **overrides):
        rule = RedundantCommentRule(LintSettings(**overrides), caches)
        return rule.check(parse_py(source))

    return _lint

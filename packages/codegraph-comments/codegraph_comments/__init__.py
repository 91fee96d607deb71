"""
CodeGraph Comments

Redundant-comment detection over tree-sitter parse trees.
Flags comments that restate the adjacent code ("increment i" above `i++`)
instead of explaining why it exists.

Supports: JavaScript, TypeScript/TSX, Python.
"""

__version__ = "0.1.0"

from .config import CommentContextPolicy, ContextHandling, LintSettings, ScoringConfig, Sensitivity
from .errors import CommentLintError, ConfigurationError, FileAnalysisError, ParseError, UnsupportedLanguageError
from .linter import CommentLinter, FileReport, LintRunResult
from .models import (
    CommentKind,
    ConstructKind,
    Finding,
    ParsedFile,
    Severity,
    SourceComment,
    Span,
    SyntaxConstruct,
    Token,
)
from .rules import RedundantCommentRule

__all__ = [
    "CommentContextPolicy",
    "CommentKind",
    "CommentLintError",
    "CommentLinter",
    "ConfigurationError",
    "ConstructKind",
    "ContextHandling",
    "FileAnalysisError",
    "FileReport",
    "Finding",
    "LintRunResult",
    "LintSettings",
    "ParseError",
    "ParsedFile",
    "RedundantCommentRule",
    "ScoringConfig",
    "Sensitivity",
    "Severity",
    "SourceComment",
    "Span",
    "SyntaxConstruct",
    "Token",
    "UnsupportedLanguageError",
]

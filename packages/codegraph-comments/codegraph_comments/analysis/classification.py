"""
Comment classification.

Separates documentation comments (doc blocks, file headers, license
text) from inline comments, recognizes tool directives and action items,
and detects "why" phrasing that exempts a comment from redundancy checks.
"""

import re
from dataclasses import dataclass
from enum import Enum

from codegraph_comments.cache import CacheRegistry, get_default_caches
from codegraph_comments.config import CommentContextPolicy, ContextHandling
from codegraph_comments.models import CommentKind, ParsedFile, SourceComment
from codegraph_comments.text import comment_text

# Words that exempt a comment from the redundancy check
WHY_INDICATORS = (
    "because",
    "since",
    "due to",
    "workaround",
    "bug",
    "issue",
    "fix for",
    "needed for",
    "required for",
    "necessary",
    "important",
    "note:",
    "caveat",
    "warning",
    "caution",
    "intentional",
    "deliberately",
    "performance",
    "optimization",
    "compatibility",
    "legacy",
    "deprecated",
    "temporary",
    "business",
    "rule",
    "requirement",
)

# comment_purpose() vocabulary; the rule itself skips on WHY_INDICATORS only
EXPLANATION_INDICATORS = WHY_INDICATORS + (
    "as a result",
    "therefore",
    "fixes",
    "hack",
    "must",
    "should",
    "critical",
    "crucial",
    "essential",
    "beware",
    "careful",
    "purposely",
    "on purpose",
    "optimized",
    "faster",
    "slower",
    "backwards compatible",
    "polyfill",
    "temp",
    "until",
    "when",
    "spec",
    "safety",
    "security",
    "prevent",
    "avoid",
    "protect",
    "edge case",
    "corner case",
    "special case",
    "exception",
    "see",
    "refer to",
    "according to",
)

# Comment text never checked for obviousness
SKIP_PATTERNS = (
    # Doc tags
    re.compile(r"^\s*\*?\s*@\w+"),
    # Action items
    re.compile(r"^\s*(TODO|FIXME|NOTE|HACK|XXX|BUG)\b", re.IGNORECASE),
    # URLs
    re.compile(r"https?://"),
    # Linter directives
    re.compile(r"^\s*eslint"),
    # Code in backticks
    re.compile(r"`[^`]+`"),
    # License/copyright
    re.compile(r"^\s*\*?\s*(copyright|license|licensed)", re.IGNORECASE),
    # File paths
    re.compile(r"^[./\\]"),
)

DOC_COMMENT_PATTERNS = (
    re.compile(r"^\s*\*?\s*@\w+"),
    re.compile(r"^\s*\*?\s*@(file|fileoverview|overview)", re.IGNORECASE),
    re.compile(r"^\s*\*?\s*(copyright|license|licensed)", re.IGNORECASE),
    re.compile(r"^\s*\*?\s*\(c\)\s*\d{4}", re.IGNORECASE),
    re.compile(r"^\s*\*?\s*all rights reserved", re.IGNORECASE),
    re.compile(r"^\s*\*?\s*@(module|package|namespace)", re.IGNORECASE),
    re.compile(r"^\s*\*?\s*@(api|public|private|protected)", re.IGNORECASE),
    re.compile(r"^\s*\*?\s*@(typedef|interface|class|constructor)", re.IGNORECASE),
)

INLINE_COMMENT_PATTERNS = (
    re.compile(r"^\s*(TODO|FIXME|NOTE|HACK|XXX|BUG)\b", re.IGNORECASE),
    re.compile(r"^\s*eslint", re.IGNORECASE),
    re.compile(r"^\s*@ts-", re.IGNORECASE),
    re.compile(r"^\s*prettier-", re.IGNORECASE),
    re.compile(r"^\s*(if|when|because|since|for|to)\s", re.IGNORECASE),
)

# Linter / type checker / formatter pragmas, shebangs, encoding cookies
DIRECTIVE_PATTERN = re.compile(
    r"^\s*(eslint|jshint|jslint|istanbul|prettier-|@ts-|noqa|type:|pylint:|mypy:|pyright:|fmt:|isort:"
    r"|pragma|flake8|ruff:|-\*-|!)",
    re.IGNORECASE,
)

_TODO = re.compile(r"\bTODO\b", re.IGNORECASE)
_FIXME = re.compile(r"\bFIXME\b", re.IGNORECASE)
_NOTE = re.compile(r"\bNOTE\b", re.IGNORECASE)
_URL = re.compile(r"https?://")
_FILE_HEADER = re.compile(r"^\s*\*?\s*@file", re.IGNORECASE)
_COPYRIGHT = re.compile(r"^\s*\*?\s*(copyright|license)", re.IGNORECASE)

MIN_COMMENT_LENGTH = 3


class CommentPurpose(str, Enum):
    DOCUMENTATION = "documentation"
    TODO = "todo"
    DIRECTIVE = "directive"
    EXPLANATION = "explanation"
    NOISE = "noise"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CommentClassification:
    """Pre-computed properties of one comment body."""

    text: str
    is_doc_block: bool
    is_todo: bool
    is_fixme: bool
    is_note: bool
    is_directive: bool
    is_url: bool
    is_file_header: bool
    is_copyright: bool
    is_block: bool

    @property
    def is_line(self) -> bool:
        return not self.is_block

    @property
    def is_action(self) -> bool:
        return self.is_todo or self.is_fixme or self.is_note


@dataclass(frozen=True)
class ClassifiedComment:
    comment: SourceComment
    classification: CommentClassification


def classify_comment(comment: SourceComment, caches: CacheRegistry | None = None) -> CommentClassification:
    """
    Classify a comment body.

    Results are shared across files through the bounded comment-context
    cache, keyed by (kind, body).
    """
    caches = caches or get_default_caches()
    key = (comment.kind, comment.value)

    cached = caches.comment_contexts.get(key)
    if cached is not None:
        return cached

    value = comment.value
    is_block = comment.kind is CommentKind.BLOCK
    result = CommentClassification(
        text=comment_text(comment),
        is_doc_block=is_block and value.startswith("*"),
        is_todo=bool(_TODO.search(value)),
        is_fixme=bool(_FIXME.search(value)),
        is_note=bool(_NOTE.search(value)),
        is_directive=bool(DIRECTIVE_PATTERN.match(value)),
        is_url=bool(_URL.search(value)),
        is_file_header=bool(_FILE_HEADER.match(value)),
        is_copyright=bool(_COPYRIGHT.match(value)),
        is_block=is_block,
    )
    caches.comment_contexts.set(key, result)
    return result


def get_classified_comments(parsed: ParsedFile, caches: CacheRegistry | None = None) -> list[ClassifiedComment]:
    """All comments of a file with their classification, cached per file."""
    caches = caches or get_default_caches()

    cached = caches.classified_comments.get(parsed)
    if cached is not None:
        return cached

    classified = [ClassifiedComment(comment, classify_comment(comment, caches)) for comment in parsed.comments]
    caches.classified_comments.set(parsed, classified)
    return classified


def has_why_indicator(text: str, indicators: tuple[str, ...] = WHY_INDICATORS) -> bool:
    """
    >>> has_why_indicator("because the API requires it")
    True
    >>> has_why_indicator("increment the counter")
    False
    """
    if not text:
        return False
    lowered = text.lower()
    return any(indicator in lowered for indicator in indicators)


def should_skip_text(text: str) -> bool:
    """Too short, matches a fixed skip pattern, or explains why."""
    if not text or len(text) < MIN_COMMENT_LENGTH:
        return True
    if any(pattern.search(text) for pattern in SKIP_PATTERNS):
        return True
    return has_why_indicator(text)


def is_documentation_comment(classification: CommentClassification) -> bool:
    if classification.is_doc_block:
        return True
    if classification.is_file_header or classification.is_copyright:
        return True
    return any(pattern.search(classification.text) for pattern in DOC_COMMENT_PATTERNS)


def is_inline_comment(classification: CommentClassification) -> bool:
    if is_documentation_comment(classification):
        return False
    if classification.is_line or classification.is_action or classification.is_directive:
        return True
    return any(pattern.search(classification.text) for pattern in INLINE_COMMENT_PATTERNS)


def comment_purpose(classification: CommentClassification) -> CommentPurpose:
    if is_documentation_comment(classification):
        return CommentPurpose.DOCUMENTATION
    if classification.is_action:
        return CommentPurpose.TODO
    if classification.is_directive:
        return CommentPurpose.DIRECTIVE
    if has_why_indicator(classification.text, EXPLANATION_INDICATORS):
        return CommentPurpose.EXPLANATION
    return CommentPurpose.NOISE


def should_skip_by_context(classification: CommentClassification, policy: CommentContextPolicy) -> bool:
    if policy.documentation_comments is ContextHandling.SKIP and is_documentation_comment(classification):
        return True
    if policy.inline_comments is ContextHandling.SKIP and is_inline_comment(classification):
        return True
    return False


def context_handling(classification: CommentClassification, policy: CommentContextPolicy) -> ContextHandling:
    """STRICT when the comment's category is configured strict, else NORMAL."""
    if policy.documentation_comments is ContextHandling.STRICT and is_documentation_comment(classification):
        return ContextHandling.STRICT
    if policy.inline_comments is ContextHandling.STRICT and is_inline_comment(classification):
        return ContextHandling.STRICT
    return ContextHandling.NORMAL

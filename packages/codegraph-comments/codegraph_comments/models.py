"""
Core models: spans, comments, constructs, parsed files and findings.
"""

from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True, slots=True)
class Span:
    """
    Source code location (immutable).

    Attributes:
        start_line: Starting line number (1-indexed)
        start_col: Starting column (0-indexed)
        end_line: Ending line number (1-indexed)
        end_col: Ending column (0-indexed)
        start_offset: Starting byte offset into the source
        end_offset: Ending byte offset (exclusive)
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    start_offset: int
    end_offset: int

    def contains_line(self, line: int) -> bool:
        """Check if span contains the given line"""
        return self.start_line <= line <= self.end_line


class CommentKind(str, Enum):
    LINE = "line"
    BLOCK = "block"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class SourceComment:
    """
    A comment extracted from a parsed file.

    Attributes:
        span: Location of the whole comment including delimiters
        kind: Line or block comment
        value: Comment body without delimiters (`// x` → ` x`)
        preceded_by_token: A non-comment token ends on the comment's start line
    """

    span: Span
    kind: CommentKind
    value: str
    preceded_by_token: bool = False

    @property
    def is_trailing(self) -> bool:
        return self.preceded_by_token


class ConstructKind(str, Enum):
    """Closed set of construct kinds.

    EMPTY marks no-op statements (`;`, `pass`) so adjacency can step over them.
    """

    LOOP = "loop"
    CONDITIONAL = "conditional"
    CALL = "call"
    ASSIGNMENT = "assignment"
    DECLARATION = "declaration"
    RETURN = "return"
    THROW = "throw"
    TRY = "try"
    SWITCH = "switch"
    BREAK = "break"
    CONTINUE = "continue"
    FUNCTION_DEF = "function_def"
    CLASS_DEF = "class_def"
    UPDATE = "update"
    EMPTY = "empty"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class SyntaxConstruct:
    """
    A node of the lowered syntax tree.

    Children are owned by the tree. `parent` is a back-reference and must
    never be followed by traversals.

    Attributes:
        kind: Construct kind tag
        node_type: Grammar node type (e.g. "for_in_statement")
        span: Source span (None for the synthetic root)
        names: Captured identifier names (callee, target, declared name)
        literals: Captured literal operands (initializer, returned value)
        operator: "++"/"--" for updates, declaration keyword, loop keyword
    """

    kind: ConstructKind
    node_type: str
    span: Span | None = None
    names: tuple[str, ...] = ()
    literals: tuple[str, ...] = ()
    operator: str | None = None
    children: list["SyntaxConstruct"] = field(default_factory=list, repr=False)
    parent: "SyntaxConstruct | None" = field(default=None, repr=False)

    @property
    def name(self) -> str | None:
        return self.names[0] if self.names else None

    @property
    def literal(self) -> str | None:
        return self.literals[0] if self.literals else None

    @property
    def start_line(self) -> int | None:
        return self.span.start_line if self.span else None

    def add_child(self, child: "SyntaxConstruct") -> None:
        child.parent = self
        self.children.append(child)


@dataclass(frozen=True, slots=True)
class Token:
    """A non-comment leaf of the parse tree."""

    type: str
    span: Span


class ParsedFile:
    """
    One parsed source file: construct root, comments and tokens.

    Owner of the per-file (identity-scoped) caches, so it must stay
    weak-referenceable and hash by identity.
    """

    def __init__(
        self,
        file_path: str,
        language: str,
        source: str,
        root: SyntaxConstruct,
        comments: tuple[SourceComment, ...],
        tokens: tuple[Token, ...],
    ):
        self.file_path = file_path
        self.language = language
        self.source = source
        self.root = root
        self.comments = comments
        self.tokens = tokens
        self._token_starts = [t.span.start_offset for t in tokens]
        self._token_ends = [t.span.end_offset for t in tokens]

    def token_before(self, offset: int) -> Token | None:
        """Last token ending at or before offset."""
        pos = bisect_right(self._token_ends, offset)
        if pos == 0:
            return None
        return self.tokens[pos - 1]

    def token_after(self, offset: int) -> Token | None:
        """First token starting at or after offset."""
        pos = bisect_left(self._token_starts, offset)
        if pos >= len(self.tokens):
            return None
        return self.tokens[pos]

    def __repr__(self) -> str:
        return f"ParsedFile(file={self.file_path}, language={self.language}, comments={len(self.comments)})"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"

    def __str__(self) -> str:
        return self.value


@dataclass
class Finding:
    """A single lint finding."""

    rule_id: str
    message_id: str
    message: str
    severity: Severity
    span: Span
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def line(self) -> int:
        return self.span.start_line

    @property
    def column(self) -> int:
        return self.span.start_col

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "message_id": self.message_id,
            "message": self.message,
            "severity": self.severity.value,
            "line": self.span.start_line,
            "column": self.span.start_col,
            "end_line": self.span.end_line,
            "end_column": self.span.end_col,
            "data": dict(self.data),
        }

"""
Builds ParsedFile objects from tree-sitter trees.

One document-order pass over the tree-sitter tree:
- named nodes become SyntaxConstruct children of the nearest lowered ancestor
- comment nodes become SourceComment records
- non-comment leaves become Token records (for leading/trailing checks)

The walk uses an explicit stack, so long left-deep expression chains do
not hit the interpreter recursion limit.
"""

from pathlib import Path

from tree_sitter import Node as TSNode

from codegraph_comments.errors import ParseError, UnsupportedLanguageError
from codegraph_comments.models import (
    CommentKind,
    ConstructKind,
    ParsedFile,
    SourceComment,
    Span,
    SyntaxConstruct,
    Token,
)
from codegraph_comments.observability import get_logger
from codegraph_comments.parsing.languages import LanguageSpec, NodeDescriber, get_language_spec
from codegraph_comments.parsing.parser_registry import ParserRegistry, get_registry
from codegraph_comments.parsing.source_file import SourceFile

logger = get_logger(__name__)


def node_span(node: TSNode) -> Span:
    """Tree-sitter node → Span (1-indexed lines, 0-indexed columns, byte offsets)."""
    return Span(
        start_line=node.start_point[0] + 1,
        start_col=node.start_point[1],
        end_line=node.end_point[0] + 1,
        end_col=node.end_point[1],
        start_offset=node.start_byte,
        end_offset=node.end_byte,
    )


def split_comment(text: str) -> tuple[CommentKind, str]:
    """Comment token text → (kind, body without delimiters)."""
    if text.startswith("/*"):
        body = text[2:-2] if text.endswith("*/") and len(text) >= 4 else text[2:]
        return CommentKind.BLOCK, body
    if text.startswith("//"):
        return CommentKind.LINE, text[2:]
    if text.startswith("#"):
        return CommentKind.LINE, text[1:]
    if text.startswith("<!--"):
        return CommentKind.BLOCK, text[4:-3] if text.endswith("-->") else text[4:]
    return CommentKind.LINE, text


class ParsedFileBuilder:
    """Lowers one tree-sitter tree into a ParsedFile."""

    def __init__(self, source: SourceFile, spec: LanguageSpec):
        self.source = source
        self.spec = spec
        self._bytes = source.source_bytes
        self._describer = NodeDescriber(spec, self._bytes)

    def build(self, ts_root: TSNode) -> ParsedFile:
        root = SyntaxConstruct(kind=ConstructKind.UNKNOWN, node_type=ts_root.type)
        comments: list[SourceComment] = []
        tokens: list[Token] = []
        last_token_line = 0

        stack: list[tuple[TSNode, SyntaxConstruct]] = [(child, root) for child in reversed(ts_root.children)]
        while stack:
            node, owner = stack.pop()

            if node.type in self.spec.comment_types:
                span = node_span(node)
                kind, body = split_comment(self._describer.text(node))
                comments.append(
                    SourceComment(
                        span=span,
                        kind=kind,
                        value=body,
                        preceded_by_token=last_token_line == span.start_line,
                    )
                )
                continue

            if node.child_count == 0:
                if node.end_byte > node.start_byte:
                    span = node_span(node)
                    tokens.append(Token(type=node.type, span=span))
                    last_token_line = span.end_line
                if not node.is_named or node.is_missing:
                    continue

            if not node.is_named or node.type in self.spec.transparent:
                stack.extend((child, owner) for child in reversed(node.children))
                continue

            fields = self._describer.describe(node)
            construct = SyntaxConstruct(
                kind=fields.kind,
                node_type=node.type,
                span=node_span(node),
                names=fields.names,
                literals=fields.literals,
                operator=fields.operator,
            )
            owner.add_child(construct)
            stack.extend((child, construct) for child in reversed(node.children))

        return ParsedFile(
            file_path=self.source.file_path,
            language=self.spec.name,
            source=self.source.content,
            root=root,
            comments=tuple(comments),
            tokens=tuple(tokens),
        )


def parse_source(source: SourceFile, registry: ParserRegistry | None = None) -> ParsedFile:
    """
    Parse a source file into a ParsedFile.

    Raises:
        UnsupportedLanguageError: No parser or node tables for the language
        ParseError: tree-sitter returned no tree
    """
    registry = registry or get_registry()
    language = registry.canonical_name(source.language)

    spec = get_language_spec(language)
    parser = registry.get_parser(language)
    if spec is None or parser is None:
        raise UnsupportedLanguageError(f"Language not supported: {source.language}", file_path=source.file_path)

    tree = parser.parse(source.source_bytes)
    if tree is None:
        raise ParseError(f"Failed to parse file: {source.file_path}", file_path=source.file_path)

    if tree.root_node.has_error:
        logger.debug("parse_tree_has_errors", file=source.file_path)

    parsed = ParsedFileBuilder(source, spec).build(tree.root_node)
    logger.debug(
        "source_parsed",
        file=source.file_path,
        language=language,
        comments=len(parsed.comments),
        tokens=len(parsed.tokens),
    )
    return parsed


def parse_content(content: str, language: str, file_path: str = "<memory>") -> ParsedFile:
    return parse_source(SourceFile.from_content(file_path, content, language))


def parse_file(path: str | Path, language: str | None = None, encoding: str = "utf-8") -> ParsedFile:
    return parse_source(SourceFile.from_file(path, language=language, encoding=encoding))

"""
Parsing Layer

Tree-sitter based parsing and lowering into constructs, comments and tokens.
"""

from .builder import ParsedFileBuilder, node_span, parse_content, parse_file, parse_source, split_comment
from .languages import LanguageSpec, get_language_spec
from .parser_registry import ParserRegistry, get_registry
from .source_file import SourceFile

__all__ = [
    "LanguageSpec",
    "ParsedFileBuilder",
    "ParserRegistry",
    "SourceFile",
    "get_language_spec",
    "get_registry",
    "node_span",
    "parse_content",
    "parse_file",
    "parse_source",
    "split_comment",
]

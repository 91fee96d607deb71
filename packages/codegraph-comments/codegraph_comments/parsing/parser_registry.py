"""
Tree-sitter grammars for the languages the linter understands.

Grammars come from tree-sitter-language-pack. A grammar that fails to load
is logged and left out; files in that language then fail individually.
"""

from pathlib import Path

from tree_sitter import Language, Parser
from tree_sitter_language_pack import get_language

from codegraph_comments.observability import get_logger

logger = get_logger(__name__)

GRAMMARS = ("javascript", "typescript", "tsx", "python")

_EXTENSION_MAP = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".py": "python",
    ".pyi": "python",
}

_ALIASES = {"js": "javascript", "jsx": "javascript", "ts": "typescript", "py": "python"}


class ParserRegistry:
    """Loaded grammars plus one cached parser per language."""

    def __init__(self, grammars: tuple[str, ...] = GRAMMARS):
        self._grammars: dict[str, Language] = {}
        self._parsers: dict[str, Parser] = {}
        for name in grammars:
            try:
                self._grammars[name] = get_language(name)
            except Exception as e:
                logger.warning("grammar_load_failed", language=name, error=str(e))
            else:
                logger.debug("grammar_loaded", language=name)

    @staticmethod
    def canonical_name(language: str) -> str:
        """Lower-case name with aliases (js, ts, py, ...) resolved."""
        name = language.lower()
        return _ALIASES.get(name, name)

    def get_parser(self, language: str) -> Parser | None:
        """Parser for a language or alias, None when no grammar is loaded for it."""
        name = self.canonical_name(language)
        parser = self._parsers.get(name)
        if parser is None and name in self._grammars:
            parser = self._parsers[name] = Parser(self._grammars[name])
        return parser

    def detect_language(self, file_path: str | Path) -> str | None:
        return _EXTENSION_MAP.get(Path(file_path).suffix.lower())

    def supports_language(self, language: str) -> bool:
        return self.canonical_name(language) in self._grammars

    @property
    def supported_languages(self) -> list[str]:
        return sorted(self._grammars)

    @property
    def supported_extensions(self) -> list[str]:
        return sorted(ext for ext, name in _EXTENSION_MAP.items() if name in self._grammars)


_registry: ParserRegistry | None = None


def get_registry() -> ParserRegistry:
    """Process-wide registry, created on first use."""
    global _registry
    if _registry is None:
        _registry = ParserRegistry()
    return _registry

"""
Source text handed to the parser.
"""

from dataclasses import dataclass
from pathlib import Path

from codegraph_comments.errors import UnsupportedLanguageError


@dataclass
class SourceFile:
    """
    One file's text and language.

    Attributes:
        file_path: Path as given by the caller (reported in findings)
        content: Decoded source text
        language: Language name or alias
        encoding: Encoding the file was read with

    Spans always refer to the UTF-8 encoding of `content`, whatever the
    file encoding was.
    """

    file_path: str
    content: str
    language: str
    encoding: str = "utf-8"

    @classmethod
    def from_file(
        cls,
        file_path: str | Path,
        language: str | None = None,
        encoding: str = "utf-8",
    ) -> "SourceFile":
        """
        Read a file, detecting the language from its extension when not given.

        Raises:
            UnsupportedLanguageError: Extension not mapped to a language
            OSError / UnicodeDecodeError: File cannot be read or decoded
        """
        path = Path(file_path)

        if language is None:
            from .parser_registry import get_registry

            language = get_registry().detect_language(path)
            if language is None:
                raise UnsupportedLanguageError(f"Could not detect language for: {path}", file_path=str(path))

        return cls(file_path=str(path), content=path.read_text(encoding=encoding), language=language, encoding=encoding)

    @classmethod
    def from_content(cls, file_path: str, content: str, language: str) -> "SourceFile":
        return cls(file_path=file_path, content=content, language=language)

    @property
    def source_bytes(self) -> bytes:
        """UTF-8 bytes fed to tree-sitter; node offsets index into these."""
        return self.content.encode("utf-8")

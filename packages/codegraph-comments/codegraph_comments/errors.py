"""
Errors raised by codegraph-comments

Every error carries a stable code plus keyword context (file_path, ...).
Resolution and scoring never raise; these cover parsing, configuration
and per-file analysis failures.
"""

from typing import Any


class CommentLintError(Exception):
    """Base exception for all codegraph-comments errors.

    `code` is stable across releases; `context` holds whatever keyword
    arguments the raiser attached.

    Example:
        raise CommentLintError(
            code="PARSE_ERROR",
            message="Failed to parse file",
            file_path="src/app.js",
        )
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def __repr__(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r}, {ctx_str})"


# ==============================================================================
# Configuration Errors
# ==============================================================================


class ConfigurationError(CommentLintError):
    """Error in configuration."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="CONFIGURATION_ERROR", message=message, **context)


# ==============================================================================
# Parsing Errors
# ==============================================================================


class ParseError(CommentLintError):
    """Error while parsing a source file."""

    def __init__(self, message: str, code: str = "PARSE_ERROR", **context: Any) -> None:
        super().__init__(code=code, message=message, **context)


class UnsupportedLanguageError(ParseError):
    """No parser is registered for the requested language."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, code="UNSUPPORTED_LANGUAGE", **context)


# ==============================================================================
# Analysis Errors
# ==============================================================================


class FileAnalysisError(CommentLintError):
    """Analysis of a single file failed."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="FILE_ANALYSIS_ERROR", message=message, **context)


__all__ = [
    "CommentLintError",
    "ConfigurationError",
    "ParseError",
    "UnsupportedLanguageError",
    "FileAnalysisError",
]

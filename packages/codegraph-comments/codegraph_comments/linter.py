"""
Linter runner.

Parses files, runs the redundant-comment rule and collects per-file
reports. A failure on one file is recorded on that file's report and the
run moves on to the next file.

Usage:
    linter = CommentLinter(LintSettings(sensitivity="high"))
    result = linter.lint_paths(["src/"])
    for report in result.reports:
        for finding in report.findings:
            print(report.file_path, finding.line, finding.message)
"""

import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from codegraph_comments.cache import CacheRegistry
from codegraph_comments.config import LintSettings, load_settings
from codegraph_comments.errors import CommentLintError, FileAnalysisError
from codegraph_comments.models import Finding
from codegraph_comments.observability import get_logger
from codegraph_comments.parsing import SourceFile, get_registry, parse_source
from codegraph_comments.rules import RedundantCommentRule

logger = get_logger(__name__)

IGNORED_DIRECTORIES = frozenset(
    {
        ".git",
        "node_modules",
        "__pycache__",
        ".venv",
        "venv",
        "dist",
        "build",
    }
)


@dataclass
class FileReport:
    """Findings (or the failure) for one file."""

    file_path: str
    language: str | None = None
    findings: list[Finding] = field(default_factory=list)
    error: CommentLintError | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file_path,
            "language": self.language,
            "findings": [finding.to_dict() for finding in self.findings],
            "error": None if self.error is None else {"code": self.error.code, "message": self.error.message},
        }


@dataclass
class LintRunResult:
    """Aggregated reports of one lint run."""

    reports: list[FileReport] = field(default_factory=list)
    config_warnings: list[str] = field(default_factory=list)
    elapsed_ms: float = 0.0

    @property
    def findings(self) -> list[tuple[str, Finding]]:
        """(file path, finding) pairs in report order."""
        return [(report.file_path, finding) for report in self.reports for finding in report.findings]

    @property
    def failed(self) -> list[FileReport]:
        return [report for report in self.reports if report.failed]

    @property
    def finding_count(self) -> int:
        return sum(len(report.findings) for report in self.reports)

    @property
    def has_findings(self) -> bool:
        return self.finding_count > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": [report.to_dict() for report in self.reports],
            "finding_count": self.finding_count,
            "failed_count": len(self.failed),
            "config_warnings": list(self.config_warnings),
        }


class CommentLinter:
    """
    Runs the redundant-comment rule over source files.

    Args:
        settings: Rule settings (loaded from the environment when omitted)
        caches: Cache registry shared across files (a fresh one when omitted)
    """

    def __init__(self, settings: LintSettings | None = None, caches: CacheRegistry | None = None):
        self.settings = settings or load_settings()
        self.caches = caches or CacheRegistry(
            regex_cache_size=self.settings.regex_cache_size,
            context_cache_size=self.settings.context_cache_size,
        )
        self.registry = get_registry()
        self.rule = RedundantCommentRule(self.settings, self.caches)

    def lint_source(self, content: str, file_path: str, language: str | None = None) -> FileReport:
        """Lint in-memory source; the language is detected from file_path when omitted."""
        if language is None:
            language = self.registry.detect_language(file_path)

        report = FileReport(file_path=file_path, language=language)
        if language is None:
            report.error = FileAnalysisError(f"Could not detect language for: {file_path}", file_path=file_path)
            return report

        return self._analyze(report, lambda: SourceFile.from_content(file_path, content, language))

    def lint_file(self, path: str | Path) -> FileReport:
        path = Path(path)
        report = FileReport(file_path=str(path), language=self.registry.detect_language(path))
        return self._analyze(report, lambda: SourceFile.from_file(path, language=report.language))

    def lint_paths(self, paths: Iterable[str | Path]) -> LintRunResult:
        """
        Lint files and directories.

        Directories are walked recursively for supported extensions,
        skipping VCS, dependency and build directories.
        """
        start = time.perf_counter()
        result = LintRunResult(config_warnings=list(self.rule.config_warnings))

        for file_path in self.discover_files(paths):
            result.reports.append(self.lint_file(file_path))

        result.elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "lint_run_complete",
            files=len(result.reports),
            findings=result.finding_count,
            failed_files=len(result.failed),
            elapsed_ms=round(result.elapsed_ms, 2),
        )
        return result

    def discover_files(self, paths: Iterable[str | Path]) -> Iterator[Path]:
        """Explicit files as given, directories expanded in sorted order."""
        extensions = set(self.registry.supported_extensions)

        for raw in paths:
            path = Path(raw)
            if not path.is_dir():
                yield path
                continue

            for candidate in sorted(path.rglob("*")):
                if any(part in IGNORED_DIRECTORIES for part in candidate.relative_to(path).parts):
                    continue
                if candidate.is_file() and candidate.suffix.lower() in extensions:
                    yield candidate

    def _analyze(self, report: FileReport, load) -> FileReport:
        try:
            parsed = parse_source(load(), self.registry)
            report.findings = self.rule.check(parsed)
        except CommentLintError as e:
            report.error = e
            logger.warning("file_analysis_failed", file=report.file_path, code=e.code, error=e.message)
        except Exception as e:
            report.error = FileAnalysisError(str(e), file_path=report.file_path, error_type=type(e).__name__)
            logger.warning(
                "file_analysis_failed",
                file=report.file_path,
                code=report.error.code,
                error=str(e),
                exc_info=True,
            )
        return report

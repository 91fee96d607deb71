"""
codegraph-comments CLI

Usage:
    codegraph-comments check src/ --sensitivity high
    codegraph-comments check app.js --format json
    codegraph-comments explain app.js --line 12
"""

import json
from enum import Enum
from pathlib import Path

import typer

from codegraph_comments.analysis import (
    classify_comment,
    comment_purpose,
    generate_glosses,
    get_node_index,
    is_obvious,
    resolve_adjacent,
)
from codegraph_comments.config import LintSettings, Sensitivity, load_settings
from codegraph_comments.errors import CommentLintError, ConfigurationError
from codegraph_comments.linter import CommentLinter
from codegraph_comments.observability import configure_logging
from codegraph_comments.parsing import parse_file
from codegraph_comments.text import first_comment_line

app = typer.Typer(
    name="codegraph-comments",
    help="Detect comments that restate the code instead of explaining it",
    add_completion=False,
)


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def _build_settings(
    sensitivity: Sensitivity | None,
    no_leading: bool,
    no_trailing: bool,
    ignore_patterns: list[str] | None,
) -> LintSettings:
    overrides: dict = {}
    if sensitivity is not None:
        overrides["sensitivity"] = sensitivity
    if no_leading:
        overrides["check_leading_comments"] = False
    if no_trailing:
        overrides["check_trailing_comments"] = False
    if ignore_patterns:
        overrides["ignore_patterns"] = ignore_patterns

    try:
        return load_settings(**overrides)
    except ConfigurationError as e:
        typer.echo(f"❌ {e}", err=True)
        for error in e.context.get("errors", []):
            typer.echo(f"   {'.'.join(str(part) for part in error['loc'])}: {error['msg']}", err=True)
        raise typer.Exit(code=2)


@app.command()
def check(
    paths: list[Path] = typer.Argument(..., help="Files or directories to lint"),
    sensitivity: Sensitivity | None = typer.Option(
        None, "--sensitivity", "-s", help="Detection sensitivity (default: COMMENT_LINT_SENSITIVITY or medium)"
    ),
    no_leading: bool = typer.Option(False, "--no-leading", help="Skip comments on their own line"),
    no_trailing: bool = typer.Option(False, "--no-trailing", help="Skip comments after code on the same line"),
    ignore_patterns: list[str] | None = typer.Option(
        None, "--ignore-pattern", "-i", help="Regex; matching comments are never reported (repeatable)"
    ),
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", "-f", help="Output format"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level (logs go to stderr)"),
):
    """
    Report comments that restate the code.

    Exit code 1 when findings exist, 2 when a file failed and nothing was
    found, 0 otherwise.
    """
    configure_logging(level=log_level)
    settings = _build_settings(sensitivity, no_leading, no_trailing, ignore_patterns)

    linter = CommentLinter(settings)
    result = linter.lint_paths(paths)

    if output_format is OutputFormat.JSON:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        for warning in result.config_warnings:
            typer.echo(f"warning: {warning}", err=True)
        for file_path, finding in result.findings:
            location = f"{file_path}:{finding.line}:{finding.column + 1}"
            typer.echo(f"{location}  {finding.severity}  {finding.message}  [{finding.rule_id}]")
        for report in result.failed:
            typer.echo(f"{report.file_path}: {report.error}", err=True)
        typer.echo(
            f"\n{result.finding_count} finding(s) in {len(result.reports)} file(s), {len(result.failed)} failed"
        )

    if result.has_findings:
        raise typer.Exit(code=1)
    if result.failed:
        raise typer.Exit(code=2)


@app.command()
def explain(
    file: Path = typer.Argument(..., help="Source file"),
    line: int = typer.Option(..., "--line", "-l", help="1-indexed line of the comment"),
    sensitivity: Sensitivity = typer.Option(Sensitivity.MEDIUM, "--sensitivity", "-s", help="Detection sensitivity"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level (logs go to stderr)"),
):
    """Show how comments on a line are paired with code and scored."""
    configure_logging(level=log_level)

    try:
        parsed = parse_file(file)
    except (CommentLintError, OSError) as e:
        typer.echo(f"❌ {file}: {e}", err=True)
        raise typer.Exit(code=2)

    comments = [comment for comment in parsed.comments if comment.span.contains_line(line)]
    if not comments:
        typer.echo(f"No comment on line {line}")
        raise typer.Exit(code=1)

    index = get_node_index(parsed)
    for comment in comments:
        text = first_comment_line(comment)
        classification = classify_comment(comment)
        position = "trailing" if comment.is_trailing else "leading"

        typer.echo(f"Comment: {text!r} ({comment.kind}, {position}, {comment_purpose(classification)})")

        construct = resolve_adjacent(comment, index)
        if construct is None:
            typer.echo("  Construct: none")
            continue

        typer.echo(f"  Construct: {construct.kind} ({construct.node_type}) at line {construct.start_line}")
        glosses = generate_glosses(construct)
        typer.echo(f"  Glosses: {', '.join(glosses) if glosses else '-'}")
        typer.echo(f"  Obvious ({sensitivity}): {'yes' if is_obvious(text, glosses, sensitivity) else 'no'}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()

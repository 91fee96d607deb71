"""
Redundant-comment rule.

Flags comments that restate the construct they annotate ("increment i"
above `i++`) instead of explaining why the code is the way it is.

Pipeline per comment:
    skip policies → leading/trailing toggle → resolve adjacent construct
    → glosses → score → finding
"""

from codegraph_comments.analysis.classification import (
    context_handling,
    get_classified_comments,
    should_skip_by_context,
    should_skip_text,
)
from codegraph_comments.analysis.glosses import generate_glosses
from codegraph_comments.analysis.node_index import get_node_index
from codegraph_comments.analysis.resolver import resolve_adjacent
from codegraph_comments.analysis.scorer import is_obvious
from codegraph_comments.cache import CacheRegistry, CompiledPattern, get_default_caches
from codegraph_comments.config import DEFAULT_SCORING_CONFIG, ContextHandling, LintSettings, ScoringConfig
from codegraph_comments.models import Finding, ParsedFile, Severity
from codegraph_comments.observability import get_logger
from codegraph_comments.text import first_comment_line, truncate

logger = get_logger(__name__)

RULE_ID = "no-obvious-comments"
MESSAGE_ID = "obviousComment"
MESSAGES = {
    MESSAGE_ID: "Comment '{comment}' appears to restate the code. Comments should explain 'why', not 'what'.",
}


class RedundantCommentRule:
    """
    Detects comments that merely restate the adjacent code.

    Args:
        settings: Rule options (sensitivity, toggles, ignore patterns, context policy)
        caches: Shared cache handle; the process default when omitted
        scoring: Scorer constants
    """

    rule_id = RULE_ID

    def __init__(
        self,
        settings: LintSettings | None = None,
        caches: CacheRegistry | None = None,
        scoring: ScoringConfig = DEFAULT_SCORING_CONFIG,
    ):
        self.settings = settings or LintSettings()
        self.caches = caches or get_default_caches()
        self.scoring = scoring
        self.config_warnings: list[str] = []
        self.ignore_patterns = self._compile_ignore_patterns(self.settings.ignore_patterns)

    def _compile_ignore_patterns(self, patterns: list[str]) -> list[CompiledPattern]:
        compiled = []
        for pattern in patterns:
            result = self.caches.regex(pattern)
            if not result.is_valid:
                warning = f"Invalid ignore pattern {pattern!r}: {result.error}"
                self.config_warnings.append(warning)
                logger.warning("invalid_ignore_pattern", rule=self.rule_id, pattern=pattern, error=result.error)
                continue
            compiled.append(result)
        return compiled

    def _is_ignored(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in self.ignore_patterns)

    def check(self, parsed: ParsedFile) -> list[Finding]:
        """Run the rule over one parsed file."""
        settings = self.settings
        findings: list[Finding] = []

        for classified in get_classified_comments(parsed, self.caches):
            comment = classified.comment
            classification = classified.classification

            if should_skip_by_context(classification, settings.comment_context):
                continue
            if classification.is_doc_block or classification.is_directive:
                continue

            text = first_comment_line(comment)
            if should_skip_text(text) or self._is_ignored(text):
                continue

            if comment.is_trailing and not settings.check_trailing_comments:
                continue
            if not comment.is_trailing and not settings.check_leading_comments:
                continue

            construct = resolve_adjacent(comment, get_node_index(parsed, self.caches))
            if construct is None:
                continue

            glosses = generate_glosses(construct)
            if not glosses:
                continue

            if not is_obvious(text, glosses, settings.sensitivity, self.scoring):
                continue

            handling = context_handling(classification, settings.comment_context)
            shown = truncate(text, self.scoring.MESSAGE_TEXT_LIMIT)
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    message_id=MESSAGE_ID,
                    message=MESSAGES[MESSAGE_ID].format(comment=shown),
                    severity=Severity.ERROR if handling is ContextHandling.STRICT else Severity.WARNING,
                    span=comment.span,
                    data={"comment": shown, "construct": construct.kind.value},
                )
            )

        logger.debug("rule_checked", rule=self.rule_id, file=parsed.file_path, findings=len(findings))
        return findings

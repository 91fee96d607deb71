"""
Obviousness scoring.

Compares a comment with the glosses of its construct. Checks per gloss,
first positive wins:

    a. exact match
    b. comment starts with the gloss, remainder shorter than the limit
    c. HIGH only: gloss is a substring covering enough of the comment
    d. not LOW: token overlap between gloss and comment

Acceptance widens monotonically from LOW to HIGH.
"""

from collections.abc import Sequence

from codegraph_comments.config import DEFAULT_SCORING_CONFIG, ScoringConfig, Sensitivity
from codegraph_comments.text import normalize_text


def _qualifying_tokens(text: str, config: ScoringConfig) -> list[str]:
    return [token for token in text.split() if len(token) > config.MIN_TOKEN_LENGTH]


def _matches_gloss(
    comment: str,
    comment_tokens: set[str],
    gloss: str,
    sensitivity: Sensitivity,
    config: ScoringConfig,
) -> bool:
    if comment == gloss:
        return True

    if comment.startswith(gloss):
        remainder = comment[len(gloss) :].strip()
        if len(remainder) < config.PREFIX_REMAINDER_LIMIT:
            return True

    if sensitivity is Sensitivity.HIGH:
        if gloss in comment and len(gloss) >= len(comment) * config.HIGH_SUBSTRING_COVERAGE:
            return True

    if sensitivity is not Sensitivity.LOW:
        gloss_tokens = _qualifying_tokens(gloss, config)
        if gloss_tokens:
            matched = sum(1 for token in gloss_tokens if token in comment_tokens)
            ratio = matched / len(gloss_tokens)
            if ratio >= config.OVERLAP_THRESHOLD and len(gloss_tokens) >= config.MIN_OVERLAP_TOKENS:
                return True
            if sensitivity is Sensitivity.HIGH and ratio >= config.HIGH_OVERLAP_THRESHOLD:
                return True

    return False


def is_obvious(
    comment_text: str,
    glosses: Sequence[str],
    sensitivity: Sensitivity | str = Sensitivity.MEDIUM,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> bool:
    """
    Check whether a comment merely restates its construct.

    Args:
        comment_text: Raw comment text (normalized here)
        glosses: Phrasings from generate_glosses()
        sensitivity: low / medium / high
        config: Scorer constants

    Returns:
        True if the comment is obvious
    """
    if not glosses:
        return False

    sensitivity = Sensitivity(sensitivity)
    comment = normalize_text(comment_text)
    if len(comment.split()) > config.MAX_COMMENT_TOKENS:
        return False

    comment_tokens = set(_qualifying_tokens(comment, config))
    for raw_gloss in glosses:
        gloss = normalize_text(raw_gloss)
        if not gloss:
            continue
        if _matches_gloss(comment, comment_tokens, gloss, sensitivity, config):
            return True

    return False

"""Lint rules."""

from .redundant_comment import MESSAGE_ID, MESSAGES, RULE_ID, RedundantCommentRule

__all__ = ["MESSAGE_ID", "MESSAGES", "RULE_ID", "RedundantCommentRule"]

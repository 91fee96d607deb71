"""
Analysis Layer

Node index, adjacency resolution, gloss generation, scoring and comment
classification.
"""

from .classification import (
    ClassifiedComment,
    CommentClassification,
    CommentPurpose,
    classify_comment,
    comment_purpose,
    context_handling,
    get_classified_comments,
    has_why_indicator,
    is_documentation_comment,
    is_inline_comment,
    should_skip_by_context,
    should_skip_text,
)
from .glosses import generate_glosses
from .node_index import NodeIndex, build_node_index, get_node_index
from .resolver import LOOKAHEAD_LINES, resolve_adjacent
from .scorer import is_obvious

__all__ = [
    "ClassifiedComment",
    "CommentClassification",
    "CommentPurpose",
    "LOOKAHEAD_LINES",
    "NodeIndex",
    "build_node_index",
    "classify_comment",
    "comment_purpose",
    "context_handling",
    "generate_glosses",
    "get_classified_comments",
    "get_node_index",
    "has_why_indicator",
    "is_documentation_comment",
    "is_inline_comment",
    "is_obvious",
    "resolve_adjacent",
    "should_skip_by_context",
    "should_skip_text",
]

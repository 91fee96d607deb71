"""
Adjacent-construct resolution.

Pairs a comment with the construct it most likely documents using only
source positions. Priority:

1. the line right after the comment (skipping no-op statements)
2. for trailing comments, the comment's own line
3. up to LOOKAHEAD_LINES further lines (blank lines between comment and code)

Returns None when nothing qualifies; that is not an error.
"""

from codegraph_comments.analysis.node_index import NodeIndex
from codegraph_comments.models import ConstructKind, SourceComment, SyntaxConstruct

LOOKAHEAD_LINES = 3


def resolve_adjacent(comment: SourceComment, index: NodeIndex) -> SyntaxConstruct | None:
    next_line = comment.span.end_line + 1

    following = index.at_line(next_line)
    if following:
        for construct in following:
            if construct.kind is not ConstructKind.EMPTY:
                return construct
        return following[0]

    if comment.preceded_by_token:
        same_line = index.at_line(comment.span.start_line)
        if same_line:
            for construct in same_line:
                if construct.span.start_offset > comment.span.end_offset:
                    return construct
            return same_line[0]

    for line in range(next_line + 1, next_line + LOOKAHEAD_LINES + 1):
        construct = index.first_at(line)
        if construct is not None:
            return construct

    return None

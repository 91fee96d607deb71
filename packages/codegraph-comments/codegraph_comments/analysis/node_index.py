"""
Line index over the constructs of one parsed file.

Maps each start line to the constructs starting on it, in pre-order
(parent before children, children in source order). Built lazily on the
first adjacency query and cached per ParsedFile.
"""

from collections.abc import Iterator

from codegraph_comments.cache import CacheRegistry, get_default_caches
from codegraph_comments.models import ParsedFile, SyntaxConstruct
from codegraph_comments.observability import get_logger

logger = get_logger(__name__)


class NodeIndex:
    """Start line → ordered constructs."""

    def __init__(self) -> None:
        self._by_line: dict[int, list[SyntaxConstruct]] = {}
        self._count = 0

    def add(self, construct: SyntaxConstruct) -> None:
        if construct.span is None:
            return
        self._by_line.setdefault(construct.span.start_line, []).append(construct)
        self._count += 1

    def at_line(self, line: int) -> list[SyntaxConstruct]:
        """Constructs starting on line ([] when none)."""
        return list(self._by_line.get(line, ()))

    def first_at(self, line: int) -> SyntaxConstruct | None:
        bucket = self._by_line.get(line)
        return bucket[0] if bucket else None

    def has_line(self, line: int) -> bool:
        return line in self._by_line

    def lines(self) -> Iterator[int]:
        return iter(self._by_line)

    @property
    def construct_count(self) -> int:
        return self._count

    def __contains__(self, line: object) -> bool:
        return line in self._by_line

    def __len__(self) -> int:
        return len(self._by_line)


def build_node_index(root: SyntaxConstruct) -> NodeIndex:
    """
    Index every construct reachable from root exactly once.

    Only `children` is followed. `parent` and span data are never
    traversed, so the back-references cannot cause cycles.
    """
    index = NodeIndex()
    stack = [root]
    while stack:
        construct = stack.pop()
        index.add(construct)
        stack.extend(reversed(construct.children))
    return index


def get_node_index(parsed: ParsedFile, caches: CacheRegistry | None = None) -> NodeIndex:
    """Cached node index for a parsed file (lives as long as the file)."""
    caches = caches or get_default_caches()

    index = caches.node_indexes.get(parsed)
    if index is not None:
        return index

    index = build_node_index(parsed.root)
    caches.node_indexes.set(parsed, index)
    logger.debug(
        "node_index_built",
        file=parsed.file_path,
        lines=len(index),
        constructs=index.construct_count,
    )
    return index

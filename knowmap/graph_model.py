import logging
from enum import Enum

logger = logging.getLogger(__name__)


class NodeCategory(str, Enum):
    DOCUMENT = "document"
    MEMO = "memo"
    COLLECTION = "collection"


class Node:
    """A positioned knowledge entity.

    ``category`` and ``label`` are passed through untouched; the layout only
    ever writes ``x``, ``y``, ``vx`` and ``vy``.

    ``placed`` makes the initial position explicit: ``None`` treats a node at
    exactly (0, 0) as unplaced, ``True`` keeps the current position whatever
    it is, ``False`` always asks for a random starting position.
    """

    def __init__(self, uid, category=NodeCategory.DOCUMENT, label="",
                 x=0.0, y=0.0, vx=0.0, vy=0.0, placed=None):
        self.uid = uid
        self.category = NodeCategory(category)
        self.label = label
        self.x = float(x)
        self.y = float(y)
        self.vx = float(vx)
        self.vy = float(vy)
        self.placed = placed

    def needs_placement(self):
        if self.placed is None:
            return self.x == 0 and self.y == 0
        return not self.placed

    def copy(self):
        return Node(self.uid, self.category, self.label,
                    self.x, self.y, self.vx, self.vy, self.placed)

    def __repr__(self):
        return f"Node({self.uid!r}, {self.category.value}, x={self.x:.2f}, y={self.y:.2f})"


class Edge:
    """Undirected association between two node ids."""

    def __init__(self, uid, source, target):
        self.uid = uid
        self.source = source
        self.target = target

    @property
    def is_self_loop(self):
        return self.source == self.target

    def __repr__(self):
        return f"Edge({self.uid!r}, {self.source!r} -> {self.target!r})"


def index_nodes(nodes):
    """uid -> Node lookup. Later duplicates win, like a plain dict update."""
    return {node.uid: node for node in nodes}


def resolve_edges(nodes, edges):
    """Returns (source_node, target_node) pairs for the edges usable as springs.

    Edges with an endpoint missing from ``nodes`` and self-loops are dropped
    without raising.
    """
    lookup = nodes if isinstance(nodes, dict) else index_nodes(nodes)
    pairs = []
    dropped = 0
    for edge in edges:
        if edge.is_self_loop:
            dropped += 1
            continue
        n1 = lookup.get(edge.source)
        n2 = lookup.get(edge.target)
        if n1 is None or n2 is None:
            dropped += 1
            continue
        pairs.append((n1, n2))

    if dropped:
        logger.debug(f"Dropped {dropped} of {len(edges)} edges (dangling or self-loop)")
    return pairs

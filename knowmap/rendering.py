from knowmap.graph_model import NodeCategory, index_nodes

NODE_RADIUS = 18
LABEL_MAX_CHARS = 20

NODE_COLORS = {
    NodeCategory.DOCUMENT: "#3b82f6",   # blue
    NodeCategory.MEMO: "#eab308",       # yellow
    NodeCategory.COLLECTION: "#a855f7",  # purple
}

LEGEND = [
    (NodeCategory.DOCUMENT, "Documents"),
    (NodeCategory.MEMO, "Memos"),
    (NodeCategory.COLLECTION, "Collections"),
]


def truncate_label(label, max_chars=LABEL_MAX_CHARS):
    if len(label) > max_chars:
        return label[:max_chars - 2] + "..."
    return label


def edge_segments(nodes, edges):
    """(x1, y1, x2, y2) for every edge whose both ends are present."""
    lookup = index_nodes(nodes)
    segments = []
    for e in edges:
        n1 = lookup.get(e.source)
        n2 = lookup.get(e.target)
        if n1 is None or n2 is None:
            continue
        segments.append((n1.x, n1.y, n2.x, n2.y))
    return segments

"""Reading and writing graph snapshots as JSON.

A snapshot looks like::

    {"width": 1000, "height": 600,
     "nodes": [{"id": "p1", "category": "document", "label": "A paper", "x": 0, "y": 0}],
     "edges": [{"id": "e1", "source": "m1", "target": "p1"}]}

``width``/``height`` and node positions are optional.
"""
import json
import logging
import math

from knowmap.graph_model import Edge, Node

logger = logging.getLogger(__name__)


class GraphFormatError(ValueError):
    pass


class GraphSnapshot:
    def __init__(self, nodes, edges, width=None, height=None):
        self.nodes = nodes
        self.edges = edges
        self.width = width
        self.height = height


def parse_graph(data):
    if not isinstance(data, dict):
        raise GraphFormatError("snapshot must be a JSON object")

    nodes = []
    for raw in data.get("nodes", []):
        try:
            nodes.append(Node(
                raw["id"],
                raw.get("category", "document"),
                raw.get("label", ""),
                raw.get("x", 0.0),
                raw.get("y", 0.0),
                placed=raw.get("placed"),
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise GraphFormatError(f"invalid node {raw!r}: {e}") from e

    edges = []
    for raw in data.get("edges", []):
        try:
            source, target = raw["source"], raw["target"]
        except (KeyError, TypeError) as e:
            raise GraphFormatError(f"invalid edge {raw!r}: {e}") from e
        edges.append(Edge(raw.get("id", f"{source}-{target}"), source, target))

    if len({n.uid for n in nodes}) != len(nodes):
        logger.warning("Snapshot contains duplicate node ids; edges bind to the last one")

    return GraphSnapshot(nodes, edges, _canvas_size(data, "width"), _canvas_size(data, "height"))


def _canvas_size(data, key):
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
        raise GraphFormatError(f"{key} must be a positive number, got {value!r}")
    return value


def load_graph(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise GraphFormatError(f"{path}: {e}") from e
    snapshot = parse_graph(data)
    logger.info(f"Loaded {len(snapshot.nodes)} nodes and {len(snapshot.edges)} edges from {path}")
    return snapshot


def dump_graph(nodes, edges, width=None, height=None):
    data = {
        "nodes": [_dump_node(n) for n in nodes],
        "edges": [{"id": e.uid, "source": e.source, "target": e.target} for e in edges],
    }
    if width is not None:
        data["width"] = width
    if height is not None:
        data["height"] = height
    return data


def _dump_node(n):
    raw = {"id": n.uid, "category": n.category.value, "label": n.label,
           "x": round(n.x, 3), "y": round(n.y, 3)}
    if n.placed is not None:
        raw["placed"] = n.placed
    return raw


def save_graph(path, nodes, edges, width=None, height=None):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(dump_graph(nodes, edges, width, height), f, indent=2)

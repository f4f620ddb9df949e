import logging

import networkx as nx

from knowmap.graph_model import Edge, Node, NodeCategory

logger = logging.getLogger(__name__)


def build_graph(documents=(), memos=(), collections=()):
    """Turns store records into unplaced nodes and their edges.

    Records are dicts with at least ``id`` and ``title``. A memo with a
    ``document_id`` is linked to that document; a collection may list
    ``document_ids``. Links to records that were not supplied are still
    emitted; the layout drops them.
    """
    nodes = []
    edges = []

    for doc in documents:
        nodes.append(Node(doc["id"], NodeCategory.DOCUMENT, doc.get("title", "")))

    for memo in memos:
        nodes.append(Node(memo["id"], NodeCategory.MEMO, memo.get("title", "")))
        doc_id = memo.get("document_id")
        if doc_id:
            edges.append(Edge(f"memo-{memo['id']}-document-{doc_id}", memo["id"], doc_id))

    for coll in collections:
        nodes.append(Node(coll["id"], NodeCategory.COLLECTION, coll.get("title", "")))
        for doc_id in coll.get("document_ids") or ():
            edges.append(Edge(f"collection-{coll['id']}-document-{doc_id}", coll["id"], doc_id))

    logger.info(f"Built graph with {len(nodes)} nodes and {len(edges)} edges.")
    return nodes, edges


def to_networkx(nodes, edges):
    """Undirected networkx view of the graph; positions go in ``x``/``y`` attributes."""
    graph = nx.Graph()
    for n in nodes:
        graph.add_node(n.uid, category=n.category.value, label=n.label, x=n.x, y=n.y)
    for e in edges:
        if e.source in graph and e.target in graph:
            graph.add_edge(e.source, e.target, id=e.uid)
    return graph


def from_networkx(nx_graph):
    """Nodes and edges from any networkx graph.

    Missing ``category`` defaults to document, missing ``label`` to the node
    key. Directed graphs are accepted; direction is irrelevant to the layout.
    """
    nodes = []
    edges = []
    for uid, data in nx_graph.nodes(data=True):
        nodes.append(Node(
            uid,
            data.get("category", NodeCategory.DOCUMENT),
            data.get("label", str(uid)),
            data.get("x", 0.0),
            data.get("y", 0.0),
        ))
    for u, v, data in nx_graph.edges(data=True):
        edges.append(Edge(data.get("id", f"{u}-{v}"), u, v))
    return nodes, edges

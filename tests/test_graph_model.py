#!/usr/bin/env python3
"""
Tests for the node/edge model and the Qt-free rendering helpers.
"""
import unittest

from knowmap.graph_model import Edge, Node, NodeCategory, resolve_edges
from knowmap.rendering import NODE_COLORS, NODE_RADIUS, edge_segments, truncate_label


class TestNode(unittest.TestCase):

    def test_category_from_string(self):
        node = Node("p1", "memo", "A memo")
        self.assertIs(node.category, NodeCategory.MEMO)

    def test_unknown_category_rejected(self):
        with self.assertRaises(ValueError):
            Node("p1", "paper")

    def test_origin_means_unplaced(self):
        self.assertTrue(Node("a").needs_placement())
        self.assertFalse(Node("a", x=0, y=1).needs_placement())
        self.assertFalse(Node("a", placed=True).needs_placement())
        self.assertTrue(Node("a", x=5, y=5, placed=False).needs_placement())

    def test_copy_is_independent(self):
        node = Node("a", NodeCategory.COLLECTION, "Coll", 1, 2, 3, 4, placed=True)
        clone = node.copy()
        clone.x = 99
        self.assertEqual(node.x, 1.0)
        self.assertEqual((clone.uid, clone.category, clone.label, clone.vy, clone.placed),
                         ("a", NodeCategory.COLLECTION, "Coll", 4.0, True))


class TestResolveEdges(unittest.TestCase):

    def test_drops_dangling_and_self_loops(self):
        a, b, c = Node("a"), Node("b"), Node("c")
        edges = [
            Edge("ab", "a", "b"),
            Edge("a?", "a", "missing"),
            Edge("?c", "ghost", "c"),
            Edge("aa", "a", "a"),
            Edge("cb", "c", "b"),
        ]
        pairs = resolve_edges([a, b, c], edges)
        self.assertEqual(pairs, [(a, b), (c, b)])

    def test_accepts_lookup_dict(self):
        a, b = Node("a"), Node("b")
        pairs = resolve_edges({"a": a, "b": b}, [Edge("ab", "b", "a")])
        self.assertEqual(pairs, [(b, a)])

    def test_no_edges(self):
        self.assertEqual(resolve_edges([Node("a")], []), [])


class TestRendering(unittest.TestCase):

    def test_reference_constants(self):
        self.assertEqual(NODE_RADIUS, 18)
        self.assertEqual(set(NODE_COLORS), set(NodeCategory))

    def test_truncate_label(self):
        self.assertEqual(truncate_label("short"), "short")
        self.assertEqual(truncate_label("x" * 20), "x" * 20)
        self.assertEqual(truncate_label("abcdefghijklmnopqrstu"), "abcdefghijklmnopqr...")

    def test_edge_segments_skip_dangling(self):
        nodes = [Node("a", x=1, y=2), Node("b", x=3, y=4)]
        edges = [Edge("ab", "a", "b"), Edge("ax", "a", "x")]
        self.assertEqual(edge_segments(nodes, edges), [(1.0, 2.0, 3.0, 4.0)])


if __name__ == '__main__':
    unittest.main()

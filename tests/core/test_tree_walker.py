"""Unit tests for TreeWalker."""

import pytest

from auto_translate.core import TextNode, TreeWalker


@pytest.fixture
def walker():
    return TreeWalker()


@pytest.fixture
def tree():
    """root -> (a -> (a1, a2), b -> (b1))"""
    a = TextNode("a", [TextNode("a1"), TextNode("a2")])
    b = TextNode("b", [TextNode("b1")])
    return TextNode("root", [a, b])


class _ExplodingNode(TextNode):
    """Node whose native object has been destroyed."""

    def children(self):
        raise RuntimeError("Internal C++ object already deleted.")


class TestTreeWalkerOrder:
    """Tests for traversal order and coverage."""

    def test_visits_in_preorder(self, walker, tree):
        """Parents are visited before children, children in adapter order."""
        visited = []
        walker.walk(tree, lambda node: visited.append(node.get_text()))
        assert visited == ["root", "a", "a1", "a2", "b", "b1"]

    def test_returns_visit_count(self, walker, tree):
        assert walker.walk(tree, lambda node: None) == 6

    def test_single_node_tree(self, walker):
        visited = []
        count = walker.walk(TextNode("only"), lambda node: visited.append(node.get_text()))
        assert visited == ["only"]
        assert count == 1

    def test_shared_child_visited_once(self, walker):
        """A node reachable through two parents is visited exactly once."""
        shared = TextNode("shared")
        root = TextNode("root", [TextNode("x", [shared]), TextNode("y", [shared])])

        visited = []
        walker.walk(root, lambda node: visited.append(node.get_text()))
        assert visited.count("shared") == 1

    def test_cycle_does_not_loop_forever(self, walker):
        root = TextNode("root")
        child = root.add_child(TextNode("child"))
        child.add_child(root)

        visited = []
        walker.walk(root, lambda node: visited.append(node.get_text()))
        assert visited == ["root", "child"]


class TestTreeWalkerMutation:
    """Tests for tolerance to tree mutation during a walk."""

    def test_child_removed_mid_walk_is_not_visited(self, walker):
        """Removing a later sibling while visiting does not crash and skips it."""
        b = TextNode("b", [TextNode("b1")])
        a = TextNode("a")
        root = TextNode("root", [a, b])

        visited = []

        def visit(node):
            visited.append(node.get_text())
            if node is a:
                root.remove_child(b)

        walker.walk(root, visit)
        assert visited == ["root", "a"]

    def test_child_added_mid_walk_does_not_crash(self, walker):
        a = TextNode("a")
        root = TextNode("root", [a])

        visited = []

        def visit(node):
            visited.append(node.get_text())
            if node is a:
                root.add_child(TextNode("late"))

        walker.walk(root, visit)
        assert visited[:2] == ["root", "a"]

    def test_walk_does_not_change_structure(self, walker, tree):
        before = [c.get_text() for c in tree.children()]
        walker.walk(tree, lambda node: None)
        assert [c.get_text() for c in tree.children()] == before

    def test_destroyed_node_subtree_is_skipped(self, walker):
        """RuntimeError from children() means the node and its subtree are gone."""
        root = TextNode("root", [_ExplodingNode("dead"), TextNode("alive")])

        visited = []
        walker.walk(root, lambda node: visited.append(node.get_text()))
        assert visited == ["root", "alive"]

    def test_removed_node_raises_until_readded(self):
        root = TextNode("root")
        child = root.add_child(TextNode("child"))
        root.remove_child(child)

        with pytest.raises(RuntimeError):
            child.get_text()

        root.add_child(child)
        assert child.get_text() == "child"


class _WrapperNode:
    """Adapter that builds a new wrapper object around each child on every call."""

    def __init__(self, element):
        self.element = element

    def get_text(self):
        return self.element.get_text()

    def set_text(self, text):
        self.element.set_text(text)

    def children(self):
        return [_WrapperNode(child) for child in self.element.children()]


class TestTreeWalkerAdapters:
    """Tests for adapters that do not keep stable child identities."""

    def test_fresh_wrappers_are_all_visited(self, walker, tree):
        visited = []
        count = walker.walk(_WrapperNode(tree), lambda node: visited.append(node.get_text()))

        assert visited == ["root", "a", "a1", "a2", "b", "b1"]
        assert count == 6

    def test_children_enumerated_once_per_node(self, walker, tree):
        calls = []

        class CountingWrapper(_WrapperNode):
            def children(self):
                calls.append(self.get_text())
                return [CountingWrapper(child) for child in self.element.children()]

        walker.walk(CountingWrapper(tree), lambda node: None)
        assert sorted(calls) == sorted(["root", "a", "a1", "a2", "b", "b1"])

    def test_wide_tree_is_fully_visited(self, walker):
        root = TextNode("root", [TextNode(f"item {i}") for i in range(500)])
        assert walker.walk(_WrapperNode(root), lambda node: None) == 501

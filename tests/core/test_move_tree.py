"""Tests for MoveTreeNode / MoveTree."""

from chesstree.core.move_tree import MoveTree, MoveTreeNode, build_ray


def _sample_tree() -> MoveTree:
    """Root (0,0) with a two-node chain and a single leaf."""
    tree = MoveTree()
    chain = tree.root.add_child((1, 0))
    chain.add_child((2, 0))
    tree.root.add_child((0, 1))
    return tree


class TestNode:
    def test_add_child_accepts_square(self) -> None:
        node = MoveTreeNode((0, 0))
        child = node.add_child((1, 1))
        assert isinstance(child, MoveTreeNode)
        assert node.children == [child]

    def test_add_child_accepts_node(self) -> None:
        node = MoveTreeNode((0, 0))
        leaf = MoveTreeNode((2, 2))
        assert node.add_child(leaf) is leaf

    def test_remove_child_returns_node(self) -> None:
        node = MoveTreeNode((0, 0))
        child = node.add_child((1, 1))
        assert node.remove_child((1, 1)) is child
        assert node.children == []

    def test_remove_missing_child(self) -> None:
        node = MoveTreeNode((0, 0))
        node.add_child((1, 1))
        assert node.remove_child((5, 5)) is None
        assert len(node.children) == 1

    def test_equality_by_square(self) -> None:
        a = MoveTreeNode((3, 3))
        b = MoveTreeNode((3, 3))
        b.add_child((4, 4))
        assert a == b
        assert a != MoveTreeNode((3, 4))


class TestTraversal:
    def test_level_order(self) -> None:
        tree = _sample_tree()
        assert [n.square for n in tree.each()] == [(0, 0), (1, 0), (0, 1), (2, 0)]

    def test_iter_matches_each(self) -> None:
        tree = _sample_tree()
        assert [n.square for n in tree] == [n.square for n in tree.each()]

    def test_to_list_excludes_root(self) -> None:
        assert _sample_tree().to_list() == [(1, 0), (0, 1), (2, 0)]

    def test_empty_tree(self) -> None:
        assert MoveTree((4, 4)).to_list() == []


class TestEdits:
    def test_clone_shares_no_nodes(self) -> None:
        tree = _sample_tree()
        copy = tree.clone()
        assert copy.to_list() == tree.to_list()
        original_ids = {id(n) for n in tree.each()}
        assert original_ids.isdisjoint(id(n) for n in copy.each())

    def test_clone_is_independent(self) -> None:
        tree = _sample_tree()
        copy = tree.clone()
        copy.translate((3, 3))
        copy.trim_branch((4, 3))
        assert tree.to_list() == [(1, 0), (0, 1), (2, 0)]

    def test_trim_branch_removes_descendants(self) -> None:
        tree = _sample_tree()
        assert tree.trim_branch((1, 0)) == (1, 0)
        assert tree.to_list() == [(0, 1)]

    def test_trim_branch_by_node(self) -> None:
        tree = _sample_tree()
        leaf = tree.root.children[1]
        assert tree.trim_branch(leaf) == (0, 1)
        assert tree.to_list() == [(1, 0), (2, 0)]

    def test_trim_branch_missing(self) -> None:
        tree = _sample_tree()
        assert tree.trim_branch((7, 7)) is None
        assert len(tree.to_list()) == 3

    def test_translate_in_place(self) -> None:
        tree = _sample_tree()
        assert tree.translate((2, 3)) is tree
        assert tree.root.square == (2, 3)
        assert tree.to_list() == [(3, 3), (2, 4), (4, 3)]


class TestBuildRay:
    def test_ray_is_a_chain(self) -> None:
        head = build_ray((1, -1))
        squares = []
        node: MoveTreeNode | None = head
        while node is not None:
            squares.append(node.square)
            assert len(node.children) <= 1
            node = node.children[0] if node.children else None
        assert squares == [(i, -i) for i in range(1, 8)]

    def test_custom_length(self) -> None:
        tree = MoveTree()
        tree.root.add_child(build_ray((0, 1), length=3))
        assert tree.to_list() == [(0, 1), (0, 2), (0, 3)]

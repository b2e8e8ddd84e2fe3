"""Move trees: the geometric shape of a piece's reachable squares.

A tree is rooted at the piece's own square.  Each child of a node is a
square reachable *if the parent square is empty*, so a sliding piece is
a set of chains (one per ray) and a leaping piece is a flat fan of leaves.

Templates hold relative offsets; :meth:`MoveTree.translate` turns a
cloned template into absolute squares for one piece.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

from chesstree.core.types import Square


class MoveTreeNode:
    """One square in a move tree plus the squares that continue past it."""

    __slots__ = ("square", "children")

    def __init__(self, square: Square) -> None:
        self.square: Square = square
        self.children: list[MoveTreeNode] = []

    def add_child(self, child: MoveTreeNode | Square) -> MoveTreeNode:
        """Append *child* (a node or a bare square) and return the node."""
        node = child if isinstance(child, MoveTreeNode) else MoveTreeNode(child)
        self.children.append(node)
        return node

    def remove_child(self, child: MoveTreeNode | Square) -> MoveTreeNode | None:
        """Remove the first child matching *child* by square."""
        square = child.square if isinstance(child, MoveTreeNode) else child
        for idx, node in enumerate(self.children):
            if node.square == square:
                return self.children.pop(idx)
        return None

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MoveTreeNode):
            return NotImplemented
        return self.square == other.square

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"MoveTreeNode({self.square}, children={len(self.children)})"


class MoveTree:
    """A rooted :class:`MoveTreeNode` tree with level-order helpers."""

    __slots__ = ("root",)

    def __init__(self, root: MoveTreeNode | Square = (0, 0)) -> None:
        self.root = root if isinstance(root, MoveTreeNode) else MoveTreeNode(root)

    # ── Traversal ────────────────────────────────────────────────────────

    def each(self) -> Iterator[MoveTreeNode]:
        """Level-order (breadth-first) walk, root first."""
        queue: deque[MoveTreeNode] = deque([self.root])
        while queue:
            node = queue.popleft()
            yield node
            queue.extend(node.children)

    __iter__ = each

    def to_list(self) -> list[Square]:
        """Squares of every non-root node in level order.

        The root is the piece's own square; staying put is not a move.
        """
        return [node.square for node in self.each()][1:]

    # ── Structural edits ─────────────────────────────────────────────────

    def clone(self) -> MoveTree:
        """Independent deep copy; no node is shared with ``self``."""
        root = MoveTreeNode(self.root.square)
        stack = [(self.root, root)]
        while stack:
            source, target = stack.pop()
            for child in source.children:
                stack.append((child, target.add_child(child.square)))
        return MoveTree(root)

    def trim_branch(self, target: MoveTreeNode | Square) -> Square | None:
        """Cut the first node matching *target* and all of its descendants.

        Returns the removed square, or ``None`` when nothing matched.
        """
        square = target.square if isinstance(target, MoveTreeNode) else target
        for node in self.each():
            if node.remove_child(square) is not None:
                return square
        return None

    def translate(self, origin: Square) -> MoveTree:
        """Shift every node by *origin* in place and return ``self``."""
        row, col = origin
        for node in self.each():
            dr, dc = node.square
            node.square = (row + dr, col + dc)
        return self

    def __repr__(self) -> str:
        return f"MoveTree(root={self.root.square}, squares={self.to_list()})"


def build_ray(direction: Square, length: int = 7) -> MoveTreeNode:
    """Chain of *length* nodes stepping along *direction* from the origin."""
    dr, dc = direction
    head = MoveTreeNode((dr, dc))
    node = head
    for step in range(2, length + 1):
        node = node.add_child((dr * step, dc * step))
    return head

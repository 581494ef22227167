"""Comment tree data model and traversal."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional


ROOT_INDEX = 0
ROOT_DEPTH = -1

Predicate = Callable[["CommentNode"], Any]


@dataclass
class CommentNode:
    index: int
    depth: int
    item: Any = None
    parent: Optional[int] = None
    children: list[int] = field(default_factory=list)
    descendant_count: int = 0
    is_open: bool = True

    @property
    def is_root(self) -> bool:
        return self.index == ROOT_INDEX

    @property
    def has_toggle(self) -> bool:
        return self.descendant_count > 0


@dataclass
class CommentTree:
    """Arena of comment nodes; node 0 is the synthetic root."""

    nodes: list[CommentNode] = field(default_factory=lambda: [CommentNode(index=ROOT_INDEX, depth=ROOT_DEPTH)])

    def __len__(self) -> int:
        return len(self.nodes) - 1

    @property
    def root(self) -> CommentNode:
        return self.nodes[ROOT_INDEX]

    def node(self, index: int) -> CommentNode:
        if index < 0 or index >= len(self.nodes):
            raise IndexError(f"No comment node with index {index}")
        return self.nodes[index]

    def add_node(self, parent: CommentNode, depth: int, item: Any) -> CommentNode:
        node = CommentNode(index=len(self.nodes), depth=depth, item=item, parent=parent.index)
        self.nodes.append(node)
        parent.children.append(node.index)
        return node

    def top_level(self) -> list[CommentNode]:
        return [self.nodes[index] for index in self.root.children]

    def visit_children(self, index: int, predicate: Predicate) -> Optional[CommentNode]:
        """Walk the strict descendants of ``index`` in pre-order.

        Returns the first node for which ``predicate`` is truthy and stops there,
        or ``None`` when no descendant matches. Exceptions raised by the
        predicate propagate to the caller.
        """
        for node in self.iter_preorder(index):
            if predicate(node):
                return node
        return None

    def visit(self, index: int, predicate: Predicate) -> Optional[CommentNode]:
        """Like :meth:`visit_children`, but test the node itself first."""
        node = self.node(index)
        if predicate(node):
            return node
        return self.visit_children(index, predicate)

    def iter_preorder(self, index: int, include_self: bool = False) -> Iterator[CommentNode]:
        start = self.node(index)
        if include_self:
            yield start
        stack = list(reversed(start.children))
        while stack:
            node = self.nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.children))

    def subtree_indices(self, index: int) -> list[int]:
        return [node.index for node in self.iter_preorder(index, include_self=True)]

    def ancestors(self, index: int) -> list[CommentNode]:
        """Return ancestors from the nearest parent up to, but excluding, the root."""
        chain: list[CommentNode] = []
        parent = self.node(index).parent
        while parent is not None and parent != ROOT_INDEX:
            node = self.nodes[parent]
            chain.append(node)
            parent = node.parent
        return chain

    def top_level_of(self, index: int) -> Optional[CommentNode]:
        for subtree in self.top_level():
            if self.visit(subtree.index, lambda lookup: lookup.index == index):
                return subtree
        return None

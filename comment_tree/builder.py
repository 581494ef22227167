"""Rebuild a comment tree from a pre-order list of (depth, item) pairs."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from comment_tree.tree import CommentNode, CommentTree


LOGGER = logging.getLogger(__name__)

Entry = tuple[int, Any]


class MalformedSequenceError(ValueError):
    """Raised when an entry depth cannot sit below the synthetic root."""


def validate_entries(entries: Sequence[Entry]) -> None:
    for position, (depth, _) in enumerate(entries):
        if isinstance(depth, bool) or not isinstance(depth, int):
            raise MalformedSequenceError(
                f"Entry {position}: depth must be an integer, got {depth!r}"
            )
        if depth < 0:
            raise MalformedSequenceError(f"Entry {position}: depth must be non-negative, got {depth}")


def build_comment_tree(entries: Iterable[Entry], validate: bool = True) -> CommentTree:
    """Build a comment tree using a stack of open ancestors.

    Each entry becomes a child of the nearest preceding entry with a strictly
    smaller depth, or of the root when there is none. Descendant counts are
    bumped on every open ancestor as entries arrive, so they are exact after a
    single pass.
    """
    entries = list(entries)
    if validate:
        validate_entries(entries)

    tree = CommentTree()
    top = tree.root
    stack: list[CommentNode] = [top]

    for depth, item in entries:
        while not top.depth < depth:
            stack.pop()
            top = stack[-1]

        node = tree.add_node(top, depth, item)

        for ancestor in stack:
            ancestor.descendant_count += 1

        if node.depth > top.depth:
            stack.append(node)
            top = node

    LOGGER.debug(
        "Built comment tree: %d nodes, %d top-level threads",
        len(tree),
        len(tree.root.children),
    )
    return tree

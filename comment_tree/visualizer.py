"""Text presentation layer and serialization for comment trees."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any, Optional

from comment_tree.session import HighlightTier
from comment_tree.tree import ROOT_INDEX, CommentNode, CommentTree


HIGHLIGHT_MARKS = {
    HighlightTier.NONE: " ",
    HighlightTier.CONTEXT: "*",
    HighlightTier.SELECTED: ">",
}


@dataclass
class TextDisplay:
    """Records per-node visual state and renders it as an ASCII tree."""

    visible: dict[int, bool] = field(default_factory=dict)
    highlights: dict[int, HighlightTier] = field(default_factory=dict)
    labels: dict[int, str] = field(default_factory=dict)

    def set_visible(self, node: CommentNode, visible: bool) -> None:
        self.visible[node.index] = visible

    def set_highlight(self, node: CommentNode, tier: HighlightTier) -> None:
        self.highlights[node.index] = tier

    def set_label(self, node: CommentNode, text: str) -> None:
        self.labels[node.index] = text

    def is_visible(self, index: int) -> bool:
        return self.visible.get(index, True)

    def highlight_of(self, index: int) -> HighlightTier:
        return self.highlights.get(index, HighlightTier.NONE)

    def render(self, tree: CommentTree, preview_chars: int = 60) -> str:
        lines: list[str] = []

        def render_node(node: CommentNode, prefix: str, is_last: bool) -> None:
            if not self.is_visible(node.index):
                return
            connector = "`-- " if is_last else "|-- "
            mark = HIGHLIGHT_MARKS[self.highlight_of(node.index)]
            label = self.labels.get(node.index)
            suffix = f" | {label}" if label else ""
            text = " ".join(str(node.item).split())[:preview_chars]
            lines.append(f"{mark} {prefix}{connector}#{node.index} {text}{suffix}")

            children = [tree.node(index) for index in node.children if self.is_visible(index)]
            child_prefix = prefix + ("    " if is_last else "|   ")
            for position, child in enumerate(children):
                render_node(child, child_prefix, position == len(children) - 1)

        top_level = [node for node in tree.top_level() if self.is_visible(node.index)]
        for position, node in enumerate(top_level):
            render_node(node, "", position == len(top_level) - 1)
        return "\n".join(lines)


def _node_to_dict(tree: CommentTree, node: CommentNode, display: Optional[TextDisplay]) -> dict[str, Any]:
    data: dict[str, Any] = {
        "index": node.index,
        "depth": node.depth,
        "item": node.item,
        "is_open": node.is_open,
        "descendant_count": node.descendant_count,
        "children": [_node_to_dict(tree, tree.node(index), display) for index in node.children],
    }
    if display is not None and not node.is_root:
        data["visible"] = display.is_visible(node.index)
        data["highlight"] = display.highlight_of(node.index).value
    return data


def comment_tree_to_dict(tree: CommentTree, display: Optional[TextDisplay] = None) -> dict[str, Any]:
    """Serialize a comment tree, with display state when a display is given."""
    return {
        "comment_count": len(tree),
        "thread_count": len(tree.root.children),
        "tree": _node_to_dict(tree, tree.node(ROOT_INDEX), display),
    }


def export_comment_tree_json(
    tree: CommentTree,
    output_path: Path,
    display: Optional[TextDisplay] = None,
) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(comment_tree_to_dict(tree, display), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )

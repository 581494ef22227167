"""Interactive open/closed and highlight state layered on a comment tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Callable, Iterable, Optional, Protocol, runtime_checkable

from comment_tree.builder import Entry, build_comment_tree
from comment_tree.tree import ROOT_INDEX, CommentNode, CommentTree


LOGGER = logging.getLogger(__name__)


class HighlightTier(Enum):
    NONE = "none"
    CONTEXT = "context"
    SELECTED = "selected"


class MissingDisplayError(RuntimeError):
    """Raised when a state change has no display to synchronize."""


@runtime_checkable
class DisplayAdapter(Protocol):
    """Presentation layer notified of every visible state change."""

    def set_visible(self, node: CommentNode, visible: bool) -> None:
        """Show or hide the node's visual element."""
        ...

    def set_highlight(self, node: CommentNode, tier: HighlightTier) -> None:
        """Apply a highlight tier to the node's visual element."""
        ...

    def set_label(self, node: CommentNode, text: str) -> None:
        """Refresh the node's toggle label."""
        ...


def toggle_label(node: CommentNode) -> str:
    prefix = "collapse" if node.is_open else "expand"
    return f"{prefix} [{node.descendant_count}]"


@dataclass
class ThreadSession:
    """One interactive view over a single comment tree."""

    tree: CommentTree
    display: Optional[DisplayAdapter] = None
    collapse_on_start: bool = True
    selected: Optional[int] = None

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[Entry],
        display: Optional[DisplayAdapter] = None,
        collapse_on_start: bool = True,
    ) -> "ThreadSession":
        return cls(
            tree=build_comment_tree(entries),
            display=display,
            collapse_on_start=collapse_on_start,
        )

    def _require_display(self) -> DisplayAdapter:
        if self.display is None:
            raise MissingDisplayError("No display attached to this session.")
        return self.display

    def _refresh_label(self, display: DisplayAdapter, node: CommentNode) -> None:
        if node.has_toggle and not node.is_root:
            display.set_label(node, toggle_label(node))

    def activate(self) -> None:
        """Attach toggle labels and apply the start-up collapse policy."""
        display = self._require_display()
        for node in self.tree.iter_preorder(ROOT_INDEX):
            self._refresh_label(display, node)
        if self.collapse_on_start:
            self.collapse_all()
        LOGGER.info(
            "Session activated: %d comments, %d threads, collapsed=%s",
            len(self.tree),
            len(self.tree.root.children),
            self.collapse_on_start,
        )

    def toggle(self, index: int, new_state: Optional[bool] = None) -> bool:
        """Flip or set the open state of a node and broadcast it to its subtree.

        Descendants take the new state regardless of what they held before.
        Returns the state that was applied.
        """
        display = self._require_display()
        node = self.tree.node(index)
        if new_state is None:
            new_state = not node.is_open
        node.is_open = new_state

        def apply(descendant: CommentNode) -> bool:
            display.set_visible(descendant, new_state)
            descendant.is_open = new_state
            self._refresh_label(display, descendant)
            return False

        self.tree.visit_children(index, apply)
        self._refresh_label(display, node)
        LOGGER.debug("Toggled node %d -> open=%s (%d descendants)", index, new_state, node.descendant_count)
        return new_state

    def expand_all(self) -> None:
        self.toggle(ROOT_INDEX, True)

    def collapse_all(self) -> None:
        for index in list(self.tree.root.children):
            self.toggle(index, False)

    def select(self, index: int) -> None:
        """Highlight a node and the top-level thread that contains it."""
        display = self._require_display()
        node = self.tree.node(index)
        if node.is_root:
            raise ValueError("The root node cannot be selected.")

        def clear(other: CommentNode) -> bool:
            display.set_highlight(other, HighlightTier.NONE)
            return False

        self.tree.visit_children(ROOT_INDEX, clear)

        subtree = self.tree.top_level_of(index)
        if subtree is not None:

            def paint(other: CommentNode) -> bool:
                display.set_highlight(other, HighlightTier.CONTEXT)
                return False

            self.tree.visit(subtree.index, paint)

        display.set_highlight(node, HighlightTier.SELECTED)
        self.selected = index

    def activate_item(self, index: int) -> bool:
        """Select a node and toggle it, as a double click does."""
        self.select(index)
        return self.toggle(index)


@dataclass
class PagedDiscussion:
    """Independent sessions for successive pages of one discussion."""

    display_factory: Optional[Callable[[], DisplayAdapter]] = None
    collapse_on_start: bool = True
    pages: list[ThreadSession] = field(default_factory=list)

    def add_page(self, entries: Iterable[Entry]) -> ThreadSession:
        display = self.display_factory() if self.display_factory is not None else None
        session = ThreadSession.from_entries(
            entries,
            display=display,
            collapse_on_start=self.collapse_on_start,
        )
        self.pages.append(session)
        LOGGER.info("Added page %d with %d comments", len(self.pages), len(session.tree))
        return session

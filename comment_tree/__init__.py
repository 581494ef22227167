"""Comment thread reconstruction and interactive state."""

from comment_tree.builder import MalformedSequenceError, build_comment_tree, validate_entries
from comment_tree.config import ViewerConfig, load_viewer_config
from comment_tree.extractor import load_entries_json, parse_entries_json, parse_indented_thread, read_thread_file
from comment_tree.session import (
    DisplayAdapter,
    HighlightTier,
    MissingDisplayError,
    PagedDiscussion,
    ThreadSession,
    toggle_label,
)
from comment_tree.tree import ROOT_DEPTH, ROOT_INDEX, CommentNode, CommentTree
from comment_tree.visualizer import TextDisplay, comment_tree_to_dict, export_comment_tree_json

__all__ = [
    "CommentNode",
    "CommentTree",
    "DisplayAdapter",
    "HighlightTier",
    "MalformedSequenceError",
    "MissingDisplayError",
    "PagedDiscussion",
    "ROOT_DEPTH",
    "ROOT_INDEX",
    "TextDisplay",
    "ThreadSession",
    "ViewerConfig",
    "build_comment_tree",
    "comment_tree_to_dict",
    "export_comment_tree_json",
    "load_entries_json",
    "load_viewer_config",
    "parse_entries_json",
    "parse_indented_thread",
    "read_thread_file",
    "toggle_label",
    "validate_entries",
]

"""Viewer configuration loaded from the environment."""

from __future__ import annotations

from dataclasses import dataclass
import os

from comment_tree.env import load_env


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class ViewerConfig:
    indent_width: int
    collapse_on_start: bool
    log_level: str


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if raw in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def load_viewer_config(load_dotenv: bool = True) -> ViewerConfig:
    if load_dotenv:
        load_env()

    log_level = os.getenv("COMMENT_TREE_LOG_LEVEL", "INFO").strip().upper()
    return ViewerConfig(
        indent_width=max(1, _get_int("COMMENT_TREE_INDENT_WIDTH", 4)),
        collapse_on_start=_get_bool("COMMENT_TREE_COLLAPSE_ON_START", True),
        log_level=log_level if log_level in LOG_LEVELS else "INFO",
    )

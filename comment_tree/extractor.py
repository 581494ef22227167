"""Entry sources that turn thread files into pre-order (depth, item) lists."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from comment_tree.builder import Entry


def _leading_width(line: str, indent_width: int) -> int:
    expanded = line.expandtabs(indent_width)
    return len(expanded) - len(expanded.lstrip(" "))


def parse_indented_thread(text: str, indent_width: int = 4) -> list[tuple[int, str]]:
    """Derive each comment's depth from its indentation.

    Depth is the leading width divided by ``indent_width``, so a comment
    indented by a partial step stays at the shallower level. Blank lines are
    skipped.
    """
    if indent_width < 1:
        raise ValueError(f"indent_width must be positive, got {indent_width}")

    entries: list[tuple[int, str]] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        entries.append((_leading_width(line, indent_width) // indent_width, stripped))
    return entries


def _coerce_entry(position: int, raw: Any) -> Entry:
    if isinstance(raw, dict) and "depth" in raw:
        return raw["depth"], raw.get("item")
    if isinstance(raw, list) and len(raw) == 2:
        return raw[0], raw[1]
    raise ValueError(f"Entry {position} must be {{'depth', 'item'}} or [depth, item], got {raw!r}")


def parse_entries_json(data: Any) -> list[Entry]:
    if not isinstance(data, list):
        raise ValueError("Thread JSON must be a list of entries.")
    return [_coerce_entry(position, raw) for position, raw in enumerate(data)]


def load_entries_json(path: Path) -> list[Entry]:
    return parse_entries_json(json.loads(path.read_text(encoding="utf-8")))


def read_thread_file(path: Path, indent_width: int = 4) -> list[Entry]:
    """Read entries from a ``.json`` entry list or an indented text thread."""
    if path.suffix.lower() == ".json":
        return load_entries_json(path)
    return parse_indented_thread(path.read_text(encoding="utf-8"), indent_width=indent_width)

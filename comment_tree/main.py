"""CLI entrypoint for browsing a comment thread file."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from comment_tree.builder import MalformedSequenceError, build_comment_tree
from comment_tree.config import LOG_LEVELS, ViewerConfig, load_viewer_config
from comment_tree.extractor import read_thread_file
from comment_tree.session import ThreadSession
from comment_tree.visualizer import TextDisplay, export_comment_tree_json


LOGGER = logging.getLogger(__name__)


def _build_arg_parser(config: ViewerConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rebuild and browse a flat comment thread.")
    parser.add_argument("thread_file", type=Path, help="Indented text thread or JSON entry list.")
    parser.add_argument(
        "--indent-width",
        type=int,
        default=config.indent_width,
        help="Spaces per nesting level in text threads.",
    )
    parser.add_argument("--no-collapse", action="store_true", help="Keep every thread open on start.")
    parser.add_argument("--toggle", type=int, action="append", default=[], metavar="INDEX", help="Toggle a node.")
    parser.add_argument("--expand-all", action="store_true", help="Expand every thread after toggles.")
    parser.add_argument("--select", type=int, default=None, metavar="INDEX", help="Highlight a node.")
    parser.add_argument("--output", type=Path, default=None, help="Export the tree and its state as JSON.")
    parser.add_argument(
        "--log-level",
        default=config.log_level,
        choices=list(LOG_LEVELS),
        help="Logging verbosity.",
    )
    return parser


def _configure_logging(level: str) -> None:
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
        force=True,
    )


def run_cli(argv: list[str] | None = None) -> int:
    config = load_viewer_config(load_dotenv=True)
    parser = _build_arg_parser(config)
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        entries = read_thread_file(args.thread_file, indent_width=args.indent_width)
    except OSError as exc:
        print(f"Failed to read thread file: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Malformed thread file: {exc}", file=sys.stderr)
        return 2

    try:
        tree = build_comment_tree(entries)
    except MalformedSequenceError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    LOGGER.info("Loaded %d comments from %s", len(tree), args.thread_file)

    display = TextDisplay()
    session = ThreadSession(
        tree=tree,
        display=display,
        collapse_on_start=config.collapse_on_start and not args.no_collapse,
    )
    session.activate()

    try:
        for index in args.toggle:
            session.toggle(index)
        if args.expand_all:
            session.expand_all()
        if args.select is not None:
            session.select(args.select)
    except (IndexError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 3

    print(f"Comment thread: {args.thread_file.name} ({len(tree)} comments, {len(tree.root.children)} threads)")
    print("=" * 60)
    rendered = display.render(tree)
    if rendered:
        print(rendered)

    if args.output is not None:
        try:
            export_comment_tree_json(tree, args.output, display=display)
        except OSError as exc:
            print(f"Failed to write JSON output: {exc}", file=sys.stderr)
            return 1
        print(f"JSON exported to: {args.output}")
    return 0


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()

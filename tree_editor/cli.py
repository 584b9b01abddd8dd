"""
cli.py

Command-line front end for the tree editor.

Each command opens the session from the state file, applies at most one
action, saves, and prints the result:

  python -m tree_editor.cli show
  python -m tree_editor.cli add n0
  python -m tree_editor.cli delete n1
  python -m tree_editor.cli render out/tree.html
  python -m tree_editor.cli shell
"""

from __future__ import annotations

import argparse
import json
import logging
import shlex
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from renderers.html_tree import HtmlTreeRenderer

from .config import EditorConfig, check_max_depth
from .model import iter_preorder, node_depth
from .persistence import JsonFileStore, TreeRepository
from .session import EditorSession, RenderPayload

SHELL_HELP = "Commands: add <id> | delete <id> | show | render <path> | reset | quit"


def max_depth_arg(raw: str) -> int:
    try:
        return check_max_depth(int(raw))
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tree-editor",
        description="Build and edit a rooted tree; render it as a positioned HTML canvas.",
    )
    parser.add_argument("--state", help="Path to the saved tree JSON (default: $TREE_EDITOR_STATE_PATH)")
    parser.add_argument("--max-depth", type=max_depth_arg, help="Deepest allowed node, root = 1")
    parser.add_argument("--viewport-width", type=float, help="Minimum canvas width in pixels")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Print the tree outline")
    show.add_argument("--json", action="store_true", help="Print the full render payload as JSON")

    add = sub.add_parser("add", help="Add a child under PARENT_ID")
    add.add_argument("parent_id")

    delete = sub.add_parser("delete", help="Remove NODE_ID and its whole subtree")
    delete.add_argument("node_id")

    render = sub.add_parser("render", help="Write the tree as an HTML page")
    render.add_argument("output", help="Output .html path")
    render.add_argument("--title", default="Graph Builder")

    sub.add_parser("reset", help="Discard the tree and start from a fresh root")
    sub.add_parser("shell", help="Read commands line by line until 'quit'")

    return parser


def config_from_args(args: argparse.Namespace) -> EditorConfig:
    cfg = EditorConfig.from_env()
    if args.state:
        cfg = replace(cfg, state_path=Path(args.state))
    if args.max_depth is not None:
        cfg = replace(cfg, max_depth=args.max_depth)
    if args.viewport_width is not None:
        cfg = replace(cfg, viewport_width=args.viewport_width)
    return cfg


def format_outline(session: EditorSession) -> List[str]:
    lines: List[str] = []
    for node in iter_preorder(session.tree):
        depth = node_depth(session.tree, node.id) or 1
        indent = "  " * (depth - 1)
        lines.append(f"{indent}{node.id}  {node.label}  ({len(node.children)} children)")
    return lines


def print_payload(session: EditorSession, payload: RenderPayload) -> None:
    if payload.notice:
        print(f"! {payload.notice}")
    for line in format_outline(session):
        print(line)
    print(f"Depth: {payload.depth} / {payload.max_depth}")


def write_html(session: EditorSession, output: str, title: str) -> Path:
    out_path = Path(output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    renderer = HtmlTreeRenderer(session.config.layout, title=title)
    out_path.write_text(renderer.render(session.render_payload()), encoding="utf-8")
    return out_path


def run_shell(session: EditorSession) -> None:
    print(SHELL_HELP)
    while True:
        try:
            line = input("tree> ")
        except EOFError:
            print()
            break

        try:
            parts = shlex.split(line)
        except ValueError:
            # Unbalanced quotes.
            print(SHELL_HELP)
            continue
        if not parts:
            continue

        cmd, rest = parts[0], parts[1:]
        if cmd in ("quit", "exit"):
            break
        if cmd == "show":
            print_payload(session, session.render_payload())
        elif cmd == "add" and len(rest) == 1:
            print_payload(session, session.activate_node(rest[0]))
        elif cmd == "delete" and len(rest) == 1:
            print_payload(session, session.delete_node(rest[0]))
        elif cmd == "render" and len(rest) == 1:
            print(f"Wrote: {write_html(session, rest[0], 'Graph Builder')}")
        elif cmd == "reset":
            print_payload(session, session.reset())
        else:
            print(SHELL_HELP)


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = config_from_args(args)
    repository = TreeRepository(JsonFileStore(cfg.state_path))
    session = EditorSession.open(cfg, repository)

    if args.command == "show":
        payload = session.render_payload()
        if args.json:
            print(json.dumps(payload.to_dict(), indent=2))
        else:
            print_payload(session, payload)
    elif args.command == "add":
        print_payload(session, session.activate_node(args.parent_id))
    elif args.command == "delete":
        print_payload(session, session.delete_node(args.node_id))
    elif args.command == "render":
        out_path = write_html(session, args.output, args.title)
        print()
        print("=" * 72)
        print("Render complete")
        print("=" * 72)
        print(f"State:  {cfg.state_path}")
        print(f"Output: {out_path}")
        print(f"Nodes:  {len(session.tree)}")
        print()
    elif args.command == "reset":
        print_payload(session, session.reset())
    elif args.command == "shell":
        run_shell(session)


if __name__ == "__main__":
    main()

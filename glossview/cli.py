"""Command-line front door for glossview.

Parses CLI options, merges them over config preferences, and loads the
dataset. Then dispatches into the interactive browser or prints the tree.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .entries import DatasetError, load_entries
from .render import render_tree_text
from .runtime import config
from .runtime.controller import BrowserController
from .runtime.logs import configure_logging
from .tree_model import SEARCH_FIELDS, make_matcher
from .ui_theme import available_theme_names

SAMPLE_DATASET = Path(__file__).resolve().parent / "data" / "glossary.json"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _search_fields(value: str) -> tuple[str, ...]:
    """argparse type for a comma-separated subset of searchable fields."""
    fields = tuple(part.strip() for part in value.split(",") if part.strip())
    unknown = [name for name in fields if name not in SEARCH_FIELDS]
    if unknown or not fields:
        raise argparse.ArgumentTypeError(
            f"expected a comma-separated subset of {', '.join(SEARCH_FIELDS)}"
        )
    return fields


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse a grouped glossary in the terminal with live search."
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Dataset JSON file. Defaults to the bundled sample glossary.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style for pre-formatted definitions.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--search-in",
        type=_search_fields,
        default=None,
        metavar="FIELDS",
        help=f"Fields the search matches ({','.join(SEARCH_FIELDS)}). Default: term.",
    )
    parser.add_argument(
        "--type-ahead-ms",
        type=_positive_int,
        default=None,
        help="Inactivity window that ends a type-to-select run.",
    )
    parser.add_argument("--render", action="store_true", help="Print the visible tree and exit.")
    parser.add_argument("--query", default="", help="Search query applied for --render.")
    parser.add_argument("--expand-all", action="store_true", help="Expand every group for --render.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    parser.add_argument("--log-level", default="INFO", help="Log level for --log-file (default: INFO).")
    return parser


def render_tree(entries, query: str, expand_all: bool, search_fields) -> str:
    """Return the visible tree for a one-shot, non-interactive view."""
    controller = BrowserController(entries, matches=make_matcher(search_fields))
    try:
        if expand_all:
            for group in dict.fromkeys(entry.group for entry in entries):
                controller.expand_group_fully(group)
        controller.set_query(query)
        text = render_tree_text(controller.visible, controller.state.disclosure, controller.is_search_mode)
        if controller.is_search_mode and not controller.visible:
            text = f"no matches for {query.strip()!r}\n"
        return text
    finally:
        controller.close()


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch glossview on a dataset file."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    path = Path(args.path) if args.path is not None else SAMPLE_DATASET
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    try:
        entries = load_entries(path)
    except DatasetError as exc:
        raise SystemExit(f"Invalid dataset: {exc}") from exc

    search_fields = args.search_in if args.search_in is not None else config.load_search_fields()
    if args.render:
        sys.stdout.write(render_tree(entries, args.query, args.expand_all, search_fields))
        return

    from .runtime import run_browser

    run_browser(
        entries,
        theme_name=args.theme or config.load_theme_name(),
        style=args.style or config.load_style_name(),
        no_color=args.no_color,
        search_fields=search_fields,
        type_ahead_ms=args.type_ahead_ms or config.load_type_ahead_timeout_ms(),
    )


if __name__ == "__main__":
    main()

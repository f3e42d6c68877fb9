"""Command line entrypoint for rendering a menu definition file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

from dotenv import load_dotenv
from pydantic import ValidationError

from .config import load_menu_definition
from .errors import MenuError
from .logging_config import configure_logging, resolve_level
from .models import RequestContext
from .widgets import MenuWidget

_LOGGER = logging.getLogger(__name__)


def _parse_param(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError(
            f"Invalid parameter '{value}'. Expected format name=value."
        )
    name, raw = value.split("=", 1)
    name = name.strip()
    if not name:
        raise argparse.ArgumentTypeError(f"Invalid parameter '{value}': empty name.")
    return name, raw


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webmenu", description="Render a menu definition as nested HTML lists"
    )
    parser.add_argument("definition", type=Path, help="JSON or YAML menu definition.")
    parser.add_argument("--route", default="", help="Route of the current request (e.g. product/index).")
    parser.add_argument(
        "--param",
        dest="params",
        action="append",
        type=_parse_param,
        default=[],
        metavar="NAME=VALUE",
        help="Query parameter of the current request; may be repeated.",
    )
    parser.add_argument(
        "--activate-parents",
        action="store_true",
        default=None,
        help="Mark parents of active items as active.",
    )
    parser.add_argument(
        "--no-encode-labels",
        dest="encode_labels",
        action="store_false",
        default=None,
        help="Insert labels without HTML escaping.",
    )
    parser.add_argument("--first-class", help="CSS class for the first item of every list.")
    parser.add_argument("--last-class", help="CSS class for the last item of every list.")
    parser.add_argument("--output", type=Path, help="Write the markup to this file instead of stdout.")
    parser.add_argument(
        "--dump-tree",
        type=Path,
        help="Also write the normalized menu tree as JSON to this file.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Python logging level (default: WARNING)")
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if args.activate_parents is not None:
        overrides["activate_parents"] = args.activate_parents
    if args.encode_labels is not None:
        overrides["encode_labels"] = args.encode_labels
    if args.first_class:
        overrides["first_item_css_class"] = args.first_class
    if args.last_class:
        overrides["last_item_css_class"] = args.last_class
    return overrides


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(resolve_level(args.log_level, logging.WARNING))

    try:
        definition = load_menu_definition(args.definition, overrides=_overrides(args))
    except (MenuError, ValidationError) as exc:
        print(f"webmenu: {exc}", file=sys.stderr)
        return 2

    params: Dict[str, str] = {name: value for name, value in args.params}
    context = RequestContext.from_path(args.route, params)
    try:
        result = MenuWidget(definition.config).run((definition.items, context))
    except MenuError as exc:
        print(f"webmenu: {exc}", file=sys.stderr)
        return 2

    if args.dump_tree:
        result.to_json(args.dump_tree)
        _LOGGER.info("Wrote normalized menu tree to %s", args.dump_tree)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(result.html + "\n", encoding="utf-8")
    else:
        sys.stdout.write(result.html + "\n")
    return 0


__all__ = ["build_parser", "main"]


if __name__ == "__main__":
    sys.exit(main())

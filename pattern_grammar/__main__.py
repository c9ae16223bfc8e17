import argparse
import json
import logging
from pathlib import Path
from typing import Any, Optional, Sequence

import yaml

from pattern_grammar import (
    GrammarError,
    Size,
    build_scene,
    clean_empty_components,
    display_location,
    load_grammar,
    print_patterns,
    scene_to_data,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _load_tree(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Extract and lay out pattern grammars")
    parser.add_argument("path", help="Path to a YAML or JSON pattern file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Drop empty values and containers before extraction",
    )
    parser.add_argument(
        "--layout",
        metavar="PATTERN",
        help="Print the resolved child boxes of PATTERN",
    )
    parser.add_argument(
        "--width",
        type=float,
        default=900.0,
        help="Drawing surface width in pixels (default: 900)",
    )
    parser.add_argument(
        "--height",
        type=float,
        default=600.0,
        help="Drawing surface height in pixels (default: 600)",
    )
    parser.add_argument(
        "--distribute",
        action="store_true",
        help="Spread siblings anchored to the same edge before printing boxes",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the layout as JSON instead of text",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    path = Path(args.path)
    logger.info("Loading patterns from %s", path)
    try:
        tree = _load_tree(path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error("Could not read %s: %s", path, exc)
        raise SystemExit(1)

    if args.clean:
        tree = clean_empty_components(tree) or {}

    try:
        patterns = load_grammar(tree or {})
    except (GrammarError, TypeError) as exc:
        logger.error("Invalid pattern grammar: %s", exc)
        raise SystemExit(1)
    logger.info("Validation succeeded")

    print(f"Patterns ({len(patterns)}):")
    print(print_patterns(patterns), end="")

    if not args.layout:
        return

    try:
        scene = build_scene(
            patterns,
            args.layout,
            Size(args.width, args.height),
            auto_distribute=args.distribute,
        )
    except GrammarError as exc:
        logger.error("Cannot lay out %s: %s", args.layout, exc)
        raise SystemExit(1)

    if args.json:
        print(json.dumps(scene_to_data(scene), indent=2))
        return

    parent = scene.parent
    print(f"Layout of {args.layout}:")
    print(f"  parent: ({parent.x:.2f}, {parent.y:.2f}) {parent.width:.2f}x{parent.height:.2f}")
    print(f"  cell: {scene.cell:.3f}")
    for child in scene.children:
        box = child.bounds
        tokens = " ".join(f"{side}={token}" for side, token in display_location(child.location).items())
        flag = "" if child.draggable else " (fixed)"
        print(
            f"  {child.mode} {child.name}: ({box.x:.2f}, {box.y:.2f}) "
            f"{box.width:.2f}x{box.height:.2f} [{tokens}]{flag}"
        )


if __name__ == "__main__":
    main()

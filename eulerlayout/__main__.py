import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from eulerlayout import (
    CreatorOptions,
    DiagramFail,
    create_diagram,
    generate_tikz_document,
    get_creator_options,
    parse_description,
    place_labels,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _read_description(args: argparse.Namespace) -> str:
    if args.file:
        with open(args.file, encoding="utf-8") as fin:
            return fin.read()
    if args.description is None:
        raise SystemExit("either a description or --file is required")
    return args.description


def _options(args: argparse.Namespace) -> CreatorOptions:
    options = get_creator_options()
    if args.workers is not None:
        options.max_workers = args.workers
    return options


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Lay out Euler diagrams from abstract descriptions")
    parser.add_argument(
        "description",
        nargs="?",
        help='Informal description, e.g. "a b ab"',
    )
    parser.add_argument(
        "--file",
        help="Read the description from this file instead",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Thread pool size for the partition search and component drawing",
    )
    parser.add_argument(
        "--json-output-path",
        help="Write curves, zones and label anchors as JSON to the given path",
    )
    parser.add_argument(
        "--tikz-output-path",
        help="Write a standalone TikZ document to the given path",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    text = _read_description(args)
    source = args.file or "command line"
    logger.info("Parsing description from %s", source)
    try:
        description = parse_description(text)
    except ValueError as exc:
        logger.error("Invalid description: %s", exc)
        raise SystemExit(1)

    result = create_diagram(description, _options(args))
    if isinstance(result, DiagramFail):
        logger.error("Construction failed (%s): %s", result.kind, result.message)
        print(f"Failed: {result.kind}: {result.message}")
        raise SystemExit(1)

    diagram = result.diagram
    labels = place_labels(diagram.curves)

    print(f"Description: {diagram.original_description.to_informal()}")
    print(f"Drawn zones: {diagram.actual_description.to_informal()}")
    print("Curves:")
    for curve in diagram.curves:
        print(f"  {curve}")
    print("Shaded zones:")
    if diagram.shaded_zones:
        for zone in diagram.shaded_zones:
            print(f"  {zone.az.to_informal()}")
    else:
        print("  (none)")
    print("Labels:")
    for name, (x, y) in labels.items():
        print(f"  {name}: ({x:.3f}, {y:.3f})")

    if args.json_output_path:
        output_path = Path(args.json_output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing JSON layout to %s", output_path)
        with open(output_path, "w", encoding="utf-8") as fout:
            json.dump(diagram.as_dict(labels), fout, indent=2)
        print(f"JSON layout written to {output_path}")

    if args.tikz_output_path:
        output_path = Path(args.tikz_output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing TikZ document to %s", output_path)
        tikz_document = generate_tikz_document(diagram, labels)
        output_path.write_text(tikz_document, encoding="utf-8")
        print(f"TikZ document written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])

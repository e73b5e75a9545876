"""
Command-line entry point.

Generates one level and writes it as JSON, ASCII, Graphviz DOT or a stats
summary. Exit codes: 0 on success, 1 if ``--validate`` finds a FAIL issue,
2 on bad arguments or settings.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from bsp_levelgen import __version__
from bsp_levelgen.conversion import (
    MarkerType,
    export_layout_dot,
    level_to_dict,
    markers_from_spawn_points,
    markers_to_dicts,
    render_ascii,
)
from bsp_levelgen.exceptions import InvalidDimensionsError, SettingsError
from bsp_levelgen.generators.bsp import DEFAULT_SEED, LevelGenerator
from bsp_levelgen.generators.settings import GeneratorSettings, load_settings
from bsp_levelgen.validation import validate_level

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_VALIDATION_FAILED = 1
EXIT_USAGE = 2

FORMATS = ('json', 'ascii', 'dot', 'stats')


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bsp-levelgen",
        description="Generate a deterministic BSP level layout",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("width", type=int, help="Map extent along X")
    parser.add_argument("depth", type=int, help="Map extent along Z")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help=f"Random seed (default {DEFAULT_SEED})")
    parser.add_argument("--config", type=Path, default=None, help="JSON file of generator settings")
    parser.add_argument("--format", choices=FORMATS, default='json', help="Output format (default json)")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write output here instead of stdout")
    parser.add_argument("--validate", action="store_true", help="Run structural checks on the level")
    parser.add_argument("--spawns", type=int, default=0,
                        help="Pick N spawn points: a player start followed by enemy spawns")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    return parser


def _render(generator: LevelGenerator, level, fmt: str, spawns: int) -> str:
    markers = []
    if spawns:
        points = generator.get_spawn_points(spawns, level.rooms)
        markers = markers_from_spawn_points(points[:1], level.rooms)
        markers += markers_from_spawn_points(points[1:], level.rooms, MarkerType.ENEMY)

    if fmt == 'ascii':
        text = render_ascii(level, generator.settings)
    elif fmt == 'dot':
        text = export_layout_dot(level)
    elif fmt == 'stats':
        text = json.dumps(generator.get_layout_stats(), indent=2)
    else:
        data = level_to_dict(level)
        data['stats'] = generator.get_layout_stats()
        if markers:
            data['markers'] = markers_to_dicts(markers)
        return json.dumps(data, indent=2)

    if markers:
        logger.warning(f"Spawn points are only written in json format; ignoring {len(markers)} marker(s)")
    return text


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.spawns < 0:
        parser.error("--spawns must be non-negative")

    try:
        settings = load_settings(args.config) if args.config else GeneratorSettings()
        generator = LevelGenerator(args.width, args.depth, seed=args.seed, settings=settings)
    except (InvalidDimensionsError, SettingsError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE

    level = generator.generate()
    text = _render(generator, level, args.format, args.spawns)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text + "\n", encoding='utf-8')
        logger.info(f"Wrote {args.format} output to {args.output}")
    else:
        print(text)

    if args.validate:
        result = validate_level(level, settings)
        print(result.report(), file=sys.stderr)
        if result.failed:
            return EXIT_VALIDATION_FAILED

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

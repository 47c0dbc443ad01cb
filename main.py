import argparse
import json
import logging
import sys
from typing import List, Optional

from mapservice.requests import ChunkValidationError, normalize_seed
from mapservice.service import SERVICE_SETTINGS, generate_chunk_response
from mapservice.settings import DEFAULT_SEED
from worldgen.export import export_region_json, export_region_xml, export_rivers_json
from worldgen.stats import biome_histogram, ocean_fraction
from worldgen.world import World


def _seed_arg(value: str):
    # Numeric text is an integer seed; anything else is hashed like a string seed.
    try:
        return int(value)
    except ValueError:
        return value


def _add_region_args(parser: argparse.ArgumentParser, default_half: int) -> None:
    parser.add_argument("--min-cx", type=int, default=-default_half)
    parser.add_argument("--min-cy", type=int, default=-default_half)
    parser.add_argument("--max-cx", type=int, default=default_half - 1)
    parser.add_argument("--max-cy", type=int, default=default_half - 1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate chunks of a procedural planet.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument("--seed", type=_seed_arg, default=DEFAULT_SEED, help="World seed (int or text)")
    sub = parser.add_subparsers(dest="command", required=True)

    chunk = sub.add_parser("chunk", help="Print one compact-encoded chunk as JSON")
    chunk.add_argument("chunk_x", type=int)
    chunk.add_argument("chunk_y", type=int)

    stats = sub.add_parser("stats", help="Ocean fraction and biome counts over a chunk rectangle")
    _add_region_args(stats, 30)
    stats.add_argument("--stride", type=int, default=4, help="Sample every n-th tile")
    stats.add_argument("--biomes", action="store_true", help="Also count biomes (builds rivers)")

    export = sub.add_parser("export", help="Write a chunk rectangle or the river network to a file")
    _add_region_args(export, 1)
    export.add_argument("--format", choices=["json", "xml", "rivers"], default="json")
    export.add_argument("output", help="Output file path")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "chunk":
        try:
            response = generate_chunk_response(args.chunk_x, args.chunk_y, args.seed)
        except ChunkValidationError as e:
            print(f"Invalid request: {e}", file=sys.stderr)
            return 2
        print(json.dumps(response, separators=(",", ":")))
        return 0

    try:
        seed = normalize_seed(args.seed)
    except ChunkValidationError as e:
        print(f"Invalid seed: {e}", file=sys.stderr)
        return 2
    world = World(seed, SERVICE_SETTINGS)
    region = (args.min_cx, args.min_cy, args.max_cx, args.max_cy)

    if args.command == "stats":
        fraction = ocean_fraction(world, *region, stride=args.stride)
        print(f"Ocean fraction: {fraction:.3f}")
        if args.biomes:
            for name, count in sorted(biome_histogram(world, *region, stride=args.stride).items()):
                print(f"{name:>16}: {count}")
        return 0

    if args.format == "rivers":
        export_rivers_json(world, args.output)
        print(f"Wrote {len(world.rivers.paths)} rivers to {args.output}")
    elif args.format == "xml":
        count = export_region_xml(world, args.output, *region)
        print(f"Wrote {count} tiles to {args.output}")
    else:
        count = export_region_json(world, args.output, *region)
        print(f"Wrote {count} tiles to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Command-line world generation.

Generates one world from a prompt and writes the requested exports.
"""

import argparse
import random
import sys
from pathlib import Path
from typing import Dict, List

from ..config import configure_logging
from ..engine import HeightmapAnalyzer
from .sampler import WorldSampler


def parse_assignments(values: List[str]) -> Dict[str, str]:
    """Turn ``key=value`` strings into a raw override mapping."""

    overrides = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep:
            print(f"Ignoring malformed override (expected key=value): {item}")
            continue
        overrides[key.strip().replace("-", "_")] = value.strip()
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a terrain world from a text prompt")
    parser.add_argument("prompt", help="World description, e.g. 'mountain north river village'")
    parser.add_argument("--seed", type=int, default=None, help="World seed (random if omitted)")
    parser.add_argument("--out-dir", type=Path, default=Path("."), help="Output directory")
    parser.add_argument("--name", default="world", help="Base name for output files")
    parser.add_argument("--glb", action="store_true", help="Write binary glTF mesh")
    parser.add_argument("--json", action="store_true", help="Write JSON world record")
    parser.add_argument("--include-features", action="store_true", help="Add structures to the JSON record")
    parser.add_argument("--png", action="store_true", help="Write 16-bit PNG heightmap preview")
    parser.add_argument("--set", dest="overrides", action="append", default=[],
                        help="Zone override as key=value (repeatable), e.g. mountain_height=12")
    parser.add_argument("--log-level", default="WARNING", help="Log level")
    return parser


def main(argv: List[str] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    seed = args.seed
    if seed is None:
        seed = random.SystemRandom().randrange(2**31)
        print(f"No seed given, using {seed}")

    sampler = WorldSampler()
    world, _ = sampler.regenerate(args.prompt, seed, parse_assignments(args.overrides))

    zones = world.zones
    print(f"Generated world for: {args.prompt!r} (seed {seed})")
    print(f"  Bands: north={zones.north:g} center={zones.center:g} south={zones.south:g}")
    print(f"  Noise scale: {zones.noise_scale:g}")
    print(f"  River: {zones.river}")
    print(f"  Lake: {zones.lake}")
    print(f"  Mesh: {world.mesh.vertex_count} vertices, {world.mesh.triangle_count} triangles")
    print(f"  Structures: {len(world.features)}")

    water = HeightmapAnalyzer().analyze(world.heightmap)["water"]
    print(f"  Water bodies: {water['water_bodies']} ({water['water_fraction']:.1%} of cells)")

    args.out_dir.mkdir(parents=True, exist_ok=True)

    outputs = []
    if args.glb:
        result = sampler.export_glb()
        if result.ok:
            path = args.out_dir / f"{args.name}.glb"
            path.write_bytes(result.data)
            outputs.append(path)

    if args.json:
        result = sampler.export_world_json(include_features=args.include_features)
        if result.ok:
            path = args.out_dir / f"{args.name}.json"
            path.write_bytes(result.data)
            outputs.append(path)

    if args.png:
        path = args.out_dir / f"{args.name}_heightmap.png"
        sampler.save_heightmap(world.heightmap, path, format="png")
        outputs.append(path)

    for path in outputs:
        print(f"✓ Wrote {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

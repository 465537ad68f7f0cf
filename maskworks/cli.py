"""Command-line SDF generation.

Usage:
    maskworks-sdf mask.png sdf.png --max-inside 20 --max-outside 20
    python -m maskworks.cli mask.png sdf.png --config settings.json --fill-mode distance
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from maskworks import defaults
from maskworks.errors import SdfError
from maskworks.generator import SdfGenerator
from maskworks.mask_utils import load_rgba, save_rgba, soften_alpha
from maskworks.serialization import load_config, save_config
from maskworks.types import FillMode, GeneratorConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="maskworks-sdf",
        description="Convert the alpha channel of an image into a signed distance field.",
    )
    parser.add_argument("input", type=Path, help="Source image (alpha channel is the mask).")
    parser.add_argument("output", type=Path, help="Destination PNG.")
    parser.add_argument("--config", type=Path, default=None, help="Generator settings JSON.")
    parser.add_argument("--max-inside", type=float, default=None, help="Interior radius in pixels (0 disables).")
    parser.add_argument("--max-outside", type=float, default=None, help="Exterior radius in pixels (0 disables).")
    parser.add_argument("--post-process", type=float, default=None, help="Refinement cutoff in pixels (0 disables).")
    parser.add_argument("--fill-mode", choices=[m.value for m in FillMode], default=None)
    parser.add_argument("--soften", type=float, default=defaults.DEFAULT_SOFTEN_SIGMA,
                        help="Gaussian sigma applied to the mask before generating.")
    parser.add_argument("--save-config", type=Path, default=None, help="Write the effective settings to JSON.")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def resolve_config(args: argparse.Namespace) -> GeneratorConfig:
    """Settings file first, explicit flags override."""
    config = load_config(args.config) if args.config is not None else GeneratorConfig()
    changes = {}
    if args.max_inside is not None:
        changes['max_inside'] = args.max_inside
    if args.max_outside is not None:
        changes['max_outside'] = args.max_outside
    if args.post_process is not None:
        changes['post_process_distance'] = args.post_process
    if args.fill_mode is not None:
        changes['fill_mode'] = FillMode.parse(args.fill_mode)
    return config.replace(**changes) if changes else config


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = resolve_config(args)
        source = load_rgba(args.input)
        if args.soften > 0:
            source[..., 3] = soften_alpha(source[..., 3], args.soften)

        t0 = time.perf_counter()
        result = SdfGenerator(config).generate(source)
        elapsed = time.perf_counter() - t0

        save_rgba(result, args.output)
        print(f"Saved {source.shape[1]}x{source.shape[0]} SDF to {args.output} ({elapsed:.2f}s)")

        if args.save_config is not None:
            save_config(config, args.save_config)
            print(f"Saved settings to {args.save_config}")
    except (SdfError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())

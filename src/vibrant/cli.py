"""
Vibrant CLI: command-line interface for swatch extraction.

Provides subcommands:
    vibrant extract  - Extract swatches from an image
    vibrant config   - Manage palette configs

All commands respect an optional YAML config and support CLI overrides.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="vibrant",
        description="Vibrant: extract representative color swatches from images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vibrant extract photo.jpg
  vibrant extract photo.jpg -k 8 --json
  vibrant extract photo.png --crop 0 0 200 100 --max-dimension 0
  vibrant config init configs/palette.yaml
  vibrant config diff configs/a.yaml configs/b.yaml
        """,
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug-level logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ── extract ──────────────────────────────────────────────────
    extract_parser = subparsers.add_parser("extract", help="Extract swatches from an image")
    extract_parser.add_argument("image", type=str, help="Path to the source image")
    extract_parser.add_argument(
        "--max-colors", "-k",
        type=int,
        help="Maximum number of swatches (overrides config)",
    )
    extract_parser.add_argument(
        "--crop",
        type=int,
        nargs=4,
        metavar=("LEFT", "TOP", "RIGHT", "BOTTOM"),
        help="Only sample this rectangle of the image",
    )
    extract_parser.add_argument(
        "--max-dimension",
        type=int,
        help="Downscale so the longest side is at most this many pixels (0 disables)",
    )
    extract_parser.add_argument(
        "--json",
        action="store_true",
        help="Print swatches as JSON",
    )
    extract_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Also write the JSON result to this file",
    )

    # ── config ───────────────────────────────────────────────────
    config_parser = subparsers.add_parser("config", help="Manage palette configurations")
    config_subparsers = config_parser.add_subparsers(dest="config_command")

    show_parser = config_subparsers.add_parser("show", help="Display a config file")
    show_parser.add_argument("config_file", type=str, nargs="?", default=None)

    init_parser = config_subparsers.add_parser("init", help="Create a new config from defaults")
    init_parser.add_argument("output_path", type=str, help="Output path for new config")

    diff_parser = config_subparsers.add_parser("diff", help="Compare two config files")
    diff_parser.add_argument("config_a", type=str)
    diff_parser.add_argument("config_b", type=str)

    return parser


def cmd_extract(args: argparse.Namespace) -> int:
    """Execute the 'extract' subcommand."""
    from vibrant.config import load_config
    from vibrant.logging_setup import setup_logging
    from vibrant.palette import extract_swatches

    overrides = {}
    if args.max_colors is not None:
        overrides.setdefault("quantizer", {})["max_colors"] = args.max_colors
    if args.crop is not None:
        overrides.setdefault("bitmap", {})["crop"] = list(args.crop)
    if args.max_dimension is not None:
        overrides.setdefault("bitmap", {})["resize_max_dimension"] = args.max_dimension

    config = load_config(args.config, overrides=overrides if overrides else None)
    setup_logging(
        log_dir=config.log_dir,
        level=logging.DEBUG if args.verbose else config.log_level,
    )

    swatches = extract_swatches(args.image, config)
    payload = {
        "image": args.image,
        "max_colors": config.quantizer.max_colors,
        "swatches": [
            s.to_dict(
                config.contrast.min_contrast_title_text,
                config.contrast.min_contrast_body_text,
                config.lab.reference_white,
            )
            for s in swatches
        ],
    }

    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(payload, indent=2))
        logger.info("Swatches written to: %s", output)

    if args.json:
        print(json.dumps(payload, indent=2))
        return 0

    print(f"\n{'='*60}")
    print(f"  Vibrant: {len(swatches)} swatches from {args.image}")
    print(f"{'='*60}")
    if not swatches:
        print("  (no usable colors: image is empty or only near-black/near-white)")
    for entry in payload["swatches"]:
        print(
            f"  {entry['color']}  population={entry['population']:<8d}"
            f" ratio={entry['ratio']:.4f}"
            f"  title={entry['title_text_color']}  body={entry['body_text_color']}"
        )
    print(f"{'='*60}\n")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Execute the 'config' subcommand."""
    from vibrant.config import PaletteConfig, load_config, save_config

    if args.config_command == "show":
        config = load_config(args.config_file or args.config)
        print(json.dumps(asdict(config), indent=2, default=str))

    elif args.config_command == "init":
        path = save_config(PaletteConfig(), args.output_path)
        print(f"Config initialized: {path}")

    elif args.config_command == "diff":
        config_a = asdict(load_config(args.config_a))
        config_b = asdict(load_config(args.config_b))

        diffs = _dict_diff(config_a, config_b)
        if diffs:
            print(f"\nDifferences between {args.config_a} and {args.config_b}:\n")
            for key, (val_a, val_b) in diffs.items():
                print(f"  {key}:")
                print(f"    - {val_a}")
                print(f"    + {val_b}")
        else:
            print("Configs are identical.")

    else:
        print("Usage: vibrant config {show|init|diff}")
        return 1
    return 0


def _dict_diff(a: dict, b: dict, prefix: str = "") -> dict:
    """Recursively diff two dictionaries."""
    diffs = {}
    all_keys = set(a.keys()) | set(b.keys())
    for key in sorted(all_keys):
        full_key = f"{prefix}.{key}" if prefix else key
        val_a = a.get(key)
        val_b = b.get(key)
        if isinstance(val_a, dict) and isinstance(val_b, dict):
            diffs.update(_dict_diff(val_a, val_b, full_key))
        elif val_a != val_b:
            diffs[full_key] = (val_a, val_b)
    return diffs


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "extract": cmd_extract,
        "config": cmd_config,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except ValueError as exc:
        logger.error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Generate placements for a single mask.

Usage:
    python scripts/generate_placements.py --config config/placement.yaml
    python scripts/generate_placements.py --config config/placement.yaml --seed 7 --preview out/preview.png
"""

import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mask_scatter.pipeline import PlacementPipeline
from mask_scatter.placement import PlacementConfig
from mask_scatter.utils.config import load_config_file
from mask_scatter.utils.logging import setup_logging, get_logger
from mask_scatter.utils.paths import PathManager
from mask_scatter.utils.validation import validate_mask_file, validate_tile_metadata_file

logger = get_logger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Generate mask-constrained placements")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(__file__).parent.parent / "config" / "placement.yaml",
        help="Placement config (YAML or JSON)",
    )
    parser.add_argument("--seed", type=str, default=None, help="Override config seed")
    parser.add_argument("--output", type=str, default=None, help="Override output path")
    parser.add_argument("--preview", type=str, default=None, help="Write a preview PNG")
    parser.add_argument(
        "--log-level", type=str, default="INFO", help="Log level (DEBUG, INFO, WARNING, ERROR)"
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Optional log file")
    args = parser.parse_args()

    setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        config_dict = load_config_file(args.config)
        if args.seed is not None:
            config_dict["seed"] = int(args.seed) if args.seed.lstrip("-").isdigit() else args.seed
        if args.output is not None:
            config_dict["output"] = args.output
        if args.preview is not None:
            config_dict["preview"] = args.preview

        config = PlacementConfig.from_dict(config_dict)
        paths = PathManager.from_config(args.config.parent, config)

        if not validate_mask_file(paths.mask_path):
            raise ValueError(f"Malformed mask: {paths.mask_path}")
        if not validate_tile_metadata_file(paths.tile_metadata_path):
            raise ValueError(f"Malformed tile metadata: {paths.tile_metadata_path}")

        pipeline = PlacementPipeline(config)
        output_path = pipeline.run(paths)
    except (OSError, ValueError) as e:
        logger.error(f"Placement generation failed: {e}", exc_info=True)
        sys.exit(1)

    print(f"Success: {output_path}")
    sys.exit(0)


if __name__ == "__main__":
    main()

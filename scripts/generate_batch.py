#!/usr/bin/env python3
"""
Generate several placement variants from one config, one seed per run.

Usage:
    python scripts/generate_batch.py --num-runs 10 --base-seed 100
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
from mask_scatter.utils.paths import PathManager, run_seed
from mask_scatter.utils.validation import validate_placements_file

logger = get_logger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Generate a batch of placement variants")
    parser.add_argument("--num-runs", type=int, required=True, help="Number of runs")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(__file__).parent.parent / "config" / "placement.yaml",
        help="Placement config (YAML or JSON)",
    )
    parser.add_argument("--base-seed", type=int, default=0, help="Seed of run 0")
    parser.add_argument(
        "--no-auto-increment",
        action="store_true",
        help="Use the base seed for every run instead of base_seed + run_id",
    )
    parser.add_argument("--start-id", type=int, default=0, help="Starting run ID")
    parser.add_argument(
        "--log-level", type=str, default="INFO", help="Log level (DEBUG, INFO, WARNING, ERROR)"
    )
    args = parser.parse_args()

    try:
        config_dict = load_config_file(args.config)
        base_config = PlacementConfig.from_dict(config_dict)
        base_paths = PathManager.from_config(args.config.parent, base_config)
    except (OSError, ValueError) as e:
        setup_logging(level=args.log_level)
        logger.error(f"Invalid batch configuration: {e}", exc_info=True)
        sys.exit(1)

    setup_logging(level=args.log_level, log_file=base_paths.get_log_path("batch_generation"))
    logger.info(f"Starting batch generation: {args.num_runs} runs")

    success_count = 0
    failed_runs = []

    for i in range(args.num_runs):
        run_id = args.start_id + i
        seed = run_seed(args.base_seed, run_id, not args.no_auto_increment)
        logger.info(f"Run {run_id} ({i+1}/{args.num_runs}) seed={seed}")

        config = PlacementConfig.from_dict({**config_dict, "seed": seed})
        paths = base_paths.for_run(run_id)

        try:
            output_path = PlacementPipeline(config).run(paths)
        except (OSError, ValueError) as e:
            logger.error(f"Run {run_id} failed: {e}", exc_info=True)
            failed_runs.append(run_id)
            continue

        if validate_placements_file(output_path):
            success_count += 1
        else:
            failed_runs.append(run_id)

    # Summary
    logger.info("=" * 60)
    logger.info("Batch generation complete")
    logger.info(f"  Success: {success_count}/{args.num_runs}")
    logger.info(f"  Failed: {len(failed_runs)}")
    if failed_runs:
        logger.info(f"  Failed run IDs: {failed_runs}")
    logger.info("=" * 60)

    if success_count == args.num_runs:
        sys.exit(0)
    elif success_count > 0:
        sys.exit(2)  # Partial success
    else:
        sys.exit(1)


if __name__ == "__main__":
    main()

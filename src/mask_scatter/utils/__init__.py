"""
Utility modules for placement generation.
"""

from mask_scatter.utils.config import load_config, load_config_file, ConfigLoader
from mask_scatter.utils.logging import setup_logging, get_logger
from mask_scatter.utils.paths import PathManager, run_seed
from mask_scatter.utils.validation import (
    validate_mask_file,
    validate_tile_metadata_file,
    validate_placements_file,
)

__all__ = [
    "load_config",
    "load_config_file",
    "ConfigLoader",
    "setup_logging",
    "get_logger",
    "PathManager",
    "run_seed",
    "validate_mask_file",
    "validate_tile_metadata_file",
    "validate_placements_file",
]

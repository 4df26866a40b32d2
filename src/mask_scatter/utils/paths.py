"""
Path management utilities.
"""

from pathlib import Path
from typing import Optional


class PathManager:
    """Resolve input and output files for a placement run."""

    def __init__(
        self,
        base_dir: Path,
        mask: str,
        tile_metadata: str,
        output: str = "placements.json",
        preview: Optional[str] = None,
    ):
        """
        Initialize path manager.

        Relative paths are resolved against ``base_dir`` (typically the
        directory holding the config file).

        Args:
            base_dir: Base directory for relative paths
            mask: Mask image path
            tile_metadata: Tile metadata path
            output: Placements output path
            preview: Optional preview image path
        """
        if not mask:
            raise ValueError("No mask path configured")
        if not tile_metadata:
            raise ValueError("No tile metadata path configured")

        self.base_dir = Path(base_dir)
        self.mask_path = self._resolve(mask)
        self.tile_metadata_path = self._resolve(tile_metadata)
        self.output_path = self._resolve(output)
        self.preview_path = self._resolve(preview) if preview else None

        self._create_directories()

    @classmethod
    def from_config(cls, base_dir: Path, config) -> "PathManager":
        """Build from a PlacementConfig."""
        return cls(
            base_dir,
            mask=config.mask,
            tile_metadata=config.tile_metadata,
            output=config.output,
            preview=config.preview,
        )

    def _resolve(self, path: str) -> Path:
        path = Path(path).expanduser()
        if path.is_absolute():
            return path
        return self.base_dir / path

    def _create_directories(self):
        """Create output directories."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        if self.preview_path is not None:
            self.preview_path.parent.mkdir(parents=True, exist_ok=True)

    def for_run(self, run_id: int) -> "PathManager":
        """Same inputs, outputs suffixed with ``_<run_id:04d>``."""
        output = self.output_path.with_name(f"{self.output_path.stem}_{run_id:04d}{self.output_path.suffix}")
        preview = None
        if self.preview_path is not None:
            preview = self.preview_path.with_name(
                f"{self.preview_path.stem}_{run_id:04d}{self.preview_path.suffix}"
            )
        return PathManager(
            self.base_dir,
            mask=str(self.mask_path),
            tile_metadata=str(self.tile_metadata_path),
            output=str(output),
            preview=str(preview) if preview else None,
        )

    def get_log_path(self, name: str = "placements") -> Path:
        """Log file next to the output."""
        return self.output_path.parent / "logs" / f"{name}.log"


def run_seed(base_seed: int, run_id: int, auto_increment: bool = True) -> int:
    """Seed for one run of a batch: ``base_seed + run_id``, or the base seed for every run."""
    if auto_increment:
        return base_seed + run_id
    return base_seed

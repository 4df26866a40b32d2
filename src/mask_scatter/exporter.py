"""
Write placement lists for downstream renderers / scene builders.
"""

from pathlib import Path
from typing import List, Sequence
import json
import logging

from mask_scatter.placement import Placement

logger = logging.getLogger(__name__)


class PlacementExporter:
    """
    Serialize placements as a JSON list of records.

    Field names are what scene builders reading ``placements.json``
    expect: file, x, y, z, scale, rotation, layer, brightness.
    """

    def __init__(self, indent: int = 2):
        """Initialize exporter."""
        self.indent = indent

    def export(self, placements: Sequence[Placement], output_path: Path) -> Path:
        """
        Write placements to ``output_path``.

        Args:
            placements: Placements in generation order
            output_path: Destination JSON file (parent dirs are created)

        Returns:
            Path to written file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        records = [placement.to_dict() for placement in placements]
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=self.indent)

        logger.info(f"Wrote {len(records)} placements -> {output_path}")
        return output_path


def read_placements(placements_path: Path) -> List[Placement]:
    """Read a placements file written by PlacementExporter."""
    placements_path = Path(placements_path)
    if not placements_path.exists():
        raise FileNotFoundError(f"Placements file not found: {placements_path}")

    with open(placements_path, "r", encoding="utf-8") as f:
        records = json.load(f)

    return [Placement(**record) for record in records]

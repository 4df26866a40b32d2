"""
Diagnostic preview of placements drawn over the mask.
"""

from pathlib import Path
from typing import Sequence
import logging

import numpy as np
from PIL import Image
from matplotlib import colormaps
from matplotlib.figure import Figure

from mask_scatter.mask import Mask
from mask_scatter.placement import Placement

logger = logging.getLogger(__name__)

LAYER_NAMES = {0: "front", 1: "mid", 2: "back"}


def mask_to_image(mask: Mask) -> Image.Image:
    """Brightness as grayscale, pixels outside the mask tinted dark red."""
    brightness = mask.data[..., 0]
    rgb = np.stack([brightness] * 3, axis=-1).astype(np.uint8)
    outside = mask.data[..., 3] == 0
    rgb[outside] = (64, 0, 0)
    return Image.fromarray(rgb)


def render_preview(
    mask: Mask,
    placements: Sequence[Placement],
    output_path: Path,
    dpi: int = 100,
) -> Path:
    """
    Save a PNG with every placement drawn on top of the mask.

    Markers are colored by layer and sized by scale.

    Args:
        mask: Mask used for the run
        placements: Generated placements
        output_path: Destination PNG
        dpi: Figure resolution

    Returns:
        Path to written image
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    background = np.asarray(mask_to_image(mask))

    width_in = max(mask.width / dpi, 2.0)
    height_in = max(mask.height / dpi, 2.0)
    fig = Figure(figsize=(width_in, height_in), dpi=dpi)
    ax = fig.add_subplot(1, 1, 1)
    ax.imshow(background, origin="upper", interpolation="nearest")

    colors_map = colormaps["tab10"]
    for layer, name in LAYER_NAMES.items():
        in_layer = [p for p in placements if p.layer == layer]
        if not in_layer:
            continue
        ax.scatter(
            [p.x for p in in_layer],
            [p.y for p in in_layer],
            s=[max(p.scale, 0.05) * 20 for p in in_layer],
            color=colors_map(layer),
            label=f"{name} ({len(in_layer)})",
            alpha=0.8,
            edgecolors="none",
        )

    ax.set_xlim(0, mask.width)
    ax.set_ylim(mask.height, 0)
    ax.set_title(f"{len(placements)} placements")
    if placements:
        ax.legend(loc="upper right", fontsize="small")
    ax.set_axis_off()

    fig.savefig(output_path)
    logger.info(f"Saved preview: {output_path}")
    return output_path

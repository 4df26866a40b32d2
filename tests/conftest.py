from __future__ import annotations

import numpy as np
import pytest

from mask_scatter.attributes import ZoneConfig
from mask_scatter.mask import Mask
from mask_scatter.placement import PlacementConfig
from mask_scatter.tiles import TileDescriptor


class ScriptedStream:
    """Random stream returning preset values, for draw-order checks."""

    def __init__(self, values):
        self.values = list(values)
        self.draws = 0

    def __call__(self):
        if self.draws >= len(self.values):
            raise AssertionError(f"Unexpected draw #{self.draws + 1}")
        value = self.values[self.draws]
        self.draws += 1
        return value


def make_mask(width, height, brightness=255, alpha=255):
    data = np.zeros((height, width, 4), dtype=np.uint8)
    data[..., 0:3] = brightness
    data[..., 3] = alpha
    return Mask(data)


def gradient_mask(width, height):
    """Brightness ramps left to right, right-most column transparent."""
    data = np.zeros((height, width, 4), dtype=np.uint8)
    ramp = np.linspace(0, 255, width).astype(np.uint8)
    data[..., 0:3] = ramp[None, :, None]
    data[..., 3] = 255
    data[:, -1, 3] = 0
    return Mask(data)


@pytest.fixture
def zones_dict():
    return {
        "back": {"min": 0.0, "max": 1.0},
        "mid": {"min": 1.0, "max": 2.0},
        "front": {"min": 2.0, "max": 3.0},
    }


@pytest.fixture
def zones(zones_dict):
    return ZoneConfig.from_dict(zones_dict)


@pytest.fixture
def config_dict(zones_dict):
    return {
        "seed": 1234,
        "poisson_radius": 3.0,
        "density": 1.0,
        "min_scale": 0.5,
        "max_scale": 1.5,
        "rotation_range": [0.0, 360.0],
        "z_layers": zones_dict,
    }


@pytest.fixture
def config(config_dict):
    return PlacementConfig.from_dict(config_dict)


@pytest.fixture
def tiles():
    return [
        TileDescriptor(file="dark.png", mean_brightness=0.1),
        TileDescriptor(file="grey.png", mean_brightness=0.5),
        TileDescriptor(file="light.png", mean_brightness=0.9),
    ]

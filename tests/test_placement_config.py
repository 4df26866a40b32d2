from __future__ import annotations

import math

import pytest

from conftest import make_mask
from mask_scatter.pipeline import generate_placements
from mask_scatter.placement import Placement, PlacementConfig, PlacementConfigError


def test_from_dict_defaults(zones_dict):
    config = PlacementConfig.from_dict({"poisson_radius": 4, "z_layers": zones_dict})

    assert config.poisson_radius == 4.0
    assert config.density == 1.0
    assert (config.min_scale, config.max_scale) == (0.5, 1.5)
    assert config.rotation_range == (0.0, 360.0)
    assert config.seed is None
    assert config.output == "placements.json"
    assert config.z_layers.front.max == 3.0


def test_from_dict_accepts_camel_case_keys(zones_dict):
    config = PlacementConfig.from_dict(
        {
            "seed": "hello.",
            "mask": "mask.png",
            "tileMetadata": "tiles.json",
            "poissonRadius": 12,
            "density": 0.8,
            "minScale": 0.6,
            "maxScale": 1.4,
            "rotationRange": [-30, 30],
            "zLayers": zones_dict,
            "output": "placements.json",
        }
    )

    assert config.poisson_radius == 12.0
    assert config.tile_metadata == "tiles.json"
    assert config.rotation_range == (-30.0, 30.0)
    assert config.seed == "hello."


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"poisson_radius": 0}, "poisson_radius"),
        ({"poisson_radius": -2.5}, "poisson_radius"),
        ({"density": 0}, "density"),
        ({"min_scale": 2.0, "max_scale": 1.0}, "Inverted scale"),
        ({"rotation_range": [90, 0]}, "Inverted rotation"),
        ({"rotation_range": [1, 2, 3]}, "rotation_range"),
        ({"poisson_radius": "wide"}, "Invalid numeric"),
        ({"output": None}, "output"),
        ({"output": ""}, "output"),
        ({"mask": 3}, "mask"),
        ({"tileMetadata": ["tiles.json"]}, "tile_metadata"),
        ({"preview": True}, "preview"),
        ({"min_scale": math.nan}, "Scale range must be finite"),
        ({"max_scale": math.inf}, "Scale range must be finite"),
        ({"rotation_range": [math.nan, 90]}, "Rotation range must be finite"),
        ({"rotation_range": [0, math.nan]}, "Rotation range must be finite"),
        ({"density": math.nan}, "density"),
    ],
)
def test_invalid_values(config_dict, overrides, message):
    with pytest.raises(PlacementConfigError, match=message):
        PlacementConfig.from_dict({**config_dict, **overrides})


def test_missing_required_key(config_dict):
    del config_dict["poisson_radius"]
    with pytest.raises(PlacementConfigError, match="poisson_radius"):
        PlacementConfig.from_dict(config_dict)


def test_malformed_z_layers(config_dict):
    config_dict["z_layers"] = {"back": {"min": 0, "max": 1}, "mid": {"min": 1}}
    with pytest.raises(PlacementConfigError, match="z_layers"):
        PlacementConfig.from_dict(config_dict)


def test_overlapping_z_layers_rejected(config_dict):
    config_dict["z_layers"] = {
        "back": {"min": 0, "max": 1.5},
        "mid": {"min": 1, "max": 2},
        "front": {"min": 2, "max": 3},
    }
    with pytest.raises(PlacementConfigError, match="ordered and non-overlapping"):
        PlacementConfig.from_dict(config_dict)


def test_density_above_one_is_allowed(config_dict):
    assert PlacementConfig.from_dict({**config_dict, "density": 3}).density == 3.0


def test_config_error_is_value_error():
    assert issubclass(PlacementConfigError, ValueError)


def test_placement_to_dict_field_order():
    placement = Placement("a.png", 1.0, 2.0, 0.5, 1.1, 45.0, 2, 0.25)
    assert list(placement.to_dict()) == ["file", "x", "y", "z", "scale", "rotation", "layer", "brightness"]


def test_optional_paths_may_be_null(config_dict):
    config = PlacementConfig.from_dict({**config_dict, "mask": None, "tile_metadata": None, "preview": None})
    assert config.mask is None
    assert config.preview is None
    assert config.output == "placements.json"


def test_nan_scale_fails_before_generation(config_dict, tiles):
    with pytest.raises(PlacementConfigError):
        generate_placements(make_mask(8, 8), tiles, PlacementConfig.from_dict({**config_dict, "min_scale": math.nan}))

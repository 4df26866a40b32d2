from __future__ import annotations

import json
import logging

import pytest
from PIL import Image

from mask_scatter.exporter import PlacementExporter, read_placements
from mask_scatter.placement import Placement
from mask_scatter.utils.config import ConfigLoader, load_config, load_config_file
from mask_scatter.utils.logging import setup_logging
from mask_scatter.utils.paths import PathManager, run_seed
from mask_scatter.utils.validation import (
    validate_mask_file,
    validate_placements_file,
    validate_tile_metadata_file,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_load_yaml_and_json(tmp_path):
    (tmp_path / "placement.yaml").write_text("poisson_radius: 4\nseed: abc\n")
    (tmp_path / "legacy.json").write_text(json.dumps({"poissonRadius": 2}))

    assert load_config(tmp_path, "placement") == {"poisson_radius": 4, "seed": "abc"}
    assert load_config(tmp_path, "legacy") == {"poissonRadius": 2}
    assert set(ConfigLoader(tmp_path).load_all()) == {"placement", "legacy"}


def test_yaml_preferred_over_json(tmp_path):
    (tmp_path / "placement.yaml").write_text("source: yaml\n")
    (tmp_path / "placement.json").write_text('{"source": "json"}')
    assert load_config(tmp_path, "placement")["source"] == "yaml"


def test_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigLoader(tmp_path / "nope")
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path, "placement")


def test_config_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError, match="mapping"):
        load_config_file(path)


def test_path_manager_resolves_relative_paths(tmp_path):
    paths = PathManager(
        tmp_path,
        mask="masks/mask.png",
        tile_metadata=str(tmp_path / "abs" / "tiles.json"),
        output="out/run/placements.json",
        preview="out/preview.png",
    )

    assert paths.mask_path == tmp_path / "masks" / "mask.png"
    assert paths.tile_metadata_path == tmp_path / "abs" / "tiles.json"
    assert paths.output_path.parent.is_dir()

    run = paths.for_run(7)
    assert run.output_path == tmp_path / "out" / "run" / "placements_0007.json"
    assert run.preview_path == tmp_path / "out" / "preview_0007.png"
    assert run.mask_path == paths.mask_path


def test_for_run_suffixes_outputs(tmp_path):
    paths = PathManager(tmp_path, mask="mask.png", tile_metadata="tiles.json", output="placements.json")

    run = paths.for_run(12)
    assert run.output_path == tmp_path / "placements_0012.json"
    assert run.preview_path is None
    assert run.tile_metadata_path == paths.tile_metadata_path
    assert paths.for_run(12345).output_path.name == "placements_12345.json"


@pytest.mark.parametrize(
    "base_seed, run_id, auto_increment, expected",
    [
        (100, 0, True, 100),
        (100, 7, True, 107),
        (100, 7, False, 100),
        (0, 3, True, 3),
    ],
)
def test_run_seed(base_seed, run_id, auto_increment, expected):
    assert run_seed(base_seed, run_id, auto_increment) == expected


def test_validate_tile_metadata_rejects_bad_entries(tmp_path):
    no_brightness = tmp_path / "tiles.yaml"
    no_brightness.write_text("- file: a.png\n")
    not_list = tmp_path / "tiles.json"
    not_list.write_text(json.dumps({"file": "a.png", "meanBrightness": 0.5}))

    assert not validate_tile_metadata_file(no_brightness)
    assert not validate_tile_metadata_file(not_list)
    assert not validate_tile_metadata_file(tmp_path / "missing.json")


def test_path_manager_requires_inputs(tmp_path):
    with pytest.raises(ValueError, match="mask"):
        PathManager(tmp_path, mask=None, tile_metadata="tiles.json")
    with pytest.raises(ValueError, match="tile metadata"):
        PathManager(tmp_path, mask="mask.png", tile_metadata="")


def test_validate_mask_file(tmp_path):
    good = tmp_path / "mask.png"
    Image.new("RGBA", (4, 4), (255, 255, 255, 255)).save(good)
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"not an image")

    assert validate_mask_file(good)
    assert not validate_mask_file(bad)
    assert not validate_mask_file(tmp_path / "missing.png")


def test_validate_tile_metadata_file(tmp_path):
    good = tmp_path / "tiles.json"
    good.write_text(json.dumps([{"file": "a.png", "meanBrightness": 0.5}]))
    empty = tmp_path / "empty.json"
    empty.write_text("[]")
    broken = tmp_path / "broken.json"
    broken.write_text("{")

    assert validate_tile_metadata_file(good)
    assert not validate_tile_metadata_file(empty)
    assert not validate_tile_metadata_file(broken)


def test_export_and_validate(tmp_path):
    placements = [
        Placement("a.png", 1.5, 2.25, 0.5, 1.1, 45.0, 2, 0.2),
        Placement("b.png", 3.0, 4.0, 2.5, 0.7, 300.0, 0, 0.9),
    ]

    path = PlacementExporter().export(placements, tmp_path / "out" / "placements.json")

    records = json.loads(path.read_text())
    assert records[0] == {
        "file": "a.png", "x": 1.5, "y": 2.25, "z": 0.5,
        "scale": 1.1, "rotation": 45.0, "layer": 2, "brightness": 0.2,
    }
    assert read_placements(path) == placements
    assert validate_placements_file(path, min_count=2)
    assert not validate_placements_file(path, min_count=3)


def test_validate_placements_missing_fields(tmp_path):
    path = tmp_path / "placements.json"
    path.write_text(json.dumps([{"file": "a.png", "x": 1}]))
    assert not validate_placements_file(path)


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    setup_logging(level="DEBUG", log_file=log_file, format_style="simple")

    logging.getLogger("mask_scatter.test").debug("hello placements")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "DEBUG: hello placements" in log_file.read_text()
    assert logging.getLogger("matplotlib").level == logging.WARNING

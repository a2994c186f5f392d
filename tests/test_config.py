import json

import pytest

from bayer2tga.config import DEFAULT_CONFIG, SensorConfig, load_config
from bayer2tga.errors import ConfigError


def test_default_config_matches_imx477_rg10_mode():
    cfg = DEFAULT_CONFIG
    assert (cfg.width, cfg.height) == (1920, 1080)
    assert cfg.max_input == 1023
    assert cfg.max_output == 255
    assert cfg.mosaic_shape == (2160, 3840)
    assert cfg.input_size == 16_588_800
    assert cfg.output_size == 1920 * 1080 * 3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width": 0},
        {"height": -2},
        {"width": 2.0},
        {"input_bits": 17},
        {"output_bits": 9},
        {"byte_order": "big"},
    ],
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ConfigError) as info:
        SensorConfig(**kwargs)
    assert info.value.stage == "config"


def test_load_config_round_trip(tmp_path):
    path = tmp_path / "sensor.json"
    cfg = SensorConfig(width=8, height=6, byte_order=">")
    path.write_text(json.dumps(cfg.to_dict()), encoding="utf-8")
    assert load_config(path) == cfg


def test_load_config_rejects_unknown_keys(tmp_path):
    path = tmp_path / "sensor.json"
    path.write_text(json.dumps({"width": 8, "pattern": "BGGR"}), encoding="utf-8")
    with pytest.raises(ConfigError, match="pattern"):
        load_config(path)


def test_load_config_rejects_bad_json(tmp_path):
    path = tmp_path / "sensor.json"
    path.write_text("{width: 8", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_rejects_non_utf8(tmp_path):
    path = tmp_path / "sensor.json"
    path.write_bytes(b"\xff\xfe\x00{")
    with pytest.raises(ConfigError):
        load_config(path)

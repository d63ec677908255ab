"""core.settings_codec の JSON encode/decode をテスト。"""

from __future__ import annotations

import json
import logging

import pytest

from dotgrid.core.config import GenConfig, PixelRect
from dotgrid.core.settings_codec import (
    SETTINGS_VERSION,
    decode_settings,
    dumps_settings,
    encode_settings,
    loads_settings,
)


def test_encode_uses_snake_case_and_version() -> None:
    payload = encode_settings(GenConfig(seed="abc"))
    assert payload["version"] == SETTINGS_VERSION
    assert payload["step_size"] == 50
    assert payload["seed"] == "abc"
    assert payload["blockout"] is None
    assert isinstance(payload["palette"], list)


def test_dumps_then_loads_restores_config() -> None:
    config = GenConfig(
        seed="abc",
        step_size=25,
        max_line_length=4,
        blockout=PixelRect(left=1, top=2, right=3, bottom=4),
        palette=("#fff", "#000"),
        fill_background=False,
    )
    text = dumps_settings(config)
    assert json.loads(text)["blockout"] == {"left": 1, "top": 2, "right": 3, "bottom": 4}
    assert loads_settings(text) == config


def test_decode_accepts_browser_camel_case_keys() -> None:
    payload = {
        "version": 1,
        "animate": False,
        "keepSeed": True,
        "stepSize": 40,
        "circleSize": 8,
        "lineChance": 0.35,
        "colorsPerLine": 2,
        "overrideXCount": 3,
        "limitLinesToGrid": False,
        "whiteBackground": True,
        "seed": "xyz",
    }
    config = decode_settings(payload)
    assert config.keep_seed is True
    assert config.step_size == 40.0
    assert config.circle_size == 8.0
    assert config.line_chance == 0.35
    assert config.colors_per_line == 2
    assert config.override_x_count == 3
    assert config.limit_lines_to_grid is False
    assert config.white_background is True
    assert config.seed == "xyz"


def test_decode_keeps_base_for_missing_keys() -> None:
    base = GenConfig(width=1200, seed="base")
    config = decode_settings({"height": 900}, base=base)
    assert config.width == 1200
    assert config.height == 900.0
    assert config.seed == "base"


def test_decode_drops_unknown_keys_and_bad_values(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="dotgrid.core.settings_codec")
    config = decode_settings(
        {
            "unknown": 1,
            "colored_dots": "yes",
            "palette": [],
            "blockout": {"left": 0},
            "step_size": 20,
        }
    )
    assert config.step_size == 20.0
    assert config.colored_dots is True
    assert config.palette == GenConfig().palette
    assert config.blockout is None
    assert len(caplog.records) == 4


def test_decode_rejects_non_mapping_payload() -> None:
    with pytest.raises(TypeError):
        decode_settings([1, 2, 3])

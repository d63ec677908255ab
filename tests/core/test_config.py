from __future__ import annotations

import dataclasses

import pytest

from dotgrid.core.config import (
    CONFIG_LIMITS,
    DEFAULT_PALETTE,
    GenConfig,
    PixelRect,
    hero_config,
    validate_config,
)


def test_defaults_match_panel_initial_values() -> None:
    config = GenConfig()
    assert (config.width, config.height) == (800, 800)
    assert config.padding == 100
    assert config.step_size == 50
    assert config.circle_size == 10
    assert config.line_chance == 0.2
    assert config.colors_per_line == 3
    assert config.max_line_length is None
    assert config.seed == ""
    assert config.limit_lines_to_grid is True
    assert config.line_overlap is False
    assert config.colored_dots is True
    assert config.fill_background is True
    assert config.blockout is None
    assert config.palette == DEFAULT_PALETTE
    assert len(DEFAULT_PALETTE) == 7


def test_config_is_frozen() -> None:
    config = GenConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.seed = "x"  # type: ignore[misc]


def test_replace_and_with_seed_return_new_instances() -> None:
    config = GenConfig()
    changed = config.replace(step_size=25, line_chance=0.5)
    assert changed.step_size == 25
    assert changed.line_chance == 0.5
    assert config.step_size == 50
    assert config.with_seed("abc").seed == "abc"


def test_palette_list_is_normalized_to_tuple() -> None:
    config = GenConfig(palette=["#fff", "#000"])  # type: ignore[arg-type]
    assert config.palette == ("#fff", "#000")
    hash(config.palette)


@pytest.mark.parametrize("palette", ["#fff", b"#fff"])
def test_string_palette_is_rejected(palette) -> None:
    with pytest.raises(TypeError):
        GenConfig(palette=palette)
    with pytest.raises(TypeError):
        GenConfig().replace(palette=palette)


def test_empty_palette_is_rejected() -> None:
    with pytest.raises(ValueError):
        GenConfig(palette=())


def test_pixel_rect_from_xywh() -> None:
    rect = PixelRect.from_xywh(10, 20, 300, 40)
    assert rect == PixelRect(left=10.0, top=20.0, right=310.0, bottom=60.0)


def test_hero_config_defaults() -> None:
    rect = PixelRect(left=100, top=100, right=400, bottom=200)
    config = hero_config(1200, 600, rect, seed="s")
    assert config.padding == 25
    assert config.step_size == 50
    assert config.line_chance == 0.1
    assert config.max_line_length == 3
    assert config.fill_background is False
    assert config.blockout == rect
    assert config.has_blockout
    assert config.seed == "s"
    assert hero_config(1200, 600, rect, line_chance=0.3).line_chance == 0.3


def test_validate_config_accepts_defaults() -> None:
    config = GenConfig()
    assert validate_config(config) is config


@pytest.mark.parametrize(
    "changes",
    [
        {"width": 100},
        {"step_size": 1000},
        {"line_chance": 1.5},
        {"colors_per_line": 0},
        {"max_line_length": 30},
    ],
)
def test_validate_config_rejects_out_of_range(changes: dict) -> None:
    with pytest.raises(ValueError):
        validate_config(GenConfig().replace(**changes))


def test_config_limits_cover_numeric_fields() -> None:
    assert set(CONFIG_LIMITS) <= {f.name for f in dataclasses.fields(GenConfig)}
    assert CONFIG_LIMITS["line_chance"].max == 1

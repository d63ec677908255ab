"""
どこで: `src/dotgrid/core/render.py`。
何を: seed 解決 → グリッド構築 → 占有 map 構築 → 全セル走査までの 1 回分の生成を行う。
なぜ: 全面生成と hero 生成で同じ入口 `render(config, sink)` を共有するため。
"""

from __future__ import annotations

import logging

from dotgrid.core.config import GenConfig
from dotgrid.core.exclusion import ExclusionZone
from dotgrid.core.grid import GridModel
from dotgrid.core.occupation import OccupationMap
from dotgrid.core.placer import ElementPlacer, PlacementStats
from dotgrid.core.random_source import SeededRandomSource, generate_seed
from dotgrid.core.sink import DrawingSink

_logger = logging.getLogger(__name__)

BACKGROUND_WHITE = "#ffffff"
BACKGROUND_BLACK = "#000000"


def resolve_seed(config: GenConfig) -> str:
    """config の seed を返す。空なら新しく生成する。"""
    seed = str(config.seed)
    if seed:
        return seed
    generated = generate_seed()
    _logger.debug("seed が未指定のため生成しました: %s", generated)
    return generated


def background_color(config: GenConfig) -> str | None:
    """背景矩形の色を返す。背景を描かない設定なら None。"""
    if not config.fill_background:
        return None
    return BACKGROUND_WHITE if config.white_background else BACKGROUND_BLACK


def render_pass(config: GenConfig, sink: DrawingSink) -> tuple[str, PlacementStats]:
    """1 回分の生成を行い、(解決済み seed, 集計) を返す。

    Raises
    ------
    InvalidGridError
        グリッドが成立しない場合。sink は一切呼ばれない。
    """

    seed = resolve_seed(config)
    grid = GridModel.from_config(config)

    exclusion: ExclusionZone | None = None
    if config.blockout is not None:
        exclusion = ExclusionZone.from_pixel_rect(
            config.blockout,
            padding=config.padding,
            step_size=config.step_size,
            grid=grid,
        )

    occupation = OccupationMap.for_grid(grid, exclusion)
    placer = ElementPlacer(
        config,
        grid,
        occupation,
        SeededRandomSource(seed),
        sink,
        exclusion=exclusion,
    )
    _logger.debug(
        "render: seed=%s grid=(%d, %d) exclusion=%s max_line_length=%d",
        seed,
        grid.nx,
        grid.ny,
        exclusion,
        placer.max_line_length,
    )

    # ここまでで設定の検証が済んでいるため、以降は失敗せずに描画が完走する。
    sink.begin(config.width, config.height, background_color(config))
    stats = placer.place_all()
    _logger.debug(
        "render done: circles=%d lines=%d skipped=%d",
        stats.circles,
        stats.lines,
        stats.skipped,
    )
    return seed, stats


def render(config: GenConfig, sink: DrawingSink) -> str:
    """1 回分の生成を sink へ描画し、実際に使った seed を返す。

    Parameters
    ----------
    config : GenConfig
        描画設定。seed が空なら生成した seed を使う。
    sink : DrawingSink
        描画先。先頭で `begin()` が呼ばれ、以前の内容は破棄される。

    Returns
    -------
    str
        解決済み seed。呼び出し側で保存すれば同じ絵を再現できる。
    """

    seed, _stats = render_pass(config, sink)
    return seed


__all__ = [
    "BACKGROUND_BLACK",
    "BACKGROUND_WHITE",
    "background_color",
    "render",
    "render_pass",
    "resolve_seed",
]

# どこで: `src/dotgrid/core/config.py`。
# 何を: 1 回の render に渡す不変設定 `GenConfig` と、その既定値・範囲検証を提供する。
# なぜ: パネル側が設定を書き換えても render 中の値が揺れないよう、値渡しの不変オブジェクトに固定するため。

"""描画設定（`GenConfig`）の定義。

`GenConfig` は render 呼び出しごとに組み立てられる不変データであり、
変更は `dataclasses.replace()`（`GenConfig.replace()`）で新しいインスタンスを作って行う。

`CONFIG_LIMITS` は UI 側で扱う範囲の目安で、`validate_config()` が参照する。
core（`render()`）自身は範囲検証を行わず、グリッドが成立するかだけを検証する。
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

DEFAULT_PALETTE: tuple[str, ...] = (
    "#FED61E",
    "#44B4E9",
    "#008317",
    "#002E5C",
    "#003A3E",
    "#6C2400",
    "#FF9900",
)
DEFAULT_DOT_COLOR = "#333"


@dataclass(frozen=True, slots=True)
class PixelRect:
    """ピクセル空間の矩形（除外領域の元データ）。

    Notes
    -----
    left <= right / top <= bottom は強制しない。反転した矩形は no-op の除外として扱われる。
    """

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_xywh(cls, x: float, y: float, width: float, height: float) -> PixelRect:
        """(x, y, width, height) 形式から矩形を作る。"""
        return cls(
            left=float(x),
            top=float(y),
            right=float(x) + float(width),
            bottom=float(y) + float(height),
        )


@dataclass(frozen=True, slots=True)
class ParamLimit:
    """数値パラメータの範囲（UI のスライダー範囲に相当）。"""

    min: float | None
    max: float | None
    step: float | None = None


@dataclass(frozen=True, slots=True)
class GenConfig:
    """1 回の render に渡す設定。

    Attributes
    ----------
    width, height:
        キャンバスのピクセル寸法。
    padding:
        キャンバス外周の余白（px）。
    step_size:
        グリッド間隔（px）。0 以下は `InvalidGridError`。
    circle_size:
        円の直径、および線の太さ（px）。
    line_chance:
        各セルで線を試みる確率 [0, 1]。
    colors_per_line:
        線グラデーションの stop 数。1 以下は offset 0 の 1 stop に縮退する。
    max_line_length:
        線長の上限（グリッド単位）。None の場合はグリッド寸法から導出する。
    seed:
        乱数 seed。空文字は「render 時に生成する」を意味する。
    keep_seed:
        regenerate 操作で seed を維持するか。
    override_x_count, override_y_count:
        0 より大きい場合、グリッド列数/行数をこの値で上書きする。
    limit_lines_to_grid:
        線をグリッド範囲内に切り詰めるか（除外領域なしの場合のみ有効）。
    line_overlap:
        線の通過セルを占有として記録しないか（除外領域なしの場合のみ有効）。
    colored_dots:
        円をパレットから塗るか。False なら `dot_color`。
    white_background:
        背景を白にするか（False は黒）。
    fill_background:
        キャンバス全面の背景矩形を描くか。
    blockout:
        除外領域（ピクセル空間）。None なら除外なし。
    palette:
        線/円の塗りに使う色の列。
    dot_color:
        `colored_dots=False` のときの円の色。
    """

    width: float = 800
    height: float = 800
    padding: float = 100
    step_size: float = 50
    circle_size: float = 10
    line_chance: float = 0.2
    colors_per_line: int = 3
    max_line_length: int | None = None
    seed: str = ""
    keep_seed: bool = False
    override_x_count: int = 0
    override_y_count: int = 0
    limit_lines_to_grid: bool = True
    line_overlap: bool = False
    colored_dots: bool = True
    white_background: bool = False
    fill_background: bool = True
    blockout: PixelRect | None = None
    palette: tuple[str, ...] = field(default=DEFAULT_PALETTE)
    dot_color: str = DEFAULT_DOT_COLOR

    def __post_init__(self) -> None:
        # 文字列は 1 文字ずつの色列に化けるため受け付けない。
        if isinstance(self.palette, (str, bytes)):
            raise TypeError(f"palette は色の配列である必要があります: got={self.palette!r}")
        # list で渡されても不変・ハッシュ可能な tuple に揃える。
        if not isinstance(self.palette, tuple):
            object.__setattr__(self, "palette", tuple(str(c) for c in self.palette))
        if not self.palette:
            raise ValueError("palette は 1 色以上である必要があります")

    def replace(self, **changes: Any) -> GenConfig:
        """指定フィールドだけを差し替えた新しい設定を返す。"""
        return dataclasses.replace(self, **changes)

    def with_seed(self, seed: str) -> GenConfig:
        """seed を差し替えた新しい設定を返す。"""
        return dataclasses.replace(self, seed=str(seed))

    @property
    def has_blockout(self) -> bool:
        return self.blockout is not None


def hero_config(
    width: float,
    height: float,
    blockout: PixelRect,
    *,
    seed: str = "",
    **changes: Any,
) -> GenConfig:
    """除外領域付き（hero 用）の既定設定を返す。

    ページ見出しの背後に敷く想定の控えめな既定値（padding 25 / line_chance 0.1 / 最大長 3）で、
    背景矩形は描かない。
    """

    base = GenConfig(
        width=float(width),
        height=float(height),
        padding=25,
        step_size=50,
        circle_size=10,
        line_chance=0.1,
        colors_per_line=3,
        max_line_length=3,
        seed=str(seed),
        colored_dots=True,
        fill_background=False,
        blockout=blockout,
    )
    return base.replace(**changes) if changes else base


CONFIG_LIMITS: dict[str, ParamLimit] = {
    "width": ParamLimit(min=500, max=5000, step=50),
    "height": ParamLimit(min=500, max=5000, step=50),
    "circle_size": ParamLimit(min=1, max=40, step=1),
    "padding": ParamLimit(min=0, max=500, step=10),
    "step_size": ParamLimit(min=5, max=500, step=5),
    "line_chance": ParamLimit(min=0, max=1, step=0.05),
    "colors_per_line": ParamLimit(min=1, max=25, step=1),
    "max_line_length": ParamLimit(min=2, max=20, step=1),
    "override_x_count": ParamLimit(min=0, max=100, step=1),
    "override_y_count": ParamLimit(min=0, max=100, step=1),
}


def validate_config(config: GenConfig) -> GenConfig:
    """`CONFIG_LIMITS` の範囲に収まっているか検証し、そのまま返す。

    Raises
    ------
    ValueError
        いずれかのフィールドが範囲外の場合（最初に見つかったもの）。
    """

    for name, limit in CONFIG_LIMITS.items():
        value = getattr(config, name)
        if value is None:
            continue
        v = float(value)
        if limit.min is not None and v < float(limit.min):
            raise ValueError(f"{name} は {limit.min} 以上である必要があります: got={value!r}")
        if limit.max is not None and v > float(limit.max):
            raise ValueError(f"{name} は {limit.max} 以下である必要があります: got={value!r}")
    return config


__all__ = [
    "CONFIG_LIMITS",
    "DEFAULT_DOT_COLOR",
    "DEFAULT_PALETTE",
    "GenConfig",
    "ParamLimit",
    "PixelRect",
    "hero_config",
    "validate_config",
]

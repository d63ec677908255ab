# どこで: `src/dotgrid/core/primitives.py`。
# 何を: placer が sink へ渡す描画プリミティブ（円 / グラデーション線）を定義する。
# なぜ: 描画先（SVG / 記録用）に依存しない最小の中間表現を固定するため。

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

Point = tuple[float, float]
Cell = tuple[int, int]

LINE_ROTATION_DEG = -45.0


@dataclass(frozen=True, slots=True)
class GradientStop:
    """グラデーション上の (offset, color)。offset は [0, 1]。"""

    offset: float
    color: str


@dataclass(frozen=True, slots=True)
class Circle:
    """円プリミティブ。

    Attributes
    ----------
    position:
        外接正方形の左上（グリッド位置から半径を引いた点）。
    radius:
        半径（circle_size / 2）。
    fill:
        塗り色。
    cell:
        描画元のグリッドセル。
    """

    position: Point
    radius: float
    fill: str
    cell: Cell

    @property
    def center(self) -> Point:
        return (self.position[0] + self.radius, self.position[1] + self.radius)


@dataclass(frozen=True, slots=True)
class GradientLine:
    """斜め（右上向き）のグラデーション線プリミティブ。

    Attributes
    ----------
    start, end:
        端点のピクセル座標（半径オフセットなし）。
    stroke_width:
        線幅（circle_size）。端は round cap。
    stops:
        グラデーション stop 列。
    rotation:
        グラデーションを自身の中心まわりに回す角度 [deg]。
    start_cell:
        始点のグリッドセル。
    length:
        切り詰め後の線長（グリッド単位）。終点セルは (x+length, y-length)。
    """

    start: Point
    end: Point
    stroke_width: float
    stops: tuple[GradientStop, ...]
    rotation: float
    start_cell: Cell
    length: int

    @property
    def end_cell(self) -> Cell:
        x, y = self.start_cell
        return (x + self.length, y - self.length)

    def cells(self) -> list[Cell]:
        """線が通過するグリッドセル（始点/終点を含む）を返す。"""
        x, y = self.start_cell
        return [(x + i, y - i) for i in range(self.length + 1)]


def gradient_offsets(n_stops: int) -> list[float]:
    """stop 数に対する等間隔 offset を返す。

    2 以上なら 0 から 1 まで等間隔、1 以下なら `[0.0]`（ゼロ除算を避ける縮退）。
    """

    n = int(n_stops)
    if n < 2:
        return [0.0]
    return [float(v) for v in np.linspace(0.0, 1.0, n)]


__all__ = [
    "Cell",
    "Circle",
    "GradientLine",
    "GradientStop",
    "LINE_ROTATION_DEG",
    "Point",
    "gradient_offsets",
]

# どこで: `src/dotgrid/core/grid.py`。
# 何を: キャンバス寸法・余白・間隔からグリッドの列数/行数と、グリッド→ピクセル変換を与える。
# なぜ: 走査範囲と座標変換を 1 箇所に閉じ、placer/exclusion が同じ寸法を共有するため。

from __future__ import annotations

import math
from dataclasses import dataclass

from dotgrid.core.config import GenConfig


class InvalidGridError(ValueError):
    """グリッドが成立しない設定（step_size <= 0、列数/行数 <= 0）を表す。"""


@dataclass(frozen=True, slots=True)
class ReducedDims:
    """余白を除いた描画領域の寸法。"""

    width: float
    height: float
    half_circle: float


@dataclass(frozen=True, slots=True)
class GridModel:
    """走査対象グリッドの寸法。

    Attributes
    ----------
    nx, ny:
        グリッドの最大添字。走査は両端を含むため、列数は nx+1、行数は ny+1 になる。
    padding:
        キャンバス外周の余白（px）。
    reduced:
        余白を除いた描画領域。
    """

    nx: int
    ny: int
    padding: float
    reduced: ReducedDims

    @classmethod
    def from_config(cls, config: GenConfig) -> GridModel:
        """設定からグリッドを構築する。

        Raises
        ------
        InvalidGridError
            step_size <= 0、または列数/行数が 0 以下になる場合。
        """

        step = float(config.step_size)
        padding = float(config.padding)
        reduced = ReducedDims(
            width=float(config.width) - 2.0 * padding,
            height=float(config.height) - 2.0 * padding,
            half_circle=float(config.circle_size) / 2.0,
        )

        override_x = int(config.override_x_count)
        override_y = int(config.override_y_count)
        # override が両方効いていれば step_size は使わないが、設定の誤りとしては常に弾く。
        if not step > 0.0:
            raise InvalidGridError(f"step_size は正である必要があります: got={config.step_size!r}")

        nx = override_x if override_x > 0 else int(math.floor(reduced.width / step))
        ny = override_y if override_y > 0 else int(math.floor(reduced.height / step))
        if nx <= 0 or ny <= 0:
            raise InvalidGridError(
                "グリッドの列数/行数は 1 以上である必要があります"
                f": got=(nx={nx}, ny={ny}), reduced=({reduced.width}, {reduced.height}), step={step}"
            )
        return cls(nx=nx, ny=ny, padding=padding, reduced=reduced)

    @property
    def n_columns(self) -> int:
        return self.nx + 1

    @property
    def n_rows(self) -> int:
        return self.ny + 1

    @property
    def n_cells(self) -> int:
        return self.n_columns * self.n_rows

    def contains(self, x: int, y: int) -> bool:
        """(x, y) が走査範囲（両端含む）にあるなら True を返す。"""
        return 0 <= x <= self.nx and 0 <= y <= self.ny

    def position(self, x: float, y: float, *, subtract_half_circle: bool) -> tuple[float, float]:
        """グリッド座標をピクセル座標へ変換する。

        円の配置（左上基準）では半径分を両軸から引き、線の端点では引かない。
        """

        px = x / self.nx * self.reduced.width + self.padding
        py = y / self.ny * self.reduced.height + self.padding
        if subtract_half_circle:
            px -= self.reduced.half_circle
            py -= self.reduced.half_circle
        return (px, py)


__all__ = ["GridModel", "InvalidGridError", "ReducedDims"]

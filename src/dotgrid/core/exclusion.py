"""
どこで: `src/dotgrid/core/exclusion.py`。
何を: ピクセル矩形（ページ本文など）をグリッド座標の除外範囲へ変換する。
なぜ: 除外領域の内側を描画前に占有済みにし、線の始点判定・切り詰めにも同じ境界を使うため。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from dotgrid.core.config import PixelRect
from dotgrid.core.grid import GridModel

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExclusionZone:
    """グリッド空間の除外範囲。

    Attributes
    ----------
    top, left, right, bottom:
        グリッド座標の境界。事前占有されるのは
        `left <= x < right` かつ `top <= y < bottom - 2` のセル。
    active:
        False の場合は no-op（反転・グリッド外の矩形）。事前占有も始点判定も行わない。
    """

    top: int
    left: int
    right: int
    bottom: int
    active: bool = True

    @classmethod
    def from_pixel_rect(
        cls,
        rect: PixelRect,
        *,
        padding: float,
        step_size: float,
        grid: GridModel | None = None,
    ) -> ExclusionZone:
        """ピクセル矩形をグリッド境界へ変換する。

        左/上は padding を引き、右/下は padding を足してから step_size で割って切り捨てる。
        `grid` を渡した場合、反転またはグリッド外に完全に出た矩形を no-op として返す。
        """

        step = float(step_size)
        pad = float(padding)
        zone = cls(
            top=int(math.floor((float(rect.top) - pad) / step)),
            left=int(math.floor((float(rect.left) - pad) / step)),
            right=int(math.floor((float(rect.right) + pad) / step)),
            bottom=int(math.floor((float(rect.bottom) + pad) / step)),
        )
        if grid is not None and zone.is_degenerate(grid):
            _logger.warning(
                "除外領域が反転またはグリッド外のため無視します: rect=%s zone=(%d, %d, %d, %d) grid=(%d, %d)",
                rect,
                zone.left,
                zone.top,
                zone.right,
                zone.bottom,
                grid.nx,
                grid.ny,
            )
            return cls(top=zone.top, left=zone.left, right=zone.right, bottom=zone.bottom, active=False)
        return zone

    def is_degenerate(self, grid: GridModel) -> bool:
        """反転している、またはグリッドと重ならないなら True を返す。"""

        if self.left > self.right or self.top > self.bottom:
            return True
        return (
            self.right <= 0
            or self.left > grid.nx
            or self.bottom <= 0
            or self.top > grid.ny
        )

    def blocked_rows(self) -> range:
        """事前占有する行の範囲を返す。"""
        if not self.active:
            return range(0)
        return range(self.top, self.bottom - 2)

    def blocked_columns(self) -> range:
        """事前占有する列の範囲を返す。"""
        if not self.active:
            return range(0)
        return range(self.left, self.right)

    def allows_line_start(self, x: int, y: int) -> bool:
        """(x, y) から線を始めてよいなら True を返す。

        左端と下端は事前占有より 1 セル広く扱う。
        """

        if not self.active:
            return True
        return x < self.left - 1 or x >= self.right or y < self.top or y >= self.bottom - 1


__all__ = ["ExclusionZone"]

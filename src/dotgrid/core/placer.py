"""
どこで: `src/dotgrid/core/placer.py`。
何を: グリッドの各セルについて「円 / 斜め線」を決め、線長の切り詰めと色付けを行って sink へ流す。
なぜ: 除外領域なし（全面）と除外領域あり（hero）の 2 系統を 1 つの走査に統一し、挙動のずれを無くすため。
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from dotgrid.core.config import GenConfig
from dotgrid.core.exclusion import ExclusionZone
from dotgrid.core.grid import GridModel
from dotgrid.core.occupation import OccupationMap
from dotgrid.core.primitives import (
    LINE_ROTATION_DEG,
    Circle,
    GradientLine,
    GradientStop,
    gradient_offsets,
)
from dotgrid.core.random_source import SeededRandomSource
from dotgrid.core.sink import DrawingSink

MIN_LINE_LENGTH = 2

# --- 乱数消費の順序（再現性の前提）---
#
# 1) 占有済みセルは何も消費せずにスキップする。
# 2) 線判定:
#    - 除外領域なし: random() を引き、成功かつ x != nx かつ y != 0 のときだけ線長を引く。
#    - 除外領域あり: random() を引き、成功なら位置に関係なく線長を引いてから配置可否を判定する。
# 3) 線: stop ごとに index(len(palette)) を先頭から順に引く。
# 4) 円: colored_dots のときだけ index(len(palette)) を 1 回引く。
#
# 順序・回数を変えると、同じ seed でも以降の出力がすべて変わる。


def iter_cells(grid: GridModel) -> Iterator[tuple[int, int]]:
    """走査順（x 昇順 → y 昇順、両端含む）でセルを返す。"""
    for x in range(grid.nx + 1):
        for y in range(grid.ny + 1):
            yield (x, y)


def resolve_max_line_length(config: GenConfig, grid: GridModel) -> int:
    """線長の上限を返す。未指定ならグリッドの短辺の半分（最低 2）。"""
    if config.max_line_length is None:
        return max(MIN_LINE_LENGTH, min(grid.nx, grid.ny) // 2)
    return max(MIN_LINE_LENGTH, int(config.max_line_length))


@dataclass(slots=True)
class PlacementStats:
    """1 回の走査の集計。"""

    scanned: int = 0
    skipped: int = 0
    circles: int = 0
    lines: int = 0


class ElementPlacer:
    """セル単位の配置判定を行い、プリミティブを sink へ送る。

    Parameters
    ----------
    config : GenConfig
        描画設定。
    grid : GridModel
        走査対象グリッド。
    occupation : OccupationMap
        占有 map。除外領域がある場合は事前占有済みのものを渡す。
    random : SeededRandomSource
        乱数ストリーム。
    sink : DrawingSink
        描画先。
    exclusion : ExclusionZone or None
        除外領域。None なら全面生成（limit_lines_to_grid / line_overlap が有効）。
    """

    def __init__(
        self,
        config: GenConfig,
        grid: GridModel,
        occupation: OccupationMap,
        random: SeededRandomSource,
        sink: DrawingSink,
        *,
        exclusion: ExclusionZone | None = None,
    ) -> None:
        self.config = config
        self.grid = grid
        self.occupation = occupation
        self.random = random
        self.sink = sink
        self.exclusion = exclusion
        self.max_line_length = resolve_max_line_length(config, grid)
        self.stats = PlacementStats()

    def place_all(self) -> PlacementStats:
        """全セルを走査順に処理し、集計を返す。"""
        for x, y in iter_cells(self.grid):
            self.place(x, y)
        return self.stats

    def place(self, x: int, y: int) -> Circle | GradientLine | None:
        """1 セルを処理する。占有済みなら None を返す。"""

        self.stats.scanned += 1
        if self.occupation.is_occupied(x, y):
            self.stats.skipped += 1
            return None

        length = self._roll_line_length(x, y)
        if length > 0:
            return self._emit_line(x, y, self._clip_length(x, y, length))
        return self._emit_circle(x, y)

    def _roll_line_length(self, x: int, y: int) -> int:
        """線を引く場合はその長さ、引かない場合は 0 を返す。"""

        nx = self.grid.nx
        chance = float(self.config.line_chance)

        if self.exclusion is None:
            if self.random.random() < chance and x != nx and y != 0:
                return self.random.int_between(MIN_LINE_LENGTH, self.max_line_length)
            return 0

        length = 0
        if self.random.random() < chance:
            length = self.random.int_between(MIN_LINE_LENGTH, self.max_line_length)
        if length > 0 and x != nx and y != 0 and self.exclusion.allows_line_start(x, y):
            return length
        return 0

    def _clip_length(self, x: int, y: int, length: int) -> int:
        """キャンバス端・最上段・除外領域の左/下端に合わせて線長を切り詰める。"""

        nx = self.grid.nx
        zone = self.exclusion

        if zone is not None and zone.active:
            # 除外領域の左端と下端を、キャンバス端/最上段と同時に考慮する式をそのまま使う。
            overshoot_x = min(x + length - nx, x + length - zone.left)
            overshoot_y = min(length - y, zone.bottom - y - length)
            overshoot = max(overshoot_x, overshoot_y)
        elif zone is not None or self.config.limit_lines_to_grid:
            overshoot = max(x + length - nx, length - y)
        else:
            return length

        if overshoot > 0:
            length -= overshoot
        return length

    def _gradient_stops(self) -> tuple[GradientStop, ...]:
        palette = self.config.palette
        return tuple(
            GradientStop(offset=offset, color=palette[self.random.index(len(palette))])
            for offset in gradient_offsets(self.config.colors_per_line)
        )

    def _emit_line(self, x: int, y: int, length: int) -> GradientLine:
        grid = self.grid
        line = GradientLine(
            start=grid.position(x, y, subtract_half_circle=False),
            end=grid.position(x + length, y - length, subtract_half_circle=False),
            stroke_width=float(self.config.circle_size),
            stops=self._gradient_stops(),
            rotation=LINE_ROTATION_DEG,
            start_cell=(x, y),
            length=int(length),
        )
        self.sink.draw_gradient_line(line)
        self.stats.lines += 1

        # line_overlap は除外領域なしの場合だけ効く（通過セルを記録しない）。
        if self.exclusion is None and self.config.line_overlap:
            return line
        for i in range(length + 1):
            if x + i <= grid.nx:
                self.occupation.mark(x + i, y - i)
        return line

    def _emit_circle(self, x: int, y: int) -> Circle:
        config = self.config
        if config.colored_dots:
            fill = config.palette[self.random.index(len(config.palette))]
        else:
            fill = config.dot_color
        circle = Circle(
            position=self.grid.position(x, y, subtract_half_circle=True),
            radius=float(config.circle_size) / 2.0,
            fill=fill,
            cell=(x, y),
        )
        self.sink.draw_circle(circle)
        self.stats.circles += 1
        self.occupation.mark(x, y)
        return circle


__all__ = [
    "ElementPlacer",
    "MIN_LINE_LENGTH",
    "PlacementStats",
    "iter_cells",
    "resolve_max_line_length",
]

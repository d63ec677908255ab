# どこで: `src/dotgrid/core/occupation.py`。
# 何を: 1 回の render で描画済みになったグリッドセルを記録する。
# なぜ: 同一セルへの二重描画（円の上に線、線の上に円）を防ぐため。

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from dotgrid.core.exclusion import ExclusionZone
from dotgrid.core.grid import GridModel


class OccupationMap:
    """列ごとの占有ビット集合。

    Parameters
    ----------
    n_columns : int
        列数（nx+1）。
    n_rows : int
        行数（ny+1）。

    Notes
    -----
    - 形状は render 開始時に固定し、以降は伸縮しない。
    - グリッド外（負の行や nx を超える列）への mark は無視する。
      範囲外セルは走査されないため、記録しなくても挙動は変わらない。
    """

    def __init__(self, n_columns: int, n_rows: int) -> None:
        if int(n_columns) <= 0 or int(n_rows) <= 0:
            raise ValueError(
                f"OccupationMap の寸法は正である必要があります: got=({n_columns}, {n_rows})"
            )
        self._cells = np.zeros((int(n_columns), int(n_rows)), dtype=np.bool_)

    @classmethod
    def for_grid(cls, grid: GridModel, exclusion: ExclusionZone | None = None) -> OccupationMap:
        """グリッド寸法で空の map を作り、除外領域があれば事前に占有する。"""

        occ = cls(grid.n_columns, grid.n_rows)
        if exclusion is not None:
            occ.block(exclusion)
        return occ

    @property
    def shape(self) -> tuple[int, int]:
        return (int(self._cells.shape[0]), int(self._cells.shape[1]))

    def _in_range(self, x: int, y: int) -> bool:
        n_cols, n_rows = self.shape
        return 0 <= x < n_cols and 0 <= y < n_rows

    def is_occupied(self, x: int, y: int) -> bool:
        if not self._in_range(x, y):
            return False
        return bool(self._cells[x, y])

    def mark(self, x: int, y: int) -> bool:
        """(x, y) を占有済みにする。新たに占有した場合だけ True を返す。"""
        if not self._in_range(x, y):
            return False
        if self._cells[x, y]:
            return False
        self._cells[x, y] = True
        return True

    def block(self, exclusion: ExclusionZone) -> None:
        """除外領域の内側（事前占有範囲）をまとめて占有済みにする。"""

        n_cols, n_rows = self.shape
        cols = exclusion.blocked_columns()
        rows = exclusion.blocked_rows()
        c0, c1 = max(cols.start, 0), min(cols.stop, n_cols)
        r0, r1 = max(rows.start, 0), min(rows.stop, n_rows)
        if c0 >= c1 or r0 >= r1:
            return
        self._cells[c0:c1, r0:r1] = True

    def occupied_rows(self, x: int) -> list[int]:
        """列 x の占有済み行を昇順で返す。"""
        n_cols, _ = self.shape
        if not 0 <= x < n_cols:
            return []
        return [int(y) for y in np.flatnonzero(self._cells[x])]

    def count(self) -> int:
        return int(np.count_nonzero(self._cells))

    def __iter__(self) -> Iterator[tuple[int, int]]:
        for x, y in np.argwhere(self._cells):
            yield (int(x), int(y))

    def as_array(self) -> np.ndarray:
        """占有ビット配列の読み取り専用ビューを返す。"""
        view = self._cells.view()
        view.setflags(write=False)
        return view


__all__ = ["OccupationMap"]

# どこで: `src/dotgrid/core/sink.py`。
# 何を: 描画先（sink）のプロトコルと、プリミティブを記録するだけの `RecordingSink` を提供する。
# なぜ: core を描画バックエンドから切り離し、テストでは出力列をそのまま比較できるようにするため。

from __future__ import annotations

from typing import Protocol, runtime_checkable

from dotgrid.core.primitives import Circle, GradientLine


@runtime_checkable
class DrawingSink(Protocol):
    """render が描画を流し込む先。

    `begin()` は 1 回の render の先頭で必ず 1 回呼ばれ、以前の描画内容を破棄する。
    """

    def begin(self, width: float, height: float, background: str | None) -> None: ...

    def draw_circle(self, circle: Circle) -> None: ...

    def draw_gradient_line(self, line: GradientLine) -> None: ...


class RecordingSink:
    """受け取ったプリミティブを順序どおり記録する sink。"""

    def __init__(self) -> None:
        self.size: tuple[float, float] | None = None
        self.background: str | None = None
        self.primitives: list[Circle | GradientLine] = []
        self.begin_count = 0

    def begin(self, width: float, height: float, background: str | None) -> None:
        self.size = (float(width), float(height))
        self.background = background
        self.primitives = []
        self.begin_count += 1

    def draw_circle(self, circle: Circle) -> None:
        self.primitives.append(circle)

    def draw_gradient_line(self, line: GradientLine) -> None:
        self.primitives.append(line)

    @property
    def circles(self) -> list[Circle]:
        return [p for p in self.primitives if isinstance(p, Circle)]

    @property
    def lines(self) -> list[GradientLine]:
        return [p for p in self.primitives if isinstance(p, GradientLine)]


__all__ = ["DrawingSink", "RecordingSink"]

"""
どこで: `src/dotgrid/export/svg.py`。
何を: render の出力を svgwrite で SVG 文書に組み立てる sink と、保存関数を提供する。
なぜ: 生成結果をベクタ形式で書き出し、ブラウザ/ベクタ編集ソフトでそのまま開けるようにするため。
"""

from __future__ import annotations

from pathlib import Path

import svgwrite

from dotgrid.core.config import GenConfig
from dotgrid.core.primitives import Circle, GradientLine
from dotgrid.core.render import render

# gradient は objectBoundingBox 単位なので、自身の中心は (0.5, 0.5)。
_GRADIENT_CENTER = (0.5, 0.5)


class SvgSink:
    """プリミティブを SVG 要素として積む sink。

    Notes
    -----
    - `begin()` ごとに新しい `svgwrite.Drawing` を作り、以前の内容は破棄する。
    - 線ごとに `linearGradient` を `<defs>` へ追加し、`url(#grad-N)` で stroke に割り当てる。
    """

    def __init__(self, *, id_prefix: str = "grad") -> None:
        self.id_prefix = str(id_prefix)
        self._drawing: svgwrite.Drawing | None = None
        self._gradient_count = 0

    @property
    def drawing(self) -> svgwrite.Drawing:
        if self._drawing is None:
            raise RuntimeError("SvgSink.begin() が呼ばれていません")
        return self._drawing

    def begin(self, width: float, height: float, background: str | None) -> None:
        w = float(width)
        h = float(height)
        dwg = svgwrite.Drawing(size=(w, h))
        dwg.viewbox(0, 0, w, h)
        if background is not None:
            dwg.add(dwg.rect(insert=(0, 0), size=(w, h), fill=background))
        self._drawing = dwg
        self._gradient_count = 0

    def draw_circle(self, circle: Circle) -> None:
        dwg = self.drawing
        dwg.add(dwg.circle(center=circle.center, r=circle.radius, fill=circle.fill))

    def draw_gradient_line(self, line: GradientLine) -> None:
        dwg = self.drawing
        self._gradient_count += 1
        gradient = dwg.linearGradient(id=f"{self.id_prefix}-{self._gradient_count}")
        for stop in line.stops:
            gradient.add_stop_color(offset=stop.offset, color=stop.color)
        gradient.rotate(line.rotation, center=_GRADIENT_CENTER)
        dwg.defs.add(gradient)
        dwg.add(
            dwg.line(
                start=line.start,
                end=line.end,
                stroke=gradient.get_funciri(),
                stroke_width=line.stroke_width,
                stroke_linecap="round",
            )
        )

    @property
    def gradient_count(self) -> int:
        return self._gradient_count

    def to_svg(self) -> str:
        """現在のキャンバスを SVG 文字列として返す。"""
        return self.drawing.tostring()

    def save(self, path: str | Path) -> Path:
        """現在のキャンバスを SVG ファイルとして保存し、パスを返す。"""
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        self.drawing.saveas(str(out), pretty=True)
        return out


def export_svg(config: GenConfig, path: str | Path) -> tuple[str, Path]:
    """config を 1 回 render して SVG を保存し、(解決済み seed, 保存先) を返す。"""

    sink = SvgSink()
    seed = render(config, sink)
    return seed, sink.save(path)


__all__ = ["SvgSink", "export_svg"]

"""
dotgrid: seed から決定的に生成する、円と斜めグラデーション線のグリッド模様。

公開 API
--------
- `GenConfig` / `PixelRect` / `hero_config`: 描画設定
- `render(config, sink) -> seed`: 1 回分の生成
- `RecordingSink` / `SvgSink`: 描画先
- `Export`: SVG（と設定 JSON）の書き出し
"""

from dotgrid.api.export import Export
from dotgrid.core.config import GenConfig, PixelRect, hero_config, validate_config
from dotgrid.core.grid import InvalidGridError
from dotgrid.core.render import render
from dotgrid.core.sink import DrawingSink, RecordingSink
from dotgrid.export.svg import SvgSink

__version__ = "0.1.0"

__all__ = [
    "DrawingSink",
    "Export",
    "GenConfig",
    "InvalidGridError",
    "PixelRect",
    "RecordingSink",
    "SvgSink",
    "hero_config",
    "render",
    "validate_config",
]

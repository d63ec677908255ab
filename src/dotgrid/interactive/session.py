# どこで: `src/dotgrid/interactive/session.py`。
# 何を: パラメータパネル / リサイズ処理の代わりになる、ヘッドレスのセッション制御を提供する。
# なぜ: 「設定変更 → 新しい不変 config → 再 render」の流れを UI 非依存に固定するため。

"""対話操作を模したセッション。

- `GeneratorSession`: 全面生成。パラメータ変更・再生成・SVG/設定の書き出し。
- `HeroSession`: 除外領域付き生成。ビューポートのリサイズに追従して同じ seed で描き直す。

どちらも config を直接書き換えず、変更ごとに新しい `GenConfig` を作って render に渡す。
render が失敗した場合（`InvalidGridError` など）は直前の config と描画内容を保持する。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from dotgrid.api.settings import save_settings
from dotgrid.core.config import GenConfig, PixelRect, hero_config
from dotgrid.core.output_paths import svg_output_path
from dotgrid.core.random_source import generate_seed
from dotgrid.core.render import render
from dotgrid.core.runtime_config import runtime_config
from dotgrid.core.sink import DrawingSink
from dotgrid.export.svg import SvgSink

_logger = logging.getLogger(__name__)


class _Session:
    def __init__(self, config: GenConfig, sink: DrawingSink | None) -> None:
        self.sink: DrawingSink = SvgSink() if sink is None else sink
        self.config = config
        self.render_count = 0
        self._apply(config)

    @property
    def seed(self) -> str:
        return self.config.seed

    def _apply(self, config: GenConfig) -> str:
        # render は sink を触る前に設定を検証するため、失敗時は前回の描画が残る。
        seed = render(config, self.sink)
        self.config = config.with_seed(seed)
        self.render_count += 1
        return seed

    def export_svg(
        self,
        path: str | Path | None = None,
        *,
        out_dir: str | Path | None = None,
    ) -> Path:
        """現在の描画を SVG として保存する。path 未指定なら seed 入りの既定パス。"""

        if not isinstance(self.sink, SvgSink):
            raise TypeError(f"SVG 書き出しには SvgSink が必要です: got={type(self.sink)!r}")
        out = Path(path) if path is not None else svg_output_path(self.seed, out_dir=out_dir)
        return self.sink.save(out)

    def export_settings(self, path: str | Path | None = None) -> Path:
        """現在の設定（解決済み seed を含む）を JSON として保存する。"""
        return save_settings(self.config, path)


class GeneratorSession(_Session):
    """全面生成のセッション。

    生成直後に 1 回 render する。以降はパラメータ変更（`update`）と
    再生成（`regenerate`）のたびに描き直す。
    config 未指定時は `runtime_config().palette` を使った既定設定で始める。
    """

    def __init__(self, config: GenConfig | None = None, *, sink: DrawingSink | None = None) -> None:
        if config is None:
            config = GenConfig(palette=runtime_config().palette)
        super().__init__(config, sink)

    def update(self, **changes: Any) -> str:
        """設定の一部を変更して描き直し、seed を返す。"""
        return self._apply(self.config.replace(**changes))

    def regenerate(self) -> str:
        """新しい seed で描き直す。`keep_seed` が True なら seed を維持する。"""

        config = self.config
        if not config.keep_seed:
            config = config.with_seed(generate_seed())
        _logger.debug("regenerate: keep_seed=%s seed=%s", config.keep_seed, config.seed)
        return self._apply(config)


class HeroSession(_Session):
    """除外領域付き生成のセッション。

    Parameters
    ----------
    width, height : float
        ビューポート（描画対象要素）の寸法。
    blockout : PixelRect
        重ねたくない要素（本文など）のピクセル矩形。
    seed : str
        空なら初回 render で生成し、以降のリサイズでも同じ seed を使う。
    sink : DrawingSink or None
        描画先。None なら `SvgSink`。
    **changes
        `hero_config()` の既定値からの差分。palette 未指定なら `runtime_config().palette`。
    """

    def __init__(
        self,
        width: float,
        height: float,
        blockout: PixelRect,
        *,
        seed: str = "",
        sink: DrawingSink | None = None,
        **changes: Any,
    ) -> None:
        changes.setdefault("palette", runtime_config().palette)
        super().__init__(hero_config(width, height, blockout, seed=seed, **changes), sink)

    def resize(self, width: float, height: float, blockout: PixelRect) -> str:
        """新しいビューポート寸法と除外矩形で描き直す（seed は維持）。"""
        return self._apply(
            self.config.replace(width=float(width), height=float(height), blockout=blockout)
        )


__all__ = ["GeneratorSession", "HeroSession"]

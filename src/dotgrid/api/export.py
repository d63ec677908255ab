"""
どこで: `src/dotgrid/api/export.py`。
何を: ヘッドレス export の公開導線 `Export` を提供する。
なぜ: パネルやブラウザを介さずに、設定 1 つから SVG（と設定 JSON）を保存できるようにするため。
"""

from __future__ import annotations

from pathlib import Path

from dotgrid.api.settings import save_settings
from dotgrid.core.config import GenConfig
from dotgrid.core.output_paths import settings_output_path, svg_output_path
from dotgrid.core.render import render
from dotgrid.export.svg import SvgSink


class Export:
    """設定を 1 回 render し、SVG をファイルへ書き出す。

    Attributes
    ----------
    seed : str
        実際に使った seed（config の seed が空なら生成したもの）。
    config : GenConfig
        解決済み seed を埋めた設定。保存すれば同じ絵を再現できる。
    path : Path
        SVG の保存先。
    settings_path : Path or None
        設定 JSON の保存先。書き出していなければ None。
    """

    def __init__(
        self,
        config: GenConfig,
        path: str | Path | None = None,
        *,
        settings_path: str | Path | None = None,
        write_settings: bool = False,
        out_dir: str | Path | None = None,
    ) -> None:
        """export を実行する。

        Parameters
        ----------
        config : GenConfig
            描画設定。
        path : str or Path or None
            SVG の出力先。None なら `<output_dir>/svg/<prefix>-<seed>.svg`。
        settings_path : str or Path or None
            設定 JSON の出力先。指定した場合は `write_settings` に関わらず保存する。
        write_settings : bool
            True なら設定 JSON も既定の出力先へ保存する。
        out_dir : str or Path or None
            `path` 未指定時に使う SVG 出力ディレクトリ。
        """

        self.sink = SvgSink()
        self.seed = render(config, self.sink)
        self.config = config.with_seed(self.seed)

        if path is None:
            self.path = svg_output_path(self.seed, out_dir=out_dir)
        else:
            self.path = Path(path)
        self.sink.save(self.path)

        self.settings_path: Path | None = None
        if settings_path is not None:
            self.settings_path = save_settings(self.config, settings_path)
        elif write_settings:
            self.settings_path = save_settings(self.config, settings_output_path())


__all__ = ["Export"]

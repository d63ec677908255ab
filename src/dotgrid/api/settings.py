# どこで: `src/dotgrid/api/settings.py`。
# 何を: 設定 JSON のファイル保存/読み込みを提供する。
# なぜ: codec（dict/JSON 変換）とファイル I/O を分け、core にファイル操作を持ち込まないため。

from __future__ import annotations

from pathlib import Path

from dotgrid.core.config import GenConfig
from dotgrid.core.output_paths import settings_output_path
from dotgrid.core.settings_codec import dumps_settings, loads_settings


def save_settings(config: GenConfig, path: str | Path | None = None) -> Path:
    """設定を JSON として保存し、保存先を返す。path 未指定なら既定の出力先。"""

    out = Path(path) if path is not None else settings_output_path()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(dumps_settings(config) + "\n", encoding="utf-8")
    return out


def load_settings(path: str | Path, *, base: GenConfig | None = None) -> GenConfig:
    """JSON ファイルから設定を読み込む。"""

    return loads_settings(Path(path).read_text(encoding="utf-8"), base=base)


__all__ = ["load_settings", "save_settings"]

# どこで: `src/dotgrid/core/output_paths.py`。
# 何を: SVG / 設定 JSON の既定保存先パスを決める。
# なぜ: seed をファイル名に埋め込み、同じ seed の絵をファイル名から再現できるようにするため。

from __future__ import annotations

import re
from pathlib import Path

from dotgrid.core.runtime_config import output_root_dir, runtime_config


def _sanitize_filename_part(text: str) -> str:
    """ファイル名の一部として使える形に正規化して返す。"""

    return re.sub(r"[^A-Za-z0-9._-]+", "_", str(text))


def svg_filename(seed: str, *, prefix: str | None = None) -> str:
    """`<prefix>-<seed>.svg` 形式のファイル名を返す。

    Notes
    -----
    - prefix 未指定時は `runtime_config().svg_filename_prefix` を使う。
    - seed はサニタイズする（英数字と `._-` 以外は `_`）。
    """

    seed_s = _sanitize_filename_part(str(seed).strip()).strip("_")
    if not seed_s:
        raise ValueError(f"seed は空でない必要があります: got={seed!r}")
    prefix_s = runtime_config().svg_filename_prefix if prefix is None else str(prefix)
    prefix_s = _sanitize_filename_part(prefix_s.strip()).strip("_")
    if not prefix_s:
        return f"{seed_s}.svg"
    return f"{prefix_s}-{seed_s}.svg"


def svg_output_path(
    seed: str,
    *,
    prefix: str | None = None,
    out_dir: str | Path | None = None,
) -> Path:
    """SVG の保存先パスを返す。既定は `output_root/svg/<prefix>-<seed>.svg`。"""

    base_dir = Path(out_dir) if out_dir is not None else output_root_dir() / "svg"
    return base_dir / svg_filename(seed, prefix=prefix)


def settings_output_path(*, out_dir: str | Path | None = None) -> Path:
    """設定 JSON の保存先パスを返す。既定は `output_root/settings/<filename>`。"""

    base_dir = Path(out_dir) if out_dir is not None else output_root_dir() / "settings"
    return base_dir / runtime_config().settings_filename


__all__ = ["settings_output_path", "svg_filename", "svg_output_path"]

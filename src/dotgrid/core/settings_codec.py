# どこで: `src/dotgrid/core/settings_codec.py`。
# 何を: GenConfig の JSON encode/decode を提供する。
# なぜ: 設定の書き出し/読み込み仕様を GenConfig 本体から分離し、スキーマ変更の影響範囲を局所化するため。

"""GenConfig の永続化用 JSON codec。

読み方（入口）
---------------
- `encode_settings()` / `dumps_settings()`: 保存側（config -> dict/JSON）
- `decode_settings()` / `loads_settings()`: 復元側（dict/JSON -> config）

Notes
-----
- 保存は snake_case のキーで行う。
- 復元は camelCase（ブラウザ版パネルの preset 書き出し形式: `stepSize`, `lineChance` など）も受理する。
- decode は壊れた/古い/部分的な JSON を想定し、可能な範囲で復元して不正な要素は捨てる。
  例外で落とすのは「payload が dict ではない」ケースに限定する。
"""

from __future__ import annotations

import dataclasses
import json
import logging
from typing import Any

from dotgrid.core.config import GenConfig, PixelRect

_logger = logging.getLogger(__name__)

SETTINGS_VERSION = 1

_INT_FIELDS = frozenset({"colors_per_line", "override_x_count", "override_y_count"})
_FLOAT_FIELDS = frozenset(
    {"width", "height", "padding", "step_size", "circle_size", "line_chance"}
)
_BOOL_FIELDS = frozenset(
    {
        "keep_seed",
        "limit_lines_to_grid",
        "line_overlap",
        "colored_dots",
        "white_background",
        "fill_background",
    }
)
_STR_FIELDS = frozenset({"seed", "dot_color"})

# ブラウザ版の preset 書き出しキー → GenConfig のフィールド名。
_CAMEL_ALIASES = {
    "keepSeed": "keep_seed",
    "stepSize": "step_size",
    "circleSize": "circle_size",
    "lineChance": "line_chance",
    "colorsPerLine": "colors_per_line",
    "maxLineLength": "max_line_length",
    "overrideXCount": "override_x_count",
    "overrideYCount": "override_y_count",
    "limitLinesToGrid": "limit_lines_to_grid",
    "lineOverlap": "line_overlap",
    "coloredDots": "colored_dots",
    "whiteBackground": "white_background",
    "fillBackground": "fill_background",
    "dotColor": "dot_color",
}
# ブラウザ版に存在したが、ここでは意味を持たないキー（警告なしで捨てる）。
_IGNORED_KEYS = frozenset({"version", "animate", "canvas"})

_FIELD_NAMES = frozenset(f.name for f in dataclasses.fields(GenConfig))


def encode_settings(config: GenConfig) -> dict[str, Any]:
    """GenConfig を JSON 化可能な dict に変換して返す。"""

    blockout = config.blockout
    return {
        "version": SETTINGS_VERSION,
        "width": config.width,
        "height": config.height,
        "padding": config.padding,
        "step_size": config.step_size,
        "circle_size": config.circle_size,
        "line_chance": config.line_chance,
        "colors_per_line": config.colors_per_line,
        "max_line_length": config.max_line_length,
        "seed": config.seed,
        "keep_seed": config.keep_seed,
        "override_x_count": config.override_x_count,
        "override_y_count": config.override_y_count,
        "limit_lines_to_grid": config.limit_lines_to_grid,
        "line_overlap": config.line_overlap,
        "colored_dots": config.colored_dots,
        "white_background": config.white_background,
        "fill_background": config.fill_background,
        "blockout": (
            None
            if blockout is None
            else {
                "left": blockout.left,
                "top": blockout.top,
                "right": blockout.right,
                "bottom": blockout.bottom,
            }
        ),
        "palette": list(config.palette),
        "dot_color": config.dot_color,
    }


def dumps_settings(config: GenConfig) -> str:
    """GenConfig を JSON 文字列（2 スペースインデント）へ変換して返す。"""

    return json.dumps(encode_settings(config), ensure_ascii=False, indent=2)


def _coerce_field(name: str, value: Any) -> Any:
    """フィールド型に合わせて値を変換する。変換できなければ ValueError/TypeError。"""

    if name in _BOOL_FIELDS:
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        raise TypeError(f"bool ではありません: {value!r}")
    if name in _INT_FIELDS:
        if isinstance(value, bool):
            raise TypeError(f"整数ではありません: {value!r}")
        return int(value)
    if name in _FLOAT_FIELDS:
        if isinstance(value, bool):
            raise TypeError(f"数値ではありません: {value!r}")
        return float(value)
    if name in _STR_FIELDS:
        return str(value)
    if name == "max_line_length":
        return None if value is None else int(value)
    if name == "blockout":
        if value is None:
            return None
        if not isinstance(value, dict):
            raise TypeError(f"blockout は mapping である必要があります: {value!r}")
        return PixelRect(
            left=float(value["left"]),
            top=float(value["top"]),
            right=float(value["right"]),
            bottom=float(value["bottom"]),
        )
    if name == "palette":
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            raise TypeError(f"palette は配列である必要があります: {value!r}")
        colors = tuple(str(c) for c in value)
        if not colors:
            raise ValueError("palette は 1 色以上である必要があります")
        return colors
    raise KeyError(name)


def decode_settings(payload: Any, *, base: GenConfig | None = None) -> GenConfig:
    """dict から GenConfig を復元して返す。

    Parameters
    ----------
    payload : Any
        `json.loads()` の結果を想定する。
    base : GenConfig or None
        payload に無いフィールドの既定値。None なら `GenConfig()`。

    Raises
    ------
    TypeError
        payload が dict でない場合。
    """

    if not isinstance(payload, dict):
        raise TypeError(f"settings payload は dict である必要があります: got={type(payload)!r}")

    changes: dict[str, Any] = {}
    for raw_key, value in payload.items():
        key = str(raw_key)
        if key in _IGNORED_KEYS:
            continue
        name = _CAMEL_ALIASES.get(key, key)
        if name not in _FIELD_NAMES:
            _logger.warning("未知の設定キーを無視します: %s", key)
            continue
        try:
            changes[name] = _coerce_field(name, value)
        except (TypeError, ValueError, KeyError) as exc:
            _logger.warning("設定値を復元できないため無視します: %s=%r (%s)", key, value, exc)

    base_config = GenConfig() if base is None else base
    return dataclasses.replace(base_config, **changes)


def loads_settings(text: str, *, base: GenConfig | None = None) -> GenConfig:
    """JSON 文字列から GenConfig を復元して返す。"""

    return decode_settings(json.loads(text), base=base)


__all__ = [
    "SETTINGS_VERSION",
    "decode_settings",
    "dumps_settings",
    "encode_settings",
    "loads_settings",
]

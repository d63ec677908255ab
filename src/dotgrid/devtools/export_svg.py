"""
どこで: `src/dotgrid/devtools/export_svg.py`。
何を: `python -m dotgrid render ...` で設定から SVG を書き出す。
なぜ: パネル無しで seed 違いの候補を量産し、気に入った seed を設定 JSON ごと残せるようにするため。
"""

from __future__ import annotations

import argparse
import sys
from typing import Any

from dotgrid.api import Export, load_settings, save_settings
from dotgrid.core.config import GenConfig, PixelRect, validate_config
from dotgrid.core.runtime_config import runtime_config, set_config_path

# CLI 引数名 → GenConfig のフィールド名（値があるときだけ上書きする）。
_VALUE_OPTIONS = (
    ("seed", "seed"),
    ("width", "width"),
    ("height", "height"),
    ("padding", "padding"),
    ("step_size", "step_size"),
    ("circle_size", "circle_size"),
    ("line_chance", "line_chance"),
    ("colors_per_line", "colors_per_line"),
    ("max_line_length", "max_line_length"),
    ("override_x", "override_x_count"),
    ("override_y", "override_y_count"),
)


def add_config_arguments(p: argparse.ArgumentParser) -> None:
    """GenConfig を組み立てるための共通引数を追加する。"""

    p.add_argument("--settings", default=None, help="読み込む設定 JSON（以降の引数で上書き）")
    p.add_argument("--config", default=None, help="config.yaml のパス（指定した場合は探索より優先）")
    p.add_argument("--seed", default=None, help="seed 文字列（省略時: 設定の値 / 空なら生成）")
    p.add_argument("--width", type=float, default=None)
    p.add_argument("--height", type=float, default=None)
    p.add_argument("--padding", type=float, default=None)
    p.add_argument("--step-size", type=float, default=None)
    p.add_argument("--circle-size", type=float, default=None)
    p.add_argument("--line-chance", type=float, default=None)
    p.add_argument("--colors-per-line", type=int, default=None)
    p.add_argument("--max-line-length", type=int, default=None)
    p.add_argument("--override-x", type=int, default=None, help="列数の上書き（0 で無効）")
    p.add_argument("--override-y", type=int, default=None, help="行数の上書き（0 で無効）")
    p.add_argument("--no-limit-lines", action="store_true", help="線をグリッド内に切り詰めない")
    p.add_argument("--line-overlap", action="store_true", help="線の通過セルを占有として記録しない")
    p.add_argument("--plain-dots", action="store_true", help="円をパレットではなく単色で塗る")
    p.add_argument("--white-background", action="store_true")
    p.add_argument(
        "--blockout",
        nargs=4,
        type=float,
        default=None,
        metavar=("LEFT", "TOP", "RIGHT", "BOTTOM"),
        help="除外矩形（ピクセル）。指定すると hero 生成になる",
    )
    p.add_argument("--no-validate", action="store_true", help="パラメータ範囲の検証を省略する")


def config_from_args(args: argparse.Namespace) -> GenConfig:
    """引数から GenConfig を組み立てる。"""

    if args.config is not None:
        set_config_path(args.config)

    base = GenConfig(palette=runtime_config().palette)
    config = base if args.settings is None else load_settings(args.settings, base=base)

    changes: dict[str, Any] = {}
    for arg_name, field_name in _VALUE_OPTIONS:
        value = getattr(args, arg_name)
        if value is not None:
            changes[field_name] = value
    if args.no_limit_lines:
        changes["limit_lines_to_grid"] = False
    if args.line_overlap:
        changes["line_overlap"] = True
    if args.plain_dots:
        changes["colored_dots"] = False
    if args.white_background:
        changes["white_background"] = True
    if args.blockout is not None:
        left, top, right, bottom = args.blockout
        changes["blockout"] = PixelRect(left=left, top=top, right=right, bottom=bottom)
        changes["fill_background"] = False

    config = config.replace(**changes) if changes else config
    if not args.no_validate:
        validate_config(config)
    return config


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="python -m dotgrid render")
    add_config_arguments(p)
    p.add_argument("--count", type=int, default=1, help="生成枚数（seed 未指定時のみ 2 以上を指定可）")
    p.add_argument("--out", default=None, help="出力 SVG パス（--count 1 のときのみ）")
    p.add_argument("--out-dir", default=None, help="出力ディレクトリ（省略時: 既定の出力先）")
    p.add_argument(
        "--write-settings",
        action="store_true",
        help="解決済み seed を含む設定 JSON も書き出す",
    )

    args = p.parse_args(argv)
    if args.count < 1:
        p.error("--count は 1 以上である必要があります")
    if args.out is not None and args.out_dir is not None:
        p.error("--out と --out-dir は同時に指定できません")
    if args.out is not None and args.count != 1:
        p.error("--out は --count 1 のときだけ指定できます（複数枚は --out-dir を使ってください）")
    if args.seed and args.count != 1:
        p.error("--seed を指定した場合は同じ絵になるため --count は 1 にしてください")
    return args


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)
    try:
        config = config_from_args(args)
    except ValueError as exc:
        print(f"設定が不正です: {exc}", file=sys.stderr)
        return 2
    if config.seed and args.count != 1:
        print("seed が固定されているため --count は 1 にしてください", file=sys.stderr)
        return 2

    for _ in range(int(args.count)):
        try:
            exp = Export(config, path=args.out, out_dir=args.out_dir)
        except ValueError as exc:
            print(f"生成に失敗しました: {exc}", file=sys.stderr)
            return 2
        print(str(exp.path))
        if args.write_settings:
            # 複数枚でも上書きしないよう、SVG と同じ stem（seed 入り）で保存する。
            print(str(save_settings(exp.config, exp.path.with_suffix(".json"))))
    return 0

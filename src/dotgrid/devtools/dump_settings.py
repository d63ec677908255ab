"""
どこで: `src/dotgrid/devtools/dump_settings.py`。
何を: `python -m dotgrid settings ...` で設定 JSON を標準出力またはファイルへ書き出す。
なぜ: 既定値や上書き結果を確認し、書き出した JSON を `render --settings` に渡せるようにするため。
"""

from __future__ import annotations

import argparse
import sys

from dotgrid.api import save_settings
from dotgrid.core.settings_codec import dumps_settings
from dotgrid.devtools.export_svg import add_config_arguments, config_from_args


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="python -m dotgrid settings")
    add_config_arguments(p)
    p.add_argument("--out", default=None, help="出力 JSON パス（省略時: 標準出力）")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)
    try:
        config = config_from_args(args)
    except ValueError as exc:
        print(f"設定が不正です: {exc}", file=sys.stderr)
        return 2

    if args.out is None:
        print(dumps_settings(config))
        return 0
    print(str(save_settings(config, args.out)))
    return 0

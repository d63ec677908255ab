# どこで: `src/dotgrid/__main__.py`。
# 何を: `python -m dotgrid ...` の CLI エントリポイントを提供する。
# なぜ: SVG 書き出し・設定ダンプを短い導線で実行できるようにするため。

from __future__ import annotations

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="python -m dotgrid")
    p.add_argument("-v", "--verbose", action="store_true", help="debug ログを表示する")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("render", help="設定から SVG を書き出す", add_help=False)
    sub.add_parser("settings", help="設定 JSON を書き出す", add_help=False)

    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sub_argv = list(rest)
    if sub_argv and sub_argv[0] == "--":
        sub_argv = sub_argv[1:]

    if args.cmd == "render":
        from dotgrid.devtools import export_svg

        return int(export_svg.main(sub_argv))

    if args.cmd == "settings":
        from dotgrid.devtools import dump_settings

        return int(dump_settings.main(sub_argv))

    raise AssertionError(f"unknown cmd: {args.cmd!r}")


if __name__ == "__main__":
    raise SystemExit(main())

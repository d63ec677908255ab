"""
どこで: `src/dotgrid/core/random_source.py`。
何を: seed 文字列から決定的な乱数列を作る `SeededRandomSource` を提供する。
なぜ: 同一 seed + 同一呼び出し順で同一出力になることを、再現性の土台として固定するため。
"""

from __future__ import annotations

import hashlib
import string

import numpy as np

SEED_LENGTH = 16
# ファイル名に埋め込むため、記号を含まない英数字に限定する。
_SEED_ALPHABET = string.ascii_letters + string.digits


def _seed_to_int(seed: str) -> int:
    """seed 文字列を numpy Generator 用の 64bit 整数へ写像する。"""

    digest = hashlib.sha256(str(seed).encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "little")


def generate_seed(length: int = SEED_LENGTH) -> str:
    """新しいランダム seed（英数字 `length` 文字）を返す。

    Notes
    -----
    OS のエントロピーで初期化した Generator を使うため、呼び出しごとに異なる値になる。
    生成した seed は以降「固定入力」として扱い、書き出しファイル名にも使う。
    """

    n = int(length)
    if n <= 0:
        raise ValueError(f"seed の長さは正である必要があります: got={length!r}")
    rng = np.random.default_rng()
    picks = rng.integers(0, len(_SEED_ALPHABET), size=n)
    return "".join(_SEED_ALPHABET[int(i)] for i in picks)


class SeededRandomSource:
    """seed 文字列をキーにした逐次乱数ストリーム。

    Parameters
    ----------
    seed : str
        乱数列を決める seed 文字列。空文字も 1 つの seed として扱う。

    Notes
    -----
    - 呼び出しの順序・回数が 1 つでも変わると、それ以降の出力はすべて変わる。
    - 内部は SHA-256 で seed を 64bit 整数へ落とし、`np.random.default_rng` に渡す。
    """

    def __init__(self, seed: str) -> None:
        self.seed = str(seed)
        self._rng = np.random.default_rng(_seed_to_int(self.seed))

    def random(self) -> float:
        """[0, 1) の一様乱数を返す。"""
        return float(self._rng.random())

    def int_between(self, low: int, high: int) -> int:
        """[low, high]（両端含む）の一様整数を返す。"""
        lo = int(low)
        hi = int(high)
        if hi < lo:
            raise ValueError(f"int_between は low <= high が必要です: got=({lo}, {hi})")
        return int(self._rng.integers(lo, hi + 1))

    def index(self, n: int) -> int:
        """[0, n) の一様な添字を返す。"""
        n_i = int(n)
        if n_i <= 0:
            raise ValueError(f"index の n は正である必要があります: got={n!r}")
        return int(self._rng.integers(0, n_i))

    def __repr__(self) -> str:
        return f"SeededRandomSource(seed={self.seed!r})"


__all__ = ["SEED_LENGTH", "SeededRandomSource", "generate_seed"]

from __future__ import annotations

from pathlib import Path

import pytest

from dotgrid.core.config import DEFAULT_PALETTE
from dotgrid.core.runtime_config import output_root_dir, runtime_config, set_config_path


def _isolate(monkeypatch, tmp_path: Path) -> None:
    # CWD / HOME 配下のユーザー設定を拾わないようにする。
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


def test_packaged_defaults(monkeypatch, tmp_path: Path) -> None:
    _isolate(monkeypatch, tmp_path)
    set_config_path(None)
    try:
        cfg = runtime_config()
        assert cfg.config_path is None
        assert cfg.output_dir == Path("data/output")
        assert cfg.svg_filename_prefix == "HiP-Visual"
        assert cfg.settings_filename == "GraphicsGenConfig.json"
        assert cfg.palette == DEFAULT_PALETTE
        assert output_root_dir() == Path("data/output")
    finally:
        set_config_path(None)


def test_explicit_config_overrides_top_level_keys(monkeypatch, tmp_path: Path) -> None:
    _isolate(monkeypatch, tmp_path)
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        "\n".join(
            [
                "paths:",
                f'  output_dir: "{tmp_path / "out"}"',
                "palette:",
                '  - "#123456"',
                "",
            ]
        ),
        encoding="utf-8",
    )

    set_config_path(cfg_path)
    try:
        cfg = runtime_config()
        assert cfg.config_path == cfg_path
        assert cfg.output_dir == tmp_path / "out"
        assert cfg.palette == ("#123456",)
        # 上書きしていないキーは同梱デフォルトのまま。
        assert cfg.svg_filename_prefix == "HiP-Visual"
    finally:
        set_config_path(None)


def test_discovers_config_in_cwd(monkeypatch, tmp_path: Path) -> None:
    _isolate(monkeypatch, tmp_path)
    local = tmp_path / ".dotgrid" / "config.yaml"
    local.parent.mkdir(parents=True)
    local.write_text('export:\n  svg:\n    filename_prefix: "Local"\n  settings:\n    filename: "s.json"\n', encoding="utf-8")

    set_config_path(None)
    try:
        cfg = runtime_config()
        assert cfg.config_path is not None
        assert cfg.config_path.resolve() == local.resolve()
        assert cfg.svg_filename_prefix == "Local"
        assert cfg.settings_filename == "s.json"
    finally:
        set_config_path(None)


def test_missing_explicit_config_raises(tmp_path: Path) -> None:
    set_config_path(tmp_path / "missing.yaml")
    try:
        with pytest.raises(FileNotFoundError):
            runtime_config()
    finally:
        set_config_path(None)


@pytest.mark.parametrize(
    "text",
    [
        "version: 2\n",
        "version: one\n",
        "paths: []\n",
        "palette: []\n",
        "- not a mapping\n",
    ],
)
def test_invalid_config_raises_runtime_error(monkeypatch, tmp_path: Path, text: str) -> None:
    _isolate(monkeypatch, tmp_path)
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(text, encoding="utf-8")

    set_config_path(cfg_path)
    try:
        with pytest.raises(RuntimeError):
            runtime_config()
    finally:
        set_config_path(None)

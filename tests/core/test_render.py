"""core.render の `render()` をテスト。"""

from __future__ import annotations

import logging

import pytest

from dotgrid.core.config import GenConfig, PixelRect, hero_config
from dotgrid.core.grid import InvalidGridError
from dotgrid.core.render import BACKGROUND_BLACK, BACKGROUND_WHITE, render, render_pass
from dotgrid.core.sink import DrawingSink, RecordingSink


def _config(**changes) -> GenConfig:
    return GenConfig(seed="abc", width=800, height=800, padding=100, step_size=100).replace(**changes)


def test_recording_sink_satisfies_protocol() -> None:
    assert isinstance(RecordingSink(), DrawingSink)


def test_same_seed_gives_identical_primitives() -> None:
    a = RecordingSink()
    b = RecordingSink()
    assert render(_config(line_chance=0.4), a) == "abc"
    assert render(_config(line_chance=0.4), b) == "abc"
    assert a.primitives == b.primitives


def test_different_seeds_differ() -> None:
    a = RecordingSink()
    b = RecordingSink()
    render(_config(seed="abc", line_chance=0.4), a)
    render(_config(seed="xyz", line_chance=0.4), b)
    assert a.primitives != b.primitives


def test_empty_seed_is_generated_and_reproducible() -> None:
    first = RecordingSink()
    seed = render(_config(seed="", line_chance=0.4), first)
    assert len(seed) == 16
    again = RecordingSink()
    assert render(_config(seed=seed, line_chance=0.4), again) == seed
    assert again.primitives == first.primitives


def test_begin_is_called_once_and_resets_content() -> None:
    sink = RecordingSink()
    render(_config(), sink)
    n = len(sink.primitives)
    render(_config(), sink)
    assert sink.begin_count == 2
    assert len(sink.primitives) == n
    assert sink.size == (800.0, 800.0)


@pytest.mark.parametrize(
    ("changes", "expected"),
    [
        ({}, BACKGROUND_BLACK),
        ({"white_background": True}, BACKGROUND_WHITE),
        ({"fill_background": False}, None),
        ({"fill_background": False, "white_background": True}, None),
    ],
)
def test_background_selection(changes: dict, expected: str | None) -> None:
    sink = RecordingSink()
    render(_config(**changes), sink)
    assert sink.background == expected


@pytest.mark.parametrize("changes", [{"step_size": 0}, {"padding": 400}])
def test_invalid_grid_draws_nothing(changes: dict) -> None:
    sink = RecordingSink()
    with pytest.raises(InvalidGridError):
        render(_config(**changes), sink)
    assert sink.begin_count == 0
    assert sink.primitives == []


def test_full_canvas_with_line_chance_one() -> None:
    sink = RecordingSink()
    _seed, stats = render_pass(_config(line_chance=1.0, max_line_length=2), sink)
    # 最終列と最上段は円になる。
    circle_cells = {c.cell for c in sink.circles}
    assert {(6, y) for y in range(7)} <= circle_cells | {
        cell for line in sink.lines for cell in line.cells()
    }
    assert (0, 0) in circle_cells
    assert stats.lines > 0


def test_exclusion_cells_are_never_drawn() -> None:
    blockout = PixelRect(left=300, top=200, right=500, bottom=400)
    sink = RecordingSink()
    _seed, stats = render_pass(
        _config(blockout=blockout, fill_background=False, line_chance=0.3), sink
    )
    blocked = {(x, y) for x in range(2, 6) for y in (1, 2)}
    assert stats.skipped >= len(blocked)
    assert not {c.cell for c in sink.circles} & blocked
    assert {line.start_cell for line in sink.lines}.isdisjoint(blocked)
    assert sink.background is None


def test_inverted_exclusion_behaves_like_inactive_zone(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="dotgrid.core.exclusion")
    sink = RecordingSink()
    _seed, stats = render_pass(
        _config(blockout=PixelRect(left=600, top=200, right=100, bottom=400), line_chance=0.0),
        sink,
    )
    assert stats.skipped == 0
    assert len(sink.circles) == 49
    assert caplog.records


def test_hero_config_renders_with_transparent_background() -> None:
    config = hero_config(1200, 600, PixelRect.from_xywh(300, 150, 600, 200), seed="hero")
    sink = RecordingSink()
    assert render(config, sink) == "hero"
    assert sink.background is None
    assert sink.size == (1200.0, 600.0)
    assert all(line.length <= 3 for line in sink.lines)

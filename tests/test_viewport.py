from __future__ import annotations

import logging
import random

import pytest

from conversion_trends.viz.viewport import (
    ViewportController,
    ViewportWindow,
    full_window,
    is_consistent,
    pan_left,
    pan_right,
    zoom_in,
    zoom_out,
)


def test_full_window_covers_every_point() -> None:
    assert full_window(20) == ViewportWindow(0, 19)
    assert full_window(0) == ViewportWindow(0, 0)


def test_zoom_in_recenters_on_midpoint() -> None:
    assert zoom_in(ViewportWindow(0, 19), 20) == ViewportWindow(2, 17)


def test_zoom_in_stops_at_min_points() -> None:
    window = ViewportWindow(0, 19)
    for _ in range(10):
        window = zoom_in(window, 20)
    assert window.length == 5
    assert zoom_in(window, 20) == window


def test_zoom_in_uses_min_points_when_step_overshoots() -> None:
    assert zoom_in(ViewportWindow(10, 16), 20).length == 5


def test_zoom_in_stays_inside_previous_window() -> None:
    assert zoom_in(ViewportWindow(0, 9), 30, min_points=2, step=6) == ViewportWindow(3, 6)


def test_zoom_in_rounds_half_centers_up() -> None:
    assert zoom_in(ViewportWindow(0, 3), 30, min_points=2, step=1) == ViewportWindow(1, 3)


def test_zoom_out_is_clamped_to_bounds() -> None:
    assert zoom_out(ViewportWindow(0, 4), 20) == ViewportWindow(0, 8)
    assert zoom_out(ViewportWindow(15, 19), 20) == ViewportWindow(11, 19)


def test_zoom_out_at_full_range_is_noop() -> None:
    window = ViewportWindow(0, 19)
    assert zoom_out(window, 20) is window


def test_zoom_out_never_exceeds_total() -> None:
    assert zoom_out(ViewportWindow(1, 17), 20) == ViewportWindow(0, 19)


def test_pan_moves_by_a_third_of_window_and_keeps_length() -> None:
    window = ViewportWindow(6, 14)
    assert pan_left(window, 30) == ViewportWindow(3, 11)
    assert pan_right(window, 30) == ViewportWindow(9, 17)


def test_pan_is_clamped_at_edges() -> None:
    assert pan_left(ViewportWindow(1, 9), 30) == ViewportWindow(0, 8)
    assert pan_right(ViewportWindow(20, 28), 30) == ViewportWindow(21, 29)
    assert pan_left(ViewportWindow(0, 8), 30) == ViewportWindow(0, 8)


def test_pan_step_is_at_least_one() -> None:
    assert pan_right(ViewportWindow(0, 1), 10) == ViewportWindow(1, 2)


def test_pan_at_full_range_is_noop() -> None:
    window = ViewportWindow(0, 9)
    assert pan_left(window, 10) is window
    assert pan_right(window, 10) is window


@pytest.mark.parametrize(
    "window",
    [ViewportWindow(-2, 5), ViewportWindow(3, 25), ViewportWindow(6, 6), ViewportWindow(8, 2)],
)
def test_inconsistent_window_is_healed_before_transition(
    window: ViewportWindow,
    caplog: pytest.LogCaptureFixture,
) -> None:
    assert not is_consistent(window, 20)
    with caplog.at_level(logging.WARNING):
        assert zoom_in(window, 20) == ViewportWindow(2, 17)
    assert "inconsistent" in caplog.text
    assert pan_left(window, 20) == ViewportWindow(0, 19)
    assert zoom_out(window, 20) == ViewportWindow(0, 19)


def test_transitions_on_empty_sequence_return_neutral_window() -> None:
    for transition in (zoom_in, zoom_out, pan_left, pan_right):
        assert transition(ViewportWindow(3, 7), 0) == ViewportWindow(0, 0)


def test_single_point_sequence_stays_put() -> None:
    window = ViewportWindow(0, 0)
    for transition in (zoom_in, zoom_out, pan_left, pan_right):
        assert transition(window, 1) == window


def test_random_walk_keeps_window_within_bounds() -> None:
    rng = random.Random(7)
    for total in (1, 2, 4, 5, 6, 13, 40):
        controller = ViewportController(total)
        actions = [
            controller.zoom_in,
            controller.zoom_out,
            controller.pan_left,
            controller.pan_right,
            controller.reset,
        ]
        for _ in range(200):
            window = rng.choice(actions)()
            assert 0 <= window.start_index <= window.end_index <= total - 1
            assert min(total, controller.min_points) <= window.length <= total


def test_controller_resets_when_total_changes() -> None:
    controller = ViewportController(20)
    controller.zoom_in()
    controller.pan_right()
    assert controller.window != ViewportWindow(0, 19)

    assert controller.resize(20) == controller.window
    assert controller.window != ViewportWindow(0, 19)

    assert controller.resize(3) == ViewportWindow(0, 2)
    assert controller.total_points == 3


def test_controller_applies_configured_policy() -> None:
    controller = ViewportController(30, min_points=10, step=8)
    assert controller.zoom_in() == ViewportWindow(4, 25)
    assert controller.zoom_in() == ViewportWindow(8, 21)
    assert controller.zoom_in() == ViewportWindow(10, 19)
    assert controller.zoom_in() == ViewportWindow(10, 19)
    assert controller.reset() == ViewportWindow(0, 29)


def test_controller_clamps_min_points_to_two_point_floor() -> None:
    controller = ViewportController(10, min_points=1)

    assert controller.min_points == 2
    assert controller.zoom_in() == ViewportWindow(2, 7)
    assert controller.zoom_in() == ViewportWindow(4, 5)
    for _ in range(3):
        assert controller.zoom_in() == ViewportWindow(4, 5)


def test_zoom_in_function_keeps_two_point_floor() -> None:
    window = ViewportWindow(4, 5)
    assert zoom_in(window, 10, min_points=0, step=4) is window

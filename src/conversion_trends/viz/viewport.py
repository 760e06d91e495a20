from __future__ import annotations

import logging
import math
from dataclasses import dataclass

LOGGER = logging.getLogger(__name__)

DEFAULT_MIN_POINTS = 5
DEFAULT_STEP = 4
# Windows shorter than this fail the start < end consistency check.
MIN_WINDOW_POINTS = 2
PAN_DIVISOR = 3


@dataclass(frozen=True)
class ViewportWindow:
    start_index: int
    end_index: int

    @property
    def length(self) -> int:
        return self.end_index - self.start_index + 1

    def as_slice(self) -> slice:
        return slice(self.start_index, self.end_index + 1)


def full_window(total: int) -> ViewportWindow:
    if total <= 0:
        return ViewportWindow(0, 0)
    return ViewportWindow(0, total - 1)


def is_consistent(window: ViewportWindow, total: int) -> bool:
    return not (
        window.start_index < 0
        or window.end_index >= total
        or window.start_index >= window.end_index
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _normalize(window: ViewportWindow, total: int) -> ViewportWindow:
    if is_consistent(window, total):
        return window
    healed = full_window(total)
    if window != healed:
        LOGGER.warning(
            "Viewport window %s inconsistent with %d points; resetting to %s",
            window,
            total,
            healed,
        )
    return healed


def _recenter(window: ViewportWindow, new_length: int, total: int) -> ViewportWindow:
    center = (window.start_index + window.end_index) / 2
    new_start = _round_half_up(center - (new_length - 1) / 2)
    new_end = new_start + new_length - 1

    if new_start < 0:
        new_start = 0
        new_end = new_length - 1
    if new_end > total - 1:
        new_end = total - 1
        new_start = total - new_length
    return ViewportWindow(new_start, new_end)


def zoom_in(
    window: ViewportWindow,
    total: int,
    *,
    min_points: int = DEFAULT_MIN_POINTS,
    step: int = DEFAULT_STEP,
) -> ViewportWindow:
    """Shrink the window by ``step`` around its midpoint, never below ``min_points``."""
    if total <= 0:
        return full_window(total)
    current = _normalize(window, total)
    floor = max(MIN_WINDOW_POINTS, min_points)
    if current.length <= floor:
        return current
    new_length = max(floor, current.length - step)
    return _recenter(current, new_length, total)


def zoom_out(
    window: ViewportWindow,
    total: int,
    *,
    step: int = DEFAULT_STEP,
) -> ViewportWindow:
    """Grow the window by ``step`` around its midpoint, capped at the full range."""
    if total <= 0:
        return full_window(total)
    current = _normalize(window, total)
    if current.length >= total:
        return current
    new_length = min(total, current.length + step)
    return _recenter(current, new_length, total)


def pan_step(length: int) -> int:
    return max(1, length // PAN_DIVISOR)


def pan_left(window: ViewportWindow, total: int) -> ViewportWindow:
    if total <= 0:
        return full_window(total)
    current = _normalize(window, total)
    length = current.length
    if length >= total:
        return current
    new_start = max(0, current.start_index - pan_step(length))
    return ViewportWindow(new_start, new_start + length - 1)


def pan_right(window: ViewportWindow, total: int) -> ViewportWindow:
    if total <= 0:
        return full_window(total)
    current = _normalize(window, total)
    length = current.length
    if length >= total:
        return current
    new_end = min(total - 1, current.end_index + pan_step(length))
    return ViewportWindow(new_end - length + 1, new_end)


class ViewportController:
    """Owns the visible window over a chart-point sequence of ``total_points``.

    Every transition goes through the pure functions above; the controller only
    keeps the current window and the zoom policy.
    """

    def __init__(
        self,
        total_points: int,
        *,
        min_points: int = DEFAULT_MIN_POINTS,
        step: int = DEFAULT_STEP,
    ) -> None:
        self.min_points = max(MIN_WINDOW_POINTS, min_points)
        self.step = step
        self._total_points = max(0, int(total_points))
        self._window = full_window(self._total_points)

    @property
    def window(self) -> ViewportWindow:
        return self._window

    @property
    def total_points(self) -> int:
        return self._total_points

    def resize(self, total_points: int) -> ViewportWindow:
        total = max(0, int(total_points))
        if total != self._total_points:
            LOGGER.debug("Point count changed %d -> %d", self._total_points, total)
            self._total_points = total
            self._window = full_window(total)
        return self._window

    def reset(self) -> ViewportWindow:
        self._window = full_window(self._total_points)
        return self._window

    def zoom_in(self) -> ViewportWindow:
        self._window = zoom_in(
            self._window,
            self._total_points,
            min_points=self.min_points,
            step=self.step,
        )
        return self._window

    def zoom_out(self) -> ViewportWindow:
        self._window = zoom_out(self._window, self._total_points, step=self.step)
        return self._window

    def pan_left(self) -> ViewportWindow:
        self._window = pan_left(self._window, self._total_points)
        return self._window

    def pan_right(self) -> ViewportWindow:
        self._window = pan_right(self._window, self._total_points)
        return self._window

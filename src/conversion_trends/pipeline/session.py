from __future__ import annotations

import logging
from enum import Enum
from typing import get_args

from conversion_trends.config import AggregationMode, AppConfig
from conversion_trends.features.chart_points import build_chart_points, visible_value_range
from conversion_trends.features.weekly import aggregate_weekly
from conversion_trends.models import ChartPoint, ParsedRecord, RawPayload, Variant
from conversion_trends.preprocess.series import parse_raw
from conversion_trends.preprocess.variants import build_variants, variant_keys
from conversion_trends.viz.selection import VariantSelection
from conversion_trends.viz.viewport import ViewportController, ViewportWindow

LOGGER = logging.getLogger(__name__)

AGGREGATION_MODES: tuple[str, ...] = get_args(AggregationMode)


class Intent(str, Enum):
    toggle_variant = "toggle-variant"
    set_aggregation_mode = "set-aggregation-mode"
    zoom_in = "zoom-in"
    zoom_out = "zoom-out"
    pan_left = "pan-left"
    pan_right = "pan-right"
    reset_viewport = "reset-viewport"


class ChartSession:
    """State behind one interactive conversion-rate chart.

    The daily series is parsed once per payload. Aggregated views are derived
    from it on demand and cached per mode; user intents only touch the mode,
    the variant selection and the viewport.
    """

    def __init__(
        self,
        payload: RawPayload,
        config: AppConfig | None = None,
        *,
        mode: AggregationMode | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.variants: tuple[Variant, ...] = build_variants(payload.variants)
        self.daily_records: list[ParsedRecord] = parse_raw(payload.records, self.variants)
        self.selection = VariantSelection.all_of(variant_keys(self.variants))
        self._views: dict[str, tuple[list[ParsedRecord], list[ChartPoint]]] = {}
        self._mode: AggregationMode = self._validate_mode(
            mode or self.config.aggregation.default_mode
        )
        self.viewport = ViewportController(
            len(self.chart_points),
            min_points=self.config.viewport.min_points,
            step=self.config.viewport.step,
        )

    @staticmethod
    def _validate_mode(mode: str) -> AggregationMode:
        if mode not in AGGREGATION_MODES:
            raise ValueError(
                f"Unsupported aggregation mode: {mode!r} (expected one of {AGGREGATION_MODES})"
            )
        return mode  # type: ignore[return-value]

    def _view(self, mode: AggregationMode) -> tuple[list[ParsedRecord], list[ChartPoint]]:
        cached = self._views.get(mode)
        if cached is not None:
            return cached

        if mode == "weekly":
            source = aggregate_weekly(
                self.daily_records,
                self.variants,
                bucket_size=self.config.aggregation.bucket_size,
                range_separator=self.config.labels.range_separator,
            )
        else:
            source = self.daily_records
        points = build_chart_points(
            source,
            self.variants,
            mode,
            continuation_marker=self.config.labels.continuation_marker,
        )
        self._views[mode] = (source, points)
        LOGGER.info("Built %s view with %d points", mode, len(points))
        return source, points

    @property
    def mode(self) -> AggregationMode:
        return self._mode

    @property
    def source_records(self) -> list[ParsedRecord]:
        return self._view(self._mode)[0]

    @property
    def chart_points(self) -> list[ChartPoint]:
        return self._view(self._mode)[1]

    @property
    def window(self) -> ViewportWindow:
        return self.viewport.window

    @property
    def selected_keys(self) -> tuple[str, ...]:
        return self.selection.selected

    @property
    def visible_points(self) -> list[ChartPoint]:
        return self.chart_points[self.window.as_slice()]

    def visible_value_range(self) -> tuple[float, float]:
        return visible_value_range(self.visible_points, self.selected_keys)

    def detail(self, sequence_index: int) -> ParsedRecord | None:
        records = self.source_records
        if 0 <= sequence_index < len(records):
            return records[sequence_index]
        return None

    def toggle_variant(self, key: str) -> tuple[str, ...]:
        self.selection = self.selection.toggle(key)
        return self.selected_keys

    def set_aggregation_mode(self, mode: str) -> ViewportWindow:
        self._mode = self._validate_mode(mode)
        return self.viewport.resize(len(self.chart_points))

    def zoom_in(self) -> ViewportWindow:
        return self.viewport.zoom_in()

    def zoom_out(self) -> ViewportWindow:
        return self.viewport.zoom_out()

    def pan_left(self) -> ViewportWindow:
        return self.viewport.pan_left()

    def pan_right(self) -> ViewportWindow:
        return self.viewport.pan_right()

    def reset_viewport(self) -> ViewportWindow:
        return self.viewport.reset()

    def apply_intent(self, intent: Intent | str, argument: str | None = None) -> None:
        resolved = Intent(intent)
        LOGGER.debug("Applying intent %s (%s)", resolved.value, argument)
        if resolved is Intent.toggle_variant:
            if argument is None:
                raise ValueError("toggle-variant requires a variant key")
            self.toggle_variant(argument)
        elif resolved is Intent.set_aggregation_mode:
            if argument is None:
                raise ValueError("set-aggregation-mode requires a mode")
            self.set_aggregation_mode(argument)
        elif resolved is Intent.zoom_in:
            self.zoom_in()
        elif resolved is Intent.zoom_out:
            self.zoom_out()
        elif resolved is Intent.pan_left:
            self.pan_left()
        elif resolved is Intent.pan_right:
            self.pan_right()
        else:
            self.reset_viewport()

from __future__ import annotations

import datetime
from collections.abc import Iterable, Sequence

from conversion_trends.config import AggregationMode
from conversion_trends.models import ChartPoint, ParsedRecord, Variant, VariantMap
from conversion_trends.preprocess.variants import variant_keys

CONTINUATION_MARKER = "…"
DEFAULT_VALUE_RANGE = (0.0, 1.0)
VALUE_RANGE_PADDING = 0.1


def format_day_month(value: datetime.date | None) -> str:
    if value is None:
        return ""
    return f"{value.day:02d}.{value.month:02d}"


def build_display_label(
    record: ParsedRecord,
    mode: AggregationMode,
    continuation_marker: str = CONTINUATION_MARKER,
) -> str:
    label = format_day_month(record.date_value)
    if mode == "weekly":
        return f"{label}{continuation_marker}"
    return label


def build_chart_points(
    source: Sequence[ParsedRecord],
    variants: Sequence[Variant],
    mode: AggregationMode,
    *,
    continuation_marker: str = CONTINUATION_MARKER,
) -> list[ChartPoint]:
    """Project parsed records into display points.

    ``sequence_index`` equals the position in ``source`` so viewport indices and
    detail lookups resolve back to the same record.
    """
    keys = variant_keys(variants)
    return [
        ChartPoint(
            date=record.date,
            display_label=build_display_label(
                record, mode, continuation_marker=continuation_marker
            ),
            sequence_index=index,
            values=VariantMap((key, record.conversion_rate.get(key)) for key in keys),
        )
        for index, record in enumerate(source)
    ]


def visible_value_range(
    points: Iterable[ChartPoint],
    keys: Iterable[str],
) -> tuple[float, float]:
    """Y-axis bounds over present values of ``keys``, padded and floored at zero."""
    selected = list(keys)
    values = (point.values.get(key) for point in points for key in selected)
    present = [value for value in values if value is not None]
    if not present:
        return DEFAULT_VALUE_RANGE

    low = min(present)
    high = max(present)
    padding = (high - low) * VALUE_RANGE_PADDING or 1.0
    return max(0.0, low - padding), high + padding

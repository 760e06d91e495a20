from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from conversion_trends.models import ChartPoint, ParsedRecord, Variant

CHART_POINT_COLUMNS = ["sequence_index", "date", "display_label"]
RECORD_COLUMNS = [
    "date",
    "variant_key",
    "variant_name",
    "visits",
    "conversions",
    "conversion_rate",
]


def chart_points_to_frame(
    points: Sequence[ChartPoint],
    variants: Sequence[Variant],
) -> pd.DataFrame:
    """Wide table: one row per point, one rate column per variant key."""
    keys = [variant.key for variant in variants]
    rows = [
        {
            "sequence_index": point.sequence_index,
            "date": point.date,
            "display_label": point.display_label,
            **{key: point.values.get(key) for key in keys},
        }
        for point in points
    ]
    frame = pd.DataFrame(rows, columns=[*CHART_POINT_COLUMNS, *keys])
    for key in keys:
        frame[key] = pd.to_numeric(frame[key], errors="coerce").astype("float64")
    frame["sequence_index"] = frame["sequence_index"].astype("int64")
    return frame


def parsed_records_to_frame(
    records: Sequence[ParsedRecord],
    variants: Sequence[Variant],
) -> pd.DataFrame:
    """Long table: one row per (record, variant) with counts and the derived rate."""
    rows = [
        {
            "date": record.date,
            "variant_key": variant.key,
            "variant_name": variant.name,
            "visits": record.visits.get(variant.key),
            "conversions": record.conversions.get(variant.key),
            "conversion_rate": record.conversion_rate.get(variant.key),
        }
        for record in records
        for variant in variants
    ]
    frame = pd.DataFrame(rows, columns=RECORD_COLUMNS)
    for column in ("visits", "conversions"):
        frame[column] = pd.to_numeric(frame[column], errors="coerce").astype("Int64")
    frame["conversion_rate"] = pd.to_numeric(frame["conversion_rate"], errors="coerce").astype(
        "float64"
    )
    return frame


def summarize_variants(frame: pd.DataFrame) -> pd.DataFrame:
    """Overall visits, conversions and summed-count rate per variant."""
    if frame.empty:
        return pd.DataFrame(
            columns=["variant_key", "variant_name", "visits", "conversions", "conversion_rate"]
        )
    totals = (
        frame.groupby(["variant_key", "variant_name"], sort=False, dropna=False)
        .agg(
            visits=("visits", lambda s: int(s.fillna(0).sum())),
            conversions=("conversions", lambda s: int(s.fillna(0).sum())),
        )
        .reset_index()
    )
    nonzero_visits = totals["visits"] > 0
    totals["conversion_rate"] = (totals["conversions"] / totals["visits"] * 100).where(
        nonzero_visits
    )
    return totals

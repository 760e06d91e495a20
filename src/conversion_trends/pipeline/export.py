from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd

from conversion_trends.config import AggregationMode, AppConfig
from conversion_trends.features.frames import (
    chart_points_to_frame,
    parsed_records_to_frame,
    summarize_variants,
)
from conversion_trends.io.payload import load_payload
from conversion_trends.io.write import table_extension, write_summary, write_table
from conversion_trends.paths import build_output_paths
from conversion_trends.pipeline.session import ChartSession

LOGGER = logging.getLogger(__name__)


def build_series_summary(session: ChartSession) -> dict[str, Any]:
    records_frame = parsed_records_to_frame(session.daily_records, session.variants)
    totals = summarize_variants(records_frame)
    daily = session.daily_records
    return {
        "mode": session.mode,
        "n_days": len(daily),
        "n_points": len(session.chart_points),
        "first_date": daily[0].date if daily else None,
        "last_date": daily[-1].date if daily else None,
        "variants": [
            {
                "key": row.variant_key,
                "name": row.variant_name,
                "visits": int(row.visits),
                "conversions": int(row.conversions),
                "conversion_rate": (
                    None if pd.isna(row.conversion_rate) else float(row.conversion_rate)
                ),
            }
            for row in totals.itertuples(index=False)
        ],
    }


def export_series(
    payload_path: Path,
    out_dir: Path,
    config: AppConfig,
    *,
    mode: AggregationMode | None = None,
) -> dict[str, Path]:
    """Run the full pipeline on a payload file and write tables plus a summary."""
    paths = build_output_paths(out_dir)
    session = ChartSession(load_payload(payload_path), config, mode=mode)

    fmt = config.outputs.tables_format
    extension = table_extension(fmt)
    outputs = {
        "chart_points": write_table(
            chart_points_to_frame(session.chart_points, session.variants),
            paths.tables / f"chart_points.{extension}",
            fmt=fmt,
        ),
        "records": write_table(
            parsed_records_to_frame(session.source_records, session.variants),
            paths.tables / f"records.{extension}",
            fmt=fmt,
        ),
        "summary": write_summary(
            build_series_summary(session),
            paths.summary / "series_summary.json",
        ),
    }
    LOGGER.info(
        "Exported %s series (%d points) to %s",
        session.mode,
        len(session.chart_points),
        paths.root,
    )
    return outputs

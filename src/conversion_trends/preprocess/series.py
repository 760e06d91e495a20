from __future__ import annotations

import datetime
import logging
from collections.abc import Sequence

from conversion_trends.models import ParsedRecord, Rate, RawDailyRecord, Variant, VariantMap
from conversion_trends.preprocess.variants import variant_keys

LOGGER = logging.getLogger(__name__)


def conversion_rate(visits: int | None, conversions: int | None) -> Rate:
    """Percentage of visits that converted, or ``None`` when it cannot be computed."""
    if not visits or conversions is None:
        return None
    return conversions / visits * 100


def parse_iso_date(value: str | None) -> datetime.date | None:
    if not value:
        return None
    try:
        return datetime.date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def parse_record(record: RawDailyRecord, keys: Sequence[str]) -> ParsedRecord:
    rates = VariantMap(
        (key, conversion_rate(record.visits.get(key), record.conversions.get(key)))
        for key in keys
    )
    return ParsedRecord(
        date=record.date,
        date_value=parse_iso_date(record.date),
        visits=record.visits,
        conversions=record.conversions,
        conversion_rate=rates,
    )


def parse_raw(
    raw_records: Sequence[RawDailyRecord] | None,
    variants: Sequence[Variant],
) -> list[ParsedRecord]:
    """Compute per-day conversion rates, one parsed record per raw record.

    Records are neither sorted nor deduplicated; weekly bucketing relies on the
    caller supplying them in chronological order.
    """
    if not raw_records:
        return []
    keys = variant_keys(variants)
    parsed = [parse_record(record, keys) for record in raw_records]
    LOGGER.debug("Parsed %d daily records for %d variants", len(parsed), len(keys))
    return parsed

from __future__ import annotations

import logging
from collections.abc import Sequence

from conversion_trends.models import ParsedRecord, Variant, VariantMap
from conversion_trends.preprocess.series import conversion_rate
from conversion_trends.preprocess.variants import variant_keys

LOGGER = logging.getLogger(__name__)

WEEK_BUCKET_SIZE = 7
DATE_RANGE_SEPARATOR = " – "


def bucket_by_position(
    parsed: Sequence[ParsedRecord],
    bucket_size: int = WEEK_BUCKET_SIZE,
) -> list[Sequence[ParsedRecord]]:
    """Split records into consecutive fixed-size groups; the last may be shorter.

    Boundaries follow list position only, not calendar weeks.
    """
    size = max(1, int(bucket_size))
    return [parsed[offset : offset + size] for offset in range(0, len(parsed), size)]


def fold_bucket(
    items: Sequence[ParsedRecord],
    keys: Sequence[str],
    range_separator: str = DATE_RANGE_SEPARATOR,
) -> ParsedRecord:
    first = items[0]
    last = items[-1]

    visits_sum = {key: 0 for key in keys}
    conversions_sum = {key: 0 for key in keys}
    for item in items:
        for key in keys:
            visits_sum[key] += item.visits.get(key) or 0
            conversions_sum[key] += item.conversions.get(key) or 0

    # Rates come from summed counts, never from averaging the daily rates.
    rates = VariantMap(
        (key, conversion_rate(visits_sum[key], conversions_sum[key])) for key in keys
    )
    return ParsedRecord(
        date=f"{first.date}{range_separator}{last.date}",
        date_value=first.date_value,
        visits=VariantMap(visits_sum),
        conversions=VariantMap(conversions_sum),
        conversion_rate=rates,
    )


def aggregate_weekly(
    parsed: Sequence[ParsedRecord],
    variants: Sequence[Variant],
    *,
    bucket_size: int = WEEK_BUCKET_SIZE,
    range_separator: str = DATE_RANGE_SEPARATOR,
) -> list[ParsedRecord]:
    """Roll daily records up into ``ceil(len(parsed) / bucket_size)`` buckets.

    Returns a new list; ``parsed`` is left untouched so the daily view stays reusable.
    """
    keys = variant_keys(variants)
    buckets = bucket_by_position(parsed, bucket_size=bucket_size)
    weekly = [fold_bucket(items, keys, range_separator=range_separator) for items in buckets]
    LOGGER.debug(
        "Aggregated %d daily records into %d buckets of up to %d",
        len(parsed),
        len(weekly),
        bucket_size,
    )
    return weekly

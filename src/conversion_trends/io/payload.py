from __future__ import annotations

import datetime
from pathlib import Path
from typing import Any, Mapping

import yaml

from conversion_trends.models import RawDailyRecord, RawPayload, RawVariant, VariantMap

VARIANT_LIST_KEYS = ("variants", "variations")


def _require_list(value: Any, *, field_name: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"payload field '{field_name}' must be a list")
    return value


def _parse_variant_id(value: Any) -> int | None:
    if value is None:
        return None
    return int(value)


def _parse_counts(value: Any) -> VariantMap[int]:
    if not isinstance(value, Mapping):
        return VariantMap()
    # Null counts read the same as keys that were never reported.
    return VariantMap((key, int(count)) for key, count in value.items() if count is not None)


def _parse_date(value: Any) -> str:
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()[:10]
    return "" if value is None else str(value)


def _variant_entries(payload: Mapping[str, Any]) -> list[Any]:
    for field_name in VARIANT_LIST_KEYS:
        if field_name in payload:
            return _require_list(payload.get(field_name), field_name=field_name)
    return []


def parse_payload(payload: Mapping[str, Any]) -> RawPayload:
    variants = []
    for entry in _variant_entries(payload):
        if not isinstance(entry, Mapping):
            raise ValueError("each payload variant must be a mapping/object")
        variants.append(
            RawVariant(id=_parse_variant_id(entry.get("id")), name=str(entry.get("name") or ""))
        )

    records = []
    for entry in _require_list(payload.get("data"), field_name="data"):
        if not isinstance(entry, Mapping):
            raise ValueError("each payload data row must be a mapping/object")
        records.append(
            RawDailyRecord(
                date=_parse_date(entry.get("date")),
                visits=_parse_counts(entry.get("visits")),
                conversions=_parse_counts(entry.get("conversions")),
            )
        )
    return RawPayload(variants=tuple(variants), records=tuple(records))


def load_payload(path: str | Path) -> RawPayload:
    """Read a JSON or YAML payload file into typed raw variants and records."""
    source_path = Path(path).resolve()
    with source_path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, Mapping):
        raise ValueError("payload file must contain a mapping/object")
    return parse_payload(payload)

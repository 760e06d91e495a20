from __future__ import annotations

import json
from pathlib import Path

import pytest

from conversion_trends.io.payload import load_payload, parse_payload

PAYLOAD = {
    "variations": [{"name": "Original"}, {"id": 10001, "name": "Variation A"}],
    "data": [
        {
            "date": "2025-01-01",
            "visits": {"0": 500, "10001": 480},
            "conversions": {"0": 40, "10001": None},
        }
    ],
}


def test_load_payload_reads_json(tmp_path: Path) -> None:
    path = tmp_path / "data.json"
    path.write_text(json.dumps(PAYLOAD), encoding="utf-8")

    payload = load_payload(path)

    assert [variant.id for variant in payload.variants] == [None, 10001]
    assert payload.variants[1].name == "Variation A"
    assert len(payload.records) == 1
    record = payload.records[0]
    assert record.date == "2025-01-01"
    assert record.visits == {"0": 500, "10001": 480}
    assert record.conversions.get("10001") is None
    assert "10001" not in record.conversions


def test_load_payload_reads_yaml_with_native_dates(tmp_path: Path) -> None:
    path = tmp_path / "data.yaml"
    path.write_text(
        "\n".join(
            [
                "variants:",
                "  - name: Original",
                "data:",
                "  - date: 2025-02-03",
                "    visits: {0: 10}",
                "    conversions: {0: 1}",
            ]
        )
        + "\n",
        encoding="utf-8",
    )

    payload = load_payload(path)

    assert payload.records[0].date == "2025-02-03"
    assert payload.records[0].visits["0"] == 10


def test_parse_payload_treats_missing_lists_as_empty() -> None:
    payload = parse_payload({})
    assert payload.variants == ()
    assert payload.records == ()


def test_parse_payload_rejects_non_list_data() -> None:
    with pytest.raises(ValueError, match="'data' must be a list"):
        parse_payload({"data": {"date": "2025-01-01"}})


def test_load_payload_rejects_non_mapping_documents(tmp_path: Path) -> None:
    path = tmp_path / "data.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_payload(path)

#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import random
from datetime import date, timedelta
from pathlib import Path

OUTPUT_PATH = Path(__file__).resolve().parents[2] / "configs" / "sample_payload.json"

VARIATIONS = [
    {"name": "Original"},
    {"id": 10001, "name": "Variation A"},
    {"id": 10002, "name": "Variation B"},
]
BASE_RATES = {"0": 0.080, "10001": 0.086, "10002": 0.074}


def build_payload(start: date, n_days: int, seed: int) -> dict:
    rng = random.Random(seed)
    data = []
    for offset in range(n_days):
        visits: dict[str, int] = {}
        conversions: dict[str, int] = {}
        for key, base_rate in BASE_RATES.items():
            n_visits = rng.randint(300, 900)
            visits[key] = n_visits
            conversions[key] = sum(1 for _ in range(n_visits) if rng.random() < base_rate)
        data.append(
            {
                "date": (start + timedelta(days=offset)).isoformat(),
                "visits": visits,
                "conversions": conversions,
            }
        )
    return {"variations": VARIATIONS, "data": data}


def main() -> None:
    parser = argparse.ArgumentParser(description="Write a synthetic A/B conversion payload.")
    parser.add_argument("--start", type=date.fromisoformat, default=date(2025, 1, 1))
    parser.add_argument("--days", type=int, default=45)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--out", type=Path, default=OUTPUT_PATH)
    args = parser.parse_args()

    payload = build_payload(start=args.start, n_days=args.days, seed=args.seed)
    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    print(f"Wrote {len(payload['data'])} days to {args.out}")


if __name__ == "__main__":
    main()

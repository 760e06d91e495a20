from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

TABLE_EXTENSIONS = {"csv": "csv", "parquet": "parquet"}


def table_extension(fmt: str) -> str:
    try:
        return TABLE_EXTENSIONS[fmt]
    except KeyError:
        raise ValueError(f"Unsupported table format: {fmt}") from None


def write_table(df: pd.DataFrame, path: Path, fmt: str = "csv") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "parquet":
        df.to_parquet(path, index=False)
        return path
    if fmt == "csv":
        df.to_csv(path, index=False)
        return path
    raise ValueError(f"Unsupported table format: {fmt}")


def write_summary(data: dict[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False),
        encoding="utf-8",
    )
    return path

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field

AggregationMode = Literal["daily", "weekly"]

TABLES_FORMAT_ENV = "CONVERSION_TRENDS_TABLES_FORMAT"


class ViewportConfig(BaseModel):
    # Windows shorter than two points fail the start < end consistency check.
    min_points: int = Field(default=5, ge=2)
    step: int = Field(default=4, ge=1)


class AggregationConfig(BaseModel):
    default_mode: AggregationMode = "daily"
    bucket_size: int = Field(default=7, ge=1)


class LabelsConfig(BaseModel):
    continuation_marker: str = "…"
    range_separator: str = " – "


class OutputsConfig(BaseModel):
    tables_format: Literal["csv", "parquet"] = "csv"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)
    labels: LabelsConfig = Field(default_factory=LabelsConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def load_config(path: Path | None = None) -> AppConfig:
    data: Mapping = {}
    if path is not None:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        if not isinstance(data, Mapping):
            raise ValueError("config file must contain a mapping/object")

    env_tables_format = os.getenv(TABLES_FORMAT_ENV)
    if env_tables_format:
        outputs = dict(data.get("outputs") or {})
        outputs["tables_format"] = env_tables_format.strip().lower()
        data = {**data, "outputs": outputs}

    return AppConfig.model_validate(data)

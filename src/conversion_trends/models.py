from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
import datetime
from typing import Generic, TypeVar

T = TypeVar("T")

# Absent rates are None; 0.0 always means a measured zero.
Rate = float | None


class VariantMap(Mapping[str, T], Generic[T]):
    """Immutable mapping of variant key to a per-variant value.

    Keys are coerced to ``str`` so ids arriving as integers and keys arriving as
    strings land on the same entry. Lookups of keys that were never supplied go
    through ``get`` and read as absent.
    """

    __slots__ = ("_data",)

    def __init__(self, items: Mapping[object, T] | Iterable[tuple[object, T]] = ()) -> None:
        pairs = items.items() if isinstance(items, Mapping) else items
        self._data: dict[str, T] = {str(key): value for key, value in pairs}

    def __getitem__(self, key: str) -> T:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, VariantMap):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._data.items()))

    def __repr__(self) -> str:
        return f"VariantMap({self._data!r})"

    def to_dict(self) -> dict[str, T]:
        return dict(self._data)


@dataclass(frozen=True)
class Variant:
    key: str
    name: str
    id: int | None = None

    @property
    def is_control(self) -> bool:
        return self.id is None


@dataclass(frozen=True)
class RawVariant:
    id: int | None
    name: str


@dataclass(frozen=True)
class RawDailyRecord:
    date: str
    visits: VariantMap[int] = field(default_factory=VariantMap)
    conversions: VariantMap[int] = field(default_factory=VariantMap)


@dataclass(frozen=True)
class RawPayload:
    variants: tuple[RawVariant, ...] = ()
    records: tuple[RawDailyRecord, ...] = ()


@dataclass(frozen=True)
class ParsedRecord:
    date: str
    date_value: datetime.date | None
    visits: VariantMap[int]
    conversions: VariantMap[int]
    conversion_rate: VariantMap[Rate]


@dataclass(frozen=True)
class ChartPoint:
    date: str
    display_label: str
    sequence_index: int
    values: VariantMap[Rate]

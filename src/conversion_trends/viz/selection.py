from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class VariantSelection:
    """Ordered set of variant keys currently drawn; never empty once populated."""

    known_keys: tuple[str, ...]
    selected: tuple[str, ...]

    @classmethod
    def all_of(cls, keys: Iterable[str]) -> VariantSelection:
        ordered = tuple(dict.fromkeys(keys))
        return cls(known_keys=ordered, selected=ordered)

    def __contains__(self, key: object) -> bool:
        return key in self.selected

    def __len__(self) -> int:
        return len(self.selected)

    def toggle(self, key: str) -> VariantSelection:
        if key not in self.known_keys:
            LOGGER.debug("Ignoring toggle for unknown variant key %r", key)
            return self
        if key in self.selected:
            if len(set(self.selected)) == 1:
                return self
            remaining = tuple(item for item in self.selected if item != key)
            return VariantSelection(known_keys=self.known_keys, selected=remaining)
        return VariantSelection(known_keys=self.known_keys, selected=(*self.selected, key))

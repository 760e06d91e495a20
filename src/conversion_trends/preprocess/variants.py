from __future__ import annotations

import logging
from collections.abc import Iterable

from conversion_trends.models import RawVariant, Variant

LOGGER = logging.getLogger(__name__)

CONTROL_KEY = "0"
CONTROL_DEFAULT_NAME = "Original"


def default_variant_name(position: int) -> str:
    """Fallback display name for the variant at ``position`` in payload order."""
    if position == 0:
        return CONTROL_DEFAULT_NAME
    return f"Variation {position}"


def variant_key(variant_id: int | None) -> str:
    # The control arm carries no id and its counts are stored under "0".
    if variant_id is None:
        return CONTROL_KEY
    return str(variant_id)


def build_variants(raw_variants: Iterable[RawVariant] | None) -> tuple[Variant, ...]:
    """Normalize payload variants into the ordered registry used downstream.

    Order is preserved because it drives color assignment and default selection.
    """
    if not raw_variants:
        return ()
    variants = tuple(
        Variant(
            key=variant_key(raw.id),
            name=raw.name or default_variant_name(position),
            id=raw.id,
        )
        for position, raw in enumerate(raw_variants)
    )
    keys = variant_keys(variants)
    if len(set(keys)) != len(keys):
        LOGGER.warning("Duplicate variant keys in payload: %s", ", ".join(keys))
    return variants


def variant_keys(variants: Iterable[Variant]) -> list[str]:
    return [variant.key for variant in variants]

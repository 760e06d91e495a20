from __future__ import annotations

from conversion_trends.models import RawVariant
from conversion_trends.preprocess.variants import build_variants, variant_keys


def test_build_variants_assigns_control_key_and_default_names() -> None:
    variants = build_variants(
        [
            RawVariant(id=None, name=""),
            RawVariant(id=10001, name=""),
            RawVariant(id=10002, name="Green button"),
        ]
    )

    assert [variant.key for variant in variants] == ["0", "10001", "10002"]
    assert [variant.name for variant in variants] == [
        "Original",
        "Variation 1",
        "Green button",
    ]
    assert variants[0].is_control
    assert not variants[1].is_control


def test_build_variants_preserves_payload_order() -> None:
    variants = build_variants(
        [RawVariant(id=3, name="C"), RawVariant(id=1, name="A"), RawVariant(id=2, name="B")]
    )
    assert variant_keys(variants) == ["3", "1", "2"]


def test_build_variants_accepts_empty_input() -> None:
    assert build_variants([]) == ()
    assert build_variants(None) == ()

from __future__ import annotations

from conversion_trends.viz.selection import VariantSelection


def test_selection_starts_with_every_key_in_order() -> None:
    selection = VariantSelection.all_of(["0", "10001", "10002"])
    assert selection.selected == ("0", "10001", "10002")
    assert "10001" in selection
    assert len(selection) == 3


def test_toggle_removes_and_appends() -> None:
    selection = VariantSelection.all_of(["0", "1", "2"])

    selection = selection.toggle("0")
    assert selection.selected == ("1", "2")

    selection = selection.toggle("0")
    assert selection.selected == ("1", "2", "0")


def test_toggling_off_last_selected_key_is_rejected() -> None:
    selection = VariantSelection.all_of(["0", "1"]).toggle("1")

    unchanged = selection.toggle("0")

    assert unchanged == selection
    assert unchanged.selected == ("0",)


def test_toggle_ignores_unknown_keys() -> None:
    selection = VariantSelection.all_of(["0"])
    assert selection.toggle("999") is selection


def test_duplicate_keys_collapse_and_last_key_stays_selected() -> None:
    selection = VariantSelection.all_of(["0", "0"])
    assert selection.selected == ("0",)
    assert selection.known_keys == ("0",)
    assert selection.toggle("0").selected == ("0",)

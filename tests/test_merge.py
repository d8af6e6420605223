"""Unit tests for the configuration deep merge.

These tests pin the precedence rules every other module relies on: nested
mappings merge key by key, lists accumulate without duplicates, scalars are
overwritten by later arguments, and ``None`` never clobbers a value.

Usage
-----
Run ``pytest tests/test_merge.py -v``.
"""

from __future__ import annotations

from folio.config import Format, merge_configs, merge_formats


def test_nested_mappings_merge_key_by_key() -> None:
    """Later mappings add and override keys without dropping siblings."""
    merged = merge_configs(
        {"pandoc": {"toc": False, "template": "a.tex"}},
        {"pandoc": {"toc": True}},
    )
    assert merged == {"pandoc": {"toc": True, "template": "a.tex"}}


def test_lists_accumulate_in_order_without_duplicates() -> None:
    """Include lists collect entries from every layer."""
    merged = merge_configs(
        {"include-in-header": ["a.html", "b.html"]},
        {"include-in-header": ["b.html", "c.html"]},
    )
    assert merged["include-in-header"] == ["a.html", "b.html", "c.html"]


def test_scalar_joined_with_list_is_wrapped() -> None:
    """A scalar meeting a list becomes one more list entry."""
    assert merge_configs({"filters": "a.lua"}, {"filters": ["b.lua"]}) == {
        "filters": ["a.lua", "b.lua"]
    }


def test_equal_values_of_different_types_are_kept() -> None:
    """``1``, ``1.0`` and ``True`` compare equal but are distinct entries."""
    assert merge_configs({"v": [1]}, {"v": [True]}) == {"v": [1, True]}
    merged = merge_configs({"v": [1, 1.0]}, {"v": [True, 1]})
    assert [(type(item), item) for item in merged["v"]] == [
        (int, 1),
        (float, 1.0),
        (bool, True),
    ]


def test_single_layer_lists_are_deduplicated_like_merged_ones() -> None:
    """Repeats are dropped whether or not an earlier layer set the key."""
    assert merge_configs({"filters": ["a.lua", "a.lua"]}) == {"filters": ["a.lua"]}
    assert merge_configs({}, {"filters": ["a.lua", "a.lua"]}) == {"filters": ["a.lua"]}
    assert merge_configs({"filters": []}, {"filters": ["a.lua", "a.lua"]}) == {
        "filters": ["a.lua"]
    }


def test_none_does_not_overwrite() -> None:
    """Absent values leave earlier values in place."""
    assert merge_configs({"toc": True}, {"toc": None}, None) == {"toc": True}


def test_inputs_are_not_mutated() -> None:
    """Merging copies nested containers instead of sharing them."""
    base = {"execute": {"cache": True}, "filters": ["a.lua"]}
    override = {"execute": {"echo": False}, "filters": ["b.lua"]}
    merged = merge_configs(base, override)
    merged["execute"]["cache"] = False
    merged["filters"].append("c.lua")
    assert base == {"execute": {"cache": True}, "filters": ["a.lua"]}
    assert override == {"execute": {"echo": False}, "filters": ["b.lua"]}


def test_merge_formats_merges_each_bucket() -> None:
    """Format merging applies the config merge per bucket."""

    def extras(flags, fmt):  # noqa: ANN001, ANN202 - trivial provider
        return None

    base = Format(render={"keep-tex": False}, pandoc={"toc": False})
    override = Format(pandoc={"toc": True}, metadata={"title": "T"}, format_extras=extras)
    merged = merge_formats(base, override)
    assert merged.render == {"keep-tex": False}
    assert merged.pandoc == {"toc": True}
    assert merged.metadata == {"title": "T"}
    assert merged.format_extras is extras
    assert base.pandoc == {"toc": False}

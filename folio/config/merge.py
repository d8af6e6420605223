"""Deep merge of untyped configuration mappings.

Later arguments take precedence. Nested mappings merge key by key, lists
accumulate (the later list is appended to the earlier one, duplicates
dropped), scalars are overwritten, and ``None`` never overwrites an existing
value. Inputs are never mutated.

Examples
--------
>>> from folio.config.merge import merge_configs
>>> merge_configs({"a": {"b": 1}, "f": ["x"]}, {"a": {"c": 2}, "f": ["y"]})
{'a': {'b': 1, 'c': 2}, 'f': ['x', 'y']}
>>> merge_configs({"toc": True}, {"toc": None})
{'toc': True}
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import typing as typ

from .models import Format


def merge_configs(
    *configs: cabc.Mapping[str, typ.Any] | None,
) -> dict[str, typ.Any]:
    """Merge ``configs`` from lowest to highest precedence into a new dict."""
    merged: dict[str, typ.Any] = {}
    for config in configs:
        if config is None:
            continue
        _merge_mapping(merged, config)
    return merged


def merge_formats(base: Format, *overrides: Format) -> Format:
    """Merge each bucket of ``overrides`` over ``base`` into a new format."""
    merged = Format(
        render=merge_configs(base.render, *(item.render for item in overrides)),
        execute=merge_configs(base.execute, *(item.execute for item in overrides)),
        pandoc=merge_configs(base.pandoc, *(item.pandoc for item in overrides)),
        metadata=merge_configs(
            base.metadata, *(item.metadata for item in overrides)
        ),
        format_extras=base.format_extras,
    )
    for item in overrides:
        if item.format_extras is not None:
            merged.format_extras = item.format_extras
    return merged


def _merge_mapping(
    target: dict[str, typ.Any], incoming: cabc.Mapping[str, typ.Any]
) -> None:
    for key, value in incoming.items():
        if value is None:
            target.setdefault(key, None)
            continue
        existing = target.get(key)
        target[key] = _merge_value(existing, value)


def _merge_value(existing: object, value: object) -> object:
    if isinstance(existing, list) or isinstance(value, list):
        return _concat_unique([] if existing is None else existing, value)
    if isinstance(value, cabc.Mapping):
        container = dict(existing) if isinstance(existing, cabc.Mapping) else {}
        _merge_mapping(container, value)
        return container
    return copy.deepcopy(value)


def _concat_unique(existing: object, value: object) -> list[typ.Any]:
    """Append ``value`` to ``existing``, wrapping scalars and keeping first copies.

    Entries are compared together with their type, so ``1``, ``1.0`` and
    ``True`` stay distinct.
    """
    combined: list[typ.Any] = []
    seen: list[tuple[type, typ.Any]] = []
    for part in (existing, value):
        items = part if isinstance(part, list) else [part]
        for item in items:
            key = (type(item), item)
            if key not in seen:
                seen.append(key)
                combined.append(copy.deepcopy(item))
    return combined


__all__ = ["merge_configs", "merge_formats"]

"""Normalise declared book contents into :class:`SidebarItem` trees.

Contents entries may be written as bare hrefs or as mappings::

    contents:
      - index.md
      - part: Getting started
        chapters:
          - intro.md
          - href: setup.md
            text: Setup

Mappings accept ``href`` or ``file`` for the link, ``text``, ``section``, or
``part`` for the label, and ``contents`` or ``chapters`` for nested entries.
"""

from __future__ import annotations

import collections.abc as cabc
import posixpath
import typing as typ

from .models import SidebarItem

_HREF_KEYS = ("href", "file")
_TEXT_KEYS = ("text", "section", "part")
_CONTENTS_KEYS = ("contents", "chapters")


def normalize_href(href: str) -> str:
    """Return ``href`` as a clean project-relative POSIX path."""
    cleaned = posixpath.normpath(href.replace("\\", "/").lstrip("/"))
    return "" if cleaned == "." else cleaned


def _first(payload: cabc.Mapping[str, typ.Any], keys: tuple[str, ...]) -> typ.Any:
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def normalize_sidebar_item(item: object) -> SidebarItem:
    """Convert one declared contents entry into a :class:`SidebarItem`.

    Raises
    ------
    TypeError
        If ``item`` is neither a string nor a mapping.
    """
    match item:
        case str() as href:
            return SidebarItem(href=normalize_href(href) or None)
        case cabc.Mapping():
            href = _first(item, _HREF_KEYS)
            text = _first(item, _TEXT_KEYS)
            nested = _first(item, _CONTENTS_KEYS)
            contents = None
            if isinstance(nested, list):
                contents = [normalize_sidebar_item(child) for child in nested]
            normalized = normalize_href(str(href)) if href else ""
            return SidebarItem(
                href=normalized or None,
                text=str(text) if text is not None else None,
                contents=contents,
            )
        case _:
            msg = f"Book contents entries must be strings or mappings, got {item!r}."
            raise TypeError(msg)


def normalize_sidebar_items(items: object) -> list[SidebarItem]:
    """Normalise a contents declaration that may be a list or a single entry."""
    if items is None:
        return []
    if isinstance(items, list):
        return [normalize_sidebar_item(item) for item in items]
    return [normalize_sidebar_item(items)]


__all__ = ["normalize_href", "normalize_sidebar_item", "normalize_sidebar_items"]

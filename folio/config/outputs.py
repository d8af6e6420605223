"""Classify pandoc output writers by the kind of document they produce."""

from __future__ import annotations

import collections.abc as cabc
import re
import typing as typ

LATEX_OUTPUTS = frozenset({"pdf", "latex", "beamer"})
HTML_OUTPUTS = frozenset(
    {
        "html",
        "html4",
        "html5",
        "s5",
        "dzslides",
        "slidy",
        "slideous",
        "revealjs",
        "epub",
        "epub2",
        "epub3",
    }
)
MARKDOWN_OUTPUTS = frozenset({"markdown", "gfm", "commonmark"})

_EXTENSIONS_SUFFIX = re.compile(r"[+\-_].*$")


def _writer(pandoc: cabc.Mapping[str, typ.Any] | None) -> str:
    if not pandoc:
        return ""
    return str(pandoc.get("to") or "")


def is_latex_output(pandoc: cabc.Mapping[str, typ.Any]) -> bool:
    """Return True when the pandoc bucket targets a LaTeX based writer."""
    return _writer(pandoc) in LATEX_OUTPUTS


def is_html_output(target: str | cabc.Mapping[str, typ.Any] | None = None) -> bool:
    """Return True for HTML family writers; an unset writer counts as HTML."""
    writer = target if isinstance(target, str) else _writer(target)
    return (writer or "html") in HTML_OUTPUTS


def is_markdown_output(pandoc: cabc.Mapping[str, typ.Any]) -> bool:
    """Return True when the writer, stripped of extensions, emits markdown."""
    return _EXTENSIONS_SUFFIX.sub("", _writer(pandoc)) in MARKDOWN_OUTPUTS


__all__ = [
    "HTML_OUTPUTS",
    "LATEX_OUTPUTS",
    "MARKDOWN_OUTPUTS",
    "is_html_output",
    "is_latex_output",
    "is_markdown_output",
]

"""Static membership tables that route metadata keys to format buckets.

Each option a document may set at the top level of its metadata belongs to
exactly one :class:`~folio.config.models.Bucket`. The tables below are the
single source of truth; :data:`KEY_BUCKETS` is built from them at import time
and the import fails if any key is listed twice, so classification is total
and unambiguous by construction.

Examples
--------
>>> from folio.config.keys import bucket_for_key
>>> bucket_for_key("fig-width").value
'execute'
>>> bucket_for_key("title").value
'metadata'
"""

from __future__ import annotations

import types

from folio import _constants as const

from .models import Bucket

RENDER_KEYS: tuple[str, ...] = (
    const.KEEP_TEX,
    "keep-yaml",
    "keep-ipynb",
    "keep-source",
    "prefer-html",
    "output-divs",
    "variant",
    "output-ext",
    "page-width",
    "fig-align",
    "code-fold",
    "code-summary",
    "latex-auto-mk",
    "latex-auto-install",
    "latex-min-runs",
    "latex-max-runs",
    "latex-clean",
    "latex-makeindex",
    "latex-makeindex-opts",
    "latex-tlmgr-opts",
    "latex-output-dir",
)

EXECUTE_KEYS: tuple[str, ...] = (
    const.KEEP_MD,
    const.EXECUTE_ENABLED,
    "fig-width",
    "fig-height",
    "fig-format",
    "fig-dpi",
    "error",
    "eval",
    "echo",
    "output",
    "warning",
    "include",
    "cache",
    "freeze",
    "keep-hidden",
    "kernel-keepalive",
    "kernel-restart",
    "kernel-debug",
)

PANDOC_KEYS: tuple[str, ...] = (
    "from",
    "to",
    "writer",
    "template",
    "output-file",
    "standalone",
    "self-contained",
    "variables",
    "atx-headers",
    "markdown-headings",
    "include-before-body",
    "include-after-body",
    "include-in-header",
    "citeproc",
    "cite-method",
    "filters",
    "pdf-engine",
    "pdf-engine-opts",
    "pdf-engine-opt",
    "toc",
    "table-of-contents",
    "listings",
    "number-sections",
    "highlight-style",
)

STRUCTURAL_KEYS: types.MappingProxyType[str, Bucket] = types.MappingProxyType(
    {
        const.RENDER_DEFAULTS: Bucket.RENDER,
        const.EXECUTE_DEFAULTS: Bucket.EXECUTE,
        const.PANDOC_DEFAULTS: Bucket.PANDOC,
        const.PANDOC_METADATA: Bucket.METADATA,
    }
)


def _build_key_buckets(
    tables: tuple[tuple[Bucket, tuple[str, ...]], ...],
) -> types.MappingProxyType[str, Bucket]:
    """Index every table entry by key, refusing keys claimed by two buckets."""
    index: dict[str, Bucket] = {}
    for bucket, keys in tables:
        for key in keys:
            previous = index.get(key)
            if previous is not None:
                msg = (
                    f"Metadata key '{key}' is listed for both "
                    f"'{previous.value}' and '{bucket.value}'."
                )
                raise RuntimeError(msg)
            if key in STRUCTURAL_KEYS:
                msg = f"Metadata key '{key}' shadows a structural bucket name."
                raise RuntimeError(msg)
            index[key] = bucket
    return types.MappingProxyType(index)


KEY_BUCKETS = _build_key_buckets(
    (
        (Bucket.RENDER, RENDER_KEYS),
        (Bucket.EXECUTE, EXECUTE_KEYS),
        (Bucket.PANDOC, PANDOC_KEYS),
    )
)


def bucket_for_key(key: str) -> Bucket:
    """Return the bucket an unsorted metadata key belongs to.

    Keys that are not render, execution, or pandoc options are document
    metadata.
    """
    return KEY_BUCKETS.get(key, Bucket.METADATA)


__all__ = [
    "EXECUTE_KEYS",
    "KEY_BUCKETS",
    "PANDOC_KEYS",
    "RENDER_KEYS",
    "STRUCTURAL_KEYS",
    "bucket_for_key",
]

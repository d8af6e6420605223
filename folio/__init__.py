"""Merge document metadata into render formats and resolve book projects.

This package turns YAML front matter, external metadata files, and per-format
overrides into a bucketed :class:`~folio.config.Format`, and linearises a
book project's declared contents into an ordered render plan.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from folio import main
>>> main()  # doctest: +SKIP
>>> from folio import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]

"""Cyclopts CLI entrypoint for inspecting resolved formats and book plans.

The ``folio`` console script defined here resolves the render format a
document would use for a given output, and prints the ordered render plan of a
book project. Both commands only read files; they are meant for debugging
metadata layering and contents declarations locally or in CI.

Examples
--------
Show the PDF format resolved for a chapter, with debug keep flags:

>>> from folio.cli import app
>>> app(["format", "chapter.md", "--to", "pdf", "--debug"])  # doctest: +SKIP

Print the render plan of the book in the current directory:

>>> from folio.cli import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

import asyncio
import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from ruamel.yaml import YAML

from .book import BookRenderItem
from .config import (
    Format,
    format_from_metadata,
    included_metadata,
    merge_configs,
    metadata_as_format,
    read_yaml_from_markdown_file,
)
from .project import load_project_config

app = App(name="folio", config=cyclopts.config.Env("FOLIO_", command=False))  # type: ignore[unknown-argument]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def resolve_document_format(
    input_path: Path, to: str, *, debug: bool = False
) -> Format:
    """Resolve the format used to render ``input_path`` as output ``to``.

    Metadata files referenced by the front matter are merged beneath it, the
    result is classified into buckets, and the ``format.<to>`` override is
    applied.

    Raises
    ------
    FileNotFoundError
        If ``input_path`` does not exist.
    """
    if not input_path.exists():
        msg = f"Input file '{input_path}' not found."
        raise FileNotFoundError(msg)
    front_matter = read_yaml_from_markdown_file(input_path)
    included = included_metadata(input_path.parent, front_matter)
    metadata = merge_configs(included.metadata, front_matter)
    return format_from_metadata(metadata_as_format(metadata), to, debug=debug)


def _describe_item(item: BookRenderItem) -> str:
    """Return a one-line description of a render plan entry."""
    parts = [item.type.value]
    if item.number is not None:
        parts.append(str(item.number))
    if item.text:
        parts.append(f"[{item.text}]")
    if item.file:
        parts.append(item.file)
    return " ".join(parts)


@app.command(name="format", help="Print the format resolved for a document.")
def show_format(
    input_path: typ.Annotated[Path, Parameter(name="input", help="Markdown document")],
    *,
    to: typ.Annotated[str, Parameter(help="Output format name")] = "html",
    debug: typ.Annotated[
        bool, Parameter(help="Keep intermediate TeX and markdown files")
    ] = False,
    verbose: bool = False,
) -> None:
    """Print the render, execute, pandoc, and metadata buckets as YAML.

    Parameters
    ----------
    input_path : Path
        Markdown document whose front matter is resolved.
    to : str, optional
        Output format whose ``format.<to>`` override applies (default
        ``html``).
    debug : bool, optional
        Force the keep-tex and keep-md flags on.
    verbose : bool, optional
        Emit debug logging.

    Returns
    -------
    None
        Writes YAML to stdout.
    """
    _configure_logging(verbose)
    fmt = resolve_document_format(input_path, to, debug=debug)
    yaml = YAML()
    yaml.default_flow_style = False
    yaml.dump(fmt.to_dict(), sys.stdout)


@app.command(name="book", help="Print the render plan of a book project.")
def show_book(
    project_dir: typ.Annotated[
        Path, Parameter(help="Book project directory", env_var="FOLIO_PROJECT_DIR")
    ] = Path(),
    *,
    verbose: bool = False,
) -> None:
    """Resolve the book project in ``project_dir`` and print its render plan.

    Raises
    ------
    BookConfigError
        If the contents reference missing files or lack a home page.
    """
    _configure_logging(verbose)
    config = asyncio.run(load_project_config(project_dir))
    for item in config.get("book", {}).get("render", []):
        print(_describe_item(item))


def main() -> None:
    """Invoke the Cyclopts application that powers the ``folio`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

r"""Probe book inputs for an execution engine and chapter numbering.

A book leaf is only rendered when an execution engine recognises its file
type, and a chapter is only numbered when its first heading does not opt out
with the ``.unnumbered`` (or ``-``) class.

Examples
--------
>>> from folio.book.chapters import is_numbered_chapter, partition_markdown
>>> is_numbered_chapter(partition_markdown("# Preface {.unnumbered}\nText"))
False
>>> partition_markdown("# 1 Intro {#intro}\n").heading_attr.id
'intro'
"""

from __future__ import annotations

import dataclasses as dc
import json
import re
import typing as typ

from folio.config.loader import parse_yaml, split_front_matter

if typ.TYPE_CHECKING:
    from pathlib import Path

    from folio.config.models import Metadata

HEADING_PATTERN = re.compile(
    r"^#{1,6}[ \t]+(?P<text>.*?)(?:[ \t]+\{(?P<attr>[^}]*)\})?[ \t]*#*[ \t]*$",
    re.MULTILINE,
)
FENCE_PATTERN = re.compile(r"^[ ]{0,3}(?P<fence>`{3,}|~{3,})")
UNNUMBERED_CLASSES = frozenset({"unnumbered", "-"})


@dc.dataclass(frozen=True, slots=True)
class ExecutionEngine:
    """An engine able to execute and render a family of input files."""

    name: str
    extensions: tuple[str, ...]


MARKDOWN_ENGINE = ExecutionEngine("markdown", (".md", ".markdown", ".qmd"))
JUPYTER_ENGINE = ExecutionEngine("jupyter", (".ipynb",))
KNITR_ENGINE = ExecutionEngine("knitr", (".rmd",))
EXECUTION_ENGINES: tuple[ExecutionEngine, ...] = (
    KNITR_ENGINE,
    JUPYTER_ENGINE,
    MARKDOWN_ENGINE,
)


@dc.dataclass(frozen=True, slots=True)
class HeadingAttr:
    """Pandoc style attributes attached to a heading."""

    id: str = ""
    classes: tuple[str, ...] = ()
    keyvalue: tuple[tuple[str, str], ...] = ()


@dc.dataclass(frozen=True, slots=True)
class PartitionedMarkdown:
    """Front matter, first heading, and body of a markdown document."""

    yaml: Metadata | None
    heading_text: str | None
    heading_attr: HeadingAttr | None
    contents: str


def file_execution_engine(path: Path) -> ExecutionEngine | None:
    """Return the engine that handles ``path``, or None for other files."""
    suffix = path.suffix.lower()
    for engine in EXECUTION_ENGINES:
        if suffix in engine.extensions:
            return engine
    return None


def _parse_attr(raw: str) -> HeadingAttr:
    identifier = ""
    classes: list[str] = []
    keyvalue: list[tuple[str, str]] = []
    for token in raw.split():
        if token.startswith("#"):
            identifier = token[1:]
        elif token.startswith("."):
            classes.append(token[1:])
        elif token == "-":
            classes.append(token)
        elif "=" in token:
            key, _, value = token.partition("=")
            keyvalue.append((key, value.strip("\"'")))
    return HeadingAttr(id=identifier, classes=tuple(classes), keyvalue=tuple(keyvalue))


def _first_heading(body: str) -> tuple[re.Match[str], int] | None:
    """Return the first ATX heading outside fenced code and the offset after it."""
    offset = 0
    fence: str | None = None
    for line in body.splitlines(keepends=True):
        offset += len(line)
        text = line.rstrip("\r\n")
        fence_match = FENCE_PATTERN.match(text)
        if fence is not None:
            # A closing fence repeats the opening character at least as often.
            if (
                fence_match
                and fence_match.group("fence").startswith(fence)
                and not text[fence_match.end() :].strip()
            ):
                fence = None
            continue
        if fence_match:
            fence = fence_match.group("fence")
            continue
        heading = HEADING_PATTERN.match(text)
        if heading:
            return heading, offset
    return None


def partition_markdown(markdown_text: str) -> PartitionedMarkdown:
    """Split ``markdown_text`` into front matter, first heading, and body.

    Lines inside backtick or tilde fenced code blocks are never taken as the
    heading, so a ``# comment`` in a code sample does not hide the real one.
    """
    front_matter, body = split_front_matter(markdown_text)
    yaml = parse_yaml(front_matter) if front_matter is not None else None
    found = _first_heading(body)
    if found is None:
        return PartitionedMarkdown(
            yaml=yaml, heading_text=None, heading_attr=None, contents=body
        )
    match, end = found
    attr = match.group("attr")
    return PartitionedMarkdown(
        yaml=yaml,
        heading_text=match.group("text").strip(),
        heading_attr=_parse_attr(attr) if attr is not None else None,
        contents=body[end:].lstrip("\n"),
    )


def _notebook_markdown(path: Path) -> str:
    """Return the source of the first markdown cell of a Jupyter notebook."""
    notebook = json.loads(path.read_text(encoding="utf-8"))
    for cell in notebook.get("cells", []):
        if cell.get("cell_type") != "markdown":
            continue
        source = cell.get("source", "")
        return "".join(source) if isinstance(source, list) else str(source)
    return ""


def partitioned_markdown_for_input(path: Path) -> PartitionedMarkdown | None:
    """Partition the markdown content of a book input, if it has any."""
    engine = file_execution_engine(path)
    if engine is None or not path.exists():
        return None
    if engine is JUPYTER_ENGINE:
        return partition_markdown(_notebook_markdown(path))
    return partition_markdown(path.read_text(encoding="utf-8"))


def is_numbered_chapter(partitioned: PartitionedMarkdown) -> bool:
    """Return False when the first heading opts out of chapter numbering."""
    if partitioned.heading_attr is None:
        return True
    return not UNNUMBERED_CLASSES.intersection(partitioned.heading_attr.classes)


__all__ = [
    "EXECUTION_ENGINES",
    "ExecutionEngine",
    "HeadingAttr",
    "PartitionedMarkdown",
    "file_execution_engine",
    "is_numbered_chapter",
    "partition_markdown",
    "partitioned_markdown_for_input",
]

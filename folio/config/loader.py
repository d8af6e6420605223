"""Read YAML metadata documents and markdown front matter."""

from __future__ import annotations

import re
import typing as typ

from ruamel.yaml import YAML

from .models import Metadata, MetadataError

if typ.TYPE_CHECKING:
    from pathlib import Path

FRONT_MATTER_PATTERN = re.compile(
    r"\A(?:\ufeff)?---[ \t]*\r?\n(?P<yaml>.*?)^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def _safe_loader() -> YAML:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader


def parse_yaml(text: str, *, source: str = "<string>") -> Metadata:
    """Parse ``text`` into a metadata mapping.

    Empty documents yield an empty mapping. Parse errors from the YAML
    library propagate unchanged.

    Raises
    ------
    MetadataError
        If the document does not hold a mapping at the top level.
    """
    loaded = _safe_loader().load(text)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = f"Metadata in '{source}' must be a YAML mapping."
        raise MetadataError(msg)
    return dict(loaded)


def read_yaml(path: Path) -> Metadata:
    """Read the YAML file at ``path`` into a metadata mapping."""
    return parse_yaml(path.read_text(encoding="utf-8"), source=str(path))


def split_front_matter(markdown_text: str) -> tuple[str | None, str]:
    """Return the raw front matter block (if any) and the remaining body."""
    match = FRONT_MATTER_PATTERN.match(markdown_text)
    if not match:
        return None, markdown_text
    return match.group("yaml"), markdown_text[match.end() :]


def read_yaml_from_markdown(markdown_text: str, *, source: str = "<string>") -> Metadata:
    """Return the front matter of ``markdown_text`` as a metadata mapping."""
    front_matter, _body = split_front_matter(markdown_text)
    if front_matter is None:
        return {}
    return parse_yaml(front_matter, source=source)


def read_yaml_from_markdown_file(path: Path) -> Metadata:
    """Return the front matter of the markdown file at ``path``."""
    return read_yaml_from_markdown(
        path.read_text(encoding="utf-8"), source=str(path)
    )


__all__ = [
    "FRONT_MATTER_PATTERN",
    "parse_yaml",
    "read_yaml",
    "read_yaml_from_markdown",
    "read_yaml_from_markdown_file",
    "split_front_matter",
]

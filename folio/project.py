"""Load a folio project file and derive its project-type configuration.

A project lives in a directory holding ``_folio.yml``. Metadata files named by
the project file (``metadata-file`` / ``metadata-files``) are merged beneath
it, and ``project.type: book`` projects are resolved with
:func:`~folio.book.book_project_config`.

Examples
--------
>>> import asyncio
>>> from pathlib import Path
>>> from folio.project import load_project_config
>>> config = asyncio.run(load_project_config(Path("my-book")))  # doctest: +SKIP
>>> config["project"]["render"][0]  # doctest: +SKIP
'index.md'
"""

from __future__ import annotations

import typing as typ

from ._constants import PROJECT_FILENAMES
from .book import BookProbes, book_project_config
from .config import FolioError, included_metadata, merge_configs, read_yaml

if typ.TYPE_CHECKING:
    from pathlib import Path

PROJECT_TYPE_BOOK = "book"


class ProjectConfigError(FolioError, ValueError):
    """Raised when a project file is missing required structure."""


def find_project_file(project_dir: Path) -> Path:
    """Return the project file inside ``project_dir``.

    Raises
    ------
    FileNotFoundError
        If none of the recognised project file names exist.
    """
    for name in PROJECT_FILENAMES:
        candidate = project_dir / name
        if candidate.exists():
            return candidate
    expected = " or ".join(PROJECT_FILENAMES)
    msg = f"No project file ({expected}) found in '{project_dir}'."
    raise FileNotFoundError(msg)


async def load_project_config(
    project_dir: Path, *, probes: BookProbes | None = None
) -> dict[str, typ.Any]:
    """Read, merge, and resolve the project configuration in ``project_dir``.

    Parameters
    ----------
    project_dir : Path
        Directory containing ``_folio.yml``.
    probes : BookProbes, optional
        Capabilities forwarded to book resolution.

    Returns
    -------
    dict
        The merged project configuration. Book projects also carry
        ``book.render`` and ``project.render``.

    Raises
    ------
    FileNotFoundError
        If the directory has no project file.
    ProjectConfigError
        If the ``project`` entry is present but not a mapping.
    MetadataError
        If the project file or an included metadata file is not a mapping.
    BookConfigError
        If a book project's contents cannot be resolved.
    """
    project_file = find_project_file(project_dir)
    raw = read_yaml(project_file)
    project = raw.get("project")
    if project is None:
        project = {}
    elif not isinstance(project, dict):
        msg = f"'project' in '{project_file}' must be a mapping."
        raise ProjectConfigError(msg)

    included = included_metadata(project_dir, raw)
    config = merge_configs(included.metadata, raw)

    if project.get("type") == PROJECT_TYPE_BOOK:
        config = await book_project_config(project_dir, config, probes=probes)
    return config


__all__ = ["ProjectConfigError", "find_project_file", "load_project_config"]

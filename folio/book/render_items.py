"""Resolve a book's declared contents into an ordered render plan.

The walk is depth first and strictly sequential: chapter numbers depend on
visiting order, so each entry (including its filesystem and engine probes) is
finished before the next sibling starts. Probes may be plain callables or
coroutine functions; both are awaited the same way.

Typical usage reads the project configuration first:

>>> import asyncio
>>> from pathlib import Path
>>> from folio.book.render_items import book_render_items
>>> config = {"book": {"contents": ["index.md", "intro.md"]}}
>>> items = asyncio.run(book_render_items(Path("my-book"), config))  # doctest: +SKIP
>>> [item.file for item in items]  # doctest: +SKIP
['index.md', 'intro.md']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import inspect
import logging
import posixpath
import typing as typ
from pathlib import Path

from .chapters import (
    ExecutionEngine,
    PartitionedMarkdown,
    file_execution_engine,
    is_numbered_chapter,
    partitioned_markdown_for_input,
)
from .models import BookConfigError, BookItemType, BookRenderItem, SidebarItem
from .sidebar import normalize_sidebar_items

logger = logging.getLogger(__name__)

BOOK = "book"
BOOK_CONTENTS = "contents"
BOOK_REFERENCES = "references"
BOOK_APPENDIX = "appendix"
APPENDICES_SECTION_LABEL = "Appendices"

T = typ.TypeVar("T")
Probe = cabc.Callable[[Path], T | cabc.Awaitable[T]]


def _path_exists(path: Path) -> bool:
    return path.exists()


@dc.dataclass(slots=True)
class BookProbes:
    """Filesystem and content capabilities consulted while resolving a book.

    Attributes
    ----------
    exists : callable
        ``exists(path) -> bool``; no side effects.
    find_engine : callable
        ``find_engine(path) -> ExecutionEngine | None``; None marks files that
        are not renderable documents.
    partition : callable
        ``partition(path) -> PartitionedMarkdown | None``.
    is_numbered : callable
        ``is_numbered(partitioned) -> bool``.
    """

    exists: Probe[bool] = _path_exists
    find_engine: Probe[ExecutionEngine | None] = file_execution_engine
    partition: Probe[PartitionedMarkdown | None] = partitioned_markdown_for_input
    is_numbered: cabc.Callable[
        [PartitionedMarkdown], bool | cabc.Awaitable[bool]
    ] = is_numbered_chapter


async def _settle(value: T | cabc.Awaitable[T]) -> T:
    if inspect.isawaitable(value):
        return await value
    return typ.cast("T", value)


def is_book_index_page(target: BookRenderItem | str) -> bool:
    """Return True for the book home page.

    Strings are project-relative hrefs; the home page is the file named
    ``index.*`` at the project root.
    """
    if isinstance(target, BookRenderItem):
        return target.type is BookItemType.INDEX
    head, name = posixpath.split(target)
    return not head and posixpath.splitext(name)[0] == "index"


def _declared_entries(name: str, declared: object) -> list[SidebarItem]:
    """Normalise one of the book contents lists, naming it on failure."""
    try:
        return normalize_sidebar_items(declared)
    except TypeError as exc:
        msg = f"Invalid book {name}: {exc}"
        raise BookConfigError(msg) from exc


def book_config(name: str, project: cabc.Mapping[str, typ.Any] | None) -> typ.Any:
    """Return ``project["book"][name]``, or None when either is absent."""
    book = project.get(BOOK) if project else None
    if not isinstance(book, cabc.Mapping):
        return None
    return book.get(name)


class _ContentsWalker:
    """Single-use visitor that accumulates render items and chapter numbers."""

    def __init__(self, project_dir: Path, probes: BookProbes) -> None:
        self.project_dir = project_dir
        self.probes = probes
        self.items: list[BookRenderItem] = []
        self._next_number = 1

    def start_group(self, delimiter: BookRenderItem | None = None) -> None:
        """Restart chapter numbering, optionally emitting a group header."""
        self._next_number = 1
        if delimiter is not None:
            self.items.append(delimiter)

    async def walk(
        self,
        entries: list[SidebarItem],
        *,
        item_type: BookItemType,
        numbered: bool = True,
    ) -> None:
        """Visit ``entries`` depth first, in declaration order."""
        for entry in entries:
            if entry.contents is not None:
                self.items.append(
                    BookRenderItem(type=BookItemType.PART, text=entry.text, file=entry.href)
                )
                await self.walk(entry.contents, item_type=item_type, numbered=numbered)
            elif entry.href:
                await self._visit_leaf(entry.href, item_type=item_type, numbered=numbered)

    async def _visit_leaf(
        self, href: str, *, item_type: BookItemType, numbered: bool
    ) -> None:
        path = self.project_dir / href
        engine = await self._find_engine(path)
        if engine is None:
            logger.debug("Skipping book entry %s: not a renderable input.", href)
            return

        resolved_type = BookItemType.INDEX if is_book_index_page(href) else item_type
        number: int | None = None
        if (
            resolved_type is not BookItemType.INDEX
            and numbered
            and await self._input_is_numbered(path)
        ):
            number = self._next_number
            self._next_number += 1

        self.items.append(BookRenderItem(type=resolved_type, file=href, number=number))

    async def _find_engine(self, path: Path) -> ExecutionEngine | None:
        if not await _settle(self.probes.exists(path)):
            return None
        return await _settle(self.probes.find_engine(path))

    async def _input_is_numbered(self, path: Path) -> bool:
        partitioned = await _settle(self.probes.partition(path))
        if partitioned is None:
            return False
        return bool(await _settle(self.probes.is_numbered(partitioned)))


async def book_render_items(
    project_dir: Path,
    config: cabc.Mapping[str, typ.Any] | None,
    *,
    probes: BookProbes | None = None,
) -> list[BookRenderItem]:
    """Return the ordered, numbered render plan for a book project.

    Parameters
    ----------
    project_dir : Path
        Directory that contents hrefs are relative to.
    config : Mapping[str, Any] or None
        Project configuration holding a ``book`` mapping with ``contents``,
        optional ``references``, and optional ``appendix``.
    probes : BookProbes, optional
        Capabilities used to inspect inputs; defaults to the local filesystem.

    Returns
    -------
    list[BookRenderItem]
        The home page first, then contents, references, and appendices in
        declaration order. Chapter numbers restart at 1 for the appendices.

    Raises
    ------
    BookConfigError
        If planned files are missing on disk (all of them are listed), or if
        the contents do not include exactly one home page, or if a contents,
        references, or appendix entry is neither a string nor a mapping.
    """
    if not config:
        return []

    probes = probes or BookProbes()
    walker = _ContentsWalker(project_dir, probes)

    contents = book_config(BOOK_CONTENTS, config)
    walker.start_group()
    if contents:
        await walker.walk(
            _declared_entries(BOOK_CONTENTS, contents),
            item_type=BookItemType.CHAPTER,
        )

    references = book_config(BOOK_REFERENCES, config)
    if references:
        await walker.walk(
            _declared_entries(BOOK_REFERENCES, references),
            item_type=BookItemType.CHAPTER,
            numbered=False,
        )

    appendix = book_config(BOOK_APPENDIX, config)
    if appendix:
        walker.start_group(
            BookRenderItem(type=BookItemType.APPENDIX, text=APPENDICES_SECTION_LABEL)
        )
        await walker.walk(
            _declared_entries(BOOK_APPENDIX, appendix),
            item_type=BookItemType.APPENDIX,
        )

    items = walker.items
    missing = [
        item.file
        for item in items
        if item.file and not await _settle(probes.exists(project_dir / item.file))
    ]
    if missing:
        msg = f"Book contents file(s) do not exist: {', '.join(missing)}"
        raise BookConfigError(msg)

    index_positions = [pos for pos, item in enumerate(items) if is_book_index_page(item)]
    if not index_positions:
        msg = "Book contents must include a home page (e.g. index.md)"
        raise BookConfigError(msg)
    if len(index_positions) > 1:
        duplicates = ", ".join(str(items[pos].file) for pos in index_positions)
        msg = f"Book contents must include exactly one home page, found: {duplicates}"
        raise BookConfigError(msg)

    home = items[index_positions[0]]
    return [home, *(item for item in items if item is not home)]


def book_config_render_items(
    project: cabc.Mapping[str, typ.Any] | None,
) -> list[BookRenderItem]:
    """Return the render plan stored on a resolved project configuration."""
    return list(book_config("render", project) or [])


__all__ = [
    "APPENDICES_SECTION_LABEL",
    "BookProbes",
    "book_config",
    "book_config_render_items",
    "book_render_items",
    "is_book_index_page",
]

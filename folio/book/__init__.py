"""Resolve book projects into ordered, numbered render plans.

A book declares its chapters as a tree under ``book.contents`` (with optional
``references`` and ``appendix`` entries). :func:`book_render_items` walks that
tree, keeps the entries that exist and have an execution engine, numbers the
chapters, and moves the home page to the front. :func:`book_project_config`
wraps it with the site-facing settings derived from the book configuration.

Examples
--------
>>> import asyncio
>>> from pathlib import Path
>>> from folio.book import book_render_items
>>> config = {"book": {"contents": ["index.md", "intro.md"]}}
>>> plan = asyncio.run(book_render_items(Path("book"), config))  # doctest: +SKIP
>>> plan[0].type  # doctest: +SKIP
<BookItemType.INDEX: 'index'>
"""

from .chapters import (
    ExecutionEngine,
    HeadingAttr,
    PartitionedMarkdown,
    file_execution_engine,
    is_numbered_chapter,
    partition_markdown,
    partitioned_markdown_for_input,
)
from .config import (
    book_output_stem,
    book_project_config,
    download_tools,
    is_github_repo_url,
    render_attribution,
    sharing_tools,
)
from .models import BookConfigError, BookItemType, BookRenderItem, SidebarItem
from .render_items import (
    APPENDICES_SECTION_LABEL,
    BookProbes,
    book_config,
    book_config_render_items,
    book_render_items,
    is_book_index_page,
)
from .sidebar import normalize_href, normalize_sidebar_item, normalize_sidebar_items

__all__ = [
    "APPENDICES_SECTION_LABEL",
    "BookConfigError",
    "BookItemType",
    "BookProbes",
    "BookRenderItem",
    "ExecutionEngine",
    "HeadingAttr",
    "PartitionedMarkdown",
    "SidebarItem",
    "book_config",
    "book_config_render_items",
    "book_output_stem",
    "book_project_config",
    "book_render_items",
    "download_tools",
    "file_execution_engine",
    "is_book_index_page",
    "is_github_repo_url",
    "is_numbered_chapter",
    "normalize_href",
    "normalize_sidebar_item",
    "normalize_sidebar_items",
    "partition_markdown",
    "partitioned_markdown_for_input",
    "render_attribution",
    "sharing_tools",
]

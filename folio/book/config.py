"""Fold a book project's configuration into its site and render plan.

:func:`book_project_config` copies the book-level options that the site layer
reads (title, URLs, navigation), builds the sidebar contents and tools, renders
the attribution footer, and stores the resolved render plan on the project.
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import re
import typing as typ
from pathlib import Path, PurePosixPath

from markdown import markdown

from .models import BookRenderItem
from .render_items import (
    APPENDICES_SECTION_LABEL,
    BOOK,
    BOOK_APPENDIX,
    BOOK_CONTENTS,
    BOOK_REFERENCES,
    BookProbes,
    book_config,
    book_render_items,
)

logger = logging.getLogger(__name__)

SITE = "site"
PROJECT = "project"
PROJECT_RENDER = "render"
SITE_TITLE = "title"
SITE_URL = "site-url"
SITE_REPO_URL = "repo-url"
SITE_REPO_ACTIONS = "repo-actions"
SITE_NAVBAR = "navbar"
SITE_SIDEBAR = "sidebar"
SITE_PAGE_NAVIGATION = "page-navigation"
SITE_FOOTER = "page-footer"
SIDEBAR_CONTENTS = "contents"
BOOK_RENDER = "render"
BOOK_OUTPUT_FILE = "output-file"
BOOK_SHARING = "sharing"
BOOK_DOWNLOADS = "downloads"
BOOK_TOOLS = "tools"
BOOK_SEARCH = "search"
BOOK_ATTRIBUTION = "attribution"

SHARE_ICON = "share"
DOWNLOAD_ICON = "download"

# Output formats whose book rendering is a single downloadable file.
SINGLE_FILE_BOOK_FORMATS: dict[str, str] = {
    "pdf": "pdf",
    "epub": "epub",
    "docx": "docx",
}

SHARING_TOOLS: dict[str, dict[str, typ.Any]] = {
    "linkedin": {
        "icon": "linkedin",
        "text": "LinkedIn",
        "href": "https://www.linkedin.com/sharing/share-offsite/?url=",
        "requires-site-url": True,
    },
    "facebook": {
        "icon": "facebook",
        "text": "Facebook",
        "href": "https://www.facebook.com/sharer/sharer.php",
    },
    "twitter": {
        "icon": "twitter",
        "text": "Twitter",
        "href": "http://www.twitter.com/share",
    },
}

GITHUB_REPO_PATTERN = re.compile(r"^https?://github\.com/[^/]+/[^/]+/?$")

_MARKDOWN_EXTENSIONS = ["sane_lists", "tables", "fenced_code"]
_warned: set[str] = set()

ProjectConfig = dict[str, typ.Any]


def _warn_once(message: str) -> None:
    if message in _warned:
        return
    _warned.add(message)
    logger.warning(message)


def is_github_repo_url(url: str) -> bool:
    """Return True for ``https://github.com/<owner>/<repo>`` style URLs."""
    return bool(GITHUB_REPO_PATTERN.match(url))


def book_output_stem(project_dir: Path, config: cabc.Mapping[str, typ.Any] | None) -> str:
    """Return the file stem used for single-file book outputs."""
    output_file = (
        book_config(BOOK_OUTPUT_FILE, config)
        or book_config(SITE_TITLE, config)
        or project_dir.resolve().name
    )
    return PurePosixPath(str(output_file)).stem


def render_attribution(attribution: str) -> str:
    """Render the book attribution markdown to an HTML fragment."""
    return markdown(
        attribution.strip(), extensions=_MARKDOWN_EXTENSIONS, output_format="html5"
    )


def _config_actions(name: str, book: cabc.Mapping[str, typ.Any]) -> list[str]:
    actions = book.get(name)
    if isinstance(actions, str):
        return [actions]
    if isinstance(actions, list):
        return [str(action) for action in actions]
    return []


def download_tools(
    project_dir: Path, config: cabc.Mapping[str, typ.Any]
) -> list[dict[str, typ.Any]]:
    """Return the sidebar download button or menu for single-file formats."""
    book = config.get(BOOK) or {}
    stem = book_output_stem(project_dir, config)
    downloads: list[dict[str, typ.Any]] = []
    for action in _config_actions(BOOK_DOWNLOADS, book):
        extension = SINGLE_FILE_BOOK_FORMATS.get(action)
        if extension is None:
            logger.warning("Download format '%s' is not a single file book format.", action)
            continue
        downloads.append({"text": action, "href": f"{stem}.{extension}"})

    if not downloads:
        return []
    if len(downloads) == 1:
        return [{**downloads[0], "icon": DOWNLOAD_ICON}]
    return [{"icon": DOWNLOAD_ICON, "text": "Download", "menu": downloads}]


def sharing_tools(config: cabc.Mapping[str, typ.Any]) -> list[dict[str, typ.Any]]:
    """Return the sidebar share button or menu for the known networks."""
    book = config.get(BOOK) or {}
    site = config.get(SITE) or {}
    site_url = site.get(SITE_URL) or book.get(SITE_URL)

    tools: list[dict[str, typ.Any]] = []
    for action in _config_actions(BOOK_SHARING, book):
        tool = SHARING_TOOLS.get(action)
        if tool is None:
            continue
        if tool.get("requires-site-url") and not site_url:
            _warn_once(f"Sharing using {action} requires that you provide a site-url.")
            continue
        tools.append({key: value for key, value in tool.items() if key != "requires-site-url"})

    if len(tools) <= 1:
        return tools
    return [{"text": "Share", "icon": SHARE_ICON, "menu": tools}]


def _fold_sidebar_contents(
    book: cabc.Mapping[str, typ.Any], sidebar: dict[str, typ.Any]
) -> None:
    contents: list[typ.Any] = []
    book_contents = book.get(BOOK_CONTENTS)
    if isinstance(book_contents, list):
        contents.extend(book_contents)
    references = book.get(BOOK_REFERENCES)
    if isinstance(references, list):
        contents.extend(references)
    elif references:
        contents.append(references)
    appendix = book.get(BOOK_APPENDIX)
    if isinstance(appendix, list):
        contents.append({"section": APPENDICES_SECTION_LABEL, "contents": appendix})
    sidebar[SIDEBAR_CONTENTS] = contents


async def book_project_config(
    project_dir: Path,
    config: ProjectConfig,
    *,
    probes: BookProbes | None = None,
) -> ProjectConfig:
    """Derive site settings and the render plan for a book project.

    Parameters
    ----------
    project_dir : Path
        Root directory of the book project.
    config : dict
        Project configuration; updated in place and returned.
    probes : BookProbes, optional
        Capabilities forwarded to :func:`book_render_items`.

    Returns
    -------
    dict
        ``config`` with ``site`` populated, ``book.render`` holding the
        :class:`BookRenderItem` plan, and ``project.render`` listing its files.

    Raises
    ------
    BookConfigError
        Propagated from :func:`book_render_items`.
    """
    site = config.get(SITE)
    if not isinstance(site, dict):
        site = {}
        config[SITE] = site

    book = config.get(BOOK)
    if not isinstance(book, dict):
        book = {}
        config[BOOK] = book

    for key in (SITE_TITLE, SITE_URL, SITE_REPO_URL, SITE_REPO_ACTIONS, SITE_NAVBAR, SITE_SIDEBAR):
        if key in book:
            site[key] = book[key]
    site[SITE_PAGE_NAVIGATION] = book.get(SITE_PAGE_NAVIGATION) is not False

    attribution = book.get(BOOK_ATTRIBUTION)
    if attribution and isinstance(attribution, str):
        site[SITE_FOOTER] = render_attribution(attribution)

    sidebar = site.get(SITE_SIDEBAR)
    if not isinstance(sidebar, dict):
        sidebar = {}
    else:
        sidebar = dict(sidebar)
    site[SITE_SIDEBAR] = sidebar
    _fold_sidebar_contents(book, sidebar)

    if book.get(BOOK_SEARCH) is not False:
        sidebar[BOOK_SEARCH] = True

    tools = list(sidebar.get(BOOK_TOOLS) or [])
    tools.extend(book.get(BOOK_TOOLS) or [])
    repo_url = site.get(SITE_REPO_URL)
    if repo_url:
        icon = "github" if is_github_repo_url(str(repo_url)) else "journal-code"
        tools.append({"text": "Source Code", "icon": icon, "href": repo_url})
    tools.extend(download_tools(project_dir, config))
    tools.extend(sharing_tools(config))
    sidebar[BOOK_TOOLS] = tools

    render_items: list[BookRenderItem] = await book_render_items(
        project_dir, config, probes=probes
    )
    book[BOOK_RENDER] = render_items
    project = config.get(PROJECT)
    if not isinstance(project, dict):
        project = {}
        config[PROJECT] = project
    project[PROJECT_RENDER] = [item.file for item in render_items if item.file]

    return config


__all__ = [
    "SHARING_TOOLS",
    "SINGLE_FILE_BOOK_FORMATS",
    "book_output_stem",
    "book_project_config",
    "download_tools",
    "is_github_repo_url",
    "render_attribution",
    "sharing_tools",
]

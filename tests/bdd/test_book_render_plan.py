"""Behaviour tests for resolving book projects into render plans.

The scenarios in ``book_render_plan.feature`` write a small book project into
``tmp_path``, resolve it with :func:`folio.project.load_project_config`, and
inspect the ordered plan stored under ``book.render``.

Usage
-----
Run ``pytest tests/bdd/test_book_render_plan.py -v``. No network access or
external tools are required.
"""

from __future__ import annotations

import asyncio
import typing as typ
from pathlib import Path
from textwrap import dedent

import pytest
from pytest_bdd import given, scenarios, then, when

from folio.book import BookConfigError, BookItemType, BookRenderItem
from folio.project import load_project_config

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "book_render_plan.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _write_project(root: Path, project_yaml: str, files: list[str]) -> None:
    (root / "_folio.yml").write_text(dedent(project_yaml).strip() + "\n", encoding="utf-8")
    for name in files:
        (root / name).write_text(f"# {Path(name).stem.title()}\n", encoding="utf-8")


@given("a book project with two chapters and one appendix")
def given_book_project(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Write a book with a home page, two chapters, and an appendix."""
    _write_project(
        tmp_path,
        """
        project:
          type: book
        book:
          title: Sample
          contents:
            - intro.md
            - index.md
            - methods.md
          appendix:
            - data.md
        """,
        ["index.md", "intro.md", "methods.md", "data.md"],
    )
    scenario_state["project_dir"] = tmp_path


@given("a book project without a home page")
def given_book_without_home(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Write a book whose contents omit ``index.md``."""
    _write_project(
        tmp_path,
        """
        project:
          type: book
        book:
          contents:
            - intro.md
        """,
        ["intro.md"],
    )
    scenario_state["project_dir"] = tmp_path


@when("I resolve the book project")
def when_resolve(scenario_state: ScenarioState) -> None:
    """Load the project configuration and keep the render plan."""
    project_dir = typ.cast("Path", scenario_state["project_dir"])
    config = asyncio.run(load_project_config(project_dir))
    scenario_state["plan"] = config["book"]["render"]


@when("I try to resolve the book project")
def when_try_resolve(scenario_state: ScenarioState) -> None:
    """Load the project configuration, capturing the book error."""
    project_dir = typ.cast("Path", scenario_state["project_dir"])
    with pytest.raises(BookConfigError) as excinfo:
        asyncio.run(load_project_config(project_dir))
    scenario_state["error"] = excinfo.value


@then("the render plan starts with the home page")
def then_home_first(scenario_state: ScenarioState) -> None:
    """The home page leads the plan even though it was declared second."""
    plan = typ.cast("list[BookRenderItem]", scenario_state["plan"])
    assert plan[0] == BookRenderItem(type=BookItemType.INDEX, file="index.md")


@then("the chapters are numbered 1 and 2")
def then_chapters_numbered(scenario_state: ScenarioState) -> None:
    """Chapters keep declaration order and count from one."""
    plan = typ.cast("list[BookRenderItem]", scenario_state["plan"])
    chapters = [item for item in plan if item.type is BookItemType.CHAPTER]
    assert [(item.file, item.number) for item in chapters] == [
        ("intro.md", 1),
        ("methods.md", 2),
    ]


@then("the appendix restarts numbering at 1")
def then_appendix_numbered(scenario_state: ScenarioState) -> None:
    """The appendix group has a header item and its own numbering."""
    plan = typ.cast("list[BookRenderItem]", scenario_state["plan"])
    appendix = [item for item in plan if item.type is BookItemType.APPENDIX]
    assert appendix == [
        BookRenderItem(type=BookItemType.APPENDIX, text="Appendices"),
        BookRenderItem(type=BookItemType.APPENDIX, file="data.md", number=1),
    ]


@then("a book configuration error mentions the home page")
def then_error_mentions_home(scenario_state: ScenarioState) -> None:
    """The error tells the author what to add."""
    error = typ.cast("BookConfigError", scenario_state["error"])
    assert "home page" in str(error)

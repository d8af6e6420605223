from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from folio.book import BookConfigError, BookItemType
from folio.config import MetadataError
from folio.project import ProjectConfigError, find_project_file, load_project_config


def _write_book(root: Path, project_yaml: str) -> Path:
    (root / "_folio.yml").write_text(project_yaml.strip() + "\n", encoding="utf-8")
    (root / "index.md").write_text("# Home\n", encoding="utf-8")
    (root / "intro.md").write_text("# Intro\n", encoding="utf-8")
    return root


def test_book_project_is_resolved(tmp_path: Path) -> None:
    _write_book(
        tmp_path,
        """
project:
  type: book
book:
  title: Notes
  contents:
    - intro.md
    - index.md
""",
    )
    config = asyncio.run(load_project_config(tmp_path))
    plan = config["book"]["render"]
    assert [item.type for item in plan] == [BookItemType.INDEX, BookItemType.CHAPTER]
    assert config["project"]["render"] == ["index.md", "intro.md"]
    assert config["site"]["title"] == "Notes"


def test_metadata_files_merge_beneath_project_file(tmp_path: Path) -> None:
    (tmp_path / "shared.yml").write_text(
        "book:\n  title: Shared\n  author: Ada\n", encoding="utf-8"
    )
    _write_book(
        tmp_path,
        """
project:
  type: book
metadata-files: [shared.yml]
book:
  title: Own
  contents: [index.md]
""",
    )
    config = asyncio.run(load_project_config(tmp_path))
    assert config["book"]["title"] == "Own"
    assert config["book"]["author"] == "Ada"


def test_yaml_extension_is_accepted(tmp_path: Path) -> None:
    (tmp_path / "_folio.yaml").write_text("title: Plain\n", encoding="utf-8")
    assert find_project_file(tmp_path) == tmp_path / "_folio.yaml"
    config = asyncio.run(load_project_config(tmp_path))
    assert config == {"title": "Plain"}


def test_missing_project_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="_folio.yml"):
        asyncio.run(load_project_config(tmp_path))


def test_project_entry_must_be_a_mapping(tmp_path: Path) -> None:
    (tmp_path / "_folio.yml").write_text("project: book\n", encoding="utf-8")
    with pytest.raises(ProjectConfigError, match="must be a mapping"):
        asyncio.run(load_project_config(tmp_path))


def test_project_file_must_be_a_mapping(tmp_path: Path) -> None:
    (tmp_path / "_folio.yml").write_text("- one\n- two\n", encoding="utf-8")
    with pytest.raises(MetadataError):
        asyncio.run(load_project_config(tmp_path))


def test_book_errors_propagate(tmp_path: Path) -> None:
    _write_book(
        tmp_path,
        """
project:
  type: book
book:
  contents: [intro.md]
""",
    )
    with pytest.raises(BookConfigError, match="home page"):
        asyncio.run(load_project_config(tmp_path))

"""Typed dataclasses describing a book project's render plan."""

from __future__ import annotations

import dataclasses as dc
import enum

from folio.config.models import FolioError


class BookConfigError(FolioError, ValueError):
    """Raised when a book's declared contents cannot form a render plan."""


class BookItemType(enum.StrEnum):
    """Role of an entry in the book render plan."""

    INDEX = "index"
    CHAPTER = "chapter"
    APPENDIX = "appendix"
    PART = "part"


@dc.dataclass(frozen=True, slots=True)
class BookRenderItem:
    """One entry of the ordered book render plan.

    Attributes
    ----------
    type : BookItemType
        Whether the entry is the home page, a chapter, an appendix, or a part
        header.
    text : str or None
        Label shown for part and appendix headers.
    file : str or None
        Project-relative POSIX path of the file rendered for this entry.
    number : int or None
        1-based chapter number, set only for numbered chapters.
    """

    type: BookItemType
    text: str | None = None
    file: str | None = None
    number: int | None = None

    def to_dict(self) -> dict[str, object]:
        """Return the populated fields as a plain mapping."""
        payload: dict[str, object] = {"type": self.type.value}
        if self.text is not None:
            payload["text"] = self.text
        if self.file is not None:
            payload["file"] = self.file
        if self.number is not None:
            payload["number"] = self.number
        return payload


@dc.dataclass(slots=True)
class SidebarItem:
    """A normalised entry of a declared contents tree."""

    href: str | None = None
    text: str | None = None
    contents: list[SidebarItem] | None = None


__all__ = ["BookConfigError", "BookItemType", "BookRenderItem", "SidebarItem"]

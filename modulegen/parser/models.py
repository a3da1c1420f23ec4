"""Pydantic v2 models for the outline parser.

Defines the folder/file hierarchy produced from an outline document.  Nodes
are frozen once the parse completes; the tree builder assembles them from
mutable drafts and materialises the final models in one pass.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Tree nodes
# ---------------------------------------------------------------------------

class File(BaseModel):
    """A file entry rendered from a template."""
    model_config = ConfigDict(frozen=True)

    template_id: str = Field(default="", description="Template resource key, may be empty")
    name: str = Field(..., description="File name, may contain placeholders and a (...) note")
    parameters: Optional[dict[str, str]] = Field(
        default=None, description="File-local parameter scope"
    )


class Folder(BaseModel):
    """A folder entry owning its files and subfolders in source order."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Folder name, may contain placeholders")
    files: list[File] = Field(default_factory=list, description="Files directly inside")
    folders: list[Folder] = Field(default_factory=list, description="Subfolders")

    def walk(self, parents: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], Folder]]:
        """Yield ``(path_parts, folder)`` depth first, this folder included."""
        parts = (*parents, self.name)
        yield parts, self
        for child in self.folders:
            yield from child.walk(parts)

    def describe(self) -> str:
        template_ids = ", ".join(f.template_id for f in self.files)
        subfolders = ", ".join(child.describe() for child in self.folders)
        return (
            f"Folder:{self.name}\n"
            f"Files:{template_ids}\n"
            f"SubFolders: [{subfolders}]\n"
        )


# ---------------------------------------------------------------------------
# Parse result
# ---------------------------------------------------------------------------

class GenerationInput(BaseModel):
    """The parsed outline document: an ordered forest of root folders."""
    folders: list[Folder] = Field(default_factory=list, description="Top-level folders")
    dropped_lines: list[str] = Field(
        default_factory=list,
        description="Lines that had no enclosing folder and were skipped",
    )

    def walk(self) -> Iterator[tuple[tuple[str, ...], Folder]]:
        for folder in self.folders:
            yield from folder.walk()

    def folder_count(self) -> int:
        return sum(1 for _ in self.walk())

    def file_count(self) -> int:
        return sum(len(folder.files) for _, folder in self.walk())

    def describe(self) -> str:
        """Return the textual structure log, one block per root folder."""
        return "\n".join(folder.describe() for folder in self.folders)

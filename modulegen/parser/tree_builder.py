"""Assembles classified outline lines into a folder/file tree.

Folders are collected in an arena of drafts addressed by index.  A separate
``depth -> index`` map remembers the most recently opened folder at each
nesting depth, so a line at depth *d* attaches to ``last_at_depth[d - 1]``.
Once every line has been consumed the drafts are materialised into frozen
``Folder`` models.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from .classifier import ClassifiedLine, LineKind, classify_line
from .models import File, Folder, GenerationInput


# ---------------------------------------------------------------------------
# Arena
# ---------------------------------------------------------------------------

@dataclass
class _FolderDraft:
    name: str
    files: list[File] = field(default_factory=list)
    children: list[int] = field(default_factory=list)


class TreeBuilder:
    """Single-use builder consuming classified lines in document order."""

    def __init__(self) -> None:
        self._arena: list[_FolderDraft] = []
        self._roots: list[int] = []
        self._last_at_depth: dict[int, int] = {}
        self._dropped: list[str] = []

    def add(self, line: ClassifiedLine, line_number: int = 0) -> None:
        """Attach one classified line to the tree under construction."""
        parent_depth = line.depth - 1
        parent = self._last_at_depth.get(parent_depth)

        if line.kind is LineKind.FOLDER:
            # An orphan folder is still recorded at its depth; its own
            # children attach to it and are dropped along with it.
            index = len(self._arena)
            self._arena.append(_FolderDraft(name=line.name))
            self._last_at_depth[line.depth] = index
            if parent_depth < 0:
                self._roots.append(index)
            elif parent is None:
                self._drop(line, line_number)
            else:
                self._arena[parent].children.append(index)
            return

        if parent is None:
            self._drop(line, line_number)
            return
        self._arena[parent].files.append(
            File(
                template_id=line.template_id,
                name=line.name,
                parameters=line.parameters,
            )
        )

    def build(self) -> GenerationInput:
        """Materialise the drafts into a ``GenerationInput``."""
        return GenerationInput(
            folders=[self._materialise(index) for index in self._roots],
            dropped_lines=list(self._dropped),
        )

    def _materialise(self, index: int) -> Folder:
        draft = self._arena[index]
        return Folder(
            name=draft.name,
            files=list(draft.files),
            folders=[self._materialise(child) for child in draft.children],
        )

    def _drop(self, line: ClassifiedLine, line_number: int) -> None:
        self._dropped.append(
            f"line {line_number}: {line.kind.value} '{line.name}' at depth "
            f"{line.depth} has no enclosing folder"
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse(text: str) -> GenerationInput:
    """Parse an outline document into a ``GenerationInput``.

    Blank lines are skipped.  Lines without an enclosing folder are dropped
    and reported in ``GenerationInput.dropped_lines``.
    """
    builder = TreeBuilder()
    for number, raw in enumerate(text.splitlines(), start=1):
        if not raw.strip():
            continue
        builder.add(classify_line(raw), number)
    return builder.build()


async def _read_file(path: str | Path) -> str:
    """Read a file asynchronously using asyncio.to_thread."""
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Outline file not found: {path}")
    return await asyncio.to_thread(file_path.read_text, "utf-8")


async def parse_outline(path: str | Path) -> GenerationInput:
    """Read and parse the outline document at *path*.

    Raises:
        FileNotFoundError: If the document does not exist.
    """
    return parse(await _read_file(path))

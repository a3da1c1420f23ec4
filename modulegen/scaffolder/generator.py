"""Writes a parsed outline to disk.

Walks a ``GenerationInput`` and, for every folder, creates the directory and
then renders its files from templates with placeholders completed.  A
folder is always created before anything inside it; sibling files and
subfolders are processed concurrently.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, Field
from rich.markup import escape

from modulegen.config import Config
from modulegen.parser.models import File, Folder, GenerationInput
from modulegen.utils import console

from .completion import clean_file_name, complete, find_placeholders

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class GenerationError(Exception):
    """Raised when a folder or file cannot be read or written."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class GenerationReport(BaseModel):
    """Paths produced by a generation run, in outline order."""
    folders: list[Path] = Field(default_factory=list)
    files: list[Path] = Field(default_factory=list)
    unresolved: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Placeholder keys left unresolved, keyed by file path",
    )

    def extend(self, other: GenerationReport) -> None:
        self.folders.extend(other.folders)
        self.files.extend(other.files)
        self.unresolved.update(other.unresolved)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class ModuleGenerator:
    """Creates the folders and files described by a ``GenerationInput``."""

    def __init__(self, config: Config, *, quiet: bool = False) -> None:
        self.config = config
        self.quiet = quiet

    # -- Naming ------------------------------------------------------------

    def folder_name(self, folder: Folder) -> str:
        """Folder names only see the global parameter scope."""
        return complete(folder.name, None, self.config.parameters)

    def file_name(self, file: File) -> str:
        return clean_file_name(complete(file.name, file.parameters, self.config.parameters))

    # -- Public API --------------------------------------------------------

    async def generate(self, generation_input: GenerationInput) -> GenerationReport:
        """Generate every root folder of *generation_input* under the output root.

        Returns:
            A ``GenerationReport`` listing created folders and files.

        Raises:
            GenerationError: On the first failed read or write.  Output
                already written is left in place.
        """
        semaphore = asyncio.Semaphore(self.config.max_parallel_writes)
        report = GenerationReport()
        for folder in generation_input.folders:
            report.extend(
                await self._generate_folder(folder, self.config.output_root, semaphore)
            )
        return report

    async def render_content(self, file: File) -> str:
        """Read the file's template and complete its placeholders.

        A file without a template id renders as empty content.
        """
        if not file.template_id:
            return ""
        template_path = self.config.templates_dir / file.template_id
        self._log(f"Creating file from template: {template_path}")
        try:
            body = await asyncio.to_thread(template_path.read_text, "utf-8")
        except OSError as exc:
            raise GenerationError(template_path, f"cannot read template ({exc})") from exc
        return complete(body, file.parameters, self.config.parameters)

    # -- Internals ---------------------------------------------------------

    async def _generate_folder(
        self,
        folder: Folder,
        parent_dir: Path,
        semaphore: asyncio.Semaphore,
    ) -> GenerationReport:
        current_dir = parent_dir / self.folder_name(folder)
        await self._create_directory(current_dir)

        file_results = await _gather_or_cancel(
            [self._generate_file(f, current_dir, semaphore) for f in folder.files]
        )
        # Subfolders start only once every file of this folder is written.
        folder_results = await _gather_or_cancel(
            [self._generate_folder(child, current_dir, semaphore) for child in folder.folders]
        )

        report = GenerationReport(folders=[current_dir])
        for path, unresolved in file_results:
            report.files.append(path)
            if unresolved:
                report.unresolved[str(path)] = unresolved
        for child_report in folder_results:
            report.extend(child_report)
        return report

    async def _create_directory(self, path: Path) -> None:
        self._log(f"Creating folder: {path}")
        if self.config.dry_run:
            return
        try:
            await asyncio.to_thread(
                path.mkdir, parents=False, exist_ok=self.config.allow_existing
            )
        except OSError as exc:
            raise GenerationError(path, f"cannot create folder ({exc})") from exc

    async def _generate_file(
        self,
        file: File,
        directory: Path,
        semaphore: asyncio.Semaphore,
    ) -> tuple[Path, list[str]]:
        path = directory / self.file_name(file)
        unresolved = find_placeholders(path.name)
        if self.config.dry_run:
            return path, unresolved

        async with semaphore:
            content = await self.render_content(file)
            try:
                await asyncio.to_thread(path.write_text, content, "utf-8")
            except OSError as exc:
                raise GenerationError(path, f"cannot write file ({exc})") from exc

        return path, unresolved + find_placeholders(content)

    def _log(self, message: str) -> None:
        if not self.quiet:
            console.print(f"[dim]{escape(message)}[/dim]")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


async def _gather_or_cancel(coros: list[Coroutine[Any, Any, T]]) -> list[T]:
    """Run *coros* concurrently; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.create_task(coro) for coro in coros]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

"""Project manifest for generated output.

Records the generated structure as groups of files, the way an IDE project
lists them, so that downstream tooling can register the new paths.  File
paths are relative to the project directory.  Within a group, subgroups are
listed before files.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field

from modulegen.config import Config
from modulegen.parser.models import Folder, GenerationInput
from modulegen.utils import save_json

from .completion import clean_file_name, complete


class ManifestGroup(BaseModel):
    """One generated folder."""
    name: str = Field(..., description="Completed folder name")
    path: str = Field(..., description="Folder path relative to the project directory")
    groups: list[ManifestGroup] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list, description="File paths")


class GenerationManifest(BaseModel):
    """All groups generated under one target path."""
    target_path: str = Field(default="")
    groups: list[ManifestGroup] = Field(default_factory=list)
    structure: str = Field(default="", description="Textual structure log of the parsed outline")

    def all_files(self) -> list[str]:
        files: list[str] = []

        def _collect(group: ManifestGroup) -> None:
            for child in group.groups:
                _collect(child)
            files.extend(group.files)

        for group in self.groups:
            _collect(group)
        return files


def _build_group(folder: Folder, parent: PurePosixPath, config: Config) -> ManifestGroup:
    name = complete(folder.name, None, config.parameters)
    path = parent / name
    return ManifestGroup(
        name=name,
        path=str(path),
        groups=[_build_group(child, path, config) for child in folder.folders],
        files=[
            str(path / clean_file_name(complete(f.name, f.parameters, config.parameters)))
            for f in folder.files
        ],
    )


def build_manifest(generation_input: GenerationInput, config: Config) -> GenerationManifest:
    """Describe where every folder and file of *generation_input* ends up."""
    base = PurePosixPath(config.target_path) if config.target_path else PurePosixPath()
    return GenerationManifest(
        target_path=config.target_path,
        groups=[_build_group(folder, base, config) for folder in generation_input.folders],
        structure=generation_input.describe(),
    )


async def write_manifest(manifest: GenerationManifest, path: str | Path) -> Path:
    """Write *manifest* as pretty-printed JSON and return the written path."""
    target = Path(path)
    await save_json(manifest.model_dump(mode="json"), target)
    return target

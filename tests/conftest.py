"""Shared pytest fixtures for the modulegen test suite.

Provides reusable fixtures for:
- Sample outline documents (text and on disk)
- A templates directory with placeholder templates
- A project layout and a ``Config`` pointing into ``tmp_path``
"""

from __future__ import annotations

from pathlib import Path

import pytest

from modulegen.config import Config


# ---------------------------------------------------------------------------
# Outline documents
# ---------------------------------------------------------------------------

SAMPLE_OUTLINE = (
    "___MODULE___:\n"
    "\tViews:\n"
    "\t\t[View.swift]___MODULE___View.swift - {\"TITLE\": \"Welcome\"}\n"
    "\t\t[View.swift]___MODULE___Cell(row).swift - {\"TITLE\": \"Row\"}\n"
    "\tModels:\n"
    "\t\t[Model.swift]User.swift - {\"ENTITY\": \"User\"}\n"
    "\t[Presenter.swift]___MODULE___Presenter.swift\n"
    "Shared:\n"
    "\tREADME.md\n"
)


@pytest.fixture
def sample_outline_text() -> str:
    """Outline with nested folders, templates, parameters and notes."""
    return SAMPLE_OUTLINE


@pytest.fixture
def outline_file(tmp_path: Path, sample_outline_text: str) -> Path:
    """The sample outline written to disk."""
    path = tmp_path / "outline.txt"
    path.write_text(sample_outline_text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Templates & project layout
# ---------------------------------------------------------------------------

@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """Directory with the templates referenced by the sample outline."""
    directory = tmp_path / "templates"
    directory.mkdir()
    (directory / "View.swift").write_text(
        "// ___MODULE___\nstruct ___MODULE___View {\n    let title = \"___TITLE___\"\n}\n",
        encoding="utf-8",
    )
    (directory / "Model.swift").write_text(
        "struct ___ENTITY___ {\n    let id: ___ID_TYPE___\n}\n",
        encoding="utf-8",
    )
    (directory / "Presenter.swift").write_text(
        "final class ___MODULE___Presenter {}\n",
        encoding="utf-8",
    )
    return directory


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project directory with an empty target folder ``App/Modules``."""
    directory = tmp_path / "project"
    (directory / "App" / "Modules").mkdir(parents=True)
    (directory / "App.xcodeproj").mkdir()
    return directory


@pytest.fixture
def config(project_dir: Path, templates_dir: Path, outline_file: Path) -> Config:
    """Config generating the sample outline into ``project/App/Modules``."""
    return Config(
        project_path=project_dir / "App.xcodeproj",
        target_path="App/Modules",
        templates_dir=templates_dir,
        input_path=outline_file,
        parameters={"MODULE": "Login"},
    )

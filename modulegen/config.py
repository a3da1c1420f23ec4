"""modulegen configuration.

Centralised, typed configuration for a generation run.  Settings use
Pydantic v2 models so they are validated at construction time and can be
serialised to/from JSON or environment variables.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


class Config(BaseModel):
    """Settings for one generation run.

    ``project_path`` points at the project file whose directory anchors the
    output; generated folders go under ``<project dir>/<target_path>``.
    """

    project_path: Path = Field(default=Path("./Project.xcodeproj"))
    target_path: str = Field(default="", description="Output path relative to the project dir")
    templates_dir: Path = Field(default=Path("./templates"))
    input_path: Path = Field(default=Path("./outline.txt"))
    parameters: dict[str, str] = Field(
        default_factory=dict, description="Global parameter scope"
    )
    manifest_path: Optional[Path] = Field(default=None)
    allow_existing: bool = Field(
        default=False, description="Reuse folders that already exist instead of failing"
    )
    dry_run: bool = Field(default=False, description="Compute paths without writing")
    max_parallel_writes: int = Field(
        default=8, ge=1, description="Maximum concurrent file writes"
    )

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def project_dir(self) -> Path:
        """Directory that contains the project file."""
        return self.project_path.parent

    @property
    def output_root(self) -> Path:
        """Directory in which root folders of the outline are created."""
        return self.project_dir / self.target_path

    @property
    def default_manifest_path(self) -> Path:
        return self.output_root / "modulegen-manifest.json"

    @property
    def resolved_manifest_path(self) -> Path:
        return self.manifest_path or self.default_manifest_path

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            MODULEGEN_PROJECT_PATH, MODULEGEN_TARGET_PATH,
            MODULEGEN_TEMPLATES_DIR, MODULEGEN_INPUT_PATH,
            MODULEGEN_PARAMETERS (JSON object), MODULEGEN_MANIFEST_PATH,
            MODULEGEN_MAX_PARALLEL_WRITES.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("MODULEGEN_PROJECT_PATH"):
            kwargs["project_path"] = Path(os.environ["MODULEGEN_PROJECT_PATH"])
        if os.environ.get("MODULEGEN_TARGET_PATH"):
            kwargs["target_path"] = os.environ["MODULEGEN_TARGET_PATH"]
        if os.environ.get("MODULEGEN_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["MODULEGEN_TEMPLATES_DIR"])
        if os.environ.get("MODULEGEN_INPUT_PATH"):
            kwargs["input_path"] = Path(os.environ["MODULEGEN_INPUT_PATH"])
        if os.environ.get("MODULEGEN_PARAMETERS"):
            kwargs["parameters"] = json.loads(os.environ["MODULEGEN_PARAMETERS"])
        if os.environ.get("MODULEGEN_MANIFEST_PATH"):
            kwargs["manifest_path"] = Path(os.environ["MODULEGEN_MANIFEST_PATH"])
        if os.environ.get("MODULEGEN_MAX_PARALLEL_WRITES"):
            kwargs["max_parallel_writes"] = int(os.environ["MODULEGEN_MAX_PARALLEL_WRITES"])

        return cls(**kwargs)

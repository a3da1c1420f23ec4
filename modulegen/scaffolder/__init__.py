"""modulegen scaffolder -- renders a parsed outline to disk.

Quick usage::

    from modulegen.scaffolder import ModuleGenerator, complete

    complete("___NAME___View.swift", {"NAME": "Login"}, {})  # "LoginView.swift"
    report = await ModuleGenerator(config).generate(generation_input)
"""

from modulegen.scaffolder.completion import clean_file_name, complete, merge_parameters
from modulegen.scaffolder.generator import GenerationError, GenerationReport, ModuleGenerator
from modulegen.scaffolder.manifest import (
    GenerationManifest,
    ManifestGroup,
    build_manifest,
    write_manifest,
)

__all__ = [
    "complete",
    "clean_file_name",
    "merge_parameters",
    "ModuleGenerator",
    "GenerationError",
    "GenerationReport",
    "GenerationManifest",
    "ManifestGroup",
    "build_manifest",
    "write_manifest",
]

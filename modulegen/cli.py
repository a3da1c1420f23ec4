"""modulegen command line entry point.

Runs the three steps of a generation:

Step 1: PARSE    -- Read the outline and build the folder/file tree.
Step 2: GENERATE -- Create folders and render files from templates.
Step 3: MANIFEST -- Write the generated structure for downstream tooling.

Usage::

    modulegen App.xcodeproj App/Modules templates/ outline.txt
    python -m modulegen App.xcodeproj App/Modules templates/ outline.txt \\
        --parameters '{"MODULE": "Login"}'
"""

from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path
from typing import Any, Optional

from rich.markup import escape

from modulegen.config import Config
from modulegen.parser import parse_outline
from modulegen.scaffolder import (
    GenerationError,
    ModuleGenerator,
    build_manifest,
    write_manifest,
)
from modulegen.utils import (
    STEP_NAMES,
    build_structure_tree,
    console,
    format_duration,
    load_parameters_file,
    parse_parameters,
    print_error,
    print_step_header,
    print_success,
    print_summary_table,
    print_warning,
)


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


async def run(config: Config, *, quiet: bool = False) -> dict[str, Any]:
    """Parse the outline, generate output and write the manifest.

    Returns:
        A summary dictionary with counts, warnings and the manifest path.

    Raises:
        FileNotFoundError: If the outline document does not exist.
        GenerationError: If a folder, template or file cannot be read or
            written.
    """
    started = time.monotonic()

    print_step_header(1, STEP_NAMES[1])
    generation_input = await parse_outline(config.input_path)
    if not quiet:
        console.print(build_structure_tree(generation_input, title=str(config.input_path)))
    for message in generation_input.dropped_lines:
        print_warning(f"Skipped {escape(message)}")

    print_step_header(2, STEP_NAMES[2])
    report = await ModuleGenerator(config, quiet=quiet).generate(generation_input)
    for path, keys in report.unresolved.items():
        print_warning(f"Unresolved placeholders in {escape(path)}: {escape(', '.join(keys))}")

    print_step_header(3, STEP_NAMES[3])
    manifest = build_manifest(generation_input, config)
    manifest_path: Optional[Path] = None
    if not config.dry_run:
        manifest_path = await write_manifest(manifest, config.resolved_manifest_path)

    return {
        "success": True,
        "folders": len(report.folders),
        "files": len(report.files),
        "dropped_lines": list(generation_input.dropped_lines),
        "unresolved": dict(report.unresolved),
        "manifest_path": manifest_path,
        "duration": time.monotonic() - started,
    }


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_config(args: Any) -> Config:
    parameters: dict[str, str] = {}
    if args.parameters_file:
        parameters.update(load_parameters_file(args.parameters_file))
    if args.parameters:
        parameters.update(parse_parameters(args.parameters))

    return Config(
        project_path=Path(args.project_path),
        target_path=args.target_path,
        templates_dir=Path(args.templates_path),
        input_path=Path(args.input_path),
        parameters=parameters,
        manifest_path=Path(args.manifest) if args.manifest else None,
        allow_existing=args.allow_existing,
        dry_run=args.dry_run,
        max_parallel_writes=args.max_parallel,
    )


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``modulegen`` / ``python -m modulegen``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="modulegen",
        description="Generate folders and files from a tab-indented outline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  modulegen App.xcodeproj App/Modules templates/ outline.txt\n"
            "  modulegen App.xcodeproj App/Modules templates/ outline.txt "
            "--parameters '{\"MODULE\": \"Login\"}'\n"
            "  modulegen App.xcodeproj App/Modules templates/ outline.txt --dry-run\n"
        ),
    )

    parser.add_argument("project_path", help="Project path")
    parser.add_argument("target_path", help="Target path, relative to the project directory")
    parser.add_argument("templates_path", help="Templates directory")
    parser.add_argument("input_path", help="Outline document path")
    parser.add_argument(
        "--parameters",
        default=None,
        help="Global parameters as a JSON object of strings",
    )
    parser.add_argument(
        "--parameters-file",
        default=None,
        help="YAML or JSON file with global parameters (--parameters wins on conflicts)",
    )
    parser.add_argument(
        "--manifest",
        default=None,
        help="Manifest output path (default: <target>/modulegen-manifest.json)",
    )
    parser.add_argument(
        "--allow-existing",
        action="store_true",
        help="Reuse folders that already exist instead of failing",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be generated without writing anything",
    )
    parser.add_argument(
        "--max-parallel",
        type=int,
        default=8,
        help="Maximum concurrent file writes (default: 8)",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only print warnings, errors and the summary",
    )

    args = parser.parse_args(argv)

    input_path = Path(args.input_path)
    if not input_path.exists():
        print_error(f"Error: Outline file not found: {escape(str(input_path))}")
        sys.exit(1)
    templates_path = Path(args.templates_path)
    if not templates_path.is_dir():
        print_error(f"Error: Templates directory not found: {escape(str(templates_path))}")
        sys.exit(1)
    if args.max_parallel < 1:
        print_error(f"Error: --max-parallel must be at least 1, got {args.max_parallel}")
        sys.exit(1)

    try:
        config = _build_config(args)
    except (OSError, ValueError) as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)

    try:
        result = asyncio.run(run(config, quiet=args.quiet))
    except (GenerationError, FileNotFoundError) as exc:
        print_error(f"Error: {escape(str(exc))}")
        console.print("[bold red]Generation failed.[/bold red]")
        sys.exit(1)

    print_summary_table(
        {
            "Folders": str(result["folders"]),
            "Files": str(result["files"]),
            "Skipped lines": str(len(result["dropped_lines"])),
            "Unresolved": str(len(result["unresolved"])),
            "Manifest": str(result["manifest_path"] or "-"),
            "Duration": format_duration(result["duration"]),
        },
        title="modulegen",
    )
    if config.dry_run:
        print_success("Dry run complete, nothing was written.")
    else:
        print_success("Done")


if __name__ == "__main__":
    main()

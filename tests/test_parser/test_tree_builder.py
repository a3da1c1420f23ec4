"""Tests for outline tree building (tree_builder module).

Covers:
- Parent attachment by depth
- Source-order preservation
- Orphan lines (dropped and reported, never raised)
- Blank lines and CRLF input
- parse_outline file reading
"""

from __future__ import annotations

from pathlib import Path

import pytest

from modulegen.parser import parse, parse_outline
from modulegen.parser.classifier import classify_line
from modulegen.parser.models import File, Folder, GenerationInput
from modulegen.parser.tree_builder import TreeBuilder


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------


class TestParseStructure:
    def test_single_root_folder(self):
        result = parse("Sources:\n")
        assert result == GenerationInput(folders=[Folder(name="Sources")])

    def test_root_folder_has_no_files(self):
        result = parse("Sources:")
        assert result.folders[0].files == []
        assert result.folders[0].folders == []

    def test_file_attaches_to_enclosing_folder(self):
        result = parse('Sources:\n\t[Model]User.swift - {"x":"1"}\n')
        assert result.folders[0].files == [
            File(template_id="Model", name="User.swift", parameters={"x": "1"})
        ]

    def test_nested_tree(self, sample_outline_text):
        result = parse(sample_outline_text)

        assert [f.name for f in result.folders] == ["___MODULE___", "Shared"]
        module = result.folders[0]
        assert [f.name for f in module.folders] == ["Views", "Models"]
        assert [f.name for f in module.files] == ["___MODULE___Presenter.swift"]

        views, models = module.folders
        assert [f.name for f in views.files] == [
            "___MODULE___View.swift",
            "___MODULE___Cell(row).swift",
        ]
        assert views.files[0].parameters == {"TITLE": "Welcome"}
        assert models.files[0].template_id == "Model.swift"
        assert [f.name for f in result.folders[1].files] == ["README.md"]

    def test_attaches_to_most_recent_folder_at_parent_depth(self):
        text = "A:\n\tA1:\n\tA2:\n\t\tx.txt\nB:\n\ty.txt\n"
        result = parse(text)
        a, b = result.folders
        assert a.folders[0].files == []
        assert [f.name for f in a.folders[1].files] == ["x.txt"]
        assert [f.name for f in b.files] == ["y.txt"]

    def test_dedent_returns_to_shallower_folder(self):
        text = "A:\n\tB:\n\t\tC:\n\tafter.txt\n"
        result = parse(text)
        a = result.folders[0]
        assert [f.name for f in a.files] == ["after.txt"]
        assert a.folders[0].folders[0].name == "C"

    def test_sibling_order_preserved(self):
        names = [f"f{i}.txt" for i in range(10)]
        text = "Root:\n" + "".join(f"\t{n}\n" for n in names)
        result = parse(text)
        assert [f.name for f in result.folders[0].files] == names

    def test_subfolder_order_preserved(self):
        text = "Root:\n\tZ:\n\tA:\n\tM:\n"
        result = parse(text)
        assert [f.name for f in result.folders[0].folders] == ["Z", "A", "M"]


# ---------------------------------------------------------------------------
# Orphans and edge cases
# ---------------------------------------------------------------------------


class TestOrphanLines:
    def test_root_file_is_dropped(self):
        result = parse("README.md\n")
        assert result.folders == []
        assert result.file_count() == 0
        assert len(result.dropped_lines) == 1
        assert "line 1" in result.dropped_lines[0]

    def test_root_file_before_folder_is_dropped(self):
        result = parse("orphan.txt\nSources:\n\tkept.txt\n")
        assert [f.name for f in result.folders[0].files] == ["kept.txt"]
        assert result.file_count() == 1

    def test_too_deep_file_is_dropped(self):
        result = parse("Sources:\n\t\tdeep.txt\n")
        assert result.folders[0].files == []
        assert "deep.txt" in result.dropped_lines[0]

    def test_orphan_folder_takes_its_children_with_it(self):
        result = parse("A:\n\t\tLost:\n\t\t\tlost.txt\n\tkept.txt\n")
        a = result.folders[0]
        assert a.folders == []
        assert [f.name for f in a.files] == ["kept.txt"]
        assert len(result.dropped_lines) == 1
        assert "Lost" in result.dropped_lines[0]

    def test_orphans_do_not_raise(self):
        parse("\t\t\tx:\n\ty\nz\n")


class TestLineHandling:
    def test_blank_lines_skipped(self):
        result = parse("Sources:\n\n\t\n\tA.swift\n\n")
        assert [f.name for f in result.folders[0].files] == ["A.swift"]
        assert result.dropped_lines == []

    def test_crlf_line_endings(self):
        result = parse("Sources:\r\n\tA.swift\r\n")
        assert result.folders[0].name == "Sources"
        assert [f.name for f in result.folders[0].files] == ["A.swift"]

    def test_empty_document(self):
        assert parse("") == GenerationInput()


# ---------------------------------------------------------------------------
# TreeBuilder
# ---------------------------------------------------------------------------


class TestTreeBuilder:
    def test_incremental_build(self):
        builder = TreeBuilder()
        builder.add(classify_line("Root:"), 1)
        builder.add(classify_line("\t[T]a.txt"), 2)
        result = builder.build()
        assert result.folders[0].files[0].template_id == "T"

    def test_built_models_are_frozen(self):
        builder = TreeBuilder()
        builder.add(classify_line("Root:"), 1)
        folder = builder.build().folders[0]
        with pytest.raises(Exception):
            folder.name = "Other"


# ---------------------------------------------------------------------------
# parse_outline
# ---------------------------------------------------------------------------


class TestParseOutline:
    async def test_reads_file(self, outline_file: Path):
        result = await parse_outline(outline_file)
        assert result.folder_count() == 4
        assert result.file_count() == 5

    async def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            await parse_outline(tmp_path / "missing.txt")

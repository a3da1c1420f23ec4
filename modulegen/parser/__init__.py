"""Outline parser.

Turns an indented, tab-delimited outline of folders and files into a
``GenerationInput`` tree.

Usage::

    from modulegen.parser import parse, parse_outline

    tree = parse("Sources:\n\t[Model]User.swift - {\"x\": \"1\"}\n")
    tree = await parse_outline("path/to/outline.txt")
    print(tree.describe())
"""

from modulegen.parser.classifier import ClassifiedLine, LineKind, classify_line
from modulegen.parser.models import File, Folder, GenerationInput
from modulegen.parser.tree_builder import TreeBuilder, parse, parse_outline

__all__ = [
    "parse",
    "parse_outline",
    "classify_line",
    "ClassifiedLine",
    "LineKind",
    "TreeBuilder",
    "File",
    "Folder",
    "GenerationInput",
]

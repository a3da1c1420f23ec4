"""Line classification for outline documents.

Every outline line is either a folder (its trimmed text ends with ``:``) or a
file written as ``[<template id>]<name> - <json parameters>``.  The nesting
depth of a line is the number of tab characters it contains.  Classification
is pure: the same line always yields the same ``ClassifiedLine``.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_TAB_PATTERN = re.compile(r"\t")
_TEMPLATE_ID_PATTERN = re.compile(r"\[.*\]")
_PARAMETERS_ADAPTER = TypeAdapter(dict[str, str])

FOLDER_SUFFIX = ":"
SEGMENT_SEPARATOR = "-"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class LineKind(str, Enum):
    """What an outline line denotes."""
    FOLDER = "folder"
    FILE = "file"


class ClassifiedLine(BaseModel):
    """The result of classifying a single outline line."""
    depth: int = Field(..., ge=0, description="Number of tab characters in the line")
    kind: LineKind = Field(..., description="Folder or file")
    name: str = Field(default="", description="Display name")
    template_id: str = Field(default="", description="Template id, empty when absent")
    parameters: Optional[dict[str, str]] = Field(
        default=None, description="File-local parameters, None when absent or malformed"
    )


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------

def count_depth(line: str) -> int:
    """Count tab characters anywhere in *line*."""
    return len(_TAB_PATTERN.findall(line))


def is_folder_line(line: str) -> bool:
    return line.strip().endswith(FOLDER_SUFFIX)


def _segments(line: str) -> list[str]:
    """Split on hyphens, dropping empty pieces."""
    return [piece for piece in line.split(SEGMENT_SEPARATOR) if piece]


def extract_template_id(text: str) -> str:
    """Return the bracketed template id in *text*, or ``""``.

    The match is greedy up to the last ``]``; every bracket character inside
    the matched span is removed.
    """
    match = _TEMPLATE_ID_PATTERN.search(text)
    if match is None:
        return ""
    return match.group(0).replace("[", "").replace("]", "")


def extract_name(line: str) -> str:
    """Return the file name: the text before the first hyphen, minus its ``[id]``."""
    segments = _segments(line)
    left = segments[0].strip() if segments else ""
    return left.replace(f"[{extract_template_id(left)}]", "")


def extract_folder_name(line: str) -> str:
    stripped = line.strip()
    if stripped.endswith(FOLDER_SUFFIX):
        stripped = stripped[: -len(FOLDER_SUFFIX)]
    return stripped.strip()


def extract_parameters(line: str) -> Optional[dict[str, str]]:
    """Decode the JSON object after the last hyphen.

    Returns ``None`` when the payload is missing, is not valid JSON, or is not
    a flat string-to-string object.
    """
    segments = _segments(line)
    if not segments:
        return None
    payload = segments[-1].strip()
    try:
        return _PARAMETERS_ADAPTER.validate_json(payload)
    except ValidationError:
        return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def classify_line(line: str) -> ClassifiedLine:
    """Classify one outline line (without its trailing newline)."""
    depth = count_depth(line)

    if is_folder_line(line):
        name = extract_folder_name(line)
        return ClassifiedLine(
            depth=depth,
            kind=LineKind.FOLDER,
            name=name,
            template_id=extract_template_id(name),
        )

    stripped = line.strip()
    segments = _segments(stripped)
    left = segments[0].strip() if segments else ""
    return ClassifiedLine(
        depth=depth,
        kind=LineKind.FILE,
        name=extract_name(stripped),
        template_id=extract_template_id(left),
        parameters=extract_parameters(stripped),
    )

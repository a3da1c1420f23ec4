"""Placeholder completion for template bodies and file names.

Placeholders are written ``___KEY___``: three underscores, a key without
whitespace, three underscores.  Keys are looked up in the file-local scope
first and the global scope second; unknown keys are left in place verbatim.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Optional


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

PLACEHOLDER_DELIMITER = "___"

_PLACEHOLDER_PATTERN = re.compile(r"___(\S+?)___")
_NOTE_PATTERN = re.compile(r"\(.*?\)")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def merge_parameters(
    local: Optional[Mapping[str, str]],
    global_: Optional[Mapping[str, str]],
) -> dict[str, str]:
    """Overlay the file-local scope on the global scope (local wins)."""
    return {**(global_ or {}), **(local or {})}


def complete(
    text: str,
    local: Optional[Mapping[str, str]] = None,
    global_: Optional[Mapping[str, str]] = None,
) -> str:
    """Substitute every resolvable ``___KEY___`` placeholder in *text*.

    Matches are spliced in from the rightmost one leftwards so the offsets of
    the remaining matches stay valid.

    Args:
        text: Template body or file name.
        local: File-local parameters.
        global_: Run-wide parameters.

    Returns:
        The completed text.  Placeholders whose key is in neither scope are
        kept as-is.
    """
    scope = merge_parameters(local, global_)
    result = text

    for match in reversed(list(_PLACEHOLDER_PATTERN.finditer(text))):
        key = match.group(0)[len(PLACEHOLDER_DELIMITER):-len(PLACEHOLDER_DELIMITER)]
        if key not in scope:
            continue
        result = result[: match.start()] + scope[key] + result[match.end():]

    return result


def clean_file_name(name: str) -> str:
    """Remove ``(...)`` notes from a file name, e.g. ``Foo(bar).swift -> Foo.swift``."""
    return _NOTE_PATTERN.sub("", name)


def find_placeholders(text: str) -> list[str]:
    """Return the placeholder keys in *text* in document order."""
    return [match.group(1) for match in _PLACEHOLDER_PATTERN.finditer(text)]

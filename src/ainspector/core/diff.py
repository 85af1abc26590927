"""Unified diff parsing and line-range queries."""

import logging
import re
from collections.abc import Iterator

from unidiff import PatchSet
from unidiff.constants import LINE_TYPE_ADDED, LINE_TYPE_CONTEXT, LINE_TYPE_REMOVED
from unidiff.errors import UnidiffParseError
from unidiff.patch import Hunk

from ainspector.errors import PatchParseError
from ainspector.models import ModifiedLines

logger = logging.getLogger(__name__)

_PLACEHOLDER_HEADERS = "--- a/file\n+++ b/file\n"
_HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,\d+)? \+(\d+)(?:,\d+)? @@(.*)$")
_BODY_PREFIXES = (" ", "+", "-", "\\")


def _with_file_headers(patch: str) -> str:
    # Hosting APIs return bare hunks; unidiff needs a file envelope around them.
    if patch.startswith("---") or patch.startswith("diff "):
        return patch
    return _PLACEHOLDER_HEADERS + patch


def _ends_hunk(lines: list[str], index: int) -> bool:
    line = lines[index]
    if _HUNK_HEADER.match(line) or line.startswith("diff "):
        return True
    return line.startswith("--- ") and index + 1 < len(lines) and lines[index + 1].startswith("+++ ")


def _as_body_line(line: str) -> str:
    if line.startswith(_BODY_PREFIXES):
        return line
    return " " + line


def _normalize_hunks(patch: str) -> str:
    """Make every hunk body line carry a diff prefix and size each header to its body.

    A hunk body runs until the next hunk header or file header. Lines with an
    unknown prefix become context, and the declared lengths are recomputed, so
    a body longer or shorter than its header is still walked line by line.
    Hunks without a single body line are dropped.
    """
    lines = patch.split("\n")
    trailing_newline = lines[-1] == ""
    if trailing_newline:
        lines.pop()

    normalized: list[str] = []
    index = 0
    while index < len(lines):
        header = _HUNK_HEADER.match(lines[index])
        index += 1
        if header is None:
            normalized.append(lines[index - 1])
            continue

        body: list[str] = []
        while index < len(lines) and not _ends_hunk(lines, index):
            body.append(_as_body_line(lines[index]))
            index += 1
        source_length = sum(1 for line in body if line[0] in " -")
        target_length = sum(1 for line in body if line[0] in " +")
        if source_length == 0 and target_length == 0:
            continue
        normalized.append(f"@@ -{header[1]},{source_length} +{header[2]},{target_length} @@{header[3]}")
        normalized.extend(body)

    text = "\n".join(normalized)
    return text + "\n" if trailing_newline else text


def _iter_hunks(patch: str) -> Iterator[Hunk]:
    try:
        patch_set = PatchSet.from_string(_normalize_hunks(_with_file_headers(patch)))
    except UnidiffParseError as exc:
        raise PatchParseError(f"Malformed patch: {exc}") from exc
    for patched_file in patch_set:
        yield from patched_file


def parse_patch(patch: str) -> ModifiedLines:
    """Return the added (new-file) and deleted (old-file) line numbers of ``patch``.

    Raises :class:`PatchParseError` when the text cannot be split into hunks.
    """
    if not patch:
        return ModifiedLines()

    added: list[int] = []
    deleted: list[int] = []
    for hunk in _iter_hunks(patch):
        new_line = hunk.target_start
        old_line = hunk.source_start
        for line in hunk:
            if line.line_type == LINE_TYPE_ADDED:
                added.append(new_line)
                new_line += 1
            elif line.line_type == LINE_TYPE_REMOVED:
                deleted.append(old_line)
                old_line += 1
            elif line.line_type == LINE_TYPE_CONTEXT:
                new_line += 1
                old_line += 1

    return ModifiedLines(added=tuple(added), deleted=tuple(deleted))


def has_modified_line_in_range(lines: ModifiedLines, start_line: int, end_line: int) -> bool:
    return lines.has_modified_line_in_range(start_line, end_line)


def extract_diff_for_range(patch: str, start_line: int, end_line: int) -> str:
    """Return the ``+``/``-`` lines of ``patch`` that belong to new-file lines ``start_line..end_line``.

    A deletion is kept when the new-file position it sits at is inside the
    range or directly after it, so a replacement on the first line of a
    function stays with that function.
    """
    if not patch:
        return ""

    try:
        hunks = list(_iter_hunks(patch))
    except PatchParseError:
        logger.debug("Cannot scope unparseable patch to lines %d-%d", start_line, end_line)
        return ""

    emitted: list[str] = []
    for hunk in hunks:
        hunk_start = hunk.target_start
        hunk_end = hunk_start + hunk.target_length - 1
        if hunk_end < start_line or hunk_start > end_line:
            continue

        new_line = hunk_start
        for line in hunk:
            if line.line_type == LINE_TYPE_ADDED:
                if start_line <= new_line <= end_line:
                    emitted.append(_raw_line(line.line_type, line.value))
                new_line += 1
            elif line.line_type == LINE_TYPE_REMOVED:
                if start_line <= new_line <= end_line + 1:
                    emitted.append(_raw_line(line.line_type, line.value))
            elif line.line_type == LINE_TYPE_CONTEXT:
                new_line += 1

    return "\n".join(emitted).strip()


def _raw_line(line_type: str, value: str) -> str:
    return line_type + value.removesuffix("\n")

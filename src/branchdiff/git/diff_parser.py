"""Unified diff classifier — turns hunk text into LineChange records.

Records are anchored to new-file line numbers. A run of removed lines
directly followed by a run of added lines is paired by count: the overlap
is MODIFIED, surplus added lines are ADDED, and surplus removed lines leave
a zero-width DELETED marker just after the overlap.
"""

from __future__ import annotations

import re
from typing import Generator, List, Optional, Tuple

from branchdiff.git.models import ChangedFile, ChangeKind, FileStatus, LineChange

# --- Regex patterns for diff parsing ---

_HUNK_HEADER_RE = re.compile(
    r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@"
)
_STATUS_CODE_RE = re.compile(r"^([AMDRCU])\d*$")


def parse_hunk_header(line: str) -> Optional[Tuple[int, int, int, int]]:
    """Return ``(old_start, old_count, new_start, new_count)`` or None.

    Counts default to 1 when omitted (``@@ -1 +1 @@``).
    """
    m = _HUNK_HEADER_RE.match(line)
    if not m:
        return None
    old_start = int(m.group(1))
    old_count = int(m.group(2)) if m.group(2) is not None else 1
    new_start = int(m.group(3))
    new_count = int(m.group(4)) if m.group(4) is not None else 1
    return old_start, old_count, new_start, new_count


class DiffParser:
    """Classify the lines of a single-file unified diff.

    Usage::

        for change in DiffParser(diff_text).classify():
            print(change.kind, change.start_line, change.end_line)

    Malformed input never raises; it simply yields fewer records.
    """

    def __init__(self, diff_text: str) -> None:
        self._lines = diff_text.splitlines()

    def classify(self) -> Generator[LineChange, None, None]:
        """Yield LineChange records in diff order."""
        idx = 0
        total = len(self._lines)
        new_line = 0  # 0 until the first hunk header

        while idx < total:
            raw_line = self._lines[idx]

            # --- Hunk header → reset cursor to new-file start ---
            header = parse_hunk_header(raw_line)
            if header is not None:
                new_line = header[2]
                idx += 1
                continue

            # --- File headers before the first hunk ---
            if new_line == 0:
                idx += 1
                continue

            if raw_line.startswith("-"):
                removed, idx = self._consume_run(idx, "-")
                added, idx = self._consume_run(idx, "+")

                if added:
                    overlap = min(removed, added)
                    yield LineChange(
                        ChangeKind.MODIFIED, new_line, new_line + overlap - 1
                    )
                    if added > overlap:
                        yield LineChange(
                            ChangeKind.ADDED, new_line + overlap, new_line + added - 1
                        )
                    elif removed > overlap:
                        marker = new_line + overlap
                        yield LineChange(ChangeKind.DELETED, marker, marker)
                    new_line += added
                else:
                    # Pure deletion — nothing produced in the new file
                    yield LineChange(ChangeKind.DELETED, new_line, new_line)
                continue

            if raw_line.startswith("+"):
                added, idx = self._consume_run(idx, "+")
                yield LineChange(ChangeKind.ADDED, new_line, new_line + added - 1)
                new_line += added
                continue

            if raw_line.startswith(" "):
                new_line += 1

            # Anything else ("\ No newline at end of file", ...) is inert
            idx += 1

    def _consume_run(self, idx: int, prefix: str) -> Tuple[int, int]:
        """Consume the run of *prefix* lines at *idx*.

        Returns ``(count, next_idx)``. Any other line ends the run, including
        "\\ No newline" markers, so ``-a``, ``\\``, ``+b`` is a deletion
        followed by a separate addition rather than an edit.
        """
        count = 0
        total = len(self._lines)
        while idx < total and self._lines[idx].startswith(prefix):
            count += 1
            idx += 1
        return count, idx


def classify_diff(diff_text: str) -> List[LineChange]:
    """Classify *diff_text* and return the records as a list."""
    if not diff_text:
        return []
    return list(DiffParser(diff_text).classify())


def parse_name_status(output: str) -> List[ChangedFile]:
    """Parse ``git diff --name-status`` output into ChangedFile records.

    Rename and copy codes carry a similarity score (``R100``, ``C075``)
    and are followed by both the old and the new path.
    """
    files: List[ChangedFile] = []
    for line in output.splitlines():
        parts = line.rstrip("\r").split("\t")
        if len(parts) < 2:
            continue
        m = _STATUS_CODE_RE.match(parts[0].strip())
        if not m:
            continue
        status = FileStatus(m.group(1))
        if status in (FileStatus.RENAMED, FileStatus.COPIED):
            if len(parts) < 3:
                continue
            files.append(ChangedFile(status=status, path=parts[2], old_path=parts[1]))
        else:
            files.append(ChangedFile(status=status, path=parts[1]))
    return files

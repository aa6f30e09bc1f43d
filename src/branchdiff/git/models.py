"""Data models for diff classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ChangeKind(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


class FileStatus(str, Enum):
    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    UNMERGED = "U"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    FileStatus.ADDED: "Added",
    FileStatus.MODIFIED: "Modified",
    FileStatus.DELETED: "Deleted",
    FileStatus.RENAMED: "Renamed",
    FileStatus.COPIED: "Copied",
    FileStatus.UNMERGED: "Unmerged",
}


@dataclass(frozen=True, slots=True)
class LineChange:
    """A classified run of lines in the new version of a file.

    ``start_line`` and ``end_line`` are 1-based and inclusive. A DELETED
    record is a zero-width marker (``start_line == end_line``) pointing at
    the new-file line next to which content was removed.
    """

    kind: ChangeKind
    start_line: int
    end_line: int

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1


@dataclass(frozen=True)
class ChangedFile:
    """A file reported by ``git diff --name-status``."""

    status: FileStatus
    path: str
    old_path: Optional[str] = None  # set on renames and copies

    @property
    def description(self) -> str:
        if self.old_path:
            return f"{self.status.label}: {self.old_path} → {self.path}"
        return f"{self.status.label}: {self.path}"

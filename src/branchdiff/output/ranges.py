"""Map LineChange records onto 0-based display ranges.

The document may have been edited since the diff was computed, so ranges
are clipped to its current line count here rather than in the classifier.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from branchdiff.git.models import ChangeKind, LineChange

Range = Tuple[int, int]  # 0-based, inclusive


@dataclass
class DisplayRanges:
    added: List[Range] = field(default_factory=list)
    modified: List[Range] = field(default_factory=list)
    deleted: List[Range] = field(default_factory=list)

    def for_kind(self, kind: ChangeKind) -> List[Range]:
        if kind is ChangeKind.ADDED:
            return self.added
        if kind is ChangeKind.MODIFIED:
            return self.modified
        return self.deleted

    def __bool__(self) -> bool:
        return bool(self.added or self.modified or self.deleted)


def _clip(change: LineChange, line_count: int) -> Range | None:
    start = max(0, change.start_line - 1)
    end = max(0, change.end_line - 1)
    if start >= line_count:
        return None
    return start, min(end, line_count - 1)


def to_display_ranges(changes: Iterable[LineChange], line_count: int) -> DisplayRanges:
    """Group *changes* by kind as 0-based ranges within ``[0, line_count)``."""
    ranges = DisplayRanges()
    if line_count <= 0:
        return ranges
    for change in changes:
        clipped = _clip(change, line_count)
        if clipped is not None:
            ranges.for_kind(change.kind).append(clipped)
    return ranges


def gutter_markers(changes: Iterable[LineChange], line_count: int) -> Dict[int, ChangeKind]:
    """Return ``{0-based line: kind}``; later records win on overlap."""
    markers: Dict[int, ChangeKind] = {}
    if line_count <= 0:
        return markers
    for change in changes:
        clipped = _clip(change, line_count)
        if clipped is None:
            continue
        for line in range(clipped[0], clipped[1] + 1):
            markers[line] = change.kind
    return markers

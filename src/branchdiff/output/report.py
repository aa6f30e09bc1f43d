"""JSON / YAML reporters for scripting and CI."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional

import yaml

from branchdiff.git.models import ChangedFile, ChangeKind, LineChange
from branchdiff.output.ranges import DisplayRanges, to_display_ranges
from branchdiff.tree import FolderNode, TreeNode


def change_to_dict(change: LineChange) -> Dict[str, Any]:
    return {
        "kind": change.kind.value,
        "start_line": change.start_line,
        "end_line": change.end_line,
    }


def file_to_dict(changed: ChangedFile) -> Dict[str, Any]:
    return {
        "status": changed.status.value,
        "label": changed.status.label,
        "path": changed.path,
        **({"old_path": changed.old_path} if changed.old_path else {}),
    }


def tree_to_list(nodes: List[TreeNode]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for node in nodes:
        if isinstance(node, FolderNode):
            out.append({
                "folder": node.path,
                "name": node.name,
                "children": tree_to_list(node.children),
            })
        else:
            out.append(file_to_dict(node.file))
    return out


def display_ranges_to_dict(ranges: DisplayRanges) -> Dict[str, Any]:
    return {
        kind.value: [list(r) for r in ranges.for_kind(kind)]
        for kind in (ChangeKind.ADDED, ChangeKind.MODIFIED, ChangeKind.DELETED)
    }


def changes_report(
    file_path: str,
    base_branch: Optional[str],
    merge_base: Optional[str],
    changes: Iterable[LineChange],
    line_count: Optional[int] = None,
) -> Dict[str, Any]:
    """Classification of one file as a serialisable dict.

    With *line_count* the report also carries ``display_ranges``: 0-based
    ``[start, end]`` pairs per kind, clipped to the file's current length.
    """
    changes = list(changes)
    items = [change_to_dict(c) for c in changes]
    data: Dict[str, Any] = {
        "version": "1.0",
        "file": file_path,
        "base_branch": base_branch,
        "merge_base": merge_base,
        "total_changes": len(items),
        "changes": items,
    }
    if line_count is not None:
        data["display_ranges"] = display_ranges_to_dict(to_display_ranges(changes, line_count))
    return data


def files_report(
    base_branch: Optional[str],
    merge_base: Optional[str],
    files: List[ChangedFile],
    tree: List[TreeNode],
) -> Dict[str, Any]:
    """Changed files (flat and nested) as a serialisable dict."""
    return {
        "version": "1.0",
        "base_branch": base_branch,
        "merge_base": merge_base,
        "total_files": len(files),
        "files": [file_to_dict(f) for f in files],
        "tree": tree_to_list(tree),
    }


def render(data: Dict[str, Any], fmt: str = "json") -> str:
    """Return *data* formatted as JSON or YAML."""
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2)

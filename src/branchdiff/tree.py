"""Group changed files into a directory hierarchy for display."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Dict, List, Union

from branchdiff.git.models import ChangedFile


@dataclass
class FolderNode:
    path: str  # repo-relative, POSIX separators
    name: str
    children: List["TreeNode"] = field(default_factory=list)

    def file_count(self) -> int:
        return sum(
            c.file_count() if isinstance(c, FolderNode) else 1 for c in self.children
        )


@dataclass(frozen=True)
class FileNode:
    file: ChangedFile

    @property
    def name(self) -> str:
        return posixpath.basename(self.file.path)


TreeNode = Union[FolderNode, FileNode]


def _sort_key(node: TreeNode) -> tuple:
    # Folders first, then by name
    return (0 if isinstance(node, FolderNode) else 1, node.name.lower(), node.name)


def _sort(nodes: List[TreeNode]) -> None:
    nodes.sort(key=_sort_key)
    for node in nodes:
        if isinstance(node, FolderNode):
            _sort(node.children)


def build_tree(files: List[ChangedFile]) -> List[TreeNode]:
    """Return root-level nodes; every directory component becomes a FolderNode."""
    roots: List[TreeNode] = []
    folders: Dict[str, FolderNode] = {}

    def folder_for(dir_path: str) -> FolderNode:
        existing = folders.get(dir_path)
        if existing is not None:
            return existing
        parent_path, name = posixpath.split(dir_path)
        node = FolderNode(path=dir_path, name=name)
        folders[dir_path] = node
        if parent_path:
            folder_for(parent_path).children.append(node)
        else:
            roots.append(node)
        return node

    for changed in files:
        dir_path = posixpath.dirname(changed.path)
        if dir_path:
            folder_for(dir_path).children.append(FileNode(changed))
        else:
            roots.append(FileNode(changed))

    _sort(roots)
    return roots

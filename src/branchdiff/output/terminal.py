"""Rich terminal reporter — file tree, change table, gutter and side-by-side views."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from branchdiff.git.models import ChangedFile, ChangeKind, FileStatus, LineChange
from branchdiff.output.ranges import gutter_markers
from branchdiff.tree import FolderNode, TreeNode

_KIND_STYLE = {
    ChangeKind.ADDED: "green",
    ChangeKind.MODIFIED: "blue",
    ChangeKind.DELETED: "red",
}

_STATUS_STYLE = {
    FileStatus.ADDED: "green",
    FileStatus.MODIFIED: "blue",
    FileStatus.DELETED: "red",
    FileStatus.RENAMED: "cyan",
    FileStatus.COPIED: "green",
    FileStatus.UNMERGED: "magenta",
}


def _file_label(changed: ChangedFile, name: str) -> Text:
    style = _STATUS_STYLE.get(changed.status, "")
    label = Text(name, style=style)
    label.append(f"  {changed.status.label}", style="dim")
    if changed.old_path:
        label.append(f"  ← {changed.old_path}", style="dim")
    return label


def _add_nodes(parent: Tree, nodes: List[TreeNode]) -> None:
    for node in nodes:
        if isinstance(node, FolderNode):
            branch = parent.add(Text(f"{node.name}/", style="bold"))
            _add_nodes(branch, node.children)
        else:
            parent.add(_file_label(node.file, node.name))


def render_tree(
    nodes: List[TreeNode],
    *,
    base_branch: Optional[str],
    file_count: int,
    status_message: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    """Print the changed-file hierarchy."""
    console = console or Console()
    title = f"Changed Files ({file_count})" if file_count else "Changed Files"
    if base_branch:
        title += f" vs {base_branch}"
    root = Tree(Text(title, style="bold"))
    if nodes:
        _add_nodes(root, nodes)
    elif status_message:
        root.add(Text(status_message, style="dim"))
    console.print(root)


def render_changes(
    file_path: str,
    changes: Sequence[LineChange],
    *,
    console: Optional[Console] = None,
) -> None:
    """Print one file's classification as a table."""
    console = console or Console()
    if not changes:
        console.print(f"[dim]No changes in {file_path}.[/dim]")
        return

    table = Table(title=file_path, title_style="bold", border_style="dim")
    table.add_column("Kind", min_width=10)
    table.add_column("Start", justify="right", style="green")
    table.add_column("End", justify="right", style="green")
    table.add_column("Lines", justify="right")

    for change in changes:
        lines = "-" if change.kind is ChangeKind.DELETED else str(change.line_count)
        table.add_row(
            Text(change.kind.value, style=_KIND_STYLE[change.kind]),
            str(change.start_line),
            str(change.end_line),
            lines,
        )
    console.print(table)


def _numbered(
    lines: Sequence[str],
    markers: Dict[int, ChangeKind],
    gutter_char: str,
) -> Text:
    width = len(str(len(lines)))
    text = Text()
    for idx, content in enumerate(lines):
        if idx:
            text.append("\n")
        text.append(f"{idx + 1:>{width}} ", style="dim")
        kind = markers.get(idx)
        if kind is None:
            text.append(" ")
        else:
            text.append(gutter_char, style=_KIND_STYLE[kind])
        text.append(" ")
        text.append(content)
    return text


def render_file(
    lines: Sequence[str],
    changes: Sequence[LineChange],
    *,
    gutter_char: str = "▎",
    title: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    """Print *lines* with a coloured gutter marker beside each changed line."""
    console = console or Console()
    if title:
        console.print(Text(title, style="bold"), highlight=False)
    if not lines:
        console.print("[dim](empty file)[/dim]")
        return
    markers = gutter_markers(changes, len(lines))
    console.print(_numbered(lines, markers, gutter_char), soft_wrap=True, highlight=False)


def render_side_by_side(
    base_lines: Sequence[str],
    current_lines: Sequence[str],
    changes: Sequence[LineChange],
    *,
    title: str,
    base_title: str,
    current_title: str = "Current",
    gutter_char: str = "▎",
    console: Optional[Console] = None,
) -> None:
    """Print the base version beside the current one.

    Only the current side carries gutter markers; classifications are
    anchored to new-file lines.
    """
    console = console or Console()
    table = Table(title=title, expand=True, show_lines=False)
    table.add_column(base_title, ratio=1, no_wrap=True, overflow="ellipsis")
    table.add_column(current_title, ratio=1, no_wrap=True, overflow="ellipsis")
    table.add_row(
        _numbered(base_lines, {}, gutter_char),
        _numbered(current_lines, gutter_markers(changes, len(current_lines)), gutter_char),
    )
    console.print(table)

"""Tests for the JSON / YAML reporters and the terminal renderer."""

import json

import yaml
from rich.console import Console

from branchdiff.git.models import ChangedFile, ChangeKind, FileStatus, LineChange
from branchdiff.output import report, terminal
from branchdiff.tree import build_tree

CHANGES = [
    LineChange(ChangeKind.MODIFIED, 3, 3),
    LineChange(ChangeKind.ADDED, 8, 9),
    LineChange(ChangeKind.DELETED, 11, 11),
]

FILES = [
    ChangedFile(FileStatus.MODIFIED, "app.py"),
    ChangedFile(FileStatus.RENAMED, "src/new.py", "src/old.py"),
]


class TestChangesReport:
    def test_valid_json(self):
        data = report.changes_report("app.py", "main", "abc123", CHANGES)
        parsed = json.loads(report.render(data, "json"))
        assert parsed["file"] == "app.py"
        assert parsed["total_changes"] == 3
        assert parsed["changes"][1] == {"kind": "added", "start_line": 8, "end_line": 9}

    def test_valid_yaml(self):
        data = report.changes_report("app.py", "main", "abc123", CHANGES)
        parsed = yaml.safe_load(report.render(data, "yaml"))
        assert parsed["merge_base"] == "abc123"
        assert parsed["changes"][2]["kind"] == "deleted"

    def test_empty(self):
        data = report.changes_report("app.py", None, None, [])
        assert data["total_changes"] == 0
        assert data["changes"] == []
        assert "display_ranges" not in data

    def test_display_ranges(self):
        data = report.changes_report("app.py", "main", "abc123", CHANGES, line_count=11)
        assert data["display_ranges"] == {
            "added": [[7, 8]],
            "modified": [[2, 2]],
            "deleted": [[10, 10]],
        }

    def test_display_ranges_clipped_to_current_length(self):
        data = report.changes_report("app.py", "main", "abc123", CHANGES, line_count=9)
        parsed = yaml.safe_load(report.render(data, "yaml"))
        assert parsed["display_ranges"] == {"added": [[7, 8]], "modified": [[2, 2]], "deleted": []}


class TestFilesReport:
    def test_flat_and_tree(self):
        data = report.files_report("main", "abc123", FILES, build_tree(FILES))
        assert data["total_files"] == 2
        assert data["files"][1] == {
            "status": "R",
            "label": "Renamed",
            "path": "src/new.py",
            "old_path": "src/old.py",
        }
        assert data["tree"][0]["folder"] == "src"
        assert data["tree"][0]["children"][0]["path"] == "src/new.py"
        assert data["tree"][1]["path"] == "app.py"


class TestTerminal:
    def _console(self):
        return Console(record=True, width=100, color_system=None)

    def test_render_file_marks_changed_lines(self):
        console = self._console()
        lines = [f"line {n}" for n in range(1, 12)]
        terminal.render_file(lines, CHANGES, gutter_char="|", console=console)
        text = console.export_text().splitlines()
        assert text[2].startswith(" 3 | line 3")
        assert text[0].startswith(" 1   line 1")
        assert text[10].startswith("11 | line 11")

    def test_render_changes_empty(self):
        console = self._console()
        terminal.render_changes("app.py", [], console=console)
        assert "No changes in app.py" in console.export_text()

    def test_render_tree(self):
        console = self._console()
        terminal.render_tree(
            build_tree(FILES), base_branch="main", file_count=2, console=console
        )
        text = console.export_text()
        assert "Changed Files (2) vs main" in text
        assert "src/" in text
        assert "app.py" in text

    def test_render_file_title_and_empty(self):
        console = self._console()
        terminal.render_file([], [], title="gone.py (deleted since main)", console=console)
        text = console.export_text()
        assert "gone.py (deleted since main)" in text
        assert "(empty file)" in text

    def test_render_side_by_side(self):
        console = self._console()
        terminal.render_side_by_side(
            ["line 1", "line 2"],
            ["line 1", "line two", "line 3"],
            [LineChange(ChangeKind.MODIFIED, 2, 2), LineChange(ChangeKind.ADDED, 3, 3)],
            title="f.py (main ↔ Current)",
            base_title="main",
            gutter_char="|",
            console=console,
        )
        text = console.export_text()
        assert "f.py (main ↔ Current)" in text
        assert "line 2" in text
        assert "2 | line two" in text
        assert "3 | line 3" in text
        assert "1   line 1" in text

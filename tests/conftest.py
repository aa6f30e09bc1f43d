"""Shared test fixtures — sample diffs and temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, capture_output=True, check=True)


BASE_APP = "".join(f"line {n}\n" for n in range(1, 11))

FEATURE_APP = textwrap.dedent("""\
    line 1
    line 2
    line three
    line 4
    line 5
    line 6
    line 7
    new a
    new b
    line 8
    line 10
""")


@pytest.fixture
def sample_diff_mixed() -> str:
    """One hunk with an edit, an insertion, and a deletion."""
    return textwrap.dedent("""\
        diff --git a/app.py b/app.py
        index 1234567..abcdef0 100644
        --- a/app.py
        +++ b/app.py
        @@ -1,10 +1,11 @@
         line 1
         line 2
        -line 3
        +line three
         line 4
         line 5
         line 6
         line 7
        +new a
        +new b
         line 8
        -line 9
         line 10
    """)


@pytest.fixture
def sample_diff_two_hunks() -> str:
    """Two hunks; the second starts far below the first."""
    return textwrap.dedent("""\
        diff --git a/f.py b/f.py
        index abc..def 100644
        --- a/f.py
        +++ b/f.py
        @@ -5,0 +5,1 @@
        +inserted at 5
        @@ -20,2 +21,2 @@
        -old 20
        -old 21
        +new 21
        +new 22
    """)


@pytest.fixture
def sample_diff_no_newline() -> str:
    """A diff ending with a 'No newline at end of file' marker."""
    return textwrap.dedent("""\
        diff --git a/data.txt b/data.txt
        index 0000000..abc1234 100644
        --- a/data.txt
        +++ b/data.txt
        @@ -3,1 +3,1 @@
        -final line
        \\ No newline at end of file
        +final line, edited
        \\ No newline at end of file
    """)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one commit on ``main``."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    _git(tmp_path, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(tmp_path, "config", "user.email", "test@test.com")
    _git(tmp_path, "config", "user.name", "Test")
    _git(tmp_path, "config", "commit.gpgsign", "false")
    (tmp_path / "README.md").write_text("# Test\n")
    (tmp_path / "app.py").write_text(BASE_APP)
    _git(tmp_path, "add", ".")
    _git(tmp_path, "commit", "-m", "init")
    return tmp_path


@pytest.fixture
def tmp_feature_repo(tmp_git_repo: Path) -> Path:
    """``main`` plus a checked-out ``feature`` branch with one commit of changes.

    app.py: line 3 edited, two lines inserted after line 7, line 9 removed.
    src/pkg/util.py: new file.
    """
    repo = tmp_git_repo
    _git(repo, "checkout", "-b", "feature")
    (repo / "app.py").write_text(FEATURE_APP)
    pkg = repo / "src" / "pkg"
    pkg.mkdir(parents=True)
    (pkg / "util.py").write_text("def helper():\n    return 1\n")
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "feature work")
    return repo


@pytest.fixture
def commit_file():
    """Write, stage, and commit a file in *repo*."""

    def _commit(repo: Path, rel: str, content: str, message: str = "update") -> None:
        path = repo / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        _git(repo, "add", rel)
        _git(repo, "commit", "-m", message)

    return _commit


@pytest.fixture
def git():
    """Run a git command in *repo*, failing the test on a nonzero exit."""
    return _git

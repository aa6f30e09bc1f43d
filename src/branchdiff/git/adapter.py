"""Git subprocess wrapper — merge-base, changed files, per-file diffs."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from branchdiff.git.diff_parser import parse_name_status
from branchdiff.git.models import ChangedFile

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _run_git(args: list[str], cwd: Path, timeout: int = DEFAULT_TIMEOUT) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    logger.debug("git %s (cwd=%s)", " ".join(args), cwd)
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip()
        raise GitError(f"git {args[0]} failed: {stderr or f'exit code {result.returncode}'}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None, timeout: int = DEFAULT_TIMEOUT) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd, timeout=timeout)
    return Path(out.strip())


def branch_exists(repo_root: Path, branch: str, timeout: int = DEFAULT_TIMEOUT) -> bool:
    try:
        _run_git(["rev-parse", "--verify", "--quiet", branch], cwd=repo_root, timeout=timeout)
    except GitError:
        return False
    return True


def detect_base_branch(
    repo_root: Path,
    configured: Optional[str] = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> Optional[str]:
    """Pick the base branch: *configured* if it exists, else main, else master."""
    if configured:
        if branch_exists(repo_root, configured, timeout):
            return configured
        logger.warning("Configured base branch %r not found; auto-detecting", configured)
    for candidate in ("main", "master"):
        if branch_exists(repo_root, candidate, timeout):
            return candidate
    return None


def get_merge_base(
    repo_root: Path, base_branch: str, timeout: int = DEFAULT_TIMEOUT
) -> Optional[str]:
    """Return the merge-base commit of HEAD and *base_branch*, or None."""
    try:
        out = _run_git(["merge-base", "HEAD", base_branch], cwd=repo_root, timeout=timeout)
    except GitError as exc:
        logger.warning("Failed to get merge-base with %s: %s", base_branch, exc)
        return None
    return out.strip() or None


def get_changed_files(
    repo_root: Path, merge_base: str, timeout: int = DEFAULT_TIMEOUT
) -> List[ChangedFile]:
    """Return files changed between *merge_base* and HEAD."""
    output = _run_git(
        ["diff", "--name-status", "-M", "--no-color", f"{merge_base}..HEAD"],
        cwd=repo_root,
        timeout=timeout,
    )
    return parse_name_status(output)


def get_file_diff(
    repo_root: Path, merge_base: str, file_path: str, timeout: int = DEFAULT_TIMEOUT
) -> str:
    """Return the unified diff of one file between *merge_base* and HEAD."""
    return _run_git(
        ["diff", "--no-color", "--no-ext-diff", f"{merge_base}..HEAD", "--", file_path],
        cwd=repo_root,
        timeout=timeout,
    )


def get_file_at_commit(
    repo_root: Path, commit: str, file_path: str, timeout: int = DEFAULT_TIMEOUT
) -> str:
    """Return *file_path* as of *commit*, or "" if it did not exist there."""
    try:
        return _run_git(["show", f"{commit}:{file_path}"], cwd=repo_root, timeout=timeout)
    except GitError:
        return ""


def get_current_branch(repo_root: Path, timeout: int = DEFAULT_TIMEOUT) -> Optional[str]:
    """Return the checked-out branch name, or None on a detached HEAD."""
    try:
        out = _run_git(["symbolic-ref", "--quiet", "--short", "HEAD"], cwd=repo_root, timeout=timeout)
    except GitError:
        return None
    return out.strip() or None


def list_branches(repo_root: Path, timeout: int = DEFAULT_TIMEOUT) -> List[str]:
    """Return local and remote branch names, ``origin/`` stripped, deduplicated."""
    output = _run_git(
        ["branch", "-a", "--format=%(refname:short)"],
        cwd=repo_root,
        timeout=timeout,
    )
    branches: List[str] = []
    for line in output.splitlines():
        name = line.strip()
        if not name:
            continue
        if name.startswith("origin/"):
            name = name[len("origin/"):]
        if name == "HEAD" or name in branches:
            continue
        branches.append(name)
    return branches

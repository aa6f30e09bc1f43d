"""Diff session — one repository compared against one base branch.

Owns the ClassificationCache; the merge-base it resolves is the cache's
base revision, so a new merge-base invalidates every cached classification.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from branchdiff.cache import ClassificationCache, LineChanges
from branchdiff.config.schema import BranchDiffConfig
from branchdiff.git import adapter
from branchdiff.git.models import ChangedFile
from branchdiff.tree import TreeNode, build_tree

logger = logging.getLogger(__name__)


class DiffSession:
    def __init__(
        self,
        repo_root: Path,
        config: Optional[BranchDiffConfig] = None,
        cache: Optional[ClassificationCache] = None,
    ) -> None:
        self.repo_root = repo_root
        self.config = config or BranchDiffConfig()
        self.cache = cache if cache is not None else ClassificationCache(self._fetch_diff)
        self.base_branch: Optional[str] = self.config.base.branch or None
        self.merge_base: Optional[str] = None
        self.changed_files: List[ChangedFile] = []
        self.status_message: Optional[str] = None

    @property
    def _timeout(self) -> int:
        return self.config.git.timeout

    def _fetch_diff(self, base: str, file_path: str) -> str:
        return adapter.get_file_diff(self.repo_root, base, file_path, timeout=self._timeout)

    def _reset(self, message: str) -> bool:
        logger.info(message)
        self.status_message = message
        self.merge_base = None
        self.changed_files = []
        return self.cache.set_base(None)

    def refresh(self) -> bool:
        """Re-resolve the merge-base and changed files.

        Returns True when the merge-base changed and every open view needs a
        full re-render; False when cached classifications are still valid.
        Raises GitError if listing changed files fails.
        """
        self.status_message = None

        detected = adapter.detect_base_branch(self.repo_root, self.base_branch, self._timeout)
        if detected is None:
            return self._reset("No main or master branch found")
        self.base_branch = detected

        merge_base = adapter.get_merge_base(self.repo_root, detected, self._timeout)
        if merge_base is None:
            return self._reset(f"Cannot find merge-base with {detected}")

        self.merge_base = merge_base
        self.changed_files = adapter.get_changed_files(self.repo_root, merge_base, self._timeout)
        if not self.changed_files:
            self.status_message = f"No changes from {detected}"

        changed = self.cache.set_base(merge_base)
        logger.debug(
            "Refreshed against %s (%s): %d file(s), base changed=%s",
            detected, merge_base[:12], len(self.changed_files), changed,
        )
        return changed

    def set_base_branch(self, branch: str) -> bool:
        """Compare against *branch* from now on. Same return value as refresh()."""
        self.base_branch = branch
        return self.refresh()

    def tree(self) -> List[TreeNode]:
        return build_tree(self.changed_files)

    def line_changes(self, file_path: str) -> LineChanges:
        """Classification of *file_path* (repo-relative) against the merge-base."""
        return self.cache.get(file_path)

    def changed_file(self, file_path: str) -> Optional[ChangedFile]:
        """Return the ChangedFile record for *file_path*, or None if it is unchanged."""
        for changed in self.changed_files:
            if changed.path == file_path:
                return changed
        return None

    def base_content(self, changed: ChangedFile) -> str:
        """Contents of *changed* at the merge-base, read from its old path on a rename.

        Returns "" when there is no merge-base or the file did not exist there.
        """
        if not self.merge_base:
            return ""
        return adapter.get_file_at_commit(
            self.repo_root, self.merge_base, changed.old_path or changed.path, self._timeout
        )

    def relative_path(self, path: Path) -> Optional[str]:
        """Return *path* relative to the repo root in POSIX form, or None if outside."""
        root = self.repo_root.resolve()
        resolved = path.resolve()
        try:
            return resolved.relative_to(root).as_posix()
        except ValueError:
            return None

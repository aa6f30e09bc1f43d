"""Git interface layer — adapter, diff classification, models."""

from branchdiff.git.adapter import (
    GitError,
    branch_exists,
    detect_base_branch,
    get_changed_files,
    get_current_branch,
    get_file_at_commit,
    get_file_diff,
    get_merge_base,
    get_repo_root,
    list_branches,
)
from branchdiff.git.diff_parser import (
    DiffParser,
    classify_diff,
    parse_hunk_header,
    parse_name_status,
)
from branchdiff.git.models import ChangedFile, ChangeKind, FileStatus, LineChange

__all__ = [
    "ChangeKind",
    "ChangedFile",
    "DiffParser",
    "FileStatus",
    "GitError",
    "LineChange",
    "branch_exists",
    "classify_diff",
    "detect_base_branch",
    "get_changed_files",
    "get_current_branch",
    "get_file_at_commit",
    "get_file_diff",
    "get_merge_base",
    "get_repo_root",
    "list_branches",
    "parse_hunk_header",
    "parse_name_status",
]

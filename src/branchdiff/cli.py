"""branchdiff CLI — Typer application with files, changes, show, diff, branches, and init commands."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from branchdiff import __version__

app = typer.Typer(
    name="branchdiff",
    help="Show what changed on your branch, line by line.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)
out = Console()


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("branchdiff")
    logger.handlers.clear()
    handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from branchdiff.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _validate_format(fmt: Optional[str]) -> None:
    from branchdiff.config.schema import OUTPUT_FORMATS

    if fmt is not None and fmt not in OUTPUT_FORMATS:
        console.print(f"[bold red]Invalid format:[/bold red] {fmt}")
        raise typer.Exit(code=2)


def _open_session(config: Optional[str], base: Optional[str]):
    """Load config, build a DiffSession and refresh it. Exits 2 on error."""
    from branchdiff.config.loader import ConfigError, load_config
    from branchdiff.git.adapter import GitError
    from branchdiff.session import DiffSession

    repo_root = _resolve_repo_root()

    try:
        cfg = load_config(repo_root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if base:
        cfg.base.branch = base

    session = DiffSession(repo_root, cfg)
    try:
        session.refresh()
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    return session


def _repo_relative(session, path: str) -> str:
    """Map a command-line path onto a repo-relative one, exit 1 if outside."""
    rel = session.relative_path(Path(path))
    if rel is None:
        console.print(f"[bold red]Not inside the repository:[/bold red] {path}")
        raise typer.Exit(code=1)
    return rel


def _read_lines(path: Path) -> list:
    if not path.is_file():
        return []
    return path.read_text(encoding="utf-8", errors="replace").splitlines()


_CONFIG_OPT = typer.Option(None, "--config", "-c", help="Path to .branchdiff.toml")
_BASE_OPT = typer.Option(None, "--base", "-b", help="Base branch to compare against")
_FORMAT_OPT = typer.Option(None, "--format", "-f", help="Output format: terminal | json | yaml")


# ── files ─────────────────────────────────────────────────────────────────────


@app.command()
def files(
    config: Optional[str] = _CONFIG_OPT,
    base: Optional[str] = _BASE_OPT,
    format: Optional[str] = _FORMAT_OPT,
) -> None:
    """List files changed since the merge-base, grouped by folder."""
    from branchdiff.output import report, terminal

    _validate_format(format)
    session = _open_session(config, base)
    fmt = format or session.config.output.format

    if fmt == "terminal":
        terminal.render_tree(
            session.tree(),
            base_branch=session.base_branch,
            file_count=len(session.changed_files),
            status_message=session.status_message,
            console=out,
        )
    else:
        data = report.files_report(
            session.base_branch, session.merge_base, session.changed_files, session.tree()
        )
        print(report.render(data, fmt))


# ── changes ───────────────────────────────────────────────────────────────────


@app.command()
def changes(
    path: str = typer.Argument(..., help="File to classify"),
    config: Optional[str] = _CONFIG_OPT,
    base: Optional[str] = _BASE_OPT,
    format: Optional[str] = _FORMAT_OPT,
) -> None:
    """Classify a file's lines as added, modified, or deleted."""
    from branchdiff.output import report, terminal

    _validate_format(format)
    session = _open_session(config, base)
    rel = _repo_relative(session, path)
    fmt = format or session.config.output.format

    line_changes = session.line_changes(rel)
    if fmt == "terminal":
        if session.status_message and not session.merge_base:
            console.print(f"[yellow]{session.status_message}[/yellow]")
        terminal.render_changes(rel, line_changes, console=out)
    else:
        current_path = session.repo_root / rel
        line_count = len(_read_lines(current_path)) if current_path.is_file() else None
        data = report.changes_report(
            rel, session.base_branch, session.merge_base, line_changes, line_count=line_count
        )
        print(report.render(data, fmt))


# ── show ──────────────────────────────────────────────────────────────────────


@app.command()
def show(
    path: str = typer.Argument(..., help="File to display"),
    config: Optional[str] = _CONFIG_OPT,
    base: Optional[str] = _BASE_OPT,
) -> None:
    """Print a file with change markers in the gutter."""
    from branchdiff.output import terminal

    file_path = Path(path)
    if not file_path.is_file():
        console.print(f"[bold red]File not found:[/bold red] {path}")
        raise typer.Exit(code=1)

    session = _open_session(config, base)
    rel = _repo_relative(session, path)
    text = file_path.read_text(encoding="utf-8", errors="replace")
    terminal.render_file(
        text.splitlines(),
        session.line_changes(rel),
        gutter_char=session.config.output.gutter_char,
        console=out,
    )


# ── diff ──────────────────────────────────────────────────────────────────────


@app.command()
def diff(
    path: str = typer.Argument(..., help="File to compare"),
    config: Optional[str] = _CONFIG_OPT,
    base: Optional[str] = _BASE_OPT,
) -> None:
    """Show a file at the merge-base beside its current version."""
    from branchdiff.git.models import ChangedFile, FileStatus
    from branchdiff.output import terminal

    session = _open_session(config, base)
    rel = _repo_relative(session, path)

    if not session.merge_base:
        console.print(f"[yellow]{session.status_message}[/yellow]")
        return

    current_path = session.repo_root / rel
    changed = session.changed_file(rel)
    if changed is None:
        if not current_path.is_file():
            console.print(f"[bold red]File not found:[/bold red] {path}")
            raise typer.Exit(code=1)
        changed = ChangedFile(status=FileStatus.MODIFIED, path=rel)

    name = PurePosixPath(changed.path).name
    gutter_char = session.config.output.gutter_char

    if changed.status is FileStatus.ADDED:
        terminal.render_file(
            _read_lines(current_path),
            session.line_changes(rel),
            gutter_char=gutter_char,
            title=f"{name} (added since {session.base_branch})",
            console=out,
        )
        return

    base_lines = session.base_content(changed).splitlines()

    if changed.status is FileStatus.DELETED:
        terminal.render_file(
            base_lines,
            (),
            gutter_char=gutter_char,
            title=f"{name} (deleted since {session.base_branch})",
            console=out,
        )
        return

    title = f"{name} ({session.base_branch} ↔ Current)"
    if changed.status is FileStatus.RENAMED and changed.old_path:
        old_name = PurePosixPath(changed.old_path).name
        title = f"{old_name} → {name} ({session.base_branch} ↔ Current)"

    terminal.render_side_by_side(
        base_lines,
        _read_lines(current_path),
        session.line_changes(rel),
        title=title,
        base_title=f"{session.base_branch} @ {session.merge_base[:7]}",
        gutter_char=gutter_char,
        console=out,
    )


# ── branches ──────────────────────────────────────────────────────────────────


@app.command()
def branches() -> None:
    """List branches that can serve as the comparison base."""
    from branchdiff.git.adapter import GitError, get_current_branch, list_branches

    repo_root = _resolve_repo_root()
    try:
        names = list_branches(repo_root)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    current = get_current_branch(repo_root)
    candidates = sorted(
        (b for b in names if b != current),
        key=lambda b: (b not in ("main", "master"), b),
    )
    if not candidates:
        console.print("[dim]No other branches found.[/dim]")
        return
    for name in candidates:
        out.print(name, highlight=False)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .branchdiff.toml in the repo root."""
    from branchdiff.config.defaults import DEFAULT_TOML
    from branchdiff.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"branchdiff {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """branchdiff — Show what changed on your branch, line by line."""
    _configure_logging(verbose)

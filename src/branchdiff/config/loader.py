"""Load and merge configuration from .branchdiff.toml and env vars."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from branchdiff.config.schema import (
    OUTPUT_FORMATS,
    BaseConfig,
    BranchDiffConfig,
    GitConfig,
    OutputConfig,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".branchdiff.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: BranchDiffConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid output format {cfg.output.format!r}; "
            f"expected one of {', '.join(OUTPUT_FORMATS)}"
        )
    if not isinstance(cfg.git.timeout, int) or cfg.git.timeout <= 0:
        raise ConfigError(f"git.timeout must be a positive integer, got {cfg.git.timeout!r}")
    if not isinstance(cfg.base.branch, str):
        raise ConfigError("base.branch must be a string")


def _merge_env_overrides(cfg: BranchDiffConfig) -> None:
    """Apply BRANCHDIFF_* environment variable overrides."""
    if val := os.environ.get("BRANCHDIFF_BASE_BRANCH"):
        cfg.base.branch = val.strip()
    if val := os.environ.get("BRANCHDIFF_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
        else:
            logger.warning("Ignoring BRANCHDIFF_FORMAT=%r", val)
    if val := os.environ.get("BRANCHDIFF_GIT_TIMEOUT"):
        try:
            timeout = int(val)
        except ValueError:
            logger.warning("Ignoring BRANCHDIFF_GIT_TIMEOUT=%r", val)
        else:
            if timeout > 0:
                cfg.git.timeout = timeout


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> BranchDiffConfig:
    """Load, validate, and return a BranchDiffConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = BranchDiffConfig()
    else:
        logger.debug("Loading config from %s", config_path)
        raw = _parse_toml(config_path)
        cfg = BranchDiffConfig(
            version=str(raw.get("version", "1.0")),
            base=_build_section(raw, BaseConfig, "base"),
            git=_build_section(raw, GitConfig, "git"),
            output=_build_section(raw, OutputConfig, "output"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg

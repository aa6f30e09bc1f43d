"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

OutputFormat = Literal["terminal", "json", "yaml"]

OUTPUT_FORMATS: tuple[str, ...] = ("terminal", "json", "yaml")


@dataclass
class BaseConfig:
    branch: str = ""  # empty = auto-detect main / master


@dataclass
class GitConfig:
    timeout: int = 30  # seconds per git invocation


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    gutter_char: str = "▎"


@dataclass
class BranchDiffConfig:
    version: str = "1.0"
    base: BaseConfig = field(default_factory=BaseConfig)
    git: GitConfig = field(default_factory=GitConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

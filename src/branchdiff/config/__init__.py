"""Configuration loading, schema, and defaults."""

from branchdiff.config.loader import ConfigError, load_config
from branchdiff.config.schema import OUTPUT_FORMATS, BranchDiffConfig, OutputFormat

__all__ = [
    "OUTPUT_FORMATS",
    "BranchDiffConfig",
    "ConfigError",
    "OutputFormat",
    "load_config",
]

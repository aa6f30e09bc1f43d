"""Starter .branchdiff.toml template."""

DEFAULT_TOML = """\
# branchdiff configuration
version = "1.0"

[base]
# branch = "develop"      # empty = auto-detect main, then master

[git]
timeout = 30              # seconds per git command

[output]
format = "terminal"       # terminal | json | yaml
gutter_char = "▎"
"""

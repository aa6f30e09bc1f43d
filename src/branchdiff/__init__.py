"""branchdiff — classify changed lines of a branch against its merge-base."""

__version__ = "0.1.0"

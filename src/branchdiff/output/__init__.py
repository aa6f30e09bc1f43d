"""Reporters and display-range mapping."""

from branchdiff.output.ranges import DisplayRanges, gutter_markers, to_display_ranges

__all__ = ["DisplayRanges", "gutter_markers", "to_display_ranges"]

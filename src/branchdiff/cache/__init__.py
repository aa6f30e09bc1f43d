"""Classification cache."""

from branchdiff.cache.classification import ClassificationCache, FetchDiff, LineChanges

__all__ = ["ClassificationCache", "FetchDiff", "LineChanges"]

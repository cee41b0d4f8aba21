"""Shared utilities for formatr."""

from formatr.utils.lru_cache import LRUCache
from formatr.utils.suggestions import did_you_mean, levenshtein_distance, suggest_names

__all__ = ["LRUCache", "did_you_mean", "levenshtein_distance", "suggest_names"]

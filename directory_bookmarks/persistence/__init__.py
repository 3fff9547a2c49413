"""Persistence layer – the preference stores that hold the bookmark."""

from ._base import JsonStore
from .preferences import JsonPreferenceStore, MemoryPreferenceStore, PreferenceStore

__all__ = [
    "JsonPreferenceStore",
    "JsonStore",
    "MemoryPreferenceStore",
    "PreferenceStore",
]

"""Caching services - in-memory translation cache with request coalescing."""

from auto_translate.services.caching.translation_cache import (
    CacheEntry,
    CacheStats,
    PendingEntry,
    ResolvedEntry,
    TranslationCache,
)

__all__ = [
    "TranslationCache",
    "CacheEntry",
    "CacheStats",
    "PendingEntry",
    "ResolvedEntry",
]

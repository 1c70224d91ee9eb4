"""Translation Cache - memoizes translations and coalesces in-flight remote calls."""

import logging
import threading
from concurrent.futures import CancelledError, Future, InvalidStateError
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Dict, List, Optional, Union

from auto_translate.core import NetworkError, TranslationKey

logger = logging.getLogger(__name__)

FetchFn = Callable[[TranslationKey], "Future[str]"]


@dataclass
class ResolvedEntry:
    """A finished translation."""

    translated_text: str


@dataclass
class PendingEntry:
    """A translation with exactly one remote call outstanding."""

    subscribers: List["Future[str]"] = field(default_factory=list)


CacheEntry = Union[ResolvedEntry, PendingEntry]


@dataclass
class CacheStats:
    """Counters for diagnostics and testing."""

    hits: int = 0
    misses: int = 0
    coalesced: int = 0
    fetches: int = 0
    failures: int = 0


class TranslationCache:
    """
    In-memory (source_text, target_language) -> translation store.

    Each key holds at most one entry: either Resolved or Pending. A Pending
    entry owns the single outstanding remote call for its key; every caller
    that asks for the key while it is pending is handed its own Future and
    resolved with the same value (or the same failure) once the call ends.
    Failed keys are dropped so the next request retries.

    All state transitions happen under one lock. Subscriber futures are
    completed outside the lock so their callbacks may re-enter the cache.
    """

    def __init__(self, max_entries: Optional[int] = None):
        """
        Args:
            max_entries: Optional bound on resolved entries. When exceeded,
                         the oldest resolved entry is evicted. None = unbounded.
        """
        self._entries: Dict[TranslationKey, CacheEntry] = {}
        self._lock = threading.Lock()
        self._max_entries = max_entries
        self._stats = CacheStats()

    def lookup_or_fetch(self, key: TranslationKey, fetch_fn: FetchFn) -> "Future[str]":
        """
        Resolve `key` from the cache, joining or starting a remote fetch.

        Args:
            key: Translation unit to resolve.
            fetch_fn: Starts the remote call for a key and returns a Future.
                      Invoked at most once per cache miss.

        Returns:
            A Future that completes with the translated text, or with the
            fetch's exception. Already done on a cache hit.
        """
        subscriber: "Future[str]" = Future()

        with self._lock:
            entry = self._entries.get(key)

            if isinstance(entry, ResolvedEntry):
                self._stats.hits += 1
                subscriber.set_result(entry.translated_text)
                return subscriber

            if isinstance(entry, PendingEntry):
                self._stats.coalesced += 1
                entry.subscribers.append(subscriber)
                logger.debug("Coalesced request for %s (%d waiting)", key, len(entry.subscribers))
                return subscriber

            self._stats.misses += 1
            self._stats.fetches += 1
            pending = PendingEntry(subscribers=[subscriber])
            self._entries[key] = pending

        try:
            fetch_future = fetch_fn(key)
        except Exception as e:
            self._complete(key, pending, None, e)
            return subscriber

        fetch_future.add_done_callback(partial(self._on_fetch_done, key, pending))
        return subscriber

    def get(self, key: TranslationKey) -> Optional[str]:
        """Return the resolved translation for `key`, or None if absent or pending."""
        with self._lock:
            entry = self._entries.get(key)
            return entry.translated_text if isinstance(entry, ResolvedEntry) else None

    def is_pending(self, key: TranslationKey) -> bool:
        """True if a remote call for `key` is in flight."""
        with self._lock:
            return isinstance(self._entries.get(key), PendingEntry)

    def invalidate(self, predicate: Callable[[TranslationKey], bool]) -> int:
        """
        Remove every entry whose key matches `predicate`.

        Pending entries are removed as well: their in-flight call still
        completes its current subscribers but no longer writes to the cache.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            doomed = [key for key in self._entries if predicate(key)]
            for key in doomed:
                del self._entries[key]

        if doomed:
            logger.debug("Invalidated %d cache entries", len(doomed))
        return len(doomed)

    def invalidate_language(self, language: str) -> int:
        """Remove all entries targeting `language`."""
        return self.invalidate(lambda key: key.target_language == language)

    def clear(self) -> int:
        """Remove all entries."""
        return self.invalidate(lambda key: True)

    def list_keys(self) -> List[TranslationKey]:
        """List all keys (resolved and pending). Useful for diagnostics and testing."""
        with self._lock:
            return list(self._entries.keys())

    def stats(self) -> CacheStats:
        """Snapshot of the hit/miss/coalesce counters."""
        with self._lock:
            return CacheStats(**vars(self._stats))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _on_fetch_done(
        self, key: TranslationKey, pending: PendingEntry, fetch_future: "Future[str]"
    ) -> None:
        """Done-callback of the remote fetch future."""
        try:
            result = fetch_future.result()
        except CancelledError:
            self._complete(key, pending, None, NetworkError(f"Translation fetch for {key} was cancelled"))
        except Exception as e:
            self._complete(key, pending, None, e)
        else:
            self._complete(key, pending, result, None)

    def _complete(
        self,
        key: TranslationKey,
        pending: PendingEntry,
        result: Optional[str],
        error: Optional[BaseException],
    ) -> None:
        """Transition `pending` to Resolved (or drop it) and fan out to subscribers."""
        with self._lock:
            # False when the entry was invalidated while the call was in flight
            is_current = self._entries.get(key) is pending

            if error is None:
                if is_current:
                    self._entries[key] = ResolvedEntry(translated_text=result)
                    self._evict_if_needed()
            else:
                self._stats.failures += 1
                if is_current:
                    del self._entries[key]

            subscribers = pending.subscribers
            pending.subscribers = []

        if error is not None:
            logger.debug("Fetch failed for %s: %s", key, error)

        for subscriber in subscribers:
            if subscriber.cancelled():
                continue
            try:
                if error is None:
                    subscriber.set_result(result)
                else:
                    subscriber.set_exception(error)
            except InvalidStateError:
                # Cancelled by its caller after the check above
                logger.debug("Subscriber for %s was cancelled while completing", key)

    def _evict_if_needed(self) -> None:
        """Evict the oldest resolved entries beyond max_entries. Caller holds the lock."""
        if self._max_entries is None:
            return

        resolved = [k for k, e in self._entries.items() if isinstance(e, ResolvedEntry)]
        overflow = len(resolved) - self._max_entries
        for key in resolved[:max(overflow, 0)]:
            del self._entries[key]

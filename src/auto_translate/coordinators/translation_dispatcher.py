"""Translation Dispatcher - walks node trees, resolves translations and applies them."""

import logging
import weakref
from concurrent.futures import Future
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Dict, List, Optional

from PySide6.QtCore import QObject, QThreadPool, Signal, Slot

from auto_translate.core import NotConfigured, TranslatableNode, TranslationKey, TreeWalker
from auto_translate.services import LanguageContext, TranslationCache, TranslationService
from auto_translate.services.api_workers import TranslationWorker

logger = logging.getLogger(__name__)


class RequestState(Enum):
    """Lifecycle of one node translation request."""

    REQUESTED = "requested"
    CACHE_HIT = "cache_hit"
    CACHE_MISS = "cache_miss"
    FETCHING = "fetching"
    RESOLVED = "resolved"
    APPLIED = "applied"
    STALE = "stale"
    DISCARDED = "discarded"
    FAILED = "failed"
    REPORTED = "reported"


TERMINAL_STATES = frozenset({RequestState.APPLIED, RequestState.DISCARDED, RequestState.REPORTED})


@dataclass
class TranslationRequest:
    """One node's translation request, captured at walk time."""

    key: TranslationKey
    generation: int
    state: RequestState = RequestState.REQUESTED
    error: Optional[BaseException] = None
    history: List[RequestState] = field(default_factory=lambda: [RequestState.REQUESTED])

    def advance(self, state: RequestState) -> None:
        self.state = state
        self.history.append(state)

    @property
    def is_finished(self) -> bool:
        return self.state in TERMINAL_STATES


@dataclass
class _AppliedText:
    node_ref: weakref.ref
    source_text: str
    applied_text: str


class _FetchRelay(QObject):
    """
    Completes a fetch Future on the thread that created the relay.

    Worker signals are emitted from a pool thread; because this QObject lives
    on the UI thread, Qt queues the slot calls back onto it.
    """

    def __init__(self, future: "Future[str]"):
        super().__init__()
        self.future = future

    @Slot(object)
    def on_translation_result(self, text):
        if not self.future.done():
            self.future.set_result(text)

    @Slot(object)
    def on_translation_error(self, error):
        if not self.future.done():
            self.future.set_exception(error)


class TranslationDispatcher(QObject):
    """
    Orchestrates TreeWalker + TranslationCache + remote translator + LanguageContext.

    Responsibilities:
    - Walk a node tree and request a translation for every non-empty text.
    - Start at most one worker per cache miss; the cache coalesces the rest.
    - Apply results on the UI thread, unless a newer language generation
      has superseded the walk that requested them.
    - Re-walk registered roots when the target language changes.

    Nodes are only ever held through weak references.
    """

    translation_applied = Signal(object)  # TranslationKey
    translation_discarded = Signal(object)  # TranslationKey
    translation_failed = Signal(object, object)  # TranslationKey, exception
    request_finished = Signal(object)  # TranslationRequest

    def __init__(
        self,
        language_context: LanguageContext,
        translation_cache: TranslationCache,
        tree_walker: Optional[TreeWalker] = None,
        translation_service: Optional[TranslationService] = None,
        thread_pool: Optional[QThreadPool] = None,
    ):
        super().__init__()

        if language_context is None:
            raise ValueError("LanguageContext must not be None")
        if translation_cache is None:
            raise ValueError("TranslationCache must not be None")

        self._language_context = language_context
        self._cache = translation_cache
        self._tree_walker = tree_walker or TreeWalker()
        self.translation_service = translation_service
        self._thread_pool = thread_pool or QThreadPool.globalInstance()

        self._roots: List[weakref.ref] = []
        # Keyed by id() so adapters need not be hashable; entries drop when the node dies
        self._applied: Dict[int, _AppliedText] = {}
        # Relays must outlive their workers; keyed by id() until the fetch completes
        self._relays: Dict[int, _FetchRelay] = {}

        self._language_context.language_changed.connect(self.on_language_changed)

    def translate_tree(self, root: TranslatableNode, track: bool = True) -> int:
        """
        Request translations for every text-bearing node under `root`.

        Returns immediately; results are written back as they arrive.

        Args:
            root: Top of the node tree.
            track: Register `root` so it is re-translated on language change.

        Returns:
            Number of translation requests issued.

        Raises:
            NotConfigured: If no translation service has been set.
        """
        if self.translation_service is None:
            raise NotConfigured("No translation service configured")

        if track:
            self.register_root(root)

        language, generation = self._language_context.snapshot()
        if language is None:
            logger.warning("No target language set; skipping translation walk")
            return 0

        requests: List[TranslationRequest] = []
        visited = self._tree_walker.walk(
            root, partial(self._request_translation, language, generation, requests)
        )
        logger.debug(
            "Walked %d nodes, issued %d requests for %s (generation %d)",
            visited, len(requests), language, generation,
        )
        return len(requests)

    @Slot(object, str, int)
    def on_language_changed(self, old_language, new_language: str, generation: int) -> None:
        """Invalidate the previous language's entries and re-walk registered roots."""
        if old_language is not None and old_language != new_language:
            removed = self._cache.invalidate_language(old_language)
            logger.debug("Dropped %d cache entries for %s", removed, old_language)

        if self.translation_service is None:
            logger.info("Language changed to %s before a translator was configured", new_language)
            return

        for root in self.registered_roots():
            self.translate_tree(root, track=False)

    def register_root(self, root: TranslatableNode) -> None:
        """Track `root` (weakly) for re-translation on language change."""
        if any(r is root for r in self.registered_roots()):
            return
        self._roots.append(weakref.ref(root))

    def unregister_root(self, root: TranslatableNode) -> None:
        self._roots = [r for r in self._roots if r() is not None and r() is not root]

    def registered_roots(self) -> List[TranslatableNode]:
        """Live registered roots; dead references are pruned."""
        self._roots = [r for r in self._roots if r() is not None]
        return [r() for r in self._roots]

    def fetch_translation(self, key: TranslationKey) -> "Future[str]":
        """
        Resolve a single key through the cache, starting a worker on a miss.

        The returned Future completes on this dispatcher's thread.

        Raises:
            NotConfigured: If no translation service has been set.
        """
        if self.translation_service is None:
            raise NotConfigured("No translation service configured")
        return self._cache.lookup_or_fetch(key, self._start_remote_fetch)

    def _request_translation(
        self,
        language: str,
        generation: int,
        requests: List[TranslationRequest],
        node: TranslatableNode,
    ) -> None:
        """Visitor: resolve one node's text through the cache."""
        try:
            text = self._source_text_for(node)
        except RuntimeError as e:
            logger.debug("Skipping node whose native object is gone: %s", e)
            return

        if not text:
            return

        request = TranslationRequest(key=TranslationKey(text, language), generation=generation)
        requests.append(request)

        future = self._cache.lookup_or_fetch(request.key, self._start_remote_fetch)
        if future.done() and future.exception() is None:
            request.advance(RequestState.CACHE_HIT)
        else:
            request.advance(RequestState.CACHE_MISS)
            request.advance(RequestState.FETCHING)

        future.add_done_callback(partial(self._on_translation_done, request, weakref.ref(node)))

    def _source_text_for(self, node: TranslatableNode) -> str:
        """Current text, or the original source if the node still shows our translation."""
        text = node.get_text()
        applied = self._applied.get(id(node))
        if applied is not None and applied.node_ref() is node and text == applied.applied_text:
            return applied.source_text
        return text

    def _remember_applied(self, node: TranslatableNode, source_text: str, applied_text: str) -> None:
        """Record what was written to `node`; forgotten when the node is collected."""
        node_id = id(node)

        def forget(ref: weakref.ref) -> None:
            current = self._applied.get(node_id)
            if current is not None and current.node_ref is ref:
                del self._applied[node_id]

        previous = self._applied.get(node_id)
        if previous is not None and previous.node_ref() is node:
            node_ref = previous.node_ref
        else:
            node_ref = weakref.ref(node, forget)
        self._applied[node_id] = _AppliedText(
            node_ref=node_ref, source_text=source_text, applied_text=applied_text
        )

    def _start_remote_fetch(self, key: TranslationKey) -> "Future[str]":
        """Start one worker for `key`; the returned Future completes on this thread."""
        future: "Future[str]" = Future()

        worker = TranslationWorker(
            translation_service=self.translation_service,
            text=key.source_text,
            target_language=key.target_language,
        )

        # IMPORTANT: keep the relay referenced so it isn't garbage collected while the worker runs
        relay = _FetchRelay(future)
        relay_id = id(relay)
        self._relays[relay_id] = relay
        future.add_done_callback(lambda _: self._relays.pop(relay_id, None))

        worker.signals.translation_result.connect(relay.on_translation_result)
        worker.signals.error.connect(relay.on_translation_error)

        logger.debug("Fetching translation for %s", key)
        self._thread_pool.start(worker)
        return future

    def _on_translation_done(
        self,
        request: TranslationRequest,
        node_ref: weakref.ref,
        future: "Future[str]",
    ) -> None:
        """Apply, discard or report a finished request (runs on the UI thread)."""
        if future.cancelled():
            logger.debug("Translation request for %s was cancelled", request.key)
            self.translation_discarded.emit(request.key)
            self._finish(request, RequestState.DISCARDED)
            return

        error = future.exception()
        if error is not None:
            request.error = error
            request.advance(RequestState.FAILED)
            logger.warning("Translation failed for %s: %s", request.key, error)
            self.translation_failed.emit(request.key, error)
            self._finish(request, RequestState.REPORTED)
            return

        if request.state is RequestState.FETCHING:
            request.advance(RequestState.RESOLVED)

        if self._language_context.generation() != request.generation:
            request.advance(RequestState.STALE)
            logger.debug(
                "Discarding stale translation for %s (generation %d, now %d)",
                request.key, request.generation, self._language_context.generation(),
            )
            self.translation_discarded.emit(request.key)
            self._finish(request, RequestState.DISCARDED)
            return

        node = node_ref()
        if node is None:
            logger.debug("Node for %s was collected before its translation arrived", request.key)
            self.translation_discarded.emit(request.key)
            self._finish(request, RequestState.DISCARDED)
            return

        translated = future.result()
        try:
            node.set_text(translated)
        except RuntimeError as e:
            logger.debug("Could not apply translation for %s: %s", request.key, e)
            self.translation_discarded.emit(request.key)
            self._finish(request, RequestState.DISCARDED)
            return

        self._remember_applied(node, request.key.source_text, translated)
        self.translation_applied.emit(request.key)
        self._finish(request, RequestState.APPLIED)

    def _finish(self, request: TranslationRequest, state: RequestState) -> None:
        request.advance(state)
        self.request_finished.emit(request)

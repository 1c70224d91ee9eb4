"""Auto Translate SDK - the composition root and the only entry point adapters need."""

import logging
from concurrent.futures import Future
from typing import Iterable, Optional

from PySide6.QtCore import QThreadPool

from auto_translate.coordinators import TranslationDispatcher
from auto_translate.core import (
    NotConfigured,
    TranslatableNode,
    TranslationKey,
    TreeWalker,
    UnsupportedLanguage,
)
from auto_translate.services import (
    GeminiTranslationService,
    LanguageContext,
    SettingsManager,
    SUPPORTED_LANGUAGES,
    TranslationCache,
    TranslationService,
)

logger = logging.getLogger(__name__)


class AutoTranslateSDK:
    """
    Wires language context, cache, walker and dispatcher together.

    This is the only place that knows how to instantiate the components.
    Each SDK instance owns its own cache and language context.

    Usage:
        sdk = AutoTranslateSDK()
        sdk.configure(api_key="...", initial_language="es")
        sdk.translate_tree(root)
        sdk.set_language("fr")  # re-translates root
    """

    def __init__(
        self,
        translator: Optional[TranslationService] = None,
        thread_pool: Optional[QThreadPool] = None,
        supported_languages: Iterable[str] = SUPPORTED_LANGUAGES,
        settings_manager: Optional[SettingsManager] = None,
        max_cache_entries: Optional[int] = None,
    ):
        self._settings_manager = settings_manager
        self.language_context = LanguageContext(supported_languages)
        self.cache = TranslationCache(max_entries=max_cache_entries)
        self.dispatcher = TranslationDispatcher(
            language_context=self.language_context,
            translation_cache=self.cache,
            tree_walker=TreeWalker(),
            translation_service=translator,
            thread_pool=thread_pool,
        )

    @property
    def is_configured(self) -> bool:
        return self.dispatcher.translation_service is not None

    def configure(
        self, api_key: Optional[str] = None, initial_language: Optional[str] = None
    ) -> None:
        """
        Set up the remote translator and the starting language.

        Args:
            api_key: Gemini API key. Falls back to GEMINI_API_KEY from settings.
                     Ignored when a translator was injected at construction.
            initial_language: Starting target language. Falls back to
                              AUTO_TRANSLATE_LANGUAGE from settings.

        Raises:
            NotConfigured: If no translator was injected and no API key is found.
            UnsupportedLanguage: If the initial language is not supported.
        """
        settings = self._settings()

        language = initial_language or settings.get_initial_language()
        if language is not None and not self.language_context.is_supported(language):
            raise UnsupportedLanguage(language)

        if self.dispatcher.translation_service is None:
            key = api_key or settings.get_gemini_api_key()
            if not key:
                raise NotConfigured("API key not configured. Add GEMINI_API_KEY to .env file.")
            self.dispatcher.translation_service = GeminiTranslationService(
                api_key=key,
                model_name=settings.get_model_name(),
            )
            logger.info("Configured Gemini translator (%s)", self.dispatcher.translation_service.model_name)

        if language is not None:
            self.set_language(language)

    def set_language(self, code: str) -> None:
        """Switch the target language; registered trees are re-translated."""
        self.language_context.set_language(code)

    def translate_tree(self, root: TranslatableNode) -> int:
        """Translate every node under `root` and keep it in sync with language changes."""
        if not self.is_configured:
            raise NotConfigured("Call configure() before translate_tree()")
        return self.dispatcher.translate_tree(root)

    def translate(self, text: str, target_language: str) -> "Future[str]":
        """
        Translate a single string through the shared cache.

        Concurrent calls for the same (text, language) share one remote call.
        The Future completes on the thread that owns the SDK, so a Qt event
        loop must be running for remote results to arrive.

        Raises:
            UnsupportedLanguage: If `target_language` is not supported.
            NotConfigured: If configure() has not provided a translator.
        """
        if not self.language_context.is_supported(target_language):
            raise UnsupportedLanguage(target_language)
        if not self.is_configured:
            raise NotConfigured("Call configure() before translate()")

        if not text:
            future: "Future[str]" = Future()
            future.set_result(text)
            return future

        return self.dispatcher.fetch_translation(TranslationKey(text, target_language))

    def _settings(self) -> SettingsManager:
        if self._settings_manager is None:
            self._settings_manager = SettingsManager()
        return self._settings_manager

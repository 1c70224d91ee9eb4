"""Services layer - cache, language state, remote translation and configuration."""

from auto_translate.services.settings_manager import SettingsManager
from auto_translate.services.language_context import LanguageContext, LANGUAGE_NAMES, SUPPORTED_LANGUAGES

# Translation services
from auto_translate.services.translation import TranslationService, GeminiTranslationService

# Caching services
from auto_translate.services.caching import TranslationCache, CacheStats, PendingEntry, ResolvedEntry

# Qt workers
from auto_translate.services.api_workers import TranslationWorker, WorkerSignals

__all__ = [
    "SettingsManager",
    "LanguageContext",
    "LANGUAGE_NAMES",
    "SUPPORTED_LANGUAGES",
    "TranslationService",
    "GeminiTranslationService",
    "TranslationCache",
    "CacheStats",
    "PendingEntry",
    "ResolvedEntry",
    "TranslationWorker",
    "WorkerSignals",
]

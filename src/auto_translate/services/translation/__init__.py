"""Translation services - abstract interface and Gemini implementation."""

from auto_translate.services.translation.translation_service import TranslationService
from auto_translate.services.translation.gemini_translation_service import GeminiTranslationService

__all__ = [
    "TranslationService",
    "GeminiTranslationService",
]

"""Language Context - current target language with a monotonic generation counter."""

import logging
import threading
from typing import Iterable, Optional, Tuple

from PySide6.QtCore import QObject, Signal

from auto_translate.core import UnsupportedLanguage

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES: Tuple[str, ...] = ("es", "fr", "de", "it", "pt", "nl", "ru", "ja", "ko", "zh")

LANGUAGE_NAMES = {
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "nl": "Dutch",
    "ru": "Russian",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese",
}


class LanguageContext(QObject):
    """
    Holds the target language and its generation.

    Every accepted set_language() call bumps the generation, even when the
    code is unchanged, and emits language_changed. Consumers capture the
    generation when they start work and compare it when results arrive to
    detect that a newer language has taken over.
    """

    # (old_language, new_language, generation); old_language may be None
    language_changed = Signal(object, str, int)

    def __init__(self, supported_languages: Iterable[str] = SUPPORTED_LANGUAGES):
        super().__init__()
        self._supported = tuple(supported_languages)
        self._lock = threading.Lock()
        self._current_language: Optional[str] = None
        self._generation = 0

    def set_language(self, code: str) -> None:
        """
        Switch the target language.

        Raises:
            UnsupportedLanguage: If `code` is not supported. Nothing changes.
        """
        if not self.is_supported(code):
            raise UnsupportedLanguage(code)

        with self._lock:
            old_language = self._current_language
            self._current_language = code
            self._generation += 1
            generation = self._generation

        logger.info("Target language %s -> %s (generation %d)", old_language, code, generation)
        self.language_changed.emit(old_language, code, generation)

    def current_language(self) -> Optional[str]:
        with self._lock:
            return self._current_language

    def generation(self) -> int:
        with self._lock:
            return self._generation

    def snapshot(self) -> Tuple[Optional[str], int]:
        """Read language and generation together."""
        with self._lock:
            return self._current_language, self._generation

    def is_supported(self, code: Optional[str]) -> bool:
        return code in self._supported

    def supported_languages(self) -> Tuple[str, ...]:
        return self._supported

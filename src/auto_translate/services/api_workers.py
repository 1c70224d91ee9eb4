"""Async workers for non-blocking API calls using Qt threading."""

import logging

from PySide6.QtCore import QObject, QRunnable, Signal, Slot

from auto_translate.core import NetworkError, TranslationError
from auto_translate.services.translation import TranslationService

logger = logging.getLogger(__name__)


class WorkerSignals(QObject):
    """
    Signals for communicating results from worker threads.

    QRunnable doesn't inherit from QObject, so we need a separate
    QObject to hold the signals.
    """
    finished = Signal()
    error = Signal(object)  # TranslationError
    translation_result = Signal(object)  # str


class TranslationWorker(QRunnable):
    """
    Worker that runs one remote translation call in a background thread.

    Uses Qt's thread pool for efficient thread management.
    Emits signals when translation completes or fails.
    """

    def __init__(
        self,
        translation_service: TranslationService,
        text: str,
        target_language: str,
    ):
        super().__init__()
        self.translation_service = translation_service
        self.text = text
        self.target_language = target_language
        self.signals = WorkerSignals()
        self.setAutoDelete(True)

    @Slot()
    def run(self):
        """Execute the translation API call in background thread."""
        try:
            result = self.translation_service.translate(self.text, self.target_language)
            self.signals.translation_result.emit(result)
        except TranslationError as e:
            self.signals.error.emit(e)
        except Exception as e:
            # Catch any unexpected exceptions not handled by service
            logger.exception("Unexpected translation error")
            wrapped = NetworkError(f"Unexpected translation error: {e}")
            wrapped.__cause__ = e
            self.signals.error.emit(wrapped)
        finally:
            self.signals.finished.emit()

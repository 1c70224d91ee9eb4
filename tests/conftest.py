"""Shared fixtures: Qt application, deterministic thread pool and fake translator."""

import threading
from typing import Dict, List, Optional, Tuple

import pytest
from PySide6.QtCore import QCoreApplication

from auto_translate.services import TranslationService


class ManualThreadPool:
    """
    Stand-in for QThreadPool that queues runnables until the test runs them.

    Runnables execute on the test (UI) thread, so worker signals are
    delivered synchronously and completion order is chosen by the test.
    """

    def __init__(self):
        self.queued: List = []

    def start(self, runnable) -> None:
        self.queued.append(runnable)

    def run_next(self) -> None:
        runnable = self.queued.pop(0)
        runnable.run()

    def run_all(self) -> None:
        while self.queued:
            self.run_next()


class RecordingTranslator(TranslationService):
    """Fake remote translator that records every call."""

    def __init__(
        self,
        translations: Optional[Dict[Tuple[str, str], str]] = None,
        errors: Optional[Dict[Tuple[str, str], Exception]] = None,
    ):
        self.translations = dict(translations or {})
        self.errors = dict(errors or {})
        self.calls: List[Tuple[str, str]] = []
        self._lock = threading.Lock()

    def translate(self, text: str, target_language: str) -> str:
        with self._lock:
            self.calls.append((text, target_language))
        key = (text, target_language)
        if key in self.errors:
            raise self.errors[key]
        return self.translations.get(key, f"{text} [{target_language}]")


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """Ensure a QCoreApplication exists for signal delivery."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def thread_pool():
    """Provide a deterministic, manually driven thread pool."""
    return ManualThreadPool()


@pytest.fixture
def translator():
    """Provide a recording translator with a few known translations."""
    return RecordingTranslator(
        translations={
            ("Hello", "es"): "Hola",
            ("Hello", "fr"): "Bonjour",
            ("Goodbye", "es"): "Adiós",
            ("Goodbye", "fr"): "Au revoir",
            ("Settings", "es"): "Ajustes",
        }
    )

"""Gemini Translation Service - Implements translation via Google Gemini API."""

import logging
import threading
import time
from typing import Optional

import google.genai as genai
from google.genai import types

from auto_translate.core import EncodingError, MalformedResponse, NetworkError
from auto_translate.services.language_context import LANGUAGE_NAMES
from auto_translate.services.translation.translation_service import TranslationService

logger = logging.getLogger(__name__)


class GeminiTranslationService(TranslationService):
    """
    Translation service using Google Gemini API.

    Low temperature for consistent UI strings. Rate-limit errors are retried
    with exponential backoff; every other failure is mapped onto the
    NetworkError / EncodingError / MalformedResponse taxonomy.
    """

    DEFAULT_MODEL = "gemini-2.0-flash"
    MAX_RETRIES = 3
    INITIAL_RETRY_DELAY = 2.0

    TRANSLATION_PROMPT = """Translate the following user interface text to {language}.
Preserve placeholders, punctuation and capitalization style.
Only output the translation, nothing else.

Text:
{text}"""

    def __init__(
        self,
        api_key: str,
        model_name: Optional[str] = None,
        client: Optional[genai.Client] = None,
    ):
        """
        Args:
            api_key: Gemini API key.
            model_name: Model to use (default: DEFAULT_MODEL).
            client: Pre-built client, mainly for tests. Built lazily if None.
        """
        self._api_key = api_key
        self.model_name = model_name or self.DEFAULT_MODEL
        self._client = client
        self._client_lock = threading.Lock()

    def translate(self, text: str, target_language: str) -> str:
        """Translate `text` into `target_language` using the Gemini API."""
        try:
            prompt = self.TRANSLATION_PROMPT.format(
                language=LANGUAGE_NAMES.get(target_language, target_language),
                text=text,
            )
            prompt.encode("utf-8")
        except UnicodeError as e:
            raise EncodingError(f"Could not encode text for translation: {e}") from e

        retry_delay = self.INITIAL_RETRY_DELAY
        attempt = 0

        while True:
            attempt += 1
            try:
                response = self._get_client().models.generate_content(
                    model=self.model_name,
                    contents=prompt,
                    config=types.GenerateContentConfig(
                        temperature=0.2,
                        top_p=0.95,
                        max_output_tokens=1024,
                    ),
                )
            except UnicodeError as e:
                raise EncodingError(f"Could not decode translation response: {e}") from e
            except Exception as e:
                error_msg = str(e).lower()
                is_rate_limit = (
                    "429" in error_msg
                    or "resource_exhausted" in error_msg
                    or "quota" in error_msg
                    or "rate_limit" in error_msg
                )

                if is_rate_limit and attempt < self.MAX_RETRIES:
                    logger.warning(
                        "Rate limited (attempt %d/%d), retrying in %.1fs",
                        attempt, self.MAX_RETRIES, retry_delay,
                    )
                    time.sleep(retry_delay)
                    retry_delay *= 2
                    continue

                if is_rate_limit:
                    raise NetworkError("API quota exceeded. Please try again later.") from e
                if "deadline" in error_msg or "timeout" in error_msg:
                    raise NetworkError("Request timed out. Please check your connection.") from e
                raise NetworkError(f"Translation failed: {e}") from e

            translated = getattr(response, "text", None)
            if not translated or not translated.strip():
                raise MalformedResponse("Empty response from API")

            logger.debug(
                "Translated %d chars to %s on attempt %d", len(text), target_language, attempt
            )
            return translated.strip()

    def _get_client(self) -> genai.Client:
        # Workers on the pool may race here on first use
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = genai.Client(api_key=self._api_key)
        return self._client

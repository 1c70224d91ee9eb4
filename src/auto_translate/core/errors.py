"""Translation errors - the failure taxonomy shared by cache, dispatcher and services."""

from typing import Optional


class TranslationError(Exception):
    """Base class for every error raised by the auto-translate layer."""


class UnsupportedLanguage(TranslationError):
    """Raised when a target language code is not in the supported set."""

    def __init__(self, code: Optional[str]):
        super().__init__(f"Unsupported target language: {code!r}")
        self.code = code


class NetworkError(TranslationError):
    """The remote translator could not be reached or rejected the request."""


class EncodingError(TranslationError):
    """The request or response could not be encoded/decoded."""


class MalformedResponse(TranslationError):
    """The remote translator answered, but without a usable translation."""


class NotConfigured(TranslationError):
    """The SDK was used before an API key or translator was configured."""

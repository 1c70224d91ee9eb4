"""Translation Service - remote translator boundary consumed by the dispatcher."""

from abc import ABC, abstractmethod


class TranslationService(ABC):
    """
    Abstract remote translator.

    Implementations (e.g., GeminiTranslationService) handle API calls. The
    call blocks, so the dispatcher always runs it on a worker thread.
    """

    @abstractmethod
    def translate(self, text: str, target_language: str) -> str:
        """
        Translate `text` into `target_language`.

        Args:
            text: Source text, exactly as read from the node.
            target_language: Target language code (e.g., "es").

        Returns:
            The translated text.

        Raises:
            NetworkError: Transport or API failure.
            EncodingError: Text could not be encoded or decoded.
            MalformedResponse: The API answered without a usable translation.
        """
        pass

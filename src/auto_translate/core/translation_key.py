"""Translation key - identifies one unique translation unit."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TranslationKey:
    """
    Immutable (source_text, target_language) pair used as the cache key.

    Equality is an exact string match. No trimming or case folding is applied,
    so "Hello" and "Hello " are distinct keys.
    """

    source_text: str
    target_language: str

    def __str__(self) -> str:
        preview = self.source_text if len(self.source_text) <= 40 else self.source_text[:40] + "..."
        return f"{preview!r}->{self.target_language}"

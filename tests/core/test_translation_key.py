"""Unit tests for TranslationKey."""

from dataclasses import FrozenInstanceError

import pytest

from auto_translate.core import TranslationKey


class TestTranslationKey:
    """Tests for key equality and immutability."""

    def test_equal_keys_hash_equal(self):
        assert TranslationKey("Hello", "es") == TranslationKey("Hello", "es")
        assert hash(TranslationKey("Hello", "es")) == hash(TranslationKey("Hello", "es"))

    def test_equality_is_exact_string_match(self):
        """No trimming or case folding is applied."""
        assert TranslationKey("Hello", "es") != TranslationKey("Hello ", "es")
        assert TranslationKey("Hello", "es") != TranslationKey("hello", "es")

    def test_language_is_part_of_identity(self):
        assert TranslationKey("Hello", "es") != TranslationKey("Hello", "fr")

    def test_key_is_immutable(self):
        key = TranslationKey("Hello", "es")
        with pytest.raises(FrozenInstanceError):
            key.source_text = "Bye"

    def test_str_truncates_long_text(self):
        key = TranslationKey("x" * 100, "es")
        assert str(key).endswith("...'->es")

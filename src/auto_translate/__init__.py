"""
Auto Translate - machine translation for UI node trees.

This package walks a tree of text-bearing UI nodes and provides:
- Coalesced, cached remote translation per (text, language)
- Asynchronous write-back on the UI thread via Qt signals
- Stale-result detection when the target language changes
"""

__version__ = "0.1.0"

# Make key components available at package level
from auto_translate.core import (
    EncodingError,
    MalformedResponse,
    NetworkError,
    NotConfigured,
    TextNode,
    TranslatableNode,
    TranslationError,
    TranslationKey,
    UnsupportedLanguage,
)
from auto_translate.sdk import AutoTranslateSDK

__all__ = [
    "AutoTranslateSDK",
    "TranslatableNode",
    "TextNode",
    "TranslationKey",
    "TranslationError",
    "UnsupportedLanguage",
    "NetworkError",
    "EncodingError",
    "MalformedResponse",
    "NotConfigured",
]

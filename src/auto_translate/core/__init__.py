"""Domain layer - keys, node interface, traversal and error taxonomy."""

from .errors import (
    EncodingError,
    MalformedResponse,
    NetworkError,
    NotConfigured,
    TranslationError,
    UnsupportedLanguage,
)
from .translatable_node import TextNode, TranslatableNode
from .translation_key import TranslationKey
from .tree_walker import TreeWalker

__all__ = [
    "TranslationError",
    "UnsupportedLanguage",
    "NetworkError",
    "EncodingError",
    "MalformedResponse",
    "NotConfigured",
    "TranslatableNode",
    "TextNode",
    "TranslationKey",
    "TreeWalker",
]

"""Coordinators - Orchestration layer connecting node trees with translation services."""

from .translation_dispatcher import (
    RequestState,
    TERMINAL_STATES,
    TranslationDispatcher,
    TranslationRequest,
)

__all__ = [
    "TranslationDispatcher",
    "TranslationRequest",
    "RequestState",
    "TERMINAL_STATES",
]

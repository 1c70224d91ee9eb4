"""Translatable node - the capability interface adapters implement per widget type."""

from typing import Iterable, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class TranslatableNode(Protocol):
    """
    A single unit of UI text owned by the adapter layer.

    Labels, buttons, text fields and plain containers all look the same to
    the core: readable/writable text plus an ordered child enumeration.
    Containers return an empty string from get_text().

    A node whose underlying element has been detached or destroyed raises
    RuntimeError from these methods, the way PySide6 wrappers do once their
    C++ object is gone.
    """

    def get_text(self) -> str:
        ...

    def set_text(self, text: str) -> None:
        ...

    def children(self) -> Iterable["TranslatableNode"]:
        ...


class TextNode:
    """In-memory node for headless trees (tests, previews, server-side rendering)."""

    def __init__(self, text: str = "", children: Optional[List["TextNode"]] = None):
        self.text = text
        self._children: List["TextNode"] = list(children or [])
        self._detached = False

    def get_text(self) -> str:
        self._check_attached()
        return self.text

    def set_text(self, text: str) -> None:
        self._check_attached()
        self.text = text

    def children(self) -> List["TextNode"]:
        self._check_attached()
        return list(self._children)

    def add_child(self, child: "TextNode") -> "TextNode":
        child._detached = False
        self._children.append(child)
        return child

    def remove_child(self, child: "TextNode") -> None:
        """Detach `child`; it raises RuntimeError until it is added again."""
        remaining = [c for c in self._children if c is not child]
        if len(remaining) != len(self._children):
            child._detached = True
        self._children = remaining

    def _check_attached(self) -> None:
        if self._detached:
            raise RuntimeError(f"{self!r} has been removed from its parent")

    def __repr__(self) -> str:
        return f"TextNode({self.text!r}, children={len(self._children)})"

"""Textual integration; ``app`` needs the ``textual`` package at import time."""

from .controller import TextualFixupAdapter, TextualUIHooks

__all__ = ["TextualFixupAdapter", "TextualUIHooks"]

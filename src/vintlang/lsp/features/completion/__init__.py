"""LSP completion feature for VintLang."""

from .completion import completion_items, register_completion, resolve_completion_item

__all__ = ["completion_items", "register_completion", "resolve_completion_item"]

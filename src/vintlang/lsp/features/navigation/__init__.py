"""LSP navigation features for VintLang."""

from .navigation import (
    register_navigation,
    resolve_definition,
    resolve_document_highlights,
    resolve_prepare_rename,
    resolve_references,
    resolve_rename,
)
from .symbols import register_symbols, resolve_document_symbols, resolve_workspace_symbols

__all__ = [
    "register_navigation",
    "register_symbols",
    "resolve_definition",
    "resolve_document_highlights",
    "resolve_document_symbols",
    "resolve_prepare_rename",
    "resolve_references",
    "resolve_rename",
    "resolve_workspace_symbols",
]

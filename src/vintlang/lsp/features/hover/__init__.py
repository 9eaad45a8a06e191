"""LSP hover and signature help features for VintLang."""

from .hover import register_hover, resolve_hover, resolve_signature_help

__all__ = ["register_hover", "resolve_hover", "resolve_signature_help"]

"""LSP inlay hints feature for VintLang."""

from .inlay_hints import infer_type, register_inlay_hints, resolve_inlay_hints

__all__ = ["infer_type", "register_inlay_hints", "resolve_inlay_hints"]

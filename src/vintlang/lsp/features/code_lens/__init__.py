"""LSP code lens feature for VintLang."""

from .code_lens import SHOW_REFERENCES_COMMAND, register_code_lens, resolve_code_lenses

__all__ = ["SHOW_REFERENCES_COMMAND", "register_code_lens", "resolve_code_lenses"]

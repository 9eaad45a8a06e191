"""LSP features for VintLang."""

from .call_hierarchy.call_hierarchy import register_call_hierarchy
from .code_lens.code_lens import register_code_lens
from .colors.colors import register_colors
from .completion.completion import register_completion
from .diagnostics.code_actions import register_code_actions
from .diagnostics.diagnostics import register_diagnostics
from .folding.folding import register_folding
from .formatting.formatting import register_formatting
from .hover.hover import register_hover
from .inlay_hints.inlay_hints import register_inlay_hints
from .navigation.navigation import register_navigation
from .navigation.symbols import register_symbols
from .semantic_tokens.semantic_tokens import register_semantic_tokens

__all__ = [
    "register_call_hierarchy",
    "register_code_actions",
    "register_code_lens",
    "register_colors",
    "register_completion",
    "register_diagnostics",
    "register_folding",
    "register_formatting",
    "register_hover",
    "register_inlay_hints",
    "register_navigation",
    "register_semantic_tokens",
    "register_symbols",
]

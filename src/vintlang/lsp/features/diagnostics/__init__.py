"""LSP diagnostics feature for VintLang."""

from .code_actions import register_code_actions, resolve_code_actions
from .diagnostics import DiagnosticsService, register_diagnostics

__all__ = [
    "DiagnosticsService",
    "register_code_actions",
    "register_diagnostics",
    "resolve_code_actions",
]

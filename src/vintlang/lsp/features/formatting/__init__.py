"""LSP formatting features for VintLang."""

from .formatting import format_lines, register_formatting, resolve_formatting, resolve_range_formatting

__all__ = ["format_lines", "register_formatting", "resolve_formatting", "resolve_range_formatting"]

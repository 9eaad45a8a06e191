"""LSP document color feature for VintLang."""

from .colors import (
    color_labels,
    find_colors,
    register_colors,
    resolve_color_presentations,
    resolve_document_colors,
)

__all__ = [
    "color_labels",
    "find_colors",
    "register_colors",
    "resolve_color_presentations",
    "resolve_document_colors",
]

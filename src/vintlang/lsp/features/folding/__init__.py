"""LSP folding range feature for VintLang."""

from .folding import compute_folding_ranges, register_folding, resolve_folding_ranges

__all__ = ["compute_folding_ranges", "register_folding", "resolve_folding_ranges"]

"""LSP utility modules for VintLang."""

from .coordinate_transformer import CoordinateTransformer
from .document_event_coordinator import DocumentEventCoordinator
from .models import DiagnosticCode, Document, Symbol, SymbolKind, SymbolTable

__all__ = [
    "CoordinateTransformer",
    "DocumentEventCoordinator",
    "DiagnosticCode",
    "Document",
    "Symbol",
    "SymbolKind",
    "SymbolTable",
]

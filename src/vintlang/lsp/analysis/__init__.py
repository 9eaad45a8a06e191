"""Heuristic analysis engine for VintLang documents."""

from .analyzer import AnalysisContext, DocumentAnalyzer
from .diagnostic_engine import DiagnosticEngine
from .document_store import DocumentStore
from .symbol_indexer import SymbolIndexer

__all__ = [
    "AnalysisContext",
    "DocumentAnalyzer",
    "DiagnosticEngine",
    "DocumentStore",
    "SymbolIndexer",
]

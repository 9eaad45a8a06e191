"""
Per-document analysis contexts.

The analyzer owns the document store and, for every open document, an
immutable AnalysisContext holding the document together with the symbol table
and diagnostics derived from exactly that text. Contexts are rebuilt in full
on every change and swapped in under a lock, so readers always see a
consistent snapshot.
"""

import logging
from dataclasses import dataclass, field
from threading import Lock
from typing import Dict, List, Optional

from lsprotocol import types

from vintlang.lsp.utils.models import Document, SymbolTable

from .diagnostic_engine import DiagnosticEngine
from .document_store import DocumentStore
from .symbol_indexer import SymbolIndexer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisContext:
    """Snapshot of one document and everything derived from it."""
    document: Document
    symbols: SymbolTable = field(default_factory=dict)
    diagnostics: List[types.Diagnostic] = field(default_factory=list)

    @property
    def uri(self) -> str:
        return self.document.uri

    @property
    def version(self) -> int:
        return self.document.version

    @property
    def lines(self) -> List[str]:
        return self.document.lines


class DocumentAnalyzer:
    """
    Keeps documents and their analysis contexts in step.

    Every open or update runs the symbol indexer and then the diagnostic
    engine over the full text, and replaces the previous context wholesale.
    """

    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        indexer: Optional[SymbolIndexer] = None,
        engine: Optional[DiagnosticEngine] = None,
    ):
        self.store = store or DocumentStore()
        self.indexer = indexer or SymbolIndexer()
        self.engine = engine or DiagnosticEngine()
        self._contexts: Dict[str, AnalysisContext] = {}
        self._lock = Lock()

    def open(self, uri: str, text: str, version: int = 0) -> AnalysisContext:
        return self._install(self.store.open(uri, text, version))

    def update(self, uri: str, text: str, version: int = 0) -> AnalysisContext:
        return self._install(self.store.update(uri, text, version))

    def close(self, uri: str) -> None:
        with self._lock:
            self.store.close(uri)
            self._contexts.pop(uri, None)

    def get_context(self, uri: str) -> Optional[AnalysisContext]:
        with self._lock:
            return self._contexts.get(uri)

    def contexts(self) -> List[AnalysisContext]:
        with self._lock:
            return list(self._contexts.values())

    def analyze(self, document: Document) -> AnalysisContext:
        """
        Build a context for a document without storing it.

        Args:
            document: The document to analyze

        Returns:
            A context with a fresh symbol table and diagnostic list
        """
        symbols = self.indexer.index(document)
        diagnostics = self.engine.diagnose(document, symbols)
        return AnalysisContext(document=document, symbols=symbols, diagnostics=diagnostics)

    def _install(self, document: Document) -> AnalysisContext:
        context = self.analyze(document)
        with self._lock:
            current = self.store.get(document.uri)
            # A newer version may have been stored while this one was analysed
            if current is not None and current.version > document.version:
                logger.debug(
                    f"Discarding analysis of {document.uri} v{document.version}, "
                    f"store is at v{current.version}"
                )
                return self._contexts.get(document.uri, context)
            self._contexts[document.uri] = context
        logger.debug(
            f"Analyzed {document.uri} v{document.version}: "
            f"{len(context.symbols)} symbols, {len(context.diagnostics)} diagnostics"
        )
        return context

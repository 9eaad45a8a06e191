"""
LSP server implementation for VintLang.

This package provides a Language Server Protocol implementation for VintLang
source files. Analysis is heuristic and line based: every change re-indexes
the declarations of the document and re-runs the diagnostic checks, and each
language feature answers from that snapshot.

Key Components:
- VintLSPServer: the pygls server wiring every feature together
- analysis: document store, symbol indexer, diagnostic engine and analyzer
- features: one package per LSP feature
- utils: document model, coordinate conversion and event coordination

Usage Example:
    from vintlang.lsp import ServerConfig, VintLSPServer

    # Start on stdio for editor integration
    VintLSPServer(ServerConfig()).start()

    # Or on TCP for testing
    VintLSPServer(ServerConfig(use_tcp=True, port=4000)).start()
"""

from .analysis import AnalysisContext, DocumentAnalyzer
from .config import ServerConfig
from .server import ServerInitializationState, VintLSPServer
from .utils import CoordinateTransformer, DocumentEventCoordinator

__all__ = [
    "AnalysisContext",
    "CoordinateTransformer",
    "DocumentAnalyzer",
    "DocumentEventCoordinator",
    "ServerConfig",
    "ServerInitializationState",
    "VintLSPServer",
]

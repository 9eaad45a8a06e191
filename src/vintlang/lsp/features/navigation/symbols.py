"""Document and workspace symbol lists."""

import logging
from typing import Iterable, List, Optional

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from vintlang.lsp.analysis import AnalysisContext, DocumentAnalyzer
from vintlang.lsp.analysis.patterns import iter_declarations
from vintlang.lsp.utils.coordinate_transformer import CoordinateTransformer

logger = logging.getLogger(__name__)


def resolve_document_symbols(context: AnalysisContext) -> List[types.DocumentSymbol]:
    """
    List every declaration line of a document.

    Unlike the symbol table, redeclarations are listed too: one entry per
    matching line. The range covers the whole line, the selection range the
    declared name.
    """
    document = context.document
    return [
        types.DocumentSymbol(
            name=declaration.name,
            kind=declaration.kind.to_lsp(),
            range=CoordinateTransformer.line_range(document, declaration.line),
            selection_range=CoordinateTransformer.span_to_range(
                document, declaration.line, declaration.start, declaration.end
            ),
        )
        for declaration in iter_declarations(context.lines)
    ]


def resolve_workspace_symbols(contexts: Iterable[AnalysisContext], query: str) -> List[types.WorkspaceSymbol]:
    """
    Search declarations across all open documents.

    Args:
        contexts: Analysis contexts of the open documents
        query: Case-insensitive substring; empty matches everything

    Returns:
        Matching symbols with their locations
    """
    needle = query.lower()
    results: List[types.WorkspaceSymbol] = []
    for context in contexts:
        for declaration in iter_declarations(context.lines):
            if needle not in declaration.name.lower():
                continue
            results.append(
                types.WorkspaceSymbol(
                    name=declaration.name,
                    kind=declaration.kind.to_lsp(),
                    location=types.Location(
                        uri=context.uri,
                        range=CoordinateTransformer.span_to_range(
                            context.document, declaration.line, declaration.start, declaration.end
                        ),
                    ),
                )
            )
    return results


def register_symbols(server: LanguageServer, analyzer: DocumentAnalyzer) -> None:
    """Register document and workspace symbols with the LSP server."""

    @server.feature(types.TEXT_DOCUMENT_DOCUMENT_SYMBOL)
    def document_symbols(
        ls: LanguageServer, params: types.DocumentSymbolParams
    ) -> Optional[List[types.DocumentSymbol]]:
        try:
            context = analyzer.get_context(params.text_document.uri)
            if context is None:
                return []
            return resolve_document_symbols(context)
        except Exception as e:
            logger.error(f"Error in document symbol handler: {e}")
            return []

    @server.feature(types.WORKSPACE_SYMBOL)
    def workspace_symbols(
        ls: LanguageServer, params: types.WorkspaceSymbolParams
    ) -> Optional[List[types.WorkspaceSymbol]]:
        logger.debug(f"Workspace symbol query '{params.query}'")
        try:
            return resolve_workspace_symbols(analyzer.contexts(), params.query)
        except Exception as e:
            logger.error(f"Error in workspace symbol handler: {e}")
            return []

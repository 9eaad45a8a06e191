"""Diagnostics publishing for the LSP server."""

import logging
from typing import List, Optional, Tuple

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from vintlang.lsp.analysis import DocumentAnalyzer

logger = logging.getLogger(__name__)


class DiagnosticsService:
    """
    Keeps the analysis of open documents current and publishes diagnostics.

    This service is the first subscriber of the document event coordinator:
    on open and change it hands the reconstructed full text to the analyzer,
    which re-indexes and re-diagnoses the document, then publishes the new
    diagnostic set. Closing a document clears its diagnostics in the client.
    """

    def __init__(self, analyzer: DocumentAnalyzer):
        self._analyzer = analyzer
        self._server: Optional[LanguageServer] = None

    def set_server(self, server: LanguageServer) -> None:
        """Set the server instance for reading documents and publishing diagnostics."""
        self._server = server

    def handle_document_open(self, params: types.DidOpenTextDocumentParams) -> None:
        self._sync_from_workspace(params.text_document.uri, params.text_document.version)

    def handle_document_change(self, params: types.DidChangeTextDocumentParams) -> None:
        self._sync_from_workspace(params.text_document.uri, params.text_document.version)

    def handle_document_close(self, params: types.DidCloseTextDocumentParams) -> None:
        uri = params.text_document.uri
        self._analyzer.close(uri)
        if self._server:
            self._server.text_document_publish_diagnostics(
                types.PublishDiagnosticsParams(uri=uri, diagnostics=[])
            )

    def _sync_from_workspace(self, uri: str, version: Optional[int]) -> None:
        if not self._server:
            logger.error("Server not set - cannot read document text")
            return
        # pygls has already applied incremental edits to its copy of the text
        document = self._server.workspace.get_text_document(uri)
        self.parse_document(uri, document.source, version or 0)
        self.publish_diagnostics(uri)

    def parse_document(self, document_uri: str, document_source: str, document_version: int) -> None:
        """
        Analyze a document and store its diagnostics.

        Args:
            document_uri: URI of the document
            document_source: Full text of the document
            document_version: Version of the document
        """
        try:
            self._analyzer.update(document_uri, document_source, document_version)
        except Exception as e:
            logger.error(f"Error analyzing document {document_uri}: {e}")

    def get_diagnostics(self, document_uri: str) -> Tuple[int, List[types.Diagnostic]]:
        """
        Get diagnostics for a document.

        Args:
            document_uri: URI of the document

        Returns:
            Tuple of (version, diagnostics); (0, []) for unknown documents
        """
        context = self._analyzer.get_context(document_uri)
        if context is None:
            return 0, []
        return context.version, list(context.diagnostics)

    def publish_diagnostics(self, document_uri: str) -> None:
        """Publish the current diagnostics of a document, replacing the previous set."""
        if not self._server:
            logger.error("Server not set - cannot publish diagnostics")
            return

        version, diagnostics = self.get_diagnostics(document_uri)
        logger.debug(f"Publishing {len(diagnostics)} diagnostics for {document_uri} v{version}")
        self._server.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(
                uri=document_uri,
                diagnostics=diagnostics,
                version=version,
            )
        )


def register_diagnostics(server: LanguageServer, analyzer: DocumentAnalyzer) -> DiagnosticsService:
    """
    Create the diagnostics service for a server.

    Document notifications are not registered here: the returned service is
    subscribed to the DocumentEventCoordinator, which owns didOpen, didChange
    and didClose.

    Args:
        server: The language server instance
        analyzer: Shared document analyzer

    Returns:
        The diagnostics service instance
    """
    service = DiagnosticsService(analyzer)
    service.set_server(server)
    logger.info("Diagnostics functionality registered successfully")
    return service

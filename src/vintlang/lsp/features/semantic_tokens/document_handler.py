"""Document event handlers for semantic tokens."""

import logging

from lsprotocol import types

from .semantic_tokens_classifier import SemanticTokensParser

logger = logging.getLogger(__name__)


class DocumentEventHandler:
    """
    Drops cached tokens when a document changes or closes.

    Tokens are recomputed lazily on the next semantic tokens request.
    """

    def __init__(self, parser: SemanticTokensParser):
        self._parser = parser

    def handle_document_open(self, params: types.DidOpenTextDocumentParams) -> None:
        self._invalidate(params.text_document.uri)

    def handle_document_change(self, params: types.DidChangeTextDocumentParams) -> None:
        self._invalidate(params.text_document.uri)

    def handle_document_close(self, params: types.DidCloseTextDocumentParams) -> None:
        self._invalidate(params.text_document.uri)

    def _invalidate(self, uri: str) -> None:
        try:
            self._parser.clear_tokens_for_uri(uri)
        except Exception as e:
            logger.error(f"Error clearing semantic tokens for {uri}: {e}")

"""Main semantic tokens functionality for the LSP server."""

import logging
from typing import Optional, Tuple

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from vintlang.lsp.analysis import AnalysisContext, DocumentAnalyzer

from .document_handler import DocumentEventHandler
from .position_calculator import PositionCalculator
from .semantic_tokens_classifier import SemanticTokensParser
from .semantic_tokens_config import SemanticTokensConfig

logger = logging.getLogger(__name__)

LEGEND = types.SemanticTokensLegend(
    token_types=SemanticTokensConfig.TOKEN_TYPES,
    token_modifiers=SemanticTokensConfig.TOKEN_MODIFIERS,
)


class SemanticTokensService:
    """Main service class for semantic tokens functionality."""

    def __init__(self, analyzer: DocumentAnalyzer):
        self._analyzer = analyzer
        self._parser = SemanticTokensParser()
        self._position_calculator = PositionCalculator()

    @property
    def parser(self) -> SemanticTokensParser:
        return self._parser

    def encode(self, context: AnalysisContext) -> types.SemanticTokens:
        """Delta-encode the tokens of a document."""
        tokens = self._parser.get_tokens(context)
        data = self._position_calculator.calculate_relative_positions(tokens, context.document)
        return types.SemanticTokens(data=data)

    def get_semantic_tokens_full(self, params: types.SemanticTokensParams) -> Optional[types.SemanticTokens]:
        """
        Return the semantic tokens for the entire document.

        Args:
            params: Semantic tokens parameters

        Returns:
            SemanticTokens object with token data, or None when the document is not open
        """
        logger.debug(f"Semantic tokens request received for {params.text_document.uri}")

        try:
            context = self._analyzer.get_context(params.text_document.uri)
            if context is None:
                return None

            result = self.encode(context)
            logger.debug(f"Returning semantic tokens with {len(result.data)} data points")
            return result

        except Exception as e:
            logger.error(f"Error generating semantic tokens for {params.text_document.uri}: {e}")
            return None


def register_semantic_tokens(
    server: LanguageServer, analyzer: DocumentAnalyzer
) -> Tuple[SemanticTokensService, DocumentEventHandler]:
    """
    Register semantic tokens functionality with the LSP server.

    Args:
        server: The language server instance
        analyzer: Document analyzer holding the open documents

    Returns:
        Tuple of (semantic tokens service, document event handler)
    """
    try:
        service = SemanticTokensService(analyzer)
        document_handler = DocumentEventHandler(service.parser)

        @server.feature(types.TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, LEGEND)
        def semantic_tokens_full(ls: LanguageServer, params: types.SemanticTokensParams):
            """Return the semantic tokens for the entire document."""
            return service.get_semantic_tokens_full(params)

        logger.info("Semantic tokens functionality registered successfully")
        return service, document_handler

    except Exception as e:
        logger.error(f"Error registering semantic tokens functionality: {e}")
        raise

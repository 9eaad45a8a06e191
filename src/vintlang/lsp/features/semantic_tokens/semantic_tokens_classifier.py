"""Semantic token records and the per-document token cache."""

import enum
import logging
from typing import Dict, List, Tuple

import attrs

from vintlang.lsp.analysis import AnalysisContext
from vintlang.lsp.utils.models import Document

logger = logging.getLogger(__name__)


class TokenModifier(enum.IntFlag):
    """Token modifiers, in the bit order of the legend."""

    declaration = enum.auto()
    readonly = enum.auto()
    defaultLibrary = enum.auto()


def _validate_non_negative(instance, attribute, value):
    """Validator for non-negative integer values."""
    if value < 0:
        raise ValueError(f"Token {attribute.name} must be non-negative")


def _validate_non_empty_text(instance, attribute, value):
    """Validator for non-empty text values."""
    if not value:
        raise ValueError("Token text cannot be empty")


@attrs.define
class Token:
    """A classified span on one line; offset is a Python column."""

    line: int = attrs.field(validator=_validate_non_negative)
    offset: int = attrs.field(validator=_validate_non_negative)
    text: str = attrs.field(validator=_validate_non_empty_text)
    tok_type: str = ""
    tok_modifiers: List[TokenModifier] = attrs.field(factory=list)


class SemanticTokensParser:
    """
    Classifies documents and caches their tokens per document version.

    A cached entry is reused only for the exact document snapshot it was built
    from; any new version replaces the snapshot and misses the cache.
    """

    def __init__(self):
        # Import here to avoid circular imports
        from .token_processor import TokenProcessor

        self._tokens: Dict[str, Tuple[Document, List[Token]]] = {}
        self._processor = TokenProcessor()

    @property
    def tokens(self) -> Dict[str, List[Token]]:
        """Cached tokens by URI (a copy)."""
        return {uri: tokens for uri, (_, tokens) in self._tokens.items()}

    def parse(self, context: AnalysisContext) -> List[Token]:
        """
        Classify a document and cache the result.

        Args:
            context: Analysis context of the document

        Returns:
            The tokens, sorted by line and offset
        """
        try:
            tokens = self._processor.process_lines(context.lines)
        except Exception as e:
            logger.error(f"Error parsing tokens for URI {context.uri}: {e}")
            tokens = []
        self._tokens[context.uri] = (context.document, tokens)
        logger.debug(f"Parsed {len(tokens)} tokens for URI: {context.uri}")
        return tokens

    def get_tokens(self, context: AnalysisContext) -> List[Token]:
        """Return cached tokens for the context's document version, parsing on a miss."""
        cached = self._tokens.get(context.uri)
        if cached is not None and cached[0] is context.document:
            return cached[1]
        return self.parse(context)

    def clear_tokens_for_uri(self, uri: str) -> None:
        self._tokens.pop(uri, None)
        logger.debug(f"Cleared tokens for URI: {uri}")

    def clear_all_tokens(self) -> None:
        self._tokens.clear()
        logger.debug("Cleared all tokens")

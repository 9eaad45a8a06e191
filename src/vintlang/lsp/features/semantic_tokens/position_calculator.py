"""Position calculation utilities for semantic tokens."""

import operator
from functools import reduce
from typing import List, Optional

from vintlang.lsp.utils.coordinate_transformer import CoordinateTransformer
from vintlang.lsp.utils.models import Document

from .semantic_tokens_classifier import Token
from .token_processor import TokenProcessor


class PositionCalculator:
    """Calculates relative positions for semantic tokens."""

    def __init__(self, processor: Optional[TokenProcessor] = None):
        self._processor = processor or TokenProcessor()

    def calculate_relative_positions(self, tokens: List[Token], document: Document) -> List[int]:
        """
        Calculate relative positions for tokens in LSP semantic tokens format.

        Offsets and lengths are converted to UTF-16 code units using the
        document lines.

        Args:
            tokens: Tokens sorted by line and offset
            document: The document the tokens were classified from

        Returns:
            List of integers in LSP semantic tokens format:
            [delta_line, delta_start, length, token_type, token_modifiers, ...]
        """
        data: List[int] = []
        prev_line = 0
        prev_offset = 0

        for token in tokens:
            text = document.line(token.line)
            start = CoordinateTransformer.column_to_utf16(text, token.offset)
            end = CoordinateTransformer.column_to_utf16(text, token.offset + len(token.text))

            rel_line = token.line - prev_line
            rel_offset = start - prev_offset if rel_line == 0 else start

            prev_line = token.line
            prev_offset = start

            data.extend(self._create_token_data(token, rel_line, rel_offset, end - start))

        return data

    def _create_token_data(self, token: Token, rel_line: int, rel_offset: int, length: int) -> List[int]:
        """Create the 5-element data array for a token."""
        token_type_idx = self._processor.get_token_type_index(token)
        token_modifiers = reduce(operator.or_, token.tok_modifiers, 0)

        return [
            rel_line,
            rel_offset,
            length,
            token_type_idx,
            int(token_modifiers),
        ]

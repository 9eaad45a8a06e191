"""Helpers shared by the feature resolvers."""

from dataclasses import dataclass
from typing import List, Optional

from lsprotocol import types

from vintlang.lsp.analysis import AnalysisContext
from vintlang.lsp.analysis.patterns import word_pattern, word_span_at
from vintlang.lsp.utils.coordinate_transformer import CoordinateTransformer


@dataclass(frozen=True)
class WordSpan:
    """An identifier-shaped word on one line, columns in Python indices."""
    word: str
    line: int
    start: int
    end: int

    def to_range(self, context: AnalysisContext) -> types.Range:
        return CoordinateTransformer.span_to_range(context.document, self.line, self.start, self.end)


def word_at_position(context: AnalysisContext, position: types.Position) -> Optional[WordSpan]:
    """
    Find the word under the cursor.

    Args:
        context: Analysis context of the document
        position: LSP cursor position

    Returns:
        The word and its span, or None when no identifier touches the cursor
    """
    column = CoordinateTransformer.document_position_to_column(context.document, position)
    if column is None:
        return None
    line = context.document.line(position.line)
    span = word_span_at(line, column)
    if span is None:
        return None
    start, end = span
    return WordSpan(line[start:end], position.line, start, end)


def find_occurrences(context: AnalysisContext, word: str) -> List[WordSpan]:
    """All whole-word occurrences of word, in document order."""
    pattern = word_pattern(word)
    occurrences: List[WordSpan] = []
    for number, line in enumerate(context.lines):
        for match in pattern.finditer(line):
            occurrences.append(WordSpan(word, number, match.start(), match.end()))
    return occurrences


def is_declaring_occurrence(context: AnalysisContext, occurrence: WordSpan) -> bool:
    """True when the occurrence is the declaring name of its symbol."""
    symbol = context.symbols.get(occurrence.word)
    return (
        symbol is not None
        and symbol.declaration_line == occurrence.line
        and symbol.declaration_character == occurrence.start
    )

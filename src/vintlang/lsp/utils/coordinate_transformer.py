"""
Coordinate transformation utilities for the VintLang LSP.

The analysis engine works with Python string columns while LSP positions count
UTF-16 code units. This module converts between the two and builds LSP ranges
from line/column spans.
"""

from typing import Optional

from lsprotocol import types

from .models import Document


class CoordinateTransformer:
    """Utility class for transforming coordinates between Python columns and LSP positions."""

    @staticmethod
    def column_to_utf16(line: str, column: int) -> int:
        """
        Convert a Python string column to a UTF-16 character offset.

        Args:
            line: Text of the line
            column: 0-based index into the Python string

        Returns:
            Number of UTF-16 code units before the column
        """
        column = max(0, min(column, len(line)))
        prefix = line[:column]
        if prefix.isascii():
            return column
        return len(prefix.encode("utf-16-le")) // 2

    @staticmethod
    def utf16_to_column(line: str, character: int) -> int:
        """
        Convert a UTF-16 character offset to a Python string column.

        This is the inverse operation of column_to_utf16. Offsets past the end
        of the line clamp to the line length.

        Args:
            line: Text of the line
            character: 0-based UTF-16 offset

        Returns:
            0-based index into the Python string
        """
        if line.isascii():
            return max(0, min(character, len(line)))

        units = 0
        for index, char in enumerate(line):
            if units >= character:
                return index
            units += 2 if ord(char) > 0xFFFF else 1
        return len(line)

    @classmethod
    def position(cls, document: Document, line: int, column: int) -> types.Position:
        """Build an LSP position from a line number and Python column."""
        return types.Position(line=line, character=cls.column_to_utf16(document.line(line), column))

    @classmethod
    def span_to_range(cls, document: Document, line: int, start: int, end: int) -> types.Range:
        """Build an LSP range for a single-line span given in Python columns."""
        text = document.line(line)
        return types.Range(
            start=types.Position(line=line, character=cls.column_to_utf16(text, start)),
            end=types.Position(line=line, character=cls.column_to_utf16(text, end)),
        )

    @classmethod
    def line_range(cls, document: Document, line: int) -> types.Range:
        """Range covering the whole text of a line."""
        return cls.span_to_range(document, line, 0, len(document.line(line)))

    @classmethod
    def document_position_to_column(
        cls, document: Document, position: types.Position
    ) -> Optional[int]:
        """
        Convert an LSP position to a Python column on its line.

        Returns:
            The column, or None when the line does not exist
        """
        if position.line < 0 or position.line >= len(document.lines):
            return None
        return cls.utf16_to_column(document.line(position.line), position.character)

    @staticmethod
    def is_position_in_range(position: types.Position, range_: types.Range) -> bool:
        """
        Check if a position falls within the given range (bounds included).

        Args:
            position: Position to check
            range_: Range to test against

        Returns:
            True if position is within the range, False otherwise
        """
        start, end = range_.start, range_.end
        if position.line < start.line or position.line > end.line:
            return False
        if position.line == start.line and position.character < start.character:
            return False
        if position.line == end.line and position.character > end.character:
            return False
        return True

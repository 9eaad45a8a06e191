"""
Data models for the VintLang language server.

This module defines the core data structures shared by the analysis engine and
the LSP features: documents, symbols and the diagnostic code catalog.
"""

import enum
from dataclasses import dataclass, field
from functools import cached_property
from typing import Dict, List

from lsprotocol import types


@dataclass(frozen=True)
class Document:
    """
    An open VintLang document.

    Documents are immutable: every change produces a new Document with a new
    version. The line split is computed once per instance.

    Attributes:
        uri: Document URI as sent by the client
        text: Full document text
        version: Client-side version number
    """
    uri: str
    text: str
    version: int = 0

    @cached_property
    def lines(self) -> List[str]:
        """Document lines without their line terminators."""
        return [line[:-1] if line.endswith("\r") else line for line in self.text.split("\n")]

    @property
    def line_ending(self) -> str:
        """Line terminator of the document: CRLF when it has any, otherwise LF."""
        return "\r\n" if "\r\n" in self.text else "\n"

    def line(self, number: int) -> str:
        """Return a line by number, or an empty string when out of range."""
        if 0 <= number < len(self.lines):
            return self.lines[number]
        return ""


class SymbolKind(str, enum.Enum):
    """Kinds of declarations tracked by the symbol indexer."""

    FUNCTION = "function"
    VARIABLE = "variable"
    IMPORT = "import"

    def to_lsp(self) -> types.SymbolKind:
        """Map to the LSP symbol kind used in symbol lists."""
        return _LSP_SYMBOL_KINDS[self]


_LSP_SYMBOL_KINDS = {
    SymbolKind.FUNCTION: types.SymbolKind.Function,
    SymbolKind.VARIABLE: types.SymbolKind.Variable,
    SymbolKind.IMPORT: types.SymbolKind.Module,
}


@dataclass
class Symbol:
    """
    A declaration found in a document.

    Symbols are flat and unscoped: one Symbol per distinct name per document,
    and the first declaration wins.

    Attributes:
        name: Declared name
        kind: Function, variable or import
        declaration_line: 0-based line of the first declaration
        declaration_character: 0-based column of the name on that line
        scope: Always "global"
        references: Line numbers of every use, in document order
        used: True once at least one reference was recorded
    """
    name: str
    kind: SymbolKind
    declaration_line: int
    declaration_character: int = 0
    scope: str = "global"
    references: List[int] = field(default_factory=list)
    used: bool = False

    def add_reference(self, line: int) -> None:
        self.references.append(line)
        self.used = True


SymbolTable = Dict[str, Symbol]


class DiagnosticCode:
    """
    Stable codes of the diagnostics reported by the diagnostic engine.

    The code travels with each diagnostic so that code actions can offer the
    matching quick fix.
    """

    UNMATCHED_BRACE = "unmatched-brace"
    UNMATCHED_PAREN = "unmatched-paren"
    INVALID_FUNCTION_SYNTAX = "invalid-function-syntax"
    MISSING_LET = "missing-let"
    UNUSED_SYMBOL = "unused-symbol"

    SOURCE = "vintlang"

    _SEVERITIES = {
        UNMATCHED_BRACE: types.DiagnosticSeverity.Error,
        UNMATCHED_PAREN: types.DiagnosticSeverity.Warning,
        INVALID_FUNCTION_SYNTAX: types.DiagnosticSeverity.Error,
        MISSING_LET: types.DiagnosticSeverity.Warning,
        UNUSED_SYMBOL: types.DiagnosticSeverity.Hint,
    }

    @classmethod
    def get_severity(cls, code: str) -> types.DiagnosticSeverity:
        """
        Get the diagnostic severity for a code.

        Args:
            code: One of the diagnostic codes

        Returns:
            The severity; unknown codes are reported as errors
        """
        return cls._SEVERITIES.get(code, types.DiagnosticSeverity.Error)

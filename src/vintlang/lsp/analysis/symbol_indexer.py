"""Symbol indexer: rebuilds the flat symbol table of a document."""

import logging
from typing import Sequence

from vintlang.lsp.utils.models import Document, Symbol, SymbolTable

from .language_tables import is_reserved
from .patterns import IDENTIFIER, is_code_line, iter_declarations

logger = logging.getLogger(__name__)


class SymbolIndexer:
    """
    Builds a SymbolTable from document text in two line-oriented passes.

    1. Declaration pass: function, variable and import declarations are
       collected; the first declaration of a name wins.
    2. Reference pass: every identifier that is neither keyword nor builtin
       and names a known symbol is recorded as a reference. The declaring
       occurrence itself is not a reference.

    Blank lines and lines starting with a comment marker are skipped in both
    passes. There is no scoping: the table is flat.
    """

    def index(self, document: Document) -> SymbolTable:
        """
        Index a document.

        Args:
            document: The document to index

        Returns:
            A freshly built symbol table, in declaration order
        """
        symbols = self.index_lines(document.lines)
        logger.debug(f"Indexed {len(symbols)} symbols for {document.uri}")
        return symbols

    def index_lines(self, lines: Sequence[str]) -> SymbolTable:
        symbols: SymbolTable = {}
        self._collect_declarations(lines, symbols)
        self._collect_references(lines, symbols)
        return symbols

    def _collect_declarations(self, lines: Sequence[str], symbols: SymbolTable) -> None:
        for declaration in iter_declarations(lines):
            if declaration.name in symbols:
                continue
            symbols[declaration.name] = Symbol(
                name=declaration.name,
                kind=declaration.kind,
                declaration_line=declaration.line,
                declaration_character=declaration.start,
            )

    def _collect_references(self, lines: Sequence[str], symbols: SymbolTable) -> None:
        if not symbols:
            return

        for number, line in enumerate(lines):
            if not is_code_line(line):
                continue
            for match in IDENTIFIER.finditer(line):
                word = match.group(0)
                if is_reserved(word):
                    continue
                symbol = symbols.get(word)
                if symbol is None:
                    continue
                if number == symbol.declaration_line and match.start() == symbol.declaration_character:
                    continue
                symbol.add_reference(number)

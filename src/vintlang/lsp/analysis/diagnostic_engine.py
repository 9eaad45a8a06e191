"""Heuristic per-line diagnostics for VintLang documents."""

import logging
import re
from typing import List, Optional

from lsprotocol import types

from vintlang.lsp.utils.coordinate_transformer import CoordinateTransformer
from vintlang.lsp.utils.models import DiagnosticCode, Document, SymbolKind, SymbolTable

from .language_tables import KEYWORD_SET
from .patterns import FUNC_KEYWORD, FUNCTION_DECLARATION, LET_KEYWORD, is_code_line, leading_indent

logger = logging.getLogger(__name__)

ASSIGNMENT = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)\s*=(?!=)\s*(.+)$")

DEFAULT_MAX_PROBLEMS = 1000


def _first_unmatched_brace(line: str) -> int:
    """Column of the first `}` with no `{` before it to close."""
    depth = 0
    for column, char in enumerate(line):
        if char == "{":
            depth += 1
        elif char == "}":
            if depth == 0:
                return column
            depth -= 1
    return leading_indent(line)


class DiagnosticEngine:
    """
    Produces the diagnostic list of a document.

    Line rules are independent and cumulative; a line may yield several
    diagnostics. Unused-symbol hints are appended after all line diagnostics.
    The output is a pure function of the document text and its symbol table.
    """

    def __init__(self, max_problems: int = DEFAULT_MAX_PROBLEMS):
        self.max_problems = max_problems

    def diagnose(self, document: Document, symbols: SymbolTable) -> List[types.Diagnostic]:
        """
        Compute diagnostics for a document.

        Args:
            document: The document to check
            symbols: The symbol table built from the same text

        Returns:
            Diagnostics in line order followed by unused-symbol hints, capped
            at max_problems
        """
        diagnostics: List[types.Diagnostic] = []

        for number, line in enumerate(document.lines):
            if not is_code_line(line):
                continue
            diagnostics.extend(self._check_line(document, number, line, symbols))

        diagnostics.extend(self._check_unused(document, symbols))

        if len(diagnostics) > self.max_problems:
            logger.debug(
                f"Truncating {len(diagnostics)} diagnostics to {self.max_problems} for {document.uri}"
            )
            diagnostics = diagnostics[: self.max_problems]
        return diagnostics

    def _check_line(
        self, document: Document, number: int, line: str, symbols: SymbolTable
    ) -> List[types.Diagnostic]:
        found: List[types.Diagnostic] = []
        indent = leading_indent(line)
        end = len(line.rstrip())

        if line.count("}") > line.count("{"):
            brace = _first_unmatched_brace(line)
            found.append(
                self._make(
                    document, number, brace, brace + 1,
                    DiagnosticCode.UNMATCHED_BRACE,
                    "Unmatched closing brace '}'",
                )
            )

        if line.count("(") != line.count(")") and "{" not in line:
            found.append(
                self._make(
                    document, number, indent, end,
                    DiagnosticCode.UNMATCHED_PAREN,
                    "Unmatched parenthesis",
                )
            )

        if FUNC_KEYWORD.search(line) and not FUNCTION_DECLARATION.search(line):
            found.append(
                self._make(
                    document, number, indent, end,
                    DiagnosticCode.INVALID_FUNCTION_SYNTAX,
                    "Function should be declared as 'let name = func(params) { ... }'",
                )
            )

        assignment = ASSIGNMENT.match(line.strip())
        if assignment and not LET_KEYWORD.search(line):
            name = assignment.group(1)
            if name not in KEYWORD_SET and name not in symbols:
                found.append(
                    self._make(
                        document, number, indent, indent + len(name),
                        DiagnosticCode.MISSING_LET,
                        f"Consider using 'let' to declare variable '{name}'",
                    )
                )

        return found

    def _check_unused(self, document: Document, symbols: SymbolTable) -> List[types.Diagnostic]:
        found: List[types.Diagnostic] = []
        for symbol in symbols.values():
            if symbol.kind == SymbolKind.IMPORT or symbol.references:
                continue
            found.append(
                self._make(
                    document,
                    symbol.declaration_line,
                    symbol.declaration_character,
                    symbol.declaration_character + len(symbol.name),
                    DiagnosticCode.UNUSED_SYMBOL,
                    f"'{symbol.name}' is declared but never used",
                    tags=[types.DiagnosticTag.Unnecessary],
                )
            )
        return found

    @staticmethod
    def _make(
        document: Document,
        line: int,
        start: int,
        end: int,
        code: str,
        message: str,
        tags: Optional[List[types.DiagnosticTag]] = None,
    ) -> types.Diagnostic:
        return types.Diagnostic(
            range=CoordinateTransformer.span_to_range(document, line, start, end),
            message=message,
            severity=DiagnosticCode.get_severity(code),
            code=code,
            source=DiagnosticCode.SOURCE,
            tags=tags,
        )

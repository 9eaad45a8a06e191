"""Brace-depth document formatting."""

import logging
from typing import List, Optional, Sequence

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from vintlang.lsp.analysis import AnalysisContext, DocumentAnalyzer
from vintlang.lsp.utils.coordinate_transformer import CoordinateTransformer

logger = logging.getLogger(__name__)

INDENT = "    "


def format_lines(lines: Sequence[str]) -> List[str]:
    """
    Re-indent lines by brace depth.

    Depth drops by one before a trimmed line starting with ``}`` (never below
    zero) and grows by one after a line ending with ``{``. Blank lines are
    emitted empty. Applying this to its own output changes nothing.
    """
    formatted: List[str] = []
    depth = 0
    for line in lines:
        trimmed = line.strip()
        if trimmed.startswith("}"):
            depth = max(0, depth - 1)
        formatted.append(INDENT * depth + trimmed if trimmed else "")
        if trimmed.endswith("{"):
            depth += 1
    return formatted


def resolve_formatting(context: AnalysisContext) -> List[types.TextEdit]:
    """
    Format the whole document.

    Returns:
        A single edit replacing the whole text, or no edit when the document is
        already formatted
    """
    lines = context.lines
    formatted = context.document.line_ending.join(format_lines(lines))
    if formatted == context.document.text:
        return []

    last = len(lines) - 1
    return [
        types.TextEdit(
            range=types.Range(
                start=types.Position(line=0, character=0),
                end=CoordinateTransformer.position(context.document, last, len(lines[last])),
            ),
            new_text=formatted,
        )
    ]


def resolve_range_formatting(context: AnalysisContext, range_: types.Range) -> List[types.TextEdit]:
    """
    Format the lines touched by a range.

    Indentation depth is still derived from the whole document, so the lines
    come out exactly as whole-document formatting would produce them.
    """
    lines = context.lines
    start = max(0, range_.start.line)
    end = min(range_.end.line, len(lines) - 1)
    if start > end:
        return []

    formatted = format_lines(lines)[start:end + 1]
    if formatted == list(lines[start:end + 1]):
        return []

    return [
        types.TextEdit(
            range=types.Range(
                start=types.Position(line=start, character=0),
                end=CoordinateTransformer.position(context.document, end, len(lines[end])),
            ),
            new_text=context.document.line_ending.join(formatted),
        )
    ]


def register_formatting(server: LanguageServer, analyzer: DocumentAnalyzer) -> None:
    """Register document and range formatting with the LSP server."""

    @server.feature(types.TEXT_DOCUMENT_FORMATTING)
    def formatting(ls: LanguageServer, params: types.DocumentFormattingParams) -> Optional[List[types.TextEdit]]:
        try:
            context = analyzer.get_context(params.text_document.uri)
            if context is None:
                return []
            return resolve_formatting(context)
        except Exception as e:
            logger.error(f"Error in formatting handler: {e}")
            return []

    @server.feature(types.TEXT_DOCUMENT_RANGE_FORMATTING)
    def range_formatting(
        ls: LanguageServer, params: types.DocumentRangeFormattingParams
    ) -> Optional[List[types.TextEdit]]:
        try:
            context = analyzer.get_context(params.text_document.uri)
            if context is None:
                return []
            return resolve_range_formatting(context, params.range)
        except Exception as e:
            logger.error(f"Error in range formatting handler: {e}")
            return []

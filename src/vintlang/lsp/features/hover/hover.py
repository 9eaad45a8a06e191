"""Hover documentation and signature help."""

import logging
from typing import Optional, Tuple

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from vintlang.lsp.analysis import AnalysisContext, DocumentAnalyzer
from vintlang.lsp.analysis.language_tables import (
    BUILTIN_SIGNATURES,
    HOVER_DOCUMENTATION,
    signature_label,
)
from vintlang.lsp.analysis.patterns import IDENTIFIER_CHARS
from vintlang.lsp.utils.coordinate_transformer import CoordinateTransformer

from ..common import word_at_position

logger = logging.getLogger(__name__)


def resolve_hover(context: AnalysisContext, position: types.Position) -> Optional[types.Hover]:
    """
    Look up hover documentation for the word under the cursor.

    Returns:
        Markdown hover covering the word, or None when the word has no entry
    """
    word = word_at_position(context, position)
    if word is None:
        return None

    documentation = HOVER_DOCUMENTATION.get(word.word)
    if documentation is None:
        return None

    return types.Hover(
        contents=types.MarkupContent(kind=types.MarkupKind.Markdown, value=documentation),
        range=word.to_range(context),
    )


def find_enclosing_call(line: str, column: int) -> Optional[Tuple[str, int]]:
    """
    Find the call whose argument list contains the column.

    Scans left from the column for the innermost ``(`` that is not closed
    before the cursor and reads the identifier right before it.

    Args:
        line: Text of the cursor line
        column: Python column of the cursor

    Returns:
        (call name, column of the open parenthesis), or None
    """
    depth = 0
    index = min(column, len(line)) - 1
    while index >= 0:
        char = line[index]
        if char == ")":
            depth += 1
        elif char == "(":
            if depth == 0:
                break
            depth -= 1
        index -= 1
    else:
        return None

    end = index
    while end > 0 and line[end - 1] == " ":
        end -= 1
    start = end
    while start > 0 and IDENTIFIER_CHARS.match(line[start - 1]):
        start -= 1
    if start == end:
        return None
    return line[start:end], index


def resolve_signature_help(
    context: AnalysisContext, position: types.Position
) -> Optional[types.SignatureHelp]:
    """
    Describe the builtin being called at the cursor.

    The active parameter is the number of commas between the open parenthesis
    and the cursor. Commas inside nested calls or strings are counted too.
    """
    column = CoordinateTransformer.document_position_to_column(context.document, position)
    if column is None:
        return None
    line = context.document.line(position.line)

    call = find_enclosing_call(line, column)
    if call is None:
        return None
    name, paren = call

    parameters = BUILTIN_SIGNATURES.get(name)
    if parameters is None:
        return None

    active_parameter = line[paren + 1:column].count(",")
    signature = types.SignatureInformation(
        label=signature_label(name),
        documentation=_signature_documentation(name),
        parameters=[types.ParameterInformation(label=parameter) for parameter in parameters],
    )
    return types.SignatureHelp(
        signatures=[signature],
        active_signature=0,
        active_parameter=active_parameter,
    )


def _signature_documentation(name: str) -> Optional[types.MarkupContent]:
    documentation = HOVER_DOCUMENTATION.get(name)
    if documentation is None:
        return None
    return types.MarkupContent(kind=types.MarkupKind.Markdown, value=documentation)


def register_hover(server: LanguageServer, analyzer: DocumentAnalyzer) -> None:
    """Register hover and signature help with the LSP server."""

    @server.feature(types.TEXT_DOCUMENT_HOVER)
    def hover(ls: LanguageServer, params: types.HoverParams) -> Optional[types.Hover]:
        logger.debug(f"Hover request for {params.text_document.uri} at {params.position}")
        try:
            context = analyzer.get_context(params.text_document.uri)
            if context is None:
                return None
            return resolve_hover(context, params.position)
        except Exception as e:
            logger.error(f"Error in hover handler: {e}")
            return None

    @server.feature(
        types.TEXT_DOCUMENT_SIGNATURE_HELP,
        types.SignatureHelpOptions(trigger_characters=["(", ","]),
    )
    def signature_help(ls: LanguageServer, params: types.SignatureHelpParams) -> Optional[types.SignatureHelp]:
        try:
            context = analyzer.get_context(params.text_document.uri)
            if context is None:
                return None
            return resolve_signature_help(context, params.position)
        except Exception as e:
            logger.error(f"Error in signature help handler: {e}")
            return None

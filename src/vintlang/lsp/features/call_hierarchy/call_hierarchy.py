"""
Call hierarchy for VintLang functions.

Functions are ``let NAME = func`` declarations. Callers and callees are found
by scanning for ``NAME(`` call syntax; a function body runs from its
declaration line to the line where its brace depth returns to zero.
"""

import logging
from typing import Dict, List, Optional, Tuple

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from vintlang.lsp.analysis import AnalysisContext, DocumentAnalyzer
from vintlang.lsp.analysis.language_tables import is_reserved
from vintlang.lsp.analysis.patterns import (
    CALL,
    call_pattern,
    find_block_end,
    find_function_declaration,
    iter_declarations,
)
from vintlang.lsp.utils.coordinate_transformer import CoordinateTransformer
from vintlang.lsp.utils.models import SymbolKind

from ..common import word_at_position

logger = logging.getLogger(__name__)

GLOBAL_CALLER = "<global>"


def function_item(context: AnalysisContext, name: str) -> Optional[types.CallHierarchyItem]:
    """Build the hierarchy item of the first function declared as name."""
    found = find_function_declaration(context.lines, name)
    if found is None:
        return None
    line, match = found
    return types.CallHierarchyItem(
        name=name,
        kind=types.SymbolKind.Function,
        uri=context.uri,
        range=CoordinateTransformer.line_range(context.document, line),
        selection_range=CoordinateTransformer.span_to_range(context.document, line, match.start(1), match.end(1)),
        detail=context.lines[line].strip(),
    )


def global_item(context: AnalysisContext) -> types.CallHierarchyItem:
    """The synthetic caller for calls made outside any function body."""
    last = max(len(context.lines) - 1, 0)
    return types.CallHierarchyItem(
        name=GLOBAL_CALLER,
        kind=types.SymbolKind.File,
        uri=context.uri,
        range=types.Range(
            start=types.Position(line=0, character=0),
            end=CoordinateTransformer.position(context.document, last, len(context.document.line(last))),
        ),
        selection_range=types.Range(
            start=types.Position(line=0, character=0),
            end=types.Position(line=0, character=0),
        ),
    )


def prepare_call_hierarchy(
    context: AnalysisContext, position: types.Position
) -> Optional[List[types.CallHierarchyItem]]:
    """Resolve the word under the cursor to its function declaration."""
    word = word_at_position(context, position)
    if word is None:
        return None
    item = function_item(context, word.word)
    return [item] if item is not None else None


def _function_lines(context: AnalysisContext) -> List[Tuple[int, str]]:
    return [
        (declaration.line, declaration.name)
        for declaration in iter_declarations(context.lines)
        if declaration.kind == SymbolKind.FUNCTION
    ]


def _caller_of(context: AnalysisContext, functions: List[Tuple[int, str]], line: int) -> Optional[str]:
    """
    Name of the function a call on line belongs to.

    The nearest function declared on or before the line wins. Once that
    function's body has closed, the call belongs to the global caller; with no
    declaration before it at all, the call belongs to nobody.
    """
    nearest: Optional[Tuple[int, str]] = None
    for declared, name in functions:
        if declared > line:
            break
        nearest = (declared, name)
    if nearest is None:
        return None
    declared, name = nearest
    if line > find_block_end(context.lines, declared):
        return GLOBAL_CALLER
    return name


def incoming_calls(context: AnalysisContext, item: types.CallHierarchyItem) -> List[types.CallHierarchyIncomingCall]:
    """
    Group the calls of item's function by calling function.

    Returns:
        One entry per caller, with the range of every call it makes, callers
        in order of first call
    """
    pattern = call_pattern(item.name)
    functions = _function_lines(context)
    callers: Dict[str, List[types.Range]] = {}

    for number, line in enumerate(context.lines):
        for match in pattern.finditer(line):
            caller = _caller_of(context, functions, number)
            if caller is None:
                continue
            callers.setdefault(caller, []).append(
                CoordinateTransformer.span_to_range(
                    context.document, number, match.start(), match.start() + len(item.name)
                )
            )

    calls: List[types.CallHierarchyIncomingCall] = []
    for caller, ranges in callers.items():
        caller_item = global_item(context) if caller == GLOBAL_CALLER else function_item(context, caller)
        if caller_item is None:
            continue
        calls.append(types.CallHierarchyIncomingCall(from_=caller_item, from_ranges=ranges))
    return calls


def outgoing_calls(context: AnalysisContext, item: types.CallHierarchyItem) -> List[types.CallHierarchyOutgoingCall]:
    """
    Group the calls made inside item's function body by callee.

    Only calls to functions declared in the document count; keywords and
    builtins are skipped.
    """
    found = find_function_declaration(context.lines, item.name)
    if found is None:
        return []
    start, _ = found
    end = find_block_end(context.lines, start)

    callees: Dict[str, List[types.Range]] = {}
    for number in range(start, end + 1):
        for match in CALL.finditer(context.lines[number]):
            name = match.group(1)
            if is_reserved(name):
                continue
            callees.setdefault(name, []).append(
                CoordinateTransformer.span_to_range(context.document, number, match.start(1), match.end(1))
            )

    calls: List[types.CallHierarchyOutgoingCall] = []
    for name, ranges in callees.items():
        callee = function_item(context, name)
        if callee is None:
            continue
        calls.append(types.CallHierarchyOutgoingCall(to=callee, from_ranges=ranges))
    return calls


def register_call_hierarchy(server: LanguageServer, analyzer: DocumentAnalyzer) -> None:
    """Register call hierarchy requests with the LSP server."""

    @server.feature(types.TEXT_DOCUMENT_PREPARE_CALL_HIERARCHY)
    def prepare(
        ls: LanguageServer, params: types.CallHierarchyPrepareParams
    ) -> Optional[List[types.CallHierarchyItem]]:
        try:
            context = analyzer.get_context(params.text_document.uri)
            if context is None:
                return None
            return prepare_call_hierarchy(context, params.position)
        except Exception as e:
            logger.error(f"Error in prepare call hierarchy handler: {e}")
            return None

    @server.feature(types.CALL_HIERARCHY_INCOMING_CALLS)
    def incoming(
        ls: LanguageServer, params: types.CallHierarchyIncomingCallsParams
    ) -> Optional[List[types.CallHierarchyIncomingCall]]:
        try:
            context = analyzer.get_context(params.item.uri)
            if context is None:
                return []
            return incoming_calls(context, params.item)
        except Exception as e:
            logger.error(f"Error in incoming calls handler: {e}")
            return []

    @server.feature(types.CALL_HIERARCHY_OUTGOING_CALLS)
    def outgoing(
        ls: LanguageServer, params: types.CallHierarchyOutgoingCallsParams
    ) -> Optional[List[types.CallHierarchyOutgoingCall]]:
        try:
            context = analyzer.get_context(params.item.uri)
            if context is None:
                return []
            return outgoing_calls(context, params.item)
        except Exception as e:
            logger.error(f"Error in outgoing calls handler: {e}")
            return []

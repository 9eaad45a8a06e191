"""
Navigation features: definition, references, highlights and rename.

All lookups are textual: a word's declaration is the first line matching
``let word =`` or ``import word``, and its occurrences are every whole-word
match in the document. There is no scoping, so shadowed names resolve to the
first declaration.
"""

import logging
from typing import List, Optional

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from vintlang.lsp.analysis import AnalysisContext, DocumentAnalyzer
from vintlang.lsp.analysis.language_tables import is_reserved
from vintlang.lsp.analysis.patterns import VALID_IDENTIFIER, declaration_pattern
from vintlang.lsp.utils.coordinate_transformer import CoordinateTransformer

from ..common import find_occurrences, is_declaring_occurrence, word_at_position

logger = logging.getLogger(__name__)


def resolve_definition(context: AnalysisContext, position: types.Position) -> Optional[types.Location]:
    """
    Find the declaration of the word under the cursor.

    Returns:
        Location of the declared name, or None
    """
    word = word_at_position(context, position)
    if word is None:
        return None

    pattern = declaration_pattern(word.word)
    for number, line in enumerate(context.lines):
        match = pattern.search(line)
        if match is None:
            continue
        group = 1 if match.group(1) is not None else 2
        return types.Location(
            uri=context.uri,
            range=CoordinateTransformer.span_to_range(
                context.document, number, match.start(group), match.end(group)
            ),
        )
    return None


def resolve_references(
    context: AnalysisContext, position: types.Position, include_declaration: bool = True
) -> List[types.Location]:
    """
    Find every occurrence of the word under the cursor.

    Args:
        context: Analysis context of the document
        position: Cursor position
        include_declaration: When False, the declaring occurrence is left out

    Returns:
        Locations in document order
    """
    word = word_at_position(context, position)
    if word is None:
        return []

    return [
        types.Location(uri=context.uri, range=occurrence.to_range(context))
        for occurrence in find_occurrences(context, word.word)
        if include_declaration or not is_declaring_occurrence(context, occurrence)
    ]


def resolve_document_highlights(
    context: AnalysisContext, position: types.Position
) -> List[types.DocumentHighlight]:
    """Highlight every occurrence of the word; the declaring one is a write."""
    word = word_at_position(context, position)
    if word is None:
        return []

    return [
        types.DocumentHighlight(
            range=occurrence.to_range(context),
            kind=(
                types.DocumentHighlightKind.Write
                if is_declaring_occurrence(context, occurrence)
                else types.DocumentHighlightKind.Read
            ),
        )
        for occurrence in find_occurrences(context, word.word)
    ]


def resolve_prepare_rename(context: AnalysisContext, position: types.Position) -> Optional[types.Range]:
    """
    Check that the word under the cursor can be renamed.

    Keywords and builtins cannot be renamed.

    Returns:
        Range of the word, or None when rename is refused
    """
    word = word_at_position(context, position)
    if word is None or is_reserved(word.word):
        return None
    return word.to_range(context)


def resolve_rename(
    context: AnalysisContext, position: types.Position, new_name: str
) -> Optional[types.WorkspaceEdit]:
    """
    Rename every occurrence of the word under the cursor.

    Returns:
        One text edit per occurrence, or None when the word is reserved or
        new_name is not an identifier
    """
    word = word_at_position(context, position)
    if word is None or is_reserved(word.word):
        return None
    if not VALID_IDENTIFIER.match(new_name) or is_reserved(new_name):
        logger.debug(f"Refusing rename of '{word.word}' to invalid name '{new_name}'")
        return None

    edits = [
        types.TextEdit(range=occurrence.to_range(context), new_text=new_name)
        for occurrence in find_occurrences(context, word.word)
    ]
    return types.WorkspaceEdit(changes={context.uri: edits})


def register_navigation(server: LanguageServer, analyzer: DocumentAnalyzer) -> None:
    """Register definition, references, highlight and rename with the LSP server."""

    @server.feature(types.TEXT_DOCUMENT_DEFINITION)
    def definition(ls: LanguageServer, params: types.DefinitionParams) -> Optional[types.Location]:
        try:
            context = analyzer.get_context(params.text_document.uri)
            if context is None:
                return None
            return resolve_definition(context, params.position)
        except Exception as e:
            logger.error(f"Error in definition handler: {e}")
            return None

    @server.feature(types.TEXT_DOCUMENT_REFERENCES)
    def references(ls: LanguageServer, params: types.ReferenceParams) -> Optional[List[types.Location]]:
        try:
            context = analyzer.get_context(params.text_document.uri)
            if context is None:
                return None
            return resolve_references(context, params.position, params.context.include_declaration)
        except Exception as e:
            logger.error(f"Error in references handler: {e}")
            return None

    @server.feature(types.TEXT_DOCUMENT_DOCUMENT_HIGHLIGHT)
    def document_highlight(
        ls: LanguageServer, params: types.DocumentHighlightParams
    ) -> Optional[List[types.DocumentHighlight]]:
        try:
            context = analyzer.get_context(params.text_document.uri)
            if context is None:
                return None
            return resolve_document_highlights(context, params.position)
        except Exception as e:
            logger.error(f"Error in document highlight handler: {e}")
            return None

    @server.feature(types.TEXT_DOCUMENT_PREPARE_RENAME)
    def prepare_rename(ls: LanguageServer, params: types.PrepareRenameParams) -> Optional[types.Range]:
        try:
            context = analyzer.get_context(params.text_document.uri)
            if context is None:
                return None
            return resolve_prepare_rename(context, params.position)
        except Exception as e:
            logger.error(f"Error in prepare rename handler: {e}")
            return None

    @server.feature(types.TEXT_DOCUMENT_RENAME)
    def rename(ls: LanguageServer, params: types.RenameParams) -> Optional[types.WorkspaceEdit]:
        try:
            context = analyzer.get_context(params.text_document.uri)
            if context is None:
                return None
            return resolve_rename(context, params.position, params.new_name)
        except Exception as e:
            logger.error(f"Error in rename handler: {e}")
            return None

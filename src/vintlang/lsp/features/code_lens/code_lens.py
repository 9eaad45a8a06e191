"""Reference-count code lenses over function declarations."""

import logging
from typing import List, Optional

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from vintlang.lsp.analysis import AnalysisContext, DocumentAnalyzer
from vintlang.lsp.analysis.patterns import call_pattern, iter_declarations
from vintlang.lsp.utils.coordinate_transformer import CoordinateTransformer
from vintlang.lsp.utils.models import SymbolKind

logger = logging.getLogger(__name__)

SHOW_REFERENCES_COMMAND = "vintlang.showReferences"


def reference_title(count: int) -> str:
    return f"{count} reference" if count == 1 else f"{count} references"


def count_call_lines(context: AnalysisContext, name: str, declaration_line: int) -> int:
    """Number of lines other than the declaration line that call name."""
    pattern = call_pattern(name)
    return sum(
        1
        for number, line in enumerate(context.lines)
        if number != declaration_line and pattern.search(line)
    )


def resolve_code_lenses(context: AnalysisContext) -> List[types.CodeLens]:
    """One lens per function declaration line, titled with its call count."""
    lenses: List[types.CodeLens] = []
    for declaration in iter_declarations(context.lines):
        if declaration.kind != SymbolKind.FUNCTION:
            continue
        count = count_call_lines(context, declaration.name, declaration.line)
        position = CoordinateTransformer.position(context.document, declaration.line, declaration.start)
        lenses.append(
            types.CodeLens(
                range=CoordinateTransformer.span_to_range(
                    context.document, declaration.line, declaration.start, declaration.end
                ),
                command=types.Command(
                    title=reference_title(count),
                    command=SHOW_REFERENCES_COMMAND,
                    arguments=[context.uri, {"line": position.line, "character": position.character}],
                ),
            )
        )
    return lenses


def register_code_lens(server: LanguageServer, analyzer: DocumentAnalyzer) -> None:
    """Register code lenses with the LSP server."""

    @server.feature(types.TEXT_DOCUMENT_CODE_LENS, types.CodeLensOptions(resolve_provider=False))
    def code_lens(ls: LanguageServer, params: types.CodeLensParams) -> Optional[List[types.CodeLens]]:
        try:
            context = analyzer.get_context(params.text_document.uri)
            if context is None:
                return []
            return resolve_code_lenses(context)
        except Exception as e:
            logger.error(f"Error in code lens handler: {e}")
            return []

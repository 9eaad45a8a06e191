"""Quick fixes for VintLang diagnostics."""

import logging
from typing import List, Optional

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from vintlang.lsp.analysis import DocumentAnalyzer
from vintlang.lsp.analysis.language_tables import DECLARATION_KEYWORD
from vintlang.lsp.utils.models import DiagnosticCode

logger = logging.getLogger(__name__)

OPEN_DOCUMENTATION_COMMAND = "vintlang.openDocumentation"


def resolve_code_actions(uri: str, diagnostics: List[types.Diagnostic]) -> List[types.CodeAction]:
    """
    Build quick fixes for the diagnostics sent with a code action request.

    - missing-let: insert the declaration keyword before the assigned name
    - unused-symbol: delete the declaration line
    - invalid-function-syntax: open the function documentation (no edit)

    Args:
        uri: URI of the document
        diagnostics: Diagnostics from the request context

    Returns:
        One code action per fixable diagnostic
    """
    actions: List[types.CodeAction] = []
    for diagnostic in diagnostics:
        if diagnostic.code == DiagnosticCode.MISSING_LET:
            start = diagnostic.range.start
            actions.append(
                types.CodeAction(
                    title=f"Add '{DECLARATION_KEYWORD}' declaration",
                    kind=types.CodeActionKind.QuickFix,
                    diagnostics=[diagnostic],
                    is_preferred=True,
                    edit=_single_edit(
                        uri,
                        types.TextEdit(
                            range=types.Range(start=start, end=start),
                            new_text=f"{DECLARATION_KEYWORD} ",
                        ),
                    ),
                )
            )
        elif diagnostic.code == DiagnosticCode.UNUSED_SYMBOL:
            line = diagnostic.range.start.line
            actions.append(
                types.CodeAction(
                    title="Remove unused declaration",
                    kind=types.CodeActionKind.QuickFix,
                    diagnostics=[diagnostic],
                    edit=_single_edit(
                        uri,
                        types.TextEdit(
                            range=types.Range(
                                start=types.Position(line=line, character=0),
                                end=types.Position(line=line + 1, character=0),
                            ),
                            new_text="",
                        ),
                    ),
                )
            )
        elif diagnostic.code == DiagnosticCode.INVALID_FUNCTION_SYNTAX:
            actions.append(
                types.CodeAction(
                    title="Open VintLang function documentation",
                    kind=types.CodeActionKind.QuickFix,
                    diagnostics=[diagnostic],
                    command=types.Command(
                        title="Open VintLang function documentation",
                        command=OPEN_DOCUMENTATION_COMMAND,
                        arguments=["func"],
                    ),
                )
            )
    return actions


def _single_edit(uri: str, edit: types.TextEdit) -> types.WorkspaceEdit:
    return types.WorkspaceEdit(changes={uri: [edit]})


def register_code_actions(server: LanguageServer, analyzer: DocumentAnalyzer) -> None:
    """Register the code action feature with the LSP server."""

    @server.feature(
        types.TEXT_DOCUMENT_CODE_ACTION,
        types.CodeActionOptions(code_action_kinds=[types.CodeActionKind.QuickFix]),
    )
    def code_actions(ls: LanguageServer, params: types.CodeActionParams) -> Optional[List[types.CodeAction]]:
        uri = params.text_document.uri
        logger.debug(f"Code action request for {uri} with {len(params.context.diagnostics)} diagnostics")
        try:
            if analyzer.get_context(uri) is None:
                return None
            return resolve_code_actions(uri, params.context.diagnostics)
        except Exception as e:
            logger.error(f"Error in code action handler: {e}")
            return None

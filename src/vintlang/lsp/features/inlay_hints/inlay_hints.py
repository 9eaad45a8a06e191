"""Parameter-name and inferred-type inlay hints."""

import logging
import re
from typing import List, Optional

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from vintlang.lsp.analysis import AnalysisContext, DocumentAnalyzer
from vintlang.lsp.analysis.language_tables import BUILTIN_SIGNATURES, INLAY_HINT_FUNCTIONS
from vintlang.lsp.analysis.patterns import VARIABLE_DECLARATION, is_code_line, split_arguments
from vintlang.lsp.utils.coordinate_transformer import CoordinateTransformer

logger = logging.getLogger(__name__)

# Builtin call with its argument text up to the first ")"
HINTED_CALL = re.compile(
    r"(?<![A-Za-z0-9_])("
    + "|".join(sorted(INLAY_HINT_FUNCTIONS, key=len, reverse=True))
    + r")\s*\(([^)]*)"
)

_TYPE_SHAPES = [
    ("string", re.compile(r"^[\"']")),
    ("function", re.compile(r"^func\b")),
    ("bool", re.compile(r"^(?:true|false)$")),
    ("float", re.compile(r"^-?\d+\.\d+$")),
    ("int", re.compile(r"^-?\d+$")),
    ("array", re.compile(r"^\[")),
    ("map", re.compile(r"^\{")),
]


def infer_type(expression: str) -> Optional[str]:
    """
    Guess the type of a right-hand side from its literal shape.

    Returns:
        One of string, function, bool, float, int, array, map; None when the
        shape is not recognised
    """
    expression = expression.strip()
    if not expression.startswith(("\"", "'")):
        expression = expression.split("//", 1)[0].strip().rstrip(";").strip()
    for name, shape in _TYPE_SHAPES:
        if shape.search(expression):
            return name
    return None


def parameter_hints(context: AnalysisContext, number: int, line: str) -> List[types.InlayHint]:
    hints: List[types.InlayHint] = []
    for match in HINTED_CALL.finditer(line):
        parameters = BUILTIN_SIGNATURES[match.group(1)]
        base = match.start(2)
        for index, (offset, _) in enumerate(split_arguments(match.group(2))):
            if index >= len(parameters):
                break
            hints.append(
                types.InlayHint(
                    position=CoordinateTransformer.position(context.document, number, base + offset),
                    label=f"{parameters[index]}:",
                    kind=types.InlayHintKind.Parameter,
                    padding_right=True,
                )
            )
    return hints


def type_hints(context: AnalysisContext, number: int, line: str) -> List[types.InlayHint]:
    hints: List[types.InlayHint] = []
    for match in VARIABLE_DECLARATION.finditer(line):
        inferred = infer_type(line[match.end():])
        if inferred is None:
            continue
        hints.append(
            types.InlayHint(
                position=CoordinateTransformer.position(context.document, number, match.end(1)),
                label=f": {inferred}",
                kind=types.InlayHintKind.Type,
            )
        )
    return hints


def resolve_inlay_hints(context: AnalysisContext, range_: types.Range) -> List[types.InlayHint]:
    """
    Compute the inlay hints that fall inside a range.

    Arguments of multi-parameter builtins get their parameter name; the
    argument list is split on every comma, nested or not. Declared variables
    get a ``: type`` label after their name when the type can be read off
    the right-hand side.
    """
    hints: List[types.InlayHint] = []
    lines = context.lines
    first = max(0, range_.start.line)
    last = min(range_.end.line, len(lines) - 1)
    for number in range(first, last + 1):
        line = lines[number]
        if not is_code_line(line):
            continue
        line_hints = parameter_hints(context, number, line) + type_hints(context, number, line)
        line_hints.sort(key=lambda hint: hint.position.character)
        hints.extend(
            hint for hint in line_hints if CoordinateTransformer.is_position_in_range(hint.position, range_)
        )
    return hints


def register_inlay_hints(server: LanguageServer, analyzer: DocumentAnalyzer) -> None:
    """Register inlay hints with the LSP server."""

    @server.feature(types.TEXT_DOCUMENT_INLAY_HINT)
    def inlay_hint(ls: LanguageServer, params: types.InlayHintParams) -> Optional[List[types.InlayHint]]:
        try:
            context = analyzer.get_context(params.text_document.uri)
            if context is None:
                return []
            return resolve_inlay_hints(context, params.range)
        except Exception as e:
            logger.error(f"Error in inlay hint handler: {e}")
            return []

"""Folding ranges for brace blocks and block comments."""

import logging
from typing import List, Optional, Sequence

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from vintlang.lsp.analysis import AnalysisContext, DocumentAnalyzer

logger = logging.getLogger(__name__)


def compute_folding_ranges(lines: Sequence[str]) -> List[types.FoldingRange]:
    """
    Compute folding ranges from raw lines.

    Every ``{`` pushes its line on a stack and every ``}`` pops one; a region
    is emitted when the pair spans more than one line. Braces still open at
    the end of the document produce nothing. A line containing ``/*`` starts a
    comment region that ends at the first line (from the same line on)
    containing ``*/``.

    Args:
        lines: Document lines

    Returns:
        Folding ranges in the order they were closed
    """
    ranges: List[types.FoldingRange] = []
    brace_stack: List[int] = []

    for number, line in enumerate(lines):
        for char in line:
            if char == "{":
                brace_stack.append(number)
            elif char == "}" and brace_stack:
                start_line = brace_stack.pop()
                if number > start_line:
                    ranges.append(
                        types.FoldingRange(
                            start_line=start_line,
                            end_line=number,
                            kind=types.FoldingRangeKind.Region,
                        )
                    )

        if "/*" in line:
            comment_end = number
            for candidate in range(number, len(lines)):
                if "*/" in lines[candidate]:
                    comment_end = candidate
                    break
            if comment_end > number:
                ranges.append(
                    types.FoldingRange(
                        start_line=number,
                        end_line=comment_end,
                        kind=types.FoldingRangeKind.Comment,
                    )
                )

    return ranges


def resolve_folding_ranges(context: AnalysisContext) -> List[types.FoldingRange]:
    return compute_folding_ranges(context.lines)


def register_folding(server: LanguageServer, analyzer: DocumentAnalyzer) -> None:
    """Register folding ranges with the LSP server."""

    @server.feature(types.TEXT_DOCUMENT_FOLDING_RANGE)
    def folding_ranges(
        ls: LanguageServer, params: types.FoldingRangeParams
    ) -> Optional[List[types.FoldingRange]]:
        try:
            context = analyzer.get_context(params.text_document.uri)
            if context is None:
                return []
            return resolve_folding_ranges(context)
        except Exception as e:
            logger.error(f"Error in folding range handler: {e}")
            return []

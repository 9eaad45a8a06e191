"""Color literal detection and presentation."""

import logging
import re
from typing import List, Optional

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from vintlang.lsp.analysis import AnalysisContext, DocumentAnalyzer
from vintlang.lsp.utils.coordinate_transformer import CoordinateTransformer

logger = logging.getLogger(__name__)

HEX_COLOR = re.compile(r"#([0-9A-Fa-f]{6}|[0-9A-Fa-f]{3})(?![0-9A-Za-z_])")
RGB_COLOR = re.compile(r"\brgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)")
RGBA_COLOR = re.compile(r"\brgba\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d*\.?\d+)\s*\)")


def _channel(value: str) -> float:
    return min(int(value), 255) / 255


def parse_hex(digits: str) -> types.Color:
    """Color of a ``RGB`` or ``RRGGBB`` hex digit string."""
    if len(digits) == 3:
        digits = "".join(char * 2 for char in digits)
    red, green, blue = (int(digits[index:index + 2], 16) / 255 for index in (0, 2, 4))
    return types.Color(red=red, green=green, blue=blue, alpha=1.0)


def find_colors(line: str) -> List[tuple]:
    """
    Find the color literals of one line.

    Returns:
        (start, end, color) triples in order of appearance
    """
    found = []
    for match in HEX_COLOR.finditer(line):
        found.append((match.start(), match.end(), parse_hex(match.group(1))))
    for match in RGB_COLOR.finditer(line):
        red, green, blue = (_channel(value) for value in match.groups())
        found.append((match.start(), match.end(), types.Color(red=red, green=green, blue=blue, alpha=1.0)))
    for match in RGBA_COLOR.finditer(line):
        red, green, blue = (_channel(value) for value in match.groups()[:3])
        alpha = min(float(match.group(4)), 1.0)
        found.append((match.start(), match.end(), types.Color(red=red, green=green, blue=blue, alpha=alpha)))
    found.sort(key=lambda item: item[0])
    return found


def resolve_document_colors(context: AnalysisContext) -> List[types.ColorInformation]:
    """Every hex, rgb and rgba literal of the document with its normalized color."""
    colors: List[types.ColorInformation] = []
    for number, line in enumerate(context.lines):
        for start, end, color in find_colors(line):
            colors.append(
                types.ColorInformation(
                    range=CoordinateTransformer.span_to_range(context.document, number, start, end),
                    color=color,
                )
            )
    return colors


def _byte(value: float) -> int:
    return max(0, min(255, round(value * 255)))


def color_labels(color: types.Color) -> List[str]:
    """
    Text forms of a color.

    ``#RRGGBB`` and ``rgb(r, g, b)`` are always offered; ``rgba(r, g, b, a)``
    only when the alpha, at two decimals, is below 1.
    """
    red, green, blue = _byte(color.red), _byte(color.green), _byte(color.blue)
    labels = [f"#{red:02X}{green:02X}{blue:02X}", f"rgb({red}, {green}, {blue})"]
    alpha = round(color.alpha, 2)
    if alpha < 1:
        labels.append(f"rgba({red}, {green}, {blue}, {alpha:g})")
    return labels


def resolve_color_presentations(color: types.Color, range_: types.Range) -> List[types.ColorPresentation]:
    return [
        types.ColorPresentation(label=label, text_edit=types.TextEdit(range=range_, new_text=label))
        for label in color_labels(color)
    ]


def register_colors(server: LanguageServer, analyzer: DocumentAnalyzer) -> None:
    """Register document color and color presentation with the LSP server."""

    @server.feature(types.TEXT_DOCUMENT_DOCUMENT_COLOR)
    def document_color(ls: LanguageServer, params: types.DocumentColorParams) -> Optional[List[types.ColorInformation]]:
        try:
            context = analyzer.get_context(params.text_document.uri)
            if context is None:
                return []
            return resolve_document_colors(context)
        except Exception as e:
            logger.error(f"Error in document color handler: {e}")
            return []

    @server.feature(types.TEXT_DOCUMENT_COLOR_PRESENTATION)
    def color_presentation(
        ls: LanguageServer, params: types.ColorPresentationParams
    ) -> Optional[List[types.ColorPresentation]]:
        try:
            return resolve_color_presentations(params.color, params.range)
        except Exception as e:
            logger.error(f"Error in color presentation handler: {e}")
            return []

"""
Line-oriented pattern scanning shared by the indexer and the feature resolvers.

VintLang is analysed heuristically, one line at a time, without a parser. The
regular expressions and helpers here are the single definition of what a
declaration, a call or a word looks like, so every feature agrees on them.
"""

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Pattern, Sequence, Tuple

from vintlang.lsp.utils.models import SymbolKind

IDENTIFIER_CHARS = re.compile(r"[A-Za-z0-9_]")
IDENTIFIER = re.compile(r"(?<![A-Za-z0-9_])[A-Za-z_][A-Za-z0-9_]*")
VALID_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

FUNCTION_DECLARATION = re.compile(r"\blet\s+([A-Za-z_][A-Za-z0-9_]*)\s*=\s*func\b", re.ASCII)
VARIABLE_DECLARATION = re.compile(r"\blet\s+([A-Za-z_][A-Za-z0-9_]*)\s*=(?!=)", re.ASCII)
IMPORT_DECLARATION = re.compile(r"\bimport\s+([A-Za-z_][A-Za-z0-9_]*)", re.ASCII)

FUNC_KEYWORD = re.compile(r"\bfunc\b", re.ASCII)
LET_KEYWORD = re.compile(r"\blet\b", re.ASCII)
CALL = re.compile(r"(?<![A-Za-z0-9_])([A-Za-z_][A-Za-z0-9_]*)\s*\(")

COMMENT_PREFIXES = ("//", "/*", "*")


@dataclass(frozen=True)
class Declaration:
    """A declaration match: kind and name span on one line."""
    line: int
    kind: SymbolKind
    name: str
    start: int
    end: int


def is_code_line(line: str) -> bool:
    """True when the trimmed line is non-empty and does not start like a comment.

    Only the line prefix is inspected: code followed by a comment, or lines in
    the middle of a block comment that do not start with ``*``, are treated as
    code.
    """
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith(COMMENT_PREFIXES)


def match_declaration(line: str) -> Optional[Tuple[SymbolKind, re.Match]]:
    """
    Match a line against the declaration patterns.

    Patterns are tried in order: function, then variable, then import.

    Returns:
        The kind and match of the first pattern that matches, or None
    """
    for kind, pattern in (
        (SymbolKind.FUNCTION, FUNCTION_DECLARATION),
        (SymbolKind.VARIABLE, VARIABLE_DECLARATION),
        (SymbolKind.IMPORT, IMPORT_DECLARATION),
    ):
        match = pattern.search(line)
        if match:
            return kind, match
    return None


def iter_declarations(lines: Sequence[str]) -> Iterator[Declaration]:
    """Yield one declaration per code line that declares something."""
    for number, line in enumerate(lines):
        if not is_code_line(line):
            continue
        result = match_declaration(line)
        if result is None:
            continue
        kind, match = result
        yield Declaration(number, kind, match.group(1), match.start(1), match.end(1))


def word_pattern(word: str) -> Pattern[str]:
    """Pattern matching whole-word occurrences of an identifier."""
    return re.compile(rf"(?<![A-Za-z0-9_]){re.escape(word)}(?![A-Za-z0-9_])")


def call_pattern(name: str) -> Pattern[str]:
    """Pattern matching call syntax ``name(`` for an identifier."""
    return re.compile(rf"(?<![A-Za-z0-9_]){re.escape(name)}\s*\(")


def declaration_pattern(name: str) -> Pattern[str]:
    """Pattern matching ``let name =`` or ``import name`` for an identifier."""
    escaped = re.escape(name)
    return re.compile(
        rf"\blet\s+({escaped})\s*=(?!=)|\bimport\s+({escaped})(?![A-Za-z0-9_])", re.ASCII
    )


def function_declaration_pattern(name: str) -> Pattern[str]:
    """Pattern matching ``let name = func`` for an identifier."""
    return re.compile(rf"\blet\s+({re.escape(name)})\s*=\s*func\b", re.ASCII)


def find_function_declaration(lines: Sequence[str], name: str) -> Optional[Tuple[int, re.Match]]:
    """Return the line and match of the first ``let name = func`` declaration."""
    pattern = function_declaration_pattern(name)
    for number, line in enumerate(lines):
        match = pattern.search(line)
        if match:
            return number, match
    return None


def word_span_at(line: str, column: int) -> Optional[Tuple[int, int]]:
    """
    Expand left and right from a column while characters are identifier-shaped.

    Args:
        line: Text of the line
        column: Python column of the cursor

    Returns:
        (start, end) columns of the word, or None when the span is empty
    """
    column = max(0, min(column, len(line)))
    start = column
    end = column
    while start > 0 and IDENTIFIER_CHARS.match(line[start - 1]):
        start -= 1
    while end < len(line) and IDENTIFIER_CHARS.match(line[end]):
        end += 1
    if start == end:
        return None
    return start, end


def find_block_end(lines: Sequence[str], start_line: int) -> int:
    """
    Find the line where the block opened on or after start_line closes.

    Brace depth is counted from the start of start_line; the block ends on the
    line where depth returns to zero after the first ``{``. When no brace
    opens, or the block never closes, the last line of the document is
    returned.
    """
    depth = 0
    opened = False
    for number in range(start_line, len(lines)):
        for char in lines[number]:
            if char == "{":
                depth += 1
                opened = True
            elif char == "}" and opened:
                depth -= 1
                if depth == 0:
                    return number
    return max(len(lines) - 1, start_line)


def leading_indent(line: str) -> int:
    return len(line) - len(line.lstrip())


def split_arguments(text: str) -> List[Tuple[int, str]]:
    """
    Split call argument text on commas.

    The split is purely textual: commas inside nested calls, strings or
    brackets split too.

    Returns:
        (offset, argument) pairs with surrounding whitespace removed; offset is
        the position of the argument's first character inside text
    """
    arguments: List[Tuple[int, str]] = []
    offset = 0
    for part in text.split(","):
        stripped = part.strip()
        if stripped:
            arguments.append((offset + (len(part) - len(part.lstrip())), stripped))
        offset += len(part) + 1
    return arguments

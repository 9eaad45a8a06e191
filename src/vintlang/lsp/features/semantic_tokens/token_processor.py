"""Regex-pass token classification for semantic tokens."""

import logging
import re
from typing import List, Optional, Pattern, Sequence, Tuple

from vintlang.lsp.analysis.language_tables import (
    BUILTINS,
    DECLARATIVE_KEYWORDS,
    KEYWORDS,
    LITERAL_KEYWORDS,
    MODULES,
)
from vintlang.lsp.analysis.patterns import FUNCTION_DECLARATION, VARIABLE_DECLARATION

from .semantic_tokens_classifier import Token, TokenModifier
from .semantic_tokens_config import SemanticTokensConfig

logger = logging.getLogger(__name__)


def _word_alternation(words: Sequence[str]) -> Pattern[str]:
    # Longest first so that e.g. "println" is not cut short by "print"
    ordered = sorted(words, key=len, reverse=True)
    return re.compile(r"\b(" + "|".join(re.escape(word) for word in ordered) + r")\b")


KEYWORD = _word_alternation([kw for kw in KEYWORDS if kw not in LITERAL_KEYWORDS])
BUILTIN = _word_alternation(BUILTINS)
MODULE = _word_alternation(MODULES)
STRING = re.compile(r'"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\'')
NUMBER = re.compile(r"\b\d+(?:\.\d+)?\b")
LINE_COMMENT = re.compile(r"//.*$")
OPERATOR = re.compile(
    r"==|!=|<=|>=|&&|\|\||\+=|-=|\*=|\+\+|--|[+\-%=<>!]|(?<!/)\*(?!/)|(?<![/*])/(?![/*])"
)
LITERAL = _word_alternation(LITERAL_KEYWORDS)
DECLARATIVE = re.compile(r"^\s*(" + "|".join(DECLARATIVE_KEYWORDS) + r")\b")

# (pattern, group, token type, modifiers), applied in this order on every line
_PASSES: List[Tuple[Pattern[str], int, str, Tuple[TokenModifier, ...]]] = [
    (KEYWORD, 1, "keyword", ()),
    (BUILTIN, 1, "function", (TokenModifier.defaultLibrary,)),
    (MODULE, 1, "namespace", (TokenModifier.defaultLibrary,)),
    (FUNCTION_DECLARATION, 1, "function", (TokenModifier.declaration,)),
    (STRING, 0, "string", ()),
    (NUMBER, 0, "number", ()),
    (LINE_COMMENT, 0, "comment", ()),
    (OPERATOR, 0, "operator", ()),
    (LITERAL, 1, "keyword", (TokenModifier.readonly,)),
    (DECLARATIVE, 1, "macro", ()),
]


class TokenProcessor:
    """Turns document lines into classified tokens."""

    def __init__(self, config: Optional[SemanticTokensConfig] = None):
        self._config = config or SemanticTokensConfig()

    def process_lines(self, lines: Sequence[str]) -> List[Token]:
        """
        Classify every line of a document.

        Overlapping matches from different passes are all kept. The result is
        ordered by line and offset; tokens starting at the same place keep
        the order their passes ran in.

        Args:
            lines: The document lines

        Returns:
            The tokens, sorted by (line, offset)
        """
        tokens: List[Token] = []
        for number, line in enumerate(lines):
            if line.strip():
                tokens.extend(self.process_line(number, line))
        tokens.sort(key=lambda token: (token.line, token.offset))
        return tokens

    def process_line(self, number: int, line: str) -> List[Token]:
        """Run every pass over one line, in pass order."""
        tokens: List[Token] = []
        for pattern, group, tok_type, modifiers in _PASSES:
            for match in pattern.finditer(line):
                self._append(tokens, number, match, group, tok_type, modifiers)
            if pattern is FUNCTION_DECLARATION:
                self._variable_declarations(tokens, number, line)
        return tokens

    def _variable_declarations(self, tokens: List[Token], number: int, line: str) -> None:
        for match in VARIABLE_DECLARATION.finditer(line):
            # Function declarations were already emitted as functions
            if FUNCTION_DECLARATION.match(line, match.start()):
                continue
            self._append(tokens, number, match, 1, "variable", (TokenModifier.declaration,))

    @staticmethod
    def _append(
        tokens: List[Token],
        number: int,
        match: "re.Match[str]",
        group: int,
        tok_type: str,
        modifiers: Tuple[TokenModifier, ...],
    ) -> None:
        text = match.group(group)
        if not text:
            return
        tokens.append(
            Token(
                line=number,
                offset=match.start(group),
                text=text,
                tok_type=tok_type,
                tok_modifiers=list(modifiers),
            )
        )

    def get_token_type_index(self, token: Token) -> int:
        """Legend index of the token's type, falling back to ``variable``."""
        return self._config.TOKEN_TYPE_INDICES.get(token.tok_type, self._config.DEFAULT_TOKEN_INDEX)

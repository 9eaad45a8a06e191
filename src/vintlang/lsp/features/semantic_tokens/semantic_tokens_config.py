"""Configuration for semantic tokens functionality."""

from typing import Dict, List


class SemanticTokensConfig:
    """Configuration class for semantic token types and modifiers."""

    # Legend token types, in index order
    TOKEN_TYPES: List[str] = [
        "keyword",
        "function",
        "variable",
        "namespace",
        "string",
        "number",
        "comment",
        "operator",
        "macro",
    ]

    # Legend token modifiers, in TokenModifier bit order
    TOKEN_MODIFIERS: List[str] = [
        "declaration",
        "readonly",
        "defaultLibrary",
    ]

    TOKEN_TYPE_INDICES: Dict[str, int] = {name: index for index, name in enumerate(TOKEN_TYPES)}

    DEFAULT_TOKEN_INDEX = 2

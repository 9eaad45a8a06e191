"""LSP semantic tokens feature for VintLang."""

from .document_handler import DocumentEventHandler
from .position_calculator import PositionCalculator
from .semantic_tokens import LEGEND, SemanticTokensService, register_semantic_tokens
from .semantic_tokens_classifier import SemanticTokensParser, Token, TokenModifier
from .semantic_tokens_config import SemanticTokensConfig
from .token_processor import TokenProcessor

__all__ = [
    "register_semantic_tokens",
    "SemanticTokensService",
    "DocumentEventHandler",
    "LEGEND",
    "SemanticTokensConfig",
    "SemanticTokensParser",
    "Token",
    "TokenModifier",
    "PositionCalculator",
    "TokenProcessor",
]

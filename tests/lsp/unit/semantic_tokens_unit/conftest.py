import pytest

from vintlang.lsp.features.semantic_tokens.semantic_tokens import SemanticTokensService
from vintlang.lsp.features.semantic_tokens.semantic_tokens_classifier import SemanticTokensParser
from vintlang.lsp.features.semantic_tokens.token_processor import TokenProcessor


@pytest.fixture
def processor():
    return TokenProcessor()


@pytest.fixture
def parser():
    return SemanticTokensParser()


@pytest.fixture
def service(analyzer):
    return SemanticTokensService(analyzer)


@pytest.fixture
def sample_source():
    return 'let total = len("hi") + 42 // sum\npackage main\nlet ok = true'

import pytest

from vintlang.lsp.analysis import DocumentAnalyzer

TEST_URI = "file:///workspace/main.vint"


@pytest.fixture
def analyzer():
    return DocumentAnalyzer()


@pytest.fixture
def make_context(analyzer):
    """Open text in the analyzer and return its analysis context."""

    def _make(text, uri=TEST_URI, version=1):
        return analyzer.update(uri, text, version)

    return _make

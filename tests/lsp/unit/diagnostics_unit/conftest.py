from unittest.mock import Mock

import pytest

from vintlang.lsp.analysis import DiagnosticEngine, SymbolIndexer
from vintlang.lsp.features.diagnostics.diagnostics import DiagnosticsService
from vintlang.lsp.utils.models import Document


@pytest.fixture
def engine():
    return DiagnosticEngine()


@pytest.fixture
def diagnose(engine):
    """Index and diagnose a text, returning the diagnostic list."""

    def _diagnose(text):
        document = Document(uri="file:///workspace/main.vint", text=text, version=1)
        return engine.diagnose(document, SymbolIndexer().index(document))

    return _diagnose


@pytest.fixture
def mock_server():
    server = Mock()
    server.workspace.get_text_document.return_value = Mock(source="y = 10")
    return server


@pytest.fixture
def diagnostics_service(analyzer, mock_server):
    service = DiagnosticsService(analyzer)
    service.set_server(mock_server)
    return service

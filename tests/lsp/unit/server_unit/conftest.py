from unittest.mock import Mock

import pytest

from vintlang.lsp.config import ServerConfig
from vintlang.lsp.server import VintLSPServer
from vintlang.lsp.utils.document_event_coordinator import DocumentEventCoordinator


@pytest.fixture
def lsp_server():
    return VintLSPServer(ServerConfig(max_problems=5))


@pytest.fixture
def coordinator():
    return DocumentEventCoordinator()


@pytest.fixture
def recording_handler():
    return Mock(spec=["handle_document_open", "handle_document_change", "handle_document_close"])

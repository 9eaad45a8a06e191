import asyncio
import sys

import pytest
import pytest_lsp
from lsprotocol.types import (
    TEXT_DOCUMENT_PUBLISH_DIAGNOSTICS,
    ClientCapabilities,
    DidOpenTextDocumentParams,
    InitializeParams,
    TextDocumentItem,
)
from pytest_lsp import ClientServerConfig, LanguageClient


@pytest_lsp.fixture(
    config=ClientServerConfig(server_command=[sys.executable, "-m", "vintlang", "lsp"]),
)
async def client(lsp_client: LanguageClient):
    # Setup
    params = InitializeParams(capabilities=ClientCapabilities())
    await lsp_client.initialize_session(params)

    yield

    # Teardown
    await lsp_client.shutdown_session()


@pytest.fixture
def open_document(client: LanguageClient):
    """Open a document and wait until its diagnostics have been published."""

    async def _open(uri: str, text: str, version: int = 1):
        diagnostics_task = asyncio.create_task(client.wait_for_notification(TEXT_DOCUMENT_PUBLISH_DIAGNOSTICS))
        client.text_document_did_open(
            DidOpenTextDocumentParams(
                text_document=TextDocumentItem(uri=uri, language_id="vint", version=version, text=text)
            )
        )
        await asyncio.wait_for(diagnostics_task, timeout=10)

    return _open

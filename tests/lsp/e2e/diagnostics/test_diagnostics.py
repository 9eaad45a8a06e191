import asyncio

import pytest
from lsprotocol.types import (
    TEXT_DOCUMENT_PUBLISH_DIAGNOSTICS,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    TextDocumentContentChangeWholeDocument,
    TextDocumentIdentifier,
    VersionedTextDocumentIdentifier,
)
from pytest_lsp import LanguageClient

URI = "file:///workspace/diagnostics.vint"


@pytest.mark.asyncio
async def test_missing_let_published_on_open(client: LanguageClient, open_document):
    """An assignment without let is reported when the document opens."""
    await open_document(URI, "y = 10")

    assert URI in client.diagnostics, "Diagnostics should be published on open"
    diagnostics = client.diagnostics[URI]
    missing_let = [d for d in diagnostics if d.code == "missing-let"]
    assert len(missing_let) == 1
    assert missing_let[0].severity == DiagnosticSeverity.Warning
    assert "y" in missing_let[0].message


@pytest.mark.asyncio
async def test_clean_document_has_no_diagnostics(client: LanguageClient, open_document):
    await open_document(URI, "let x = 5\nprint(x)")

    assert len(client.diagnostics[URI]) == 0, f"Expected no diagnostics, got {client.diagnostics[URI]}"


@pytest.mark.asyncio
async def test_change_replaces_diagnostics(client: LanguageClient, open_document):
    """Fixing the problem clears the previously published diagnostics."""
    await open_document(URI, "y = 10")
    assert client.diagnostics[URI], "Missing let should be reported before the fix"

    diagnostics_task = asyncio.create_task(client.wait_for_notification(TEXT_DOCUMENT_PUBLISH_DIAGNOSTICS))
    client.text_document_did_change(
        DidChangeTextDocumentParams(
            text_document=VersionedTextDocumentIdentifier(uri=URI, version=2),
            content_changes=[TextDocumentContentChangeWholeDocument(text="let y = 10\nprint(y)")],
        )
    )
    await asyncio.wait_for(diagnostics_task, timeout=10)

    assert len(client.diagnostics[URI]) == 0, "Fixed document should have no diagnostics"


@pytest.mark.asyncio
async def test_close_clears_diagnostics(client: LanguageClient, open_document):
    await open_document(URI, "let x = 5")
    assert client.diagnostics[URI], "Unused variable should be reported before closing"

    diagnostics_task = asyncio.create_task(client.wait_for_notification(TEXT_DOCUMENT_PUBLISH_DIAGNOSTICS))
    client.text_document_did_close(DidCloseTextDocumentParams(text_document=TextDocumentIdentifier(uri=URI)))
    await asyncio.wait_for(diagnostics_task, timeout=10)

    assert len(client.diagnostics[URI]) == 0, "Closing should clear the diagnostics"

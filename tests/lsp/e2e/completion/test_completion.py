import pytest
from lsprotocol.types import (
    CompletionItemKind,
    CompletionParams,
    Position,
    TextDocumentIdentifier,
)
from pytest_lsp import LanguageClient

URI = "file:///workspace/completion.vint"


@pytest.mark.asyncio
async def test_completions(client: LanguageClient, open_document):
    """Keywords, builtins and modules are all offered."""
    await open_document(URI, "let x = \n")

    results = await client.text_document_completion_async(
        params=CompletionParams(
            position=Position(line=0, character=8),
            text_document=TextDocumentIdentifier(uri=URI),
        )
    )

    assert results is not None
    kinds = {item.label: item.kind for item in results.items}
    assert kinds["let"] == CompletionItemKind.Keyword
    assert kinds["print"] == CompletionItemKind.Function
    assert kinds["time"] == CompletionItemKind.Module


@pytest.mark.asyncio
async def test_completion_resolve_adds_documentation(client: LanguageClient, open_document):
    await open_document(URI, "")

    results = await client.text_document_completion_async(
        params=CompletionParams(
            position=Position(line=0, character=0),
            text_document=TextDocumentIdentifier(uri=URI),
        )
    )
    item = next(item for item in results.items if item.label == "print")

    resolved = await client.completion_item_resolve_async(item)

    assert resolved.detail
    assert "print(value)" in resolved.documentation.value

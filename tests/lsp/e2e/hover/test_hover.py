import pytest
from lsprotocol.types import (
    HoverParams,
    MarkupKind,
    Position,
    TextDocumentIdentifier,
)
from pytest_lsp import LanguageClient

URI = "file:///workspace/hover.vint"


@pytest.mark.asyncio
async def test_hover_on_builtin(client: LanguageClient, open_document):
    await open_document(URI, 'print("hi")')

    result = await client.text_document_hover_async(
        params=HoverParams(position=Position(line=0, character=2), text_document=TextDocumentIdentifier(uri=URI))
    )

    assert result is not None
    assert result.contents.kind == MarkupKind.Markdown
    assert "print(value)" in result.contents.value
    assert result.range.start == Position(line=0, character=0)
    assert result.range.end == Position(line=0, character=5)


@pytest.mark.asyncio
async def test_hover_on_unknown_word(client: LanguageClient, open_document):
    await open_document(URI, "let counter = 1\nprint(counter)")

    result = await client.text_document_hover_async(
        params=HoverParams(position=Position(line=0, character=6), text_document=TextDocumentIdentifier(uri=URI))
    )

    assert result is None

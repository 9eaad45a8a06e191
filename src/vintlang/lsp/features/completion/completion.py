from lsprotocol import types
from pygls.lsp.server import LanguageServer
from typing import List, Optional
import logging

from vintlang.lsp.analysis import DocumentAnalyzer
from vintlang.lsp.analysis.language_tables import (
    BUILTINS,
    HOVER_DOCUMENTATION,
    KEYWORDS,
    MODULES,
)

logger = logging.getLogger(__name__)

TRIGGER_CHARACTERS = [".", "(", "{", "["]


def completion_items() -> List[types.CompletionItem]:
    """
    Build the static completion list.

    Items are emitted keywords first, then builtins, then modules. Each item's
    ``data`` is its index in that combined order, which completion resolve
    uses to find the catalog the item came from.

    Returns:
        One completion item per keyword, builtin and module
    """
    items: List[types.CompletionItem] = []

    for keyword in KEYWORDS:
        items.append(
            types.CompletionItem(
                label=keyword,
                kind=types.CompletionItemKind.Keyword,
                data=len(items),
            )
        )

    for builtin in BUILTINS:
        items.append(
            types.CompletionItem(
                label=builtin,
                kind=types.CompletionItemKind.Function,
                data=len(items),
                insert_text=f"{builtin}($1)",
                insert_text_format=types.InsertTextFormat.Snippet,
            )
        )

    for module in MODULES:
        items.append(
            types.CompletionItem(
                label=module,
                kind=types.CompletionItemKind.Module,
                data=len(items),
            )
        )

    return items


def resolve_completion_item(item: types.CompletionItem) -> types.CompletionItem:
    """
    Attach detail and documentation to a completion item.

    The catalog is found from the item's ``data`` index; items without a
    usable index fall back to a lookup of their label.

    Args:
        item: The item selected by the client

    Returns:
        The same item with detail and documentation filled in
    """
    category = _category_of(item)
    label = item.label

    if category == "keyword":
        item.detail = "VintLang keyword"
        fallback = f"The '{label}' keyword in VintLang"
    elif category == "builtin":
        item.detail = "VintLang built-in function"
        fallback = f"Built-in function: {label}()"
    elif category == "module":
        item.detail = "VintLang module"
        fallback = f"VintLang module: {label}"
    else:
        return item

    item.documentation = types.MarkupContent(
        kind=types.MarkupKind.Markdown,
        value=HOVER_DOCUMENTATION.get(label, fallback),
    )
    return item


def _category_of(item: types.CompletionItem) -> Optional[str]:
    data = item.data
    if isinstance(data, int) and not isinstance(data, bool):
        if 0 <= data < len(KEYWORDS):
            return "keyword"
        if data < len(KEYWORDS) + len(BUILTINS):
            return "builtin"
        if data < len(KEYWORDS) + len(BUILTINS) + len(MODULES):
            return "module"
        return None

    if item.label in KEYWORDS:
        return "keyword"
    if item.label in BUILTINS:
        return "builtin"
    if item.label in MODULES:
        return "module"
    return None


def register_completion(server: LanguageServer, analyzer: DocumentAnalyzer):
    """
    Register completion and completion resolve with the LSP server.

    Args:
        server: The language server instance
        analyzer: Shared document analyzer
    """

    completion_options = types.CompletionOptions(
        trigger_characters=TRIGGER_CHARACTERS,
        resolve_provider=True,
    )

    @server.feature(types.TEXT_DOCUMENT_COMPLETION, completion_options)
    def completions(ls: LanguageServer, params: types.CompletionParams) -> Optional[types.CompletionList]:
        logger.debug(f"Completion request received for {params.text_document.uri} at position {params.position}")

        try:
            items = completion_items()
            logger.debug(f"Returning CompletionList with {len(items)} items")
            return types.CompletionList(is_incomplete=False, items=items)
        except Exception as e:
            logger.error(f"Error in completion handler: {e}")
            return None

    @server.feature(types.COMPLETION_ITEM_RESOLVE)
    def completion_resolve(ls: LanguageServer, item: types.CompletionItem) -> types.CompletionItem:
        try:
            return resolve_completion_item(item)
        except Exception as e:
            logger.error(f"Error in completion resolve handler: {e}")
            return item

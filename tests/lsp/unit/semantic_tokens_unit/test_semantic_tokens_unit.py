"""Unit tests for semantic token classification and encoding."""

import pytest
from lsprotocol import types

from vintlang.lsp.features.semantic_tokens.document_handler import DocumentEventHandler
from vintlang.lsp.features.semantic_tokens.semantic_tokens import LEGEND
from vintlang.lsp.features.semantic_tokens.semantic_tokens_classifier import Token, TokenModifier
from vintlang.lsp.features.semantic_tokens.semantic_tokens_config import SemanticTokensConfig


def summary(tokens):
    return [(t.line, t.offset, t.text, t.tok_type, t.tok_modifiers) for t in tokens]


class TestToken:
    def test_negative_position_is_rejected(self):
        with pytest.raises(ValueError):
            Token(line=-1, offset=0, text="x")

    def test_empty_text_is_rejected(self):
        with pytest.raises(ValueError):
            Token(line=0, offset=0, text="")


class TestTokenProcessor:
    def test_passes_on_one_line(self, processor):
        tokens = processor.process_lines(['let total = len("hi") + 42 // sum'])

        assert summary(tokens) == [
            (0, 0, "let", "keyword", []),
            (0, 4, "total", "variable", [TokenModifier.declaration]),
            (0, 10, "=", "operator", []),
            (0, 12, "len", "function", [TokenModifier.defaultLibrary]),
            (0, 16, '"hi"', "string", []),
            (0, 22, "+", "operator", []),
            (0, 24, "42", "number", []),
            (0, 27, "// sum", "comment", []),
        ]

    def test_function_declaration(self, processor):
        tokens = processor.process_lines(["let f = func() {"])

        assert summary(tokens) == [
            (0, 0, "let", "keyword", []),
            (0, 4, "f", "function", [TokenModifier.declaration]),
            (0, 6, "=", "operator", []),
            (0, 8, "func", "keyword", []),
        ]

    def test_modules_and_literals(self, processor):
        tokens = processor.process_lines(["import json", "let n = null"])

        assert (0, 7, "json", "namespace", [TokenModifier.defaultLibrary]) in summary(tokens)
        assert (1, 8, "null", "keyword", [TokenModifier.readonly]) in summary(tokens)

    def test_overlaps_keep_emission_order(self, processor):
        tokens = processor.process_lines(["package main"])

        assert summary(tokens) == [
            (0, 0, "package", "keyword", []),
            (0, 0, "package", "macro", []),
        ]

    def test_declarative_keyword_only_at_statement_start(self, processor):
        tokens = processor.process_lines(["let x = include"])
        assert "macro" not in [t.tok_type for t in tokens]

    def test_comment_markers_are_not_operators(self, processor):
        tokens = processor.process_lines(["/* a */", "a / b // c"])
        operators = [(t.line, t.offset) for t in tokens if t.tok_type == "operator"]
        assert operators == [(1, 2)]

    def test_blank_lines_have_no_tokens(self, processor):
        assert processor.process_lines(["", "   "]) == []

    def test_token_type_index(self, processor):
        assert processor.get_token_type_index(Token(line=0, offset=0, text="x", tok_type="macro")) == 8
        assert (
            processor.get_token_type_index(Token(line=0, offset=0, text="x", tok_type="unknown"))
            == SemanticTokensConfig.DEFAULT_TOKEN_INDEX
        )


class TestSemanticTokensService:
    def test_delta_encoding(self, service, make_context, sample_source):
        context = make_context(sample_source)

        result = service.encode(context)

        assert result.data == [
            0, 0, 3, 0, 0,
            0, 4, 5, 2, 1,
            0, 6, 1, 7, 0,
            0, 2, 3, 1, 4,
            0, 4, 4, 4, 0,
            0, 6, 1, 7, 0,
            0, 2, 2, 5, 0,
            0, 3, 6, 6, 0,
            1, 0, 7, 0, 0,
            0, 0, 7, 8, 0,
            1, 0, 3, 0, 0,
            0, 4, 2, 2, 1,
            0, 3, 1, 7, 0,
            0, 2, 4, 0, 2,
        ]

    def test_offsets_are_utf16(self, service, make_context):
        context = make_context('let s = "\U0001F600" + 1')

        result = service.encode(context)

        assert result.data == [
            0, 0, 3, 0, 0,
            0, 4, 1, 2, 1,
            0, 2, 1, 7, 0,
            0, 2, 4, 4, 0,
            0, 5, 1, 7, 0,
            0, 2, 1, 5, 0,
        ]

    def test_full_request(self, service, make_context):
        context = make_context("let x = 1")
        params = types.SemanticTokensParams(text_document=types.TextDocumentIdentifier(uri=context.uri))

        result = service.get_semantic_tokens_full(params)

        assert result is not None
        assert len(result.data) % 5 == 0

    def test_unknown_document(self, service):
        params = types.SemanticTokensParams(text_document=types.TextDocumentIdentifier(uri="file:///none.vint"))
        assert service.get_semantic_tokens_full(params) is None

    def test_legend_matches_config(self):
        assert LEGEND.token_types == SemanticTokensConfig.TOKEN_TYPES
        assert LEGEND.token_modifiers == ["declaration", "readonly", "defaultLibrary"]


class TestSemanticTokensCache:
    def test_tokens_are_cached_per_version(self, parser, make_context):
        first = make_context("let x = 1", version=1)
        cached = parser.get_tokens(first)
        assert parser.get_tokens(first) is cached

        second = make_context("let x = 1\nlet y = 2", version=2)
        refreshed = parser.get_tokens(second)
        assert refreshed is not cached
        assert refreshed[-1].line == 1

    def test_document_events_clear_cache(self, parser, make_context):
        context = make_context("let x = 1")
        parser.get_tokens(context)
        handler = DocumentEventHandler(parser)

        handler.handle_document_change(
            types.DidChangeTextDocumentParams(
                text_document=types.VersionedTextDocumentIdentifier(uri=context.uri, version=2),
                content_changes=[],
            )
        )

        assert context.uri not in parser.tokens

    def test_clear_all_tokens(self, parser, make_context):
        parser.get_tokens(make_context("let x = 1"))
        parser.clear_all_tokens()
        assert parser.tokens == {}

"""Unit tests for server assembly, configuration and document event fan-out."""

from unittest.mock import Mock

import pytest
from lsprotocol import types
from lsprotocol.converters import get_converter
from pygls.capabilities import ServerCapabilitiesBuilder

from vintlang.lsp.config import DEFAULT_HOST, DEFAULT_PORT, ServerConfig
from vintlang.lsp.features.semantic_tokens import LEGEND
from vintlang.lsp.server import ServerInitializationState


def test_defaults():
    config = ServerConfig()
    assert config.max_problems == 1000, f"Expected the default cap of 1000, got {config.max_problems}"
    assert config.host == DEFAULT_HOST
    assert config.port == DEFAULT_PORT
    assert config.use_tcp is False, "Stdio should be the default transport"


def test_negative_max_problems():
    with pytest.raises(ValueError, match="max_problems"):
        ServerConfig(max_problems=-1)


@pytest.mark.parametrize("port", [0, 65536])
def test_port_out_of_range(port):
    with pytest.raises(ValueError, match="port"):
        ServerConfig(port=port)


def test_error_summary():
    state = ServerInitializationState()
    assert state.get_error_summary() == "No initialization errors"

    state.add_error("Hover", RuntimeError("boom"))

    assert state.get_error_summary() == "Initialization errors: Hover: boom"
    assert not state.is_ready_for_features(), "Errors should block feature readiness"


def test_components_ready(lsp_server):
    assert lsp_server.init_state.analyzer_ready
    assert lsp_server.init_state.document_events_ready
    assert lsp_server.init_state.features_registered
    assert lsp_server.init_state.initialization_errors == [], f"Unexpected errors: {lsp_server.init_state.get_error_summary()}"


def test_features_registered(lsp_server):
    features = lsp_server.ls.protocol.fm.features

    for method in [
        types.TEXT_DOCUMENT_DID_OPEN,
        types.TEXT_DOCUMENT_DID_CHANGE,
        types.TEXT_DOCUMENT_DID_CLOSE,
        types.TEXT_DOCUMENT_COMPLETION,
        types.COMPLETION_ITEM_RESOLVE,
        types.TEXT_DOCUMENT_HOVER,
        types.TEXT_DOCUMENT_SIGNATURE_HELP,
        types.TEXT_DOCUMENT_DEFINITION,
        types.TEXT_DOCUMENT_REFERENCES,
        types.TEXT_DOCUMENT_DOCUMENT_HIGHLIGHT,
        types.TEXT_DOCUMENT_PREPARE_RENAME,
        types.TEXT_DOCUMENT_RENAME,
        types.TEXT_DOCUMENT_DOCUMENT_SYMBOL,
        types.WORKSPACE_SYMBOL,
        types.TEXT_DOCUMENT_FOLDING_RANGE,
        types.TEXT_DOCUMENT_FORMATTING,
        types.TEXT_DOCUMENT_RANGE_FORMATTING,
        types.TEXT_DOCUMENT_CODE_ACTION,
        types.TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
        types.TEXT_DOCUMENT_INLAY_HINT,
        types.TEXT_DOCUMENT_PREPARE_CALL_HIERARCHY,
        types.CALL_HIERARCHY_INCOMING_CALLS,
        types.CALL_HIERARCHY_OUTGOING_CALLS,
        types.TEXT_DOCUMENT_CODE_LENS,
        types.TEXT_DOCUMENT_DOCUMENT_COLOR,
        types.TEXT_DOCUMENT_COLOR_PRESENTATION,
    ]:
        assert method in features, method


def test_semantic_tokens_legend_advertised(lsp_server):
    options = lsp_server.ls.protocol.fm.feature_options[types.TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL]
    assert options == LEGEND, "The feature option should be the bare legend"


def test_initialize_advertises_semantic_tokens(lsp_server):
    fm = lsp_server.ls.protocol.fm
    capabilities = ServerCapabilitiesBuilder(
        types.ClientCapabilities(),
        set({**fm.features, **fm.builtin_features}),
        fm.feature_options,
        list(fm.commands),
        types.TextDocumentSyncKind.Incremental,
    ).build()

    provider = capabilities.semantic_tokens_provider
    assert provider is not None, "Semantic tokens should be advertised"
    assert provider.legend == LEGEND
    assert provider.full is True

    wire = get_converter().unstructure(capabilities)
    assert wire["semanticTokensProvider"]["legend"]["tokenTypes"] == list(LEGEND.token_types)
    assert wire["hoverProvider"], "Other features should still be advertised"
    assert "completionProvider" in wire


def test_document_handlers_in_order(lsp_server):
    assert lsp_server.document_coordinator.get_handler_count() == 2, "Diagnostics and semantic tokens should both handle document events"


def test_max_problems_reaches_analyzer(lsp_server):
    text = "\n".join(f"v{i} = {i}" for i in range(10))
    context = lsp_server.analyzer.update("file:///workspace/many.vint", text, 1)
    assert len(context.diagnostics) == 5, f"Expected the configured cap of 5, got {len(context.diagnostics)}"


def test_shutdown_releases_state(lsp_server):
    lsp_server.analyzer.update("file:///workspace/main.vint", "let x = 1", 1)

    lsp_server.shutdown()

    assert lsp_server.analyzer.contexts() == [], "Shutdown should drop every analysis context"
    assert lsp_server.document_coordinator.get_handler_count() == 0


def test_none_handler_rejected(coordinator):
    with pytest.raises(ValueError):
        coordinator.register_handler(None)


def test_duplicate_registration_ignored(coordinator, recording_handler):
    coordinator.register_handler(recording_handler)
    coordinator.register_handler(recording_handler)
    assert coordinator.get_handler_count() == 1, "A handler should only be registered once"


def test_unregister(coordinator, recording_handler):
    coordinator.register_handler(recording_handler)
    assert coordinator.unregister_handler(recording_handler) is True
    assert coordinator.unregister_handler(recording_handler) is False


def test_events_reach_handlers_in_order(coordinator):
    calls = []
    first = Mock(spec=["handle_document_open"])
    first.handle_document_open.side_effect = lambda params: calls.append("first")
    second = Mock(spec=["handle_document_open"])
    second.handle_document_open.side_effect = lambda params: calls.append("second")
    coordinator.register_handler(first)
    coordinator.register_handler(second)

    coordinator.distribute_event("handle_document_open", Mock())

    assert calls == ["first", "second"], f"Handlers should run in registration order, got {calls}"


def test_failing_handler_does_not_stop_others(coordinator, recording_handler):
    failing = Mock(spec=["handle_document_change"])
    failing.handle_document_change.side_effect = RuntimeError("boom")
    coordinator.register_handler(failing)
    coordinator.register_handler(recording_handler)
    params = Mock()

    coordinator.distribute_event("handle_document_change", params)

    recording_handler.handle_document_change.assert_called_once_with(params)


def test_handlers_without_method_are_skipped(coordinator, recording_handler):
    close_only = Mock(spec=["handle_document_close"])
    coordinator.register_handler(close_only)
    coordinator.register_handler(recording_handler)

    coordinator.distribute_event("handle_document_open", Mock())

    recording_handler.handle_document_open.assert_called_once()
    close_only.handle_document_close.assert_not_called()


def test_register_with_server_requires_handlers(coordinator):
    with pytest.raises(RuntimeError):
        coordinator.register_with_server(Mock())

"""
Document Event Coordinator - single entry point for document lifecycle events.

pygls accepts one handler per notification, but several parts of the server
react to documents opening, changing and closing: the diagnostics service
re-analyses and publishes, and the semantic tokens cache drops stale entries.
The coordinator registers didOpen/didChange/didClose once and forwards each
event to every subscribed handler, in subscription order.

A handler that raises is logged and skipped; the remaining handlers still
receive the event.
"""

import logging
from threading import Lock
from typing import List, Protocol

from lsprotocol import types
from pygls.lsp.server import LanguageServer

logger = logging.getLogger(__name__)


class DocumentEventHandler(Protocol):
    """
    Interface of document event subscribers.

    Handlers only need the methods for the events they care about; missing
    methods are skipped by the coordinator.
    """

    def handle_document_open(self, params: types.DidOpenTextDocumentParams) -> None:
        ...

    def handle_document_change(self, params: types.DidChangeTextDocumentParams) -> None:
        ...

    def handle_document_close(self, params: types.DidCloseTextDocumentParams) -> None:
        ...


class DocumentEventCoordinator:
    """
    Forwards document lifecycle events from the LSP server to subscribed handlers.

    Handlers are called in registration order, which matters: the diagnostics
    service must rebuild the analysis context before other handlers read it.
    """

    def __init__(self):
        self._handlers: List[DocumentEventHandler] = []
        self._registered_with_server = False
        self._handler_lock = Lock()
        self._registration_lock = Lock()

    def register_handler(self, handler: DocumentEventHandler) -> None:
        """
        Subscribe a handler to document events.

        Args:
            handler: Object implementing any of the DocumentEventHandler methods

        Raises:
            ValueError: If handler is None
        """
        if handler is None:
            raise ValueError("Handler cannot be None")

        with self._handler_lock:
            if handler in self._handlers:
                logger.warning(f"Handler {type(handler).__name__} is already registered")
                return
            self._handlers.append(handler)
        logger.info(f"Registered document event handler: {type(handler).__name__}")

    def unregister_handler(self, handler: DocumentEventHandler) -> bool:
        with self._handler_lock:
            try:
                self._handlers.remove(handler)
            except ValueError:
                logger.warning(f"Handler {type(handler).__name__} was not registered")
                return False
        logger.info(f"Unregistered document event handler: {type(handler).__name__}")
        return True

    def get_handler_count(self) -> int:
        with self._handler_lock:
            return len(self._handlers)

    def register_with_server(self, server: LanguageServer) -> None:
        """
        Register the document notifications with the LSP server.

        Only the first call registers; later calls are ignored with a warning.

        Args:
            server: The language server instance

        Raises:
            ValueError: If server is None
            RuntimeError: If no handlers are registered
        """
        if server is None:
            raise ValueError("Server cannot be None")

        with self._registration_lock:
            if self._registered_with_server:
                logger.warning("Document events already registered with server")
                return

            if self.get_handler_count() == 0:
                raise RuntimeError("Cannot register with server: no handlers registered")

            self._register_server_events(server)
            self._registered_with_server = True

        logger.info(f"Document events registered with server for {self.get_handler_count()} handlers")

    def _register_server_events(self, server: LanguageServer) -> None:
        @server.feature(types.TEXT_DOCUMENT_DID_OPEN)
        def did_open(params: types.DidOpenTextDocumentParams):
            self.distribute_event("handle_document_open", params)

        @server.feature(types.TEXT_DOCUMENT_DID_CHANGE)
        def did_change(params: types.DidChangeTextDocumentParams):
            self.distribute_event("handle_document_change", params)

        @server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
        def did_close(params: types.DidCloseTextDocumentParams):
            self.distribute_event("handle_document_close", params)

    def distribute_event(self, method_name: str, params) -> None:
        """
        Call method_name on every handler with params.

        Args:
            method_name: Name of the handler method to call
            params: Notification parameters
        """
        with self._handler_lock:
            handlers = self._handlers.copy()

        for handler in handlers:
            method = getattr(handler, method_name, None)
            if method is None or not callable(method):
                continue
            try:
                method(params)
            except Exception as e:
                logger.error(f"Error in {method_name} handler {type(handler).__name__}: {e}")

    def clear_handlers(self) -> None:
        """Drop all handlers; used during server shutdown."""
        with self._handler_lock:
            handler_count = len(self._handlers)
            self._handlers.clear()
        logger.info(f"Cleared {handler_count} document event handlers")

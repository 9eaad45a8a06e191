import logging
from typing import Optional

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from vintlang import __version__

from .analysis import DiagnosticEngine, DocumentAnalyzer
from .config import ServerConfig
from .features.call_hierarchy import register_call_hierarchy
from .features.code_lens import register_code_lens
from .features.colors import register_colors
from .features.completion import register_completion
from .features.diagnostics import register_code_actions, register_diagnostics
from .features.folding import register_folding
from .features.formatting import register_formatting
from .features.hover import register_hover
from .features.inlay_hints import register_inlay_hints
from .features.navigation import register_navigation, register_symbols
from .features.semantic_tokens import register_semantic_tokens
from .utils.document_event_coordinator import DocumentEventCoordinator

logger = logging.getLogger(__name__)


class ServerInitializationState:
    """Tracks the initialization state of the LSP server components."""

    def __init__(self):
        self.analyzer_ready = False
        self.document_events_ready = False
        self.features_registered = False
        self.initialization_errors = []

    def add_error(self, component: str, error: Exception):
        """Add an initialization error for tracking."""
        self.initialization_errors.append((component, str(error)))
        logger.error(f"Initialization error in {component}: {error}")

    def is_ready_for_features(self) -> bool:
        """Check if all prerequisites for feature registration are met."""
        return self.analyzer_ready

    def get_error_summary(self) -> str:
        """Get a summary of initialization errors."""
        if not self.initialization_errors:
            return "No initialization errors"

        return f"Initialization errors: {'; '.join([f'{comp}: {err}' for comp, err in self.initialization_errors])}"


class VintLSPServer:
    """
    LSP Server implementation for VintLang source files.

    The server keeps one analysis context per open document, rebuilt on every
    change, and answers every language feature from it:
    - Diagnostics and quick-fix code actions
    - Completion, hover and signature help
    - Definition, references, highlights and rename
    - Document and workspace symbols, folding and formatting
    - Semantic tokens, inlay hints, call hierarchy, code lens and colors

    Document lifecycle notifications go through a DocumentEventCoordinator so
    that several features can react to the same event.
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        """
        Initialize the VintLang LSP Server.

        Args:
            config: Server settings; defaults are used when omitted
        """
        self.config = config or ServerConfig()

        # Core components
        self.analyzer: Optional[DocumentAnalyzer] = None
        self.ls = LanguageServer("vintlang-lsp", f"v{__version__}")
        self.document_coordinator = DocumentEventCoordinator()

        # Initialization state tracking
        self.init_state = ServerInitializationState()

        # Setup server components
        self._setup_server()

        logger.info(f"VintLang LSP Server initialized (max problems: {self.config.max_problems})")
        logger.info(self.init_state.get_error_summary())

    def _setup_server(self):
        """
        Set up the server components in the correct order.

        Protocol handlers first, then the analyzer, then the features that
        read from it.
        """
        self._register_handlers()

        try:
            self.analyzer = DocumentAnalyzer(engine=DiagnosticEngine(self.config.max_problems))
            self.init_state.analyzer_ready = True
        except Exception as e:
            self.init_state.add_error("Document Analyzer", e)

        if self.init_state.is_ready_for_features():
            self._initialize_features()
        else:
            logger.warning("Document analyzer not ready - features will not be registered")

    def _initialize_features(self):
        """Initialize and register LSP features."""
        try:
            self._register_features()
            self.init_state.features_registered = True
            logger.info("LSP features initialized successfully")
        except Exception as e:
            self.init_state.add_error("Feature Registration", e)

    def _register_handlers(self):
        """Register LSP protocol handlers."""

        @self.ls.feature(types.INITIALIZED)
        def initialized(params: types.InitializedParams):
            """Handle the initialized notification."""
            logger.info("LSP: Server initialized successfully")

        @self.ls.feature(types.SHUTDOWN)
        def shutdown(params=None):
            """Handle LSP shutdown request."""
            logger.info("LSP: Handling shutdown request")
            self._cleanup_resources()
            return None

    def _register_features(self):
        """
        Register LSP features with the server.

        Diagnostics subscribe to document events first so that the analysis
        context is rebuilt before the semantic tokens cache is invalidated.

        Raises:
            RuntimeError: If no features could be registered
        """
        if not self.analyzer:
            raise RuntimeError("Cannot register features: document analyzer not initialized")

        logger.info("LSP: Registering features...")
        analyzer = self.analyzer

        feature_results = {}

        try:
            diagnostics_service = register_diagnostics(self.ls, analyzer)
            self.document_coordinator.register_handler(diagnostics_service)
            feature_results["diagnostics"] = True
            logger.info("LSP: Diagnostics feature registered")
        except Exception as e:
            feature_results["diagnostics"] = False
            self.init_state.add_error("Diagnostics Feature", e)

        try:
            _, semantic_tokens_handler = register_semantic_tokens(self.ls, analyzer)
            self.document_coordinator.register_handler(semantic_tokens_handler)
            feature_results["semantic_tokens"] = True
            logger.info("LSP: Semantic tokens feature registered")
        except Exception as e:
            feature_results["semantic_tokens"] = False
            self.init_state.add_error("Semantic Tokens Feature", e)

        try:
            self.document_coordinator.register_with_server(self.ls)
            self.init_state.document_events_ready = True
        except Exception as e:
            self.init_state.add_error("Document Events", e)

        independent_features = [
            ("completion", register_completion),
            ("hover", register_hover),
            ("navigation", register_navigation),
            ("symbols", register_symbols),
            ("folding", register_folding),
            ("formatting", register_formatting),
            ("code_actions", register_code_actions),
            ("inlay_hints", register_inlay_hints),
            ("call_hierarchy", register_call_hierarchy),
            ("code_lens", register_code_lens),
            ("colors", register_colors),
        ]
        for name, register in independent_features:
            try:
                register(self.ls, analyzer)
                feature_results[name] = True
                logger.debug(f"LSP: {name} feature registered")
            except Exception as e:
                feature_results[name] = False
                self.init_state.add_error(f"{name} feature", e)

        registered_count = sum(feature_results.values())
        total_features = len(feature_results)

        logger.info(f"LSP: Feature registration completed - {registered_count}/{total_features} features registered")

        if registered_count == 0:
            raise RuntimeError("No LSP features could be registered - server cannot provide language support")

    def _cleanup_resources(self):
        """Drop document handlers and analysis state."""
        logger.info("Cleaning up LSP server resources...")

        try:
            self.document_coordinator.clear_handlers()
        except Exception as e:
            logger.error(f"Error clearing document handlers: {e}")

        if self.analyzer:
            for context in self.analyzer.contexts():
                self.analyzer.close(context.uri)

        logger.info("LSP server resource cleanup completed")

    def start(self):
        """Start the LSP server on stdio, or on TCP when configured."""
        logger.info("Starting VintLang LSP Server...")

        try:
            if self.config.use_tcp:
                logger.info(f"Starting LSP TCP server on {self.config.host}:{self.config.port}...")
                self.ls.start_tcp(self.config.host, self.config.port)
                logger.info("LSP TCP server finished")
            else:
                logger.info("Starting LSP IO server...")
                self.ls.start_io()
                logger.info("LSP IO server finished")
        except KeyboardInterrupt:
            logger.info("Received shutdown signal")
        except BrokenPipeError:
            logger.info("Broken pipe - client disconnected")
        except EOFError:
            logger.info("EOF - no more input from client")
        except Exception as e:
            logger.exception(f"Error in LSP server: {e}")
        finally:
            self.shutdown()

    def shutdown(self):
        """Shutdown the LSP server and cleanup resources"""
        logger.info("Shutting down VintLang LSP Server...")
        self._cleanup_resources()
